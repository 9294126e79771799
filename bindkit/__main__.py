"""
Entry point for running bindkit CLI as a module.

Usage: python -m bindkit [command] [options]
"""

from bindkit.cli.parser import main

if __name__ == "__main__":
    main()
