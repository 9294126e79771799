"""
Entry point for running bindkit CLI as a module.

Usage: python -m bindkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
