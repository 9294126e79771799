"""
Shared utilities for CLI commands.

Provides common functionality used across CLI commands to keep their
behavior consistent.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from bindkit.config.parser import ProjectConfig, load_project_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_project(args) -> ProjectConfig:
    """
    Load the project configuration named by the global CLI options.

    Args:
        args: Parsed arguments with project_root and config

    Returns:
        ProjectConfig

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = Path(args.project_root).resolve()
    config_path = args.config.resolve() if args.config else None
    logger.debug(f"Project root: {project_root}")
    return load_project_config(project_root, config_path)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def format_flags(title: str, args) -> str:
    """
    Format an argument list for display, one argument per line.

    Example:
        >>> print(format_flags("Compiler", ["-Wno-implicit-function-declaration"]))
        Compiler:
          -Wno-implicit-function-declaration
    """
    lines = [f"{title}:"]
    args = list(args)
    if not args:
        lines.append("  (none)")
    for arg in args:
        lines.append(f"  {arg}")
    return "\n".join(lines)
