"""
External process execution for bindkit.

All external tools (xcrun, bindgen, the C compiler, the archiver) go through
run_tool() so that failures surface as ToolInvocationError and tests can
substitute a single callable.
"""

import logging
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .exceptions import ToolInvocationError

logger = logging.getLogger(__name__)


def run_tool(
    command: Sequence[str],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Run an external tool and capture its output.

    Output is captured as bytes; callers decode it themselves because some
    (the SDK resolver) must tell invalid text apart from a failed run.

    Args:
        command: Program and arguments
        cwd: Optional working directory
        env: Optional full environment for the child process

    Returns:
        CompletedProcess with bytes stdout/stderr

    Raises:
        ToolInvocationError: If the program cannot be started or exits non-zero

    Example:
        >>> result = run_tool(["xcrun", "--sdk", "iphoneos", "--show-sdk-path"])
        >>> result.stdout.decode().strip()
        '/Applications/Xcode.app/.../iPhoneOS.sdk'
    """
    command = [str(part) for part in command]
    logger.debug(f"Running: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            env=dict(env) if env is not None else None,
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise ToolInvocationError(command, stderr=str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        logger.debug(f"{command[0]} returned {result.returncode}")
        raise ToolInvocationError(command, result.returncode, stderr)

    return result


__all__ = ["run_tool"]
