"""
Build command implementation.

Runs the build driver with inputs from the environment, the way a build
script invoked by the host build system would.
"""

import logging

from bindkit.build.driver import BuildDriver
from bindkit.cli.utils import load_project, print_error
from bindkit.config.environment import BuildEnvironment
from bindkit.core.exceptions import BindKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")

    try:
        environment = BuildEnvironment.from_environ()
        project = load_project(args)
        result = BuildDriver(environment, project).run()
    except BindKitError as e:
        logger.debug(f"Build failed: {e!r}")
        print_error("Build failed", str(e))
        return 1

    if result.library_path is None:
        logger.info(f"Wrote empty bindings to {result.bindings_path}")
    else:
        logger.info(
            f"Built {result.library_path} and {result.bindings_path} "
            f"({result.tools_invoked} tool invocations)"
        )
    return 0
