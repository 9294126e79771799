"""
Build orchestration for bindkit.

Runs the interface generator and the C compiler for one target and reports
the results to the host build system.
"""

from bindkit.build.directives import DirectiveEmitter
from bindkit.build.driver import BINDINGS_FILE_NAME, BuildDriver, BuildResult

__all__ = [
    "DirectiveEmitter",
    "BuildDriver",
    "BuildResult",
    "BINDINGS_FILE_NAME",
]
