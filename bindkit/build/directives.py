"""
Build-system directives.

The host orchestrator reads ``cargo:key=value`` lines from the build
script's standard output. This is the only output that goes to stdout;
diagnostics go through logging.
"""

import sys
from pathlib import Path
from typing import List, TextIO, Union

DIRECTIVE_PREFIX = "cargo:"


class DirectiveEmitter:
    """
    Write build directives to a stream.

    Example:
        >>> emitter = DirectiveEmitter()
        >>> emitter.link_lib("stb")
        cargo:rustc-link-lib=static=stb
    """

    def __init__(self, stream: TextIO = None, prefix: str = DIRECTIVE_PREFIX):
        self.stream = stream
        self.prefix = prefix
        self.emitted: List[str] = []

    def emit(self, key: str, value: str):
        line = f"{self.prefix}{key}={value}"
        self.emitted.append(line)
        # Resolved at call time so pytest's capsys sees the output
        print(line, file=self.stream or sys.stdout, flush=True)

    def rerun_if_changed(self, path: Union[str, Path]):
        self.emit("rerun-if-changed", str(path))

    def rerun_if_env_changed(self, name: str):
        self.emit("rerun-if-env-changed", name)

    def link_lib(self, name: str, kind: str = "static"):
        self.emit("rustc-link-lib", f"{kind}={name}")

    def link_search(self, path: Union[str, Path], kind: str = "native"):
        self.emit("rustc-link-search", f"{kind}={path}")

    def warning(self, message: str):
        self.emit("warning", message)


__all__ = ["DirectiveEmitter", "DIRECTIVE_PREFIX"]
