"""
Build environment.

Everything bindkit learns from the host build orchestrator arrives through
environment variables. They are read once, at the start of a build, into an
immutable BuildEnvironment.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Mapping, Optional

from bindkit.config.capabilities import features_from_environment
from bindkit.core.exceptions import MissingEnvironmentError

logger = logging.getLogger(__name__)

TARGET_VAR = "TARGET"
OUT_DIR_VAR = "OUT_DIR"
NDK_VAR = "ANDROID_NDK"
GENERATOR_VAR = "BINDGEN"
COMPILER_VAR = "CC"
ARCHIVER_VAR = "AR"

DEFAULT_GENERATOR = "bindgen"
DEFAULT_COMPILER = "cc"
DEFAULT_ARCHIVER = "ar"


@dataclass(frozen=True)
class BuildEnvironment:
    """
    Inputs for one build invocation.

    Attributes:
        target: Target descriptor string (TARGET)
        out_dir: Directory for generated files and the static library (OUT_DIR)
        ndk_root: Android NDK root (ANDROID_NDK); only required for Android
        generator: Interface generator executable (BINDGEN)
        compiler: C compiler executable (CC)
        archiver: Static archiver executable (AR)
        features: Enabled feature names (CARGO_FEATURE_*)
    """

    target: str
    out_dir: Optional[Path] = None
    ndk_root: Optional[Path] = None
    generator: str = DEFAULT_GENERATOR
    compiler: str = DEFAULT_COMPILER
    archiver: str = DEFAULT_ARCHIVER
    features: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = None) -> "BuildEnvironment":
        """
        Read the build environment.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            BuildEnvironment

        Raises:
            MissingEnvironmentError: If TARGET or OUT_DIR is not set
        """
        if environ is None:
            environ = os.environ

        target = environ.get(TARGET_VAR)
        if not target:
            raise MissingEnvironmentError(TARGET_VAR)

        out_dir = environ.get(OUT_DIR_VAR)
        if not out_dir:
            raise MissingEnvironmentError(OUT_DIR_VAR)

        ndk_root = environ.get(NDK_VAR)

        env = cls(
            target=target,
            out_dir=Path(out_dir),
            ndk_root=Path(ndk_root) if ndk_root else None,
            generator=environ.get(GENERATOR_VAR) or DEFAULT_GENERATOR,
            compiler=environ.get(COMPILER_VAR) or DEFAULT_COMPILER,
            archiver=environ.get(ARCHIVER_VAR) or DEFAULT_ARCHIVER,
            features=features_from_environment(environ),
        )
        logger.debug(f"Build environment: target={env.target} out_dir={env.out_dir}")
        return env

    def require_ndk_root(self) -> Path:
        """
        Get the NDK root, failing if it was not provided.

        Raises:
            MissingEnvironmentError: If ANDROID_NDK is not set
        """
        if self.ndk_root is None:
            raise MissingEnvironmentError(NDK_VAR, f"required for {self.target}")
        return self.ndk_root

    def require_out_dir(self) -> Path:
        """
        Get the output directory, failing if it was not provided.

        Raises:
            MissingEnvironmentError: If OUT_DIR is not set
        """
        if self.out_dir is None:
            raise MissingEnvironmentError(OUT_DIR_VAR)
        return self.out_dir


__all__ = [
    "BuildEnvironment",
    "TARGET_VAR",
    "OUT_DIR_VAR",
    "NDK_VAR",
]
