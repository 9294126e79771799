"""
Android NDK discovery.

The NDK moved its sysroot into the host-specific LLVM prebuilt directory in
r22, so every flag that points at NDK headers depends on the major version
recorded in ``source.properties``.
"""

import logging
import re
from pathlib import Path
from typing import List

from packaging.version import InvalidVersion, Version

from bindkit.core.exceptions import (
    NdkMetadataNotFoundError,
    NdkMetadataUnreadableError,
    NdkRevisionNotFoundError,
)

logger = logging.getLogger(__name__)

NDK_METADATA_FILE = "source.properties"
NDK_UNIFIED_SYSROOT_MAJOR = 22

_REVISION_PATTERN = re.compile(r"Pkg\.Revision = (\d+)\.(\d+)\.(\d+)")


def ndk_major_version(ndk_root: Path) -> int:
    """
    Get the NDK major version from source.properties.

    Args:
        ndk_root: NDK installation root

    Returns:
        Major version (e.g., 21 for 'Pkg.Revision = 21.4.7075529')

    Raises:
        NdkMetadataNotFoundError: If source.properties cannot be opened
        NdkMetadataUnreadableError: If its contents are not UTF-8 text
        NdkRevisionNotFoundError: If no Pkg.Revision line matches

    Example:
        >>> ndk_major_version(Path("/opt/android-ndk-r25c"))
        25
    """
    metadata_path = Path(ndk_root) / NDK_METADATA_FILE

    try:
        raw = metadata_path.read_bytes()
    except OSError as e:
        raise NdkMetadataNotFoundError(metadata_path, e) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise NdkMetadataUnreadableError(metadata_path) from e

    match = _REVISION_PATTERN.search(text)
    if match is None:
        raise NdkRevisionNotFoundError(metadata_path)

    revision = ".".join(match.groups())
    try:
        major = Version(revision).major
    except InvalidVersion as e:
        raise NdkRevisionNotFoundError(metadata_path) from e

    logger.debug(f"NDK at {ndk_root} is revision {revision}")
    return major


def ndk_sysroot_flags(ndk_root: Path, major: int, host_tag: str = None) -> List[str]:
    """
    Build the sysroot flags for an NDK of the given major version.

    Args:
        ndk_root: NDK installation root
        major: NDK major version
        host_tag: Build host prebuilt tag; required for r22 and later

    Returns:
        List of compiler arguments

    Raises:
        ValueError: If major >= 22 and no host_tag is given
    """
    ndk_root = Path(ndk_root)

    if major < NDK_UNIFIED_SYSROOT_MAJOR:
        libcxx_include = ndk_root / "sources" / "cxx-stl" / "llvm-libc++" / "include"
        return [
            f"--sysroot={(ndk_root / 'sysroot').as_posix()}",
            f"-isystem{libcxx_include.as_posix()}",
        ]

    if not host_tag:
        raise ValueError(f"NDK r{major} needs a build host tag to locate its sysroot")

    prebuilt = ndk_root / "toolchains" / "llvm" / "prebuilt" / host_tag
    return [f"--sysroot={(prebuilt / 'sysroot').as_posix()}"]


__all__ = [
    "NDK_METADATA_FILE",
    "NDK_UNIFIED_SYSROOT_MAJOR",
    "ndk_major_version",
    "ndk_sysroot_flags",
]
