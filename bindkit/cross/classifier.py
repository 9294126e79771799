"""
Platform classification.

A parsed descriptor is classified once into exactly one platform variant.
Toolchain discovery (NDK version, build host tag, Apple SDK root) happens
here, so the flag derivation functions downstream are pure.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from bindkit.config.environment import BuildEnvironment
from bindkit.core.platform import detect_host_tag
from bindkit.cross.apple import AppleTargetKind, apple_target_kind, try_resolve_sdk_path
from bindkit.cross.ndk import (
    NDK_UNIFIED_SYSROOT_MAJOR,
    ndk_major_version,
    ndk_sysroot_flags,
)
from bindkit.cross.targets import TargetDescriptor

logger = logging.getLogger(__name__)


class PlatformFamily(Enum):
    """Toolchain families, selected by the descriptor's system token."""

    ANDROID = "android"
    APPLE = "apple"
    HOST = "host"


_FAMILY_BY_SYSTEM = {
    "android": PlatformFamily.ANDROID,
    "androideabi": PlatformFamily.ANDROID,
    "ios": PlatformFamily.APPLE,
    "darwin": PlatformFamily.APPLE,
}


def platform_family(system: str) -> PlatformFamily:
    """
    Get the platform family for a system token.

    Example:
        >>> platform_family("androideabi")
        <PlatformFamily.ANDROID: 'android'>
        >>> platform_family("linux")
        <PlatformFamily.HOST: 'host'>
    """
    return _FAMILY_BY_SYSTEM.get(system, PlatformFamily.HOST)


@dataclass(frozen=True)
class AndroidPlatform:
    """
    Android target built against an NDK.

    Attributes:
        descriptor: Parsed target descriptor
        ndk_root: NDK installation root
        ndk_major: NDK major version from source.properties
        host_tag: Build host prebuilt tag; None for NDKs older than r22
    """

    descriptor: TargetDescriptor
    ndk_root: Path
    ndk_major: int
    host_tag: Optional[str] = None

    family = PlatformFamily.ANDROID

    @property
    def uses_legacy_sysroot(self) -> bool:
        """True when the sysroot lives directly under the NDK root."""
        return self.ndk_major < NDK_UNIFIED_SYSROOT_MAJOR

    def sysroot_flags(self) -> List[str]:
        return ndk_sysroot_flags(self.ndk_root, self.ndk_major, self.host_tag)


@dataclass(frozen=True)
class ApplePlatform:
    """
    Apple target built against an Xcode SDK.

    Attributes:
        descriptor: Parsed target descriptor
        kind: Apple sub-target, or None for spellings bindkit does not know
        sdk_root: SDK root from xcrun, or None when it could not be resolved
    """

    descriptor: TargetDescriptor
    kind: Optional[AppleTargetKind]
    sdk_root: Optional[str] = None

    family = PlatformFamily.APPLE


@dataclass(frozen=True)
class HostPlatform:
    """Any other target; the host toolchain's defaults apply."""

    descriptor: TargetDescriptor

    family = PlatformFamily.HOST


Platform = Union[AndroidPlatform, ApplePlatform, HostPlatform]


def classify(
    descriptor: TargetDescriptor,
    environment: BuildEnvironment,
    *,
    sdk_resolver: Callable[[str], Optional[str]] = try_resolve_sdk_path,
    host_tag_detector: Callable[[], str] = detect_host_tag,
) -> Platform:
    """
    Classify a target and discover its toolchain locations.

    Args:
        descriptor: Parsed target descriptor
        environment: Build environment (provides the NDK root)
        sdk_resolver: Apple SDK root lookup; returns None on failure
        host_tag_detector: Build host tag lookup

    Returns:
        AndroidPlatform, ApplePlatform or HostPlatform

    Raises:
        MissingEnvironmentError: If the target is Android and ANDROID_NDK is unset
        ToolchainDiscoveryError: If the NDK version or build host cannot be determined

    Example:
        >>> env = BuildEnvironment(target="x86_64-unknown-linux-gnu")
        >>> classify(parse_target(env.target), env)
        HostPlatform(descriptor=TargetDescriptor(architecture='x86_64', ...))
    """
    family = platform_family(descriptor.system)

    if family is PlatformFamily.ANDROID:
        ndk_root = environment.require_ndk_root()
        major = ndk_major_version(ndk_root)
        host_tag = None
        if major >= NDK_UNIFIED_SYSROOT_MAJOR:
            host_tag = host_tag_detector()
        logger.info(
            f"Using Android NDK r{major} at {ndk_root} ({descriptor.android_arch()})"
        )
        return AndroidPlatform(descriptor, Path(ndk_root), major, host_tag)

    if family is PlatformFamily.APPLE:
        target = str(descriptor)
        kind = apple_target_kind(target)
        if kind is None:
            logger.warning(f"Unrecognized Apple target {target}")
        sdk_root = sdk_resolver(target)
        if sdk_root:
            logger.info(f"Using Apple SDK at {sdk_root}")
        return ApplePlatform(descriptor, kind, sdk_root)

    logger.debug(f"No platform-specific toolchain for {descriptor}")
    return HostPlatform(descriptor)


__all__ = [
    "PlatformFamily",
    "platform_family",
    "AndroidPlatform",
    "ApplePlatform",
    "HostPlatform",
    "Platform",
    "classify",
]
