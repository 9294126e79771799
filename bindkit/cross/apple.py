"""
Apple SDK resolution.

Apple targets are narrowed to a closed set of spellings, each mapped to one
of the three SDKs Xcode ships. The SDK root itself comes from
``xcrun --sdk <id> --show-sdk-path``.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from bindkit.core.exceptions import (
    SdkResolutionError,
    ToolInvocationError,
    UnsupportedAppleTargetError,
)
from bindkit.core.process import run_tool

logger = logging.getLogger(__name__)

XCRUN = "xcrun"


class AppleSdk(Enum):
    """Xcode SDK identifiers understood by xcrun."""

    MACOSX = "macosx"
    IPHONESIMULATOR = "iphonesimulator"
    IPHONEOS = "iphoneos"


class AppleTargetKind(Enum):
    """Apple sub-targets that bindkit knows how to configure."""

    DESKTOP = "desktop"
    CATALYST = "catalyst"
    SIMULATOR = "simulator"
    ARM64_SIMULATOR = "arm64-simulator"
    DEVICE = "device"

    @property
    def sdk(self) -> AppleSdk:
        """SDK that provides headers for this sub-target."""
        if self in (AppleTargetKind.DESKTOP, AppleTargetKind.CATALYST):
            return AppleSdk.MACOSX
        if self is AppleTargetKind.DEVICE:
            return AppleSdk.IPHONEOS
        return AppleSdk.IPHONESIMULATOR


_KNOWN_TARGETS = {
    "aarch64-apple-ios-macabi": AppleTargetKind.CATALYST,
    "x86_64-apple-ios-macabi": AppleTargetKind.CATALYST,
    "x86_64-apple-ios": AppleTargetKind.SIMULATOR,
    "i386-apple-ios": AppleTargetKind.SIMULATOR,
    "aarch64-apple-ios-sim": AppleTargetKind.ARM64_SIMULATOR,
    "aarch64-apple-ios": AppleTargetKind.DEVICE,
    "armv7-apple-ios": AppleTargetKind.DEVICE,
    "armv7s-apple-ios": AppleTargetKind.DEVICE,
}


def apple_target_kind(target: str) -> Optional[AppleTargetKind]:
    """
    Classify an Apple target spelling.

    Args:
        target: Full target descriptor string

    Returns:
        AppleTargetKind, or None if the spelling is not recognized

    Example:
        >>> apple_target_kind("aarch64-apple-ios-sim")
        <AppleTargetKind.ARM64_SIMULATOR: 'arm64-simulator'>
        >>> apple_target_kind("aarch64-apple-tvos") is None
        True
    """
    if "apple-darwin" in target:
        return AppleTargetKind.DESKTOP
    return _KNOWN_TARGETS.get(target)


def sdk_for_target(target: str) -> AppleSdk:
    """
    Get the SDK identifier for an Apple target.

    Raises:
        UnsupportedAppleTargetError: If the target spelling is not recognized
    """
    kind = apple_target_kind(target)
    if kind is None:
        raise UnsupportedAppleTargetError(target)
    return kind.sdk


def resolve_sdk_path(target: str, runner: Callable = run_tool) -> str:
    """
    Resolve the SDK root directory for an Apple target.

    Args:
        target: Full target descriptor string
        runner: Process runner (defaults to run_tool)

    Returns:
        SDK root path as printed by xcrun, trailing whitespace removed

    Raises:
        SdkResolutionError: If the target is unrecognized, xcrun fails, or
            its output is not UTF-8

    Example:
        >>> resolve_sdk_path("aarch64-apple-ios")
        '/Applications/Xcode.app/Contents/Developer/Platforms/iPhoneOS.platform/Developer/SDKs/iPhoneOS.sdk'
    """
    sdk = sdk_for_target(target)

    try:
        result = runner([XCRUN, "--sdk", sdk.value, "--show-sdk-path"])
    except (ToolInvocationError, OSError) as e:
        raise SdkResolutionError(
            f"{XCRUN} could not locate the {sdk.value} SDK: {e}"
        ) from e

    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SdkResolutionError(f"invalid output from `{XCRUN}`") from e

    path = output.rstrip()
    if not path:
        raise SdkResolutionError(f"`{XCRUN}` printed no path for the {sdk.value} SDK")
    logger.debug(f"{sdk.value} SDK root: {path}")
    return path


def try_resolve_sdk_path(target: str, runner: Callable = run_tool) -> Optional[str]:
    """
    Resolve the SDK root, degrading to None on failure.

    Apple builds can proceed without an explicit -isysroot, so resolution
    errors are logged and swallowed here and nowhere else.

    Args:
        target: Full target descriptor string
        runner: Process runner (defaults to run_tool)

    Returns:
        SDK root path, or None
    """
    try:
        return resolve_sdk_path(target, runner=runner)
    except SdkResolutionError as e:
        logger.warning(f"Building {target} without an SDK root override: {e}")
        return None


__all__ = [
    "AppleSdk",
    "AppleTargetKind",
    "apple_target_kind",
    "sdk_for_target",
    "resolve_sdk_path",
    "try_resolve_sdk_path",
]
