"""
Cross-compilation support for bindkit.

This package turns a target descriptor into a platform classification
(Android NDK, Apple SDK or host defaults) and derives the interface generator
and compiler arguments from it.
"""

from bindkit.cross.targets import TargetDescriptor, parse_target
from bindkit.cross.ndk import ndk_major_version, ndk_sysroot_flags
from bindkit.cross.apple import (
    AppleSdk,
    AppleTargetKind,
    apple_target_kind,
    resolve_sdk_path,
    try_resolve_sdk_path,
)
from bindkit.cross.classifier import (
    AndroidPlatform,
    ApplePlatform,
    HostPlatform,
    PlatformFamily,
    classify,
)
from bindkit.cross.flags import (
    CompilerFlags,
    FlagSet,
    GeneratorFlags,
    derive_compiler_flags,
    derive_generator_flags,
)

__all__ = [
    "TargetDescriptor",
    "parse_target",
    "ndk_major_version",
    "ndk_sysroot_flags",
    "AppleSdk",
    "AppleTargetKind",
    "apple_target_kind",
    "resolve_sdk_path",
    "try_resolve_sdk_path",
    "AndroidPlatform",
    "ApplePlatform",
    "HostPlatform",
    "PlatformFamily",
    "classify",
    "CompilerFlags",
    "FlagSet",
    "GeneratorFlags",
    "derive_compiler_flags",
    "derive_generator_flags",
]
