"""
Flag derivation.

Both argument sets are pure functions of the platform classification: the
interface generator gets the symbol allow-list plus the platform flags as
clang arguments, the compiler gets the platform flags plus warning and
feature defines.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from bindkit.config.capabilities import CapabilitySet
from bindkit.cross.apple import AppleTargetKind
from bindkit.cross.classifier import (
    AndroidPlatform,
    ApplePlatform,
    HostPlatform,
    Platform,
)

IOS_VERSION_MIN = "10.0"
IOS_ARM64_SIMULATOR_VERSION_MIN = "14.0"
MACOS_VERSION_MIN = "11.0"

ARM64_SIMULATOR_TRIPLE = f"arm64-apple-ios{IOS_ARM64_SIMULATOR_VERSION_MIN}.0-simulator"

# Targets clang accepts verbatim as --target
_PASSTHROUGH_TARGETS = ("aarch64-apple-ios", "x86_64-apple-ios")

WARNING_SUPPRESSION_FLAG = "-Wno-implicit-function-declaration"


@dataclass(frozen=True)
class FlagSet:
    """Immutable ordered sequence of tool arguments."""

    args: Tuple[str, ...] = ()

    @classmethod
    def of(cls, *args: str) -> "FlagSet":
        return cls(tuple(args))

    def __iter__(self) -> Iterator[str]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def __contains__(self, item) -> bool:
        return item in self.args

    def __add__(self, other: Iterable[str]) -> "FlagSet":
        return FlagSet(self.args + tuple(other))

    def to_list(self) -> List[str]:
        return list(self.args)


@dataclass(frozen=True)
class GeneratorFlags:
    """
    Arguments for the interface generator.

    Attributes:
        allowlist: Symbol name pattern applied to functions, types and variables
        clang_args: Arguments forwarded to the generator's clang frontend
    """

    allowlist: str
    clang_args: FlagSet

    def allowlist_args(self) -> List[str]:
        return [
            "--allowlist-function",
            self.allowlist,
            "--allowlist-type",
            self.allowlist,
            "--allowlist-var",
            self.allowlist,
        ]


@dataclass(frozen=True)
class CompilerFlags:
    """
    Arguments for the C compiler.

    Attributes:
        flags: Platform and warning flags
        defines: (NAME, VALUE) preprocessor defines
    """

    flags: FlagSet
    defines: Tuple[Tuple[str, str], ...] = ()

    def to_args(self) -> List[str]:
        defines = [f"-D{name}={value}" for name, value in self.defines]
        return self.flags.to_list() + defines


def min_version_flag(platform: ApplePlatform) -> str:
    """
    Get the deployment floor flag for an Apple sub-target.

    Device targets, the x86 simulators and unrecognized iOS spellings share
    the iOS device floor. The ARM64 simulator needs a newer one. Desktop and
    Catalyst targets get the macOS floor.
    """
    descriptor = platform.descriptor
    if (
        descriptor.system == "ios"
        and descriptor.is_simulator
        and descriptor.architecture == "aarch64"
    ):
        return f"-mios-simulator-version-min={IOS_ARM64_SIMULATOR_VERSION_MIN}"
    if platform.kind is AppleTargetKind.DEVICE:
        return f"-miphoneos-version-min={IOS_VERSION_MIN}"
    if platform.kind is AppleTargetKind.SIMULATOR:
        return f"-mios-simulator-version-min={IOS_VERSION_MIN}"
    if platform.kind is None and descriptor.system == "ios":
        return f"-miphoneos-version-min={IOS_VERSION_MIN}"
    return f"-mmacosx-version-min={MACOS_VERSION_MIN}"


def architecture_override(platform: ApplePlatform) -> Optional[str]:
    """
    Get the explicit --target value for an Apple sub-target, if any.

    Example:
        >>> sim = parse_target("aarch64-apple-ios-sim")
        >>> architecture_override(ApplePlatform(sim, AppleTargetKind.ARM64_SIMULATOR))
        'arm64-apple-ios14.0.0-simulator'
    """
    target = str(platform.descriptor)
    if target in _PASSTHROUGH_TARGETS:
        return target
    if platform.kind is AppleTargetKind.ARM64_SIMULATOR:
        return ARM64_SIMULATOR_TRIPLE
    return None


def platform_flags(platform: Platform) -> FlagSet:
    """
    Get the sysroot and target flags shared by both tools.

    Args:
        platform: Classified platform

    Returns:
        FlagSet (empty for host platforms)
    """
    if isinstance(platform, AndroidPlatform):
        return FlagSet(tuple(platform.sysroot_flags()))

    if isinstance(platform, ApplePlatform):
        args = [min_version_flag(platform)]
        target = architecture_override(platform)
        if target:
            args.append(f"--target={target}")
        if platform.sdk_root:
            args.extend(["-isysroot", platform.sdk_root])
        return FlagSet(tuple(args))

    if isinstance(platform, HostPlatform):
        return FlagSet()

    raise TypeError(f"Unknown platform variant: {type(platform).__name__}")


def derive_generator_flags(
    platform: Platform, allowlist: str = "stb.*"
) -> GeneratorFlags:
    """
    Derive the interface generator arguments.

    Args:
        platform: Classified platform
        allowlist: Symbol name pattern to surface

    Returns:
        GeneratorFlags
    """
    return GeneratorFlags(allowlist=allowlist, clang_args=platform_flags(platform))


def derive_compiler_flags(
    platform: Platform, capabilities: CapabilitySet
) -> CompilerFlags:
    """
    Derive the C compiler arguments.

    Args:
        platform: Classified platform
        capabilities: Capabilities enabled for this build

    Returns:
        CompilerFlags
    """
    flags = platform_flags(platform)
    if getattr(platform, "kind", None) is AppleTargetKind.ARM64_SIMULATOR:
        flags = flags + ["-m64"]
    flags = flags + [WARNING_SUPPRESSION_FLAG]

    return CompilerFlags(flags=flags, defines=tuple(capabilities.defines()))


__all__ = [
    "FlagSet",
    "GeneratorFlags",
    "CompilerFlags",
    "ARM64_SIMULATOR_TRIPLE",
    "WARNING_SUPPRESSION_FLAG",
    "min_version_flag",
    "architecture_override",
    "platform_flags",
    "derive_generator_flags",
    "derive_compiler_flags",
]
