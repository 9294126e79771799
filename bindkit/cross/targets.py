"""
Target descriptor parsing.

A target descriptor is the dash-delimited platform identifier handed to the
build by the orchestrator (e.g. 'aarch64-linux-android',
'aarch64-apple-ios-sim'). It is parsed once per build and never mutated.
"""

from dataclasses import dataclass
from typing import Optional

from bindkit.core.exceptions import MalformedDescriptorError

DESCRIPTOR_SEPARATOR = "-"

# Rust/LLVM architecture names to the names the NDK uses for its arch dirs
ANDROID_ARCH_NAMES = {
    "armv7": "arm",
    "aarch64": "arm64",
    "i686": "x86",
}


@dataclass(frozen=True)
class TargetDescriptor:
    """
    Parsed target platform identifier.

    Attributes:
        architecture: CPU family token (e.g., 'aarch64', 'x86_64', 'armv7')
        vendor: Vendor token (e.g., 'apple', 'linux', 'unknown')
        system: Operating system token; drives all platform branching
        abi: Optional fourth token (e.g., 'sim', 'macabi', 'gnu')
    """

    architecture: str
    vendor: str
    system: str
    abi: Optional[str] = None

    def __str__(self) -> str:
        """Render back to the dash-delimited form."""
        parts = [self.architecture, self.vendor, self.system]
        if self.abi is not None:
            parts.append(self.abi)
        return DESCRIPTOR_SEPARATOR.join(parts)

    @property
    def is_simulator(self) -> bool:
        """True for descriptors carrying the 'sim' environment suffix."""
        return self.abi == "sim"

    def android_arch(self) -> str:
        """
        Get the NDK architecture name for this descriptor.

        Returns:
            'arm', 'arm64', 'x86' or the architecture token unchanged

        Example:
            >>> parse_target("aarch64-linux-android").android_arch()
            'arm64'
        """
        return ANDROID_ARCH_NAMES.get(self.architecture, self.architecture)


def parse_target(text: str) -> TargetDescriptor:
    """
    Parse a target descriptor string.

    Tokens past the fourth are ignored.

    Args:
        text: Descriptor such as 'x86_64-unknown-linux-gnu'

    Returns:
        TargetDescriptor with abi set only for four-token descriptors

    Raises:
        MalformedDescriptorError: If fewer than three tokens are present

    Example:
        >>> parse_target("aarch64-apple-ios-sim")
        TargetDescriptor(architecture='aarch64', vendor='apple', system='ios', abi='sim')
        >>> parse_target("armv7-linux-androideabi").abi is None
        True
    """
    tokens = text.split(DESCRIPTOR_SEPARATOR)
    if len(tokens) < 3:
        raise MalformedDescriptorError(text)

    return TargetDescriptor(
        architecture=tokens[0],
        vendor=tokens[1],
        system=tokens[2],
        abi=tokens[3] if len(tokens) > 3 else None,
    )


__all__ = ["TargetDescriptor", "parse_target", "ANDROID_ARCH_NAMES"]
