"""
Build host detection for bindkit.

The NDK ships its LLVM toolchain under a host-specific prebuilt directory
(``toolchains/llvm/prebuilt/<tag>``). The tag depends on the machine running
the build, never on the target being built for.

Usage:
    from bindkit.core.platform import detect_host_tag

    tag = detect_host_tag()
    print(f"NDK prebuilt tag: {tag}")
"""

import functools
import logging
import platform

from .exceptions import UnsupportedBuildHostError

logger = logging.getLogger(__name__)

# NDK only publishes x86_64 host prebuilts.
HOST_TAGS = {
    "windows": "windows-x86_64",
    "linux": "linux-x86_64",
    "darwin": "darwin-x86_64",
}


@functools.lru_cache(maxsize=1)
def detect_host_tag() -> str:
    """
    Detect the NDK prebuilt tag of the build machine.

    This function is cached - it only runs detection once per process.

    Returns:
        One of 'windows-x86_64', 'linux-x86_64', 'darwin-x86_64'

    Raises:
        UnsupportedBuildHostError: If the host OS has no NDK prebuilt

    Example:
        >>> detect_host_tag()
        'linux-x86_64'
    """
    return host_tag_for(platform.system())


def host_tag_for(system: str) -> str:
    """
    Map an OS name as reported by ``platform.system()`` to its NDK tag.

    Args:
        system: OS name (case-insensitive), e.g. 'Linux', 'Darwin', 'Windows'

    Returns:
        NDK prebuilt host tag

    Raises:
        UnsupportedBuildHostError: If the OS is not one of the known hosts
    """
    tag = HOST_TAGS.get(system.lower())
    if tag is None:
        raise UnsupportedBuildHostError(system)
    logger.debug(f"Build host {system} maps to NDK prebuilt {tag}")
    return tag


def clear_host_cache():
    """
    Clear the host detection cache.

    This forces the next call to detect_host_tag() to re-detect.
    Useful for testing.
    """
    detect_host_tag.cache_clear()


__all__ = [
    "HOST_TAGS",
    "detect_host_tag",
    "host_tag_for",
    "clear_host_cache",
]
