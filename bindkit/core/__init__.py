"""
Core functionality for bindkit.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    BindKitError,
    ConfigurationError,
    MissingEnvironmentError,
    MalformedDescriptorError,
    ConfigError,
    ToolchainDiscoveryError,
    NdkMetadataNotFoundError,
    NdkMetadataUnreadableError,
    NdkRevisionNotFoundError,
    UnsupportedBuildHostError,
    SdkResolutionError,
    UnsupportedAppleTargetError,
    ToolInvocationError,
)

from .platform import (
    HOST_TAGS,
    detect_host_tag,
    host_tag_for,
    clear_host_cache,
)

from .process import run_tool

__all__ = [
    "BindKitError",
    "ConfigurationError",
    "MissingEnvironmentError",
    "MalformedDescriptorError",
    "ConfigError",
    "ToolchainDiscoveryError",
    "NdkMetadataNotFoundError",
    "NdkMetadataUnreadableError",
    "NdkRevisionNotFoundError",
    "UnsupportedBuildHostError",
    "SdkResolutionError",
    "UnsupportedAppleTargetError",
    "ToolInvocationError",
    "HOST_TAGS",
    "detect_host_tag",
    "host_tag_for",
    "clear_host_cache",
    "run_tool",
]
