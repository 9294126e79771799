"""
Centralized exception hierarchy for bindkit.

Every component raises one of these; only the CLI entry point turns them
into an exit code.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class BindKitError(Exception):
    """Base exception for all bindkit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(BindKitError):
    """Base exception for missing or unparseable build inputs."""

    pass


class MissingEnvironmentError(ConfigurationError):
    """Raised when a required environment variable is not set."""

    def __init__(self, variable: str, reason: str = ""):
        self.variable = variable
        msg = f"{variable} variable not set"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class MalformedDescriptorError(ConfigurationError):
    """Raised when a target descriptor has fewer than three tokens."""

    def __init__(self, descriptor: str):
        self.descriptor = descriptor
        super().__init__(
            f"Failed to parse target '{descriptor}': "
            "expected at least <arch>-<vendor>-<system>"
        )


class ConfigError(ConfigurationError):
    """Project configuration parsing or validation error."""

    pass


# ============================================================================
# Toolchain Discovery Exceptions
# ============================================================================


class ToolchainDiscoveryError(BindKitError):
    """Base exception for toolchain location errors."""

    pass


class NdkMetadataNotFoundError(ToolchainDiscoveryError):
    """Raised when the NDK source.properties file cannot be opened."""

    def __init__(self, path, cause: Exception = None):
        self.path = path
        msg = f"Couldn't open {path}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class NdkMetadataUnreadableError(ToolchainDiscoveryError):
    """Raised when source.properties is not valid text."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Could not read {path} as text")


class NdkRevisionNotFoundError(ToolchainDiscoveryError):
    """Raised when source.properties has no Pkg.Revision line."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} did not contain a Pkg.Revision = X.Y.Z line")


class UnsupportedBuildHostError(ToolchainDiscoveryError):
    """Raised when the build machine OS has no NDK prebuilt tag."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Build host OS is not supported: {system}")


# ============================================================================
# SDK Resolution Exceptions (recoverable)
# ============================================================================


class SdkResolutionError(BindKitError):
    """Raised when the Apple SDK root cannot be resolved."""

    pass


class UnsupportedAppleTargetError(SdkResolutionError):
    """Raised when an Apple target spelling has no known SDK."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"No Apple SDK known for target: {target}")


# ============================================================================
# Tool Invocation Exceptions
# ============================================================================


class ToolInvocationError(BindKitError):
    """Raised when an external tool cannot be started or exits non-zero."""

    def __init__(self, command, returncode=None, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"Failed to run {self.command[0]}"
        else:
            msg = f"{self.command[0]} exited with status {returncode}"
        if stderr:
            msg += f"\n{stderr.rstrip()}"
        super().__init__(msg)
