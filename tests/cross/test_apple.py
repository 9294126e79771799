"""
Unit tests for Apple SDK resolution.

Tests cover:
- Target spelling classification
- SDK selection per sub-target
- xcrun invocation and output handling
- Degrading to no SDK root on failure
"""

import logging
import subprocess
from unittest.mock import Mock

import pytest

from bindkit.core.exceptions import (
    SdkResolutionError,
    ToolInvocationError,
    UnsupportedAppleTargetError,
)
from bindkit.cross.apple import (
    AppleSdk,
    AppleTargetKind,
    apple_target_kind,
    resolve_sdk_path,
    sdk_for_target,
    try_resolve_sdk_path,
)
from tests.fixtures.apple import SDK_ROOTS


def completed(stdout: bytes) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["xcrun"], 0, stdout=stdout, stderr=b"")


class TestAppleTargetKind:
    """Test apple_target_kind()."""

    @pytest.mark.parametrize(
        "target,kind",
        [
            ("x86_64-apple-darwin", AppleTargetKind.DESKTOP),
            ("aarch64-apple-darwin", AppleTargetKind.DESKTOP),
            ("aarch64-apple-ios-macabi", AppleTargetKind.CATALYST),
            ("x86_64-apple-ios-macabi", AppleTargetKind.CATALYST),
            ("x86_64-apple-ios", AppleTargetKind.SIMULATOR),
            ("i386-apple-ios", AppleTargetKind.SIMULATOR),
            ("aarch64-apple-ios-sim", AppleTargetKind.ARM64_SIMULATOR),
            ("aarch64-apple-ios", AppleTargetKind.DEVICE),
            ("armv7-apple-ios", AppleTargetKind.DEVICE),
            ("armv7s-apple-ios", AppleTargetKind.DEVICE),
        ],
    )
    def test_known_targets(self, target, kind):
        """Test every recognized spelling."""
        assert apple_target_kind(target) is kind

    @pytest.mark.parametrize(
        "target", ["aarch64-apple-tvos", "x86_64-apple-ios-sim", "arm64e-apple-ios"]
    )
    def test_unknown_targets(self, target):
        """Test unrecognized spellings give None."""
        assert apple_target_kind(target) is None


class TestSdkForTarget:
    """Test sdk_for_target()."""

    @pytest.mark.parametrize(
        "target,sdk",
        [
            ("x86_64-apple-darwin", AppleSdk.MACOSX),
            ("aarch64-apple-ios-macabi", AppleSdk.MACOSX),
            ("x86_64-apple-ios", AppleSdk.IPHONESIMULATOR),
            ("i386-apple-ios", AppleSdk.IPHONESIMULATOR),
            ("aarch64-apple-ios-sim", AppleSdk.IPHONESIMULATOR),
            ("aarch64-apple-ios", AppleSdk.IPHONEOS),
            ("armv7s-apple-ios", AppleSdk.IPHONEOS),
        ],
    )
    def test_sdk_mapping(self, target, sdk):
        """Test SDK selection."""
        assert sdk_for_target(target) is sdk

    def test_unknown_target(self):
        """Test unknown spellings raise."""
        with pytest.raises(UnsupportedAppleTargetError) as exc_info:
            sdk_for_target("aarch64-apple-watchos")

        assert exc_info.value.target == "aarch64-apple-watchos"


class TestResolveSdkPath:
    """Test resolve_sdk_path()."""

    def test_invokes_xcrun(self, xcrun_runner):
        """Test xcrun is asked for the right SDK."""
        path = resolve_sdk_path("aarch64-apple-ios", runner=xcrun_runner)

        assert path == SDK_ROOTS["iphoneos"]
        xcrun_runner.assert_called_once_with(
            ["xcrun", "--sdk", "iphoneos", "--show-sdk-path"]
        )

    def test_simulator_sdk(self, xcrun_runner):
        """Test simulator targets resolve the simulator SDK."""
        path = resolve_sdk_path("aarch64-apple-ios-sim", runner=xcrun_runner)

        assert path == SDK_ROOTS["iphonesimulator"]

    def test_strips_trailing_whitespace(self):
        """Test trailing newline and spaces are removed."""
        runner = Mock(return_value=completed(b"/sdk/MacOSX.sdk \n\n"))

        assert resolve_sdk_path("x86_64-apple-darwin", runner=runner) == "/sdk/MacOSX.sdk"

    def test_tool_failure(self, failing_xcrun_runner):
        """Test a failing xcrun raises SdkResolutionError."""
        with pytest.raises(SdkResolutionError) as exc_info:
            resolve_sdk_path("aarch64-apple-ios", runner=failing_xcrun_runner)

        assert isinstance(exc_info.value.__cause__, ToolInvocationError)

    def test_tool_missing(self):
        """Test xcrun not installed raises SdkResolutionError."""
        runner = Mock(side_effect=FileNotFoundError("xcrun"))

        with pytest.raises(SdkResolutionError):
            resolve_sdk_path("x86_64-apple-darwin", runner=runner)

    def test_invalid_utf8(self):
        """Test non-UTF-8 output is reported as invalid."""
        runner = Mock(return_value=completed(b"/sdk/\xff\xfe"))

        with pytest.raises(SdkResolutionError, match="invalid output from `xcrun`"):
            resolve_sdk_path("x86_64-apple-darwin", runner=runner)

    def test_empty_output(self):
        """Test xcrun printing nothing is a failure."""
        runner = Mock(return_value=completed(b"\n"))

        with pytest.raises(SdkResolutionError):
            resolve_sdk_path("x86_64-apple-darwin", runner=runner)

    def test_unknown_target_skips_xcrun(self):
        """Test unknown targets fail before running anything."""
        runner = Mock()

        with pytest.raises(SdkResolutionError):
            resolve_sdk_path("aarch64-apple-tvos", runner=runner)

        runner.assert_not_called()


class TestTryResolveSdkPath:
    """Test try_resolve_sdk_path()."""

    def test_success(self, xcrun_runner):
        """Test successful resolution returns the path."""
        assert (
            try_resolve_sdk_path("x86_64-apple-darwin", runner=xcrun_runner)
            == SDK_ROOTS["macosx"]
        )

    def test_failure_returns_none(self, failing_xcrun_runner, caplog):
        """Test failures degrade to None with a warning."""
        with caplog.at_level(logging.WARNING):
            result = try_resolve_sdk_path(
                "aarch64-apple-ios", runner=failing_xcrun_runner
            )

        assert result is None
        assert "without an SDK root" in caplog.text

    def test_unknown_target_returns_none(self):
        """Test unknown targets degrade to None."""
        assert try_resolve_sdk_path("aarch64-apple-tvos", runner=Mock()) is None

    def test_other_errors_propagate(self):
        """Test unexpected errors are not swallowed."""
        runner = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            try_resolve_sdk_path("x86_64-apple-darwin", runner=runner)
