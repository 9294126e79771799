"""Tests for CLI utility functions."""

import argparse

import pytest

from bindkit.cli.utils import format_flags, load_project, print_error
from bindkit.core.exceptions import ConfigError


class TestLoadProject:
    def test_defaults(self, tmp_path):
        """Test a project without bindkit.yaml."""
        args = argparse.Namespace(project_root=tmp_path, config=None)

        project = load_project(args)

        assert project.sources_root == tmp_path.resolve()
        assert project.config_path is None

    def test_explicit_config(self, tmp_path):
        """Test --config is honored."""
        config = tmp_path / "alt.yaml"
        config.write_text("version: 1\nlibrary: alt\n")
        args = argparse.Namespace(project_root=tmp_path, config=config)

        assert load_project(args).library == "alt"

    def test_invalid_config(self, tmp_path):
        """Test errors propagate to the caller."""
        (tmp_path / "bindkit.yaml").write_text("version: 3\n")
        args = argparse.Namespace(project_root=tmp_path, config=None)

        with pytest.raises(ConfigError):
            load_project(args)


class TestPrintError:
    def test_message_only(self, capsys):
        """Test a bare message."""
        print_error("Build failed")

        captured = capsys.readouterr()
        assert captured.err == "ERROR: Build failed\n"
        assert captured.out == ""

    def test_with_details(self, capsys):
        """Test details are indented on the next line."""
        print_error("Build failed", "TARGET variable not set")

        assert capsys.readouterr().err == (
            "ERROR: Build failed\n  TARGET variable not set\n"
        )


class TestFormatFlags:
    def test_args(self):
        """Test one argument per line."""
        assert format_flags("Compiler", ["-m64", "-DA=1"]) == (
            "Compiler:\n  -m64\n  -DA=1"
        )

    def test_empty(self):
        """Test empty argument lists are marked."""
        assert format_flags("Generator", []) == "Generator:\n  (none)"
