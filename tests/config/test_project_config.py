"""
Unit tests for bindkit.yaml parsing.

Tests cover:
- Defaults when no file is present
- Valid configurations with custom capabilities
- Validation errors
- Combining configured and environment features
"""

from pathlib import Path

import pytest

from bindkit.config.capabilities import DEFAULT_CATALOG
from bindkit.config.parser import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    load_project_config,
    parse_project_config,
)
from bindkit.core.exceptions import ConfigError


@pytest.fixture
def write_config(tmp_path):
    """Write bindkit.yaml content into tmp_path."""

    def _write(content: str) -> Path:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text(content)
        return path

    return _write


class TestLoadProjectConfig:
    """Test load_project_config()."""

    def test_defaults_without_file(self, tmp_path):
        """Test defaults when bindkit.yaml is absent."""
        config = load_project_config(tmp_path)

        assert config.library == "stb"
        assert config.allowlist == "stb.*"
        assert config.sources_root == tmp_path
        assert config.catalog == DEFAULT_CATALOG
        assert config.features == frozenset()
        assert config.config_path is None

    def test_finds_default_file(self, write_config, tmp_path):
        """Test bindkit.yaml in the project root is used."""
        write_config("version: 1\nlibrary: stbi\n")

        config = load_project_config(tmp_path)

        assert config.library == "stbi"
        assert config.config_path == tmp_path / CONFIG_FILE_NAME

    def test_explicit_path(self, tmp_path):
        """Test an explicit configuration file."""
        path = tmp_path / "conf" / "custom.yaml"
        path.parent.mkdir()
        path.write_text("version: 1\nallowlist: 'my_.*'\n")

        config = load_project_config(tmp_path, path)

        assert config.allowlist == "my_.*"
        assert config.sources_root == path.parent

    def test_explicit_path_missing(self, tmp_path):
        """Test a missing explicit file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_project_config(tmp_path, tmp_path / "missing.yaml")


class TestParseProjectConfig:
    """Test parse_project_config()."""

    def test_full_config(self, write_config, tmp_path):
        """Test every field."""
        path = write_config(
            """
version: 1
library: imgload
allowlist: "img_.*"
sources_root: vendor
features: [loader, no_tga]
capabilities:
  loader:
    source: c/loader.c
    defines:
      no_tga: IMG_NO_TGA
  writer:
    source: c/writer.c
"""
        )

        config = parse_project_config(path)

        assert config.library == "imgload"
        assert config.allowlist == "img_.*"
        assert config.sources_root == tmp_path / "vendor"
        assert [c.name for c in config.catalog] == ["loader", "writer"]
        assert config.catalog[0].source == Path("c/loader.c")
        assert dict(config.catalog[0].defines) == {"no_tga": "IMG_NO_TGA"}
        assert config.catalog[1].defines == {}
        assert config.features == frozenset({"loader", "no_tga"})

    def test_absolute_sources_root(self, write_config, tmp_path):
        """Test absolute sources_root is kept."""
        root = tmp_path / "abs"
        path = write_config(f"version: 1\nsources_root: {root.as_posix()}\n")

        assert parse_project_config(path).sources_root == root

    @pytest.mark.parametrize(
        "content,message",
        [
            ("", "empty"),
            ("- a\n- b\n", "mapping"),
            ("library: stb\n", "Missing required field: version"),
            ("version: 2\n", "Unsupported version"),
            ("version: 1\nlibrary: ''\n", "library"),
            ("version: 1\nallowlist: 5\n", "allowlist"),
            ("version: 1\nfeatures: stb_image\n", "features must be a list"),
            ("version: 1\nfeatures: [stb_vorbis]\n", "stb_vorbis"),
            ("version: 1\ncapabilities: {}\n", "non-empty mapping"),
            ("version: 1\ncapabilities:\n  a: {}\n", "must specify 'source'"),
            (
                "version: 1\ncapabilities:\n  a:\n    source: a.c\n    defines: [X]\n",
                "defines must be a mapping",
            ),
            (
                "version: 1\ncapabilities:\n"
                "  a:\n    source: a.c\n    defines: {b: B}\n"
                "  b:\n    source: b.c\n",
                "Duplicate feature name: b",
            ),
            ("version: [1\n", "Invalid YAML"),
        ],
    )
    def test_invalid(self, write_config, content, message):
        """Test validation errors."""
        path = write_config(content)

        with pytest.raises(ConfigError, match=message):
            parse_project_config(path)


class TestCapabilitySetFromProject:
    """Test ProjectConfig.capability_set()."""

    def test_environment_features(self, tmp_path):
        """Test environment features enable capabilities."""
        config = ProjectConfig(sources_root=tmp_path)

        caps = config.capability_set({"stb_image", "stbi_no_gif"})

        assert caps.sources() == [tmp_path / "src" / "stb_image.c"]
        assert caps.defines() == [("STBI_NO_GIF", "1")]

    def test_unrelated_environment_features_ignored(self, tmp_path):
        """Test Cargo features outside the catalog are ignored."""
        config = ProjectConfig(sources_root=tmp_path)

        caps = config.capability_set({"default", "std"})

        assert caps.is_empty()

    def test_configured_features_merged(self, tmp_path):
        """Test configured and environment features combine."""
        config = ProjectConfig(
            sources_root=tmp_path, features=frozenset({"stb_truetype"})
        )

        caps = config.capability_set({"stb_rect_pack"})

        assert [c.name for c in caps.active()] == ["stb_rect_pack", "stb_truetype"]
