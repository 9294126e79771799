"""YAML project configuration parser for bindkit.

This module provides parsing and validation for bindkit.yaml files. The file
is optional: without one, bindkit builds the stb catalog with the ``stb``
library name and ``stb.*`` symbol allow-list.

Example bindkit.yaml:

    version: 1
    library: stb
    allowlist: "stb.*"
    sources_root: .
    features: [stb_image, stbi_no_hdr]
    capabilities:
      stb_image:
        source: src/stb_image.c
        defines:
          stbi_no_hdr: STBI_NO_HDR
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Tuple

import yaml

from bindkit.config.capabilities import (
    DEFAULT_CATALOG,
    Capability,
    CapabilitySet,
    known_feature_names,
)
from bindkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "bindkit.yaml"
DEFAULT_LIBRARY = "stb"
DEFAULT_ALLOWLIST = "stb.*"


@dataclass(frozen=True)
class ProjectConfig:
    """Complete bindkit project configuration."""

    version: int = 1
    library: str = DEFAULT_LIBRARY
    allowlist: str = DEFAULT_ALLOWLIST
    sources_root: Path = field(default_factory=Path.cwd)
    catalog: Tuple[Capability, ...] = DEFAULT_CATALOG
    features: FrozenSet[str] = frozenset()
    config_path: Optional[Path] = None

    def capability_set(self, environment_features: Iterable[str] = ()) -> CapabilitySet:
        """
        Combine configured and environment-provided features.

        Environment features that the catalog does not know are ignored,
        since Cargo also exports features such as 'default'. Features named
        in the project file must exist.

        Args:
            environment_features: Feature names from CARGO_FEATURE_* variables

        Returns:
            CapabilitySet for this build

        Raises:
            ConfigError: If the project file enables an unknown feature
        """
        known = known_feature_names(self.catalog)
        from_env = set(environment_features)
        ignored = sorted(from_env - known)
        if ignored:
            logger.debug(f"Ignoring unrelated features: {', '.join(ignored)}")

        return CapabilitySet(
            self.catalog,
            (from_env & known) | set(self.features),
            sources_root=self.sources_root,
        )


def load_project_config(
    project_root: Path, config_path: Optional[Path] = None
) -> ProjectConfig:
    """
    Load the project configuration, falling back to defaults.

    Args:
        project_root: Project root directory
        config_path: Explicit configuration file; must exist if given

    Returns:
        ProjectConfig

    Raises:
        ConfigError: If the configuration is invalid or an explicit file is missing
    """
    project_root = Path(project_root)

    if config_path is not None:
        return parse_project_config(Path(config_path))

    default_path = project_root / CONFIG_FILE_NAME
    if default_path.exists():
        return parse_project_config(default_path)

    logger.debug(f"No {CONFIG_FILE_NAME} in {project_root}, using defaults")
    return ProjectConfig(sources_root=project_root)


def parse_project_config(config_path: Path) -> ProjectConfig:
    """
    Parse a bindkit.yaml configuration file.

    Relative paths in the file are resolved against the file's directory.

    Args:
        config_path: Path to bindkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    logger.debug(f"Loaded configuration from {config_path}")
    return _parse_and_validate(data, config_path)


def _parse_and_validate(data: dict, config_path: Path) -> ProjectConfig:
    """Parse and validate configuration data."""
    base_dir = config_path.parent

    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    library = data.get("library", DEFAULT_LIBRARY)
    if not isinstance(library, str) or not library:
        raise ConfigError("library must be a non-empty string")

    allowlist = data.get("allowlist", DEFAULT_ALLOWLIST)
    if not isinstance(allowlist, str) or not allowlist:
        raise ConfigError("allowlist must be a non-empty string")

    sources_root = Path(data.get("sources_root", "."))
    if not sources_root.is_absolute():
        sources_root = base_dir / sources_root

    if "capabilities" in data:
        catalog = _parse_capabilities(data["capabilities"])
    else:
        catalog = DEFAULT_CATALOG

    features = data.get("features", [])
    if not isinstance(features, list):
        raise ConfigError("features must be a list")

    unknown = sorted(set(features) - known_feature_names(catalog))
    if unknown:
        raise ConfigError(f"features references undefined names: {', '.join(unknown)}")

    return ProjectConfig(
        version=data["version"],
        library=library,
        allowlist=allowlist,
        sources_root=sources_root,
        catalog=catalog,
        features=frozenset(features),
        config_path=config_path,
    )


def _parse_capabilities(data) -> Tuple[Capability, ...]:
    """Parse the capabilities mapping."""
    if not isinstance(data, dict) or not data:
        raise ConfigError("capabilities must be a non-empty mapping")

    capabilities = []
    sub_features = set()

    for name, cap_data in data.items():
        if not isinstance(cap_data, dict) or "source" not in cap_data:
            raise ConfigError(f"Capability '{name}' must specify 'source'")

        defines = cap_data.get("defines") or {}
        if not isinstance(defines, dict):
            raise ConfigError(f"Capability '{name}' defines must be a mapping")

        for feature in defines:
            if feature in data or feature in sub_features:
                raise ConfigError(f"Duplicate feature name: {feature}")
            sub_features.add(feature)

        capabilities.append(
            Capability(
                name=name,
                source=Path(cap_data["source"]),
                defines={str(k): str(v) for k, v in defines.items()},
            )
        )

    return tuple(capabilities)


__all__ = [
    "CONFIG_FILE_NAME",
    "ProjectConfig",
    "load_project_config",
    "parse_project_config",
]
