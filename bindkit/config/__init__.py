"""
Build configuration for bindkit.

Covers the process environment supplied by the build orchestrator, the
capability catalog, and the optional bindkit.yaml project file.
"""

from bindkit.config.capabilities import (
    Capability,
    CapabilitySet,
    DEFAULT_CATALOG,
    features_from_environment,
)
from bindkit.config.environment import BuildEnvironment
from bindkit.config.parser import ProjectConfig, load_project_config, parse_project_config

__all__ = [
    "Capability",
    "CapabilitySet",
    "DEFAULT_CATALOG",
    "features_from_environment",
    "BuildEnvironment",
    "ProjectConfig",
    "load_project_config",
    "parse_project_config",
]
