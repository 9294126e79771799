"""
Capability catalog.

A capability is one optional C translation unit plus the sub-feature toggles
that gate code inside it through preprocessor defines. The catalog is plain
data; which entries are active for a build is decided by the set of enabled
feature names (Cargo-style ``CARGO_FEATURE_*`` variables or the project file).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from bindkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFINE_VALUE = "1"
CARGO_FEATURE_PREFIX = "CARGO_FEATURE_"


@dataclass(frozen=True)
class Capability:
    """
    One optional C source unit.

    Attributes:
        name: Feature name that enables the source (e.g., 'stb_image')
        source: Path of the C file, relative to the sources root
        defines: Sub-feature name -> preprocessor define it turns on
    """

    name: str
    source: Path
    defines: Mapping[str, str] = field(default_factory=dict)


def _stb(name: str, defines: Dict[str, str] = None) -> Capability:
    return Capability(
        name=name, source=Path("src") / f"{name}.c", defines=defines or {}
    )


_STBI_FORMATS = ("linear", "jpeg", "png", "bmp", "psd", "gif", "hdr", "pic", "pnm")

DEFAULT_CATALOG: Tuple[Capability, ...] = (
    _stb("stb_easy_font"),
    _stb("stb_dxt", {"stb_dxt_use_rounding_bias": "STB_DXT_USE_ROUNDING_BIAS"}),
    _stb(
        "stb_image",
        {
            f"stbi_no_{fmt}": f"STBI_NO_{fmt.upper()}"
            for fmt in _STBI_FORMATS
        },
    ),
    _stb("stb_image_write"),
    _stb("stb_rect_pack"),
    _stb("stb_image_resize"),
    _stb("stb_truetype"),
)


def known_feature_names(catalog: Iterable[Capability]) -> FrozenSet[str]:
    """All capability and sub-feature names in a catalog."""
    names = set()
    for capability in catalog:
        names.add(capability.name)
        names.update(capability.defines)
    return frozenset(names)


class CapabilitySet:
    """
    The capabilities enabled for one build.

    Example:
        >>> caps = CapabilitySet(DEFAULT_CATALOG, {"stb_image", "stbi_no_png"})
        >>> [str(s) for s in caps.sources()]
        ['src/stb_image.c']
        >>> caps.defines()
        [('STBI_NO_PNG', '1')]
    """

    def __init__(
        self,
        catalog: Iterable[Capability] = DEFAULT_CATALOG,
        enabled: Iterable[str] = (),
        sources_root: Path = None,
    ):
        """
        Args:
            catalog: All known capabilities
            enabled: Enabled capability and sub-feature names
            sources_root: Directory that capability sources are relative to

        Raises:
            ConfigError: If an enabled name is neither a capability nor a
                sub-feature of one
        """
        self.catalog = tuple(catalog)
        self.sources_root = Path(sources_root) if sources_root else None
        self.enabled: FrozenSet[str] = frozenset(enabled)

        unknown = sorted(self.enabled - known_feature_names(self.catalog))
        if unknown:
            raise ConfigError(f"Unknown features: {', '.join(unknown)}")

    def active(self) -> List[Capability]:
        """Enabled capabilities, in catalog order."""
        return [c for c in self.catalog if c.name in self.enabled]

    def sources(self) -> List[Path]:
        """Source files to compile, resolved against sources_root when set."""
        sources = []
        for capability in self.active():
            source = capability.source
            if self.sources_root and not source.is_absolute():
                source = self.sources_root / source
            sources.append(source)
        return sources

    def defines(self) -> List[Tuple[str, str]]:
        """Preprocessor defines for enabled sub-features of enabled capabilities."""
        defines = []
        for capability in self.active():
            for feature, define in capability.defines.items():
                if feature in self.enabled:
                    defines.append((define, DEFINE_VALUE))
        return defines

    def is_empty(self) -> bool:
        return not self.active()

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self.active())
        return f"CapabilitySet([{names}])"


def features_from_environment(environ: Mapping[str, str]) -> FrozenSet[str]:
    """
    Collect enabled feature names from Cargo-style environment variables.

    Cargo exports ``CARGO_FEATURE_<NAME>`` for every enabled feature with the
    name upper-cased and dashes turned into underscores.

    Args:
        environ: Process environment

    Returns:
        Lower-cased feature names

    Example:
        >>> features_from_environment({"CARGO_FEATURE_STB_IMAGE": "1"})
        frozenset({'stb_image'})
    """
    features = frozenset(
        key[len(CARGO_FEATURE_PREFIX):].lower()
        for key in environ
        if key.startswith(CARGO_FEATURE_PREFIX)
    )
    if features:
        logger.debug(f"Features from environment: {', '.join(sorted(features))}")
    return features


__all__ = [
    "Capability",
    "CapabilitySet",
    "DEFAULT_CATALOG",
    "DEFINE_VALUE",
    "features_from_environment",
    "known_feature_names",
]
