"""Configuration loading for modulegen (.modulegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".modulegen.yml"

DEFAULT_ARCHES = ("aarch64", "armv7hl", "i686", "ppc64", "ppc64le", "s390x", "x86_64")
DEFAULT_REF = "master"
DEFAULT_RATIONALE = "Autogenerated by Host & Platform tooling."
DEFAULT_KOJI_HUB = "https://koji.fedoraproject.org/kojihub"

# dnf and python3 are built from dedicated modularity branches.
DEFAULT_REF_OVERRIDES = {
    "dnf": "boltron",
    "python3": "f27-modular-server",
}


@dataclass
class KojiConfig:
    """Remote build service settings."""

    hub: str = DEFAULT_KOJI_HUB


@dataclass
class VariantConfig:
    """Alternate descriptor emitted next to the standard one."""

    name: str = "f27"
    ref: str = "f27"
    components: List[str] = field(
        default_factory=lambda: ["fedora-modular-release", "fedora-modular-repos"]
    )


@dataclass
class ModulegenConfig:
    """Represents the settings defined in .modulegen.yml."""

    root: Path
    arches: List[str] = field(default_factory=lambda: list(DEFAULT_ARCHES))
    cache_path: Path = Path("refcache.txt")
    default_ref: str = DEFAULT_REF
    default_rationale: str = DEFAULT_RATIONALE
    rationale_width: int = 54
    rationale_indent: int = 20
    koji: KojiConfig = field(default_factory=KojiConfig)
    ref_overrides: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REF_OVERRIDES))
    variant: Optional[VariantConfig] = field(default_factory=VariantConfig)


def load_config(base: Path) -> ModulegenConfig:
    """Load configuration for the package list directory ``base``."""
    root = base.expanduser()
    config_file = root / CONFIG_FILENAME

    if not config_file.exists():
        return ModulegenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ModulegenConfig(root=root)

    arches = _as_str_list(data.get("arches"))
    if arches:
        config.arches = arches

    cache_path = _as_str(data.get("cache_path"))
    if cache_path:
        config.cache_path = Path(cache_path).expanduser()

    config.default_ref = _as_str(data.get("default_ref")) or config.default_ref
    config.default_rationale = (
        _as_str(data.get("default_rationale")) or config.default_rationale
    )

    width = _as_int(data.get("rationale_width"))
    if width is not None:
        if width < 1:
            raise ConfigError("rationale_width must be a positive integer")
        config.rationale_width = width
    indent = _as_int(data.get("rationale_indent"))
    if indent is not None:
        config.rationale_indent = max(indent, 0)

    koji_data = _as_dict(data.get("koji"))
    hub = _as_str(koji_data.get("hub")) if koji_data else None
    if hub:
        config.koji = KojiConfig(hub=hub)

    if "ref_overrides" in data:
        overrides_data = data.get("ref_overrides")
        if overrides_data is not None and not isinstance(overrides_data, dict):
            raise ConfigError("ref_overrides must be a mapping of package name to ref")
        config.ref_overrides = {
            str(name): str(ref)
            for name, ref in (overrides_data or {}).items()
            if _as_str(ref)
        }

    if "variant" in data:
        variant_data = data.get("variant")
        if variant_data is None or variant_data is False:
            config.variant = None
        else:
            variant_dict = _as_dict(variant_data)
            if not variant_dict:
                raise ConfigError("variant must be a mapping or null")
            defaults = VariantConfig()
            config.variant = VariantConfig(
                name=_as_str(variant_dict.get("name")) or defaults.name,
                ref=_as_str(variant_dict.get("ref")) or defaults.ref,
                components=_as_str_list(variant_dict.get("components"))
                or defaults.components,
            )

    return config


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_ARCHES",
    "DEFAULT_RATIONALE",
    "DEFAULT_REF",
    "KojiConfig",
    "ModulegenConfig",
    "VariantConfig",
    "load_config",
]
