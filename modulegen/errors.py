"""Exception hierarchy shared across modulegen components."""

from __future__ import annotations


class ModulegenError(RuntimeError):
    """Base class for failures that abort a run."""


class ConfigError(ModulegenError):
    """Raised when the configuration file cannot be parsed."""


class PackageListError(ModulegenError):
    """Raised when a per-architecture package list is missing or unreadable."""


class CacheError(ModulegenError):
    """Raised when the reference cache is used outside of a load/save cycle."""


class RenderError(ModulegenError):
    """Raised when a module template cannot be rendered."""


class BuildLookupError(ModulegenError):
    """Raised by remote build lookups on transport or protocol failures."""


__all__ = [
    "BuildLookupError",
    "CacheError",
    "ConfigError",
    "ModulegenError",
    "PackageListError",
    "RenderError",
]
