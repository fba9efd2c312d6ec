"""Core data models shared across modulegen components."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple


class Module(str, Enum):
    """Target modules, declared in classification order."""

    BOOTSTRAP = "bootstrap"
    HOST = "host"
    SHIM = "shim"
    PLATFORM = "platform"
    ATOMIC = "atomic"


# Platform and atomic exclude whatever host and shim claimed, so order matters.
MODULE_ORDER: Tuple[Module, ...] = (
    Module.BOOTSTRAP,
    Module.HOST,
    Module.SHIM,
    Module.PLATFORM,
    Module.ATOMIC,
)


class RunMode(str, Enum):
    """Selects which modules a single run computes."""

    BOOTSTRAP = "bootstrap"
    ATOMIC = "atomic"
    HOST_PLATFORM = "hp"

    @classmethod
    def from_base(cls, segment: str) -> "RunMode":
        """Map the last segment of the base directory to a mode."""
        if segment == cls.BOOTSTRAP.value:
            return cls.BOOTSTRAP
        if segment == cls.ATOMIC.value:
            return cls.ATOMIC
        return cls.HOST_PLATFORM

    @property
    def modules(self) -> Tuple[Module, ...]:
        if self is RunMode.BOOTSTRAP:
            selected = {Module.BOOTSTRAP}
        elif self is RunMode.ATOMIC:
            selected = {Module.ATOMIC}
        else:
            selected = {Module.HOST, Module.SHIM, Module.PLATFORM}
        return tuple(module for module in MODULE_ORDER if module in selected)


@dataclass(frozen=True)
class ComponentRecord:
    """A single component entry handed to the document emitter."""

    identifier: str
    reference: str
    rationale: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "identifier": self.identifier,
            "reference": self.reference,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class PackageSets:
    """Self-hosting and runtime identifiers unioned across architectures."""

    selfhosting: FrozenSet[str]
    runtime: FrozenSet[str]

    def all_identifiers(self) -> FrozenSet[str]:
        return self.selfhosting | self.runtime
