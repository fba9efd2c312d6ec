"""Package placement policy for the Host & Platform module set.

* bootstrap carries every self-hosting component except shim-signed, which
  would not build there anyway.
* host and shim carry only the runtime packages listed in their rationale
  files, and claim every listed name for themselves.
* platform carries the remaining runtime packages not claimed by host or
  shim; atomic carries every runtime package not claimed by shim.
* platform and atomic swap the traditional release and repos packages for
  their modular variants. The placeholders carry dummy versions so that
  ``name_of`` still yields the full modular name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .logging import get_logger
from .models import ComponentRecord, Module
from .naming import name_of

BOOTSTRAP_SKIP_PREFIX = "shim-signed-"

MODULAR_RELEASE_PLACEHOLDER = "fedora-modular-release-dummyversion-dummyrelease"
MODULAR_REPOS_PLACEHOLDER = "fedora-modular-repos-dummyversion-dummyrelease"

logger = get_logger("classifier")


@dataclass(frozen=True)
class Substitution:
    """Rewrites runtime packages starting with ``prefix`` in platform and atomic."""

    prefix: str
    placeholder: str
    keep_original: bool

    def apply(self, identifier: str) -> Optional[Tuple[str, ...]]:
        if not identifier.startswith(self.prefix):
            return None
        if self.keep_original:
            return (self.placeholder, identifier)
        return (self.placeholder,)


# The traditional release and repos are needed for depsolving, but their
# features are implemented by the modular variants inside the modules.
SUBSTITUTIONS: Tuple[Substitution, ...] = (
    Substitution("fedora-release-", MODULAR_RELEASE_PLACEHOLDER, keep_original=False),
    Substitution("fedora-repos-", MODULAR_REPOS_PLACEHOLDER, keep_original=True),
)


@dataclass(frozen=True)
class Exclusions:
    """Names already claimed by modules processed earlier in the run."""

    claimed_by_host_or_shim: FrozenSet[str] = frozenset()
    claimed_by_shim: FrozenSet[str] = frozenset()

    def claim(self, module: Module, names: Iterable[str]) -> "Exclusions":
        names = frozenset(names)
        if module is Module.HOST:
            return Exclusions(
                claimed_by_host_or_shim=self.claimed_by_host_or_shim | names,
                claimed_by_shim=self.claimed_by_shim,
            )
        if module is Module.SHIM:
            return Exclusions(
                claimed_by_host_or_shim=self.claimed_by_host_or_shim | names,
                claimed_by_shim=self.claimed_by_shim | names,
            )
        return self


@dataclass(frozen=True)
class Defaults:
    """Fallback values for components no source has information about."""

    ref: str
    rationale: str


@dataclass
class ModuleComponents:
    """Classification result for one module."""

    module: Module
    components: Dict[str, ComponentRecord] = field(default_factory=dict)

    def names(self) -> FrozenSet[str]:
        return frozenset(self.components)

    def as_document(self) -> Dict[str, Dict[str, str]]:
        return {name: record.as_dict() for name, record in sorted(self.components.items())}

    def with_reference(self, names: Iterable[str], reference: str) -> "ModuleComponents":
        """Return a copy with the given components pointed at ``reference``."""
        patched = dict(self.components)
        for name in names:
            record = patched.get(name)
            if record is not None:
                patched[name] = ComponentRecord(
                    identifier=record.identifier,
                    reference=reference,
                    rationale=record.rationale,
                )
        return ModuleComponents(module=self.module, components=patched)


def classify(
    module: Module,
    *,
    selfhosting: FrozenSet[str],
    runtime: FrozenSet[str],
    refs: Mapping[str, str],
    rationales: Mapping[str, Optional[str]],
    exclusions: Exclusions,
    defaults: Defaults,
) -> Tuple[ModuleComponents, Exclusions]:
    """Compute one module's components and the exclusions later modules see."""
    if module is Module.BOOTSTRAP:
        selected = [
            identifier
            for identifier in selfhosting
            if not identifier.startswith(BOOTSTRAP_SKIP_PREFIX)
        ]
    elif module in (Module.HOST, Module.SHIM):
        selected = [identifier for identifier in runtime if name_of(identifier) in rationales]
        exclusions = exclusions.claim(module, rationales)
    elif module in (Module.PLATFORM, Module.ATOMIC):
        claimed = (
            exclusions.claimed_by_shim
            if module is Module.ATOMIC
            else exclusions.claimed_by_host_or_shim
        )
        remaining = [identifier for identifier in runtime if name_of(identifier) not in claimed]
        selected = _substitute(remaining)
    else:  # pragma: no cover - Module is a closed enum
        raise ValueError(f"Unhandled module: {module}")

    result = ModuleComponents(
        module=module,
        components=_build_records(module, selected, refs, rationales, defaults),
    )
    logger.debug("Classified %d components into %s", len(result.components), module.value)
    return result, exclusions


def _substitute(identifiers: Iterable[str]) -> List[str]:
    expanded: List[str] = []
    for identifier in identifiers:
        for substitution in SUBSTITUTIONS:
            replacement = substitution.apply(identifier)
            if replacement is not None:
                expanded.extend(replacement)
                break
        else:
            expanded.append(identifier)
    return expanded


def _build_records(
    module: Module,
    identifiers: Iterable[str],
    refs: Mapping[str, str],
    rationales: Mapping[str, Optional[str]],
    defaults: Defaults,
) -> Dict[str, ComponentRecord]:
    records: Dict[str, ComponentRecord] = {}
    for identifier in sorted(set(identifiers)):
        name = name_of(identifier)
        previous = records.get(name)
        if previous is not None:
            logger.warning(
                "%s: %s and %s share the name %s; keeping %s",
                module.value,
                previous.identifier,
                identifier,
                name,
                identifier,
            )
        records[name] = ComponentRecord(
            identifier=identifier,
            reference=refs.get(identifier) or defaults.ref,
            rationale=rationales.get(name) or defaults.rationale,
        )
    return records


__all__ = [
    "BOOTSTRAP_SKIP_PREFIX",
    "Defaults",
    "Exclusions",
    "MODULAR_RELEASE_PLACEHOLDER",
    "MODULAR_REPOS_PLACEHOLDER",
    "ModuleComponents",
    "SUBSTITUTIONS",
    "Substitution",
    "classify",
]
