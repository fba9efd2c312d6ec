"""Resolve dist-git refs for package identifiers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..errors import BuildLookupError
from ..logging import get_logger
from ..naming import name_of
from ..stores import RefCache
from .base import BuildLookup

# e.g. "build (f27-candidate, /rpms/bash.git:f27)"
_TASK_LABEL_PATTERN = re.compile(r"^build\s\([^,]+,\s(?:/rpms)?/[^:]+:(?P<ref>[^)]+)\)$")


def ref_from_task_label(label: str) -> Optional[str]:
    """Extract the source ref from a build task label, or None if it has none."""
    match = _TASK_LABEL_PATTERN.match(label.strip())
    if match is None:
        return None
    return match.group("ref")


class ReferenceResolver:
    """Combines name overrides, the shared cache and a batch remote lookup."""

    def __init__(
        self,
        cache_path: Path,
        lookup: BuildLookup | None = None,
        *,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self.cache_path = cache_path
        self.lookup = lookup
        self.overrides = dict(overrides or {})
        self.logger = get_logger("refs.resolver")

    def resolve(self, identifiers: Iterable[str]) -> Dict[str, str]:
        """Return ``identifier -> ref`` for every identifier a source can answer.

        Identifiers nobody knows about are left out; callers fill in the
        default ref.
        """
        wanted = sorted(set(identifiers))
        with RefCache(self.cache_path) as cache:
            cached = cache.load()

            resolved: Dict[str, str] = {}
            for identifier in wanted:
                override = self.overrides.get(name_of(identifier))
                if override:
                    resolved[identifier] = override
                elif identifier in cached:
                    resolved[identifier] = cached[identifier]

            pending = [identifier for identifier in wanted if identifier not in resolved]
            if pending:
                for identifier, ref in self._lookup_remote(pending).items():
                    resolved.setdefault(identifier, ref)

            merged = dict(cached)
            merged.update(resolved)
            cache.save(merged)

        self.logger.debug(
            "Resolved %d of %d refs (%d looked up remotely)",
            len(resolved),
            len(wanted),
            len(pending),
        )
        return resolved

    def _lookup_remote(self, identifiers: Sequence[str]) -> Dict[str, str]:
        if self.lookup is None:
            self.logger.debug("No remote lookup configured; %d refs left unresolved", len(identifiers))
            return {}
        try:
            return self._query(self.lookup, identifiers)
        except Exception as exc:
            self.logger.warning(
                "Remote ref lookup failed for %d packages, falling back to defaults: %s",
                len(identifiers),
                exc,
            )
            return {}

    def _query(self, lookup: BuildLookup, identifiers: Sequence[str]) -> Dict[str, str]:
        builds = lookup.get_builds(identifiers)
        if len(builds) != len(identifiers):
            raise BuildLookupError(
                f"Expected {len(identifiers)} build records, received {len(builds)}"
            )

        with_tasks: List[Tuple[str, int]] = []
        for identifier, build in zip(identifiers, builds):
            if not build:
                continue
            task_id = build.get("task_id")
            if task_id is None:
                continue
            with_tasks.append((identifier, task_id))
        if not with_tasks:
            return {}

        labels = lookup.get_task_labels([task_id for _, task_id in with_tasks])
        if len(labels) != len(with_tasks):
            raise BuildLookupError(
                f"Expected {len(with_tasks)} task labels, received {len(labels)}"
            )

        refs: Dict[str, str] = {}
        for (identifier, _), label in zip(with_tasks, labels):
            ref = ref_from_task_label(label)
            if ref:
                refs[identifier] = ref
            else:
                self.logger.debug("No ref in task label for %s: %r", identifier, label)
        return refs


__all__ = ["ReferenceResolver", "ref_from_task_label"]
