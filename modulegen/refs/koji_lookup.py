"""Koji hub adapter implementing the batch build lookup."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..config import DEFAULT_KOJI_HUB
from ..errors import BuildLookupError
from ..logging import get_logger
from .base import BuildLookup


class KojiBuildLookup(BuildLookup):
    """Queries a koji hub using multicalls, one round trip per phase.

    ``client`` is the koji client module (``ClientSession``, ``taskLabel``
    and ``GenericError``); it is imported on first use when not given.
    """

    def __init__(self, hub: str = DEFAULT_KOJI_HUB, *, client: Any = None) -> None:
        self.hub = hub
        self._client = client
        self._session: Any = None
        self.logger = get_logger("refs.koji")

    def get_builds(self, identifiers: Sequence[str]) -> List[Optional[Dict[str, Any]]]:
        self.logger.debug("Requesting %d builds from %s", len(identifiers), self.hub)
        return self._multicall("getBuild", [((identifier,), {}) for identifier in identifiers])

    def get_task_labels(self, task_ids: Sequence[int]) -> List[str]:
        self.logger.debug("Requesting %d build tasks from %s", len(task_ids), self.hub)
        tasks = self._multicall(
            "getTaskInfo", [((task_id,), {"request": True}) for task_id in task_ids]
        )
        task_label = self._koji().taskLabel
        return [task_label(task) if task else "" for task in tasks]

    def _multicall(self, method: str, calls: Sequence[tuple]) -> List[Any]:
        if not calls:
            return []
        koji = self._koji()
        try:
            if self._session is None:
                self._session = koji.ClientSession(self.hub)
            with self._session.multicall(strict=True) as multicall:
                pending = [getattr(multicall, method)(*args, **kwargs) for args, kwargs in calls]
            return [call.result for call in pending]
        except (koji.GenericError, OSError) as exc:
            raise BuildLookupError(f"koji {method} multicall failed: {exc}") from exc

    def _koji(self) -> Any:
        if self._client is None:
            try:
                import koji
            except ModuleNotFoundError as exc:
                raise BuildLookupError(
                    "The koji client library is required for remote ref lookups; "
                    "install modulegen[koji]"
                ) from exc
            self._client = koji
        return self._client


__all__ = ["KojiBuildLookup"]
