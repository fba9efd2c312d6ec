"""Base class for remote build lookups."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class BuildLookup(ABC):
    """Two-phase batch contract against the remote build system."""

    @abstractmethod
    def get_builds(self, identifiers: Sequence[str]) -> List[Optional[Dict[str, Any]]]:
        """Return one build record (or None) per identifier, in request order."""

    @abstractmethod
    def get_task_labels(self, task_ids: Sequence[int]) -> List[str]:
        """Return the descriptive label of each task, in request order."""
