"""Dist-git ref resolution."""

from .base import BuildLookup
from .koji_lookup import KojiBuildLookup
from .resolver import ReferenceResolver, ref_from_task_label

__all__ = ["BuildLookup", "KojiBuildLookup", "ReferenceResolver", "ref_from_task_label"]
