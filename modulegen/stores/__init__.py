"""Persistent stores used across runs."""

from .ref_cache import RefCache

__all__ = ["RefCache"]
