"""Persistent, lock-guarded cache of package identifier to dist-git ref."""

from __future__ import annotations

import re
from pathlib import Path
from types import TracebackType
from typing import Dict, IO, Mapping, Optional, Type

import portalocker

from ..errors import CacheError
from ..logging import get_logger

_LINE_PATTERN = re.compile(r"^(?P<identifier>[^:]+):(?P<ref>.+)$")


class RefCache:
    """Reads and rewrites the shared ``identifier:ref`` cache file.

    The exclusive lock is taken by :meth:`load` and held until :meth:`save`
    (or until the context manager exits), so concurrent runs serialise on
    the whole read-merge-write cycle rather than interleaving writes.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._handle: Optional[IO[str]] = None
        self.logger = get_logger("stores.ref_cache")

    @property
    def locked(self) -> bool:
        return self._handle is not None

    def load(self) -> Dict[str, str]:
        if self._handle is not None:
            raise CacheError(f"Reference cache {self._path} is already loaded")
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch(exist_ok=True)

        handle = open(self._path, "r+", encoding="utf-8")
        try:
            portalocker.lock(handle, portalocker.LOCK_EX)
        except BaseException:
            handle.close()
            raise
        self._handle = handle

        entries: Dict[str, str] = {}
        skipped = 0
        handle.seek(0)
        for line in handle:
            match = _LINE_PATTERN.match(line.rstrip("\n"))
            if match is None:
                skipped += 1
                continue
            entries[match.group("identifier")] = match.group("ref")
        if skipped:
            self.logger.debug("Skipped %d malformed lines in %s", skipped, self._path)
        self.logger.debug("Loaded %d cached refs from %s", len(entries), self._path)
        return entries

    def save(self, entries: Mapping[str, str]) -> None:
        handle = self._handle
        if handle is None:
            raise CacheError(f"Reference cache {self._path} must be loaded before saving")
        try:
            handle.seek(0)
            handle.truncate()
            for identifier in sorted(entries):
                handle.write(f"{identifier}:{entries[identifier]}\n")
            handle.flush()
        finally:
            self.release()
        self.logger.debug("Persisted %d refs to %s", len(entries), self._path)

    def release(self) -> None:
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        try:
            portalocker.unlock(handle)
        finally:
            handle.close()

    def __enter__(self) -> "RefCache":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()


__all__ = ["RefCache"]
