"""Per-architecture package list loading."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence, Set

from .errors import PackageListError
from .logging import get_logger
from .models import PackageSets
from .naming import identifier_of

SELFHOSTING_LIST = "selfhosting-source-packages-full.txt"
RUNTIME_LIST = "runtime-source-packages-full.txt"

logger = get_logger("packages")


def load_package_sets(base: Path, arches: Sequence[str]) -> PackageSets:
    """Union the self-hosting and runtime lists of every architecture."""
    selfhosting: Set[str] = set()
    runtime: Set[str] = set()
    for arch in arches:
        logger.debug("Reading %s / %s package lists...", base.name, arch)
        arch_dir = base / arch
        selfhosting.update(_read_list(arch_dir / SELFHOSTING_LIST))
        runtime.update(_read_list(arch_dir / RUNTIME_LIST))
    logger.debug(
        "Loaded %d self-hosting and %d runtime packages", len(selfhosting), len(runtime)
    )
    return PackageSets(selfhosting=frozenset(selfhosting), runtime=frozenset(runtime))


def _read_list(path: Path) -> Iterator[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PackageListError(f"Cannot read package list {path}: {exc}") from exc
    for line in text.splitlines():
        line = line.strip()
        if line:
            yield identifier_of(line)


__all__ = ["RUNTIME_LIST", "SELFHOSTING_LIST", "load_package_sets"]
