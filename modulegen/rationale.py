"""Per-module inclusion lists with human written justifications."""

from __future__ import annotations

import csv
import textwrap
from pathlib import Path
from typing import Dict, Optional

from .logging import get_logger

logger = get_logger("rationale")


def load_rationales(
    base: Path,
    module: str,
    *,
    width: int = 54,
    indent: int = 20,
) -> Dict[str, Optional[str]]:
    """Read ``<base>/<module>.csv`` into ``name -> justification``.

    Every listed name is present in the result; names without a
    justification map to ``None``.
    """
    path = base / f"{module}.csv"
    if not path.exists():
        logger.warning("No rationale list for %s at %s", module, path)
        return {}

    rationales: Dict[str, Optional[str]] = {}
    with path.open(newline="", encoding="utf-8") as handle:
        for row in csv.reader(handle):
            if not row or not row[0].strip():
                continue
            name = row[0].strip()
            text = row[1].strip() if len(row) > 1 else ""
            rationales[name] = format_rationale(text, width=width, indent=indent) if text else None
    return rationales


def format_rationale(text: str, *, width: int = 54, indent: int = 20) -> str:
    """Capitalise, terminate and reflow a justification for block embedding."""
    sentence = text.capitalize()
    if not sentence.endswith("."):
        sentence += "."
    return textwrap.fill(
        sentence,
        width=width,
        initial_indent="",
        subsequent_indent=" " * indent,
        break_on_hyphens=False,
    )


__all__ = ["format_rationale", "load_rationales"]
