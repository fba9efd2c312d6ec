"""Package name normalisation helpers.

Both helpers work on plain strings and never raise: input that does not look
like a package filename or NVR is returned as-is.

Names that contain hyphens are split heuristically on the rightmost two
hyphen-delimited segments, so an identifier such as ``foo-bar-1`` resolves
to the name ``foo`` rather than ``foo-bar``.
"""

from __future__ import annotations

import re

_NVR_PATTERN = re.compile(r"^(.+?)-(?:\d+:)?([^-]+-[^-]+)(?:\.[^.]+)$")
_NAME_PATTERN = re.compile(r"^(.+)-[^-]+-[^-]+$")


def identifier_of(raw: str) -> str:
    """Return ``name-version-release`` for a ``name-[epoch:]version-release.arch`` string."""
    match = _NVR_PATTERN.match(raw.strip())
    if match is None:
        return raw.strip()
    return f"{match.group(1)}-{match.group(2)}"


def name_of(identifier: str) -> str:
    """Strip the trailing ``-version-release`` from an identifier."""
    match = _NAME_PATTERN.match(identifier)
    if match is None:
        return identifier
    return match.group(1)


__all__ = ["identifier_of", "name_of"]
