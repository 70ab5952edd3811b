"""Best-effort lookup of semantically-named fields in drifting table rows.

Upstream headers change without notice ("Días", "Dias", "Días al Vto"), so lookups
go through an explicit two-pass matcher: exact match on normalized names first,
then containment in either direction. Candidate order is the priority order.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^\wñáéíóúü %/.$()-]+")


def normalize_key(text: str) -> str:
    """Lowercase, collapse whitespace and drop characters outside the header alphabet."""
    lowered = _WHITESPACE.sub(" ", (text or "").lower())
    return _DISALLOWED.sub("", lowered).strip()


def resolve_field(row: Mapping[str, str], candidates: Sequence[str]) -> str:
    """Return the value of the best-matching field, or ``""`` when none matches.

    Args:
        row: Row keyed by header text
        candidates: Semantic field names, highest priority first

    Returns:
        The matched value; an empty string means the field is absent
    """
    keys = [(key, normalize_key(key)) for key in row]
    targets = [normalize_key(candidate) for candidate in candidates]

    for target in targets:
        for key, normalized in keys:
            if normalized == target:
                return row[key]

    for target in targets:
        if not target:
            continue
        for key, normalized in keys:
            if normalized and (target in normalized or normalized in target):
                return row[key]

    return ""
