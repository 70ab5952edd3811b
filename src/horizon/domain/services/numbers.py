"""Locale-aware number and date parsing for market and user input.

Market feeds and users write numbers Argentine-style ("22,1", "$ 1.180,50") as often
as dot-decimal. Parsing never raises: an unusable string is ``None`` and callers
degrade the affected metric instead of failing.
"""

from __future__ import annotations

import math
import re
from datetime import date

_NOT_NUMERIC = re.compile(r"[^0-9.,]")
_NOT_DIGIT = re.compile(r"\D")
_SEPARATOR = re.compile(r"[.,]")
_LEADING_MINUS = re.compile(r"^\s*[-−]")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _normalize_separators(cleaned: str) -> str:
    positions = [m.start() for m in _SEPARATOR.finditer(cleaned)]
    if len(positions) <= 1:
        # A lone comma is the decimal mark
        return cleaned.replace(",", ".", 1)
    # Several separators: the last one is the decimal mark, the rest group thousands
    last = positions[-1]
    integer = _SEPARATOR.sub("", cleaned[:last])
    return f"{integer}.{cleaned[last + 1:]}"


def parse_locale_number(raw: str | None) -> float | None:
    """Parse a locale-formatted numeric string into a non-negative float.

    Everything except digits, ``.`` and ``,`` is discarded, so currency symbols,
    percent signs and minus signs are ignored. Use :func:`parse_signed_number` for
    fields that carry a sign.

    Args:
        raw: Input text, e.g. ``"22,1"``, ``"$ 1.180,50"`` or ``"0.35%"``

    Returns:
        The parsed value clamped to ``>= 0``, or ``None`` when nothing numeric remains
    """
    if raw is None:
        return None
    cleaned = _NOT_NUMERIC.sub("", str(raw))
    if not any(ch.isdigit() for ch in cleaned):
        return None
    try:
        value = float(_normalize_separators(cleaned))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return max(0.0, value)


def parse_signed_number(raw: str | None) -> float | None:
    """Like :func:`parse_locale_number`, but keeps a leading minus sign."""
    value = parse_locale_number(raw)
    if value is None:
        return None
    if value and _LEADING_MINUS.match(str(raw)):
        return -value
    return value


def parse_whole_number(raw: str | None) -> int | None:
    """Parse an amount typed as a whole number, ignoring every non-digit.

    Capital, horizon days and peso hurdles are entered with thousands separators
    (``"1.000.000"``, ``"$ 1,000,000"``), never with decimals. A leading minus is
    kept so callers can clamp it instead of silently flipping the sign.
    """
    if raw is None:
        return None
    digits = _NOT_DIGIT.sub("", str(raw))
    if not digits:
        return None
    value = int(digits)
    if value and _LEADING_MINUS.match(str(raw)):
        return -value
    return value


def format_decimal_comma(value: float, decimals: int = 2) -> str:
    """Format a number with a decimal comma and no grouping: 22.1 -> "22,10"."""
    return f"{value:.{decimals}f}".replace(".", ",")


def parse_iso_date(raw: str | None) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string as a calendar date (no timezone shift)."""
    if not raw:
        return None
    match = _ISO_DATE.match(raw.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None
