"""Base classes and coercion helpers for domain models."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value object compared by value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def coerce_float(value: Any) -> float | None:
    """Coerce a loosely-typed feed value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def non_negative(value: Any) -> float:
    """Clamp a user-supplied value to a finite, non-negative float (0.0 otherwise)."""
    number = coerce_float(value)
    if number is None:
        return 0.0
    return max(0.0, number)
