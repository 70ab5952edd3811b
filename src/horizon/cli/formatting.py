"""Display formatting in Argentine conventions (es-AR)."""

from __future__ import annotations

import math
from datetime import date

from horizon.domain.models.market import ExchangeRateQuote
from horizon.domain.services.rates import to_usd

_WEEKDAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")
NOT_AVAILABLE = "—"


def _group(value: float, decimals: int) -> str:
    # "1,234,567.89" -> "1.234.567,89"
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_money(amount: float | None, usd_quote: ExchangeRateQuote | None = None) -> str:
    """ARS amount, or its USD equivalent at the official sell rate when a quote is given."""
    if amount is None or not math.isfinite(amount):
        return NOT_AVAILABLE
    if usd_quote is not None:
        usd = to_usd(amount, usd_quote)
        return NOT_AVAILABLE if usd is None else f"US$ {_group(usd, 2)}"
    return f"$ {_group(amount, 2)}"


def format_pct(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return NOT_AVAILABLE
    if math.isinf(value):
        return "unattainable"
    return f"{_group(value, decimals)}%"


def format_number(value: float | None, decimals: int = 4) -> str:
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    return _group(value, decimals)


def format_date_es(value: date | None) -> str:
    """``Viernes, 16/01/2026``."""
    if value is None:
        return NOT_AVAILABLE
    weekday = _WEEKDAYS[value.weekday()].capitalize()
    return f"{weekday}, {value:%d/%m/%Y}"
