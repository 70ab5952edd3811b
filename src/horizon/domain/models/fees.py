"""Fee schedules and placement positions."""

from typing import Any

from pydantic import Field, field_validator

from horizon.domain.models.base import ValueObject, non_negative


class FeeConfig(ValueObject):
    """Caución fee schedule, all values in percent (0.15 means 0.15%)."""

    broker_commission_pct: float = Field(default=0.0, description="Broker commission (%)")
    iva_pct: float = Field(default=0.0, description="VAT applied on the commission (%)")
    other_costs_pct: float = Field(default=0.0, description="Market and custody costs (%)")

    @field_validator("broker_commission_pct", "iva_pct", "other_costs_pct", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return non_negative(value)


class LecapFeeConfig(ValueObject):
    """Commission charged on LECAP purchases, in percent of price."""

    broker_pct: float = Field(default=0.0, description="Purchase commission (%)")

    @field_validator("broker_pct", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return non_negative(value)


class Position(ValueObject):
    """Capital placed for a number of days at an annual (TNA) rate."""

    capital: float = Field(default=0.0, description="Capital in ARS")
    days: float = Field(default=0.0, description="Placement length in days")
    instrument_rate_pct: float = Field(default=0.0, description="Instrument TNA (%)")

    @field_validator("capital", "days", "instrument_rate_pct", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return non_negative(value)
