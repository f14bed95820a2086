"""Rental price for a selected duration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from shared.domain.value_objects import Money


class PriceUnit(str, Enum):
    HOUR = "hour"
    DAY = "day"
    SESSION = "session"


@dataclass(frozen=True)
class PriceTerms:
    unit_price: Decimal
    price_unit: PriceUnit
    currency: str = "USD"

    def quote(self, duration_minutes: int) -> Money:
        return quote(self.unit_price, self.price_unit, duration_minutes, self.currency)


def quote(unit_price, price_unit, duration_minutes: int, currency: str = "USD") -> Money:
    """Hourly prices scale with duration; day and session prices are flat."""

    price = Money(Decimal(str(unit_price)), currency)
    if PriceUnit(price_unit) is PriceUnit.HOUR:
        return (price * (Decimal(duration_minutes) / Decimal(60))).rounded()
    return price.rounded()
