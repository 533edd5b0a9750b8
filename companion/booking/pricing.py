"""Fare breakdown: 18% tax rounded half-up to whole rupees."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from companion.config import settings


class PriceBreakdown(BaseModel):
    price: int
    taxes: int
    total: int


def taxes(price: int, rate: float | None = None) -> int:
    """Tax on ``price``: 8500 → 1530, 12000 → 2160."""
    rate = settings.booking_tax_rate if rate is None else rate
    # str() keeps the rate exact, e.g. 0.18 rather than 0.179999...
    amount = Decimal(price) * Decimal(str(rate))
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def total(price: int, rate: float | None = None) -> int:
    return price + taxes(price, rate)


def breakdown(price: int, rate: float | None = None) -> PriceBreakdown:
    t = taxes(price, rate)
    return PriceBreakdown(price=price, taxes=t, total=price + t)
