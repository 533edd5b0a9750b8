"""Boarding pass / booking confirmation generation."""

from __future__ import annotations

import random
from datetime import date as _date
from typing import Optional

from companion.models.booking import BoardingPass, BookingSelection, PassengerDetails
from companion.models.travel import Flight


def airport_code(city: str) -> str:
    """Three-letter code from a city name: "Mumbai" → "MUM"."""
    return city.strip()[:3].upper()


def generate_boarding_pass(
    selection: BookingSelection,
    passenger: PassengerDetails,
    rng: Optional[random.Random] = None,
) -> BoardingPass:
    """Build the confirmation for a completed booking.

    Gate and seat are random on every call (``A1``-``A20``, ``1F``-``30F``).
    """
    rng = rng or random.Random()

    bp = BoardingPass(
        passenger_name=passenger.name,
        date=passenger.date or _date.today().isoformat(),
        gate=f"A{rng.randint(1, 20)}",
        seat=f"{rng.randint(1, 30)}F",
        meal_preference=passenger.meal_preference,
        item_type=selection.item_type,
        item_name=selection.item_name,
    )

    item = selection.item
    if isinstance(item, Flight):
        bp.departure = item.departure
        bp.arrival = item.arrival
        bp.from_code = airport_code(item.origin)
        bp.to_code = airport_code(item.destination)

    return bp
