"""Pydantic models for the booking flow."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from .travel import Flight, Hotel


class BookingState(str, Enum):
    NONE = "none"
    REVIEW = "review"
    PROCESSING = "processing"
    SUCCESS = "success"


class ItemType(str, Enum):
    FLIGHT = "flight"
    HOTEL = "hotel"


class BookingSelection(BaseModel):
    """The item being purchased in one booking attempt."""

    item_type: ItemType
    item: Union[Flight, Hotel]
    price: int

    @property
    def item_name(self) -> str:
        if isinstance(self.item, Flight):
            return f"{self.item.airline} {self.item.flight_number}"
        return self.item.name


class PassengerDetails(BaseModel):
    """Traveller details entered during review.

    Fields are edited while the booking is in review and frozen once
    processing begins.
    """

    name: str = ""
    age: Optional[int] = None
    gender: str = "male"
    meal_preference: str = "veg"
    email: str = ""
    phone: str = ""
    date: str = ""  # travel date, YYYY-MM-DD; empty means today


class BoardingPass(BaseModel):
    """Confirmation artifact generated when a booking succeeds."""

    passenger_name: str
    date: str
    gate: str  # "A1".."A20"
    seat: str  # "1F".."30F"
    meal_preference: str
    item_type: ItemType
    item_name: str
    departure: Optional[str] = None
    arrival: Optional[str] = None
    from_code: Optional[str] = None
    to_code: Optional[str] = None
