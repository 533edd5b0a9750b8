"""Pydantic records returned by the flight, hotel and payment APIs."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Flight(BaseModel):
    """One flight search result."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    airline: str
    flight_number: str = Field(alias="flightNumber")
    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    departure: str  # HH:MM
    arrival: str  # HH:MM
    duration: str = ""
    price: int  # INR
    seats: int = 0


class Hotel(BaseModel):
    """One hotel listing."""

    id: str
    name: str
    location: str
    price: int  # INR per night
    rating: Optional[float] = None


class PaymentOrder(BaseModel):
    """Order handle returned by the payment gateway."""

    id: str
    amount: int
    currency: str = "INR"
