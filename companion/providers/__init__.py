"""External service abstractions and their HTTP implementations."""

from .base import (
    FlightSearchProvider,
    HotelProvider,
    LLMProvider,
    MoodStore,
    PaymentGateway,
    PlacesProvider,
    VideoSearchProvider,
)

__all__ = [
    "FlightSearchProvider",
    "HotelProvider",
    "LLMProvider",
    "MoodStore",
    "PaymentGateway",
    "PlacesProvider",
    "VideoSearchProvider",
]
