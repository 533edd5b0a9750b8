"""Abstract base classes for the external services the companion talks to.

Each third-party backend (LLM, video search, places, flight/hotel search,
payment gateway, mood history store) implements one of these ABCs so the
chat session, booking flow and API layer never depend on a concrete client.
"""

from abc import ABC, abstractmethod
from typing import Optional

from companion.models.chat import Place, Video
from companion.models.mood import MoodEntry
from companion.models.travel import Flight, Hotel, PaymentOrder


class LLMProvider(ABC):
    """Free-text completion backend used for general chat replies."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return the assistant's reply to ``prompt``."""


class VideoSearchProvider(ABC):
    @abstractmethod
    async def search(self, query: str) -> list[Video]:
        """Return videos matching ``query``, best match first."""


class PlacesProvider(ABC):
    @abstractmethod
    async def search_nearby(self, place_type: str) -> list[Place]:
        """Return places of ``place_type`` near the user."""


class FlightSearchProvider(ABC):
    @abstractmethod
    async def search(self, origin: str, destination: str, date: str = "") -> list[Flight]:
        """Return flights between two cities.

        Args:
            origin: Departure city name.
            destination: Arrival city name.
            date: Travel date ``YYYY-MM-DD``; empty means any date.

        Returns:
            Ordered list of Flight records.
        """


class HotelProvider(ABC):
    @abstractmethod
    async def list_hotels(self, city: str) -> list[Hotel]:
        """Return hotels in ``city``. A malformed response is an empty list."""


class PaymentGateway(ABC):
    @abstractmethod
    async def create_order(self, amount: int) -> PaymentOrder:
        """Create a payment order for ``amount`` and return its handle.

        Raises:
            PaymentError: the gateway rejected the request.
        """


class MoodStore(ABC):
    """Append-only history of mood check-ins."""

    @abstractmethod
    async def append(self, entry: MoodEntry) -> None:
        """Persist one entry."""

    @abstractmethod
    async def history(self, uid: str, limit: int = 10) -> list[MoodEntry]:
        """Return up to ``limit`` entries for ``uid``, newest first."""

    async def latest(self, uid: str) -> Optional[MoodEntry]:
        entries = await self.history(uid, limit=1)
        return entries[0] if entries else None
