"""Nearby place search (Google Places text search over httpx)."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import quote_plus

import httpx

from companion.config import settings
from companion.errors import SearchError
from companion.models.chat import Place
from companion.providers.base import PlacesProvider

log = logging.getLogger("companion.providers.places")

TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"

# place type → words that signal it; checked in order
PLACE_KEYWORDS: dict[str, list[str]] = {
    "gym": ["gym", "fitness", "workout"],
    "library": ["library", "libraries", "study space"],
    "cafe": ["cafe", "coffee"],
    "hospital": ["hospital", "clinic", "doctor"],
    "pharmacy": ["pharmacy", "chemist", "medical store"],
    "park": ["park", "garden"],
    "restaurant": ["restaurant", "food", "eat"],
    "atm": ["atm", "cash"],
    "bookstore": ["bookstore", "book shop", "stationery"],
    "coaching": ["coaching", "tuition"],
}


def detect_place_type(text: str) -> Optional[str]:
    """Return the place type mentioned in ``text``, or None."""
    lower = text.lower()
    for place_type, words in PLACE_KEYWORDS.items():
        for word in words:
            if re.search(r"\b" + re.escape(word), lower):
                return place_type
    return None


class GooglePlaces(PlacesProvider):
    def __init__(
        self,
        api_key: Optional[str] = None,
        location: Optional[str] = None,
        max_results: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.places_api_key
        self._location = location or settings.places_default_location
        self._max_results = max_results or settings.places_max_results
        self._transport = transport

    async def search_nearby(self, place_type: str) -> list[Place]:
        if not self._api_key:
            raise SearchError("Places search is not configured (PLACES_API_KEY missing).")

        params = {"query": f"{place_type} near {self._location}", "key": self._api_key}
        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout, transport=self._transport,
            ) as client:
                resp = await client.get(TEXT_SEARCH_URL, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise SearchError("Places search failed. Please try again.") from exc

        results = data.get("results", []) if isinstance(data, dict) else []
        places: list[Place] = []
        for r in results[: self._max_results]:
            if not isinstance(r, dict) or not r.get("name"):
                continue
            place_id = r.get("place_id", "")
            places.append(Place(
                name=r["name"],
                type=place_type,
                address=r.get("formatted_address", ""),
                rating=r.get("rating"),
                maps_url=(
                    "https://www.google.com/maps/search/?api=1"
                    f"&query={quote_plus(r['name'])}&query_place_id={place_id}"
                ),
            ))

        log.info("Places search '%s': %d results", place_type, len(places))
        return places
