"""HTTP clients for the travel backend: flights, hotels and payment orders.

All three talk to the same backend (``settings.backend_url``)::

    GET  /flights?from=&to=&date=     → [Flight, ...]
    GET  /hotels?city=                → [Hotel, ...]
    POST /payment/create-order        → {id, amount, currency}

Search responses are validated at this boundary. A body that is not a JSON
array is treated as "no results"; array entries that do not fit the record
shape are skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from companion.config import settings
from companion.errors import PaymentError, SearchError
from companion.models.travel import Flight, Hotel, PaymentOrder
from companion.providers.base import FlightSearchProvider, HotelProvider, PaymentGateway

log = logging.getLogger("companion.providers.travel")

RecordT = TypeVar("RecordT", bound=BaseModel)


def coerce_records(data: Any, model: type[RecordT]) -> list[RecordT]:
    """Validate a decoded JSON body into a list of ``model`` records."""
    if not isinstance(data, list):
        log.error("Invalid %s data (expected a list): %.200r", model.__name__, data)
        return []

    records: list[RecordT] = []
    for item in data:
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            log.warning("Skipping malformed %s record: %s", model.__name__, e.errors()[:1])
    return records


class _BackendClient:
    """Shared httpx plumbing for the backend API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.backend_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport,
        )

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        try:
            async with self._client() as client:
                resp = await client.get(path, params=params)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            raise SearchError(
                f"Search failed (status {exc.response.status_code}). Please try again."
            ) from exc
        except httpx.HTTPError as exc:
            raise SearchError("The search service is unavailable. Please try again.") from exc
        except ValueError:
            # Body was not JSON at all
            log.error("Non-JSON response from %s", path)
            return None


class BackendFlights(_BackendClient, FlightSearchProvider):
    async def search(self, origin: str, destination: str, date: str = "") -> list[Flight]:
        params = {"from": origin, "to": destination}
        if date:
            params["date"] = date
        data = await self._get_json("/flights", params)
        flights = coerce_records(data, Flight)
        log.info("Flight search %s → %s (%s): %d results",
                 origin, destination, date or "any date", len(flights))
        return flights


class BackendHotels(_BackendClient, HotelProvider):
    async def list_hotels(self, city: str) -> list[Hotel]:
        data = await self._get_json("/hotels", {"city": city})
        hotels = coerce_records(data, Hotel)
        log.info("Hotel search in %s: %d results", city, len(hotels))
        return hotels


class BackendPayments(_BackendClient, PaymentGateway):
    async def create_order(self, amount: int) -> PaymentOrder:
        try:
            async with self._client() as client:
                resp = await client.post("/payment/create-order", json={"amount": amount})
        except httpx.HTTPError as exc:
            log.error("Payment order request failed: %s", exc)
            raise PaymentError("Failed to initiate payment. Please try again.") from exc

        if not resp.is_success:
            log.error("Payment order rejected: status %d", resp.status_code)
            raise PaymentError("Failed to create order")

        try:
            order = PaymentOrder.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise PaymentError("Payment gateway returned an invalid order") from exc

        log.info("Payment order %s created for %d %s", order.id, order.amount, order.currency)
        return order
