"""Live event stream owned by each booking.

A subscriber first receives a ``snapshot`` of where the booking is now
(state, remaining ticks, price), then every event the booking publishes
after that.  The stream also keeps the last few events so the REST view
can show recent activity without a socket.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Callable, TypedDict

log = logging.getLogger("companion.events")

RECENT_EVENTS = 50
QUEUE_SIZE = 100


class BookingEvent(TypedDict):
    type: str          # snapshot | transition | tick | validation_error | passenger_update
    timestamp: float
    booking_id: str
    state: str
    data: dict


def make_event(event_type: str, booking_id: str, state: str, data: dict) -> BookingEvent:
    return {
        "type": event_type,
        "timestamp": time.time(),
        "booking_id": booking_id,
        "state": state,
        "data": data,
    }


class BookingEventStream:
    def __init__(
        self,
        snapshot: Callable[[], BookingEvent],
        keep: int = RECENT_EVENTS,
        queue_size: int = QUEUE_SIZE,
    ) -> None:
        self._snapshot = snapshot
        self._queue_size = queue_size
        self._recent: deque[BookingEvent] = deque(maxlen=keep)
        self._queues: list[asyncio.Queue[BookingEvent]] = []

    def subscribe(self) -> asyncio.Queue[BookingEvent]:
        """New queue primed with the booking's current snapshot."""
        q: asyncio.Queue[BookingEvent] = asyncio.Queue(maxsize=self._queue_size)
        q.put_nowait(self._snapshot())
        self._queues.append(q)
        return q

    def unsubscribe(self, q: asyncio.Queue[BookingEvent]) -> None:
        if q in self._queues:
            self._queues.remove(q)

    def publish(self, event: BookingEvent) -> None:
        self._recent.append(event)
        for q in self._queues:
            if q.full():
                # Slow socket: ticks are superseded by newer ones anyway
                q.get_nowait()
                log.debug("Dropped oldest event for booking %s", event["booking_id"])
            q.put_nowait(event)

    def recent(self) -> list[BookingEvent]:
        return list(self._recent)
