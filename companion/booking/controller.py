"""Booking flow controller: drives one flight or hotel purchase.

States and the only allowed moves::

    none ──open_booking──▶ review ──process_booking──▶ processing
      ▲                      │                            │ countdown hits 0
      └──── close_booking ◀──┴──────────── success ◀──────┘

``process_booking`` validates the passenger details and stays in review on
failure.  Entering processing starts a fresh CountdownTimer; when it expires
the booking moves to success and a boarding pass is generated.  Closing from
any state cancels the timer, so a closed booking can never jump to success.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Optional, Union

from companion.booking.boarding_pass import generate_boarding_pass
from companion.booking.pricing import PriceBreakdown, breakdown
from companion.booking.timer import CountdownTimer
from companion.config import settings
from companion.errors import BookingStateError, BookingValidationError
from companion.events import BookingEvent, BookingEventStream, make_event
from companion.models.booking import (
    BoardingPass,
    BookingSelection,
    BookingState,
    ItemType,
    PassengerDetails,
)
from companion.models.travel import Flight, Hotel
from companion.registry import Registry

log = logging.getLogger("companion.booking")

REQUIRED_FIELDS = ("name", "age", "email", "phone")

_TRANSITIONS: dict[BookingState, set[BookingState]] = {
    BookingState.NONE: {BookingState.REVIEW},
    BookingState.REVIEW: {BookingState.PROCESSING, BookingState.NONE},
    BookingState.PROCESSING: {BookingState.SUCCESS, BookingState.NONE},
    BookingState.SUCCESS: {BookingState.NONE},
}

StateListener = Callable[[BookingState, BookingState], None]


def mask_contact(value: str) -> str:
    """Mask an email or phone number for logs: ``as***@example.com``, ``******3210``."""
    if len(value) <= 4:
        return "***"
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{local[:2]}***@{domain}"
    return "*" * (len(value) - 4) + value[-4:]


def missing_fields(passenger: PassengerDetails) -> list[str]:
    """Required fields that are empty. Gender always has a default."""
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(passenger, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


# ── Booking registry ─────────────────────────────────────────────

_bookings: Registry[BookingController] = Registry(
    "booking",
    max_entries=settings.registry_max_entries,
    idle_ttl=settings.registry_idle_ttl,
    on_evict=lambda booking: booking.discard(),
)


def register_booking(booking: BookingController) -> str:
    """Register a booking and return its unique ID."""
    booking_id = _bookings.add(booking)
    booking._booking_id = booking_id
    booking._created_at = time.time()
    log.info("Booking registered: %s (%d open)", booking_id, len(_bookings))
    return booking_id


def unregister_booking(booking_id: str) -> None:
    booking = _bookings.remove(booking_id)
    if booking is not None:
        booking.discard()
        log.info("Booking unregistered: %s", booking_id)


def get_active_bookings() -> dict[str, BookingController]:
    return _bookings.snapshot()


def get_booking(booking_id: str) -> Optional[BookingController]:
    return _bookings.get(booking_id)


class BookingController:
    """State machine for one user's booking attempts.

    Typical lifecycle::

        booking = BookingController(on_change=render)
        booking.open_booking(flight, "flight")
        booking.update_passenger(name="Asha", age=21, email=..., phone=...)
        booking.process_booking()       # → processing, countdown starts
        ...                             # 15 ticks later → success
        booking.boarding_pass
        booking.close_booking()         # → none

    With ``tick_interval`` set the countdown runs on the event loop;
    otherwise the owner calls :meth:`tick` once per time unit.
    """

    def __init__(
        self,
        countdown: Optional[int] = None,
        tick_interval: Optional[float] = None,
        on_change: Optional[StateListener] = None,
        on_tick: Optional[Callable[[int], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._countdown = countdown if countdown is not None else settings.booking_countdown
        if self._countdown <= 0:
            raise ValueError("countdown must be a positive number of ticks")
        self._tick_interval = tick_interval
        self._on_change = on_change
        self._on_tick = on_tick
        self._rng = rng

        # Registry metadata (set by register_booking)
        self._booking_id: str = ""
        self._created_at: float = 0.0

        self._state = BookingState.NONE
        self._selection: BookingSelection | None = None
        self._passenger = PassengerDetails()
        self._remaining = self._countdown
        self._timer: CountdownTimer | None = None
        self._boarding_pass: BoardingPass | None = None

        self._events = BookingEventStream(self._snapshot)

    # ── Public API ────────────────────────────────────────────

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def selection(self) -> BookingSelection | None:
        return self._selection

    @property
    def passenger(self) -> PassengerDetails:
        return self._passenger

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def timer(self) -> CountdownTimer | None:
        return self._timer

    @property
    def boarding_pass(self) -> BoardingPass | None:
        return self._boarding_pass

    @property
    def price(self) -> PriceBreakdown | None:
        if self._selection is None:
            return None
        return breakdown(self._selection.price)

    @property
    def events(self) -> BookingEventStream:
        return self._events

    def open_booking(
        self,
        item: Union[Flight, Hotel, dict],
        item_type: Union[ItemType, str],
    ) -> None:
        """Select an item and start reviewing it. Only valid from ``none``."""
        self._require(BookingState.NONE, "open a booking")

        item_type = ItemType(item_type)
        model = Flight if item_type == ItemType.FLIGHT else Hotel
        if isinstance(item, dict):
            item = model.model_validate(item)
        elif not isinstance(item, model):
            raise ValueError(f"{type(item).__name__} is not a {item_type.value}")

        self._selection = BookingSelection(item_type=item_type, item=item, price=item.price)
        self._passenger = PassengerDetails()
        self._boarding_pass = None
        self._remaining = self._countdown
        self._advance(BookingState.REVIEW)

    def update_passenger(self, **fields: Any) -> PassengerDetails:
        """Edit passenger details. Details are frozen outside review."""
        if self._state != BookingState.REVIEW:
            raise BookingStateError(
                f"Passenger details are locked while the booking is {self._state.value}"
            )

        unknown = set(fields) - set(PassengerDetails.model_fields)
        if unknown:
            raise ValueError(f"Unknown passenger fields: {', '.join(sorted(unknown))}")

        self._passenger = PassengerDetails.model_validate(
            {**self._passenger.model_dump(), **fields}
        )
        self._emit_event("passenger_update", {"fields": sorted(fields)})
        return self._passenger

    def process_booking(self) -> None:
        """Validate the passenger and start payment processing.

        Raises:
            BookingValidationError: a required field is empty; the booking
                stays in review.
        """
        self._require(BookingState.REVIEW, "process the booking")

        missing = missing_fields(self._passenger)
        if missing:
            log.info("Booking %s validation failed: missing %s", self._booking_id, missing)
            self._emit_event("validation_error", {"missing": missing})
            raise BookingValidationError(missing)

        log.info(
            "Processing booking %s for %s (%s)",
            self._booking_id,
            mask_contact(self._passenger.email),
            mask_contact(self._passenger.phone),
        )
        self._advance(BookingState.PROCESSING)
        self._start_timer()

    def tick(self) -> None:
        """Advance the countdown by one unit (no-op outside processing)."""
        if self._timer is not None:
            self._timer.tick()

    def close_booking(self) -> None:
        """Abandon or dismiss the booking from any active state."""
        if self._state == BookingState.NONE:
            raise BookingStateError("No booking is open")

        self._cancel_timer()
        self._selection = None
        self._passenger = PassengerDetails()
        self._boarding_pass = None
        self._remaining = self._countdown
        self._advance(BookingState.NONE)

    def discard(self) -> None:
        """Stop any running countdown before the booking is dropped."""
        self._cancel_timer()

    def to_dict(self, detail: bool = False) -> dict[str, Any]:
        """Serialize booking state for the API."""
        price = self.price
        data = {
            "booking_id": self._booking_id,
            "state": self._state.value,
            "created_at": self._created_at,
            "remaining": self._remaining,
            "selection": self._selection.model_dump(mode="json", by_alias=True)
            if self._selection else None,
            "passenger": self._passenger.model_dump(),
            "price": price.model_dump() if price else None,
            "boarding_pass": self._boarding_pass.model_dump(mode="json")
            if self._boarding_pass else None,
        }
        if detail:
            data["events"] = self._events.recent()
        return data

    # ── Internal: transitions ─────────────────────────────────

    def _require(self, expected: BookingState, action: str) -> None:
        if self._state != expected:
            raise BookingStateError(
                f"Cannot {action} while the booking is {self._state.value}"
            )

    def _advance(self, new_state: BookingState) -> None:
        old_state = self._state
        if new_state not in _TRANSITIONS[old_state]:
            raise BookingStateError(f"Illegal transition {old_state.value} → {new_state.value}")

        self._state = new_state
        log.info("Booking advance: %s → %s", old_state.value, new_state.value)
        self._emit_event("transition", {"from": old_state.value, "to": new_state.value})
        if self._on_change:
            self._on_change(old_state, new_state)

    def _emit_event(self, event_type: str, data: dict) -> None:
        self._events.publish(make_event(event_type, self._booking_id, self._state.value, data))

    def _snapshot(self) -> BookingEvent:
        price = self.price
        return make_event("snapshot", self._booking_id, self._state.value, {
            "remaining": self._remaining,
            "price": price.model_dump() if price else None,
        })

    # ── Internal: countdown ───────────────────────────────────

    def _start_timer(self) -> None:
        self._cancel_timer()
        self._remaining = self._countdown

        timer: CountdownTimer

        def handle_tick(remaining: int) -> None:
            if timer is not self._timer:
                return
            self._remaining = remaining
            self._emit_event("tick", {"remaining": remaining})
            if self._on_tick:
                self._on_tick(remaining)

        def handle_expire() -> None:
            # A timer replaced or cancelled since it started must not complete
            if timer is not self._timer or self._state != BookingState.PROCESSING:
                return
            self._complete()

        timer = CountdownTimer(self._countdown, on_expire=handle_expire, on_tick=handle_tick)
        self._timer = timer
        if self._tick_interval:
            timer.start(self._tick_interval)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _complete(self) -> None:
        assert self._selection is not None
        self._boarding_pass = generate_boarding_pass(
            self._selection, self._passenger, rng=self._rng,
        )
        self._timer = None
        self._advance(BookingState.SUCCESS)
