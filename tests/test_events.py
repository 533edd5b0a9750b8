"""Tests for booking event streams — snapshot on subscribe, fan-out, bounded history."""

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from companion.booking.controller import BookingController
from companion.events import BookingEventStream, make_event
from companion.models.travel import Hotel

HOTEL = Hotel(id="1", name="Taj", location="Mumbai", price=8500)


def _stream(**kwargs) -> BookingEventStream:
    return BookingEventStream(
        lambda: make_event("snapshot", "bk-1", "review", {"remaining": 15}), **kwargs,
    )


def _drain(q) -> list:
    events = []
    while not q.empty():
        events.append(q.get_nowait())
    return events


class TestBookingEventStream:
    def test_subscribe_starts_with_snapshot(self):
        q = _stream().subscribe()
        event = q.get_nowait()
        assert event["type"] == "snapshot"
        assert event["data"] == {"remaining": 15}
        assert q.empty()

    def test_publish_reaches_every_subscriber(self):
        stream = _stream()
        q1, q2 = stream.subscribe(), stream.subscribe()
        stream.publish(make_event("tick", "bk-1", "processing", {"remaining": 14}))

        assert [e["type"] for e in _drain(q1)] == ["snapshot", "tick"]
        assert [e["type"] for e in _drain(q2)] == ["snapshot", "tick"]

    def test_unsubscribe(self):
        stream = _stream()
        q = stream.subscribe()
        stream.unsubscribe(q)
        stream.publish(make_event("tick", "bk-1", "processing", {}))
        assert [e["type"] for e in _drain(q)] == ["snapshot"]

    def test_full_queue_drops_oldest(self):
        stream = _stream(queue_size=2)
        q = stream.subscribe()
        for remaining in (3, 2):
            stream.publish(make_event("tick", "bk-1", "processing", {"remaining": remaining}))

        assert [e["data"]["remaining"] for e in _drain(q)] == [3, 2]

    def test_recent_is_bounded(self):
        stream = _stream(keep=3)
        for remaining in range(10, 0, -1):
            stream.publish(make_event("tick", "bk-1", "processing", {"remaining": remaining}))

        assert [e["data"]["remaining"] for e in stream.recent()] == [3, 2, 1]


class TestControllerEvents:
    def test_full_flow_event_sequence(self):
        booking = BookingController(countdown=2)
        q = booking.events.subscribe()

        booking.open_booking(HOTEL, "hotel")
        booking.update_passenger(name="Asha", age=20, email="a@b.co", phone="12345")
        booking.process_booking()
        booking.tick()
        booking.tick()

        events = _drain(q)
        assert [e["type"] for e in events] == [
            "snapshot",
            "transition",        # none → review
            "passenger_update",
            "transition",        # review → processing
            "tick",
            "tick",
            "transition",        # processing → success
        ]
        assert events[-1]["data"] == {"from": "processing", "to": "success"}
        assert events[-1]["state"] == "success"

    def test_snapshot_reflects_countdown(self):
        booking = BookingController(countdown=5)
        booking.open_booking(HOTEL, "hotel")
        booking.update_passenger(name="Asha", age=20, email="a@b.co", phone="12345")
        booking.process_booking()
        booking.tick()
        booking.tick()

        snapshot = booking.events.subscribe().get_nowait()
        assert snapshot["state"] == "processing"
        assert snapshot["data"]["remaining"] == 3
        assert snapshot["data"]["price"] == {"price": 8500, "taxes": 1530, "total": 10030}

    def test_long_countdown_keeps_bounded_history(self):
        booking = BookingController(countdown=200)
        booking.open_booking(HOTEL, "hotel")
        booking.update_passenger(name="Asha", age=20, email="a@b.co", phone="12345")
        booking.process_booking()
        for _ in range(200):
            booking.tick()

        recent = booking.events.recent()
        assert len(recent) == 50
        assert recent[-1]["data"] == {"from": "processing", "to": "success"}
