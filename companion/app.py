"""FastAPI application — HTTP + WebSocket endpoints for the student companion.

Endpoints:

  GET    /health                          Health check
  GET    /api/mood/questions              Questionnaire text
  POST   /api/mood                        Score answers (and save for a user)
  GET    /api/mood/{uid}/latest           Last saved check-in
  GET    /api/dashboard/{uid}             Quote + last mood
  POST   /api/chat                        One chat turn
  DELETE /api/chat/{id}                   End a chat session
  GET    /api/flights                     Flight search
  GET    /api/hotels                      Hotel listings
  POST   /api/payment/create-order        Payment order handle
  GET    /api/bookings                    Active bookings
  POST   /api/bookings                    Open a booking (→ review)
  GET    /api/bookings/{id}               Booking state
  PATCH  /api/bookings/{id}/passenger     Edit passenger details
  POST   /api/bookings/{id}/process       Validate and start processing
  DELETE /api/bookings/{id}               Close the booking
  WS     /ws/bookings/{id}                Live booking events
"""

from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import asyncio
import logging
import time
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from companion.booking.controller import (
    BookingController,
    get_active_bookings,
    get_booking,
    register_booking,
    unregister_booking,
)
from companion.chat.session import ChatSession, get_chat, register_chat, unregister_chat
from companion.config import settings
from companion.dashboard import daily_quote, mood_summary
from companion.errors import BookingStateError, BookingValidationError, ProviderError
from companion.models.booking import ItemType
from companion.models.mood import MoodResult, MoodSubmission
from companion.mood import QUESTIONS, submit_mood
from companion.providers.base import (
    FlightSearchProvider,
    HotelProvider,
    LLMProvider,
    MoodStore,
    PaymentGateway,
    PlacesProvider,
    VideoSearchProvider,
)
from companion.providers.llm import AnthropicLLM
from companion.providers.places import GooglePlaces
from companion.providers.store import InMemoryMoodStore, JsonlMoodStore
from companion.providers.travel import BackendFlights, BackendHotels, BackendPayments
from companion.providers.youtube import YouTubeSearch

log = logging.getLogger("companion.app")

_START_TIME = time.time()

DEFAULT_HOTEL_CITY = "Mumbai"


class ChatRequest(BaseModel):
    message: str
    session_id: Optional[str] = None


class OpenBookingRequest(BaseModel):
    item_type: ItemType
    item: dict[str, Any]


class PassengerUpdate(BaseModel):
    """Partial passenger edit; only the keys sent are applied."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    meal_preference: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None


class PaymentRequest(BaseModel):
    amount: int = Field(gt=0)


def _default_mood_store() -> MoodStore:
    if settings.mood_store_path:
        return JsonlMoodStore(settings.mood_store_path)
    return InMemoryMoodStore()


def _require_booking(booking_id: str) -> BookingController:
    booking = get_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def create_app(
    llm: Optional[LLMProvider] = None,
    videos: Optional[VideoSearchProvider] = None,
    places: Optional[PlacesProvider] = None,
    flights: Optional[FlightSearchProvider] = None,
    hotels: Optional[HotelProvider] = None,
    payments: Optional[PaymentGateway] = None,
    mood_store: Optional[MoodStore] = None,
    tick_interval: Optional[float] = -1,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Providers default to the HTTP implementations configured in settings;
    tests pass fakes.  ``tick_interval`` of -1 means the configured
    interval; ``None`` leaves the booking countdown to manual ticks.
    """
    app = FastAPI(
        title="Student Companion",
        description="Mood check-ins, chat companion and travel booking",
        version="0.1.0",
    )

    for warning in settings.validate_startup():
        log.warning(warning)

    llm = llm or AnthropicLLM()
    videos = videos or YouTubeSearch()
    places = places or GooglePlaces()
    flights = flights or BackendFlights()
    hotels = hotels or BackendHotels()
    payments = payments or BackendPayments()
    store = mood_store or _default_mood_store()
    if tick_interval == -1:
        tick_interval = settings.booking_tick_interval

    @app.exception_handler(BookingStateError)
    async def _state_error(request, exc: BookingStateError) -> JSONResponse:
        return JSONResponse({"error": str(exc)}, status_code=409)

    @app.exception_handler(BookingValidationError)
    async def _validation_error(request, exc: BookingValidationError) -> JSONResponse:
        return JSONResponse({"error": str(exc), "missing": exc.missing}, status_code=422)

    @app.exception_handler(ProviderError)
    async def _provider_error(request, exc: ProviderError) -> JSONResponse:
        log.error("External call failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=502)

    # ── Health check ───────────────────────────────────────────

    @app.get("/health")
    async def health() -> JSONResponse:
        uptime = round(time.time() - _START_TIME, 1)
        return JSONResponse({"status": "ok", "uptime": uptime})

    # ── Mood ───────────────────────────────────────────────────

    @app.get("/api/mood/questions")
    async def mood_questions() -> dict:
        return {"questions": QUESTIONS}

    @app.post("/api/mood", response_model=MoodResult)
    async def post_mood(body: MoodSubmission) -> MoodResult:
        return await submit_mood(body.answers, uid=body.uid, store=store)

    @app.get("/api/mood/{uid}/latest")
    async def latest_mood(uid: str) -> JSONResponse:
        entry = await store.latest(uid)
        if entry is None:
            return JSONResponse({"error": "No mood entries"}, status_code=404)
        return JSONResponse(entry.model_dump(mode="json", by_alias=True))

    @app.get("/api/dashboard/{uid}")
    async def dashboard(uid: str) -> dict:
        return {"quote": daily_quote(), "lastMood": await mood_summary(store, uid)}

    # ── Chat ───────────────────────────────────────────────────

    @app.post("/api/chat")
    async def chat(body: ChatRequest) -> JSONResponse:
        if not body.message.strip():
            return JSONResponse({"error": "Message must not be empty"}, status_code=400)

        session = get_chat(body.session_id) if body.session_id else None
        if session is None:
            session = ChatSession(llm=llm, videos=videos, places=places)
            register_chat(session)

        reply = await session.handle_message(body.message)
        return JSONResponse({
            "session_id": session.session_id,
            "reply": reply.model_dump(mode="json"),
        })

    @app.delete("/api/chat/{session_id}")
    async def end_chat(session_id: str) -> JSONResponse:
        if get_chat(session_id) is None:
            return JSONResponse({"error": "Chat session not found"}, status_code=404)
        unregister_chat(session_id)
        return JSONResponse({"session_id": session_id, "ended": True})

    # ── Travel search & payment ────────────────────────────────

    @app.get("/api/flights")
    async def search_flights(
        origin: str = Query(default="", alias="from"),
        destination: str = Query(default="", alias="to"),
        date: str = "",
    ) -> JSONResponse:
        if not origin or not destination:
            return JSONResponse(
                {"error": "Please enter both From and To cities"}, status_code=400,
            )
        results = await flights.search(origin, destination, date)
        return JSONResponse([f.model_dump(mode="json", by_alias=True) for f in results])

    @app.get("/api/hotels")
    async def list_hotels(city: str = "") -> JSONResponse:
        results = await hotels.list_hotels(city or DEFAULT_HOTEL_CITY)
        return JSONResponse([h.model_dump(mode="json") for h in results])

    @app.post("/api/payment/create-order")
    async def create_order(body: PaymentRequest) -> JSONResponse:
        order = await payments.create_order(body.amount)
        data = order.model_dump()
        data["key"] = settings.razorpay_key_id
        return JSONResponse(data)

    # ── Bookings ───────────────────────────────────────────────

    @app.get("/api/bookings")
    async def list_bookings() -> JSONResponse:
        bookings = get_active_bookings()
        return JSONResponse({
            "bookings": [b.to_dict() for b in bookings.values()],
            "count": len(bookings),
        })

    @app.post("/api/bookings", status_code=201)
    async def open_booking(body: OpenBookingRequest) -> JSONResponse:
        booking = BookingController(tick_interval=tick_interval)
        booking_id = register_booking(booking)
        try:
            booking.open_booking(body.item, body.item_type)
        except ValidationError as e:
            unregister_booking(booking_id)
            return JSONResponse({"error": "Invalid item", "detail": e.errors()}, status_code=422)
        return JSONResponse(booking.to_dict(), status_code=201)

    @app.get("/api/bookings/{booking_id}")
    async def get_booking_state(booking_id: str) -> JSONResponse:
        return JSONResponse(_require_booking(booking_id).to_dict(detail=True))

    @app.patch("/api/bookings/{booking_id}/passenger")
    async def update_passenger(booking_id: str, body: PassengerUpdate) -> JSONResponse:
        booking = _require_booking(booking_id)
        try:
            booking.update_passenger(**body.model_dump(exclude_unset=True))
        except ValidationError as e:
            return JSONResponse({"error": "Invalid passenger details", "detail": e.errors()},
                                status_code=422)
        return JSONResponse(booking.to_dict())

    @app.post("/api/bookings/{booking_id}/process")
    async def process_booking(booking_id: str) -> JSONResponse:
        booking = _require_booking(booking_id)
        booking.process_booking()
        return JSONResponse(booking.to_dict())

    @app.delete("/api/bookings/{booking_id}")
    async def close_booking(booking_id: str) -> JSONResponse:
        booking = _require_booking(booking_id)
        booking.close_booking()
        unregister_booking(booking_id)
        return JSONResponse({"booking_id": booking_id, "state": booking.state.value})

    @app.websocket("/ws/bookings/{booking_id}")
    async def booking_events(websocket: WebSocket, booking_id: str) -> None:
        """Send the booking snapshot, then stream its events until the client leaves."""
        booking = get_booking(booking_id)
        if booking is None:
            await websocket.close(code=4004, reason="Booking not found")
            return

        queue = booking.events.subscribe()
        await websocket.accept()

        async def wait_disconnect() -> None:
            while (await websocket.receive())["type"] != "websocket.disconnect":
                pass

        closed = asyncio.create_task(wait_disconnect())
        try:
            while not closed.done():
                getter = asyncio.create_task(queue.get())
                done, _ = await asyncio.wait(
                    {getter, closed}, return_when=asyncio.FIRST_COMPLETED,
                )
                if getter in done:
                    await websocket.send_json(getter.result())
                else:
                    getter.cancel()
        except WebSocketDisconnect:
            pass
        except Exception as e:
            log.warning("Event stream error for %s: %s", booking_id, e)
        finally:
            closed.cancel()
            booking.events.unsubscribe(queue)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "companion.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
