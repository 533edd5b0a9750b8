"""Per-user chat session: routes each message by intent to the right provider.

Routing::

    places   detected place type → nearby places      else → LLM
    career   "become a <career>" → career videos      else → LLM
    skill    "learn <skill>"     → tutorial videos    else → LLM
    exam     raw message         → exam prep videos
    general  → LLM

Any provider failure is logged and answered with a generic apology; the
session itself never raises for a failed external call.
"""

from __future__ import annotations

import logging
from typing import Optional

from companion.chat.intent import classify, extract_career, extract_skill
from companion.config import settings
from companion.errors import ProviderError
from companion.models.chat import ChatMessage, Intent, Place, Video
from companion.providers.base import LLMProvider, PlacesProvider, VideoSearchProvider
from companion.providers.places import detect_place_type
from companion.providers.youtube import career_query, skill_query
from companion.registry import Registry

log = logging.getLogger("companion.chat")

FALLBACK_REPLY = "Sorry, something went wrong. Please try again."

MAX_HISTORY = 30
TRIMMED_HISTORY = 20


class ChatSession:
    def __init__(
        self,
        llm: LLMProvider,
        videos: VideoSearchProvider,
        places: PlacesProvider,
    ) -> None:
        self._llm = llm
        self._videos = videos
        self._places = places
        self.session_id: str = ""
        self._messages: list[ChatMessage] = []

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    async def handle_message(self, text: str) -> ChatMessage:
        """Answer one user message and record both turns in the history."""
        if not text or not text.strip():
            raise ValueError("Message must not be empty")

        intent = classify(text)
        self._messages.append(ChatMessage(role="user", content=text))
        log.info("Chat %s: intent=%s", self.session_id or "-", intent.value)

        try:
            reply = await self._route(intent, text)
        except ProviderError as e:
            log.error("Chat provider failed for intent %s: %s", intent.value, e)
            reply = ChatMessage(role="assistant", content=FALLBACK_REPLY, intent=intent)

        self._messages.append(reply)
        if len(self._messages) > MAX_HISTORY:
            self._messages = self._messages[-TRIMMED_HISTORY:]
        return reply

    async def _route(self, intent: Intent, text: str) -> ChatMessage:
        videos: list[Video] = []
        places: list[Place] = []

        if intent == Intent.PLACES:
            place_type = detect_place_type(text)
            if place_type:
                places = await self._places.search_nearby(place_type)
                content = f"Found {len(places)} {place_type}s near you:"
            else:
                content = await self._llm.complete(text)

        elif intent == Intent.CAREER:
            career = extract_career(text)
            if career:
                videos = await self._videos.search(career_query(career))
                content = f"Here are some great resources to become a {career}:"
            else:
                content = await self._llm.complete(text)

        elif intent == Intent.SKILL:
            skill = extract_skill(text)
            if skill:
                videos = await self._videos.search(skill_query(skill))
                content = f"Here are tutorials to improve your {skill} skills:"
            else:
                content = await self._llm.complete(text)

        elif intent == Intent.EXAM:
            videos = await self._videos.search(text)
            content = "Here are some helpful exam preparation resources:"

        else:
            content = await self._llm.complete(text)

        return ChatMessage(
            role="assistant", content=content, intent=intent, videos=videos, places=places,
        )


# ── Session registry ─────────────────────────────────────────────

_chat_sessions: Registry[ChatSession] = Registry(
    "chat session",
    max_entries=settings.registry_max_entries,
    idle_ttl=settings.registry_idle_ttl,
)


def register_chat(session: ChatSession) -> str:
    session_id = _chat_sessions.add(session)
    session.session_id = session_id
    log.info("Chat session registered: %s (%d open)", session_id, len(_chat_sessions))
    return session_id


def unregister_chat(session_id: str) -> None:
    if _chat_sessions.remove(session_id) is not None:
        log.info("Chat session unregistered: %s", session_id)


def get_chat(session_id: str) -> Optional[ChatSession]:
    return _chat_sessions.get(session_id)
