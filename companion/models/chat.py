"""Pydantic models for the chat companion."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Intent(str, Enum):
    PLACES = "places"
    CAREER = "career"
    SKILL = "skill"
    EXAM = "exam"
    GENERAL = "general"


class Video(BaseModel):
    id: str
    title: str
    channel: str = ""
    thumbnail: str = ""
    url: str


class Place(BaseModel):
    name: str
    type: str
    address: str = ""
    rating: Optional[float] = None
    maps_url: str = ""


class ChatMessage(BaseModel):
    """One turn in the chat history."""

    role: str  # "user" or "assistant"
    content: str
    intent: Optional[Intent] = None
    videos: list[Video] = []
    places: list[Place] = []
