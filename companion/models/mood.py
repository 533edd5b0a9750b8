"""Pydantic models for mood check-ins."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

QUESTION_COUNT = 6

# One slider value per question, 1 (low) to 5 (high)
MoodAnswers = Annotated[
    list[Annotated[int, Field(ge=1, le=5)]],
    Field(min_length=QUESTION_COUNT, max_length=QUESTION_COUNT),
]


class MoodLabel(str, Enum):
    STRESSED = "stressed"
    TIRED = "tired"
    MOTIVATED = "motivated"
    NEUTRAL = "neutral"


class MoodResult(BaseModel):
    """Score, label and suggestions derived from one questionnaire."""

    score: float
    label: MoodLabel
    suggestions: list[str]


class MoodSubmission(BaseModel):
    """Answers posted by the questionnaire, plus the signed-in user if any."""

    answers: MoodAnswers = Field(default_factory=lambda: [3] * QUESTION_COUNT)
    uid: Optional[str] = None


class MoodEntry(BaseModel):
    """One persisted check-in. Serialized with the store's camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    timestamp: str  # ISO-8601
    answers: list[int]
    mood_score: float = Field(alias="moodScore")
    mood_label: MoodLabel = Field(alias="moodLabel")
