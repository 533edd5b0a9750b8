"""Mood questionnaire scoring.

Six slider answers (1-5) are averaged and mapped to a label by fixed
thresholds, checked in order::

    avg <= 2   stressed
    avg <= 3   tired
    avg >= 4   motivated
    otherwise  neutral      (only 3 < avg < 4)

Each label carries four canned suggestions.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from companion.models.mood import MoodEntry, MoodLabel, MoodResult
from companion.providers.base import MoodStore

log = logging.getLogger("companion.mood")

QUESTIONS: list[str] = [
    "How stressed do you feel today?",
    "How well did you sleep last night?",
    "How motivated are you to study?",
    "How anxious do you feel?",
    "How energetic do you feel?",
    "How satisfied are you with your progress?",
]

SUGGESTIONS: dict[MoodLabel, list[str]] = {
    MoodLabel.STRESSED: [
        "Take a 10-minute break",
        "Try deep breathing exercises",
        "Talk to a friend or counselor",
        "Get some fresh air",
    ],
    MoodLabel.TIRED: [
        "Get 7-8 hours of sleep tonight",
        "Take short power naps",
        "Stay hydrated",
        "Reduce screen time before bed",
    ],
    MoodLabel.MOTIVATED: [
        "Great! Use this energy to tackle your goals",
        "Break down tasks into smaller steps",
        "Celebrate small wins",
        "Help others who might need support",
    ],
    MoodLabel.NEUTRAL: [
        "Maintain a balanced routine",
        "Set achievable daily goals",
        "Stay connected with friends",
        "Practice self-care",
    ],
}


def mood_label(avg: float) -> MoodLabel:
    """Map an average answer to its label."""
    if avg <= 2:
        return MoodLabel.STRESSED
    if avg <= 3:
        return MoodLabel.TIRED
    if avg >= 4:
        return MoodLabel.MOTIVATED
    return MoodLabel.NEUTRAL


def compute_mood(answers: Sequence[int]) -> MoodResult:
    """Score one questionnaire. Pure: same answers, same result."""
    avg = sum(answers) / len(answers)
    label = mood_label(avg)
    return MoodResult(score=avg, label=label, suggestions=list(SUGGESTIONS[label]))


async def submit_mood(
    answers: Sequence[int],
    uid: Optional[str] = None,
    store: Optional[MoodStore] = None,
) -> MoodResult:
    """Score the answers and record the check-in for a signed-in user.

    The store write is best effort: a failure is logged and the computed
    result is still returned.
    """
    result = compute_mood(answers)

    if uid and store is not None:
        entry = MoodEntry(
            uid=uid,
            timestamp=datetime.now(timezone.utc).isoformat(),
            answers=list(answers),
            mood_score=result.score,
            mood_label=result.label,
        )
        try:
            await store.append(entry)
        except Exception as e:
            log.warning("Mood entry for %s not saved: %s", uid, e)

    log.info("Mood scored: %.2f → %s", result.score, result.label.value)
    return result
