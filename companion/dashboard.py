"""Dashboard helpers: motivational quote and the user's last mood."""

from __future__ import annotations

import random
from typing import Any, Optional

from companion.models.mood import MoodLabel
from companion.providers.base import MoodStore

QUOTES = [
    "Believe you can and you're halfway there.",
    "The future belongs to those who believe in the beauty of their dreams.",
    "Success is not final, failure is not fatal: it is the courage to continue that counts.",
]

MOOD_EMOJI = {
    MoodLabel.STRESSED: "😰",
    MoodLabel.TIRED: "😴",
    MoodLabel.MOTIVATED: "🔥",
    MoodLabel.NEUTRAL: "😊",
}


def daily_quote(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(QUOTES)


async def mood_summary(store: MoodStore, uid: str) -> Optional[dict[str, Any]]:
    """Latest check-in for ``uid`` with its emoji, or None if there is none."""
    entry = await store.latest(uid)
    if entry is None:
        return None
    return {
        "moodLabel": entry.mood_label.value,
        "moodScore": entry.mood_score,
        "timestamp": entry.timestamp,
        "emoji": MOOD_EMOJI.get(entry.mood_label, "😊"),
    }
