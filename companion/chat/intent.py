"""Keyword intent routing for chat messages.

Rules are checked in priority order and the first match wins, so
"learn to become a pilot" is a career question, not a skill one.
"""

from __future__ import annotations

import re
from typing import Optional

from companion.models.chat import Intent

INTENT_KEYWORDS: list[tuple[Intent, tuple[str, ...]]] = [
    (Intent.PLACES, ("nearby", "near me")),
    (Intent.CAREER, ("become", "career")),
    (Intent.SKILL, ("skill", "learn")),
    (Intent.EXAM, ("jee", "gate", "cat", "exam")),
]

_CAREER_RE = re.compile(r"become (?:a |an )?(\w+)", re.IGNORECASE)
_SKILL_RE = re.compile(r"(?:learn|improve) (?:my )?(\w+)", re.IGNORECASE)


def classify(text: str) -> Intent:
    """Case-insensitive substring match; ``general`` when nothing matches."""
    lower = text.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(k in lower for k in keywords):
            return intent
    return Intent.GENERAL


def extract_career(text: str) -> Optional[str]:
    """The word after "become (a|an)", e.g. "doctor"."""
    match = _CAREER_RE.search(text)
    return match.group(1) if match else None


def extract_skill(text: str) -> Optional[str]:
    """The word after "learn" / "improve (my)", e.g. "python"."""
    match = _SKILL_RE.search(text)
    return match.group(1) if match else None
