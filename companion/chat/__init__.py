"""Chat companion: intent routing and per-user sessions."""

from .intent import classify, extract_career, extract_skill
from .session import ChatSession

__all__ = ["ChatSession", "classify", "extract_career", "extract_skill"]
