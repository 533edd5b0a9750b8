"""Data models for the companion services."""

from .booking import BoardingPass, BookingSelection, BookingState, ItemType, PassengerDetails
from .chat import ChatMessage, Intent, Place, Video
from .mood import MoodAnswers, MoodEntry, MoodLabel, MoodResult, MoodSubmission
from .travel import Flight, Hotel, PaymentOrder

__all__ = [
    "BoardingPass",
    "BookingSelection",
    "BookingState",
    "ChatMessage",
    "Flight",
    "Hotel",
    "Intent",
    "ItemType",
    "MoodAnswers",
    "MoodEntry",
    "MoodLabel",
    "MoodResult",
    "MoodSubmission",
    "PassengerDetails",
    "PaymentOrder",
    "Place",
    "Video",
]
