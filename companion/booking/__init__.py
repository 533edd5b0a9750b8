"""Travel booking flow: state machine, countdown, pricing and confirmation."""

from .controller import BookingController
from .pricing import breakdown, taxes, total

__all__ = ["BookingController", "breakdown", "taxes", "total"]
