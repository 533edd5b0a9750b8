"""Exception types shared by the booking flow and the provider layer."""

from __future__ import annotations


class CompanionError(Exception):
    """Base class for errors surfaced to the user as a notice."""


class BookingStateError(CompanionError):
    """A booking entry point was called from a state that does not allow it."""


class BookingValidationError(CompanionError):
    """Required passenger fields are missing; the booking stays in review."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Please fill in all required fields: " + ", ".join(self.missing)
        )


class ProviderError(CompanionError):
    """An external API call failed."""


class SearchError(ProviderError):
    """Flight, hotel, video or places search failed."""


class PaymentError(ProviderError):
    """The payment order could not be created."""
