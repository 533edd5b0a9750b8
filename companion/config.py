"""Application configuration via environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

log = logging.getLogger("companion.config")


class Settings(BaseSettings):
    # LLM
    llm_provider: str = "claude"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_base_url: str = ""  # empty uses the SDK default

    # Video search
    youtube_api_key: str = ""
    youtube_max_results: int = 3

    # Places
    places_api_key: str = ""
    places_default_location: str = "my location"
    places_max_results: int = 5

    # Travel / payment backend
    backend_url: str = "http://localhost:3000/api"
    http_timeout: float = 15.0
    razorpay_key_id: str = ""

    # Mood history (JSONL file; empty keeps entries in memory)
    mood_store_path: str = ""

    # Booking flow
    booking_countdown: int = 15
    booking_tax_rate: float = 0.18
    booking_tick_interval: float = 1.0

    # In-process registries (chat sessions, bookings)
    registry_max_entries: int = 500
    registry_idle_ttl: float = 1800.0  # seconds

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []
        _placeholders = {"sk-ant-...", "AIza...", "rzp_test_..."}

        if self.booking_countdown <= 0:
            raise ValueError("BOOKING_COUNTDOWN must be a positive number of ticks.")
        if self.booking_tick_interval <= 0:
            raise ValueError("BOOKING_TICK_INTERVAL must be positive.")

        if self.llm_provider == "claude":
            if not self.anthropic_api_key or self.anthropic_api_key in _placeholders:
                warnings.append(
                    "ANTHROPIC_API_KEY is missing or still a placeholder. "
                    "General chat replies will fail."
                )

        if not self.youtube_api_key or self.youtube_api_key in _placeholders:
            warnings.append("YOUTUBE_API_KEY not set. Career, skill and exam videos disabled.")

        if not self.places_api_key or self.places_api_key in _placeholders:
            warnings.append("PLACES_API_KEY not set. Nearby place search disabled.")

        if not self.razorpay_key_id or self.razorpay_key_id in _placeholders:
            warnings.append("RAZORPAY_KEY_ID not set. Checkout cannot be opened by clients.")

        return warnings


settings = Settings()
