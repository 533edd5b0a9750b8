"""LLM provider for general chat replies (Anthropic SDK)."""

from __future__ import annotations

import logging
from typing import Optional

import anthropic

from companion.config import settings
from companion.errors import ProviderError
from companion.providers.base import LLMProvider

log = logging.getLogger("companion.providers.llm")

SYSTEM_PROMPT = (
    "You are a friendly AI companion for college students. Help with studies, "
    "careers, exams, skills and wellbeing. Keep answers concise and practical, "
    "and use Markdown lists where they help."
)

EMPTY_REPLY = "I'm not sure how to answer that. Could you rephrase?"


class AnthropicLLM(LLMProvider):
    """Single-turn completion through ``AsyncAnthropic.messages.create``.

    ``client`` lets tests pass a stand-in for the SDK client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        max_tokens: int = 1024,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.anthropic_api_key
        self._model = model or settings.anthropic_model
        self._base_url = base_url or settings.anthropic_base_url or None
        self._max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=settings.http_timeout,
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        if not self._api_key and self._client is None:
            raise ProviderError("LLM is not configured (ANTHROPIC_API_KEY missing).")

        try:
            message = await self._get_client().messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as exc:
            raise ProviderError(f"LLM request failed (status {exc.status_code})") from exc
        except anthropic.APIError as exc:
            raise ProviderError("LLM service unavailable") from exc

        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        if not text.strip():
            log.warning("LLM returned no text content")
            return EMPTY_REPLY
        return text.strip()
