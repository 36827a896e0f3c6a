"""Ranking client protocol and the OpenAI-compatible (Groq) implementation."""

from __future__ import annotations

import logging
from typing import Protocol

from openai import AsyncOpenAI

from zerohour.config import ZeroHourConfig

logger = logging.getLogger(__name__)


class RankingClient(Protocol):
    """Protocol for a chat-completion backend that returns JSON text."""

    async def complete(self, system: str, user: str) -> str | None:
        """Send one ranking request. Returns the raw message content."""
        ...

    async def close(self) -> None: ...


class OpenAIRankingClient:
    """Talks to any OpenAI-compatible endpoint; Groq by default."""

    def __init__(self, config: ZeroHourConfig) -> None:
        self._config = config
        # Retries are disabled; a failed batch is reported and dropped.
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            max_retries=0,
        )
        logger.info("Using ranking model %s at %s", config.model, config.base_url)

    async def complete(self, system: str, user: str) -> str | None:
        completion = await self._client.chat.completions.create(
            model=self._config.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=self._config.temperature,
            response_format={"type": "json_object"},
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content

    async def close(self) -> None:
        await self._client.close()
