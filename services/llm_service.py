"""
Dialogue-generation capability backed by the OpenAI chat completions API.

Used twice per request:
- once with a single-turn prompt for entity extraction
- once with the full conversation for the final reply
"""

from __future__ import annotations

from typing import Optional, Dict, Any, List

from openai import AsyncOpenAI

from config import (
    logger,
    OPENAI_MODEL,
    LLM_TIMEOUT,
)


class LLMService:
    """Thin async wrapper: message list + generation params -> assistant message."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = OPENAI_MODEL,
    ):
        self._client = client
        self.model = model

    @property
    def client(self) -> AsyncOpenAI:
        # Built lazily so importing the app never requires OPENAI_API_KEY
        if self._client is None:
            self._client = AsyncOpenAI(timeout=LLM_TIMEOUT, max_retries=0)
        return self._client

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Return the reply as an assistant message dict: {"role", "content"}."""
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        logger.debug(f"[LLM] {self.model} request: {len(messages)} messages, temperature={temperature}")
        response = await self.client.chat.completions.create(**params)
        message = response.choices[0].message
        return {"role": message.role or "assistant", "content": message.content or ""}

    async def aclose(self):
        if self._client is not None:
            await self._client.close()
