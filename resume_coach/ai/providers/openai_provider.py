from __future__ import annotations

import os
from typing import AsyncGenerator, Optional, Sequence

from openai import AsyncOpenAI

from resume_coach.ai.types import ChatMessage


class OpenAIProvider:
    """Streams chat completions from any OpenAI-compatible endpoint.

    Every catalog model (including the Claude, Gemini and Mistral ids) is
    served through ``OPENAI_BASE_URL`` so a single gateway can route them.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 2,
        temperature: float = 0.7,
    ):
        self.model = model
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def stream(
        self, messages: Sequence[ChatMessage]
    ) -> AsyncGenerator[str, None]:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        stream = await self._client.chat.completions.create(
            model=self.model,
            messages=payload,
            temperature=self._temperature,
            stream=True,
        )

        async for chunk in stream:
            if not chunk.choices:
                continue
            text = getattr(chunk.choices[0].delta, "content", None)
            if text:
                yield text
