from __future__ import annotations

import os

from openai import AsyncOpenAI

from app.ai.types import AIProviderError


class OpenAIProvider:
    name = "openai"

    def __init__(self, model: str, api_key: str, timeout_s: float = 30.0, temperature: float = 0.2):
        self._model = model
        self._temperature = temperature
        # OPENAI_BASE_URL lets the same client talk to OpenAI-compatible gateways.
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
            timeout=timeout_s,
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES") or "2"),
        )

    async def generate(self, prompt: str) -> str:
        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
        )
        text = completion.choices[0].message.content if completion.choices else None
        if not text or not text.strip():
            raise AIProviderError(self.name, "empty response")
        return text
