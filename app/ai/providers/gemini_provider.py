from __future__ import annotations

import asyncio

from google import genai
from google.genai import types

from app.ai.types import AIProviderError


class GeminiProvider:
    name = "gemini"

    def __init__(self, model: str, api_key: str, temperature: float = 0.2):
        self._model = model
        self._temperature = temperature
        self._client = genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        response = await asyncio.to_thread(
            self._client.models.generate_content,
            model=self._model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=self._temperature),
        )
        text = response.text or ""
        if not text.strip():
            raise AIProviderError(self.name, "empty response")
        return text
