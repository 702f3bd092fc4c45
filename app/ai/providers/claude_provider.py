from __future__ import annotations

from anthropic import AsyncAnthropic

from app.ai.types import AIProviderError


class ClaudeProvider:
    name = "claude"

    def __init__(self, model: str, api_key: str, timeout_s: float = 30.0, max_tokens: int = 1024):
        self._model = model
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout_s)

    async def generate(self, prompt: str) -> str:
        message = await self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        parts = [block.text for block in message.content if getattr(block, "type", "") == "text"]
        text = "".join(parts)
        if not text.strip():
            raise AIProviderError(self.name, "empty response")
        return text
