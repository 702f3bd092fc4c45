from __future__ import annotations

import httpx

from app.ai.types import AIProviderError

HF_INFERENCE_URL = "https://api-inference.huggingface.co/models/{model}"


class HuggingFaceProvider:
    """Text generation through the hosted Hugging Face inference API."""

    name = "huggingface"

    def __init__(self, model: str, api_key: str, timeout_s: float = 30.0):
        self._url = HF_INFERENCE_URL.format(model=model)
        self._api_key = api_key
        self._timeout_s = timeout_s

    async def generate(self, prompt: str) -> str:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            response = await client.post(self._url, headers=headers, json={"inputs": prompt})
            response.raise_for_status()
            payload = response.json()

        text = ""
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            text = str(payload[0].get("generated_text") or "")
        if not text.strip():
            raise AIProviderError(self.name, "no generated_text in response")
        return text
