from typing import Protocol


class AIClient(Protocol):
    name: str

    async def generate(self, prompt: str) -> str: ...


class AIProviderError(RuntimeError):
    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
