"""LLM runtime interface.

The service talks to hosted models only through this interface so that the
backend (Azure OpenAI, OpenAI, Ollama) stays a configuration concern.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LLMRequest:
    system_prompt: str
    prompt: str
    model: str
    temperature: float
    max_tokens: int
    timeout_seconds: int


class LLMRuntime:
    async def complete(self, req: LLMRequest) -> list[str]:  # pragma: no cover - interface
        """Return the text of every completion the model produced, in order."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release transport resources held by the runtime."""
        return None
