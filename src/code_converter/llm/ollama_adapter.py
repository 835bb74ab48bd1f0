"""Ollama adapter.

Uses Ollama HTTP API: POST /api/chat
Intended for self-hosted models on the same host/network.
"""

from __future__ import annotations

import asyncio

import aiohttp

from ..domain.errors import ModelResponseError, NetworkTimeoutError
from ..observability.logger import get_logger
from .runtime import LLMRequest, LLMRuntime

logger = get_logger(__name__)


class OllamaAdapter(LLMRuntime):
    def __init__(self, *, host: str, port: int):
        self._base_url = f"http://{host}:{port}"

    async def complete(self, req: LLMRequest) -> list[str]:
        payload = {
            "model": req.model,
            "messages": [
                {"role": "system", "content": req.system_prompt},
                {"role": "user", "content": req.prompt},
            ],
            "stream": False,
            "options": {
                "temperature": float(req.temperature),
                # Ollama uses `num_predict` for max tokens.
                "num_predict": int(req.max_tokens),
            },
        }

        timeout = aiohttp.ClientTimeout(total=max(1, int(req.timeout_seconds)))
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(f"{self._base_url}/api/chat", json=payload) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise ModelResponseError(
                            f"Model endpoint rejected the request (status {resp.status})",
                            detail=body[:500],
                        )
                    data = await resp.json()
        except asyncio.TimeoutError as e:
            raise NetworkTimeoutError("Request to model endpoint timed out", detail=str(e)) from e
        except aiohttp.ClientError as e:
            raise NetworkTimeoutError("Could not reach model endpoint", detail=str(e)) from e

        if not isinstance(data, dict):
            raise ModelResponseError("Model endpoint returned an unexpected body")
        if data.get("error"):
            raise ModelResponseError("Model request failed", detail=str(data.get("error")))

        message = data.get("message")
        if not message:
            return []
        text = message.get("content")
        if not isinstance(text, str):
            raise ModelResponseError("Model endpoint returned a completion without text content")
        logger.debug("llm_completion_received", model=req.model, completions=1)
        return [text]
