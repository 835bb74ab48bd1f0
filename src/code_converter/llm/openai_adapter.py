"""OpenAI adapters.

Uses the official ``openai`` client for chat completions against either
Azure OpenAI (deployment-based) or OpenAI / OpenAI-compatible APIs.
"""

from __future__ import annotations

import asyncio

import openai
from openai import AsyncAzureOpenAI, AsyncOpenAI

from ..domain.errors import ModelResponseError, NetworkTimeoutError
from ..observability.logger import get_logger
from .runtime import LLMRequest, LLMRuntime

logger = get_logger(__name__)


class OpenAIAdapter(LLMRuntime):
    def __init__(self, *, api_key: str, base_url: str | None = None):
        """
        Initialize OpenAI adapter.

        Args:
            api_key: OpenAI API key.
            base_url: Custom base URL (for OpenAI-compatible APIs). If None, uses OpenAI default.
        """
        if not api_key:
            raise ValueError("OpenAI API key required. Set OPENAI_API_KEY env var or pass api_key parameter.")
        self._base_url = base_url or "https://api.openai.com/v1"
        # Retries are disabled: a failed attempt is a failed conversion.
        self._client: AsyncOpenAI = AsyncOpenAI(api_key=api_key, base_url=self._base_url, max_retries=0)

    async def complete(self, req: LLMRequest) -> list[str]:
        """Complete LLM request using the chat completions API."""
        try:
            response = await self._client.chat.completions.create(
                model=req.model,
                messages=[
                    {"role": "system", "content": req.system_prompt},
                    {"role": "user", "content": req.prompt},
                ],
                temperature=float(req.temperature),
                max_tokens=int(req.max_tokens),
                timeout=max(1, int(req.timeout_seconds)),
            )
        except (asyncio.TimeoutError, openai.APITimeoutError) as e:
            raise NetworkTimeoutError("Request to model endpoint timed out", detail=str(e)) from e
        except openai.APIConnectionError as e:
            raise NetworkTimeoutError("Could not reach model endpoint", detail=str(e)) from e
        except openai.APIStatusError as e:
            raise ModelResponseError(
                f"Model endpoint rejected the request (status {e.status_code})",
                detail=e.message,
            ) from e
        except openai.APIError as e:
            raise ModelResponseError("Model request failed", detail=str(e)) from e

        texts: list[str] = []
        for choice in response.choices or []:
            content = choice.message.content if choice.message else None
            if not isinstance(content, str):
                raise ModelResponseError("Model endpoint returned a completion without text content")
            texts.append(content)
        logger.debug("llm_completion_received", model=req.model, completions=len(texts))
        return texts

    async def aclose(self) -> None:
        await self._client.close()


class AzureOpenAIAdapter(OpenAIAdapter):
    """Azure OpenAI adapter; ``LLMRequest.model`` carries the deployment name."""

    def __init__(self, *, endpoint: str, api_key: str, api_version: str):
        if not endpoint:
            raise ValueError("Azure OpenAI endpoint required. Set AZURE_OPENAI_ENDPOINT env var.")
        if not api_key:
            raise ValueError("Azure OpenAI API key required. Set AZURE_OPENAI_API_KEY env var.")
        self._base_url = endpoint
        self._client = AsyncAzureOpenAI(
            azure_endpoint=endpoint,
            api_key=api_key,
            api_version=api_version,
            max_retries=0,
        )
