"""LLM runtime factory."""

from __future__ import annotations

from ..config.settings import ConverterSettings
from .ollama_adapter import OllamaAdapter
from .openai_adapter import AzureOpenAIAdapter, OpenAIAdapter
from .runtime import LLMRuntime


def build_llm_runtime(settings: ConverterSettings) -> LLMRuntime:
    provider = (settings.llm_provider or "azure").lower()
    if provider == "ollama":
        return OllamaAdapter(host=settings.ollama_host, port=settings.ollama_port)
    if provider == "openai":
        return OpenAIAdapter(
            api_key=settings.openai_api_key or "",
            base_url=settings.openai_base_url,
        )
    return AzureOpenAIAdapter(
        endpoint=settings.azure_openai_endpoint or "",
        api_key=settings.azure_openai_api_key or "",
        api_version=settings.azure_openai_api_version,
    )
