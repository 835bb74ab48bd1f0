"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_LLM_PROVIDERS = ("azure", "openai", "ollama")


class ConverterSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "ai-code-converter-service"

    # FastAPI
    http_host: str = "127.0.0.1"
    http_port: int = 8080
    cors_allow_origins: list[str] = ["*"]

    # ---------------------------
    # LLM backend
    # ---------------------------
    llm_provider: str = "azure"  # "azure" | "openai" | "ollama"

    azure_openai_endpoint: str | None = None
    azure_openai_api_key: str | None = None
    azure_openai_deployment_name: str | None = None
    azure_openai_api_version: str = "2024-06-01"

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_default_model: str = "gpt-4o"

    ollama_host: str = "localhost"
    ollama_port: int = 11434
    ollama_default_model: str = "qwen2.5-coder:7b"

    # Generation parameters: bounded output, low temperature for literal translation.
    conversion_max_tokens: int = 2000
    conversion_temperature: float = 0.3
    llm_timeout_seconds: int = 120

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def llm_model(self) -> str:
        """Deployment (azure) or model name the completion call targets."""
        provider = self.llm_provider.lower()
        if provider == "azure":
            return self.azure_openai_deployment_name or ""
        if provider == "ollama":
            return self.ollama_default_model
        return self.openai_default_model

    def validate(self) -> None:
        if self.http_port <= 0:
            raise ValueError("http_port must be > 0")
        if self.ollama_port <= 0:
            raise ValueError("ollama_port must be > 0")
        if self.conversion_max_tokens <= 0:
            raise ValueError("conversion_max_tokens must be > 0")
        if not 0.0 <= self.conversion_temperature <= 2.0:
            raise ValueError("conversion_temperature must be between 0 and 2")
        if self.llm_timeout_seconds <= 0:
            raise ValueError("llm_timeout_seconds must be > 0")

        provider = self.llm_provider.lower()
        if provider not in SUPPORTED_LLM_PROVIDERS:
            raise ValueError(f"llm_provider must be one of {', '.join(SUPPORTED_LLM_PROVIDERS)}")
        if provider == "azure":
            if not self.azure_openai_endpoint:
                raise ValueError("azure_openai_endpoint is required for llm_provider=azure")
            if not self.azure_openai_api_key:
                raise ValueError("azure_openai_api_key is required for llm_provider=azure")
            if not self.azure_openai_deployment_name:
                raise ValueError("azure_openai_deployment_name is required for llm_provider=azure")
        if provider == "openai" and not self.openai_api_key:
            raise ValueError("openai_api_key is required for llm_provider=openai")


_settings: ConverterSettings | None = None


def get_settings() -> ConverterSettings:
    global _settings
    if _settings is None:
        _settings = ConverterSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
