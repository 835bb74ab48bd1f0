"""Application lifespan management (startup/shutdown hooks)."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .config.settings import get_settings
from .llm.factory import build_llm_runtime
from .observability.logger import configure_logging, get_logger
from .services.conversion_service import CodeConversionService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan_manager(app: FastAPI) -> AsyncIterator[None]:
    """Build the model client once at startup and release it on shutdown."""
    settings = get_settings()

    configure_logging(settings.log_level)
    logger.info("starting_application", service_name=settings.service_name)

    llm = build_llm_runtime(settings)
    logger.info(
        "llm_runtime_configured",
        llm_provider=settings.llm_provider,
        llm_model=settings.llm_model,
        max_tokens=settings.conversion_max_tokens,
        temperature=settings.conversion_temperature,
    )

    app.state.conversion_service = CodeConversionService(
        llm,
        model=settings.llm_model,
        max_tokens=settings.conversion_max_tokens,
        temperature=settings.conversion_temperature,
        timeout_seconds=settings.llm_timeout_seconds,
    )

    logger.info("application_started")
    try:
        yield
    finally:
        app.state.conversion_service = None
        await llm.aclose()
        logger.info("application_shutdown_complete")
