"""Code conversion orchestration service (business logic)."""

from __future__ import annotations

from ..domain.errors import ConverterDomainError, ModelResponseError
from ..domain.models import ConversionFailure, ConversionRequest, ConversionResult, ConversionSuccess, ErrorCode
from ..llm.runtime import LLMRequest, LLMRuntime
from ..observability.logger import get_logger
from .prompts import SYSTEM_PROMPT, build_conversion_prompt

logger = get_logger(__name__)

ERROR_PREFIX = "Failed to convert code: "
_MAX_DETAIL_CHARS = 200


def describe_error(exc: BaseException) -> str:
    """Short, human-readable description of a failure for API callers."""
    if isinstance(exc, ConverterDomainError):
        text = exc.info.message
        if exc.info.detail:
            text = f"{text}: {exc.info.detail}"
    else:
        text = str(exc) or type(exc).__name__
    if len(text) > _MAX_DETAIL_CHARS:
        text = text[: _MAX_DETAIL_CHARS - 3] + "..."
    return text


def _error_code(exc: BaseException) -> ErrorCode:
    if isinstance(exc, ConverterDomainError):
        return exc.info.code
    return ErrorCode.INTERNAL_ERROR


class CodeConversionService:
    """Service layer for code conversion.

    Responsibilities:
    - Build the conversion prompt
    - Issue a single completion call through the injected LLM runtime
    - Extract the first completion as the converted code
    - Fold every failure into a ``ConversionFailure``; nothing raises past ``convert``
    """

    def __init__(
        self,
        llm: LLMRuntime,
        *,
        model: str,
        max_tokens: int = 2000,
        temperature: float = 0.3,
        timeout_seconds: int = 120,
    ):
        self._llm = llm
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        logger.info(
            "conversion_started",
            source_language=request.source_language,
            target_language=request.target_language,
        )
        try:
            prompt = build_conversion_prompt(
                request.source_language,
                request.target_language,
                request.source_code,
            )
            converted_code = await self._complete(prompt)
        except Exception as e:
            logger.error(
                "conversion_failed",
                source_language=request.source_language,
                target_language=request.target_language,
                error_code=_error_code(e).value,
                error=describe_error(e),
                # Traceback only for exceptions outside the domain error hierarchy.
                exc_info=not isinstance(e, ConverterDomainError),
            )
            return ConversionFailure(error=ERROR_PREFIX + describe_error(e))

        logger.info(
            "conversion_succeeded",
            source_language=request.source_language,
            target_language=request.target_language,
            converted_chars=len(converted_code),
        )
        return ConversionSuccess(
            converted_code=converted_code,
            source_language=request.source_language,
            target_language=request.target_language,
        )

    async def _complete(self, prompt: str) -> str:
        completions = await self._llm.complete(
            LLMRequest(
                system_prompt=SYSTEM_PROMPT,
                prompt=prompt,
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                timeout_seconds=self._timeout_seconds,
            )
        )
        if not completions:
            raise ModelResponseError("No response from model endpoint")
        return completions[0]
