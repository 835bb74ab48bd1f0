"""Domain-specific errors.

Adapters raise these; the conversion service folds them into failure results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import ErrorCode


@dataclass(frozen=True)
class DomainErrorInfo:
    code: ErrorCode
    message: str
    detail: Optional[str] = None


class ConverterDomainError(Exception):
    """Base class for all domain errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code=self.code, message=message, detail=detail)


class NetworkTimeoutError(ConverterDomainError):
    """Raised when the model endpoint times out or cannot be reached."""

    code = ErrorCode.NETWORK_TIMEOUT


class ModelResponseError(ConverterDomainError):
    """Raised when the model endpoint rejects the call or answers with an unusable body."""

    code = ErrorCode.MODEL_RESPONSE_ERROR
