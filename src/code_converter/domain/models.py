"""Framework-agnostic domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union


class ErrorCode(str, Enum):
    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    MODEL_RESPONSE_ERROR = "MODEL_RESPONSE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Labels the service is commonly used with; other labels are forwarded as-is.
COMMON_LANGUAGES = ("Java", "Python", "SQL", "C#")


@dataclass(frozen=True)
class ConversionRequest:
    source_code: str
    source_language: str
    target_language: str


@dataclass(frozen=True)
class ConversionSuccess:
    converted_code: str
    source_language: str
    target_language: str

    @property
    def success(self) -> Literal[True]:
        return True


@dataclass(frozen=True)
class ConversionFailure:
    error: str

    @property
    def success(self) -> Literal[False]:
        return False


ConversionResult = Union[ConversionSuccess, ConversionFailure]
