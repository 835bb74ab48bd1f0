"""HTTP request/response models for the conversion endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..domain.models import COMMON_LANGUAGES, ConversionRequest, ConversionResult, ConversionSuccess


class ConvertRequest(BaseModel):
    # Fields are optional so a missing sourceCode gets the same 400 as an empty one.
    sourceCode: Optional[str] = None
    sourceLanguage: Optional[str] = Field(default=None, examples=list(COMMON_LANGUAGES))
    targetLanguage: Optional[str] = Field(default=None, examples=list(COMMON_LANGUAGES))

    def has_source_code(self) -> bool:
        return bool(self.sourceCode and self.sourceCode.strip())

    def to_domain(self) -> ConversionRequest:
        return ConversionRequest(
            source_code=self.sourceCode or "",
            source_language=self.sourceLanguage or "",
            target_language=self.targetLanguage or "",
        )


class ConvertResponse(BaseModel):
    convertedCode: Optional[str] = None
    sourceLanguage: Optional[str] = None
    targetLanguage: Optional[str] = None
    success: bool
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: ConversionResult) -> "ConvertResponse":
        if isinstance(result, ConversionSuccess):
            return cls(
                convertedCode=result.converted_code,
                sourceLanguage=result.source_language,
                targetLanguage=result.target_language,
                success=True,
            )
        return cls.failure(result.error)

    @classmethod
    def failure(cls, error: str) -> "ConvertResponse":
        return cls(success=False, error=error)
