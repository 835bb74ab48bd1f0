"""Prompt text sent to the model."""

from __future__ import annotations

SYSTEM_PROMPT = (
    "You are a code conversion expert. Convert code accurately between different programming languages."
)

# "Only return the converted code" keeps markdown fences and prose out of the output.
_CONVERSION_TEMPLATE = (
    "Convert the following {source_language} code to {target_language}. "
    "Only return the converted code without explanations:\n\n"
    "{source_code}"
)


def build_conversion_prompt(source_language: str, target_language: str, source_code: str) -> str:
    return _CONVERSION_TEMPLATE.format(
        source_language=source_language,
        target_language=target_language,
        source_code=source_code,
    )
