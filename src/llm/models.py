# src/llm/models.py — v2
"""LLM-specific types: LLMResponse."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class LLMResponse(BaseModel):
    """Normalized response from an LLM provider.

    ``content`` is empty when the call failed or the reply carried no text;
    ``error`` then holds a short description of why.
    """

    content: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int = 0
    status_code: int | None = None
    error: str | None = None
    raw_response: Any = None

    @property
    def ok(self) -> bool:
        """Whether the call produced non-empty text."""
        return bool(self.content)
