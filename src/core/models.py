# src/core/models.py — v2
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# === INPUT ===


class SemanticCell(BaseModel):
    """Extracted document fragment — atomic unit consumed by the pipeline.

    Produced by ingestion; read-only here. Ordering in the input sequence
    is significant and doubles as a positional proxy for page/section.
    Accepts the camelCase field names emitted by the ingestion service.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    id: str
    content: str
    structural_score: float = Field(ge=0.0, le=1.0)
    is_header: bool


# === RESULT ===


class KeywordLocation(BaseModel):
    """Scored reference from a keyword to a cell where it occurs."""

    model_config = ConfigDict(frozen=True)

    cell_id: str
    snippet: str
    position: int  # 1-based index of the cell, not a true page number
    relevance_score: float = Field(ge=0.0)


class SummaryAndKeywords(BaseModel):
    """Summary, ranked keywords and per-keyword locations for one document.

    Sequences are stored as tuples so a constructed result cannot be
    changed in place. The locations mapping is a plain dict and must be
    treated as read-only.
    """

    model_config = ConfigDict(frozen=True)

    summary: str
    keywords: tuple[str, ...] = ()
    keyword_locations: dict[str, tuple[KeywordLocation, ...]] = Field(default_factory=dict)


# === PIPELINE OUTCOMES ===

FallbackReason = Literal[
    "no_credentials", "empty_response", "llm_error", "parse_error", "error",
]


class CacheHit(BaseModel):
    """Result served from the analysis cache."""

    model_config = ConfigDict(frozen=True)

    path: Literal["cache_hit"] = "cache_hit"
    result: SummaryAndKeywords
    fingerprint: str


class ModelSuccess(BaseModel):
    """Result produced by the remote model and parsed successfully."""

    model_config = ConfigDict(frozen=True)

    path: Literal["model"] = "model"
    result: SummaryAndKeywords
    fingerprint: str | None = None
    cached: bool = False


class Fallback(BaseModel):
    """Heuristic result derived from header cells."""

    model_config = ConfigDict(frozen=True)

    path: Literal["fallback"] = "fallback"
    result: SummaryAndKeywords
    reason: FallbackReason


AnalysisOutcome = CacheHit | ModelSuccess | Fallback
