# src/summary/fallback.py — v1
"""Model-free summary and keywords derived from header cells.

Used when no credential is configured or the model path fails. Never
touches the cache and never computes keyword locations.
"""

from __future__ import annotations

from collections.abc import Sequence

from docdigest.core.models import SemanticCell, SummaryAndKeywords

FALLBACK_HEADER = "[Auto summary]"
MAX_SUMMARY_HEADERS = 5
MAX_KEYWORD_HEADERS = 8


def _headers(cells: Sequence[SemanticCell], limit: int) -> list[str]:
    return [c.content for c in cells if c.is_header][:limit]


def fallback_summary(cells: Sequence[SemanticCell]) -> str:
    """Header line followed by the first header cells as bullets."""
    lines = [f"- {content}\n" for content in _headers(cells, MAX_SUMMARY_HEADERS)]
    return f"{FALLBACK_HEADER}\n\n" + "".join(lines)


def fallback_keywords(cells: Sequence[SemanticCell]) -> list[str]:
    """Contents of the first header cells, in order, duplicates kept."""
    return _headers(cells, MAX_KEYWORD_HEADERS)


def build_fallback(cells: Sequence[SemanticCell]) -> SummaryAndKeywords:
    """Assemble the heuristic result with an empty locations mapping."""
    return SummaryAndKeywords(
        summary=fallback_summary(cells),
        keywords=fallback_keywords(cells),
        keyword_locations={},
    )
