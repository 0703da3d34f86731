# src/summary/keyword_locator.py — v1
"""Locate extracted keywords in the document cells and rank the matches."""

from __future__ import annotations

from collections.abc import Sequence

from docdigest.core.models import KeywordLocation, SemanticCell

MAX_LOCATIONS = 5
SNIPPET_CHARS = 300
OCCURRENCE_WEIGHT = 0.5
STRUCTURE_WEIGHT = 0.5


def count_occurrences(text: str, keyword: str) -> int:
    """Count non-overlapping occurrences of ``keyword`` in ``text``."""
    if not keyword:
        return 0
    return text.count(keyword)


def relevance_score(occurrences: int, structural_score: float) -> float:
    """Combine match frequency and cell importance."""
    return occurrences * OCCURRENCE_WEIGHT + structural_score * STRUCTURE_WEIGHT


def locate_keyword(
    keyword: str,
    cells: Sequence[SemanticCell],
    limit: int = MAX_LOCATIONS,
) -> list[KeywordLocation]:
    """Find the best-ranked cells containing ``keyword`` (case-insensitive).

    Returns:
        Up to ``limit`` locations sorted by descending relevance; ties keep
        document order. Empty when the keyword never occurs.
    """
    needle = keyword.lower()
    if not needle:
        return []

    matches: list[KeywordLocation] = []
    for position, cell in enumerate(cells, start=1):
        occurrences = count_occurrences(cell.content.lower(), needle)
        if occurrences == 0:
            continue
        matches.append(
            KeywordLocation(
                cell_id=cell.id,
                snippet=cell.content[:SNIPPET_CHARS],
                position=position,
                relevance_score=relevance_score(occurrences, cell.structural_score),
            )
        )

    # sorted() is stable, so equal scores stay in scan order.
    matches = sorted(matches, key=lambda loc: loc.relevance_score, reverse=True)
    return matches[:limit]


def find_keyword_locations(
    keywords: Sequence[str],
    cells: Sequence[SemanticCell],
    limit: int = MAX_LOCATIONS,
) -> dict[str, list[KeywordLocation]]:
    """Map every keyword to its ranked locations.

    Keywords without matches are kept with an empty list.
    """
    return {keyword: locate_keyword(keyword, cells, limit) for keyword in keywords}
