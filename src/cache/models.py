# src/cache/models.py — v3
"""Cache domain models: CachedAnalysis."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from docdigest.core.models import KeywordLocation, SummaryAndKeywords
from docdigest.version import __version__


class CachedAnalysis(BaseModel):
    """Single cache entry linking a document fingerprint to its analysis."""

    fingerprint: str
    summary: str
    keywords: list[str] = Field(default_factory=list)
    keyword_locations: dict[str, list[KeywordLocation]] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    pipeline_version: str = __version__

    @classmethod
    def from_result(cls, fingerprint: str, result: SummaryAndKeywords) -> CachedAnalysis:
        """Build an entry from a pipeline result."""
        return cls(
            fingerprint=fingerprint,
            summary=result.summary,
            keywords=list(result.keywords),
            keyword_locations={k: list(v) for k, v in result.keyword_locations.items()},
        )

    def to_result(self) -> SummaryAndKeywords:
        """Rebuild the immutable pipeline result from this entry."""
        return SummaryAndKeywords(
            summary=self.summary,
            keywords=tuple(self.keywords),
            keyword_locations={k: tuple(v) for k, v in self.keyword_locations.items()},
        )
