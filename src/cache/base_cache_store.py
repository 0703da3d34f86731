# src/cache/base_cache_store.py — v3
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from docdigest.cache.models import CachedAnalysis
from docdigest.core.models import KeywordLocation, SummaryAndKeywords


class BaseCacheStore(ABC):
    """Unified interface for analysis cache backends.

    Entries are keyed by document fingerprint. Backends give no locking
    guarantee: concurrent writers for one key are last-write-wins.
    """

    @abstractmethod
    async def get(self, key: str) -> CachedAnalysis | None:
        """Retrieve cache entry by fingerprint key."""

    @abstractmethod
    async def put(self, key: str, entry: CachedAnalysis) -> None:
        """Store cache entry."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove cache entry."""

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """List all cached fingerprint keys."""

    async def store_analysis(
        self,
        fingerprint: str,
        summary: str,
        keywords: Sequence[str],
        keyword_locations: Mapping[str, Sequence[KeywordLocation]],
    ) -> CachedAnalysis:
        """Build and store an entry from its parts.

        Returns:
            The stored entry.
        """
        result = SummaryAndKeywords(
            summary=summary,
            keywords=tuple(keywords),
            keyword_locations={k: tuple(v) for k, v in keyword_locations.items()},
        )
        entry = CachedAnalysis.from_result(fingerprint, result)
        await self.put(fingerprint, entry)
        return entry
