# src/cache/memory_store.py — v1
"""In-process cache store (CACHE_BACKEND=memory).

Entries live for the lifetime of the store instance. Used by tests and
one-shot CLI runs.
"""

from __future__ import annotations

from docdigest.cache.base_cache_store import BaseCacheStore
from docdigest.cache.models import CachedAnalysis


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    async def get(self, key: str) -> CachedAnalysis | None:
        data = self._entries.get(key)
        if data is None:
            return None
        return CachedAnalysis.model_validate_json(data)

    async def put(self, key: str, entry: CachedAnalysis) -> None:
        # Stored serialized so callers cannot mutate cached state.
        self._entries[key] = entry.model_dump_json()

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def list_keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
