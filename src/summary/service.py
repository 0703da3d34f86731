# src/summary/service.py — v1
"""Summary-and-keywords orchestrator.

Per request:

    HASH -> CACHE_CHECK --hit--> return cached
                        --miss--> CREDENTIAL_CHECK --absent--> FALLBACK
                                                   --present--> PROMPT -> CALL -> PARSE

Every failure along the model path ends in FALLBACK. The service never
raises to its caller; which path was taken is reported through the
AnalysisOutcome variant returned by analyze().
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

from docdigest.cache.fingerprint import compute_document_hash
from docdigest.core.models import (
    AnalysisOutcome,
    CacheHit,
    Fallback,
    FallbackReason,
    ModelSuccess,
    SemanticCell,
    SummaryAndKeywords,
)
from docdigest.logging.context import (
    clear_context,
    set_fingerprint,
    set_request_context,
    set_stage,
)
from docdigest.summary.fallback import build_fallback
from docdigest.summary.keyword_locator import find_keyword_locations
from docdigest.summary.prompt_builder import build_prompt, select_prompt_cells
from docdigest.summary.response_parser import ResponseParseError, parse_reply

if TYPE_CHECKING:
    from docdigest.cache.base_cache_store import BaseCacheStore
    from docdigest.config.settings import Settings
    from docdigest.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


class SummaryAndKeywordsService:
    """Produce a summary, keywords and keyword locations for a document.

    Args:
        settings: Application settings (prompt limits).
        llm_client: Completion client. None forces the fallback path.
        cache_store: Analysis cache. None disables caching.
    """

    def __init__(
        self,
        settings: Settings,
        llm_client: BaseLLMClient | None = None,
        cache_store: BaseCacheStore | None = None,
    ) -> None:
        self._settings = settings
        self._llm_client = llm_client
        self._cache_store = cache_store

    @classmethod
    def from_settings(cls, settings: Settings) -> SummaryAndKeywordsService:
        """Wire the LLM client and cache backend configured in settings."""
        from docdigest.cache.cache_factory import create_cache_store
        from docdigest.llm.client_factory import create_llm_client

        return cls(
            settings=settings,
            llm_client=create_llm_client(settings),
            cache_store=create_cache_store(settings),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate_summary_and_keywords(
        self, cells: Sequence[SemanticCell],
    ) -> SummaryAndKeywords:
        """Return the analysis result for ``cells``. Never raises."""
        outcome = await self.analyze(cells)
        return outcome.result

    async def generate_summary(self, cells: Sequence[SemanticCell]) -> str:
        """Summary-only view of generate_summary_and_keywords()."""
        return (await self.generate_summary_and_keywords(cells)).summary

    async def extract_keywords(self, cells: Sequence[SemanticCell]) -> list[str]:
        """Keywords-only view of generate_summary_and_keywords()."""
        return list((await self.generate_summary_and_keywords(cells)).keywords)

    async def analyze(self, cells: Sequence[SemanticCell]) -> AnalysisOutcome:
        """Run the pipeline and report which path produced the result."""
        start = time.monotonic()
        set_request_context(uuid.uuid4().hex[:12])
        try:
            outcome = await self._run(cells)
        except Exception:
            # Last line of defence: the stages below already absorb their
            # own failures.
            logger.exception("Unexpected failure in summary pipeline")
            outcome = self._fallback(cells, "error")
        finally:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            set_stage(None)

        logger.info(
            "Summary pipeline finished via %s in %d ms", outcome.path, elapsed_ms,
            extra={"data": {
                "path": outcome.path,
                "keywords": len(outcome.result.keywords),
                "reason": getattr(outcome, "reason", None),
            }},
        )
        clear_context()
        return outcome

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _run(self, cells: Sequence[SemanticCell]) -> AnalysisOutcome:
        set_stage("hash")
        fingerprint = compute_document_hash(cells)
        set_fingerprint(fingerprint)

        set_stage("cache_check")
        cached = await self._cache_lookup(fingerprint)
        if cached is not None:
            logger.info("Using cached analysis, skipping LLM call")
            return CacheHit(result=cached, fingerprint=fingerprint)  # type: ignore[arg-type]

        set_stage("credential_check")
        if self._llm_client is None:
            logger.warning("No LLM API key configured, generating fallback summary")
            return self._fallback(cells, "no_credentials")

        set_stage("prompt")
        selected = select_prompt_cells(
            cells,
            threshold=self._settings.prompt_structural_threshold,
            limit=self._settings.prompt_max_cells,
        )
        prompt = build_prompt(selected, max_chars=self._settings.prompt_cell_chars)
        logger.debug("Prompt built from %d of %d cells", len(selected), len(cells))

        set_stage("call")
        try:
            response = await self._llm_client.complete(prompt)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            return self._fallback(cells, "llm_error")

        if not response.content:
            logger.warning("LLM returned no text (%s)", response.error or "empty")
            return self._fallback(cells, "empty_response")
        logger.debug(
            "LLM reply: %d chars, %d ms, %d/%d tokens",
            len(response.content), response.latency_ms,
            response.input_tokens, response.output_tokens,
        )

        set_stage("parse")
        return await self._parse_stage(response.content, cells, fingerprint)

    async def _parse_stage(
        self,
        response: str,
        cells: Sequence[SemanticCell],
        fingerprint: str | None,
    ) -> AnalysisOutcome:
        try:
            reply = parse_reply(response)
            locations = find_keyword_locations(reply.keywords, cells)
            result = SummaryAndKeywords(
                summary=reply.summary,
                keywords=reply.keywords,
                keyword_locations=locations,
            )
        except ResponseParseError as e:
            logger.warning("Could not parse LLM reply, using fallback: %s", e)
            return self._fallback(cells, "parse_error")
        except Exception:
            logger.warning("Reply processing failed, using fallback", exc_info=True)
            return self._fallback(cells, "parse_error")

        cached = await self._cache_store_result(fingerprint, result)
        logger.info(
            "Parsed LLM reply: summary %d chars, %d keywords",
            len(result.summary), len(result.keywords),
        )
        return ModelSuccess(result=result, fingerprint=fingerprint, cached=cached)

    def _fallback(
        self, cells: Sequence[SemanticCell], reason: FallbackReason,
    ) -> Fallback:
        logger.info("Using fallback summary (%s)", reason)
        return Fallback(result=build_fallback(cells), reason=reason)

    # ------------------------------------------------------------------
    # Cache helpers: failures degrade to "uncached", never to an error
    # ------------------------------------------------------------------

    async def _cache_lookup(self, fingerprint: str | None) -> SummaryAndKeywords | None:
        if fingerprint is None or self._cache_store is None:
            return None
        try:
            entry = await self._cache_store.get(fingerprint)
        except Exception:
            logger.warning("Cache lookup failed, treating as miss", exc_info=True)
            return None
        return entry.to_result() if entry is not None else None

    async def _cache_store_result(
        self, fingerprint: str | None, result: SummaryAndKeywords,
    ) -> bool:
        if fingerprint is None or self._cache_store is None:
            return False
        try:
            await self._cache_store.store_analysis(
                fingerprint,
                result.summary,
                result.keywords,
                result.keyword_locations,
            )
        except Exception:
            logger.warning("Cache write failed, result not cached", exc_info=True)
            return False
        return True
