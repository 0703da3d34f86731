# src/llm/client_factory.py — v3
"""Factory: instantiate the LLM client from settings.

Called by the summary service. Returns None when no credential is
configured, which forces the heuristic fallback path.
"""

from __future__ import annotations

import logging

from docdigest.config.settings import Settings
from docdigest.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


def create_llm_client(settings: Settings, **kwargs: object) -> BaseLLMClient | None:
    """Instantiate the Gemini adapter from settings.

    Args:
        settings: Application settings (API key, model, endpoint, timeout).
        **kwargs: Additional adapter arguments (e.g. an httpx transport).

    Returns:
        Configured BaseLLMClient, or None without an API key.
    """
    if not settings.has_llm_credentials:
        logger.debug("No Gemini API key configured, LLM client disabled")
        return None

    from docdigest.llm.adapters.gemini_adapter import GeminiAdapter

    logger.debug("Creating LLM client: provider=google, model=%s", settings.gemini_model)
    return GeminiAdapter(
        api_key=settings.gemini_api_key.strip(),
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
        timeout_s=settings.llm_timeout_s,
        **kwargs,  # type: ignore[arg-type]
    )
