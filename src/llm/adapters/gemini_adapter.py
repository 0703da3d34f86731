# src/llm/adapters/gemini_adapter.py — v2
"""Google Gemini adapter implementing BaseLLMClient.

Talks to the generateContent REST endpoint directly with httpx:

    POST {api_base}{model}:generateContent?key=...
    {"contents": [{"parts": [{"text": <prompt>}]}]}

and reads ``candidates[0].content.parts[0].text`` from the reply.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from docdigest.llm.base_client import BaseLLMClient
from docdigest.llm.models import LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models/"


def build_request_body(prompt: str) -> dict[str, Any]:
    """Build the generateContent request payload for a single text part."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_candidate_text(body: Any) -> str:
    """Return the first candidate's first text part, or "" if malformed."""
    if not isinstance(body, dict):
        return ""
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def _as_int(value: Any) -> int:
    return value if isinstance(value, int) else 0


class GeminiAdapter(BaseLLMClient):
    """Google Gemini adapter over the REST API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-pro",
        api_base: str = DEFAULT_API_BASE,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._model = model
        self._api_base = api_base if api_base.endswith("/") else f"{api_base}/"
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def endpoint(self) -> str:
        """generateContent URL for the configured model (without key)."""
        return f"{self._api_base}{self._model}:generateContent"

    async def complete(self, prompt: str) -> LLMResponse:
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s, transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=build_request_body(prompt),
                )
        except Exception as e:  # transport, timeout, invalid URL
            logger.error("Gemini API call failed: %s", type(e).__name__, exc_info=True)
            return self._empty(t0, error=f"transport: {type(e).__name__}")

        if not resp.is_success:
            logger.warning("Gemini API returned non-success status: %d", resp.status_code)
            return self._empty(t0, status_code=resp.status_code, error="status")

        try:
            body = resp.json()
        except ValueError:
            logger.error("Gemini API returned a non-JSON body")
            return self._empty(t0, status_code=resp.status_code, error="invalid_json")

        text = extract_candidate_text(body)
        if not text:
            logger.warning("Gemini API response had no candidate text")

        usage = body.get("usageMetadata") if isinstance(body, dict) else None
        usage = usage if isinstance(usage, dict) else {}
        return LLMResponse(
            content=text,
            input_tokens=_as_int(usage.get("promptTokenCount")),
            output_tokens=_as_int(usage.get("candidatesTokenCount")),
            model=self._model,
            provider=self.provider_name,
            latency_ms=int((time.monotonic() - t0) * 1000),
            status_code=resp.status_code,
            error=None if text else "empty_candidates",
            raw_response=body,
        )

    def _empty(
        self, t0: float, status_code: int | None = None, error: str | None = None,
    ) -> LLMResponse:
        return LLMResponse(
            content="",
            model=self._model,
            provider=self.provider_name,
            latency_ms=int((time.monotonic() - t0) * 1000),
            status_code=status_code,
            error=error,
        )

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model_name(self) -> str:
        return self._model
