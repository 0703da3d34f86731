# src/llm/base_client.py — v2
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docdigest.llm.models import LLMResponse


class BaseLLMClient(ABC):
    """Unified interface for text-completion providers.

    Implementations make at most one attempt per call and never raise:
    every failure is reported as an LLMResponse with empty content.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> LLMResponse:
        """Single-turn text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, ...)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier sent to the provider."""
