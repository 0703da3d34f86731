# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides sample cells, isolated settings and a stub LLM client.
No external dependencies — all I/O is mocked or uses tmp_path.
"""

from __future__ import annotations

import pytest

from docdigest.config.settings import Settings
from docdigest.core.models import SemanticCell
from docdigest.llm.base_client import BaseLLMClient
from docdigest.llm.models import LLMResponse


class StubLLMClient(BaseLLMClient):
    """Returns a canned reply and records every prompt it receives."""

    def __init__(self, content: str = "", exc: Exception | None = None) -> None:
        self.content = content
        self.exc = exc
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        if self.exc is not None:
            raise self.exc
        return LLMResponse(
            content=self.content, model="gemini-pro", provider="stub",
            error=None if self.content else "empty_candidates",
        )

    @property
    def provider_name(self) -> str:
        return "stub"

    @property
    def model_name(self) -> str:
        return "gemini-pro"


def make_cell(
    cell_id: str, content: str, score: float = 0.5, header: bool = False,
) -> SemanticCell:
    return SemanticCell(
        id=cell_id, content=content, structural_score=score, is_header=header,
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer env vars from leaking into Settings()."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake key and in-memory cache."""
    return Settings(_env_file=None, gemini_api_key="test-key", cache_backend="memory")


@pytest.fixture
def sample_cells() -> list[SemanticCell]:
    """Small document: two headers and three body cells."""
    return [
        make_cell("c1", "Introduction to Cybersecurity", score=0.9, header=True),
        make_cell("c2", "The NIS2 Directive regulates cybersecurity in the EU.", score=0.4),
        make_cell("c3", "Scope and Entities", score=0.8, header=True),
        make_cell("c4", "Essential entities must report incidents within 24 hours.", score=0.3),
        make_cell("c5", "Member states transpose NIS2 into national law.", score=0.2),
    ]


@pytest.fixture
def stub_llm() -> StubLLMClient:
    return StubLLMClient(
        content='{"summary": "The document covers NIS2.", "keywords": ["NIS2", "entities"]}'
    )


@pytest.fixture
def cell_factory():
    """Factory for SemanticCell instances."""
    return make_cell


@pytest.fixture
def stub_llm_factory():
    """Factory for StubLLMClient instances with a custom reply or error."""
    return StubLLMClient
