# tests/unit/llm/test_unit_llm_client.py — v1
"""Tests for llm/base_client.py and llm/client_factory.py."""

from __future__ import annotations

import pytest

from docdigest.config.settings import Settings
from docdigest.llm.adapters.gemini_adapter import GeminiAdapter
from docdigest.llm.base_client import BaseLLMClient
from docdigest.llm.client_factory import create_llm_client
from docdigest.llm.models import LLMResponse


class TestBaseLLMClient:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLLMClient()  # type: ignore[abstract]

    def test_has_required_methods(self):
        assert hasattr(BaseLLMClient, "complete")
        assert hasattr(BaseLLMClient, "provider_name")
        assert hasattr(BaseLLMClient, "model_name")


class TestLLMResponse:
    def test_empty_is_not_ok(self):
        assert LLMResponse(model="m", provider="p").ok is False


class TestCreateLLMClient:
    def test_no_key_returns_none(self):
        assert create_llm_client(Settings(_env_file=None)) is None

    def test_key_returns_gemini(self):
        s = Settings(_env_file=None, gemini_api_key=" k ", gemini_model="gemini-1.5-pro")
        client = create_llm_client(s)
        assert isinstance(client, GeminiAdapter)
        assert client.model_name == "gemini-1.5-pro"
        assert client.provider_name == "google"
