# tests/unit/config/test_unit_settings.py — v2
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from docdigest.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_model(self):
        s = Settings(_env_file=None)
        assert s.gemini_model == "gemini-pro"
        assert s.gemini_api_key == ""
        assert s.has_llm_credentials is False

    def test_default_prompt_limits(self):
        s = Settings(_env_file=None)
        assert s.prompt_structural_threshold == 0.6
        assert s.prompt_max_cells == 20
        assert s.prompt_cell_chars == 200

    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_enabled is True
        assert s.cache_backend == "json"


class TestSettingsEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "abc")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-1.5-flash")
        s = Settings(_env_file=None)
        assert s.has_llm_credentials is True
        assert s.gemini_model == "gemini-1.5-flash"

    def test_reads_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("GEMINI_API_KEY=from-file\nCACHE_BACKEND=memory\n", encoding="utf-8")
        s = Settings(_env_file=env)
        assert s.gemini_api_key == "from-file"
        assert s.cache_backend == "memory"

    def test_blank_key_is_no_credential(self):
        s = Settings(_env_file=None, gemini_api_key="   ")
        assert s.has_llm_credentials is False


class TestSettingsValidation:
    def test_redis_without_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis")

    def test_redis_with_url(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://x")
        assert s.cache_redis_url == "redis://x"

    def test_redis_ignored_when_cache_disabled(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_enabled=False)
        assert s.cache_enabled is False

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ConfigurationError, match="PROMPT_STRUCTURAL_THRESHOLD"):
            Settings(_env_file=None, prompt_structural_threshold=threshold)

    @pytest.mark.parametrize("threshold", [0.0, 1.0])
    def test_threshold_bounds_inclusive(self, threshold):
        s = Settings(_env_file=None, prompt_structural_threshold=threshold)
        assert s.prompt_structural_threshold == threshold

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("PROMPT_STRUCTURAL_THRESHOLD", "1.5")
        with pytest.raises(ConfigurationError, match="PROMPT_STRUCTURAL_THRESHOLD"):
            load_settings(_env_file=None)

    def test_non_positive_limits(self):
        with pytest.raises(ConfigurationError, match="PROMPT_MAX_CELLS"):
            Settings(_env_file=None, prompt_max_cells=0)

    def test_multiple_errors_joined(self):
        with pytest.raises(ConfigurationError, match="PROMPT_CELL_CHARS.*LLM_TIMEOUT_S"):
            Settings(_env_file=None, prompt_cell_chars=0, llm_timeout_s=0)

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="mongo")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, gemini_model="custom")
        assert s.gemini_model == "custom"
