# src/config/settings.py — v3
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM (Gemini generateContent REST API) ===
    # Empty key forces the heuristic fallback path.
    gemini_api_key: str = ""
    gemini_model: str = "gemini-pro"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta/models/"
    llm_timeout_s: float = 60.0

    # === Prompt ===
    prompt_structural_threshold: float = 0.6
    prompt_max_cells: int = 20
    prompt_cell_chars: int = 200

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.docdigest/cache")
    cache_redis_url: str = ""
    cache_ttl_s: int | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not 0.0 <= self.prompt_structural_threshold <= 1.0:
            errors.append("PROMPT_STRUCTURAL_THRESHOLD must be within [0, 1]")

        if self.cache_enabled and self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.prompt_max_cells <= 0:
            errors.append("PROMPT_MAX_CELLS must be > 0")

        if self.prompt_cell_chars <= 0:
            errors.append("PROMPT_CELL_CHARS must be > 0")

        if self.llm_timeout_s <= 0:
            errors.append("LLM_TIMEOUT_S must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def has_llm_credentials(self) -> bool:
        """Whether a Gemini API key is configured."""
        return bool(self.gemini_api_key.strip())


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
