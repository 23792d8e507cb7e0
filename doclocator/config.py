# doclocator/config.py
"""
doclocator configuration: single source of truth via Pydantic Settings.

Resolution order: CLI flags > env vars (DOCLOCATOR_*) > .env file > defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PASSAGE_LENGTH_MIN = 50
PASSAGE_LENGTH_MAX = 2000
PASSAGE_LENGTH_DEFAULT = 400

DEFAULT_BODY_FIELD = "text"
EMPTY_RESULT_TEXT = "Excerpt unavailable."


def clamp_passage_length(value: Optional[int]) -> int:
    """Clamp a requested passage length to [50, 2000]; unset means 400."""
    if value is None:
        return PASSAGE_LENGTH_DEFAULT
    return max(PASSAGE_LENGTH_MIN, min(int(value), PASSAGE_LENGTH_MAX))


class DoclocatorConfig(BaseSettings):
    """Central configuration for result display and evidence location."""

    model_config = SettingsConfigDict(
        env_prefix="DOCLOCATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Display fields ---
    title_field: Optional[str] = None
    body_field: Optional[str] = None
    # Field shown as body when no body_field is configured.
    default_body_field: str = DEFAULT_BODY_FIELD
    # None: use passages whenever a result has any.
    use_passages: Optional[bool] = None
    passage_length: int = PASSAGE_LENGTH_DEFAULT
    render_html: bool = False

    # --- Messages ---
    empty_result_text: str = EMPTY_RESULT_TEXT
    no_results_text: str = "There were no results found"
    collection_label: str = "Collection:"

    # --- Logging ---
    log_level: str = "INFO"

    # --- Paths ---
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".doclocator")

    @property
    def log_dir(self) -> Path:
        return self.home_dir / "logs"

    @field_validator("passage_length", mode="before")
    @classmethod
    def _clamp_passage_length(cls, value: object) -> int:
        if value is None or value == "":
            return PASSAGE_LENGTH_DEFAULT
        return clamp_passage_length(int(value))  # type: ignore[arg-type]


@lru_cache(maxsize=1)
def get_config() -> DoclocatorConfig:
    """Return the global config singleton."""
    return DoclocatorConfig()
