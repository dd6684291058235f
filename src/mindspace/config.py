"""Analyzer and tracker configuration, read from MINDSPACE_* environment variables."""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from mindspace.core.constants import (
    DEFAULT_CRISIS_KEYWORDS,
    DEFAULT_HISTORY_SIZE,
    DEFAULT_MAX_TEXT_LENGTH,
    DEFAULT_TOP_EMOTIONS,
    DEFAULT_TREND_WINDOW,
)


class Settings(BaseSettings):
    """Runtime limits for the analyzer and the per-user tracker."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Core
    env: Literal["development", "staging", "production"] = Field(
        default="development", alias="MINDSPACE_ENV"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="MINDSPACE_LOG_LEVEL"
    )

    # Analysis
    max_text_length: int = Field(
        default=DEFAULT_MAX_TEXT_LENGTH,
        alias="MINDSPACE_MAX_TEXT_LENGTH",
        description="Longest message (in characters) the analyzer accepts",
    )
    top_emotions: int = Field(
        default=DEFAULT_TOP_EMOTIONS,
        alias="MINDSPACE_TOP_EMOTIONS",
        description="Number of emotions reported in all_emotions",
    )

    # Continuous tracking
    history_size: int = Field(
        default=DEFAULT_HISTORY_SIZE,
        alias="MINDSPACE_HISTORY_SIZE",
        description="Messages retained per user for trend analysis",
    )
    trend_window: int = Field(
        default=DEFAULT_TREND_WINDOW,
        alias="MINDSPACE_TREND_WINDOW",
        description="Most recent entries used to compute trend direction",
    )
    crisis_keywords: Annotated[list[str], NoDecode] = Field(
        default=list(DEFAULT_CRISIS_KEYWORDS),
        alias="MINDSPACE_CRISIS_KEYWORDS",
        description="Phrases in recent messages that escalate tracked risk to critical",
    )

    @field_validator("max_text_length", "top_emotions", "history_size", "trend_window")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("crisis_keywords", mode="before")
    @classmethod
    def parse_crisis_keywords(cls, v: str | list[str] | None) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                v = json.loads(v)
            else:
                v = [k.strip() for k in v.split(",") if k.strip()]
        return [k.lower() for k in v]

    @property
    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, loaded once."""
    return Settings()
