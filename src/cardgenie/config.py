"""
Configuration for the highlight scorer and mastery scoring.

Values come from (highest precedence first):
1. Explicit overrides passed to load_config / the constructors
2. Environment variables (CARDGENIE_HIGHLIGHT_*, CARDGENIE_MASTERY_*)
3. Defaults below

Both models are frozen; build them once at startup and pass them in.
"""

from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KEYWORDS = (
    "important",
    "key",
    "remember",
    "critical",
    "definition",
    "therefore",
    "exam",
)


class HighlightConfig(BaseSettings):
    """Signal weights and thresholds for automatic highlight detection."""

    model_config = SettingsConfigDict(
        env_prefix="CARDGENIE_HIGHLIGHT_",
        frozen=True,
        extra="ignore",
    )

    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    emphasis_chars: str = "!?"

    # Stripped text of this length or shorter is rejected outright
    min_length: int = Field(default=40, ge=0)
    long_text_length: int = Field(default=180, ge=0)

    base_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    keyword_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    max_keyword_hits: int = Field(default=3, ge=0)
    emphasis_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    max_emphasis_hits: int = Field(default=2, ge=0)
    length_bonus: float = Field(default=0.1, ge=0.0, le=1.0)

    # Accepted only when confidence is strictly above this
    acceptance_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    confidence_cap: float = Field(default=0.95, ge=0.0, le=1.0)

    summary_max_length: int = Field(default=140, gt=0)

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v: Any) -> tuple[str, ...]:
        if isinstance(v, str):
            v = v.split(",")
        return tuple(k.strip().lower() for k in v if k and k.strip())

    @model_validator(mode="after")
    def check_threshold_below_cap(self) -> "HighlightConfig":
        if self.acceptance_threshold >= self.confidence_cap:
            raise ValueError("acceptance_threshold must be below confidence_cap")
        return self


class MasteryConfig(BaseSettings):
    """Deck mastery settings used for study-plan generation."""

    model_config = SettingsConfigDict(
        env_prefix="CARDGENIE_MASTERY_",
        frozen=True,
        extra="ignore",
    )

    ceiling_days: int = Field(default=180, gt=0)
    target_percent: float = Field(default=85.0, ge=0.0, le=100.0)


def load_config(
    highlight_overrides: dict[str, Any] | None = None,
    mastery_overrides: dict[str, Any] | None = None,
) -> tuple[HighlightConfig, MasteryConfig]:
    return (
        HighlightConfig(**(highlight_overrides or {})),
        MasteryConfig(**(mastery_overrides or {})),
    )
