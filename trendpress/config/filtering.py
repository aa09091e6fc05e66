"""Keyword quality filter configuration.

Extra stopwords and allowed terms are lowercased on load.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from trendpress.config.validators import normalize_string_list
from trendpress.core.config import Config


class QualityFilterConfig(BaseModel):
    """Keyword quality filter configuration.

    Attributes:
        min_length: Shortest accepted keyword
        max_length: Longest accepted keyword
        short_acronym_max_length: Latin-only terms up to this length are rejected
        extra_stopwords: Added to the built-in stopword set
        allowed_terms: Removed from the stopword set and exempt from the acronym rule
    """

    min_length: int = Field(default=2, ge=1)
    max_length: int = Field(default=15, ge=2, le=100)
    short_acronym_max_length: int = Field(default=3, ge=0, le=10)
    extra_stopwords: list[str] = Field(default_factory=list)
    allowed_terms: list[str] = Field(default_factory=list)

    @field_validator("extra_stopwords", "allowed_terms", mode="before")
    @classmethod
    def lowercase_terms(cls, v: list[str]) -> list[str]:
        """Normalize term lists to lowercase."""
        return normalize_string_list(v)

    @model_validator(mode="after")
    def check_bounds(self) -> "QualityFilterConfig":
        """Ensure the length bounds are ordered."""
        if self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) must not exceed max_length ({self.max_length})"
            )
        return self

    @classmethod
    def from_settings(cls, config: Config) -> "QualityFilterConfig":
        """Build from the environment-backed application config."""
        return cls(
            min_length=config.keyword_min_length,
            max_length=config.keyword_max_length,
            short_acronym_max_length=config.short_acronym_max_length,
            extra_stopwords=config.keyword_extra_stopwords,
            allowed_terms=config.keyword_allowed_terms,
        )


__all__ = ["QualityFilterConfig"]
