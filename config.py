"""
Configuration settings for the adaptive course path engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Path Generation
    # ========================================
    recommended_module_count: int = Field(
        default=3,
        ge=0,
        description="Number of leading modules flagged as recommended",
    )
    career_content_limit: int = Field(
        default=5,
        ge=0,
        description="Maximum career-relevant modules returned with a path",
    )

    # ========================================
    # Performance Analysis
    # ========================================
    answer_window_size: int = Field(
        default=20,
        ge=1,
        description="Most recent checkpoint answers considered for classification",
    )
    excellent_success_rate: float = Field(
        default=85.0,
        description="Minimum success rate (%) for the excellent level",
    )
    excellent_max_avg_seconds: float = Field(
        default=45.0,
        description="Average answer time must be below this for the excellent level",
    )
    struggling_success_rate: float = Field(
        default=60.0,
        description="Success rate (%) below which a learner is struggling",
    )
    struggling_max_avg_seconds: float = Field(
        default=90.0,
        description="Average answer time above which a learner is struggling",
    )
    weak_area_min_misses: int = Field(
        default=2,
        ge=1,
        description="Incorrect answers on one question before it counts as a weak area",
    )
    weak_area_limit: int = Field(
        default=5,
        ge=0,
        description="Maximum weak areas kept on a progress record",
    )

    # ========================================
    # Course Recommendation
    # ========================================
    course_recommendation_limit: int = Field(
        default=10,
        ge=0,
        description="Maximum courses returned by a recommendation",
    )

    def get_adaptive_config(self) -> dict[str, Any]:
        """Get adaptive engine configuration as a dictionary."""
        return {
            "path": {
                "recommended_module_count": self.recommended_module_count,
                "career_content_limit": self.career_content_limit,
            },
            "performance": {
                "answer_window_size": self.answer_window_size,
                "excellent": {
                    "min_success_rate": self.excellent_success_rate,
                    "max_avg_seconds": self.excellent_max_avg_seconds,
                },
                "struggling": {
                    "max_success_rate": self.struggling_success_rate,
                    "max_avg_seconds": self.struggling_max_avg_seconds,
                },
                "weak_areas": {
                    "min_misses": self.weak_area_min_misses,
                    "limit": self.weak_area_limit,
                },
            },
            "courses": {
                "recommendation_limit": self.course_recommendation_limit,
            },
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
