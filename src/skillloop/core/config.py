"""Application settings for the SkillLoop service."""

from functools import lru_cache
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="SKILLLOOP_",
        env_file=".env",
        case_sensitive=False,
    )

    database_url: str = Field(
        default="sqlite:///./skillloop.db",
        description="SQLAlchemy database URL holding the snapshot table.",
    )
    snapshot_key: str = Field(
        default="skillloop_db",
        description="Key of the aggregate snapshot document.",
    )
    campus_domain: str = Field(
        default="@krce.ac.in",
        description="Email suffix every account must carry.",
    )
    initial_points: int = Field(default=10, ge=0, description="Points granted at signup.")
    points_per_hour: int = Field(default=10, gt=0, description="Session cost per hour of mentoring.")
    allowed_durations: Tuple[int, ...] = Field(
        default=(30, 60, 90, 120),
        description="Session lengths in minutes a learner may request.",
    )
    block_overdrawn_completion: bool = Field(
        default=False,
        description="Refuse completions that would drive the learner balance below zero.",
    )
    gemini_api_key: Optional[str] = Field(default=None, description="Google Generative AI key.")
    gemini_model: str = Field(default="gemini-2.0-flash", description="Model used for advisor text.")
    advisor_timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        description="Upper bound for a single advisor call before its fallback is used.",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
