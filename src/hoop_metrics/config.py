"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repo root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Settings loaded from the environment (HOOP_ prefix) or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HOOP_",
        extra="ignore",
        populate_by_name=True,
    )

    data_dir: Path = Field(default=DATA_DIR)
    database_name: str = Field(default="hoop_metrics.db")

    # AI trainer
    anthropic_api_key: str = Field(default="", validation_alias="ANTHROPIC_API_KEY")
    ai_model: str = Field(default="claude-sonnet-4-20250514")
    ai_workout_max_tokens: int = Field(default=2000)
    ai_insights_max_tokens: int = Field(default=1500)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None)
    log_rotation: str = Field(default="10 MB")
    log_retention: str = Field(default="14 days")

    # Bookkeeping
    completion_points: int = Field(default=50)
    leaderboard_size: int = Field(default=10)
    activity_feed_size: int = Field(default=10)
    seed_sample_inbox: bool = Field(default=True)

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_name


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
