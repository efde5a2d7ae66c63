"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="MAZEDIG_",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Digger"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080,http://127.0.0.1:5500"

    # Rate limiting
    rate_limit_mazes: int = 30  # maze generations per minute

    # Maze generation
    default_width: int = 160
    default_height: int = 160
    max_dimension: int = 200  # dig time grows with the square of the cell count
    scale: int = 6
    turn_probability: float = 0.2
    relocate_probability: float = 0.05

    # Animation cadence
    dig_interval_ms: int = 200
    run_interval_ms: int = 100

    # Runners
    max_runner_steps: int = 200_000
    max_step_batch: int = 10_000

    @field_validator("default_width", "default_height")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        """Dimensions must be positive and even for the two-cell dig stride."""
        if v <= 0 or v % 2:
            raise ValueError("Maze dimensions must be positive even integers")
        return v

    @field_validator("turn_probability", "relocate_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Probabilities must be between 0 and 1")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
