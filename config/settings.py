"""Pydantic settings for the yield allocation sandbox."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Allocation
    risk_free_rate: float = Field(default=2.0, ge=0.0, le=100.0, description="Risk-free rate (percent) for scoring")
    min_investment_amount: float = Field(default=100.0, gt=0, description="Smallest amount accepted for optimization")
    rebalance_interval_days: int = Field(default=30, ge=1, le=365, description="Days until suggested rebalance")

    # Simulation
    default_simulation_days: int = Field(default=30, ge=1, description="Default simulation horizon in days")
    max_simulation_days: int = Field(default=3650, ge=1, description="Longest accepted simulation horizon")
    random_seed: Optional[int] = Field(default=None, description="Seed for the random source (None = unseeded)")

    # Catalog
    catalog_path: Optional[Path] = Field(default=None, description="JSON file with protocol records")

    # Sessions
    default_session_id: str = Field(default="anonymous", description="Session key used when none is supplied")

    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("catalog_path", mode="before")
    @classmethod
    def parse_catalog_path(cls, v):
        """Convert string to Path, treating blanks as unset."""
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Upper-case the level name."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
