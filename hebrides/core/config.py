"""
Library configuration.

Centralized settings read from environment variables prefixed ``HEBRIDES_``.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="HEBRIDES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_FILE: Optional[str] = None

    # Equality: |a - b| < machine epsilon * EPSILON_SCALE
    EPSILON_SCALE: float = Field(default=1.0, gt=0)

    # Defaults for explicit tolerance comparison (ElemValue.compare)
    COMPARE_TOLERANCE: float = Field(default=1e-9, ge=0)
    COMPARE_MODE: Literal["relative", "absolute", "sigfigs"] = "relative"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
