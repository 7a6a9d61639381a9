"""Configuration Management."""

from functools import lru_cache
from typing import Annotated
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Compiler settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="FLURRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Compilation
    strict_attributes: bool = Field(
        default=False, description="Reject unrecognized and duplicate attributes"
    )

    # Caching
    enable_cache: bool = Field(default=True, description="Enable parse result caching")
    cache_size: int = Field(default=128, gt=0, description="Cache max size")
    cache_ttl: Annotated[int, Field(gt=0)] | None = Field(default=None, description="Cache TTL (seconds)")

    # Limits
    max_source_length: int = Field(
        default=256 * 1024, gt=0, description="Max source size in bytes"
    )
    max_depth: int = Field(default=64, gt=0, le=200, description="Max element nesting depth")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
