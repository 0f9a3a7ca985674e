"""Configuration management for the referral matcher.

All configuration is loaded from environment variables and/or .env file.
Matching parameters default to the values the reward schedule was built for.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root detection
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = PROJECT_ROOT / ".env"

DEFAULT_REWARD_TIERS = [0, 10, 15, 20, 30, 50]


class Settings(BaseSettings):
    """
    Runtime configuration powered by environment variables and .env overrides.

    All settings can be configured via:
    1. Environment variables (highest priority)
    2. .env file in project root (loaded automatically)
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=ENV_FILE if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Address Matching
    # -------------------------------------------------------------------------
    fingerprint_prefix_length: int = Field(
        default=5,
        alias="FINGERPRINT_PREFIX_LENGTH",
        ge=1,
        description="Leading characters (0x included) kept in a fingerprint.",
    )
    fingerprint_suffix_length: int = Field(
        default=4,
        alias="FINGERPRINT_SUFFIX_LENGTH",
        ge=1,
        description="Trailing characters kept in a fingerprint.",
    )
    mask_fill: str = Field(default="******", alias="MASK_FILL")
    normalization_mode: str = Field(
        default="lenient",
        alias="NORMALIZATION_MODE",
        description="'lenient' touches case/prefix only, 'strict' also drops non-hex characters.",
    )

    # -------------------------------------------------------------------------
    # Reward Schedule
    # -------------------------------------------------------------------------
    reward_tiers: List[int] = Field(
        default_factory=lambda: list(DEFAULT_REWARD_TIERS),
        alias="REWARD_TIERS",
    )
    reward_token: str = Field(default="UXUY", alias="REWARD_TOKEN")

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")  # "text" or "json"
    environment: str = Field(default="local", alias="ENVIRONMENT")
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT", ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Ensure log format is valid."""
        lower = v.lower()
        if lower not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return lower

    @field_validator("normalization_mode")
    @classmethod
    def validate_normalization_mode(cls, v: str) -> str:
        """Ensure normalization mode is known."""
        lower = v.lower()
        if lower not in {"lenient", "strict"}:
            raise ValueError("normalization_mode must be 'lenient' or 'strict'")
        return lower

    @field_validator("reward_tiers")
    @classmethod
    def validate_reward_tiers(cls, v: List[int]) -> List[int]:
        """Sort tiers, drop repeats and make sure the unmatched tier (0) exists."""
        if any(amount < 0 for amount in v):
            raise ValueError("reward_tiers must be non-negative")
        return sorted(set(v) | {0})

    @model_validator(mode="after")
    def validate_mask_fill(self) -> "Settings":
        """A blank mask would make masked and unmasked display forms ambiguous."""
        if not self.mask_fill:
            raise ValueError("mask_fill must not be empty")
        return self

    @property
    def strict_normalization(self) -> bool:
        return self.normalization_mode == "strict"

    @property
    def minimum_fingerprint_length(self) -> int:
        """Shortest normalized address that can still be fingerprinted."""
        return self.fingerprint_prefix_length + self.fingerprint_suffix_length


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached. To reload settings,
    call `get_settings.cache_clear()` first.

    Returns:
        Settings object with all configuration.
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Clear settings cache and reload from environment.

    Useful for testing or after modifying .env file.
    """
    get_settings.cache_clear()
    return get_settings()
