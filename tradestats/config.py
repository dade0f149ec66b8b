"""Application configuration loaded from environment variables and .env file."""

from __future__ import annotations

import logging
import sys
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tradestats configuration.

    Values are loaded from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Paths
    trades_path: str = "data/trades.json"
    output_path: str = "output/"

    # Logging
    log_level: str = "INFO"

    # Calendar keys (month, weekday, hour, day) are taken in this zone
    timezone: str = "UTC"

    # Analytics defaults
    default_period: Literal["all", "week", "month", "quarter"] = "all"
    rolling_window_size: int = 20
    rolling_window_min: int = 5
    profit_factor_cap: float = 999.0

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: '{v}'") from None
        return v

    @field_validator("rolling_window_size", "rolling_window_min")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("rolling window sizes must be positive")
        return v

    @field_validator("profit_factor_cap")
    @classmethod
    def validate_profit_factor_cap(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("profit_factor_cap must be positive")
        return v

    @model_validator(mode="after")
    def validate_window_bounds(self) -> Settings:
        if self.rolling_window_min > self.rolling_window_size:
            raise ValueError("rolling_window_min must not exceed rolling_window_size")
        return self

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging with console and file handlers.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    # Clear existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    # File handler writes to data/tradestats.log when data/ exists
    try:
        file_handler = logging.FileHandler("data/tradestats.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)
    except OSError:
        pass


# Module-level singleton
settings = Settings()
