"""Environment-driven settings for open-tick tooling."""

import logging
import os
from dataclasses import dataclass

ON_ERROR_CHOICES = ("skip", "abort")
OUTPUT_FORMATS = ("table", "json", "csv")


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    on_error: str = "skip"
    output_format: str = "table"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        OPEN_TICK_LOG_LEVEL: logging level name (default WARNING)
        OPEN_TICK_ON_ERROR: "skip" or "abort" (default skip)
        OPEN_TICK_OUTPUT_FORMAT: "table", "json" or "csv" (default table)
        """
        level_name = os.getenv("OPEN_TICK_LOG_LEVEL", "WARNING").strip().upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ValueError(f"Invalid OPEN_TICK_LOG_LEVEL: {level_name}")

        on_error = os.getenv("OPEN_TICK_ON_ERROR", "skip").strip().lower()
        if on_error not in ON_ERROR_CHOICES:
            raise ValueError(f"Invalid OPEN_TICK_ON_ERROR: {on_error}")

        output_format = os.getenv("OPEN_TICK_OUTPUT_FORMAT", "table").strip().lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid OPEN_TICK_OUTPUT_FORMAT: {output_format}")

        return cls(
            log_level=log_level,
            on_error=on_error,
            output_format=output_format,
        )
