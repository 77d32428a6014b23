"""Runtime configuration."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Blur settings, overridable via ``STAGBLUR_*`` environment variables.

    Invalid values raise ``pydantic.ValidationError`` when the settings are
    loaded.
    """

    # Parallel kernel
    WORKERS: int | None = Field(default=None, ge=1)  # None = os.cpu_count()
    TILE_ROWS: int | None = Field(default=None, ge=1)  # None = split rows evenly across workers

    # Comparison
    TOLERANCE: int = Field(default=1, ge=0)  # Max per-sample difference between the two kernels

    # Output
    SERIAL_SUFFIX: str = "serial"
    PARALLEL_SUFFIX: str = "parallel"

    LOG_LEVEL: LogLevel = "WARNING"

    model_config = {"env_prefix": "STAGBLUR_"}

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
