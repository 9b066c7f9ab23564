"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_TIMEZONE = "America/Halifax"  # Atlantic Time
DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_MAX_TOKENS = 1000


class PublisherConfig(BaseModel):
    """Settings for one pipeline run.

    Built once at startup and handed to each component. Secrets are not
    checked here: a missing key or endpoint shows up as a failure of the
    step that needs it.
    """

    model_config = ConfigDict(frozen=True)

    # Service credentials and targets
    claude_api_key: str | None = None
    hosting_endpoint: str | None = None
    podcast_id: str | None = None

    # Scheduling
    source_timezone: str = DEFAULT_TIMEZONE

    # Metadata generation
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)

    # Where converted audio is written (None: current working directory)
    output_dir: Path | None = None

    log_level: LogLevel = "INFO"

    @field_validator("source_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value
