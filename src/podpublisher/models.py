"""Data models for the publishing pipeline.

This module defines Pydantic models for:
- The episode request built from the command line
- Episode metadata generated from the reference page
- The converted audio asset
- The single result record printed at the end of a run
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EpisodeRequest(BaseModel):
    """Input for one pipeline run.

    Example:
        >>> request = EpisodeRequest(
        ...     audio_file_path=Path("recordings/episode42.wav"),
        ...     content_url="https://example.com/post",
        ...     publish_date="2023-05-15",
        ...     publish_time="10:30",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    audio_file_path: Path = Field(..., description="Local recording to publish")
    content_url: str = Field(..., description="Reference page for metadata")
    publish_date: str = Field(..., description="Publish date (YYYY-MM-DD), local")
    publish_time: str = Field(..., description="Publish time (HH:MM), local")


class EpisodeMetadata(BaseModel):
    """Title, description and keywords describing an episode."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    keywords: list[str] = Field(default_factory=list)


class AudioAsset(BaseModel):
    """A recording and its converted MP3."""

    original_path: Path
    converted_path: Path
    duration_minutes: int = Field(0, ge=0)


class PipelineStage(str, Enum):
    """States of a pipeline run, in the order they are reached."""

    START = "start"
    METADATA_GENERATED = "metadata_generated"
    DURATION_PROBED = "duration_probed"
    AUDIO_CONVERTED = "audio_converted"
    UPLOADED = "uploaded"
    DONE = "done"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """Terminal outcome of a run.

    ``to_output()`` gives the record printed once per run. ``stage`` and
    ``warnings`` stay in-process.
    """

    success: bool
    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    duration_minutes: int | None = None
    hosting_response: Any = None
    error: str | None = None
    error_type: str | None = None

    stage: PipelineStage = PipelineStage.START
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def failed(
        cls,
        error: str,
        error_type: str,
        stage: PipelineStage = PipelineStage.FAILED,
        warnings: list[str] | None = None,
    ) -> "PipelineResult":
        """Build a failure result."""
        return cls(
            success=False,
            error=error,
            error_type=error_type,
            stage=stage,
            warnings=warnings or [],
        )

    def to_output(self) -> dict[str, Any]:
        """Return the printed shape of this result."""
        if not self.success:
            return {"success": False, "error": self.error, "type": self.error_type}

        return {
            "success": True,
            "title": self.title,
            "description": self.description,
            "keywords": self.keywords or [],
            "duration_minutes": self.duration_minutes,
            "hosting_response": self.hosting_response,
        }
