"""Results of ffmpeg processing operations."""

from pathlib import Path

from pydantic import BaseModel, Field

from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution


class FFmpegVersion(BaseModel):
    """Version information reported by ``ffmpeg -version``."""

    version: str = Field(description="Parsed version token, or 'Unknown'")
    full_output: str = Field(description="Complete stdout of the command")


class ResizeOutcome(BaseModel):
    """Result of rendering one target resolution."""

    resolution: Resolution
    output_path: Path
    success: bool
    error: str | None = Field(default=None, description="Failure reason")


class AudioExtraction(BaseModel):
    """Result of extracting an audio track."""

    format: AudioFormat
    output_path: Path
