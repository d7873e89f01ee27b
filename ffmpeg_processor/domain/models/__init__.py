"""Domain models."""

from ffmpeg_processor.domain.models.media_info import FormatInfo, MediaInfo, StreamInfo
from ffmpeg_processor.domain.models.processing import (
    AudioExtraction,
    FFmpegVersion,
    ResizeOutcome,
)

__all__ = [
    # Probe
    "MediaInfo",
    "FormatInfo",
    "StreamInfo",
    # Processing
    "FFmpegVersion",
    "ResizeOutcome",
    "AudioExtraction",
]
