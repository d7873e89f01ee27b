"""Data transfer objects for the application layer."""

from ffmpeg_processor.application.dtos.media import (
    AudioFile,
    ExtractAudioRequest,
    ExtractAudioResponse,
    OutputFile,
    ResizedFile,
    ResizeResponse,
    ResizeVideoRequest,
)

__all__ = [
    # Requests
    "ResizeVideoRequest",
    "ExtractAudioRequest",
    # Responses
    "OutputFile",
    "ResizedFile",
    "AudioFile",
    "ResizeResponse",
    "ExtractAudioResponse",
]
