"""Domain layer - media value objects, models and errors."""

from ffmpeg_processor.domain.exceptions import (
    DomainException,
    FFmpegExecutionException,
    FFmpegNotAvailableException,
    InvalidResolutionException,
    MediaFileNotFoundException,
    OutputDirectoryNotWritableException,
    PermissionDeniedException,
    ProbeParseException,
    UnsupportedAudioFormatException,
    UnsupportedUploadException,
    UploadTooLargeException,
)
from ffmpeg_processor.domain.models import (
    AudioExtraction,
    FFmpegVersion,
    FormatInfo,
    MediaInfo,
    ResizeOutcome,
    StreamInfo,
)
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution

__all__ = [
    # Exceptions
    "DomainException",
    "MediaFileNotFoundException",
    "OutputDirectoryNotWritableException",
    "PermissionDeniedException",
    "InvalidResolutionException",
    "UnsupportedAudioFormatException",
    "UnsupportedUploadException",
    "UploadTooLargeException",
    "FFmpegNotAvailableException",
    "FFmpegExecutionException",
    "ProbeParseException",
    # Models
    "MediaInfo",
    "FormatInfo",
    "StreamInfo",
    "FFmpegVersion",
    "ResizeOutcome",
    "AudioExtraction",
    # Value objects
    "Resolution",
    "AudioFormat",
]
