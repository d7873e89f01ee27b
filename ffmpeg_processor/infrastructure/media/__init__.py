"""Media processing backends."""

from ffmpeg_processor.infrastructure.media.base import MediaProcessorBase
from ffmpeg_processor.infrastructure.media.ffmpeg import FFmpegMediaProcessor

__all__ = [
    "MediaProcessorBase",
    "FFmpegMediaProcessor",
]
