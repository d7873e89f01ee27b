"""Domain value objects."""

from ffmpeg_processor.domain.value_objects.audio_format import AudioFormat
from ffmpeg_processor.domain.value_objects.resolution import Resolution

__all__ = [
    "AudioFormat",
    "Resolution",
]
