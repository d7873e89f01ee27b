"""Application layer - use cases and orchestration.

This layer contains:
- Services: validation, permission checks and delegation to ffmpeg
- DTOs: Data transfer objects for API boundaries
"""

from ffmpeg_processor.application.dtos import (
    ExtractAudioRequest,
    ExtractAudioResponse,
    ResizeResponse,
    ResizeVideoRequest,
)
from ffmpeg_processor.application.services import MediaService, UploadStorage

__all__ = [
    # DTOs
    "ResizeVideoRequest",
    "ExtractAudioRequest",
    "ResizeResponse",
    "ExtractAudioResponse",
    # Services
    "MediaService",
    "UploadStorage",
]
