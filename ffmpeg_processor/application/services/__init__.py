"""Application services for media processing and uploads."""

from ffmpeg_processor.application.services.formatting import (
    format_media_info,
    format_resize_summary,
    format_version,
)
from ffmpeg_processor.application.services.media import MediaService
from ffmpeg_processor.application.services.uploads import UploadStorage

__all__ = [
    "MediaService",
    "UploadStorage",
    "format_media_info",
    "format_resize_summary",
    "format_version",
]
