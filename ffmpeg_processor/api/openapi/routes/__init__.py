"""API route handlers."""

from ffmpeg_processor.api.openapi.routes import health, media

__all__ = [
    "health",
    "media",
]
