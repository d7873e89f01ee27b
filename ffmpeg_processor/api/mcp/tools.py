"""MCP tool implementations for FFmpeg Processor."""

from typing import Any

from ffmpeg_processor.application.dtos.media import (
    ExtractAudioRequest,
    ResizeVideoRequest,
)
from ffmpeg_processor.application.services.formatting import (
    format_media_info,
    format_resize_summary,
    format_version,
)
from ffmpeg_processor.application.services.media import MediaService
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.domain.exceptions import (
    MediaFileNotFoundException,
    OutputDirectoryNotWritableException,
    PermissionDeniedException,
)
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution
from ffmpeg_processor.infrastructure.factory import InfrastructureFactory


class ToolError(Exception):
    """Raised by a tool to report a failure to the MCP client.

    The server turns it into an error result whose text is the message.
    """


def _create_media_service(
    factory: InfrastructureFactory,
    settings: Settings,
) -> MediaService:
    """Create media service from factory."""
    return MediaService(
        media_processor=factory.get_media_processor(),
        permission_gate=factory.get_permission_gate(),
        settings=settings,
    )


def _require_video_path(arguments: dict[str, Any]) -> str:
    video_path = arguments.get("videoPath")
    if not isinstance(video_path, str) or not video_path:
        raise ToolError("Error: videoPath is required")
    return video_path


def _reraise_user_facing(e: Exception) -> None:
    """Translate validation and permission failures into tool errors."""
    if isinstance(
        e, MediaFileNotFoundException | OutputDirectoryNotWritableException
    ):
        raise ToolError(f"Error: {e}") from e
    if isinstance(e, PermissionDeniedException):
        raise ToolError(str(e)) from e


async def get_ffmpeg_version_tool(
    factory: InfrastructureFactory,
    settings: Settings,
    arguments: dict[str, Any],  # noqa: ARG001
) -> str:
    """Report the installed ffmpeg version.

    Args:
        factory: Infrastructure factory.
        settings: Application settings.
        arguments: Tool arguments from MCP (unused).

    Returns:
        Version text.
    """
    service = _create_media_service(factory, settings)
    try:
        version = await service.get_ffmpeg_version()
    except Exception as e:
        raise ToolError(
            f"Error getting FFmpeg version: {e}\n\n"
            "Make sure FFmpeg is installed and in your PATH."
        ) from e
    return format_version(version)


async def resize_video_tool(
    factory: InfrastructureFactory,
    settings: Settings,
    arguments: dict[str, Any],
) -> str:
    """Resize a local video to one or more resolutions.

    Args:
        factory: Infrastructure factory.
        settings: Application settings.
        arguments: Tool arguments from MCP.

    Returns:
        Per-resolution summary.
    """
    video_path = _require_video_path(arguments)
    service = _create_media_service(factory, settings)

    try:
        raw = arguments.get("resolutions") or []
        request = ResizeVideoRequest(
            video_path=video_path,
            resolutions=[Resolution.parse(r) for r in raw],
            output_dir=arguments.get("outputDir"),
        )
        outcomes = await service.resize_video(request)
    except Exception as e:
        _reraise_user_facing(e)
        raise ToolError(f"Error resizing video: {e}") from e

    return format_resize_summary(outcomes)


async def extract_audio_tool(
    factory: InfrastructureFactory,
    settings: Settings,
    arguments: dict[str, Any],
) -> str:
    """Extract the audio track of a local video.

    Args:
        factory: Infrastructure factory.
        settings: Application settings.
        arguments: Tool arguments from MCP.

    Returns:
        Path of the extracted audio file.
    """
    video_path = _require_video_path(arguments)
    service = _create_media_service(factory, settings)

    try:
        request = ExtractAudioRequest(
            video_path=video_path,
            format=AudioFormat.parse(arguments.get("format") or "mp3"),
            output_dir=arguments.get("outputDir"),
        )
        extraction = await service.extract_audio(request)
    except Exception as e:
        _reraise_user_facing(e)
        raise ToolError(f"Error extracting audio: {e}") from e

    return f"Successfully extracted audio to: {extraction.output_path}"


async def get_video_info_tool(
    factory: InfrastructureFactory,
    settings: Settings,
    arguments: dict[str, Any],
) -> str:
    """Describe the format and streams of a local video."""
    video_path = _require_video_path(arguments)
    service = _create_media_service(factory, settings)

    try:
        info = await service.get_video_info(video_path)
    except Exception as e:
        _reraise_user_facing(e)
        raise ToolError(f"Error getting video information: {e}") from e

    return format_media_info(info)
