"""MCP stdio server exposing the FFmpeg tools."""

import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    EmbeddedResource,
    ImageContent,
    TextContent,
    Tool,
)

from ffmpeg_processor.api.mcp.tools import (
    ToolError,
    extract_audio_tool,
    get_ffmpeg_version_tool,
    get_video_info_tool,
    resize_video_tool,
)
from ffmpeg_processor.commons.settings.loader import get_settings
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.commons.telemetry import (
    LogContext,
    configure_logging,
    set_correlation_id,
)
from ffmpeg_processor.commons.telemetry.logger import get_logger
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution
from ffmpeg_processor.infrastructure.factory import InfrastructureFactory, get_factory

logger = get_logger(__name__)

ToolHandler = Callable[
    [InfrastructureFactory, Settings, dict[str, Any]], Awaitable[str]
]

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "get-ffmpeg-version": get_ffmpeg_version_tool,
    "resize-video": resize_video_tool,
    "extract-audio": extract_audio_tool,
    "get-video-info": get_video_info_tool,
}


def _tool_definitions() -> list[Tool]:
    video_path = {
        "type": "string",
        "description": "Path to the video file",
    }
    output_dir = {
        "type": "string",
        "description": (
            "Directory for output files (defaults to a temporary directory)"
        ),
    }
    return [
        Tool(
            name="get-ffmpeg-version",
            description="Get the version of FFmpeg installed on the system",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="resize-video",
            description=(
                "Resize a video to one or more standard resolutions. "
                "Outputs keep the original container."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "videoPath": video_path,
                    "resolutions": {
                        "type": "array",
                        "items": {"type": "string", "enum": Resolution.values()},
                        "minItems": 1,
                        "description": "Resolutions to convert the video to",
                    },
                    "outputDir": output_dir,
                },
                "required": ["videoPath", "resolutions"],
            },
        ),
        Tool(
            name="extract-audio",
            description="Extract the audio track from a video file",
            inputSchema={
                "type": "object",
                "properties": {
                    "videoPath": video_path,
                    "format": {
                        "type": "string",
                        "enum": AudioFormat.values(),
                        "default": AudioFormat.default().value,
                        "description": "Audio format to extract",
                    },
                    "outputDir": output_dir,
                },
                "required": ["videoPath"],
            },
        ),
        Tool(
            name="get-video-info",
            description="Get detailed information about a video file",
            inputSchema={
                "type": "object",
                "properties": {"videoPath": video_path},
                "required": ["videoPath"],
            },
        ),
    ]


async def dispatch_tool(
    name: str,
    arguments: dict[str, Any] | None,
    factory: InfrastructureFactory,
    settings: Settings,
) -> str:
    """Run a tool by name and return its text result.

    Raises:
        ToolError: If the tool is unknown or fails.
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown tool: {name}")

    set_correlation_id()
    with LogContext(tool=name):
        logger.info(f"Calling tool {name}")
        try:
            return await handler(factory, settings, arguments or {})
        except ToolError as e:
            logger.warning(f"Tool {name} failed: {e}")
            raise
        except Exception as e:
            logger.exception(f"Error calling tool {name}: {e}")
            raise ToolError(str(e)) from e


def create_mcp_server(settings: Settings | None = None) -> Server:
    """Build the server exposing the four FFmpeg tools."""
    settings = settings or get_settings()
    server = Server(settings.app.name)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return _tool_definitions()

    @server.call_tool()
    async def call_tool(
        name: str,
        arguments: dict[str, Any],
    ) -> Sequence[TextContent | ImageContent | EmbeddedResource]:
        # The SDK reports a raised ToolError as an isError result
        text = await dispatch_tool(name, arguments, get_factory(settings), settings)
        return [TextContent(type="text", text=text)]

    return server


async def run_mcp_server() -> None:
    """Serve MCP over stdin/stdout until the client disconnects.

    Logs go to stderr, since stdout carries the protocol.
    """
    settings = get_settings()
    configure_logging(
        level=settings.telemetry.log_level or settings.app.log_level,
        format_type=settings.telemetry.log_format,
        logger_name="ffmpeg_processor",
        stream=sys.stderr,
    )

    server = create_mcp_server(settings)
    logger.info(f"Starting {settings.app.name} MCP server on stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await get_factory(settings).close_all()
