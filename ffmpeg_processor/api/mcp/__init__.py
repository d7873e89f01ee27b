"""MCP server implementation."""

from ffmpeg_processor.api.mcp.server import (
    create_mcp_server,
    dispatch_tool,
    run_mcp_server,
)
from ffmpeg_processor.api.mcp.tools import (
    ToolError,
    extract_audio_tool,
    get_ffmpeg_version_tool,
    get_video_info_tool,
    resize_video_tool,
)

__all__ = [
    "create_mcp_server",
    "dispatch_tool",
    "run_mcp_server",
    "ToolError",
    "extract_audio_tool",
    "get_ffmpeg_version_tool",
    "get_video_info_tool",
    "resize_video_tool",
]
