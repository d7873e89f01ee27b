"""Allow ``python -m ffmpeg_processor`` to start the MCP server."""

from ffmpeg_processor.cli import run_mcp

run_mcp()
