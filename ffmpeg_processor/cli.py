"""Console entry points.

Usage:
    ffmpeg-processor-mcp                 # MCP server on stdio
    ffmpeg-processor-api [--port 3000]   # HTTP upload API
"""

import argparse
import asyncio
from dataclasses import dataclass

from ffmpeg_processor.commons.settings.loader import get_settings


@dataclass
class ApiArgs:
    """Parsed command line arguments for the HTTP server."""

    host: str
    port: int
    reload: bool
    workers: int


def parse_api_args(argv: list[str] | None = None) -> ApiArgs:
    """Parse HTTP server arguments, defaulting to the server settings."""
    server = get_settings().server
    parser = argparse.ArgumentParser(
        description="Run the FFmpeg Processor HTTP API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--host", default=server.host, help="Bind address")
    parser.add_argument("--port", type=int, default=server.port, help="Bind port")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=server.reload,
        help="Reload on code changes (development only)",
    )
    parser.add_argument(
        "--workers", type=int, default=server.workers, help="Worker processes"
    )

    args = parser.parse_args(argv)
    return ApiArgs(
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers,
    )


def run_api(argv: list[str] | None = None) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    args = parse_api_args(argv)
    uvicorn.run(
        "ffmpeg_processor.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
    )


def run_mcp() -> None:
    """Serve the MCP tools over stdio."""
    from ffmpeg_processor.api.mcp.server import run_mcp_server

    asyncio.run(run_mcp_server())
