"""API layer - HTTP upload endpoints and MCP tools.

Submodules are imported explicitly (``ffmpeg_processor.api.main``,
``ffmpeg_processor.api.mcp``) so the MCP server never builds the HTTP app.
"""
