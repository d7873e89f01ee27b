"""FFmpeg Processor - video resizing and audio extraction over MCP and HTTP."""

__version__ = "1.0.0"
