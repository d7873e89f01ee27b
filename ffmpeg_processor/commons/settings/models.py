"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = "FFmpegProcessor"
    version: str = "1.0.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/api"
    output_url_prefix: str = "/output"
    docs_enabled: bool = True


class FFmpegSettings(BaseModel):
    """External binary settings."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    timeout_seconds: int | None = Field(default=None, ge=1)


class StorageSettings(BaseModel):
    """Filesystem locations and upload limits."""

    uploads_dir: str = "uploads"
    output_dir: str = "output"
    temp_output_dir_name: str = "ffmpeg-output"
    max_upload_mb: int = Field(default=500, ge=1)
    upload_chunk_bytes: int = Field(default=1024 * 1024, ge=1024)
    allowed_extensions: list[str] = Field(
        default_factory=lambda: [".mp4", ".avi", ".mov", ".wmv", ".flv", ".mkv"]
    )


class PermissionSettings(BaseModel):
    """Desktop permission prompt settings."""

    notifications_enabled: bool = True
    title: str = "FFmpeg Processor Permission Request"
    timeout_seconds: int = Field(default=60, ge=1)
    allow_label: str = "Allow"
    deny_label: str = "Deny"


class TelemetrySettings(BaseModel):
    """Logging settings."""

    enabled: bool = True
    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    permissions: PermissionSettings = Field(default_factory=PermissionSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FFMPEG_PROCESSOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
