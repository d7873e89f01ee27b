"""Settings management module."""

from ffmpeg_processor.commons.settings.loader import (
    SettingsLoader,
    get_settings,
    reset_settings,
)
from ffmpeg_processor.commons.settings.models import (
    AppSettings,
    FFmpegSettings,
    PermissionSettings,
    ServerSettings,
    Settings,
    StorageSettings,
    TelemetrySettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "get_settings",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    # Media
    "FFmpegSettings",
    "StorageSettings",
    "PermissionSettings",
    # Telemetry
    "TelemetrySettings",
]
