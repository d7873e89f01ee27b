"""Builds the media processor and permission gate from settings."""

import inspect
from collections.abc import Callable
from typing import Any, TypeVar, cast

from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.commons.telemetry import get_logger
from ffmpeg_processor.infrastructure.media import (
    FFmpegMediaProcessor,
    MediaProcessorBase,
)
from ffmpeg_processor.infrastructure.notifications import (
    AutoApprovePermissionGate,
    DesktopPermissionGate,
    PermissionGateBase,
)

logger = get_logger(__name__)

T = TypeVar("T")


class InfrastructureFactory:
    """Lazily creates and caches one instance per infrastructure service."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._instances: dict[str, Any] = {}

    def _cached(self, key: str, build: Callable[[], T]) -> T:
        if key not in self._instances:
            self._instances[key] = build()
        return cast("T", self._instances[key])

    def get_media_processor(self) -> MediaProcessorBase:
        """The ffmpeg/ffprobe-backed processor configured by ``ffmpeg`` settings."""
        ffmpeg = self._settings.ffmpeg
        return self._cached(
            "media_processor",
            lambda: FFmpegMediaProcessor(
                ffmpeg_path=ffmpeg.ffmpeg_path,
                ffprobe_path=ffmpeg.ffprobe_path,
                timeout_seconds=ffmpeg.timeout_seconds,
            ),
        )

    def get_permission_gate(self) -> PermissionGateBase:
        """Desktop notification gate, or an auto-approving one when disabled."""
        return self._cached("permission_gate", self._build_permission_gate)

    def _build_permission_gate(self) -> PermissionGateBase:
        permissions = self._settings.permissions
        if not permissions.notifications_enabled:
            return AutoApprovePermissionGate()
        return DesktopPermissionGate(
            app_name=self._settings.app.name,
            title=permissions.title,
            timeout_seconds=permissions.timeout_seconds,
            allow_label=permissions.allow_label,
            deny_label=permissions.deny_label,
        )

    async def close_all(self) -> None:
        """Close every created instance that has a ``close`` method, then forget them."""
        instances, self._instances = self._instances, {}
        for key, instance in instances.items():
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                result = close()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.warning(f"Failed to close {key}", exc_info=True)


class _FactoryHolder:
    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Return the process-wide factory, creating it on first use.

    Raises:
        ValueError: If called without settings before the factory exists.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)
    return _FactoryHolder.instance


def reset_factory() -> None:
    """Drop the process-wide factory (for testing)."""
    _FactoryHolder.instance = None
