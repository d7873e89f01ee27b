"""Permission gates."""

from ffmpeg_processor.infrastructure.notifications.base import (
    AutoApprovePermissionGate,
    PermissionGateBase,
)
from ffmpeg_processor.infrastructure.notifications.desktop import DesktopPermissionGate

__all__ = [
    "PermissionGateBase",
    "AutoApprovePermissionGate",
    "DesktopPermissionGate",
]
