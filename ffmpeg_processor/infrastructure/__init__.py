"""Infrastructure layer - external tool and desktop integrations."""

from ffmpeg_processor.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from ffmpeg_processor.infrastructure.media import (
    FFmpegMediaProcessor,
    MediaProcessorBase,
)
from ffmpeg_processor.infrastructure.notifications import (
    AutoApprovePermissionGate,
    DesktopPermissionGate,
    PermissionGateBase,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Media
    "MediaProcessorBase",
    "FFmpegMediaProcessor",
    # Permission gates
    "PermissionGateBase",
    "AutoApprovePermissionGate",
    "DesktopPermissionGate",
]
