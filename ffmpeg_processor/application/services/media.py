"""Media processing service shared by the MCP and HTTP front-ends."""

import asyncio
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from ffmpeg_processor.application.dtos.media import (
    ExtractAudioRequest,
    ResizeVideoRequest,
)
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.commons.telemetry import LogContext, get_logger
from ffmpeg_processor.domain.exceptions import (
    FFmpegExecutionException,
    FFmpegNotAvailableException,
    MediaFileNotFoundException,
    OutputDirectoryNotWritableException,
    PermissionDeniedException,
)
from ffmpeg_processor.domain.models import (
    AudioExtraction,
    FFmpegVersion,
    MediaInfo,
    ResizeOutcome,
)
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution
from ffmpeg_processor.infrastructure.media.base import MediaProcessorBase
from ffmpeg_processor.infrastructure.notifications.base import PermissionGateBase


class MediaService:
    """Validates requests, asks for permission and delegates to ffmpeg.

    Local-path operations (used by the MCP tools) go through the permission
    gate. Upload operations (used by the HTTP API) work on files the server
    itself stored and skip it.
    """

    def __init__(
        self,
        media_processor: MediaProcessorBase,
        permission_gate: PermissionGateBase,
        settings: Settings,
    ) -> None:
        """Initialize media service with dependencies.

        Args:
            media_processor: Backend that runs ffmpeg/ffprobe.
            permission_gate: Gate asked before touching user files.
            settings: Application settings.
        """
        self._processor = media_processor
        self._gate = permission_gate
        self._settings = settings
        self._logger = get_logger(__name__)

    async def get_ffmpeg_version(self) -> FFmpegVersion:
        """Report the installed ffmpeg version."""
        return await self._processor.get_version()

    async def resize_video(self, request: ResizeVideoRequest) -> list[ResizeOutcome]:
        """Resize a local video to each requested resolution in turn.

        A failing resolution is recorded in its outcome and does not stop
        the remaining ones.

        Raises:
            MediaFileNotFoundException: If the input does not exist.
            OutputDirectoryNotWritableException: If outputs cannot be written.
            PermissionDeniedException: If the user declines.
        """
        video_path = self._resolve_input(request.video_path)
        output_dir = self._resolve_output_dir(request.output_dir)

        labels = ", ".join(r.value for r in request.resolutions)
        await self._require_permission(f"Resize video {video_path.name} to {labels}")

        outcomes: list[ResizeOutcome] = []
        with LogContext(video=video_path.name, operation="resize"):
            for resolution in request.resolutions:
                output_path = output_dir / (
                    f"{video_path.stem}_{resolution.value}{video_path.suffix}"
                )
                try:
                    await self._processor.resize(video_path, output_path, resolution)
                    outcomes.append(
                        ResizeOutcome(
                            resolution=resolution,
                            output_path=output_path,
                            success=True,
                        )
                    )
                except (FFmpegExecutionException, FFmpegNotAvailableException) as e:
                    self._logger.warning(f"Resize to {resolution.value} failed: {e}")
                    outcomes.append(
                        ResizeOutcome(
                            resolution=resolution,
                            output_path=output_path,
                            success=False,
                            error=str(e),
                        )
                    )

        succeeded = sum(1 for o in outcomes if o.success)
        self._logger.info(
            "Resize finished",
            extra={
                "video": video_path.name,
                "succeeded": succeeded,
                "failed": len(outcomes) - succeeded,
            },
        )
        return outcomes

    async def extract_audio(self, request: ExtractAudioRequest) -> AudioExtraction:
        """Extract the audio track of a local video.

        Raises:
            MediaFileNotFoundException: If the input does not exist.
            OutputDirectoryNotWritableException: If outputs cannot be written.
            PermissionDeniedException: If the user declines.
            FFmpegExecutionException: If ffmpeg fails.
        """
        video_path = self._resolve_input(request.video_path)
        output_dir = self._resolve_output_dir(request.output_dir)

        await self._require_permission(
            f"Extract {request.format.value} audio from video {video_path.name}"
        )

        output_path = output_dir / f"{video_path.stem}.{request.format.value}"
        await self._processor.extract_audio(video_path, output_path, request.format)

        self._logger.info(f"Extracted audio to {output_path}")
        return AudioExtraction(format=request.format, output_path=output_path)

    async def get_video_info(self, video_path: str) -> MediaInfo:
        """Probe a local video.

        Raises:
            MediaFileNotFoundException: If the input does not exist.
            PermissionDeniedException: If the user declines.
        """
        path = self._resolve_input(video_path)
        await self._require_permission(f"Analyze video file {path.name}")
        return await self._processor.probe(path)

    async def resize_upload(
        self,
        video_path: Path,
        resolutions: Sequence[Resolution],
        output_dir: Path,
    ) -> list[ResizeOutcome]:
        """Render all resolutions of an uploaded video concurrently.

        Outputs are always MP4. Any failing rendition fails the whole call.

        Raises:
            FFmpegExecutionException: The first rendition failure.
        """
        jobs = [
            (resolution, output_dir / f"{video_path.stem}_{resolution.value}.mp4")
            for resolution in resolutions
        ]
        results = await asyncio.gather(
            *(
                self._processor.resize(video_path, output_path, resolution)
                for resolution, output_path in jobs
            ),
            return_exceptions=True,
        )

        first_error: BaseException | None = None
        for (resolution, _), result in zip(jobs, results, strict=True):
            if isinstance(result, BaseException):
                self._logger.error(f"Error processing {resolution.value}: {result}")
                first_error = first_error or result
        if first_error is not None:
            raise first_error

        return [
            ResizeOutcome(resolution=resolution, output_path=output_path, success=True)
            for resolution, output_path in jobs
        ]

    async def extract_upload_audio(
        self,
        video_path: Path,
        audio_format: AudioFormat,
        output_dir: Path,
    ) -> AudioExtraction:
        """Extract the audio track of an uploaded video."""
        output_path = output_dir / f"{video_path.stem}.{audio_format.value}"
        await self._processor.extract_audio(video_path, output_path, audio_format)
        return AudioExtraction(format=audio_format, output_path=output_path)

    def default_output_dir(self) -> Path:
        """Return the shared temporary output directory, creating it if needed.

        Falls back to the system temp directory when it cannot be created.
        """
        temp_root = Path(tempfile.gettempdir())
        output_dir = temp_root / self._settings.storage.temp_output_dir_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.error(f"Error creating output directory: {e}")
            return temp_root
        return output_dir

    def _resolve_input(self, video_path: str) -> Path:
        path = Path(video_path).expanduser().resolve()
        if not path.exists():
            raise MediaFileNotFoundException(str(path))
        return path

    def _resolve_output_dir(self, output_dir: str | None) -> Path:
        if output_dir:
            path = Path(output_dir).expanduser().resolve()
        else:
            path = self.default_output_dir()

        if not path.is_dir() or not os.access(path, os.W_OK):
            raise OutputDirectoryNotWritableException(str(path))
        return path

    async def _require_permission(self, action: str) -> None:
        if not await self._gate.request(action):
            self._logger.info(f"Permission denied: {action}")
            raise PermissionDeniedException(action)
