"""FFmpeg/FFprobe implementation of media processing."""

import asyncio
import json
import re
import shutil
import subprocess
from pathlib import Path

from ffmpeg_processor.commons.telemetry import get_logger, timed
from ffmpeg_processor.domain.exceptions import (
    FFmpegExecutionException,
    FFmpegNotAvailableException,
    ProbeParseException,
)
from ffmpeg_processor.domain.models import FFmpegVersion, MediaInfo
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution
from ffmpeg_processor.infrastructure.media.base import MediaProcessorBase

_VERSION_PATTERN = re.compile(r"ffmpeg version (\S+)")
_STDERR_TAIL_LINES = 10


class FFmpegMediaProcessor(MediaProcessorBase):
    """Media processing by shelling out to ffmpeg and ffprobe.

    Requires ffmpeg and ffprobe to be installed and available in PATH
    (or configured explicitly). Commands are passed as argument lists, so
    paths are never interpreted by a shell.
    """

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize FFmpeg media processor.

        Args:
            ffmpeg_path: Path to ffmpeg executable.
            ffprobe_path: Path to ffprobe executable.
            timeout_seconds: Kill a command running longer than this.
        """
        self._ffmpeg = ffmpeg_path
        self._ffprobe = ffprobe_path
        self._timeout = timeout_seconds
        self._logger = get_logger(__name__)

    async def get_version(self) -> FFmpegVersion:
        """Run ``ffmpeg -version`` and parse the version token."""
        stdout = await self._run([self._ffmpeg, "-version"])
        match = _VERSION_PATTERN.search(stdout)
        return FFmpegVersion(
            version=match.group(1) if match else "Unknown",
            full_output=stdout,
        )

    async def resize(
        self,
        video_path: Path,
        output_path: Path,
        resolution: Resolution,
    ) -> Path:
        """Re-encode with libx264/aac at the target resolution."""
        cmd = self.build_resize_command(video_path, output_path, resolution)
        await self._run(cmd)
        return output_path

    async def extract_audio(
        self,
        video_path: Path,
        output_path: Path,
        audio_format: AudioFormat,
    ) -> Path:
        """Drop the video stream and encode audio with the format's codec."""
        cmd = self.build_extract_audio_command(video_path, output_path, audio_format)
        await self._run(cmd)
        return output_path

    async def probe(self, media_path: Path) -> MediaInfo:
        """Get container and stream information via ffprobe JSON output."""
        cmd = [
            self._ffprobe,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(media_path),
        ]
        stdout = await self._run(cmd)

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ProbeParseException(str(media_path), str(e)) from e

        if not isinstance(data, dict):
            raise ProbeParseException(str(media_path), "expected a JSON object")

        return MediaInfo.from_ffprobe(media_path.name, data)

    def is_available(self) -> dict[str, bool]:
        """Check both executables with ``shutil.which``."""
        return {
            "ffmpeg": shutil.which(self._ffmpeg) is not None,
            "ffprobe": shutil.which(self._ffprobe) is not None,
        }

    def build_resize_command(
        self,
        video_path: Path,
        output_path: Path,
        resolution: Resolution,
    ) -> list[str]:
        """Build the ffmpeg arguments for a resize."""
        return [
            self._ffmpeg,
            "-y",
            "-i",
            str(video_path),
            "-vf",
            resolution.scale_filter,
            "-c:v",
            "libx264",
            "-crf",
            "23",
            "-preset",
            "medium",
            "-c:a",
            "aac",
            "-b:a",
            "128k",
            str(output_path),
        ]

    def build_extract_audio_command(
        self,
        video_path: Path,
        output_path: Path,
        audio_format: AudioFormat,
    ) -> list[str]:
        """Build the ffmpeg arguments for an audio extraction."""
        return [
            self._ffmpeg,
            "-y",
            "-i",
            str(video_path),
            "-vn",
            "-acodec",
            audio_format.codec,
            str(output_path),
        ]

    @timed
    async def _run(self, cmd: list[str]) -> str:
        """Run a command in the default executor and return its stdout.

        Raises:
            FFmpegNotAvailableException: If the executable cannot be started.
            FFmpegExecutionException: On a non-zero exit or a timeout.
        """
        self._logger.debug("Running command", extra={"command": cmd})

        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None,
                lambda: subprocess.run(
                    cmd,
                    capture_output=True,
                    check=True,
                    stdin=subprocess.DEVNULL,
                    timeout=self._timeout,
                ),
            )
        except FileNotFoundError as e:
            raise FFmpegNotAvailableException(cmd[0]) from e
        except PermissionError as e:
            raise FFmpegNotAvailableException(cmd[0], "permission denied") from e
        except subprocess.TimeoutExpired as e:
            self._logger.warning(
                "Command timed out",
                extra={"command": cmd, "timeout_seconds": self._timeout},
            )
            raise FFmpegExecutionException(
                cmd, f"timed out after {self._timeout} seconds"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = _decode(e.stderr)
            self._logger.warning(
                "Command failed",
                extra={"command": cmd, "returncode": e.returncode},
            )
            raise FFmpegExecutionException(
                cmd,
                _tail(stderr) or f"exit status {e.returncode}",
                returncode=e.returncode,
                stderr=stderr,
            ) from e

        return _decode(result.stdout)


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def _tail(text: str) -> str:
    """Keep the last lines of ffmpeg's stderr, where the error is."""
    lines = [line for line in text.splitlines() if line.strip()]
    return "\n".join(lines[-_STDERR_TAIL_LINES:])
