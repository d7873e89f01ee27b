"""Abstract base class for media processing backends."""

from abc import ABC, abstractmethod
from pathlib import Path

from ffmpeg_processor.domain.models import FFmpegVersion, MediaInfo
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution


class MediaProcessorBase(ABC):
    """Abstract base class for media transformation and inspection.

    Implementations delegate the actual work to an external tool and only
    construct its command line.
    """

    @abstractmethod
    async def get_version(self) -> FFmpegVersion:
        """Report the version of the underlying tool.

        Returns:
            Parsed version and the tool's full version output.
        """

    @abstractmethod
    async def resize(
        self,
        video_path: Path,
        output_path: Path,
        resolution: Resolution,
    ) -> Path:
        """Re-encode a video at a target resolution.

        Args:
            video_path: Path to input video.
            output_path: Where to write the resized video.
            resolution: Target resolution.

        Returns:
            Path to the resized video.
        """

    @abstractmethod
    async def extract_audio(
        self,
        video_path: Path,
        output_path: Path,
        audio_format: AudioFormat,
    ) -> Path:
        """Extract the audio track from a video.

        Args:
            video_path: Path to input video.
            output_path: Where to save audio.
            audio_format: Output audio format; selects the encoder.

        Returns:
            Path to extracted audio.
        """

    @abstractmethod
    async def probe(self, media_path: Path) -> MediaInfo:
        """Get container and stream information.

        Args:
            media_path: Path to the media file.

        Returns:
            Media metadata.
        """

    @abstractmethod
    def is_available(self) -> dict[str, bool]:
        """Check whether each required executable can be found.

        Returns:
            Mapping of executable name to availability.
        """
