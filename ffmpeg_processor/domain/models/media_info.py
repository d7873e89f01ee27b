"""Media metadata domain models built from ffprobe output."""

from typing import Any, Self

from pydantic import BaseModel, Field


def _to_int(value: Any) -> int | None:
    """Parse ffprobe's stringly-typed integers, ignoring junk."""
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


class StreamInfo(BaseModel):
    """A single audio, video, subtitle or data stream."""

    index: int = Field(description="Position of the stream in the container")
    codec_type: str = Field(default="unknown", description="video, audio, ...")
    codec_name: str | None = Field(default=None)
    width: int | None = Field(default=None)
    height: int | None = Field(default=None)
    frame_rate: str | None = Field(
        default=None,
        description="Raw r_frame_rate fraction, e.g. 30000/1001",
    )
    sample_rate: str | None = Field(default=None)
    channels: int | None = Field(default=None)
    bit_rate: int | None = Field(default=None, description="Bits per second")

    @property
    def is_video(self) -> bool:
        return self.codec_type == "video"

    @property
    def is_audio(self) -> bool:
        return self.codec_type == "audio"

    @property
    def fps(self) -> float | None:
        """Frame rate as a number, if the fraction is usable."""
        if not self.frame_rate:
            return None
        if "/" in self.frame_rate:
            num, den = self.frame_rate.split("/", 1)
            try:
                return float(num) / float(den) if float(den) != 0 else None
            except ValueError:
                return None
        try:
            return float(self.frame_rate)
        except ValueError:
            return None

    @classmethod
    def from_ffprobe(cls, index: int, data: dict[str, Any]) -> Self:
        """Build from one entry of ffprobe's ``streams`` array."""
        return cls(
            index=index,
            codec_type=data.get("codec_type", "unknown"),
            codec_name=data.get("codec_name"),
            width=_to_int(data.get("width")),
            height=_to_int(data.get("height")),
            frame_rate=data.get("r_frame_rate"),
            sample_rate=data.get("sample_rate"),
            channels=_to_int(data.get("channels")),
            bit_rate=_to_int(data.get("bit_rate")),
        )


class FormatInfo(BaseModel):
    """Container-level information."""

    format_name: str | None = Field(default=None)
    duration: str | None = Field(
        default=None,
        description="Duration in seconds, as reported by ffprobe",
    )
    size_bytes: int | None = Field(default=None)
    bit_rate: int | None = Field(default=None, description="Bits per second")

    @property
    def size_mb(self) -> float | None:
        if self.size_bytes is None:
            return None
        return self.size_bytes / (1024 * 1024)

    @classmethod
    def from_ffprobe(cls, data: dict[str, Any]) -> Self:
        """Build from ffprobe's ``format`` object."""
        return cls(
            format_name=data.get("format_name"),
            duration=data.get("duration"),
            size_bytes=_to_int(data.get("size")),
            bit_rate=_to_int(data.get("bit_rate")),
        )


class MediaInfo(BaseModel):
    """Everything ffprobe reported about a media file."""

    filename: str = Field(description="Base name of the probed file")
    format: FormatInfo | None = Field(default=None)
    streams: list[StreamInfo] = Field(default_factory=list)

    @property
    def video_streams(self) -> list[StreamInfo]:
        return [s for s in self.streams if s.is_video]

    @property
    def audio_streams(self) -> list[StreamInfo]:
        return [s for s in self.streams if s.is_audio]

    @classmethod
    def from_ffprobe(cls, filename: str, data: dict[str, Any]) -> Self:
        """Build from the decoded ``-show_format -show_streams`` JSON."""
        format_data = data.get("format")
        return cls(
            filename=filename,
            format=FormatInfo.from_ffprobe(format_data) if format_data else None,
            streams=[
                StreamInfo.from_ffprobe(idx, stream)
                for idx, stream in enumerate(data.get("streams") or [])
            ],
        )
