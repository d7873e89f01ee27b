"""DTOs for media processing operations."""

from pydantic import BaseModel, Field

from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution


class ResizeVideoRequest(BaseModel):
    """Request to resize a local video to one or more resolutions."""

    video_path: str = Field(description="Path to the video file to resize")
    resolutions: list[Resolution] = Field(
        min_length=1,
        description="Resolutions to convert the video to",
    )
    output_dir: str | None = Field(
        default=None,
        description="Directory for output files (defaults to a temporary directory)",
    )


class ExtractAudioRequest(BaseModel):
    """Request to extract the audio track of a local video."""

    video_path: str = Field(description="Path to the video file")
    format: AudioFormat = Field(
        default=AudioFormat.MP3,
        description="Audio format to extract",
    )
    output_dir: str | None = Field(
        default=None,
        description="Directory for the output file (defaults to a temporary directory)",
    )


class OutputFile(BaseModel):
    """A produced file, addressed by its public URL path."""

    filename: str = Field(description="Name of the file in the output directory")
    path: str = Field(description="URL path the file is served from")


class ResizedFile(OutputFile):
    """A resized rendition of an uploaded video."""

    resolution: Resolution = Field(description="Resolution of this rendition")


class AudioFile(OutputFile):
    """Audio extracted from an uploaded video."""

    format: AudioFormat = Field(description="Audio format")


class ResizeResponse(BaseModel):
    """Response for an uploaded video resize."""

    message: str = Field(default="Video processing completed")
    files: list[ResizedFile] = Field(description="One entry per resolution")


class ExtractAudioResponse(BaseModel):
    """Response for an uploaded video audio extraction."""

    message: str = Field(default="Audio extraction completed")
    file: AudioFile = Field(description="The extracted audio file")
