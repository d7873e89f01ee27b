"""Audio output format value object."""

from enum import Enum


class AudioFormat(str, Enum):
    """Audio container formats that can be extracted from a video."""

    MP3 = "mp3"
    AAC = "aac"
    WAV = "wav"
    OGG = "ogg"

    @property
    def codec(self) -> str:
        """The ffmpeg encoder used for this format."""
        return _CODECS[self]

    @classmethod
    def default(cls) -> "AudioFormat":
        return cls.MP3

    @classmethod
    def values(cls) -> list[str]:
        """All accepted format names."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str) -> "AudioFormat":
        """Parse a format name.

        Raises:
            UnsupportedAudioFormatException: If the format is not supported.
        """
        from ffmpeg_processor.domain.exceptions import UnsupportedAudioFormatException

        try:
            return cls(value)
        except ValueError as e:
            raise UnsupportedAudioFormatException(value, cls.values()) from e


_CODECS: dict[AudioFormat, str] = {
    AudioFormat.MP3: "libmp3lame",
    AudioFormat.AAC: "aac",
    AudioFormat.WAV: "pcm_s16le",
    AudioFormat.OGG: "libvorbis",
}
