"""Target resolution value object."""

from enum import Enum


class Resolution(str, Enum):
    """Standard output resolutions offered by both front-ends."""

    P360 = "360p"
    P480 = "480p"
    P720 = "720p"
    P1080 = "1080p"

    @property
    def width(self) -> int:
        """Output width in pixels."""
        return _DIMENSIONS[self][0]

    @property
    def height(self) -> int:
        """Output height in pixels."""
        return _DIMENSIONS[self][1]

    @property
    def scale_filter(self) -> str:
        """The ffmpeg ``-vf`` value that produces this resolution."""
        return f"scale={self.width}:{self.height}"

    @classmethod
    def values(cls) -> list[str]:
        """All accepted resolution labels, smallest first."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: str) -> "Resolution":
        """Parse a resolution label.

        Raises:
            InvalidResolutionException: If the label is not supported.
        """
        from ffmpeg_processor.domain.exceptions import InvalidResolutionException

        try:
            return cls(value)
        except ValueError as e:
            raise InvalidResolutionException(value, cls.values()) from e


_DIMENSIONS: dict[Resolution, tuple[int, int]] = {
    Resolution.P360: (640, 360),
    Resolution.P480: (854, 480),
    Resolution.P720: (1280, 720),
    Resolution.P1080: (1920, 1080),
}
