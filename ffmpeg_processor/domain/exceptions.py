"""Domain exceptions for the FFmpeg processor."""

from collections.abc import Sequence


class DomainException(Exception):
    """Base exception for domain errors."""


class MediaFileNotFoundException(DomainException):
    """Raised when an input media file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Video file not found at {path}")


class OutputDirectoryNotWritableException(DomainException):
    """Raised when the output directory is missing or read-only."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Output directory {path} does not exist or is not writable")


class PermissionDeniedException(DomainException):
    """Raised when the user declines a permission prompt."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__("Permission denied by user")


class InvalidResolutionException(DomainException):
    """Raised when a requested resolution is not supported."""

    def __init__(self, value: str, valid_options: Sequence[str]) -> None:
        self.value = value
        self.valid_options = list(valid_options)
        super().__init__(f"Invalid resolution '{value}'")


class UnsupportedAudioFormatException(DomainException):
    """Raised when a requested audio format is not supported."""

    def __init__(self, value: str, valid_options: Sequence[str]) -> None:
        self.value = value
        self.valid_options = list(valid_options)
        super().__init__("Invalid audio format")


class UnsupportedUploadException(DomainException):
    """Raised when an uploaded file is not an accepted video type."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__("Only video files are allowed!")


class UploadTooLargeException(DomainException):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, filename: str, limit_bytes: int) -> None:
        self.filename = filename
        self.limit_bytes = limit_bytes
        super().__init__(f"File too large: {filename} exceeds {limit_bytes} bytes")


class FFmpegNotAvailableException(DomainException):
    """Raised when the ffmpeg or ffprobe binary cannot be executed."""

    def __init__(self, binary: str, reason: str = "executable not found") -> None:
        self.binary = binary
        self.reason = reason
        super().__init__(f"{binary}: {reason}")


class FFmpegExecutionException(DomainException):
    """Raised when an ffmpeg/ffprobe command exits unsuccessfully."""

    def __init__(
        self,
        command: Sequence[str],
        reason: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed: {' '.join(self.command)}\n{reason}")


class ProbeParseException(DomainException):
    """Raised when ffprobe output cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse ffprobe output for {path}: {reason}")
