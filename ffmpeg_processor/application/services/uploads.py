"""Storage of uploaded video files."""

import asyncio
import random
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from ffmpeg_processor.commons.telemetry import get_logger
from ffmpeg_processor.domain.exceptions import (
    UnsupportedUploadException,
    UploadTooLargeException,
)

logger = get_logger(__name__)


class AsyncReadable(Protocol):
    """The part of an uploaded file this module needs."""

    filename: str | None

    async def read(self, size: int = -1) -> bytes: ...


class UploadStorage:
    """Validates uploads and streams them to the uploads directory.

    Stored files get a unique name of the form ``<epoch-ms>-<random><ext>``
    so concurrent uploads of the same file never collide.
    """

    def __init__(
        self,
        uploads_dir: Path,
        allowed_extensions: Iterable[str],
        max_bytes: int,
        chunk_size: int = 1024 * 1024,
    ) -> None:
        """Initialize upload storage.

        Args:
            uploads_dir: Directory uploaded files are written to.
            allowed_extensions: Accepted extensions including the dot.
            max_bytes: Largest accepted upload.
            chunk_size: Read size while streaming to disk.
        """
        self._uploads_dir = uploads_dir
        self._allowed = {ext.lower() for ext in allowed_extensions}
        self._max_bytes = max_bytes
        self._chunk_size = chunk_size

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def validate_filename(self, filename: str | None) -> str:
        """Check an upload's name and return its extension.

        Raises:
            UnsupportedUploadException: If the extension is not accepted.
        """
        suffix = Path(filename or "").suffix
        if suffix.lower() not in self._allowed:
            raise UnsupportedUploadException(filename or "")
        return suffix

    def unique_name(self, suffix: str) -> str:
        """Generate a collision-resistant stored file name."""
        epoch_ms = int(time.time() * 1000)
        return f"{epoch_ms}-{random.randint(0, 10**9)}{suffix}"  # noqa: S311

    async def save(self, upload: AsyncReadable) -> Path:
        """Validate and stream an upload to disk.

        Returns:
            Path of the stored file.

        Raises:
            UnsupportedUploadException: If the extension is not accepted.
            UploadTooLargeException: If the size limit is exceeded; the
                partial file is removed.
        """
        suffix = self.validate_filename(upload.filename)
        self._uploads_dir.mkdir(parents=True, exist_ok=True)
        destination = self._uploads_dir / self.unique_name(suffix)

        # File I/O runs in the default executor
        loop = asyncio.get_running_loop()
        total = 0
        try:
            buffer = await loop.run_in_executor(None, destination.open, "wb")
            try:
                while chunk := await upload.read(self._chunk_size):
                    total += len(chunk)
                    if total > self._max_bytes:
                        raise UploadTooLargeException(
                            upload.filename or "", self._max_bytes
                        )
                    await loop.run_in_executor(None, buffer.write, chunk)
            finally:
                await loop.run_in_executor(None, buffer.close)
        except BaseException:
            destination.unlink(missing_ok=True)
            raise

        logger.info(
            "Stored upload",
            extra={
                "original_filename": upload.filename,
                "stored_as": destination.name,
                "size_bytes": total,
            },
        )
        return destination
