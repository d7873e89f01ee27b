"""Request dependencies: settings, factory, media service, upload storage."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from ffmpeg_processor.application.services.media import MediaService
from ffmpeg_processor.application.services.uploads import UploadStorage
from ffmpeg_processor.commons.settings.loader import get_settings as _load_settings
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.commons.telemetry import get_logger
from ffmpeg_processor.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)

logger = get_logger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Settings are loaded once per process."""
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    return get_factory(settings)


SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]


def get_media_service(factory: FactoryDep, settings: SettingsDep) -> MediaService:
    """Media service wired to the shared processor and permission gate."""
    return MediaService(
        media_processor=factory.get_media_processor(),
        permission_gate=factory.get_permission_gate(),
        settings=settings,
    )


def get_upload_storage(settings: SettingsDep) -> UploadStorage:
    storage = settings.storage
    return UploadStorage(
        uploads_dir=Path(storage.uploads_dir),
        allowed_extensions=storage.allowed_extensions,
        max_bytes=storage.max_upload_mb * 1024 * 1024,
        chunk_size=storage.upload_chunk_bytes,
    )


def get_output_dir(settings: SettingsDep) -> Path:
    """Directory HTTP outputs are written to and served from."""
    return Path(settings.storage.output_dir)


MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]
UploadStorageDep = Annotated[UploadStorage, Depends(get_upload_storage)]
OutputDirDep = Annotated[Path, Depends(get_output_dir)]


async def init_services(settings: Settings) -> None:
    """Create the storage directories and warn about missing executables."""
    for directory in (settings.storage.uploads_dir, settings.storage.output_dir):
        Path(directory).mkdir(parents=True, exist_ok=True)

    availability = get_factory(settings).get_media_processor().is_available()
    missing = [name for name, found in availability.items() if not found]
    if missing:
        logger.warning(f"Executables not found in PATH: {', '.join(missing)}")


async def shutdown_services() -> None:
    """Close infrastructure and drop cached settings and factory."""
    try:
        await get_factory().close_all()
    except ValueError:
        logger.debug("Factory was never created; nothing to close")
    finally:
        reset_factory()
        get_settings.cache_clear()
