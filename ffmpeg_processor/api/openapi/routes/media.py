"""Upload-and-process endpoints."""

import json
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from ffmpeg_processor.api.dependencies import (
    MediaServiceDep,
    OutputDirDep,
    SettingsDep,
    UploadStorageDep,
)
from ffmpeg_processor.api.middleware.error_handler import APIError
from ffmpeg_processor.application.dtos.media import (
    AudioFile,
    ExtractAudioResponse,
    ResizedFile,
    ResizeResponse,
)
from ffmpeg_processor.commons.telemetry import get_logger
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution

router = APIRouter()
logger = get_logger(__name__)


def _require_upload(video: UploadFile | None) -> UploadFile:
    if video is None or not video.filename:
        raise APIError(code="NO_FILE", message="No video file uploaded")
    return video


def _parse_resolutions(raw: str | None) -> list[Resolution]:
    """Parse the ``resolutions`` form field, keeping only supported values.

    Absent means every resolution. Unknown entries are dropped.
    """
    if raw is None or not raw.strip():
        return list(Resolution)

    try:
        requested = json.loads(raw)
    except json.JSONDecodeError as e:
        raise APIError(
            code="INVALID_RESOLUTIONS",
            message="resolutions must be a JSON array of strings",
            details={"valid_options": Resolution.values()},
        ) from e

    if isinstance(requested, str):
        requested = [requested]
    if not isinstance(requested, list):
        raise APIError(
            code="INVALID_RESOLUTIONS",
            message="resolutions must be a JSON array of strings",
            details={"valid_options": Resolution.values()},
        )

    valid = [Resolution(r) for r in requested if r in Resolution.values()]
    if not valid:
        raise APIError(
            code="INVALID_RESOLUTIONS",
            message="No valid resolutions specified",
            details={"valid_options": Resolution.values()},
        )
    # Keep request order, drop duplicates
    return list(dict.fromkeys(valid))


@router.post(
    "/resize",
    response_model=ResizeResponse,
    status_code=status.HTTP_200_OK,
    summary="Resize an uploaded video",
    description=(
        "Upload a video and render it at one or more standard resolutions. "
        "Renditions are encoded concurrently and served under the output path."
    ),
)
async def resize_video(
    service: MediaServiceDep,
    storage: UploadStorageDep,
    output_dir: OutputDirDep,
    settings: SettingsDep,
    video: Annotated[UploadFile | None, File(description="Video file")] = None,
    resolutions: Annotated[
        str | None,
        Form(description='JSON array, e.g. ["720p", "1080p"]; defaults to all'),
    ] = None,
) -> ResizeResponse:
    """Store the upload, then render every requested resolution."""
    upload = _require_upload(video)
    targets = _parse_resolutions(resolutions)

    stored = await storage.save(upload)
    output_dir.mkdir(parents=True, exist_ok=True)

    outcomes = await service.resize_upload(stored, targets, output_dir)

    prefix = settings.server.output_url_prefix
    return ResizeResponse(
        files=[
            ResizedFile(
                resolution=o.resolution,
                filename=o.output_path.name,
                path=f"{prefix}/{o.output_path.name}",
            )
            for o in outcomes
        ],
    )


@router.post(
    "/extract-audio",
    response_model=ExtractAudioResponse,
    status_code=status.HTTP_200_OK,
    summary="Extract audio from an uploaded video",
    description="Upload a video and extract its audio track in the given format.",
)
async def extract_audio(
    service: MediaServiceDep,
    storage: UploadStorageDep,
    output_dir: OutputDirDep,
    settings: SettingsDep,
    video: Annotated[UploadFile | None, File(description="Video file")] = None,
    format: Annotated[  # noqa: A002
        str | None,
        Form(description="mp3, aac, wav or ogg; defaults to mp3"),
    ] = None,
) -> ExtractAudioResponse:
    """Store the upload, then extract its audio track."""
    upload = _require_upload(video)

    requested = format or AudioFormat.default().value
    if requested not in AudioFormat.values():
        raise APIError(
            code="INVALID_AUDIO_FORMAT",
            message="Invalid audio format",
            details={"valid_options": AudioFormat.values()},
        )
    audio_format = AudioFormat(requested)

    stored = await storage.save(upload)
    output_dir.mkdir(parents=True, exist_ok=True)

    extraction = await service.extract_upload_audio(stored, audio_format, output_dir)

    filename = extraction.output_path.name
    return ExtractAudioResponse(
        file=AudioFile(
            format=extraction.format,
            filename=filename,
            path=f"{settings.server.output_url_prefix}/{filename}",
        ),
    )
