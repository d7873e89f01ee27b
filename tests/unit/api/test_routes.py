"""Unit tests for API routes."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from ffmpeg_processor.api.main import create_app
from ffmpeg_processor.application.services.uploads import UploadStorage
from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.domain.exceptions import (
    FFmpegExecutionException,
    FFmpegNotAvailableException,
)
from ffmpeg_processor.domain.models import AudioExtraction, ResizeOutcome
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution


@pytest.fixture
def test_settings(tmp_path):
    """Create settings pointing at temporary directories."""
    return Settings(
        app={"version": "1.0.0", "environment": "dev"},
        storage={
            "uploads_dir": str(tmp_path / "uploads"),
            "output_dir": str(tmp_path / "output"),
            "max_upload_mb": 1,
        },
    )


@pytest.fixture
def output_dir(test_settings) -> Path:
    path = Path(test_settings.storage.output_dir)
    path.mkdir(parents=True)
    return path


@pytest.fixture
def upload_storage(test_settings):
    return UploadStorage(
        uploads_dir=Path(test_settings.storage.uploads_dir),
        allowed_extensions=test_settings.storage.allowed_extensions,
        max_bytes=1024,
        chunk_size=256,
    )


@pytest.fixture
def mock_processor():
    processor = MagicMock()
    processor.is_available.return_value = {"ffmpeg": True, "ffprobe": True}
    return processor


@pytest.fixture
def mock_factory(mock_processor):
    """Create mock infrastructure factory."""
    factory = MagicMock()
    factory.get_media_processor.return_value = mock_processor
    return factory


@pytest.fixture
def mock_media_service():
    """Create mock media service that echoes its output paths."""
    service = MagicMock()

    async def resize_upload(path, resolutions, out_dir):
        return [
            ResizeOutcome(
                resolution=r,
                output_path=out_dir / f"{path.stem}_{r.value}.mp4",
                success=True,
            )
            for r in resolutions
        ]

    async def extract_upload_audio(path, audio_format, out_dir):
        return AudioExtraction(
            format=audio_format,
            output_path=out_dir / f"{path.stem}.{audio_format.value}",
        )

    service.resize_upload = AsyncMock(side_effect=resize_upload)
    service.extract_upload_audio = AsyncMock(side_effect=extract_upload_audio)
    return service


@pytest.fixture
def client(test_settings, output_dir, upload_storage, mock_factory, mock_media_service):
    """Create test client with mocked dependencies."""
    from ffmpeg_processor.api.dependencies import (
        get_infrastructure_factory,
        get_media_service,
        get_output_dir,
        get_settings,
        get_upload_storage,
    )

    with (
        patch("ffmpeg_processor.api.main.get_settings", return_value=test_settings),
        patch("ffmpeg_processor.api.main.init_services", new_callable=AsyncMock),
        patch("ffmpeg_processor.api.main.shutdown_services", new_callable=AsyncMock),
    ):
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: test_settings
        app.dependency_overrides[get_infrastructure_factory] = lambda: mock_factory
        app.dependency_overrides[get_media_service] = lambda: mock_media_service
        app.dependency_overrides[get_upload_storage] = lambda: upload_storage
        app.dependency_overrides[get_output_dir] = lambda: output_dir
        yield TestClient(app, raise_server_exceptions=False)


def _video(name: str = "clip.mp4", content: bytes = b"fake video"):
    return {"video": (name, content, "video/mp4")}


class TestHealthRoutes:
    """Tests for health check endpoints."""

    def test_health_check(self, client, upload_storage):
        upload_storage.uploads_dir.mkdir(parents=True)

        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert {c["name"] for c in data["components"]} == {
            "ffmpeg",
            "ffprobe",
            "uploads_dir",
            "output_dir",
        }

    def test_health_missing_ffmpeg(self, client, mock_processor):
        mock_processor.is_available.return_value = {"ffmpeg": False, "ffprobe": True}

        data = client.get("/health").json()

        assert data["status"] == "unhealthy"

    def test_health_missing_directory_degrades(self, client):
        # uploads_dir is not created in this test
        data = client.get("/health").json()
        assert data["status"] == "degraded"

    def test_liveness_check(self, client):
        response = client.get("/health/live")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}

    def test_readiness_check(self, client, mock_processor):
        mock_processor.is_available.return_value = {"ffmpeg": True, "ffprobe": False}

        data = client.get("/health/ready").json()

        assert data["ready"] is False
        assert data["checks"] == {"ffmpeg": True, "ffprobe": False}


class TestResizeRoute:
    """Tests for POST /api/resize."""

    def test_resize_defaults_to_all_resolutions(self, client, mock_media_service):
        response = client.post("/api/resize", files=_video())

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Video processing completed"
        assert [f["resolution"] for f in data["files"]] == Resolution.values()

        stored, resolutions, _ = mock_media_service.resize_upload.call_args.args
        assert stored.suffix == ".mp4"
        assert stored.exists()
        assert resolutions == list(Resolution)

    def test_resize_selected_resolutions(self, client):
        response = client.post(
            "/api/resize",
            files=_video(),
            data={"resolutions": json.dumps(["720p", "4k", "360p"])},
        )

        assert response.status_code == status.HTTP_200_OK
        files = response.json()["files"]
        assert [f["resolution"] for f in files] == ["720p", "360p"]
        first = files[0]
        assert first["filename"].endswith("_720p.mp4")
        assert first["path"] == f"/output/{first['filename']}"

    def test_resize_no_valid_resolutions(self, client, mock_media_service):
        response = client.post(
            "/api/resize",
            files=_video(),
            data={"resolutions": json.dumps(["4k", "8k"])},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error["message"] == "No valid resolutions specified"
        assert error["details"]["valid_options"] == Resolution.values()
        mock_media_service.resize_upload.assert_not_called()

    def test_resize_malformed_resolutions(self, client):
        response = client.post(
            "/api/resize",
            files=_video(),
            data={"resolutions": "[720p"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_resize_without_file(self, client):
        response = client.post("/api/resize", data={"resolutions": '["720p"]'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "No video file uploaded"

    def test_resize_rejects_non_video(self, client, upload_storage):
        response = client.post("/api/resize", files=_video("notes.txt"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error["code"] == "UNSUPPORTED_FILE_TYPE"
        assert error["message"] == "Only video files are allowed!"

    def test_resize_upload_too_large(self, client):
        response = client.post("/api/resize", files=_video(content=b"x" * 4096))

        assert response.status_code == status.HTTP_413_CONTENT_TOO_LARGE
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"

    def test_resize_processing_failure(self, client, mock_media_service):
        mock_media_service.resize_upload.side_effect = FFmpegExecutionException(
            ["ffmpeg"], "boom"
        )

        response = client.post("/api/resize", files=_video())

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"]["code"] == "PROCESSING_ERROR"

    def test_request_id_header(self, client):
        response = client.post(
            "/api/resize", files=_video(), headers={"X-Request-ID": "req-42"}
        )
        assert response.headers["X-Request-ID"] == "req-42"

    def test_error_response_keeps_request_id_and_cors(self, client):
        response = client.post(
            "/api/resize",
            files=_video("notes.txt"),
            headers={"X-Request-ID": "req-1", "Origin": "http://localhost:5173"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.headers["X-Request-ID"] == "req-1"
        assert "access-control-allow-origin" in response.headers
        assert response.json()["error"]["request_id"] == "req-1"


class TestExtractAudioRoute:
    """Tests for POST /api/extract-audio."""

    def test_extract_default_mp3(self, client, mock_media_service):
        response = client.post("/api/extract-audio", files=_video())

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Audio extraction completed"
        assert data["file"]["format"] == "mp3"
        assert data["file"]["filename"].endswith(".mp3")
        assert data["file"]["path"] == f"/output/{data['file']['filename']}"

        _, audio_format, _ = mock_media_service.extract_upload_audio.call_args.args
        assert audio_format is AudioFormat.MP3

    def test_extract_wav(self, client):
        response = client.post(
            "/api/extract-audio", files=_video(), data={"format": "wav"}
        )
        assert response.json()["file"]["format"] == "wav"

    def test_extract_invalid_format(self, client, mock_media_service):
        response = client.post(
            "/api/extract-audio", files=_video(), data={"format": "flac"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error["message"] == "Invalid audio format"
        assert error["details"]["valid_options"] == AudioFormat.values()
        mock_media_service.extract_upload_audio.assert_not_called()

    def test_extract_ffmpeg_missing(self, client, mock_media_service):
        mock_media_service.extract_upload_audio.side_effect = (
            FFmpegNotAvailableException("ffmpeg")
        )

        response = client.post("/api/extract-audio", files=_video())

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestOutputMount:
    """Tests for serving produced files."""

    def test_serves_output_files(self, client, output_dir):
        (output_dir / "clip_360p.mp4").write_bytes(b"rendered")

        response = client.get("/output/clip_360p.mp4")

        assert response.status_code == status.HTTP_200_OK
        assert response.content == b"rendered"
