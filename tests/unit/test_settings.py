"""Unit tests for settings models and loader."""

import json
import os
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from ffmpeg_processor.commons.settings.loader import (
    SettingsLoader,
    deep_merge,
    get_settings,
    reset_settings,
)
from ffmpeg_processor.commons.settings.models import (
    AppSettings,
    FFmpegSettings,
    PermissionSettings,
    ServerSettings,
    Settings,
    StorageSettings,
    TelemetrySettings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of loader tests."""
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("DISABLE_NOTIFICATIONS", raising=False)
    for key in list(os.environ):
        if key.startswith("FFMPEG_PROCESSOR__"):
            monkeypatch.delenv(key)


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_default_values(self):
        settings = AppSettings()
        assert settings.name == "FFmpegProcessor"
        assert settings.version == "1.0.0"
        assert settings.environment == "dev"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_invalid_environment(self):
        with pytest.raises(ValueError):
            AppSettings(environment="invalid")  # type: ignore[arg-type]

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            AppSettings(log_level="TRACE")  # type: ignore[arg-type]


class TestServerSettings:
    """Tests for ServerSettings model."""

    def test_default_values(self):
        settings = ServerSettings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.cors_origins == ["*"]
        assert settings.api_prefix == "/api"
        assert settings.output_url_prefix == "/output"

    def test_port_validation(self):
        assert ServerSettings(port=8080).port == 8080

        with pytest.raises(ValueError):
            ServerSettings(port=0)

        with pytest.raises(ValueError):
            ServerSettings(port=70000)


class TestSectionDefaults:
    """Tests for the remaining settings sections."""

    def test_ffmpeg_defaults(self):
        settings = FFmpegSettings()
        assert settings.ffmpeg_path == "ffmpeg"
        assert settings.ffprobe_path == "ffprobe"
        assert settings.timeout_seconds is None

    def test_storage_defaults(self):
        settings = StorageSettings()
        assert settings.uploads_dir == "uploads"
        assert settings.output_dir == "output"
        assert settings.temp_output_dir_name == "ffmpeg-output"
        assert settings.max_upload_mb == 500
        assert settings.allowed_extensions == [
            ".mp4",
            ".avi",
            ".mov",
            ".wmv",
            ".flv",
            ".mkv",
        ]

    def test_permission_defaults(self):
        settings = PermissionSettings()
        assert settings.notifications_enabled is True
        assert settings.timeout_seconds == 60
        assert settings.allow_label == "Allow"
        assert settings.deny_label == "Deny"

    def test_telemetry_defaults(self):
        settings = TelemetrySettings()
        assert settings.log_format == "json"

    def test_root_settings(self):
        settings = Settings()
        assert isinstance(settings.storage, StorageSettings)
        assert isinstance(settings.permissions, PermissionSettings)


class TestSettingsLoader:
    """Tests for SettingsLoader."""

    def test_load_empty_config(self):
        with TemporaryDirectory() as tmpdir:
            loader = SettingsLoader(config_dir=Path(tmpdir), environment="dev")
            settings = loader.load()
            assert settings.app.name == "FFmpegProcessor"
            assert settings.server.port == 3000

    def test_load_environment_override(self):
        with TemporaryDirectory() as tmpdir:
            config_dir = Path(tmpdir)

            base_config = {
                "server": {"port": 3000},
                "storage": {"output_dir": "out", "uploads_dir": "in"},
            }
            with (config_dir / "appsettings.json").open("w") as f:
                json.dump(base_config, f)

            prod_config = {"storage": {"output_dir": "/srv/output"}}
            with (config_dir / "appsettings.prod.json").open("w") as f:
                json.dump(prod_config, f)

            loader = SettingsLoader(config_dir=config_dir, environment="prod")
            settings = loader.load()

            assert settings.storage.uploads_dir == "in"
            assert settings.storage.output_dir == "/srv/output"

    def test_prefixed_env_vars_override_files(self, monkeypatch):
        with TemporaryDirectory() as tmpdir:
            config_dir = Path(tmpdir)
            with (config_dir / "appsettings.json").open("w") as f:
                json.dump({"ffmpeg": {"ffmpeg_path": "ffmpeg"}}, f)

            monkeypatch.setenv(
                "FFMPEG_PROCESSOR__FFMPEG__FFMPEG_PATH", "/opt/ffmpeg/bin/ffmpeg"
            )
            monkeypatch.setenv("FFMPEG_PROCESSOR__STORAGE__MAX_UPLOAD_MB", "100")

            settings = SettingsLoader(config_dir=config_dir, environment="dev").load()

            assert settings.ffmpeg.ffmpeg_path == "/opt/ffmpeg/bin/ffmpeg"
            assert settings.storage.max_upload_mb == 100

    def test_legacy_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "4000")
        with TemporaryDirectory() as tmpdir:
            settings = SettingsLoader(config_dir=Path(tmpdir)).load()
            assert settings.server.port == 4000

    def test_legacy_disable_notifications(self, monkeypatch):
        monkeypatch.setenv("DISABLE_NOTIFICATIONS", "true")
        with TemporaryDirectory() as tmpdir:
            settings = SettingsLoader(config_dir=Path(tmpdir)).load()
            assert settings.permissions.notifications_enabled is False

    def test_disable_notifications_requires_true(self, monkeypatch):
        monkeypatch.setenv("DISABLE_NOTIFICATIONS", "1")
        with TemporaryDirectory() as tmpdir:
            settings = SettingsLoader(config_dir=Path(tmpdir)).load()
            assert settings.permissions.notifications_enabled is True

    def test_prefixed_env_beats_legacy(self, monkeypatch):
        monkeypatch.setenv("PORT", "4000")
        monkeypatch.setenv("FFMPEG_PROCESSOR__SERVER__PORT", "5000")
        with TemporaryDirectory() as tmpdir:
            settings = SettingsLoader(config_dir=Path(tmpdir)).load()
            assert settings.server.port == 5000

    def test_explicit_environ(self):
        environ = {
            "FFMPEG_PROCESSOR__STORAGE__ALLOWED_EXTENSIONS": '[".mp4", ".mkv"]',
            "FFMPEG_PROCESSOR__PERMISSIONS__NOTIFICATIONS_ENABLED": "false",
            "FFMPEG_PROCESSOR__FFMPEG__TIMEOUT_SECONDS": "120",
        }
        with TemporaryDirectory() as tmpdir:
            settings = SettingsLoader(config_dir=Path(tmpdir), environ=environ).load()

        assert settings.storage.allowed_extensions == [".mp4", ".mkv"]
        assert settings.permissions.notifications_enabled is False
        assert settings.ffmpeg.timeout_seconds == 120

    def test_environment_selected_from_environ(self):
        environ = {"FFMPEG_PROCESSOR__APP__ENVIRONMENT": "staging"}
        loader = SettingsLoader(environ=environ)
        assert loader.environment == "staging"

    def test_deep_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"b": 10, "e": 4}, "f": 5}

        result = deep_merge(base, override)

        assert result == {"a": {"b": 10, "c": 2, "e": 4}, "d": 3, "f": 5}


class TestGetSettings:
    """Tests for get_settings function."""

    def setup_method(self):
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_get_settings_cached(self):
        with TemporaryDirectory() as tmpdir:
            settings1 = get_settings(config_dir=Path(tmpdir))
            settings2 = get_settings(config_dir=Path(tmpdir))
            assert settings1 is settings2

    def test_get_settings_reload(self):
        with TemporaryDirectory() as tmpdir:
            settings1 = get_settings(config_dir=Path(tmpdir))
            settings2 = get_settings(config_dir=Path(tmpdir), reload=True)
            assert settings1 is not settings2

    def test_reset_settings(self):
        with TemporaryDirectory() as tmpdir:
            settings1 = get_settings(config_dir=Path(tmpdir))
            reset_settings()
            settings2 = get_settings(config_dir=Path(tmpdir))
            assert settings1 is not settings2
