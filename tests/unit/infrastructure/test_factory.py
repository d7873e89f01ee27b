"""Unit tests for infrastructure factory."""

from unittest.mock import MagicMock

import pytest

from ffmpeg_processor.commons.settings.models import Settings
from ffmpeg_processor.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from ffmpeg_processor.infrastructure.media import FFmpegMediaProcessor
from ffmpeg_processor.infrastructure.notifications import (
    AutoApprovePermissionGate,
    DesktopPermissionGate,
)


@pytest.fixture(autouse=True)
def reset_factory_before_each():
    """Reset factory singleton before each test."""
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def settings():
    return Settings(
        ffmpeg={"ffmpeg_path": "/opt/bin/ffmpeg", "timeout_seconds": 30},
    )


class TestInfrastructureFactory:
    """Tests for InfrastructureFactory."""

    def test_media_processor_uses_settings(self, settings):
        factory = InfrastructureFactory(settings)
        processor = factory.get_media_processor()

        assert isinstance(processor, FFmpegMediaProcessor)
        assert processor._ffmpeg == "/opt/bin/ffmpeg"
        assert processor._timeout == 30

    def test_media_processor_is_cached(self, settings):
        factory = InfrastructureFactory(settings)
        assert factory.get_media_processor() is factory.get_media_processor()

    def test_desktop_gate_when_notifications_enabled(self, settings):
        factory = InfrastructureFactory(settings)
        assert isinstance(factory.get_permission_gate(), DesktopPermissionGate)

    def test_auto_gate_when_notifications_disabled(self):
        settings = Settings(permissions={"notifications_enabled": False})
        factory = InfrastructureFactory(settings)
        assert isinstance(factory.get_permission_gate(), AutoApprovePermissionGate)

    async def test_close_all_clears_instances(self, settings):
        factory = InfrastructureFactory(settings)
        first = factory.get_media_processor()

        await factory.close_all()

        assert factory.get_media_processor() is not first

    async def test_close_all_tolerates_failures(self, settings):
        factory = InfrastructureFactory(settings)
        broken = MagicMock()
        broken.close.side_effect = RuntimeError("boom")
        factory._instances["broken"] = broken

        await factory.close_all()

        broken.close.assert_called_once()
        assert factory._instances == {}


class TestGetFactory:
    """Tests for the factory singleton."""

    def test_requires_settings_first(self):
        with pytest.raises(ValueError):
            get_factory()

    def test_singleton(self, settings):
        factory = get_factory(settings)
        assert get_factory() is factory

    def test_reset(self, settings):
        factory = get_factory(settings)
        reset_factory()
        assert get_factory(settings) is not factory
