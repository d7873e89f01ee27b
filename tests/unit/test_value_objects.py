"""Unit tests for domain value objects."""

import pytest

from ffmpeg_processor.domain.exceptions import (
    InvalidResolutionException,
    UnsupportedAudioFormatException,
)
from ffmpeg_processor.domain.value_objects import AudioFormat, Resolution


class TestResolution:
    """Tests for Resolution value object."""

    @pytest.mark.parametrize(
        ("resolution", "width", "height"),
        [
            (Resolution.P360, 640, 360),
            (Resolution.P480, 854, 480),
            (Resolution.P720, 1280, 720),
            (Resolution.P1080, 1920, 1080),
        ],
    )
    def test_dimensions(self, resolution, width, height):
        assert resolution.width == width
        assert resolution.height == height

    def test_scale_filter(self):
        assert Resolution.P720.scale_filter == "scale=1280:720"

    def test_values_smallest_first(self):
        assert Resolution.values() == ["360p", "480p", "720p", "1080p"]

    def test_parse_valid(self):
        assert Resolution.parse("480p") is Resolution.P480

    def test_parse_invalid(self):
        with pytest.raises(InvalidResolutionException) as exc_info:
            Resolution.parse("4k")
        assert exc_info.value.valid_options == Resolution.values()

    def test_is_string(self):
        assert Resolution.P1080 == "1080p"


class TestAudioFormat:
    """Tests for AudioFormat value object."""

    @pytest.mark.parametrize(
        ("audio_format", "codec"),
        [
            (AudioFormat.MP3, "libmp3lame"),
            (AudioFormat.AAC, "aac"),
            (AudioFormat.WAV, "pcm_s16le"),
            (AudioFormat.OGG, "libvorbis"),
        ],
    )
    def test_codec(self, audio_format, codec):
        assert audio_format.codec == codec

    def test_default_is_mp3(self):
        assert AudioFormat.default() is AudioFormat.MP3

    def test_values(self):
        assert AudioFormat.values() == ["mp3", "aac", "wav", "ogg"]

    def test_parse_invalid(self):
        with pytest.raises(UnsupportedAudioFormatException) as exc_info:
            AudioFormat.parse("flac")
        assert exc_info.value.value == "flac"
        assert str(exc_info.value) == "Invalid audio format"
