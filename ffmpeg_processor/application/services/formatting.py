"""Plain-text renderings of processing results for MCP replies."""

from collections.abc import Sequence

from ffmpeg_processor.domain.models import (
    FFmpegVersion,
    MediaInfo,
    ResizeOutcome,
    StreamInfo,
)


def _kbps(bits_per_second: int | None) -> str:
    if bits_per_second is None:
        return "N/A"
    return f"{bits_per_second / 1000:.2f}"


def format_version(version: FFmpegVersion) -> str:
    return (
        f"FFmpeg Version: {version.version}\n\n"
        f"Full version info:\n{version.full_output}"
    )


def format_resize_summary(outcomes: Sequence[ResizeOutcome]) -> str:
    """Summarize resize outcomes, one line per resolution."""
    succeeded = sum(1 for o in outcomes if o.success)
    failed = len(outcomes) - succeeded

    lines = [
        f"Processed {len(outcomes)} resolutions "
        f"({succeeded} successful, {failed} failed)",
        "",
    ]
    for outcome in outcomes:
        if outcome.success:
            lines.append(f"✅ {outcome.resolution.value}: {outcome.output_path}")
        else:
            lines.append(f"❌ {outcome.resolution.value}: Failed - {outcome.error}")

    return "\n".join(lines) + "\n"


def _format_stream(stream: StreamInfo) -> list[str]:
    lines = ["", f"Stream #{stream.index} ({stream.codec_type}):"]

    if stream.is_video:
        lines.append(f"  Codec: {stream.codec_name}")
        lines.append(f"  Resolution: {stream.width}x{stream.height}")
        lines.append(f"  Frame rate: {stream.frame_rate}")
    elif stream.is_audio:
        lines.append(f"  Codec: {stream.codec_name}")
        lines.append(f"  Sample rate: {stream.sample_rate} Hz")
        lines.append(f"  Channels: {stream.channels}")
    else:
        return lines

    if stream.bit_rate is not None:
        lines.append(f"  Bitrate: {_kbps(stream.bit_rate)} kbps")
    return lines


def format_media_info(info: MediaInfo) -> str:
    """Render probe results the way the get-video-info tool reports them."""
    lines = [f"Video Information for: {info.filename}", ""]

    if info.format is not None:
        size = info.format.size_mb
        lines.extend(
            [
                f"Format: {info.format.format_name}",
                f"Duration: {info.format.duration} seconds",
                f"Size: {f'{size:.2f}' if size is not None else 'N/A'} MB",
                f"Bitrate: {_kbps(info.format.bit_rate)} kbps",
                "",
            ]
        )

    if info.streams:
        lines.append("Streams:")
        for stream in info.streams:
            lines.extend(_format_stream(stream))

    return "\n".join(lines) + "\n"
