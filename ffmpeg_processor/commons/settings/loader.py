"""Layered settings loading: JSON files, then environment overrides."""

import json
import os
from collections.abc import Callable, Mapping
from functools import reduce
from pathlib import Path
from typing import Any

from ffmpeg_processor.commons.settings.models import Settings

ENV_PREFIX = "FFMPEG_PROCESSOR__"
ENV_NESTING = "__"

# Unprefixed variables honored for compatibility: name -> (section, key, parse).
# A parse result of None leaves the setting alone.
LEGACY_ENV_VARS: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "PORT": ("server", "port", int),
    "DISABLE_NOTIFICATIONS": (
        "permissions",
        "notifications_enabled",
        lambda raw: False if raw.strip().lower() == "true" else None,
    ),
}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into dicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _parse_env_value(raw: str) -> Any:
    """JSON-decode list and object values; leave scalars to pydantic."""
    if raw.lstrip().startswith(("[", "{")):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw


class SettingsLoader:
    """Builds Settings from layered sources.

    Later layers win:

    1. ``appsettings.json``
    2. ``appsettings.{environment}.json``
    3. legacy variables (``PORT``, ``DISABLE_NOTIFICATIONS``)
    4. ``FFMPEG_PROCESSOR__SECTION__KEY`` variables
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory holding the JSON files. Defaults to ./config.
            environment: Environment name selecting the override file.
                Defaults to FFMPEG_PROCESSOR__APP__ENVIRONMENT or 'dev'.
            environ: Environment to read. Defaults to os.environ.
        """
        self.environ = os.environ if environ is None else environ
        self.config_dir = config_dir or Path("config")
        self.environment = environment or self.environ.get(
            f"{ENV_PREFIX}APP{ENV_NESTING}ENVIRONMENT", "dev"
        )

    def load(self) -> Settings:
        """Merge every layer and validate the result."""
        return Settings(**reduce(deep_merge, self.layers(), {}))

    def layers(self) -> list[dict[str, Any]]:
        """All configuration layers, lowest precedence first."""
        return [
            self.read_file("appsettings.json"),
            self.read_file(f"appsettings.{self.environment}.json"),
            self.legacy_overrides(),
            self.env_overrides(),
        ]

    def read_file(self, filename: str) -> dict[str, Any]:
        """Read one JSON file from the config directory, if present."""
        path = self.config_dir / filename
        if not path.is_file():
            return {}
        with path.open(encoding="utf-8") as f:
            return dict(json.load(f))

    def legacy_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for name, (section, key, parse) in LEGACY_ENV_VARS.items():
            raw = self.environ.get(name)
            value = parse(raw) if raw else None
            if value is not None:
                overrides = deep_merge(overrides, {section: {key: value}})
        return overrides

    def env_overrides(self) -> dict[str, Any]:
        """Nest prefixed variables by their ``__``-separated path.

        ``FFMPEG_PROCESSOR__STORAGE__OUTPUT_DIR=/srv/out`` becomes
        ``{"storage": {"output_dir": "/srv/out"}}``.
        """
        overrides: dict[str, Any] = {}
        for name, raw in self.environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            *parents, leaf = name[len(ENV_PREFIX) :].lower().split(ENV_NESTING)
            nested: dict[str, Any] = {leaf: _parse_env_value(raw)}
            for part in reversed(parents):
                nested = {part: nested}
            overrides = deep_merge(overrides, nested)
        return overrides


_settings: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Get or create the process-wide settings.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force reload settings from files.

    Returns:
        Settings instance.
    """
    global _settings  # noqa: PLW0603
    if _settings is None or reload:
        _settings = SettingsLoader(config_dir=config_dir, environment=environment).load()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None
