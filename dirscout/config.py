"""Session configuration loaded from a JSON file.

Every key falls back to its default on its own: a bad ``export_dir`` does
not discard a good ``start_dir``. A missing file is created with defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from .file_model.paths import absolute_path, user_home_dir

logger = logging.getLogger(__name__)

APP_NAME = "dirscout"
CONFIG_FILENAME = "config.json"


def default_config_path() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def default_start_dir() -> Path:
    return user_home_dir() or Path.cwd()


def default_export_dir() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False))


@dataclass(frozen=True)
class AppConfig:
    start_dir: Path
    export_dir: Path
    follow_symlinks: bool = False

    @classmethod
    def defaults(cls) -> AppConfig:
        return cls(
            start_dir=default_start_dir(),
            export_dir=default_export_dir(),
            follow_symlinks=False,
        )

    def to_json(self) -> dict[str, object]:
        return {
            "start_dir": str(self.start_dir),
            "export_dir": str(self.export_dir),
            "follow_symlinks": self.follow_symlinks,
        }


def _directory_value(data: dict[str, object], key: str, fallback: Path) -> Path:
    value = data.get(key)
    if value is None:
        return fallback
    if not isinstance(value, str) or not value:
        logger.error("config key %r is not a path string; using %s", key, fallback)
        return fallback
    candidate = absolute_path(Path(os.path.expanduser(value)))
    if not candidate.is_dir():
        logger.error("config key %r points at missing directory %s; using %s", key, candidate, fallback)
        return fallback
    return candidate


def parse_config(data: object) -> AppConfig:
    """Build an ``AppConfig`` from decoded JSON, falling back per key."""
    defaults = AppConfig.defaults()
    if not isinstance(data, dict):
        logger.error("config root is not a JSON object; using defaults")
        return defaults

    follow_symlinks = data.get("follow_symlinks", False)
    if not isinstance(follow_symlinks, bool):
        logger.error("config key 'follow_symlinks' is not a boolean; using False")
        follow_symlinks = False

    return AppConfig(
        start_dir=_directory_value(data, "start_dir", defaults.start_dir),
        export_dir=_directory_value(data, "export_dir", defaults.export_dir),
        follow_symlinks=follow_symlinks,
    )


def save_config(config: AppConfig, path: Path) -> None:
    """Write ``config`` as pretty-printed JSON; failures are logged and ignored."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_json(), indent=2) + "\n", encoding="utf-8")
    except OSError:
        logger.exception("failed to write default config to %s", path)


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from ``path`` (default: the platform config dir)."""
    config_path = path or default_config_path()
    if not config_path.exists():
        config = AppConfig.defaults()
        save_config(config, config_path)
        return config

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.exception("failed to read config %s; using defaults", config_path)
        return AppConfig.defaults()
    return parse_config(data)


__all__ = [
    "AppConfig",
    "default_config_path",
    "default_export_dir",
    "default_start_dir",
    "load_config",
    "parse_config",
    "save_config",
]
