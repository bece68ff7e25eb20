"""Path and size formatting helpers shared by models and views."""

from __future__ import annotations

import os
from pathlib import Path

_SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def user_home_dir() -> Path | None:
    """Return the user's home directory, or ``None`` when it cannot be determined."""
    try:
        home = Path.home()
    except (KeyError, RuntimeError):
        return None
    return home if str(home) not in {"", "~"} else None


def absolute_path(path: Path) -> Path:
    """Absolutize ``path`` lexically, without resolving symlinks."""
    return Path(os.path.abspath(path))


def display_path(path: Path) -> str:
    """Return ``path`` as an absolute string with the home directory shown as ``~``."""
    text = str(absolute_path(path))
    home = user_home_dir()
    if home is None:
        return text
    home_text = str(absolute_path(home))
    if home_text == os.sep:
        return text
    if text == home_text:
        return "~"
    if text.startswith(home_text + os.sep):
        return "~" + text[len(home_text):]
    return text


def format_size(size_bytes: int) -> str:
    """Format a byte count with binary units, e.g. ``1.5 KiB``."""
    value = float(max(0, size_bytes))
    unit_idx = 0
    while value >= 1024.0 and unit_idx < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        unit_idx += 1
    if unit_idx == 0:
        return f"{int(value)} {_SIZE_UNITS[0]}"
    return f"{value:.1f} {_SIZE_UNITS[unit_idx]}"


__all__ = ["absolute_path", "display_path", "format_size", "user_home_dir"]
