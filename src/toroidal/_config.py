from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".toroidal"
CONFIG_FILE = CONFIG_DIR / "toroidal.cfg"
DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Default grid resolution for generated surfaces and the size of the mesh cache.",
    "width_segments": 128,
    "height_segments": 64,
    "cache_size": 128,
}


@dataclass(frozen=True)
class BuildSettings:
    """Resolved defaults from toroidal.cfg."""

    width_segments: int
    height_segments: int
    cache_size: int


def ensure_user_config() -> None:
    """Ensure ~/.toroidal/toroidal.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _positive_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if not float(value).is_integer() or value < 1:
        return fallback
    return int(value)


def get_build_settings() -> BuildSettings:
    """Return the configured default resolution and cache size."""

    raw_config = _load_user_config()
    return BuildSettings(
        width_segments=_positive_int(raw_config.get("width_segments"), DEFAULT_CONFIG["width_segments"]),
        height_segments=_positive_int(raw_config.get("height_segments"), DEFAULT_CONFIG["height_segments"]),
        cache_size=_positive_int(raw_config.get("cache_size"), DEFAULT_CONFIG["cache_size"]),
    )
