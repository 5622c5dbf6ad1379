from __future__ import annotations

import json

from toroidal import _config
from toroidal._config import get_build_settings


def test_defaults_written_on_first_use(isolated_config):
    settings = get_build_settings()
    assert settings.width_segments == 128
    assert settings.height_segments == 64
    assert settings.cache_size == 128
    written = json.loads(_config.CONFIG_FILE.read_text())
    assert written["width_segments"] == 128


def test_custom_values_respected(isolated_config):
    isolated_config.mkdir(parents=True)
    _config.CONFIG_FILE.write_text(json.dumps({"width_segments": 32, "height_segments": 16, "cache_size": 8}))
    settings = get_build_settings()
    assert (settings.width_segments, settings.height_segments, settings.cache_size) == (32, 16, 8)


def test_invalid_values_fall_back(isolated_config):
    isolated_config.mkdir(parents=True)
    _config.CONFIG_FILE.write_text(
        json.dumps({"width_segments": 0, "height_segments": 2.5, "cache_size": "lots"})
    )
    settings = get_build_settings()
    assert (settings.width_segments, settings.height_segments, settings.cache_size) == (128, 64, 128)


def test_malformed_file_falls_back(isolated_config):
    isolated_config.mkdir(parents=True)
    _config.CONFIG_FILE.write_text("{not json")
    assert get_build_settings().width_segments == 128

    _config.CONFIG_FILE.write_text("[1, 2, 3]")
    assert get_build_settings().height_segments == 64
