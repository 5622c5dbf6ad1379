from __future__ import annotations

import os
from pathlib import Path

import pytest

from toroidal import _config
from toroidal.modeling import SurfaceParameters

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a scratch directory for every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "toroidal.cfg")
    return config_dir


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def sample_params() -> SurfaceParameters:
    return SurfaceParameters(width_segments=4, height_segments=4, major_radius=1.0, minor_radius=0.3)
