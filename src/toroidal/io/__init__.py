"""Writers for generated mesh buffers."""

from __future__ import annotations

from .npz import load_buffers, save_buffers
from .stl import write_stl

__all__ = ["write_stl", "save_buffers", "load_buffers"]
