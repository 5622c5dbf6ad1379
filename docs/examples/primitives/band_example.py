"""Half-turn ribbon along the longitude, as used for boundary curves."""

from __future__ import annotations

import math
from pathlib import Path

from toroidal.io import save_buffers
from toroidal.modeling import make_band

OUTPUT = Path("dist")
OUTPUT.mkdir(exist_ok=True)

ribbon = make_band(
    width_segments=64,
    height_segments=16,
    major_radius=8 / 5,
    minor_radius=0.075,
    longitude_start=0.0,
    longitude_length=math.pi,
)
save_buffers(ribbon, OUTPUT / "band_example.npz")
print("Saved band_example.npz with", ribbon.n_vertices, "vertices")
