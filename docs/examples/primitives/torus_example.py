"""Torus primitive demo."""

from __future__ import annotations

from pathlib import Path

from toroidal.io import write_stl
from toroidal.modeling import make_torus

OUTPUT = Path("dist")
OUTPUT.mkdir(exist_ok=True)

torus = make_torus(major_radius=1.25, minor_radius=0.35, compute_normals=True)
write_stl(torus, OUTPUT / "torus_example.stl")
print("Saved torus_example.stl with", torus.n_triangles, "triangles")
