"""Surface generators: parametric tori, partial bands, and shading normals."""

from __future__ import annotations

from .normals import face_normals, vertex_normals
from .torus import (
    FULL_TURN,
    SurfaceParameters,
    build_torus_mesh,
    make_band,
    make_torus,
)

__all__ = [
    "FULL_TURN",
    "SurfaceParameters",
    "build_torus_mesh",
    "make_torus",
    "make_band",
    "face_normals",
    "vertex_normals",
]
