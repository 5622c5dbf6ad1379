"""Toroidal – parametric torus and band meshes for JSJ-style scenes."""

from __future__ import annotations

from .mesh import MeshAnalysis, MeshBuffer, analyze_mesh, mesh_to_pyvista
from .modeling import SurfaceParameters, build_torus_mesh, make_band, make_torus
from .validation import InvalidParameterError

__all__ = [
    "__version__",
    "InvalidParameterError",
    "MeshAnalysis",
    "MeshBuffer",
    "SurfaceParameters",
    "analyze_mesh",
    "build_torus_mesh",
    "make_band",
    "make_torus",
    "mesh_to_pyvista",
]

__version__ = "0.1.0"
