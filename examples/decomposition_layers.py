"""Build every surface of the toroidal splitting scene as PyVista datasets."""

from __future__ import annotations

from toroidal._config import get_build_settings
from toroidal.cache import default_cache
from toroidal.layers import build_layers
from toroidal.mesh import mesh_to_pyvista


def build():
    """Return one PolyData per layer; placement and materials belong to the viewer."""

    settings = get_build_settings()
    meshes = build_layers(
        cache=default_cache(),
        width_segments=settings.width_segments,
        height_segments=settings.height_segments,
    )
    return [mesh_to_pyvista(mesh) for mesh in meshes.values()]


if __name__ == "__main__":
    datasets = build()
    print("Layers:", len(datasets))
