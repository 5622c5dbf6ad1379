"""Named surfaces that make up the toroidal splitting scene."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from toroidal.cache import MeshCache
from toroidal.mesh import MeshBuffer
from toroidal.modeling.torus import SurfaceParameters, build_torus_mesh


@dataclass(frozen=True)
class SurfaceLayer:
    name: str
    params: SurfaceParameters
    hint: str

    def at_resolution(self, width_segments: int | None = None, height_segments: int | None = None) -> SurfaceParameters:
        """Layer parameters with the grid resolution overridden where given."""

        changes: dict[str, int] = {}
        if width_segments is not None:
            changes["width_segments"] = width_segments
        if height_segments is not None:
            changes["height_segments"] = height_segments
        return replace(self.params, **changes) if changes else self.params


DECOMPOSITION_LAYERS: tuple[SurfaceLayer, ...] = (
    SurfaceLayer(
        "jsj_torus",
        SurfaceParameters(major_radius=6 / 5, minor_radius=1 / 3),
        "Torus in the toroidal splitting",
    ),
    SurfaceLayer(
        "jsj_torus_longitude",
        SurfaceParameters(major_radius=8 / 5, minor_radius=0.075),
        "Longitude curve of the splitting torus",
    ),
    SurfaceLayer(
        "jsj_torus_meridian",
        SurfaceParameters(major_radius=2 / 5, minor_radius=0.075),
        "Meridian curve of the splitting torus",
    ),
    SurfaceLayer(
        "jsj_component",
        SurfaceParameters(major_radius=6 / 5, minor_radius=1 / 4),
        "JSJ component bounded by the splitting torus",
    ),
    SurfaceLayer(
        "jsj_obstruction_longitude",
        SurfaceParameters(major_radius=4 / 5, minor_radius=0.15),
        "Obstruction ring along the longitude",
    ),
    SurfaceLayer(
        "jsj_obstruction_meridian",
        SurfaceParameters(major_radius=6 / 5, minor_radius=0.15),
        "Obstruction ring along the meridian",
    ),
)


def layer_names() -> list[str]:
    return [layer.name for layer in DECOMPOSITION_LAYERS]


def get_layer(name: str) -> SurfaceLayer:
    for layer in DECOMPOSITION_LAYERS:
        if layer.name == name:
            return layer
    raise KeyError(f"Unknown layer '{name}'. Known layers: {', '.join(layer_names())}.")


def build_layers(
    names: Iterable[str] | None = None,
    cache: MeshCache | None = None,
    compute_normals: bool = True,
    width_segments: int | None = None,
    height_segments: int | None = None,
) -> dict[str, MeshBuffer]:
    """Build each requested layer, in catalog order when ``names`` is None.

    ``width_segments`` and ``height_segments`` replace the catalog resolution.
    """

    selected = DECOMPOSITION_LAYERS if names is None else tuple(get_layer(name) for name in names)
    meshes: dict[str, MeshBuffer] = {}
    for layer in selected:
        params = layer.at_resolution(width_segments, height_segments)
        if cache is not None:
            meshes[layer.name] = cache.get_or_build(params, compute_normals=compute_normals)
        else:
            meshes[layer.name] = build_torus_mesh(params, compute_normals=compute_normals)
    return meshes
