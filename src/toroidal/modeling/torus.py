from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import numpy as np

from toroidal.mesh import MeshBuffer
from toroidal.modeling.normals import vertex_normals
from toroidal.validation import (
    InvalidParameterError,
    validate_angle,
    validate_positive,
    validate_segments,
)

FULL_TURN = 2.0 * math.pi


@dataclass(frozen=True)
class SurfaceParameters:
    """Grid resolution, radii and angular sweep of a torus or band.

    Angles are in radians. A length of ``2*pi`` closes the surface in that
    direction; anything shorter produces an open band.
    """

    width_segments: int = 128
    height_segments: int = 64
    major_radius: float = 6 / 5
    minor_radius: float = 1 / 3
    meridian_start: float = 0.0
    meridian_length: float = FULL_TURN
    longitude_start: float = 0.0
    longitude_length: float = FULL_TURN

    def __post_init__(self) -> None:
        normalized = {
            "width_segments": validate_segments("width_segments", self.width_segments),
            "height_segments": validate_segments("height_segments", self.height_segments),
            "major_radius": validate_positive("major_radius", self.major_radius),
            "minor_radius": validate_positive("minor_radius", self.minor_radius),
            "meridian_start": validate_angle("meridian_start", self.meridian_start),
            "meridian_length": validate_angle("meridian_length", self.meridian_length),
            "longitude_start": validate_angle("longitude_start", self.longitude_start),
            "longitude_length": validate_angle("longitude_length", self.longitude_length),
        }
        for name in ("meridian_length", "longitude_length"):
            if normalized[name] <= 0.0:
                raise InvalidParameterError(f"{name} must be > 0, got {normalized[name]}.")
        for name, value in normalized.items():
            object.__setattr__(self, name, value)

    @property
    def n_vertices(self) -> int:
        return (self.width_segments + 1) * (self.height_segments + 1)

    @property
    def n_indices(self) -> int:
        return self.width_segments * self.height_segments * 6

    @property
    def closed_meridian(self) -> bool:
        return math.isclose(self.meridian_length, FULL_TURN)

    @property
    def closed_longitude(self) -> bool:
        return math.isclose(self.longitude_length, FULL_TURN)

    @property
    def self_intersecting(self) -> bool:
        return self.minor_radius >= self.major_radius

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


def _grid_indices(width_segments: int, height_segments: int) -> np.ndarray:
    verts_per_row = width_segments + 1
    iy, ix = np.meshgrid(np.arange(height_segments), np.arange(width_segments), indexing="ij")
    a = (iy * verts_per_row + ix).ravel()
    b = a + 1
    c = a + verts_per_row
    d = c + 1
    # Two triangles per cell: (a, c, b) then (b, c, d).
    quads = np.column_stack([a, c, b, b, c, d])
    return quads.reshape(-1).astype(np.uint32)


def build_torus_mesh(params: SurfaceParameters, *, compute_normals: bool = True) -> MeshBuffer:
    """Sample the torus patch described by ``params`` on a regular grid.

    Rows follow the meridian (tube) angle and columns the longitude angle,
    both in increasing order. Seams of closed sweeps are kept as separate
    vertices so UVs can run from 0 to 1.
    """

    w = params.width_segments
    h = params.height_segments
    R = params.major_radius
    r = params.minor_radius

    u = np.arange(w + 1, dtype=float) / w
    v = np.arange(h + 1, dtype=float) / h
    uu, vv = np.meshgrid(u, v)

    theta = params.meridian_start + vv * params.meridian_length
    phi = params.longitude_start + uu * params.longitude_length

    ring = R + r * np.cos(theta)
    x = ring * np.cos(phi)
    y = ring * np.sin(-phi)
    z = r * np.sin(theta)

    positions = np.column_stack([x.ravel(), y.ravel(), z.ravel()])
    uvs = np.column_stack([uu.ravel(), vv.ravel()])
    indices = _grid_indices(w, h)
    normals = vertex_normals(positions, indices) if compute_normals else None

    metadata: dict[str, object] = dict(params.as_dict())
    return MeshBuffer(positions=positions, uvs=uvs, indices=indices, normals=normals, metadata=metadata)


def make_torus(
    width_segments: int = 128,
    height_segments: int = 64,
    major_radius: float = 6 / 5,
    minor_radius: float = 1 / 3,
    *,
    compute_normals: bool = False,
) -> MeshBuffer:
    """Closed torus with full sweeps in both directions."""

    params = SurfaceParameters(
        width_segments=width_segments,
        height_segments=height_segments,
        major_radius=major_radius,
        minor_radius=minor_radius,
    )
    return build_torus_mesh(params, compute_normals=compute_normals)


def make_band(
    width_segments: int = 128,
    height_segments: int = 64,
    major_radius: float = 6 / 5,
    minor_radius: float = 1 / 3,
    meridian_start: float = 0.0,
    meridian_length: float = FULL_TURN,
    longitude_start: float = 0.0,
    longitude_length: float = FULL_TURN,
    *,
    compute_normals: bool = True,
) -> MeshBuffer:
    """Partial torus swept over the given meridian and longitude ranges (radians)."""

    params = SurfaceParameters(
        width_segments=width_segments,
        height_segments=height_segments,
        major_radius=major_radius,
        minor_radius=minor_radius,
        meridian_start=meridian_start,
        meridian_length=meridian_length,
        longitude_start=longitude_start,
        longitude_length=longitude_length,
    )
    return build_torus_mesh(params, compute_normals=compute_normals)
