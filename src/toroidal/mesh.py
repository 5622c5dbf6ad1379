from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class MeshAnalysis:
    n_vertices: int
    n_faces: int
    degenerate_faces: int
    boundary_edges: int
    nonmanifold_edges: int
    invalid_vertices: int
    coincident_vertices: int

    @property
    def is_manifold(self) -> bool:
        return self.nonmanifold_edges == 0

    @property
    def is_watertight(self) -> bool:
        return self.boundary_edges == 0 and self.is_manifold

    @property
    def has_degenerate_faces(self) -> bool:
        return self.degenerate_faces > 0

    @property
    def has_invalid_vertices(self) -> bool:
        return self.invalid_vertices > 0

    @property
    def has_seams(self) -> bool:
        return self.coincident_vertices > 0

    def issues(self) -> list[str]:
        issues: list[str] = []
        if self.has_invalid_vertices:
            issues.append(f"{self.invalid_vertices} invalid vertices (NaN/inf)")
        if self.has_degenerate_faces:
            issues.append(f"{self.degenerate_faces} degenerate faces")
        if self.boundary_edges > 0:
            issues.append(f"{self.boundary_edges} boundary edges (not watertight)")
        if self.nonmanifold_edges > 0:
            issues.append(f"{self.nonmanifold_edges} non-manifold edges")
        return issues


@dataclass
class MeshBuffer:
    """Vertex and index buffers for one generated surface.

    ``positions``, ``uvs`` and ``normals`` are aligned by vertex index.
    ``indices`` is flat; each consecutive triple is one counter-clockwise
    triangle.
    """

    positions: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    normals: np.ndarray | None = None
    metadata: dict[str, object] = field(default_factory=dict)
    analysis: MeshAnalysis | None = None

    def __post_init__(self) -> None:
        self.positions = np.asarray(self.positions, dtype=float).reshape(-1, 3)
        self.uvs = np.asarray(self.uvs, dtype=float).reshape(-1, 2)
        self.indices = np.asarray(self.indices, dtype=np.uint32).reshape(-1)
        if self.normals is not None:
            self.normals = np.asarray(self.normals, dtype=float).reshape(-1, 3)
        if self.uvs.shape[0] != self.positions.shape[0]:
            raise ValueError("uvs must have one entry per position.")
        if self.normals is not None and self.normals.shape[0] != self.positions.shape[0]:
            raise ValueError("normals must have one entry per position.")
        if self.indices.size % 3 != 0:
            raise ValueError("indices length must be a multiple of 3.")
        if self.indices.size and int(self.indices.max()) >= self.positions.shape[0]:
            raise ValueError(
                f"indices reference vertex {int(self.indices.max())} but only {self.positions.shape[0]} positions exist."
            )

    def copy(self) -> "MeshBuffer":
        return MeshBuffer(
            positions=self.positions.copy(),
            uvs=self.uvs.copy(),
            indices=self.indices.copy(),
            normals=None if self.normals is None else self.normals.copy(),
            metadata=dict(self.metadata),
            analysis=self.analysis,
        )

    @property
    def n_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_triangles(self) -> int:
        return int(self.indices.size // 3)

    @property
    def triangles(self) -> np.ndarray:
        return self.indices.reshape(-1, 3)

    @property
    def has_normals(self) -> bool:
        return self.normals is not None

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        mins = self.positions.min(axis=0)
        maxs = self.positions.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))

    def grid_index(self, ix: int, iy: int) -> int:
        """Vertex index of grid point ``(ix, iy)`` for builder-produced buffers."""

        try:
            width = int(self.metadata["width_segments"])
            height = int(self.metadata["height_segments"])
        except KeyError as exc:
            raise ValueError("Mesh has no grid metadata.") from exc
        if not (0 <= ix <= width and 0 <= iy <= height):
            raise IndexError(f"Grid point ({ix}, {iy}) outside {width + 1}x{height + 1} grid.")
        return iy * (width + 1) + ix


def analyze_mesh(mesh: MeshBuffer, area_epsilon: float = 1e-12, weld_tolerance: float = 1e-9) -> MeshAnalysis:
    verts = mesh.positions
    faces = mesh.triangles.astype(np.int64)
    invalid_vertices = int(np.count_nonzero(~np.isfinite(verts).all(axis=1)))

    degenerate_faces = 0
    if faces.size > 0:
        v0 = verts[faces[:, 0]]
        v1 = verts[faces[:, 1]]
        v2 = verts[faces[:, 2]]
        cross = np.cross(v1 - v0, v2 - v0)
        areas = np.linalg.norm(cross, axis=1) * 0.5
        degenerate_faces = int(np.count_nonzero(areas <= area_epsilon))

    edge_counts: dict[tuple[int, int], int] = {}
    for tri in faces:
        edges = [(tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])]
        for a, b in edges:
            key = (int(a), int(b)) if a < b else (int(b), int(a))
            edge_counts[key] = edge_counts.get(key, 0) + 1

    boundary_edges = sum(1 for count in edge_counts.values() if count == 1)
    nonmanifold_edges = sum(1 for count in edge_counts.values() if count > 2)

    coincident_vertices = 0
    if mesh.n_vertices > 0 and invalid_vertices == 0:
        # Quantize onto the weld grid; duplicates are vertices sharing a cell.
        keys = np.round(verts / weld_tolerance).astype(np.int64)
        coincident_vertices = mesh.n_vertices - int(np.unique(keys, axis=0).shape[0])

    analysis = MeshAnalysis(
        n_vertices=mesh.n_vertices,
        n_faces=mesh.n_triangles,
        degenerate_faces=degenerate_faces,
        boundary_edges=boundary_edges,
        nonmanifold_edges=nonmanifold_edges,
        invalid_vertices=invalid_vertices,
        coincident_vertices=coincident_vertices,
    )
    mesh.analysis = analysis
    return analysis


def mesh_to_pyvista(mesh: MeshBuffer):
    import pyvista as pv

    if mesh.n_triangles == 0:
        return pv.PolyData(mesh.positions, deep=True)
    tris = mesh.triangles.astype(np.int64)
    faces = np.hstack([np.full((tris.shape[0], 1), 3, dtype=np.int64), tris]).ravel()
    poly = pv.PolyData(mesh.positions, faces, deep=True)
    poly.active_texture_coordinates = mesh.uvs
    if mesh.normals is not None:
        poly.point_data["Normals"] = mesh.normals
    return poly
