"""Discrete smooth-shading normals over indexed triangle buffers."""

from __future__ import annotations

import numpy as np


def _triangle_corners(positions: np.ndarray, indices: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    verts = np.asarray(positions, dtype=float).reshape(-1, 3)
    tris = np.asarray(indices).reshape(-1, 3).astype(np.int64)
    if tris.size and (tris.min() < 0 or tris.max() >= verts.shape[0]):
        raise ValueError("indices reference vertices outside the position buffer.")
    return verts[tris[:, 0]], verts[tris[:, 1]], verts[tris[:, 2]], tris


def _normalize_rows(vectors: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(vectors, axis=1)
    out = np.zeros_like(vectors)
    nonzero = lengths > 0
    out[nonzero] = vectors[nonzero] / lengths[nonzero, np.newaxis]
    return out


def face_normals(positions: np.ndarray, indices: np.ndarray, normalize: bool = True) -> np.ndarray:
    """Per-triangle normals ``(p1 - p0) x (p2 - p0)``.

    Degenerate triangles yield zero vectors rather than NaNs.
    """

    v0, v1, v2, _ = _triangle_corners(positions, indices)
    normals = np.cross(v1 - v0, v2 - v0)
    if normalize:
        return _normalize_rows(normals)
    return normals


def vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Area-weighted smooth normals accumulated from adjacent faces.

    Vertices are never welded: two vertices at the same location (a seam)
    only see the triangles that reference them by index.
    """

    verts = np.asarray(positions, dtype=float).reshape(-1, 3)
    v0, v1, v2, tris = _triangle_corners(verts, indices)
    weighted = np.cross(v1 - v0, v2 - v0)

    accumulated = np.zeros_like(verts)
    for corner in range(3):
        np.add.at(accumulated, tris[:, corner], weighted)
    return _normalize_rows(accumulated)
