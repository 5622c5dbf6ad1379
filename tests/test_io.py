from __future__ import annotations

import struct
from pathlib import Path

import numpy as np
import pytest

from toroidal.io import load_buffers, save_buffers, write_stl
from toroidal.modeling import make_band, make_torus


def test_binary_stl_layout(tmp_path: Path):
    mesh = make_torus(6, 4, 1.0, 0.3)
    path = tmp_path / "torus.stl"
    write_stl(mesh, path)
    data = path.read_bytes()
    assert len(data) == 84 + 50 * mesh.n_triangles
    assert data.startswith(b"toroidal STL")
    assert struct.unpack("<I", data[80:84])[0] == mesh.n_triangles

    # First facet: normal then the three corners of triangle (a, c, b).
    values = struct.unpack("<12f", data[84:132])
    assert np.allclose(values[3:6], mesh.positions[0], atol=1e-6)
    assert np.allclose(values[6:9], mesh.positions[7], atol=1e-6)
    assert np.allclose(values[9:12], mesh.positions[1], atol=1e-6)


def test_ascii_stl_facets(tmp_path: Path):
    mesh = make_torus(3, 3, 1.0, 0.3)
    path = tmp_path / "torus.stl"
    write_stl(mesh, path, ascii=True)
    text = path.read_text()
    assert text.startswith("solid toroidal")
    assert text.rstrip().endswith("endsolid toroidal")
    assert text.count("facet normal") == mesh.n_triangles
    assert text.count("vertex ") == mesh.n_triangles * 3


def test_npz_preserves_buffers(tmp_path: Path):
    band = make_band(5, 3, 1.0, 0.3, longitude_length=np.pi)
    loaded = load_buffers(save_buffers(band, tmp_path / "band.npz"))
    assert np.array_equal(loaded.positions, band.positions)
    assert np.array_equal(loaded.uvs, band.uvs)
    assert np.array_equal(loaded.normals, band.normals)
    assert np.array_equal(loaded.indices, band.indices)
    assert loaded.indices.dtype == np.uint32
    assert loaded.metadata["width_segments"] == 5
    assert loaded.metadata["height_segments"] == 3
    assert np.isclose(loaded.metadata["longitude_length"], np.pi)
    assert loaded.grid_index(5, 3) == loaded.n_vertices - 1

    torus = make_torus(5, 3, 1.0, 0.3)
    assert load_buffers(save_buffers(torus, tmp_path / "torus.npz")).normals is None


def test_npz_with_out_of_range_indices_rejected(tmp_path: Path):
    path = tmp_path / "broken.npz"
    np.savez(path, positions=np.zeros((3, 3)), uvs=np.zeros((3, 2)), indices=np.array([0, 1, 3], dtype=np.uint32))
    with pytest.raises(ValueError):
        load_buffers(path)
