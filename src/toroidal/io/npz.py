from __future__ import annotations

from pathlib import Path

import numpy as np

from toroidal.mesh import MeshBuffer

METADATA_PREFIX = "meta_"


def save_buffers(mesh: MeshBuffer, path: Path) -> Path:
    """Write the raw vertex/index buffers to a compressed ``.npz`` archive.

    Scalar metadata (the generating surface parameters) is stored as 0-d
    arrays under ``meta_<name>``; other metadata values are skipped.
    """

    path = Path(path)
    arrays = {
        "positions": mesh.positions,
        "uvs": mesh.uvs,
        "indices": mesh.indices,
    }
    if mesh.normals is not None:
        arrays["normals"] = mesh.normals
    for key, value in mesh.metadata.items():
        if isinstance(value, (bool, int, float, str, np.integer, np.floating)):
            arrays[f"{METADATA_PREFIX}{key}"] = np.asarray(value)
    with path.open("wb") as handle:
        np.savez_compressed(handle, **arrays)
    return path


def load_buffers(path: Path) -> MeshBuffer:
    with np.load(Path(path)) as data:
        normals = data["normals"] if "normals" in data.files else None
        metadata: dict[str, object] = {
            name[len(METADATA_PREFIX):]: data[name].item()
            for name in data.files
            if name.startswith(METADATA_PREFIX)
        }
        return MeshBuffer(
            positions=data["positions"],
            uvs=data["uvs"],
            indices=data["indices"],
            normals=normals,
            metadata=metadata,
        )
