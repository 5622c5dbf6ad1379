from __future__ import annotations

from pathlib import Path
import struct

from toroidal.mesh import MeshBuffer
from toroidal.modeling.normals import face_normals


def write_stl(mesh: MeshBuffer, path: Path, ascii: bool = False) -> None:
    path = Path(path)
    normals = face_normals(mesh.positions, mesh.indices)
    faces = mesh.triangles
    vertices = mesh.positions

    if ascii:
        lines = ["solid toroidal"]
        for idx, tri in enumerate(faces):
            nx, ny, nz = normals[idx]
            lines.append(f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}")
            lines.append("    outer loop")
            for vidx in tri:
                vx, vy, vz = vertices[vidx]
                lines.append(f"      vertex {vx:.6e} {vy:.6e} {vz:.6e}")
            lines.append("    endloop")
            lines.append("  endfacet")
        lines.append("endsolid toroidal")
        path.write_text("\n".join(lines) + "\n")
        return

    header = b"toroidal STL".ljust(80, b"\0")
    with path.open("wb") as handle:
        handle.write(header)
        handle.write(struct.pack("<I", faces.shape[0]))
        for idx, tri in enumerate(faces):
            v0, v1, v2 = vertices[tri[0]], vertices[tri[1]], vertices[tri[2]]
            handle.write(
                struct.pack(
                    "<12fH",
                    *(float(c) for c in normals[idx]),
                    *(float(c) for c in v0),
                    *(float(c) for c in v1),
                    *(float(c) for c in v2),
                    0,
                )
            )
