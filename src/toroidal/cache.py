from __future__ import annotations

from collections import OrderedDict

from toroidal._config import get_build_settings
from toroidal.mesh import MeshBuffer
from toroidal.modeling.torus import SurfaceParameters, build_torus_mesh

CacheKey = tuple[SurfaceParameters, bool]


class MeshCache:
    """LRU table of built meshes keyed by their surface parameters."""

    def __init__(self, max_size: int = 128) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive.")
        self._max_size = max_size
        self._store: OrderedDict[CacheKey, MeshBuffer] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: CacheKey) -> MeshBuffer | None:
        if key not in self._store:
            return None
        value = self._store.pop(key)
        self._store[key] = value
        return value

    def set(self, key: CacheKey, value: MeshBuffer) -> None:
        if key in self._store:
            self._store.pop(key)
        self._store[key] = value
        if len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def get_or_build(self, params: SurfaceParameters, compute_normals: bool = True) -> MeshBuffer:
        """Return a caller-owned copy of the mesh for ``params``."""

        key = (params, bool(compute_normals))
        cached = self.get(key)
        if cached is not None:
            self.hits += 1
            return cached.copy()
        self.misses += 1
        mesh = build_torus_mesh(params, compute_normals=compute_normals)
        self.set(key, mesh.copy())
        return mesh

    def clear(self) -> None:
        self._store.clear()
        self.hits = 0
        self.misses = 0


_DEFAULT_CACHE: MeshCache | None = None


def default_cache() -> MeshCache:
    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = MeshCache(max_size=get_build_settings().cache_size)
    return _DEFAULT_CACHE


def cached_torus_mesh(params: SurfaceParameters, compute_normals: bool = True) -> MeshBuffer:
    return default_cache().get_or_build(params, compute_normals=compute_normals)
