from __future__ import annotations

import json

import numpy as np
import pytest

from toroidal import cache as cache_module
from toroidal.cache import MeshCache, cached_torus_mesh, default_cache
from toroidal.modeling import SurfaceParameters


def _params(width: int = 6) -> SurfaceParameters:
    return SurfaceParameters(width_segments=width, height_segments=4, major_radius=1.0, minor_radius=0.3)


def test_cache_hits_after_first_build():
    cache = MeshCache(max_size=4)
    first = cache.get_or_build(_params())
    second = cache.get_or_build(_params())
    assert cache.misses == 1
    assert cache.hits == 1
    assert len(cache) == 1
    assert np.array_equal(first.positions, second.positions)


def test_cache_returns_caller_owned_copies():
    cache = MeshCache()
    first = cache.get_or_build(_params())
    first.positions[:] = 0.0
    second = cache.get_or_build(_params())
    assert np.allclose(second.positions[0], [1.3, 0.0, 0.0])
    assert first.positions is not second.positions


def test_normals_flag_is_part_of_key():
    cache = MeshCache()
    with_normals = cache.get_or_build(_params(), compute_normals=True)
    without = cache.get_or_build(_params(), compute_normals=False)
    assert with_normals.normals is not None
    assert without.normals is None
    assert cache.misses == 2


def test_least_recently_used_entry_evicted():
    cache = MeshCache(max_size=2)
    cache.get_or_build(_params(4))
    cache.get_or_build(_params(5))
    cache.get_or_build(_params(4))
    cache.get_or_build(_params(6))
    assert (_params(4), True) in cache
    assert (_params(5), True) not in cache
    assert (_params(6), True) in cache


def test_clear_resets_counters():
    cache = MeshCache()
    cache.get_or_build(_params())
    cache.get_or_build(_params())
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == 0 and cache.misses == 0


def test_cache_size_must_be_positive():
    with pytest.raises(ValueError):
        MeshCache(max_size=0)


def test_default_cache_uses_configured_size(isolated_config, monkeypatch):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "toroidal.cfg").write_text(json.dumps({"cache_size": 3}))
    monkeypatch.setattr(cache_module, "_DEFAULT_CACHE", None)

    assert default_cache().max_size == 3
    mesh = cached_torus_mesh(_params())
    assert mesh.n_vertices == 35
    assert default_cache() is default_cache()
    assert default_cache().misses == 1
