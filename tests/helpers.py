from __future__ import annotations

import numpy as np


def outward_tube_direction(points: np.ndarray, major_radius: float) -> np.ndarray:
    """Direction from the core circle of the torus to each point."""
    radial = points[:, :2]
    ring = np.linalg.norm(radial, axis=1, keepdims=True)
    core = np.hstack([radial / ring * major_radius, np.zeros((points.shape[0], 1))])
    return points - core


def longitude_angles(points: np.ndarray) -> np.ndarray:
    """Recover the longitude angle in [0, 2*pi) from positions (y uses sin(-phi))."""
    return np.mod(np.arctan2(-points[:, 1], points[:, 0]), 2.0 * np.pi)
