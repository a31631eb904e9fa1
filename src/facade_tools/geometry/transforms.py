"""Placing solids modelled in local coordinates into world frames.

Use warp_batch rather than per-vertex warp; Manifold.scale(float) crashes
the Python bindings in manifold3d 3.3.2.
"""

import numpy as np
from manifold3d import Manifold

from facade_tools.geometry.plane import Plane


def place_in_plane(solid: Manifold, plane: Plane) -> Manifold:
    """Map a solid modelled in local coordinates into plane.

    Local X/Y/Z become the plane's x axis, y axis and normal. The plane
    is orthonormal and right-handed, so volumes keep their sign.
    """
    basis = np.vstack([plane.x_axis, plane.y_axis, plane.normal])
    origin = np.asarray(plane.origin, dtype=np.float64)

    def _warp_batch(verts: np.ndarray) -> np.ndarray:
        placed = origin + np.asarray(verts, dtype=np.float64) @ basis
        return placed.astype(verts.dtype)

    return solid.warp_batch(_warp_batch)
