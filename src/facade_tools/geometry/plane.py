"""Planes, local coordinate remapping, and plane fitting for polygons."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from facade_tools.errors import GeometryError

# Vectors shorter than this are treated as zero
ZERO_LENGTH = 1e-12

WORLD_Z = np.array([0.0, 0.0, 1.0])

# Normals closer to world Z than this (sine of the angle) count as horizontal
HORIZONTAL_SINE = 1e-9


def as_points(points) -> np.ndarray:
    """Coerce a point sequence to an (n, 3) float array, padding 2D input with z=0."""
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise GeometryError(f"Could not read points from {type(points).__name__} input: {exc}") from exc
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise GeometryError(f"Expected (n, 2) or (n, 3) points, got shape {arr.shape}")
    if arr.shape[1] == 2:
        arr = np.column_stack([arr, np.zeros(len(arr))])
    return arr


def unitize(vector) -> np.ndarray | None:
    """Return the unit vector, or None for a zero-length vector."""
    v = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm < ZERO_LENGTH:
        return None
    return v / norm


@dataclass(frozen=True)
class Plane:
    """Origin plus orthonormal in-plane axes. Normal is x_axis x y_axis."""

    origin: np.ndarray
    x_axis: np.ndarray
    y_axis: np.ndarray

    @classmethod
    def from_frame(cls, origin, x_axis, y_axis) -> Plane:
        """Build a plane from an origin and two spanning directions.

        The x direction is kept; y is made orthogonal to it inside the
        spanned plane.
        """
        x = unitize(x_axis)
        if x is None:
            raise GeometryError("Plane x axis has zero length")
        z = unitize(np.cross(x, np.asarray(y_axis, dtype=np.float64)))
        if z is None:
            raise GeometryError("Plane axes are parallel")
        y = np.cross(z, x)
        return cls(np.asarray(origin, dtype=np.float64), x, y)

    @classmethod
    def world_xy(cls) -> Plane:
        return cls(np.zeros(3), np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]))

    @property
    def normal(self) -> np.ndarray:
        return np.cross(self.x_axis, self.y_axis)

    def remap_to_plane_space(self, points) -> np.ndarray:
        """World points -> local (x, y, z) coordinates, z along the normal."""
        pts = as_points(points)
        rel = pts - self.origin
        basis = np.vstack([self.x_axis, self.y_axis, self.normal])
        return rel @ basis.T

    def to_2d(self, points) -> np.ndarray:
        """World points -> local (x, y), dropping the normal component."""
        return self.remap_to_plane_space(points)[:, :2]

    def point_at(self, x: float, y: float, z: float = 0.0) -> np.ndarray:
        return self.origin + x * self.x_axis + y * self.y_axis + z * self.normal

    def from_local(self, coords) -> np.ndarray:
        """Local (x, y) or (x, y, z) coordinates -> world points."""
        local = as_points(coords)
        basis = np.vstack([self.x_axis, self.y_axis, self.normal])
        return self.origin + local @ basis

    def with_origin(self, origin) -> Plane:
        return Plane(np.asarray(origin, dtype=np.float64), self.x_axis, self.y_axis)

    def rotated_about_z(self, degrees: float, center=None) -> Plane:
        """Rotate the plane about the world Z axis through center."""
        center = self.origin if center is None else np.asarray(center, dtype=np.float64)
        rot = rotation_z(degrees)
        return Plane(
            center + rot @ (self.origin - center),
            rot @ self.x_axis,
            rot @ self.y_axis,
        )


def rotation_z(degrees: float) -> np.ndarray:
    """3x3 rotation matrix about the world Z axis."""
    a = np.radians(degrees)
    c, s = np.cos(a), np.sin(a)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def newell_normal(points) -> np.ndarray:
    """Area-weighted normal of a closed polygon (length = 2 * area)."""
    pts = as_points(points)
    nxt = np.roll(pts, -1, axis=0)
    return np.array([
        np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
        np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
        np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
    ])


def polygon_area(points) -> float:
    """Unsigned area of a closed planar polygon in 3D."""
    return float(np.linalg.norm(newell_normal(points)) / 2)


def signed_area_2d(points) -> float:
    """Shoelace area; positive for counter-clockwise loops."""
    pts = np.asarray(points, dtype=np.float64)
    x, y = pts[:, 0], pts[:, 1]
    return float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y) / 2)


def _in_plane_x_axis(pts: np.ndarray, normal: np.ndarray) -> np.ndarray | None:
    horizontal = np.cross(WORLD_Z, normal)
    if np.linalg.norm(horizontal) >= HORIZONTAL_SINE:
        return horizontal / np.linalg.norm(horizontal)
    for p in pts[1:]:
        d = p - pts[0]
        x_axis = unitize(d - np.dot(d, normal) * normal)
        if x_axis is not None:
            return x_axis
    return None


def fit_plane(points, tolerance: float) -> Plane | None:
    """Fit a plane through a polygon, or return None if it is not planar.

    The normal follows the loop orientation, so the polygon runs
    counter-clockwise in the returned plane's local coordinates. For a
    tilted or vertical polygon the x axis is horizontal and the y axis
    points upward. A horizontal polygon takes its x axis from the first
    non-degenerate edge.
    """
    pts = as_points(points)
    if len(pts) < 3:
        return None
    normal = unitize(newell_normal(pts))
    if normal is None:
        return None
    origin = pts[0]
    x_axis = _in_plane_x_axis(pts, normal)
    if x_axis is None:
        return None
    plane = Plane(origin, x_axis, np.cross(normal, x_axis))
    deviation = np.abs((pts - origin) @ normal)
    if float(deviation.max()) > tolerance:
        return None
    return plane


def bounding_box_2d(points) -> tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of 2D points."""
    pts = np.asarray(points, dtype=np.float64)
    min_x, min_y = pts[:, :2].min(axis=0)
    max_x, max_y = pts[:, :2].max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)
