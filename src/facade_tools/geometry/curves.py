"""Polyline curves: arc-length parameterization, tangents, and containment."""

from __future__ import annotations

import enum
import math

import numpy as np

from facade_tools.errors import GeometryError
from facade_tools.geometry.plane import (
    ZERO_LENGTH,
    Plane,
    as_points,
    bounding_box_2d,
    fit_plane,
    unitize,
)

# First and last points closer than this make a polyline closed
CLOSURE_TOLERANCE = 1e-9


class Containment(enum.Enum):
    """Where a point lies relative to a closed planar curve."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    COINCIDENT = "coincident"


class Polyline:
    """Piecewise-linear curve through 3D points.

    The curve parameter runs from 0 to the number of segments; parameter
    i + f lies on segment i at fraction f.
    """

    def __init__(self, points, closed: bool = False) -> None:
        pts = as_points(points)
        if closed and len(pts) > 1 and not self._coincident(pts[0], pts[-1]):
            pts = np.vstack([pts, pts[:1]])
        self.points = pts

    @staticmethod
    def _coincident(a: np.ndarray, b: np.ndarray) -> bool:
        return float(np.linalg.norm(a - b)) <= CLOSURE_TOLERANCE

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"Polyline({len(self.points)} points, closed={self.is_closed})"

    @property
    def segment_lengths(self) -> np.ndarray:
        return np.linalg.norm(np.diff(self.points, axis=0), axis=1)

    @property
    def segment_count(self) -> int:
        return max(len(self.points) - 1, 0)

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 3 and self._coincident(self.points[0], self.points[-1])

    @property
    def is_valid(self) -> bool:
        return (
            len(self.points) >= 2
            and bool(np.all(np.isfinite(self.points)))
            and self.length() > ZERO_LENGTH
        )

    @property
    def loop(self) -> np.ndarray:
        """Vertices without the repeated closing point."""
        if self.is_closed:
            return self.points[:-1]
        return self.points

    def length(self) -> float:
        return float(self.segment_lengths.sum())

    def try_get_plane(self, tolerance: float) -> Plane | None:
        return fit_plane(self.loop, tolerance)

    def is_planar(self, tolerance: float) -> bool:
        return self.try_get_plane(tolerance) is not None

    def length_parameter(self, length: float, tolerance: float = 1e-9) -> float | None:
        """Curve parameter at an arc length from the start, or None if out of range."""
        if not math.isfinite(length) or self.segment_count == 0:
            return None
        total = self.length()
        if length < -tolerance or length > total + tolerance:
            return None
        length = min(max(length, 0.0), total)
        seg_len = self.segment_lengths
        cumulative = np.concatenate([[0.0], np.cumsum(seg_len)])
        index = int(np.searchsorted(cumulative, length, side="right")) - 1
        index = min(max(index, 0), self.segment_count - 1)
        if seg_len[index] < ZERO_LENGTH:
            return float(index)
        fraction = (length - cumulative[index]) / seg_len[index]
        return index + min(max(fraction, 0.0), 1.0)

    def _split_parameter(self, t: float) -> tuple[int, float]:
        if self.segment_count == 0:
            raise GeometryError("Cannot evaluate a polyline with fewer than 2 points")
        t = min(max(t, 0.0), float(self.segment_count))
        index = min(int(math.floor(t)), self.segment_count - 1)
        return index, t - index

    def point_at(self, t: float) -> np.ndarray:
        index, fraction = self._split_parameter(t)
        a, b = self.points[index], self.points[index + 1]
        return a + fraction * (b - a)

    def tangent_at(self, t: float) -> np.ndarray | None:
        """Unit tangent at t, taken from the nearest segment with length."""
        index, _ = self._split_parameter(t)
        seg_len = self.segment_lengths
        order = sorted(range(self.segment_count), key=lambda i: (abs(i - index), -i))
        for i in order:
            if seg_len[i] >= ZERO_LENGTH:
                return unitize(self.points[i + 1] - self.points[i])
        return None

    def bounding_box(self, plane: Plane) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the curve in plane coordinates."""
        return bounding_box_2d(plane.to_2d(self.points))

    def contains(self, point, plane: Plane, tolerance: float) -> Containment:
        """Classify a point against this closed curve, both projected onto plane."""
        if not self.is_closed:
            raise GeometryError("Containment needs a closed curve")
        q = plane.to_2d(point)[0]
        loop = plane.to_2d(self.points)
        a, b = loop[:-1], loop[1:]
        if _distance_to_segments(q, a, b) <= tolerance:
            return Containment.COINCIDENT
        if _crossing_number(q, a, b) % 2 == 1:
            return Containment.INSIDE
        return Containment.OUTSIDE


def _distance_to_segments(q: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    ab = b - a
    denom = np.einsum("ij,ij->i", ab, ab)
    safe = np.where(denom > 0, denom, 1.0)
    t = np.clip(np.einsum("ij,ij->i", q - a, ab) / safe, 0.0, 1.0)
    t = np.where(denom > 0, t, 0.0)
    closest = a + t[:, None] * ab
    return float(np.min(np.linalg.norm(closest - q, axis=1)))


def _crossing_number(q: np.ndarray, a: np.ndarray, b: np.ndarray) -> int:
    """Even-odd ray cast towards +x."""
    straddles = (a[:, 1] > q[1]) != (b[:, 1] > q[1])
    dy = np.where(straddles, b[:, 1] - a[:, 1], 1.0)
    x_cross = a[:, 0] + (q[1] - a[:, 1]) * (b[:, 0] - a[:, 0]) / dy
    return int(np.count_nonzero(straddles & (q[0] < x_cross)))


def rectangle_polyline(plane: Plane, x_interval, y_interval) -> Polyline:
    """Closed rectangle in plane, corners in counter-clockwise order."""
    x0, x1 = x_interval
    y0, y1 = y_interval
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return Polyline(plane.from_local(corners), closed=True)
