"""Planar faces and Breps, backed by manifold3d cross sections.

Faces keep their loops as 3D point arrays. Region operations (offset,
split, holes) run on 2D CrossSections in a plane's local coordinates and
the results are lifted back into 3D.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from manifold3d import CrossSection, FillRule, JoinType

from facade_tools.errors import GeometryError
from facade_tools.geometry.booleans import split_region
from facade_tools.geometry.curves import CLOSURE_TOLERANCE, Polyline
from facade_tools.geometry.plane import (
    Plane,
    as_points,
    fit_plane,
    polygon_area,
    signed_area_2d,
)

# Miter limit (as a multiple of the offset) large enough to keep corners sharp
SHARP_MITER_LIMIT = 1000.0

# Faces closer to edge-on than this cannot be split by a frame curve
EDGE_ON_COSINE = 1e-9


def _open_loop(points) -> np.ndarray:
    """Drop a repeated closing point."""
    pts = as_points(points)
    if len(pts) > 1 and np.linalg.norm(pts[0] - pts[-1]) <= CLOSURE_TOLERANCE:
        pts = pts[:-1]
    return pts


@dataclass
class Face:
    """Planar region: an outer loop and optional hole loops."""

    outer: np.ndarray
    holes: list[np.ndarray] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.outer = _open_loop(self.outer)
        self.holes = [_open_loop(h) for h in self.holes]
        if len(self.outer) < 3:
            raise GeometryError(f"Face needs at least 3 boundary points, got {len(self.outer)}")

    @classmethod
    def from_polyline(cls, boundary: Polyline, holes: tuple[Polyline, ...] = ()) -> Face:
        return cls(boundary.loop, [h.loop for h in holes])

    @property
    def loops(self) -> list[np.ndarray]:
        return [self.outer, *self.holes]

    @property
    def vertices(self) -> np.ndarray:
        return np.vstack(self.loops)

    @property
    def outer_boundary(self) -> Polyline:
        return Polyline(self.outer, closed=True)

    def plane(self, tolerance: float) -> Plane | None:
        """Plane of the outer loop, or None if any loop leaves it."""
        plane = fit_plane(self.outer, tolerance)
        if plane is None:
            return None
        for hole in self.holes:
            if np.abs(plane.remap_to_plane_space(hole)[:, 2]).max() > tolerance:
                return None
        return plane

    def is_planar(self, tolerance: float) -> bool:
        return self.plane(tolerance) is not None

    def area(self) -> float:
        return polygon_area(self.outer) - sum(polygon_area(h) for h in self.holes)

    def to_cross_section(self, plane: Plane) -> CrossSection:
        """The face projected into plane's local coordinates."""
        return cross_section_from_loops([plane.to_2d(loop) for loop in self.loops])


@dataclass
class Brep:
    """Collection of planar faces."""

    faces: list[Face] = field(default_factory=list)

    @classmethod
    def from_boundary(cls, points, holes=()) -> Brep:
        """Single-face Brep from an outer boundary and optional hole loops."""
        return cls([Face(points, list(holes))])

    @property
    def vertices(self) -> np.ndarray:
        if not self.faces:
            return np.zeros((0, 3))
        return np.vstack([f.vertices for f in self.faces])

    def area(self) -> float:
        return sum(f.area() for f in self.faces)

    def is_empty(self) -> bool:
        return not self.faces


def cross_section_from_loops(loops) -> CrossSection:
    """Even-odd region from 2D loops of any orientation."""
    contours = [
        [(float(x), float(y)) for x, y in np.asarray(loop)[:, :2]]
        for loop in loops
        if len(loop) >= 3
    ]
    if not contours:
        return CrossSection()
    return CrossSection(contours, FillRule.EvenOdd)


def outer_loops(region: CrossSection) -> list[np.ndarray]:
    """Counter-clockwise (outer) contours of a region, largest first."""
    loops = [np.asarray(p) for p in region.to_polygons()]
    outers = [p for p in loops if signed_area_2d(p) > 0]
    return sorted(outers, key=signed_area_2d, reverse=True)


def offset_inward(boundary, distance: float) -> list[np.ndarray]:
    """Sharp-corner inward offset of a closed 2D boundary.

    Returns the resulting loops, largest first; an empty list means the
    offset consumed the whole region.
    """
    region = cross_section_from_loops([boundary])
    inset = region.offset(-distance, JoinType.Miter, SHARP_MITER_LIMIT)
    if inset.is_empty():
        return []
    return outer_loops(inset)


def _lift(points2d, source: Plane, target: Plane) -> np.ndarray:
    """Project local points of source onto target along source's normal."""
    world = source.from_local(points2d)
    direction = source.normal
    denom = float(np.dot(direction, target.normal))
    s = ((target.origin - world) @ target.normal) / denom
    return world + s[:, None] * direction


def _face_from_component(component: CrossSection, source: Plane, target: Plane) -> Face:
    polygons = [np.asarray(p) for p in component.to_polygons()]
    signed = [signed_area_2d(p) for p in polygons]
    outer_index = int(np.argmax(signed))
    outer = _lift(polygons[outer_index], source, target)
    holes = [
        _lift(p, source, target) for i, p in enumerate(polygons) if i != outer_index
    ]
    return Face(outer, holes)


def split_face(face: Face, frame: Polyline, frame_plane: Plane, tolerance: float) -> list[Face]:
    """Split a planar face by a closed frame curve.

    The face is projected along the frame normal; fragments inside and
    outside the frame are lifted back onto the face plane. A face the
    frame does not cut comes back whole.
    """
    face_plane = face.plane(tolerance)
    if face_plane is None:
        raise GeometryError("Surface faces must be planar to be split by the frame curve")
    if abs(float(np.dot(frame_plane.normal, face_plane.normal))) < EDGE_ON_COSINE:
        return [face]

    region = face.to_cross_section(frame_plane)
    cutter = cross_section_from_loops([frame_plane.to_2d(frame.loop)])
    inside, outside = split_region(region, cutter)
    if inside.is_empty() or outside.is_empty():
        return [face]

    pieces = []
    for part in (inside, outside):
        for component in part.decompose():
            if component.is_empty():
                continue
            pieces.append(_face_from_component(component, frame_plane, face_plane))
    return pieces


def split_brep(brep: Brep, frame: Polyline, frame_plane: Plane, tolerance: float) -> list[Brep]:
    """Split every face of a Brep; each fragment becomes a single-face Brep."""
    fragments = []
    for face in brep.faces:
        fragments.extend(Brep([piece]) for piece in split_face(face, frame, frame_plane, tolerance))
    return fragments
