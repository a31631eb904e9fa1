"""Window cutout in a planar wall face, clipped to a margin-inset work area."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from facade_tools.config import WindowParams
from facade_tools.diagnostics import Severity
from facade_tools.errors import GeometryError
from facade_tools.geometry.booleans import AREA_EPSILON, punch_hole
from facade_tools.geometry.curves import Polyline, rectangle_polyline
from facade_tools.geometry.plane import Plane, bounding_box_2d
from facade_tools.geometry.regions import (
    Brep,
    Face,
    cross_section_from_loops,
    offset_inward,
)
from facade_tools.settings import Settings

logger = logging.getLogger(__name__)

# Margins at or below this use the wall boundary as the work area
MIN_MARGIN = 1e-9


@dataclass
class Rectangle:
    """Window rectangle: a center plane and four clamped side offsets."""

    plane: Plane
    left: float
    right: float
    bottom: float
    top: float

    @property
    def width(self) -> float:
        return self.left + self.right

    @property
    def height(self) -> float:
        return self.bottom + self.top

    @property
    def center(self) -> np.ndarray:
        return self.plane.origin

    def area(self) -> float:
        return self.width * self.height

    def to_polyline(self) -> Polyline:
        return rectangle_polyline(
            self.plane, (-self.left, self.right), (-self.bottom, self.top)
        )


@dataclass
class WindowResult:
    """Wall with the window hole, the window outline and the layout used."""

    wall: Brep
    outline: Polyline | None
    rectangle: Rectangle
    work_area: Polyline
    center: np.ndarray

    @property
    def cut(self) -> bool:
        return self.outline is not None


def clamp_offsets(
    center: tuple[float, float],
    bbox: tuple[float, float, float, float],
    half_width: float,
    half_height: float,
) -> tuple[float, float, float, float]:
    """Side offsets (left, right, bottom, top) limited by the work-area box.

    Each offset is the requested half size, shrunk to the distance from
    the center to the matching box edge (never negative).
    """
    cx, cy = center
    min_x, min_y, max_x, max_y = bbox
    dist_left = max(0.0, cx - min_x)
    dist_right = max(0.0, max_x - cx)
    dist_bottom = max(0.0, cy - min_y)
    dist_top = max(0.0, max_y - cy)
    return (
        min(half_width, dist_left),
        min(half_width, dist_right),
        min(half_height, dist_bottom),
        min(half_height, dist_top),
    )


def work_area_boundary(outer2d: np.ndarray, margin: float) -> np.ndarray:
    """Boundary of the region where the window may sit, in wall-plane coordinates."""
    if margin <= MIN_MARGIN:
        return outer2d
    loops = offset_inward(outer2d, margin)
    if not loops:
        raise GeometryError(
            "Offsetting the boundary failed. Margin is likely too large.",
            severity=Severity.WARNING,
        )
    if len(loops) > 1:
        logger.debug("Margin offset split the work area into %d loops; using the largest", len(loops))
    return loops[0]


def cut_window(
    wall: Brep, params: WindowParams, settings: Settings | None = None
) -> WindowResult:
    """Cut a single rectangular window into a planar wall.

    1. Validate the wall is one planar face
    2. Inset the boundary by the margin to get the work area
    3. Map (u, v) onto the work area's bounding rectangle
    4. Clamp the requested size to the work area
    5. Punch the rectangle through the wall face

    A rectangle that cannot become a hole (degenerate, or touching the
    wall boundary) leaves the wall unchanged and returns no outline.
    """
    settings = settings or Settings()
    tol = settings.planarity_tolerance

    if len(wall.faces) != 1 or not wall.faces[0].is_planar(tol):
        raise GeometryError("Surface must be a single, planar Brep face.")
    face = wall.faces[0]
    plane = face.plane(tol)

    outer2d = plane.to_2d(face.outer)
    boundary2d = work_area_boundary(outer2d, params.margin)
    work_region = cross_section_from_loops([boundary2d])
    if work_region.is_empty() or work_region.area() <= AREA_EPSILON:
        raise GeometryError(
            "Could not create a valid work area from the margin.",
            severity=Severity.WARNING,
        )
    work_area = Polyline(plane.from_local(boundary2d), closed=True)

    bbox = bounding_box_2d(boundary2d)
    min_x, min_y, max_x, max_y = bbox
    cx = min_x + params.u * (max_x - min_x)
    cy = min_y + params.v * (max_y - min_y)
    center = plane.point_at(cx, cy)

    left, right, bottom, top = clamp_offsets(
        (cx, cy), bbox, params.half_width, params.half_height
    )
    rectangle = Rectangle(plane.with_origin(center), left, right, bottom, top)
    outline = rectangle.to_polyline()

    wall_region = cross_section_from_loops([outer2d])
    hole_region = cross_section_from_loops([plane.to_2d(outline.loop)])
    if punch_hole(wall_region, hole_region, settings.absolute_tolerance) is None:
        logger.warning(
            "Window %.3f x %.3f could not be cut as a hole; returning the wall unchanged",
            rectangle.width, rectangle.height,
        )
        return WindowResult(wall, None, rectangle, work_area, center)

    cut_wall = Brep([Face(face.outer, [outline.loop])])
    return WindowResult(cut_wall, outline, rectangle, work_area, center)
