"""Louver arrays: oriented boxes distributed evenly along a path curve."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from manifold3d import Manifold

from facade_tools.config import LouverParams
from facade_tools.errors import ValidationError, WarningReport
from facade_tools.geometry.booleans import union_all
from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.plane import WORLD_Z, Plane, unitize
from facade_tools.geometry.primitives import interval_box
from facade_tools.geometry.transforms import place_in_plane
from facade_tools.settings import Settings

logger = logging.getLogger(__name__)

# Spans shorter than this (negative) mean the louvers do not fit
SPAN_TOLERANCE = 1e-9


@dataclass
class LouverBox:
    """Oriented louver volume anchored on the path.

    The frame's x axis follows the curve tangent and y the horizontal
    curve normal, both already rotated about world Z by the louver angle.
    """

    frame: Plane
    half_width: float
    half_length: float
    z_interval: tuple[float, float]
    arc_length: float

    @property
    def center(self) -> np.ndarray:
        return self.frame.origin

    @property
    def volume(self) -> float:
        z0, z1 = self.z_interval
        return 4 * self.half_width * self.half_length * (z1 - z0)

    def corners(self) -> np.ndarray:
        """The 8 box corners in world coordinates."""
        xs = (-self.half_width, self.half_width)
        ys = (-self.half_length, self.half_length)
        local = [(x, y, z) for z in self.z_interval for y in ys for x in xs]
        return self.frame.from_local(local)

    def to_manifold(self) -> Manifold:
        solid = interval_box(
            (-self.half_width, self.half_width),
            (-self.half_length, self.half_length),
            self.z_interval,
        )
        return place_in_plane(solid, self.frame)


def rotated_half_width(width: float, length: float, angle: float) -> float:
    """Half the footprint of a rotated louver measured along the tangent."""
    a = math.radians(angle)
    return (width / 2) * abs(math.cos(a)) + (length / 2) * abs(math.sin(a))


def louver_frame(path: Polyline, t: float, angle: float) -> Plane | None:
    """Frame at curve parameter t, rotated about world Z; None if degenerate."""
    tangent = path.tangent_at(t)
    if tangent is None:
        return None
    side = unitize(np.cross(WORLD_Z, tangent))
    if side is None:
        return None
    center = path.point_at(t)
    return Plane.from_frame(center, tangent, side).rotated_about_z(angle)


def louver_array(
    path: Polyline, params: LouverParams, settings: Settings | None = None
) -> list[LouverBox]:
    """Distribute params.count louvers evenly along path.

    The first and last centers are inset by the rotated half width so no
    louver overhangs the curve ends. With remove_ends the first and last
    slots are dropped but the spacing stays that of the full count.

    Raises:
        ValidationError: The path is not a valid curve.
        WarningReport: The louvers are too large to fit along the path.
    """
    settings = settings or Settings()
    if path is None or not path.is_valid:
        raise ValidationError("Input curve is not valid.")

    half_span = rotated_half_width(params.width, params.length, params.angle)
    curve_length = path.length()
    span = curve_length - 2 * half_span
    if span < -SPAN_TOLERANCE:
        raise WarningReport(
            f"Louvers are too large to fit within the curve's span "
            f"(need {2 * half_span:.3f}, curve is {curve_length:.3f})."
        )

    count = params.count
    start, stop = (1, count - 1) if params.remove_ends else (0, count)
    z_interval = (0.0, params.height) if params.height > 0 else (params.height, 0.0)

    louvers: list[LouverBox] = []
    for i in range(start, stop):
        fraction = i / (count - 1) if count > 1 else 0.0
        arc_length = half_span + span * fraction
        t = path.length_parameter(arc_length, settings.absolute_tolerance)
        frame = louver_frame(path, t, params.angle) if t is not None else None
        if frame is None:
            logger.debug("Skipping louver %d at arc length %.6f: degenerate position", i, arc_length)
            continue
        louvers.append(
            LouverBox(
                frame=frame,
                half_width=params.width / 2,
                half_length=params.length / 2,
                z_interval=z_interval,
                arc_length=arc_length,
            )
        )
    return louvers


def louver_solid(louvers: list[LouverBox]) -> Manifold:
    """Union of all louver boxes as a single solid."""
    return union_all([louver.to_manifold() for louver in louvers])
