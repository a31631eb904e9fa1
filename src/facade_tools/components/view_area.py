"""Factored intersection area between a window frame and a set of surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from facade_tools.errors import ValidationError
from facade_tools.geometry.booleans import AREA_EPSILON
from facade_tools.geometry.curves import Containment, Polyline
from facade_tools.geometry.plane import Plane
from facade_tools.geometry.regions import Brep, split_brep
from facade_tools.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class IntersectionResult:
    """Factored area per input surface, plus every accepted inside fragment."""

    factored_areas: list[float]
    fragments: list[Brep] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(self.factored_areas)


def is_inside_fragment(
    fragment: Brep, frame: Polyline, frame_plane: Plane, tolerance: float
) -> bool:
    """True unless some vertex of the fragment is strictly outside the frame.

    Vertices on the frame count as inside. Only vertices are sampled, so a
    fragment whose edges cross the frame without any vertex outside is
    still accepted.
    """
    for vertex in fragment.vertices:
        if frame.contains(vertex, frame_plane, tolerance) is Containment.OUTSIDE:
            return False
    return True


def factored_intersection_areas(
    frame: Polyline,
    surfaces: Sequence[Brep | None],
    factors: Sequence[float],
    settings: Settings | None = None,
) -> IntersectionResult:
    """Area of each surface inside the frame curve, multiplied by its factor.

    Args:
        frame: Closed planar frame curve.
        surfaces: Surfaces to measure; None entries contribute 0.
        factors: One factor per surface.
        settings: Supplies the absolute tolerance for splitting and containment.
    """
    settings = settings or Settings()
    tol = settings.absolute_tolerance

    if len(surfaces) != len(factors):
        raise ValidationError(
            f"The number of surfaces ({len(surfaces)}) must be equal to "
            f"the number of factors ({len(factors)})."
        )
    frame_plane = frame.try_get_plane(tol) if frame.is_closed else None
    if frame_plane is None:
        raise ValidationError("Frame curve must be a closed, planar curve.")

    factored_areas: list[float] = []
    fragments: list[Brep] = []
    for index, (surface, factor) in enumerate(zip(surfaces, factors)):
        total = 0.0
        if surface is not None:
            for piece in split_brep(surface, frame, frame_plane, tol):
                area = piece.area()
                if area < AREA_EPSILON:
                    continue
                if is_inside_fragment(piece, frame, frame_plane, tol):
                    total += area
                    fragments.append(piece)
        logger.debug("Surface %d: inside area %.6f x factor %s", index, total, factor)
        factored_areas.append(total * factor)

    return IntersectionResult(factored_areas, fragments)
