"""Window solvers: cut a window into a wall, measure factored view areas."""

from __future__ import annotations

from typing import Any

from facade_tools.components.view_area import factored_intersection_areas
from facade_tools.components.window import cut_window
from facade_tools.config import ViewAreaParams, WindowParams
from facade_tools.errors import GeometryError
from facade_tools.geometry.coerce import coerce_brep, coerce_list, coerce_polyline
from facade_tools.settings import Settings
from facade_tools.solvers.base import Solver, pick, register_solver


@register_solver
class CreateWindowSolver(Solver):
    """Inputs: surface, width, height, u, v, margin.

    Outputs: wall (Brep with the hole), outline (Polyline or None).
    """

    @property
    def name(self) -> str:
        return "create_window"

    @property
    def nickname(self) -> str:
        return "CrtWin"

    @property
    def description(self) -> str:
        return "Creates a single window on a planar wall at a relative position."

    def run(self, inputs: dict[str, Any], settings: Settings) -> dict[str, Any]:
        wall = coerce_brep(inputs.get("surface"))
        if wall is None:
            raise GeometryError("Surface input is missing")
        params = WindowParams(**pick(inputs, "width", "height", "u", "v", "margin"))
        result = cut_window(wall, params, settings)
        return {"wall": result.wall, "outline": result.outline, "result": result}


@register_solver
class AnalyzeWindowViewSolver(Solver):
    """Inputs: frame (closed curve), surfaces (list), factors (list).

    Outputs: factored_areas (list), geometry (list of inside fragments).
    """

    @property
    def name(self) -> str:
        return "analyze_window_view"

    @property
    def nickname(self) -> str:
        return "WndView"

    @property
    def description(self) -> str:
        return (
            "Calculates the area of intersection between a frame and a list "
            "of surfaces, multiplied by a corresponding factor."
        )

    def run(self, inputs: dict[str, Any], settings: Settings) -> dict[str, Any]:
        frame = coerce_polyline(inputs.get("frame"))
        surfaces = [coerce_brep(s) for s in coerce_list(inputs.get("surfaces", []), "Surfaces")]
        params = ViewAreaParams(**pick(inputs, "factors"))
        result = factored_intersection_areas(frame, surfaces, params.factors, settings)
        return {"factored_areas": result.factored_areas, "geometry": result.fragments}
