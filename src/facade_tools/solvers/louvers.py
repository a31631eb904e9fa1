"""Louver solver: evenly spaced louver boxes along a curve."""

from __future__ import annotations

from typing import Any

from facade_tools.components.louver import louver_array
from facade_tools.config import LouverParams
from facade_tools.geometry.coerce import coerce_polyline
from facade_tools.settings import Settings
from facade_tools.solvers.base import Solver, pick, register_solver


@register_solver
class CreateLouversSolver(Solver):
    """Inputs: curve, count, angle, length, width, height, remove_ends.

    Outputs: louvers (list of LouverBox).
    """

    @property
    def name(self) -> str:
        return "create_louvers"

    @property
    def nickname(self) -> str:
        return "Louvers"

    @property
    def description(self) -> str:
        return "Creates a series of louvers along a curve."

    def run(self, inputs: dict[str, Any], settings: Settings) -> dict[str, Any]:
        path = coerce_polyline(inputs.get("curve"))
        params = LouverParams(
            **pick(inputs, "count", "angle", "length", "width", "height", "remove_ends")
        )
        return {"louvers": louver_array(path, params, settings)}
