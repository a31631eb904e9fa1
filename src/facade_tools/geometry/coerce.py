"""Coerce host or JSON input into geometry objects.

Anything that cannot be read as geometry raises GeometryError, so a solver
reports it like any other bad input.
"""

from __future__ import annotations

from typing import Any

from facade_tools.errors import GeometryError
from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.regions import Brep, Face


def coerce_list(value: Any, what: str) -> list:
    """List of items from a host list input; strings and scalars are rejected."""
    if isinstance(value, (str, bytes)):
        raise GeometryError(f"{what} must be a list, got a string")
    try:
        return list(value)
    except TypeError as exc:
        raise GeometryError(f"{what} must be a list, got {type(value).__name__}") from exc


def coerce_polyline(value: Any, closed: bool = False) -> Polyline:
    """Accept a Polyline, a point list, or {"points": [...], "closed": bool}."""
    if isinstance(value, Polyline):
        return value
    if isinstance(value, dict):
        if "points" not in value:
            raise GeometryError("Curve mapping needs a 'points' entry")
        return Polyline(value["points"], closed=bool(value.get("closed", closed)))
    if value is None:
        raise GeometryError("Curve input is missing")
    return Polyline(value, closed=closed)


def _coerce_face(value: Any) -> Face:
    if isinstance(value, Face):
        return value
    if isinstance(value, Polyline):
        return Face.from_polyline(value)
    if isinstance(value, dict):
        if "outer" not in value:
            raise GeometryError("Face mapping needs an 'outer' entry")
        return Face(value["outer"], coerce_list(value.get("holes", []), "Face holes"))
    return Face(value)


def coerce_brep(value: Any) -> Brep | None:
    """Accept a Brep, a Face, a boundary point list, or {"faces": [...]}.

    None passes through so lists of surfaces may contain gaps.
    """
    if value is None or isinstance(value, Brep):
        return value
    if isinstance(value, dict) and "faces" in value:
        return Brep([_coerce_face(f) for f in coerce_list(value["faces"], "Brep faces")])
    return Brep([_coerce_face(value)])
