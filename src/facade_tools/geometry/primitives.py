"""Solid primitives with dimension guards.

All primitives validate inputs and raise GeometryError on invalid dimensions.
"""

from manifold3d import Manifold

from facade_tools.errors import GeometryError


def _check_positive(value: float, name: str) -> None:
    """Raise GeometryError if value is not positive."""
    if value <= 0:
        raise GeometryError(f"{name} must be positive, got {value}")


def interval_box(
    x_interval: tuple[float, float],
    y_interval: tuple[float, float],
    z_interval: tuple[float, float],
) -> Manifold:
    """Create an axis-aligned box spanning three (min, max) intervals."""
    (x0, x1), (y0, y1), (z0, z1) = x_interval, y_interval, z_interval
    _check_positive(x1 - x0, "x extent")
    _check_positive(y1 - y0, "y extent")
    _check_positive(z1 - z0, "z extent")
    return Manifold.cube([x1 - x0, y1 - y0, z1 - z0]).translate([x0, y0, z0])
