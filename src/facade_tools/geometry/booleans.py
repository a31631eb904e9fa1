"""Boolean operations with empty-geometry guards.

Solids (Manifold) and planar regions (CrossSection) are both filtered for
emptiness before any batch operation runs.
"""

from manifold3d import CrossSection, JoinType, Manifold, OpType

# Regions or fragments with less area than this are degenerate
AREA_EPSILON = 1e-9


def _filter_empty(parts: list[Manifold]) -> list[Manifold]:
    """Remove empty manifolds from a list."""
    return [p for p in parts if not p.is_empty()]


def union_all(parts: list[Manifold]) -> Manifold:
    """Union a list of manifolds. Filters empty manifolds first.

    Returns an empty Manifold if no valid parts remain.
    """
    valid = _filter_empty(parts)
    if not valid:
        return Manifold()
    if len(valid) == 1:
        return valid[0]
    return Manifold.batch_boolean(valid, OpType.Add)


def split_region(
    region: CrossSection, cutter: CrossSection
) -> tuple[CrossSection, CrossSection]:
    """Split a region into the parts inside and outside a cutter region."""
    return region ^ cutter, region - cutter


def punch_hole(
    region: CrossSection, hole: CrossSection, tolerance: float
) -> CrossSection | None:
    """Subtract hole from region as a true interior hole.

    Returns None when the hole is degenerate, or when it reaches within
    tolerance of the region boundary (which would notch the region
    instead of piercing it).
    """
    if region.is_empty() or hole.is_empty() or hole.area() <= AREA_EPSILON:
        return None
    clearance = hole.offset(tolerance, JoinType.Miter)
    if (clearance - region).area() > AREA_EPSILON:
        return None
    result = region - hole
    if len(result.to_polygons()) != len(region.to_polygons()) + 1:
        return None
    return result
