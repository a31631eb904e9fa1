"""Tests for the factored intersection area."""

import numpy as np
import pytest

from facade_tools.components.view_area import (
    factored_intersection_areas,
    is_inside_fragment,
)
from facade_tools.errors import GeometryError, ValidationError
from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.plane import Plane
from facade_tools.geometry.regions import Brep


def rect(x0, y0, x1, y1, z=0.0):
    return Brep.from_boundary([(x0, y0, z), (x1, y0, z), (x1, y1, z), (x0, y1, z)])


class TestFactoredIntersectionAreas:
    def test_surface_inside_frame_counts_fully(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(200, 200, 400, 400)], [2.0])
        assert result.factored_areas == pytest.approx([80000.0])
        assert len(result.fragments) == 1

    def test_surface_straddling_frame(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(-500, 0, 500, 1000)], [1.0])
        assert result.factored_areas[0] == pytest.approx(500000.0, rel=1e-6)
        assert len(result.fragments) == 1
        vertices = result.fragments[0].vertices
        assert vertices[:, 0].min() == pytest.approx(0.0, abs=1e-6)

    def test_surface_outside_frame(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(2000, 0, 3000, 1000)], [1.0])
        assert result.factored_areas == [0.0]
        assert result.fragments == []

    def test_frame_inside_large_surface(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(-1000, -1000, 2000, 2000)], [0.5])
        assert result.factored_areas[0] == pytest.approx(500000.0, rel=1e-6)
        assert len(result.fragments) == 1

    def test_none_surface_contributes_zero(self, square_frame):
        result = factored_intersection_areas(
            square_frame, [None, rect(0, 0, 100, 100)], [3.0, 1.0]
        )
        assert result.factored_areas[0] == 0.0
        assert result.factored_areas[1] == pytest.approx(10000.0)
        assert len(result.fragments) == 1

    def test_one_area_per_surface(self, square_frame):
        surfaces = [rect(0, 0, 10, 10), None, rect(5000, 0, 5010, 10), rect(-5, -5, 5, 5)]
        result = factored_intersection_areas(square_frame, surfaces, [1, 1, 1, 1])
        assert len(result.factored_areas) == len(surfaces)
        assert result.factored_areas[3] == pytest.approx(25.0, rel=1e-6)

    def test_parallel_surface_off_the_frame_plane(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(100, 100, 300, 300, z=500)], [1.0])
        assert result.factored_areas[0] == pytest.approx(40000.0)

    def test_multi_face_surface_sums_faces(self, square_frame):
        surface = Brep(rect(0, 0, 100, 100).faces + rect(200, 200, 300, 300).faces)
        result = factored_intersection_areas(square_frame, [surface], [1.0])
        assert result.factored_areas[0] == pytest.approx(20000.0)
        assert len(result.fragments) == 2

    def test_zero_factor(self, square_frame):
        result = factored_intersection_areas(square_frame, [rect(0, 0, 100, 100)], [0.0])
        assert result.factored_areas == [0.0]
        assert result.total == 0.0

    def test_empty_inputs(self, square_frame):
        result = factored_intersection_areas(square_frame, [], [])
        assert result.factored_areas == []

    def test_mismatched_lengths(self, square_frame):
        with pytest.raises(ValidationError, match="must be equal"):
            factored_intersection_areas(square_frame, [rect(0, 0, 1, 1)], [1.0, 2.0])

    def test_open_frame_rejected(self):
        frame = Polyline([(0, 0), (100, 0), (100, 100)])
        with pytest.raises(ValidationError, match="closed, planar"):
            factored_intersection_areas(frame, [], [])

    def test_non_planar_frame_rejected(self):
        frame = Polyline([(0, 0, 0), (100, 0, 0), (100, 100, 50), (0, 100, 0)], closed=True)
        with pytest.raises(ValidationError):
            factored_intersection_areas(frame, [], [])

    def test_non_planar_surface_raises(self, square_frame):
        surface = Brep.from_boundary([(0, 0, 0), (100, 0, 0), (100, 100, 5), (0, 100, 0)])
        with pytest.raises(GeometryError):
            factored_intersection_areas(square_frame, [surface], [1.0])


class TestInsideClassification:
    def test_boundary_vertices_count_as_inside(self, square_frame):
        fragment = rect(0, 0, 1000, 500)
        assert is_inside_fragment(fragment, square_frame, Plane.world_xy(), 0.001)

    def test_one_outside_vertex_rejects(self, square_frame):
        fragment = rect(500, 500, 1001, 900)
        assert not is_inside_fragment(fragment, square_frame, Plane.world_xy(), 0.001)

    def test_vertex_sampling_accepts_fragment_crossing_frame(self):
        # Known approximation: only vertices are sampled. The square's top
        # edge passes through the frame's notch, but every corner is inside.
        frame = Polyline(
            [(-10, -10), (110, -10), (110, 110), (60, 110),
             (60, 50), (40, 50), (40, 110), (-10, 110)],
            closed=True,
        )
        fragment = rect(0, 0, 100, 100)
        assert is_inside_fragment(fragment, frame, Plane.world_xy(), 0.001)
        assert not np.isclose(fragment.area(), 100 * 100 - 20 * 50)
