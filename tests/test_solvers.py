"""Tests for the solver registry and diagnostics reporting."""

import logging

import pytest

from facade_tools.components.louver import LouverBox
from facade_tools.diagnostics import CollectingSink, LoggingSink, Severity
from facade_tools.errors import ValidationError
from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.regions import Brep
from facade_tools.solvers import louvers, windows  # noqa: F401
from facade_tools.solvers.base import SOLVER_REGISTRY, get_solver, list_solvers

WALL = [[0, 0, 0], [3000, 0, 0], [3000, 2000, 0], [0, 2000, 0]]
FRAME = {"points": [[0, 0], [1000, 0], [1000, 1000], [0, 1000]], "closed": True}


@pytest.fixture
def sink():
    return CollectingSink()


class TestRegistry:
    def test_all_solvers_registered(self):
        assert set(SOLVER_REGISTRY) == {"create_window", "analyze_window_view", "create_louvers"}

    def test_list_solvers_sorted(self):
        names = [info["name"] for info in list_solvers()]
        assert names == sorted(names)
        assert all(info["category"] == "Facade" for info in list_solvers())

    def test_unknown_solver(self):
        with pytest.raises(ValidationError, match="Unknown solver"):
            get_solver("make_coffee")


class TestCreateWindowSolver:
    def test_raw_inputs(self, sink):
        outputs = get_solver("create_window").solve(
            {"surface": WALL, "width": 600, "height": 400}, sink
        )
        assert sink.diagnostics == []
        assert isinstance(outputs["wall"], Brep)
        assert isinstance(outputs["outline"], Polyline)

    def test_defaults_fill_missing_parameters(self, sink):
        outputs = get_solver("create_window").solve({"surface": WALL}, sink)
        assert outputs["result"].rectangle.width == pytest.approx(500)

    def test_out_of_range_position_is_error(self, sink):
        outputs = get_solver("create_window").solve({"surface": WALL, "u": 2.0}, sink)
        assert outputs is None
        assert len(sink.errors) == 1
        assert "0 to 1.0" in sink.errors[0]

    def test_large_margin_is_warning(self, sink):
        outputs = get_solver("create_window").solve({"surface": WALL, "margin": 5000}, sink)
        assert outputs is None
        assert sink.errors == []
        assert len(sink.warnings) == 1

    def test_bad_parameter_type(self, sink):
        outputs = get_solver("create_window").solve({"surface": WALL, "width": "wide"}, sink)
        assert outputs is None
        assert sink.errors[0].startswith("Invalid parameters")

    def test_missing_surface(self, sink):
        assert get_solver("create_window").solve({}, sink) is None
        assert sink.errors


class TestAnalyzeWindowViewSolver:
    def test_areas(self, sink):
        outputs = get_solver("analyze_window_view").solve(
            {
                "frame": FRAME,
                "surfaces": [[[0, 0], [500, 0], [500, 500], [0, 500]], None],
                "factors": [0.5, 1.0],
            },
            sink,
        )
        assert outputs["factored_areas"] == pytest.approx([125000.0, 0.0])
        assert len(outputs["geometry"]) == 1

    def test_mismatched_lists(self, sink):
        outputs = get_solver("analyze_window_view").solve(
            {"frame": FRAME, "surfaces": [WALL], "factors": []}, sink
        )
        assert outputs is None
        assert "must be equal" in sink.errors[0]

    def test_open_frame(self, sink):
        outputs = get_solver("analyze_window_view").solve(
            {"frame": [[0, 0], [1, 0], [1, 1]], "surfaces": [], "factors": []}, sink
        )
        assert outputs is None
        assert sink.errors


class TestCreateLouversSolver:
    def test_louvers(self, sink):
        outputs = get_solver("create_louvers").solve(
            {"curve": [[0, 0, 0], [1000, 0, 0]], "count": 5}, sink
        )
        assert len(outputs["louvers"]) == 5
        assert all(isinstance(lv, LouverBox) for lv in outputs["louvers"])

    def test_count_too_small_is_warning(self, sink):
        outputs = get_solver("create_louvers").solve(
            {"curve": [[0, 0], [1000, 0]], "count": 2, "remove_ends": True}, sink
        )
        assert outputs is None
        assert sink.diagnostics[0].severity is Severity.WARNING

    def test_does_not_fit_is_warning(self, sink):
        outputs = get_solver("create_louvers").solve(
            {"curve": [[0, 0], [100, 0]], "width": 500}, sink
        )
        assert outputs is None
        assert len(sink.warnings) == 1

    def test_zero_height_is_error(self, sink):
        outputs = get_solver("create_louvers").solve(
            {"curve": [[0, 0], [1000, 0]], "height": 0}, sink
        )
        assert outputs is None
        assert "height" in sink.errors[0]


class TestSinks:
    def test_collecting_sink_clear(self, sink):
        sink.report(Severity.ERROR, "boom")
        sink.report(Severity.WARNING, "hmm")
        assert sink.errors == ["boom"]
        assert sink.warnings == ["hmm"]
        sink.clear()
        assert sink.diagnostics == []

    def test_logging_sink(self, caplog):
        sink = LoggingSink(logging.getLogger("facade_tools.test"))
        with caplog.at_level(logging.WARNING, logger="facade_tools.test"):
            sink.report(Severity.ERROR, "bad wall")
            sink.report(Severity.WARNING, "tight fit")
        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.ERROR, logging.WARNING]

    def test_default_sink_logs(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_solver("create_window").solve({"surface": WALL, "v": 9}) is None
        assert any("0 to 1.0" in r.getMessage() for r in caplog.records)


class TestMalformedInputs:
    def test_ragged_curve(self, sink):
        outputs = get_solver("create_louvers").solve({"curve": [[0, 0], [1000, 0, 0]]}, sink)
        assert outputs is None
        assert len(sink.errors) == 1
        assert "points" in sink.errors[0]

    def test_non_numeric_surface(self, sink):
        outputs = get_solver("create_window").solve({"surface": "wall"}, sink)
        assert outputs is None
        assert len(sink.errors) == 1

    def test_surface_with_text_coordinates(self, sink):
        outputs = get_solver("create_window").solve(
            {"surface": [["a", "b"], [1, 0], [1, 1]]}, sink
        )
        assert outputs is None
        assert sink.errors

    def test_holes_must_be_a_list(self, sink):
        outputs = get_solver("create_window").solve(
            {"surface": {"outer": WALL, "holes": 7}}, sink
        )
        assert outputs is None
        assert "holes" in sink.errors[0]

    def test_surfaces_must_be_a_list(self, sink):
        outputs = get_solver("analyze_window_view").solve(
            {"frame": FRAME, "surfaces": 3, "factors": [1.0]}, sink
        )
        assert outputs is None
        assert "Surfaces" in sink.errors[0]
