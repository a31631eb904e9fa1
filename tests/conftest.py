"""Shared pytest fixtures for facade tools tests."""

import pytest

from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.regions import Brep
from facade_tools.settings import Settings


@pytest.fixture
def settings():
    """Default settings instance."""
    return Settings()


@pytest.fixture
def flat_wall():
    """3000 x 2000 wall lying in the world XY plane, corner at the origin."""
    return Brep.from_boundary([(0, 0, 0), (3000, 0, 0), (3000, 2000, 0), (0, 2000, 0)])


@pytest.fixture
def vertical_wall():
    """3000 wide, 2000 high wall standing in the world XZ plane."""
    return Brep.from_boundary([(0, 0, 0), (3000, 0, 0), (3000, 0, 2000), (0, 0, 2000)])


@pytest.fixture
def square_frame():
    """Closed 1000 x 1000 frame curve in the XY plane."""
    return Polyline([(0, 0, 0), (1000, 0, 0), (1000, 1000, 0), (0, 1000, 0)], closed=True)


@pytest.fixture
def straight_path():
    """1000 long path along world X."""
    return Polyline([(0, 0, 0), (1000, 0, 0)])
