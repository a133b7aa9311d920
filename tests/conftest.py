"""Pytest fixtures for paperfold tests."""

import pytest
import sys
from fractions import Fraction
from pathlib import Path

# Add repository root to path for imports
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from paperfold.geometry import Point, Polygon
from paperfold.trace import collecting_sink


def p(x, y) -> Point:
    """Shorthand point constructor used across tests."""
    return Point(x, y)


def keys(points) -> list:
    """Sorted exact keys of a sequence of points (order-insensitive compare)."""
    return sorted(pt.key() for pt in points)


@pytest.fixture
def unit_square() -> Polygon:
    """Counter-clockwise unit square with exact coordinates."""
    return Polygon([p(0, 0), p(1, 0), p(1, 1), p(0, 1)])


@pytest.fixture
def square2() -> Polygon:
    """Counter-clockwise 2x2 square with exact coordinates."""
    return Polygon([p(0, 0), p(2, 0), p(2, 2), p(0, 2)])


@pytest.fixture
def square2_float() -> Polygon:
    """Counter-clockwise 2x2 square with float coordinates."""
    return Polygon([p(0.0, 0.0), p(2.0, 0.0), p(2.0, 2.0), p(0.0, 2.0)])


@pytest.fixture
def u_shape() -> Polygon:
    """3x3 U shape open at the top (notch from x=1..2, y=1..3)."""
    return Polygon([
        p(0, 0), p(3, 0), p(3, 3), p(2, 3),
        p(2, 1), p(1, 1), p(1, 3), p(0, 3),
    ])


@pytest.fixture
def half() -> Fraction:
    return Fraction(1, 2)


@pytest.fixture
def sink():
    """Diagnostic sink that records events."""
    return collecting_sink()
