"""Unit tests for intersect module."""

import pytest
from fractions import Fraction

from paperfold.errors import DegenerateGeometryError, OddIntersectionError
from paperfold.geometry import Line, Polygon
from paperfold.intersect import (
    intersect_discrete,
    intersect_inf,
    intersect_poly_discrete,
    intersect_poly_inf,
    slicey_edges,
)

from conftest import p


@pytest.fixture
def boundary() -> Polygon:
    """Clockwise float unit square."""
    return Polygon([p(0.0, 0.0), p(0.0, 1.0), p(1.0, 1.0), p(1.0, 0.0)])


class TestIntersectInf:
    """Tests for infinite line intersection."""

    def test_crossing_diagonals_exact(self):
        """Test crossing diagonals meet exactly."""
        hit = intersect_inf(Line(p(0, 0), p(1, 1)), Line(p(0, 1), p(1, 0)))
        assert hit == p(Fraction(1, 2), Fraction(1, 2))
        assert isinstance(hit.x, Fraction)

    def test_extends_beyond_segments(self):
        """Test intersection beyond the segment ends."""
        hit = intersect_inf(Line(p(0.0, 0.0), p(0.25, 0.25)), Line(p(0.0, 1.0), p(1.0, 0.0)))
        assert hit == p(0.5, 0.5)

    def test_parallel(self):
        """Test parallel lines have no intersection."""
        assert intersect_inf(Line(p(0, 0), p(1, 0)), Line(p(0, 1), p(1, 1))) is None

    def test_degenerate(self):
        """Test a zero-length line is rejected."""
        with pytest.raises(DegenerateGeometryError):
            intersect_inf(Line(p(0, 0), p(0, 0)), Line(p(0, 1), p(1, 1)))


class TestIntersectDiscrete:
    """Tests for segment intersection."""

    def test_crossing(self):
        """Test crossing segments."""
        a = Line(p(0.0, 0.0), p(1.0, 1.0))
        b = Line(p(0.0, 1.0), p(1.0, 0.0))
        assert intersect_discrete(a, b) == p(0.5, 0.5)

    def test_parallel(self):
        """Test parallel lines have no intersection."""
        a = Line(p(0, 0), p(1, 0))
        b = Line(p(0, 1), p(1, 1))
        assert intersect_discrete(a, b) is None

    def test_disjoint(self):
        """Test disjoint segments."""
        a = Line(p(0, 0), p(1, 0))
        b = Line(p(2, -1), p(2, 1))
        assert intersect_discrete(a, b) is None

    def test_start_of_other_is_included(self):
        """Test a hit at the boundary edge start is accepted."""
        a = Line(p(0, 0), p(1, 1))
        b = Line(p(1, 1), p(2, 0))
        assert intersect_discrete(a, b) == p(1, 1)

    def test_end_of_other_is_excluded(self):
        """Test a hit at the boundary edge end is rejected."""
        a = Line(p(0, 0), p(1, 1))
        b = Line(p(2, 0), p(1, 1))
        assert intersect_discrete(a, b) is None

    def test_degenerate(self):
        """Test a zero-length line is rejected."""
        with pytest.raises(DegenerateGeometryError):
            intersect_discrete(Line(p(0, 0), p(1, 1)), Line(p(2, 2), p(2, 2)))


class TestIntersectPoly:
    """Tests for line-polygon intersection."""

    def test_discrete_miss(self, boundary):
        """Test a segment that misses the polygon."""
        assert intersect_poly_discrete(Line(p(2.0, 0.0), p(1.0, 3.0)), boundary) == []

    def test_discrete_from_corner(self, boundary):
        """Test a segment starting at a corner."""
        pairs = intersect_poly_discrete(Line(p(0.0, 0.0), p(1.0, 3.0)), boundary)
        assert len(pairs) == 1
        entry, exit_ = pairs[0]
        assert entry == p(0.0, 0.0)
        assert exit_ == p(1.0 / 3.0, 1.0)

    def test_infinite_extends_segment(self, boundary):
        """Test infinite mode extends a short segment."""
        pairs = intersect_poly_inf(Line(p(0.1, 0.3), p(0.25, 0.75)), boundary)
        assert len(pairs) == 1
        entry, exit_ = pairs[0]
        assert entry == p(0.0, 0.0)
        assert exit_ == p(1.0 / 3.0, 1.0)

    def test_pairs_follow_line_direction(self, unit_square):
        """Test pairs are ordered along the line direction."""
        line = Line(p(2, Fraction(1, 2)), p(-1, Fraction(1, 2)))
        pairs = intersect_poly_inf(line, unit_square)
        assert pairs == [(p(1, Fraction(1, 2)), p(0, Fraction(1, 2)))]

    def test_concave_gives_two_pairs(self, u_shape):
        """Test a concave polygon gives two pairs."""
        pairs = intersect_poly_inf(Line(p(0, 2), p(3, 2)), u_shape)
        assert pairs == [(p(0, 2), p(1, 2)), (p(2, 2), p(3, 2))]

    def test_odd_count_returns_empty(self, sink):
        """Test an odd crossing count yields no result and a diagnostic."""
        triangle = Polygon([p(0, 0), p(2, 0), p(1, 1)])
        assert intersect_poly_inf(Line(p(0, 1), p(2, 1)), triangle, sink=sink) == []
        events = [event for event, _ in sink.events]
        assert "intersect_poly.odd_count" in events

    def test_odd_count_strict(self):
        """Test strict mode raises on an odd crossing count."""
        triangle = Polygon([p(0, 0), p(2, 0), p(1, 1)])
        with pytest.raises(OddIntersectionError) as info:
            intersect_poly_inf(Line(p(0, 1), p(2, 1)), triangle, strict=True)
        assert info.value.candidates == [p(1, 1)]

    def test_degenerate_line(self, unit_square):
        """Test a zero-length query line is rejected."""
        with pytest.raises(DegenerateGeometryError):
            intersect_poly_inf(Line(p(0, 0), p(0, 0)), unit_square)


class TestSliceyEdges:
    """Tests for slicing one polygon's edges through another."""

    def test_inner_square_edges_become_chords(self, boundary):
        """Test edges inside the boundary extend to full chords."""
        inner = Polygon([p(0.2, 0.2), p(0.7, 0.2), p(0.7, 0.7), p(0.2, 0.7)])
        chords = slicey_edges(inner, boundary)
        assert len(chords) == 4
        for chord in chords:
            assert boundary.coincident(chord.p1)
            assert boundary.coincident(chord.p2)

    def test_surrounding_polygon_has_no_slices(self, boundary):
        """Test edges outside the boundary produce no slices."""
        outer = Polygon([p(-1.0, -1.0), p(1.5, -0.5), p(1.5, 1.5), p(-1.0, 1.5)])
        assert slicey_edges(outer, boundary) == []
