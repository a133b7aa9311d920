"""Unit tests for snap module."""

import pytest
from fractions import Fraction

from paperfold.snap import qntz, snap, vertex_key

from conftest import p


class TestSnap:
    """Tests for snapping near 0 and 1."""

    def test_snap_float(self):
        """Test snapping floats near 0 and 1."""
        snapped = snap(p(1e-12, 0.9999999999999))
        assert snapped.x == 0.0
        assert snapped.y == 1.0

    def test_snap_rational_is_exact(self):
        """Test snapping rationals gives exact 0 and 1."""
        tiny = Fraction(1, 10**12)
        snapped = snap(p(tiny, 1 - tiny))
        assert snapped.x == 0
        assert snapped.y == 1
        assert isinstance(snapped.x, Fraction)

    def test_far_values_unchanged(self):
        """Test values far from 0 and 1 are unchanged."""
        assert snap(p(0.5, 0.25)) == p(0.5, 0.25)
        assert snap(p(Fraction(1, 3), 2)).key() == (Fraction(1, 3), Fraction(2))

    def test_custom_distance(self):
        """Test snapping with a custom distance."""
        assert snap(p(0.01, 0.5), distance=0.1) == p(0.0, 0.5)


class TestQuantize:
    """Tests for grid quantization."""

    def test_rounds_near_grid_points(self):
        """Test rounding onto a nearby grid point."""
        q = qntz(p(0.5000000000001, 0.25), 4)
        assert q.key() == (Fraction(1, 2), Fraction(1, 4))
        assert isinstance(q.x, Fraction)

    def test_binary_float_becomes_decimal_fraction(self):
        """Test binary floats round to decimal fractions."""
        assert qntz(p(0.1, 0.7), 10).key() == (Fraction(1, 10), Fraction(7, 10))

    def test_far_from_grid_unchanged(self):
        """Test points far from the grid are unchanged."""
        pt = p(Fraction(1, 3), 0)
        assert qntz(pt, 4) is pt

    def test_all_or_nothing(self):
        """Test quantization applies to both coordinates or neither."""
        pt = p(0.5, 0.3)
        assert qntz(pt, 4) is pt

    @pytest.mark.parametrize("x,y,base", [
        (0.123456789, 0.5, 65536),
        (0.75, 0.1, 1024),
        (1.0 / 3.0, 2.0 / 3.0, 3),
        (0.2, 0.8, 7),
    ])
    def test_never_moves_point_far(self, x, y, base):
        """Test quantization never moves a point beyond tolerance."""
        q = qntz(p(x, y), base)
        assert abs(float(q.x) - x) < 1e-9
        assert abs(float(q.y) - y) < 1e-9

    def test_rejects_bad_base(self):
        """Test a zero base is rejected."""
        with pytest.raises(AssertionError):
            qntz(p(0.5, 0.5), 0)


class TestVertexKey:
    """Tests for deduplication keys."""

    def test_near_points_share_key(self):
        """Test nearly equal points share a key."""
        noisy = p(0.5 + 1e-12, 1 - 1e-12)
        exact = p(Fraction(1, 2), 1)
        assert vertex_key(noisy) == vertex_key(exact)

    def test_distinct_points_differ(self):
        """Test distinct points have distinct keys."""
        assert vertex_key(p(0.5, 0.5)) != vertex_key(p(0.5, 0.25))
