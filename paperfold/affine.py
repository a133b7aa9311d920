"""
Affine transforms in 2D homogeneous coordinates.

================================================================================
CONVENTION
================================================================================

Points are row vectors multiplied on the left:

    [x' y' 1] = [x y 1] @ M

  - x' = x*M[0][0] + y*M[1][0] + M[2][0]
  - y' = x*M[0][1] + y*M[1][1] + M[2][1]

The translation lives in the bottom row. With this convention the product
A * B applies A first and then B, so builder chains read left to right:

    AffineTransform.translate(-1, 0) * AffineTransform.scale(2, 2)

translates, then scales. The then_* helpers append in the same order.

Entries are stored in a numpy object array so that the same matrix code
works over floats and fractions.Fraction without losing exactness.
"""

import math

import numpy as np

from .errors import SingularTransformError
from .scalar import FLOAT, RATIONAL, Domain, domain_of


class AffineTransform:
    """A 3x3 homogeneous matrix over one scalar domain."""

    def __init__(self, matrix, domain: Domain):
        matrix = np.array(matrix, dtype=object)
        assert matrix.shape == (3, 3), f"expected 3x3 matrix, got {matrix.shape}"
        self.matrix = matrix
        self.domain = domain

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, row0, row1, row2, domain: Domain = None) -> 'AffineTransform':
        """Build from three rows, inferring the domain from the entries."""
        if domain is None:
            domain = domain_of(*row0, *row1, *row2)
        rows = [[domain.coerce(v) for v in row] for row in (row0, row1, row2)]
        return cls(rows, domain)

    @classmethod
    def identity(cls, domain: Domain = RATIONAL) -> 'AffineTransform':
        z, o = domain.zero, domain.one
        return cls([[o, z, z], [z, o, z], [z, z, o]], domain)

    @classmethod
    def scale(cls, sx, sy, domain: Domain = None) -> 'AffineTransform':
        domain = domain or domain_of(sx, sy)
        z, o = domain.zero, domain.one
        return cls.new((sx, z, z), (z, sy, z), (z, z, o), domain)

    @classmethod
    def shear(cls, hx, hy, domain: Domain = None) -> 'AffineTransform':
        domain = domain or domain_of(hx, hy)
        z, o = domain.zero, domain.one
        return cls.new((o, hx, z), (hy, o, z), (z, z, o), domain)

    @classmethod
    def rotate(cls, angle: float, domain: Domain = FLOAT) -> 'AffineTransform':
        """Counter-clockwise rotation by `angle` radians."""
        s = domain.from_float(math.sin(angle))
        c = domain.from_float(math.cos(angle))
        z, o = domain.zero, domain.one
        return cls.new((c, s, z), (-s, c, z), (z, z, o), domain)

    @classmethod
    def rotate_quarter(cls, domain: Domain = RATIONAL, turns: int = 1) -> 'AffineTransform':
        """Exact rotation by a multiple of 90 degrees (no trigonometry)."""
        z, o = domain.zero, domain.one
        c, s = [(o, z), (z, o), (-o, z), (z, -o)][turns % 4]
        return cls.new((c, s, z), (-s, c, z), (z, z, o), domain)

    @classmethod
    def reflect(cls, dx, dy, domain: Domain = None) -> 'AffineTransform':
        """
        Reflection across the line through the origin with direction (dx, dy).

        Built from the direction alone, so rational directions give an exact
        rational matrix.
        """
        domain = domain or domain_of(dx, dy)
        dx, dy = domain.coerce(dx), domain.coerce(dy)
        n = dx * dx + dy * dy
        assert not domain.is_zero(n), "reflection needs a non-zero direction"
        a = (dx * dx - dy * dy) / n
        b = 2 * dx * dy / n
        z, o = domain.zero, domain.one
        return cls.new((a, b, z), (b, -a, z), (z, z, o), domain)

    @classmethod
    def translate(cls, tx, ty, domain: Domain = None) -> 'AffineTransform':
        domain = domain or domain_of(tx, ty)
        z, o = domain.zero, domain.one
        return cls.new((o, z, z), (z, o, z), (tx, ty, o), domain)

    def then_scale(self, sx, sy) -> 'AffineTransform':
        return self * AffineTransform.scale(sx, sy, self.domain)

    def then_shear(self, hx, hy) -> 'AffineTransform':
        return self * AffineTransform.shear(hx, hy, self.domain)

    def then_rotate(self, angle: float) -> 'AffineTransform':
        return self * AffineTransform.rotate(angle, self.domain)

    def then_translate(self, tx, ty) -> 'AffineTransform':
        return self * AffineTransform.translate(tx, ty, self.domain)

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def as_domain(self, domain: Domain) -> 'AffineTransform':
        """Copy of this transform with every entry coerced to `domain`."""
        if domain is self.domain:
            return self
        return AffineTransform.new(*self.rows(), domain=domain)

    def __mul__(self, other: 'AffineTransform') -> 'AffineTransform':
        if not isinstance(other, AffineTransform):
            return NotImplemented
        domain = self.domain
        if other.domain is not domain:
            domain = FLOAT
        a = self.as_domain(domain)
        b = other.as_domain(domain)
        return AffineTransform(a.matrix.dot(b.matrix), domain)

    def __getitem__(self, index: tuple[int, int]):
        row, col = index
        assert 0 <= row < 3 and 0 <= col < 3, f"matrix index out of range: {index}"
        return self.matrix[row, col]

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        domain = self.domain if self.domain is other.domain else FLOAT
        return all(
            domain.eq(a, b)
            for a, b in zip(self.matrix.flat, other.matrix.flat)
        )

    def det(self):
        """Determinant by cofactor expansion along the first row."""
        (a, b, c), (d, e, f), (g, h, i) = self.rows()
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    def inverse(self) -> 'AffineTransform':
        """
        Inverse via the adjugate.

        Raises:
            SingularTransformError: if the determinant is zero-equivalent
        """
        (a, b, c), (d, e, f), (g, h, i) = self.rows()
        det = self.det()
        if self.domain.is_zero(det):
            raise SingularTransformError(f"transform is singular: {self!r}")

        adjugate = [
            [e * i - f * h, c * h - b * i, b * f - c * e],
            [f * g - d * i, a * i - c * g, c * d - a * f],
            [d * h - e * g, b * g - a * h, a * e - b * d],
        ]
        return AffineTransform(
            [[v / det for v in row] for row in adjugate],
            self.domain
        )

    def transform(self, point):
        """Map a point through this transform (row-vector convention)."""
        m = self.matrix
        x = point.x * m[0, 0] + point.y * m[1, 0] + m[2, 0]
        y = point.x * m[0, 1] + point.y * m[1, 1] + m[2, 1]
        return type(point)(x, y)

    def rows(self) -> tuple:
        return tuple(tuple(row) for row in self.matrix.tolist())

    def __repr__(self):
        return f"AffineTransform({self.rows()}, domain={self.domain.name})"
