"""
Planar geometry primitives for paper folding.

Value types shared by every other module:

- Point: pair of scalars (float or Fraction, see scalar.py)
- Line: directed segment between two points
- Polygon: implicitly closed boundary plus the transform that maps its
  original flat-sheet coordinates to where it currently lies
- Shape: polygons whose hole orientation subtracts from the net area
- Skeleton: ordered crease lines

All of them are immutable; operations return new values.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional
import math

from .affine import AffineTransform
from .errors import DegenerateGeometryError
from .scalar import FLOAT, Domain, domain_of


# Angular tolerance (radians) for right-angle corner detection
CORNER_TOLERANCE = 1e-5


@dataclass(frozen=True, eq=False)
class Point:
    """A 2D point. Equality follows the scalar domain of the coordinates."""
    x: object
    y: object

    def __post_init__(self):
        domain = domain_of(self.x, self.y)
        object.__setattr__(self, 'x', domain.coerce(self.x))
        object.__setattr__(self, 'y', domain.coerce(self.y))

    @property
    def domain(self) -> Domain:
        return domain_of(self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        domain = domain_of(self.x, self.y, other.x, other.y)
        return domain.eq(self.x, other.x) and domain.eq(self.y, other.y)

    # Tolerant equality cannot be hashed; use key() for dictionaries
    __hash__ = None

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, alpha) -> 'Point':
        return Point(self.x * alpha, self.y * alpha)

    def to_float(self) -> 'Point':
        return Point(float(self.x), float(self.y))

    def key(self) -> tuple[Fraction, Fraction]:
        """Exact hashable identity of this point."""
        return (Fraction(self.x), Fraction(self.y))

    def __repr__(self):
        return f"Point({self.x!r}, {self.y!r})"

    def __str__(self):
        return f"({self.x}, {self.y})"


def cross(a: Point, b: Point):
    """Z component of the cross product of two vectors."""
    return a.x * b.y - a.y * b.x


def dot(a: Point, b: Point):
    return a.x * b.x + a.y * b.y


def angle(p0: Point, p1: Point) -> float:
    """Direction angle of p0 -> p1 in radians."""
    d = p1 - p0
    return math.atan2(float(d.y), float(d.x))


def distance(a: Point, b: Point):
    """Euclidean distance, exact for axis-aligned pairs."""
    return Line(a, b).len()


def is_convex(l0: 'Line', l1: 'Line') -> bool:
    """
    True if l0 followed by l1 turns counter-clockwise.

    Assumes l0.p2 == l1.p1.
    """
    d1 = l0.p2 - l0.p1
    d2 = l1.p2 - l0.p2
    return cross(d1, d2) > 0


@dataclass(frozen=True)
class Line:
    """A directed segment from p1 to p2."""
    p1: Point
    p2: Point

    @property
    def domain(self) -> Domain:
        return domain_of(self.p1.x, self.p1.y, self.p2.x, self.p2.y)

    @property
    def delta(self) -> Point:
        return self.p2 - self.p1

    def is_degenerate(self) -> bool:
        return self.p1 == self.p2

    def require_direction(self) -> None:
        """Raise DegenerateGeometryError if this line has no direction."""
        if self.is_degenerate():
            raise DegenerateGeometryError(f"zero-length line {self}")

    def len(self):
        """
        Length of the segment.

        Axis-aligned lines return the absolute coordinate delta so they stay
        exact (and free of cancellation) in both domains.
        """
        d = self.delta
        domain = self.domain
        if domain.is_zero(d.y):
            return abs(d.x)
        if domain.is_zero(d.x):
            return abs(d.y)
        return domain.sqrt(d.x * d.x + d.y * d.y)

    def coincident(self, point: Point) -> bool:
        """True if point lies on this finite segment."""
        if self.is_degenerate():
            return point == self.p1

        domain = domain_of(self.p1.x, self.p1.y, self.p2.x, self.p2.y, point.x, point.y)
        if domain is FLOAT:
            total = distance(self.p1, point) + distance(point, self.p2)
            return domain.eq(total, self.len())

        # Exact: collinear and inside the bounding box
        if cross(self.delta, point - self.p1) != 0:
            return False
        return (min(self.p1.x, self.p2.x) <= point.x <= max(self.p1.x, self.p2.x) and
                min(self.p1.y, self.p2.y) <= point.y <= max(self.p1.y, self.p2.y))

    def interpolate(self, alpha) -> Point:
        """Point at fraction alpha along the line (outside [0, 1] extrapolates)."""
        return self.p1 + self.delta.scale(alpha)

    def split(self, alpha) -> tuple['Line', 'Line']:
        """Split into two lines meeting at interpolate(alpha)."""
        mid = self.interpolate(alpha)
        return (Line(self.p1, mid), Line(mid, self.p2))

    def dist_along(self, point: Point):
        """Fractional position of (the projection of) point along this line."""
        self.require_direction()
        d = self.delta
        return dot(point - self.p1, d) / dot(d, d)

    def to_float(self) -> 'Line':
        return Line(self.p1.to_float(), self.p2.to_float())

    def __str__(self):
        return f"{self.p1} -> {self.p2}"


@dataclass(frozen=True, eq=False)
class Polygon:
    """
    A simple polygon with an implicit closing edge.

    Edge i runs from points[i - 1] to points[i]. `transform` maps the
    polygon's coordinates on the original flat sheet to its current
    coordinates; source_poly() applies the inverse.
    """
    points: tuple
    transform: Optional[AffineTransform] = field(default=None)

    def __post_init__(self):
        points = tuple(p if isinstance(p, Point) else Point(*p) for p in self.points)
        assert len(points) >= 3, f"polygon needs at least 3 points, got {len(points)}"
        object.__setattr__(self, 'points', points)
        if self.transform is None:
            object.__setattr__(self, 'transform', AffineTransform.identity(self.domain))

    @property
    def domain(self) -> Domain:
        return domain_of(*(c for p in self.points for c in (p.x, p.y)))

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index) -> Point:
        return self.points[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self.points == other.points and self.transform == other.transform

    __hash__ = None

    def edges(self) -> list[Line]:
        """Boundary segments, starting with the closing edge points[-1] -> points[0]."""
        return [Line(self.points[i - 1], self.points[i]) for i in range(len(self.points))]

    def signed_area2(self):
        """Doubled signed area: sum of (x2 - x1) * (y2 + y1) over the edges."""
        total = self.domain.zero
        for edge in self.edges():
            total += (edge.p2.x - edge.p1.x) * (edge.p2.y + edge.p1.y)
        return total

    def area(self):
        return abs(self.signed_area2()) / 2

    def is_hole(self) -> bool:
        """Clockwise polygons (non-negative doubled sum) are holes."""
        return self.signed_area2() >= 0

    def inside(self, test: Point) -> bool:
        """Ray-casting parity test for the strict interior."""
        inside = False
        n = len(self.points)
        for i in range(n):
            p1 = self.points[i]
            p2 = self.points[(i + 1) % n]
            if ((p1.y > test.y) != (p2.y > test.y)) and \
                    (test.x < (p2.x - p1.x) * (test.y - p1.y) / (p2.y - p1.y) + p1.x):
                inside = not inside
        return inside

    def coincident(self, test: Point) -> bool:
        """True if the point lies on the boundary."""
        return any(edge.coincident(test) for edge in self.edges())

    def contains(self, test: Point) -> bool:
        """Interior or boundary."""
        return self.inside(test) or self.coincident(test)

    def corners(self) -> list[tuple[Line, Line]]:
        """Adjacent edge pairs meeting at a multiple of 90 degrees."""
        edges = self.edges()
        quarter = math.pi / 2
        result = []
        for i, edge in enumerate(edges):
            prev = edges[i - 1]
            diff = abs(angle(prev.p1, prev.p2) - angle(edge.p1, edge.p2))
            r = diff % quarter
            if min(r, quarter - r) < CORNER_TOLERANCE:
                result.append((prev, edge))
        return result

    def square(self) -> bool:
        return len(self.points) == 4 and len(self.corners()) == 4

    def source_poly(self) -> 'Polygon':
        """
        This polygon mapped back onto the original flat sheet.

        Orientation-reversing transforms (an odd number of reflections) flip
        the winding, so the point order is reversed to restore it.
        """
        inverse = self.transform.inverse()
        points = [inverse.transform(p) for p in self.points]
        if self.transform.det() < 0:
            points.reverse()
        return Polygon(points)

    def lowest_vertex(self, boundary: 'Polygon') -> Optional[Point]:
        """
        Vertex of this polygon lying on `boundary` closest to the origin.

        Boundary edges are searched in order and the search stops at the first
        edge with any coincident vertex. Returns None if no vertex lies on the
        boundary.
        """
        candidates = []
        for edge in boundary.edges():
            candidates = [p for p in self.points if edge.coincident(p)]
            if candidates:
                break

        if not candidates:
            return None

        origin = Point(0, 0)
        return min(candidates, key=lambda p: float(distance(origin, p)))

    def __repr__(self):
        pts = ", ".join(str(p) for p in self.points)
        return f"Polygon([{pts}])"


@dataclass
class Shape:
    """A set of polygons; holes subtract from the net area."""
    polys: list[Polygon] = field(default_factory=list)

    def __iter__(self):
        return iter(self.polys)

    def __len__(self):
        return len(self.polys)

    def area(self):
        total = 0
        for poly in self.polys:
            if poly.is_hole():
                total -= poly.area()
            else:
                total += poly.area()
        return total


@dataclass(frozen=True)
class Skeleton:
    """Ordered crease lines of a folding sequence."""
    lines: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))

    def push(self, line: Line) -> 'Skeleton':
        return Skeleton(self.lines + (line,))

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)
