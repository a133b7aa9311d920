"""
Line and polygon intersection.

Two modes are supported:

- discrete: both lines are finite segments
- infinite: both lines are extended in both directions

Polygon intersections are always re-validated against the finite boundary
edge that produced them and are returned as entry/exit pairs ordered along
the query line.
"""

from typing import Optional

from .errors import OddIntersectionError
from .geometry import Line, Point, Polygon, cross
from .scalar import domain_of
from .trace import TraceSink, emit


def _domain(*lines: Line):
    return domain_of(*(c for line in lines for p in (line.p1, line.p2) for c in (p.x, p.y)))


def intersect_inf(a: Line, b: Line) -> Optional[Point]:
    """
    Intersection of two infinite lines (2x2 determinant form).

    Returns None for parallel or near-parallel lines.
    """
    a.require_direction()
    b.require_direction()
    domain = _domain(a, b)

    x1, y1 = a.p1
    x2, y2 = a.p2
    x3, y3 = b.p1
    x4, y4 = b.p2

    det = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if domain.is_zero(det):
        return None

    da = x1 * y2 - y1 * x2
    db = x3 * y4 - y3 * x4
    x = (da * (x3 - x4) - (x1 - x2) * db) / det
    y = (da * (y3 - y4) - (y1 - y2) * db) / det
    return Point(x, y)


def intersect_discrete(a: Line, b: Line) -> Optional[Point]:
    """
    Intersection of two finite segments.

    With a = a.p1 + t*(a.p2 - a.p1) and b = b.p1 + s*(b.p2 - b.p1), the hit
    is accepted for 0 <= s < 1 and 0 <= t <= 1. The open end on `b` keeps a
    vertex shared by two chained boundary edges from being reported twice.
    """
    a.require_direction()
    b.require_direction()
    domain = _domain(a, b)

    s1 = a.delta
    s2 = b.delta
    c1 = a.p1 - b.p1

    denom = cross(s1, s2)
    s = domain.div(cross(s1, c1), denom)
    if s is None:
        return None
    t = cross(s2, c1) / denom

    if 0 <= s < 1 and 0 <= t <= 1:
        return a.p1 + s1.scale(t)
    return None


def _dedup(points: list[Point]) -> list[Point]:
    result = []
    for p in points:
        if not result or result[-1] != p:
            result.append(p)
    return result


def intersect_poly(line: Line, polygon: Polygon, discrete: bool,
                   sink: TraceSink = None, strict: bool = False) -> list[tuple[Point, Point]]:
    """
    Entry/exit pairs where `line` crosses the boundary of `polygon`.

    Candidates are collected from every boundary edge, kept only if they lie
    on that finite edge, sorted along `line` and de-duplicated. Consecutive
    candidates are then paired.

    An odd candidate count has no consistent pairing. It is reported to the
    sink as "intersect_poly.odd_count" and an empty list is returned, or
    OddIntersectionError is raised when `strict` is set.

    Args:
        line: Query line (a segment in discrete mode, extended otherwise)
        polygon: Polygon whose boundary is tested
        discrete: Segment mode if True, infinite-line mode if False
        sink: Diagnostic sink (defaults to logging)
        strict: Raise instead of returning an empty result on odd counts

    Returns:
        List of (entry, exit) point pairs ordered along the line
    """
    line.require_direction()

    candidates = []
    for boundary in polygon.edges():
        if boundary.is_degenerate():
            continue

        if discrete:
            # Segment ends resting on the boundary count as crossings
            for end in (line.p1, line.p2):
                if boundary.coincident(end):
                    candidates.append(end)
            point = intersect_discrete(line, boundary)
        else:
            point = intersect_inf(line, boundary)

        if point is not None and boundary.coincident(point):
            candidates.append(point)

    candidates.sort(key=lambda p: line.dist_along(p))
    candidates = _dedup(candidates)

    emit(sink, "intersect_poly.candidates",
         discrete=discrete, line=str(line), candidates=[str(p) for p in candidates])

    if len(candidates) % 2:
        if strict:
            raise OddIntersectionError(line, candidates)
        emit(sink, "intersect_poly.odd_count",
             discrete=discrete, line=str(line), count=len(candidates))
        return []

    return [(candidates[i], candidates[i + 1]) for i in range(0, len(candidates), 2)]


def intersect_poly_discrete(line: Line, polygon: Polygon,
                            sink: TraceSink = None, strict: bool = False) -> list[tuple[Point, Point]]:
    """Entry/exit pairs of a finite segment through a polygon."""
    return intersect_poly(line, polygon, True, sink=sink, strict=strict)


def intersect_poly_inf(line: Line, polygon: Polygon,
                       sink: TraceSink = None, strict: bool = False) -> list[tuple[Point, Point]]:
    """Entry/exit pairs of an infinitely extended line through a polygon."""
    return intersect_poly(line, polygon, False, sink=sink, strict=strict)


def slicey_edges(poly: Polygon, other: Polygon, sink: TraceSink = None) -> list[Line]:
    """
    Edges of `poly` that slice through `other`, clipped to it.

    An edge qualifies if it crosses the boundary of `other` at least once or
    lies within it. Edges that cross only once, or not at all while touching
    the inside, are extended to the full chord of `other`.
    """
    result = []
    for edge in poly.edges():
        if edge.is_degenerate():
            continue
        try:
            pairs = intersect_poly_discrete(edge, other, sink=sink, strict=True)
        except OddIntersectionError:
            pairs = []

        if not pairs and (other.contains(edge.p1) or other.contains(edge.p2)):
            try:
                pairs = intersect_poly_inf(edge, other, sink=sink, strict=True)
            except OddIntersectionError:
                pairs = []

        result.extend(Line(a, b) for a, b in pairs)
    return result
