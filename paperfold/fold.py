"""
Fold Engine - split polygons along a fold line and reflect one side.

================================================================================
OVERVIEW
================================================================================

A fold is given by two points v1, v2 (the fold line, extended infinitely)
and an anchor point. Folding a polygon:

  1. split_polygon: cut the polygon into fragments along the fold line
  2. fragments containing the anchor stay where they are
  3. every other fragment is reflected across the fold line (flip_polygon)

Each polygon carries an AffineTransform mapping original flat-sheet
coordinates to its current position. Splitting moves nothing, so fragments
inherit the parent transform. Flipping appends the reflection:

    flipped.transform = parent.transform * reflect_matrix(v1, v2)

so Polygon.source_poly() undoes the reflection and then every earlier fold.

================================================================================
SPLIT TRAVERSAL
================================================================================

The cut points are the infinite-line intersections of the fold line with the
boundary, paired consecutively along the fold line: (c0, c1), (c2, c3), ...
Each pair bounds a chord of the polygon that lies inside it.

The boundary is walked once, edge by edge, filling an arena of fragment
builders:

  - the start point of every edge goes to the current builder
  - when an edge reaches a cut point c with partner c':
      * c closes the current builder's run along the boundary
      * the current builder must continue from c' once the walk gets there,
        so (c' -> current) is registered as pending
      * the walk continues in whichever builder is pending at c, or in a new
        builder if none is
      * c also opens the run of the builder switched to

A line crossing the boundary 2k times produces k + 1 fragments (more than
two for concave polygons). No recursion is involved; order of the walk is
what pairs runs with builders, so the traversal is inherently sequential.
"""

import math
from typing import Optional

from .affine import AffineTransform
from .errors import OddIntersectionError
from .geometry import Line, Point, Polygon
from .intersect import intersect_discrete, intersect_poly_inf
from .scalar import RATIONAL
from .trace import TraceSink, emit


def gradient(line: Line) -> Optional[object]:
    """Slope dy/dx of a line, or None for a vertical line."""
    d = line.delta
    return line.domain.div(d.y, d.x)


def reflect_matrix(v1: Point, v2: Point) -> AffineTransform:
    """
    Reflection across the line through v1 and v2.

    Composed as: translate v1 to the origin, mirror, translate back.

    Over rationals the mirror is built directly from the line direction and
    stays exact at any angle. Over floats it is rotate the line onto the x
    axis, scale (1, -1), rotate back; vertical lines have no gradient and use
    quarter turns instead.

    Raises:
        DegenerateGeometryError: if v1 == v2
    """
    line = Line(v1, v2)
    line.require_direction()
    domain = line.domain

    to_origin = AffineTransform.translate(-v1.x, -v1.y, domain)
    back = AffineTransform.translate(v1.x, v1.y, domain)

    if domain is RATIONAL:
        d = line.delta
        return to_origin * AffineTransform.reflect(d.x, d.y, domain) * back

    mirror = AffineTransform.scale(domain.one, -domain.one, domain)

    slope = gradient(line)
    if slope is None:
        return (to_origin
                * AffineTransform.rotate_quarter(domain, 1)
                * mirror
                * AffineTransform.rotate_quarter(domain, -1)
                * back)

    theta = math.atan(domain.to_float(slope))
    return (to_origin
            * AffineTransform.rotate(-theta, domain)
            * mirror
            * AffineTransform.rotate(theta, domain)
            * back)


def flip_point(p: Point, v1: Point, v2: Point) -> Point:
    """Reflect a point across the line through v1 and v2."""
    return reflect_matrix(v1, v2).transform(p)


def flip_line(line: Line, v1: Point, v2: Point) -> Line:
    """Reflect both ends of a line."""
    m = reflect_matrix(v1, v2)
    return Line(m.transform(line.p1), m.transform(line.p2))


def fold_line(line: Line, v1: Point, v2: Point) -> list[Line]:
    """
    Fold a crease line across the segment v1-v2.

    If the line crosses the fold segment, line.p1 stays put and only the part
    beyond the crossing is reflected; both returned lines start at the
    crossing. Otherwise the whole line is reflected.
    """
    crossing = intersect_discrete(line, Line(v1, v2))
    if crossing is None:
        return [flip_line(line, v1, v2)]
    return [
        Line(crossing, line.p1),
        Line(crossing, flip_point(line.p2, v1, v2)),
    ]


class _SplitState:
    """Builder arena for the boundary walk in split_polygon."""

    def __init__(self):
        self.builders: list[list[Point]] = [[]]
        self.current = 0
        # (cut point, builder index waiting to resume there)
        self.pending: list[tuple[Point, int]] = []

    def append(self, point: Point) -> None:
        builder = self.builders[self.current]
        if not builder or builder[-1] != point:
            builder.append(point)

    def cross(self, cut: Point, partner: Point) -> None:
        self.append(cut)
        self.pending.append((partner, self.current))
        self.current = self._resume(cut)
        self.append(cut)

    def _resume(self, cut: Point) -> int:
        for i, (point, index) in enumerate(self.pending):
            if point == cut:
                del self.pending[i]
                return index
        self.builders.append([])
        return len(self.builders) - 1


def _close(points: list[Point]) -> list[Point]:
    points = list(points)
    while len(points) > 1 and points[-1] == points[0]:
        points.pop()
    return points


def split_polygon(poly: Polygon, v1: Point, v2: Point, sink: TraceSink = None) -> list[Polygon]:
    """
    Split a polygon along the infinite line through v1 and v2.

    Args:
        poly: Polygon to split
        v1, v2: Two distinct points on the fold line
        sink: Diagnostic sink (defaults to logging)

    Returns:
        Fragments in boundary-walk order, each carrying poly.transform.
        [poly] if the line does not cross the boundary; [] if the crossings
        cannot be paired (odd count, reported as "split_polygon.odd_count").
    """
    line = Line(v1, v2)
    try:
        pairs = intersect_poly_inf(line, poly, sink=sink, strict=True)
    except OddIntersectionError as exc:
        emit(sink, "split_polygon.odd_count",
             polygon=repr(poly), line=str(line), count=len(exc.candidates))
        return []

    if not pairs:
        return [poly]

    cuts = []
    for a, b in pairs:
        cuts.append((a, b))
        cuts.append((b, a))

    state = _SplitState()
    for edge in poly.edges():
        state.append(edge.p1)
        hits = [(cut, partner) for cut, partner in cuts
                if cut != edge.p1 and edge.coincident(cut)]
        if len(hits) > 1:
            hits.sort(key=lambda hit: edge.dist_along(hit[0]))
        for cut, partner in hits:
            state.cross(cut, partner)

    fragments = []
    for builder in state.builders:
        points = _close(builder)
        if len(points) < 3:
            emit(sink, "split_polygon.dropped_fragment", points=[str(p) for p in points])
            continue
        fragments.append(Polygon(points, poly.transform))
    return fragments


def flip_polygon(poly: Polygon, v1: Point, v2: Point) -> Polygon:
    """
    Reflect a polygon across the line through v1 and v2.

    Mirroring inverts the winding, so the point order is reversed to keep
    area sign and containment tests consistent.
    """
    m = reflect_matrix(v1, v2)
    points = [m.transform(p) for p in reversed(poly.points)]
    return Polygon(points, poly.transform * m)


def fold_polygon(poly: Polygon, v1: Point, v2: Point, anchor: Point,
                 sink: TraceSink = None) -> list[Polygon]:
    """
    Fold a polygon along v1-v2, keeping the fragment(s) that contain anchor.

    Returns:
        Fragments in split order; those not containing anchor are reflected.
    """
    return [
        fragment if fragment.contains(anchor) else flip_polygon(fragment, v1, v2)
        for fragment in split_polygon(poly, v1, v2, sink=sink)
    ]


def fold_polygons(polys: list[Polygon], v1: Point, v2: Point, anchor: Point,
                  sink: TraceSink = None) -> list[Polygon]:
    """Fold every polygon of a sheet and concatenate the fragments."""
    result = []
    for poly in polys:
        result.extend(fold_polygon(poly, v1, v2, anchor, sink=sink))
    return result


def can_fold(poly: Polygon, v1: Point, v2: Point) -> bool:
    """True if both fold-line endpoints lie on the polygon boundary."""
    return poly.coincident(v1) and poly.coincident(v2)
