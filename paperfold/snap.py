"""
Numeric hygiene for mesh emission.

Repeated folds accumulate noise: float drift in one domain, rationals with
ever-growing denominators in the other. Before points are emitted they are

  - snapped: coordinates within SNAP_DISTANCE of 0 or 1 become exactly 0 or 1
  - quantized: coordinates are rounded to the nearest multiple of 1/base,
    but only when that moves the point by less than QUANTIZE_TOLERANCE

Two emitted points are the same vertex iff their vertex_key() values are
equal.
"""

from fractions import Fraction

from .geometry import Point

SNAP_DISTANCE = 1e-9
QUANTIZE_TOLERANCE = 1e-9
DEFAULT_BASE = 65536


def _snap_value(value, domain, distance: float):
    f = domain.to_float(value)
    for target, exact in ((0.0, domain.zero), (1.0, domain.one)):
        if abs(f - target) < distance:
            return exact
    return value


def snap(point: Point, distance: float = SNAP_DISTANCE) -> Point:
    """Replace coordinates within `distance` of 0 or 1 by the exact value."""
    domain = point.domain
    return Point(
        _snap_value(point.x, domain, distance),
        _snap_value(point.y, domain, distance),
    )


def qntz(point: Point, base: int = DEFAULT_BASE, tolerance: float = QUANTIZE_TOLERANCE) -> Point:
    """
    Round a point onto the 1/base grid if that stays within tolerance.

    The rounded point has Fraction coordinates. If either coordinate would
    move by `tolerance` or more, the point is returned unchanged.
    """
    assert base > 0, f"quantization base must be positive, got {base}"
    fx, fy = float(point.x), float(point.y)
    qx = Fraction(round(fx * base), base)
    qy = Fraction(round(fy * base), base)
    if abs(fx - float(qx)) < tolerance and abs(fy - float(qy)) < tolerance:
        return Point(qx, qy)
    return point


def vertex_key(point: Point, base: int = DEFAULT_BASE,
               distance: float = SNAP_DISTANCE) -> tuple[Fraction, Fraction]:
    """Deduplication key of a point: snapped, quantized, exact."""
    return qntz(snap(point, distance), base).key()
