"""
Scalar domains.

Every geometric routine in paperfold is written against a small field-like
contract so that the same code runs over two numeric backends:

- FLOAT: Python floats, equality within EPSILON (fast, approximate)
- RATIONAL: fractions.Fraction, exact equality (slow, exact)

Values carry no wrapper type. The domain of a value is recovered from its
Python type with domain_of(), and plain ints are treated as rationals.
"""

from fractions import Fraction
from typing import Optional
import math


# Fixed tolerance for floating point comparisons
EPSILON = 1e-9


class Domain:
    """Arithmetic capabilities shared by both numeric backends."""

    name = "abstract"
    zero = None
    one = None

    def coerce(self, value):
        raise NotImplementedError

    def from_float(self, value: float):
        raise NotImplementedError

    def to_float(self, value) -> float:
        return float(value)

    def eq(self, a, b) -> bool:
        raise NotImplementedError

    def is_zero(self, value) -> bool:
        return self.eq(value, self.zero)

    def div(self, a, b) -> Optional[object]:
        """Divide a by b, or None when b is zero-equivalent."""
        if self.is_zero(b):
            return None
        return a / b

    def sqrt(self, value):
        """Square root through double precision (no exact closed form)."""
        return self.from_float(math.sqrt(self.to_float(value)))

    def __repr__(self):
        return f"Domain({self.name})"


class FloatDomain(Domain):
    """Double precision floats with epsilon-tolerant equality."""

    name = "float"
    zero = 0.0
    one = 1.0

    def __init__(self, epsilon: float = EPSILON):
        self.epsilon = epsilon

    def coerce(self, value) -> float:
        return float(value)

    def from_float(self, value: float) -> float:
        return float(value)

    def eq(self, a, b) -> bool:
        return abs(a - b) < self.epsilon


class RationalDomain(Domain):
    """Exact rationals backed by fractions.Fraction."""

    name = "rational"
    zero = Fraction(0)
    one = Fraction(1)

    def coerce(self, value) -> Fraction:
        return Fraction(value)

    def from_float(self, value: float) -> Fraction:
        return Fraction(value)

    def eq(self, a, b) -> bool:
        return a == b


FLOAT = FloatDomain()
RATIONAL = RationalDomain()

DOMAINS = {
    FLOAT.name: FLOAT,
    RATIONAL.name: RATIONAL,
}


def domain_of(*values) -> Domain:
    """
    Pick the domain for a set of values.

    Any float forces the floating domain; Fractions and ints are rational.
    """
    for v in values:
        if isinstance(v, float):
            return FLOAT
    return RATIONAL


def get_domain(name: str) -> Domain:
    """Look up a domain by name ("float" or "rational")."""
    try:
        return DOMAINS[name]
    except KeyError:
        raise ValueError(f"unknown number domain: {name!r}") from None


def parse_scalar(text, domain: Domain = RATIONAL):
    """
    Parse a scalar from a number or its text form.

    Accepts ints, floats, and strings such as "3", "0.25" or "3/4".
    """
    if isinstance(text, bool):
        raise TypeError("bool is not a scalar")
    if isinstance(text, (int, float, Fraction)):
        return domain.coerce(text)
    if not isinstance(text, str):
        raise TypeError(f"unsupported scalar type: {type(text)!r}")
    try:
        value = Fraction(text.strip())
    except (ValueError, ZeroDivisionError) as exc:
        raise ValueError(f"invalid scalar: {text!r}") from exc
    return domain.coerce(value)


def format_scalar(value) -> str:
    """Exact rational text for a scalar, e.g. "3/4", "1" or "-1/2"."""
    return str(Fraction(value))
