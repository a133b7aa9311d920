"""Typed errors raised by paperfold."""


class FoldError(Exception):
    """Base error for the folding kernel."""


class DegenerateGeometryError(FoldError):
    """A zero-length line was used where a direction is required."""


class OddIntersectionError(FoldError):
    """
    A line crossed a polygon boundary an odd number of times.

    This is either a tangency or accumulated numeric error upstream; the
    candidates are kept so callers can decide what to do with them.
    """

    def __init__(self, line, candidates):
        self.line = line
        self.candidates = list(candidates)
        super().__init__(
            f"{len(self.candidates)} boundary intersection candidates for {line}"
        )


class SingularTransformError(FoldError):
    """A transform with zero determinant cannot be inverted."""


class ConfigError(FoldError):
    """Invalid configuration or fold sequence input."""
