"""
Diagnostic sinks and logging setup.

Kernel functions never print. Anything worth reporting is sent as an
(event, fields) pair to a sink passed in by the caller; without one the
event goes to the module logger.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

TraceSink = Callable[[str, dict], None]

logger = logging.getLogger("paperfold")

# Events that indicate an inconsistent geometric state
_WARNING_EVENTS = {"intersect_poly.odd_count", "split_polygon.odd_count"}

_LOGGER_CONFIGURED = False


def logging_sink(event: str, fields: dict) -> None:
    """Default sink: forward the event to the paperfold logger."""
    level = logging.WARNING if event in _WARNING_EVENTS else logging.DEBUG
    logger.log(level, "%s %s", event, fields)


def collecting_sink() -> TraceSink:
    """Return a sink that keeps every event in its `events` list."""
    events = []

    def sink(event: str, fields: dict) -> None:
        events.append((event, fields))

    sink.events = events
    return sink


def emit(sink: Optional[TraceSink], event: str, **fields) -> None:
    """Send an event to `sink`, or to the logger when no sink is given."""
    (sink or logging_sink)(event, fields)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure console logging once for the command-line program."""
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.setLevel(level)

    _LOGGER_CONFIGURED = True
