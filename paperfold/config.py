"""
Configuration for folding runs.

Defines the number domain, mesh emission hygiene and rendering settings.
"""

from dataclasses import dataclass
from pathlib import Path
import json
import logging

from .errors import ConfigError
from .scalar import DOMAINS, Domain, get_domain
from .snap import DEFAULT_BASE, SNAP_DISTANCE


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class FoldConfig:
    """
    Configuration for a folding run.

    Attributes:
        number_domain: "rational" (exact) or "float" (fast, approximate)
        quantize_base: Emitted coordinates are rounded to multiples of 1/base
        snap_distance: Coordinates this close to 0 or 1 are snapped exactly
        outline_width: Stroke width of polygon outlines in SVG output
        crease_width: Stroke width of crease lines in SVG output
        log_level: Logging level name for the command-line program
    """
    number_domain: str = "rational"

    # Mesh emission
    quantize_base: int = DEFAULT_BASE
    snap_distance: float = SNAP_DISTANCE

    # Rendering (unit view box)
    outline_width: float = 0.02
    crease_width: float = 0.015

    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not isinstance(self.number_domain, str) or self.number_domain not in DOMAINS:
            errors.append(f"number_domain must be one of {sorted(DOMAINS)}, got {self.number_domain!r}")

        if not _is_int(self.quantize_base):
            errors.append(f"quantize_base must be an integer, got {self.quantize_base!r}")
        elif self.quantize_base < 1:
            errors.append(f"quantize_base must be >= 1, got {self.quantize_base}")

        if not _is_number(self.snap_distance):
            errors.append(f"snap_distance must be a number, got {self.snap_distance!r}")
        elif not 0 < self.snap_distance < 0.5:
            errors.append(f"snap_distance must be in (0, 0.5), got {self.snap_distance}")

        for name in ("outline_width", "crease_width"):
            value = getattr(self, name)
            if not _is_number(value):
                errors.append(f"{name} must be a number, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive, got {value}")

        if not isinstance(self.log_level, str) or \
                not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"unknown log_level {self.log_level!r}")

        return errors

    def check(self) -> 'FoldConfig':
        """Raise ConfigError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))
        return self

    @property
    def domain(self) -> Domain:
        return get_domain(self.number_domain)

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "number_domain": self.number_domain,
            "quantize_base": self.quantize_base,
            "snap_distance": self.snap_distance,
            "outline_width": self.outline_width,
            "crease_width": self.crease_width,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FoldConfig":
        """Create from dictionary."""
        return cls(
            number_domain=data.get("number_domain", "rational"),
            quantize_base=data.get("quantize_base", DEFAULT_BASE),
            snap_distance=data.get("snap_distance", SNAP_DISTANCE),
            outline_width=data.get("outline_width", 0.02),
            crease_width=data.get("crease_width", 0.015),
            log_level=data.get("log_level", "INFO"),
        )

    def save(self, filepath: Path | str) -> None:
        """Save configuration to JSON file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path | str) -> "FoldConfig":
        """Load configuration from JSON file."""
        filepath = Path(filepath)
        if not filepath.exists():
            return cls()  # Return defaults if file doesn't exist

        with open(filepath, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"invalid config file {filepath}: {exc}") from exc
        return cls.from_dict(data)
