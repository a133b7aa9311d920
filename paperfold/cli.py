#!/usr/bin/env python3
"""
Command-line folding of a paper sheet.

Usage:
    paperfold <sequence.json> <output.mesh> [options]

Options:
    --svg FILE      Also render the folded sheet and creases to SVG
    --config FILE   JSON configuration (see FoldConfig)
    --float         Use floating point instead of exact rationals
    --base N        Quantization base for emitted coordinates
    --verbose       Log fold diagnostics

Sequence file:
    {
      "sheet": [[0, 0], [1, 0], [1, 1], [0, 1]],
      "folds": [
        {"from": [0, "1/2"], "to": [1, "1/2"], "anchor": [0, 0]}
      ]
    }
"""

from pathlib import Path
import argparse
import json
import logging
import sys

from .config import FoldConfig
from .errors import ConfigError, FoldError
from .fold import fold_polygons
from .geometry import Line, Point, Polygon, Skeleton
from .mesh import build_mesh
from .render import draw_svg
from .scalar import Domain, parse_scalar
from .trace import TraceSink, setup_logging

logger = logging.getLogger(__name__)


def _point(value, domain: Domain, what: str) -> Point:
    try:
        x, y = value
        return Point(parse_scalar(x, domain), parse_scalar(y, domain))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid {what}: {value!r}") from exc


def parse_sequence(data: dict, domain: Domain) -> tuple[Polygon, list[tuple[Point, Point, Point]]]:
    """
    Parse a fold sequence.

    Returns:
        (sheet polygon, [(from, to, anchor), ...])
    """
    if "sheet" not in data:
        raise ConfigError("fold sequence has no 'sheet'")
    points = [_point(p, domain, "sheet point") for p in data["sheet"]]
    if len(points) < 3:
        raise ConfigError(f"sheet needs at least 3 points, got {len(points)}")

    folds = []
    for i, fold in enumerate(data.get("folds", [])):
        try:
            folds.append((
                _point(fold["from"], domain, f"fold {i} 'from'"),
                _point(fold["to"], domain, f"fold {i} 'to'"),
                _point(fold["anchor"], domain, f"fold {i} 'anchor'"),
            ))
        except KeyError as exc:
            raise ConfigError(f"fold {i} is missing {exc}") from exc

    return Polygon(points), folds


def load_sequence(path: Path | str, domain: Domain) -> tuple[Polygon, list[tuple[Point, Point, Point]]]:
    """Load a fold sequence from a JSON file."""
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid fold sequence {path}: {exc}") from exc
    return parse_sequence(data, domain)


def run_folds(sheet: Polygon, folds: list[tuple[Point, Point, Point]],
              sink: TraceSink = None) -> tuple[list[Polygon], Skeleton]:
    """
    Apply folds one after another to every polygon of the sheet.

    Returns:
        (folded polygons, skeleton of fold lines)
    """
    polys = [sheet]
    skeleton = Skeleton()
    for v1, v2, anchor in folds:
        polys = fold_polygons(polys, v1, v2, anchor, sink=sink)
        skeleton = skeleton.push(Line(v1, v2))
        logger.info("Fold %s: %d polygons", Line(v1, v2), len(polys))
    return polys, skeleton


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Fold a paper sheet and write the folded mesh',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s folds.json sheet.mesh
  %(prog)s folds.json sheet.mesh --svg sheet.svg
  %(prog)s folds.json sheet.mesh --float --base 1024
        """
    )
    parser.add_argument('input', help='Fold sequence (.json)')
    parser.add_argument('output', help='Output mesh file')
    parser.add_argument('--svg', help='Also render to this SVG file')
    parser.add_argument('--config', help='Configuration file (.json)')
    parser.add_argument('--float', action='store_true',
                        help='Use floating point instead of exact rationals')
    parser.add_argument('--base', type=int,
                        help='Quantization base for emitted coordinates')
    parser.add_argument('--verbose', action='store_true',
                        help='Log fold diagnostics')

    args = parser.parse_args(argv)

    try:
        config = FoldConfig.load(args.config) if args.config else FoldConfig()
        if args.float:
            config.number_domain = "float"
        if args.base is not None:
            config.quantize_base = args.base
        if args.verbose:
            config.log_level = "DEBUG"
        config.check()
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    setup_logging(config.level)

    if not Path(args.input).exists():
        print(f"ERROR: Input file not found: {args.input}")
        return 1

    try:
        sheet, folds = load_sequence(args.input, config.domain)
        print(f"Sheet: {len(sheet)} points, {len(folds)} fold(s), {config.number_domain} arithmetic")

        polys, skeleton = run_folds(sheet, folds)
        if not polys:
            print("ERROR: folding produced no polygons (inconsistent fold line crossing)")
            return 1

        mesh, _ = build_mesh(polys, config.quantize_base, config.snap_distance)
        mesh.save(args.output)
        print(f"Mesh: {len(mesh.dst)} vertices, {len(mesh.facets)} facets -> {args.output}")

        if args.svg:
            draw_svg(polys, skeleton, args.svg, config)
            print(f"SVG: {args.svg}")

    except (FoldError, OSError) as e:
        print(f"ERROR: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
