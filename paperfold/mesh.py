"""
Mesh emission for folded sheets.

A folded sheet is written as a list of facets (the folded polygons) over a
shared vertex table. Every vertex has a source position on the flat sheet
and a destination position after folding.

File layout (plain text, exact rationals such as "3/4"):

    N                   number of vertices
    sx sy               N source points
    M                   number of facets
    k i1 i2 ... ik      M facets: vertex count, then vertex indices
    dx dy               N destination points
"""

from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from typing import TextIO
import logging

from .geometry import Point, Polygon
from .scalar import format_scalar
from .snap import DEFAULT_BASE, SNAP_DISTANCE, vertex_key

logger = logging.getLogger(__name__)


def format_point(point: Point) -> str:
    """Exact rational text for a point, e.g. "1/2 3/4"."""
    return f"{format_scalar(point.x)} {format_scalar(point.y)}"


@dataclass
class MeshData:
    """
    Vertex table and facets of a folded sheet.

    src[i] and dst[i] are the flat and folded positions of vertex i.
    """
    src: list[Point] = field(default_factory=list)
    dst: list[Point] = field(default_factory=list)
    facets: list[list[int]] = field(default_factory=list)

    def add_vertex(self, src: Point, dst: Point) -> int:
        """Add a vertex and return its index."""
        self.src.append(src)
        self.dst.append(dst)
        return len(self.dst) - 1

    def add_facet(self, indices: list[int]):
        self.facets.append(list(indices))

    def write(self, stream: TextIO):
        """Write the mesh in the text format described above."""
        assert len(self.src) == len(self.dst), \
            f"source/destination mismatch: {len(self.src)} != {len(self.dst)}"

        stream.write(f"{len(self.src)}\n")
        for p in self.src:
            stream.write(f"{format_point(p)}\n")

        stream.write(f"{len(self.facets)}\n")
        for facet in self.facets:
            indices = " ".join(str(i) for i in facet)
            stream.write(f"{len(facet)} {indices}\n")

        for p in self.dst:
            stream.write(f"{format_point(p)}\n")

    def save(self, filename: Path | str):
        """Write the mesh to a file."""
        with open(filename, 'w') as f:
            self.write(f)
        logger.info("Wrote %d vertices, %d facets to %s", len(self.dst), len(self.facets), filename)


def build_mesh(polys: list[Polygon], base: int = DEFAULT_BASE,
               snap_distance: float = SNAP_DISTANCE) -> tuple[MeshData, list[Polygon]]:
    """
    Build the shared vertex table for a list of folded polygons.

    Each folded point is reduced to its vertex_key(); its source position is
    that point mapped through the inverse of the polygon's transform and
    keyed again. A vertex is shared only when both keys are equal, so
    stacked layers that meet at the same folded position stay distinct.

    Returns:
        (mesh, unfolded) where unfolded[i] is polys[i] rebuilt from source
        positions
    """
    mesh = MeshData()
    seen: dict[tuple[tuple[Fraction, Fraction], tuple[Fraction, Fraction]], int] = {}
    unfolded = []

    for poly in polys:
        inverse = poly.transform.inverse()
        facet = []
        for point in poly.points:
            dst_key = vertex_key(point, base, snap_distance)
            dst = Point(*dst_key)
            src_key = vertex_key(inverse.transform(dst), base, snap_distance)
            key = (src_key, dst_key)
            index = seen.get(key)
            if index is None:
                index = mesh.add_vertex(Point(*src_key), dst)
                seen[key] = index
                logger.debug("vertex %d %s -> %s", index, mesh.src[index], dst)
            facet.append(index)
        mesh.add_facet(facet)
        unfolded.append(Polygon([mesh.src[i] for i in facet]))

    return mesh, unfolded


def write_mesh(stream: TextIO, mesh: MeshData):
    mesh.write(stream)


def from_polys(stream: TextIO, polys: list[Polygon], base: int = DEFAULT_BASE,
               snap_distance: float = SNAP_DISTANCE) -> list[Polygon]:
    """Build and write the mesh of `polys`; return the unfolded polygons."""
    mesh, unfolded = build_mesh(polys, base, snap_distance)
    mesh.write(stream)
    return unfolded
