"""
paperfold - Planar paper folding over float or exact rational arithmetic

Polygons on a sheet are split by a fold line and the pieces away from an
anchor are reflected. Every polygon remembers the transform back to the flat
sheet, so folded states can be emitted as meshes with exact coordinates.
"""

__version__ = "1.0.0"

from .affine import AffineTransform
from .errors import (
    ConfigError,
    DegenerateGeometryError,
    FoldError,
    OddIntersectionError,
    SingularTransformError,
)
from .fold import (
    can_fold,
    flip_line,
    flip_point,
    flip_polygon,
    fold_line,
    fold_polygon,
    fold_polygons,
    reflect_matrix,
    split_polygon,
)
from .geometry import Line, Point, Polygon, Shape, Skeleton
from .intersect import (
    intersect_discrete,
    intersect_inf,
    intersect_poly_discrete,
    intersect_poly_inf,
    slicey_edges,
)
from .mesh import MeshData, build_mesh, from_polys, write_mesh
from .scalar import FLOAT, RATIONAL
from .snap import qntz, snap, vertex_key
