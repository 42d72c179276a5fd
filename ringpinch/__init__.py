"""ringpinch - Excursion pinching for traced polygon boundaries.

This library simplifies polygon rings by removing small excursions (local
detours away from a straighter path) while keeping every convex hull vertex
and never introducing self-intersections. It is designed for jagged,
pixel-resolution boundaries produced by raster-to-vector tracing.
"""


# Pinching
from .pinch import (
    PinchResult,
    pinch_ring_excursions,
    pinch,
    pinch_excursions,
)

# Reconciliation and its collaborators
from .reconcile import reconcile_rings
from .relation import ring_relation, ring_union

# Conversion
from .convert import (
    ring_from_coords,
    ring_to_polygon,
    mpoly_from_shapely,
    mpoly_to_shapely,
    mpoly_from_wkt,
    mpoly_to_wkt,
    read_wkt_file,
)

# Rasterization
from .mask import polygon_contains_point, mask_from_mpoly

# Metrics
from .metrics import measure_pinch

# Core types
from .core import (
    Vertex,
    BBox,
    Ring,
    Mpoly,
    RingRelation,
    PinchConfig,
)

# Core exceptions
from .core import (
    RingPinchError,
    ConvexHullError,
    TiePointError,
    UnreachableTiePointError,
    CrossingDetectedError,
    DegenerateAreaError,
    InvalidRingInputError,
    UnionError,
)

__all__ = [

    # Pinching
    'PinchResult',
    'pinch_ring_excursions',
    'pinch',
    'pinch_excursions',

    # Reconciliation
    'reconcile_rings',
    'ring_relation',
    'ring_union',

    # Conversion
    'ring_from_coords',
    'ring_to_polygon',
    'mpoly_from_shapely',
    'mpoly_to_shapely',
    'mpoly_from_wkt',
    'mpoly_to_wkt',
    'read_wkt_file',

    # Rasterization
    'polygon_contains_point',
    'mask_from_mpoly',

    # Metrics
    'measure_pinch',

    # Core types
    'Vertex',
    'BBox',
    'Ring',
    'Mpoly',
    'RingRelation',
    'PinchConfig',

    # Core exceptions
    'RingPinchError',
    'ConvexHullError',
    'TiePointError',
    'UnreachableTiePointError',
    'CrossingDetectedError',
    'DegenerateAreaError',
    'InvalidRingInputError',
    'UnionError',
]
