"""Core types and utilities for ringpinch.

This module provides the data model, geometry primitives, configuration and
exceptions used throughout the library.
"""

from .types import RingRelation

from .config import PinchConfig, DEFAULT_CONFIG

from .geometry import (
    Vertex,
    BBox,
    EMPTY_BBOX,
    seg_ang,
    seg_len,
    dist_to_line,
    line_intersects_line,
    segments_intersect,
    line_line_intersection,
    oriented_area,
)

from .ring import Ring, Mpoly

from .errors import (
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
    # Enums and configuration
    'RingRelation',
    'PinchConfig',
    'DEFAULT_CONFIG',

    # Data model
    'Vertex',
    'BBox',
    'EMPTY_BBOX',
    'Ring',
    'Mpoly',

    # Primitives
    'seg_ang',
    'seg_len',
    'dist_to_line',
    'line_intersects_line',
    'segments_intersect',
    'line_line_intersection',
    'oriented_area',

    # Exceptions
    'RingPinchError',
    'ConvexHullError',
    'TiePointError',
    'UnreachableTiePointError',
    'CrossingDetectedError',
    'DegenerateAreaError',
    'InvalidRingInputError',
    'UnionError',
]
