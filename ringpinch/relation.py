"""Shapely-backed collaborators for cross-ring reconciliation.

:func:`ring_relation` classifies how two simple rings relate and
:func:`ring_union` merges two crossing rings. Both can be swapped out via the
``relation`` and ``union`` arguments of :func:`ringpinch.reconcile_rings`.
"""

from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from .convert import ring_from_coords, ring_to_polygon
from .core.errors import UnionError
from .core.ring import Ring
from .core.types import RingRelation


def ring_relation(ring_a: Ring, ring_b: Ring) -> RingRelation:
    """Classify the relation between two simple rings.

    Rings that only share boundary points are reported as disjoint; a ring
    that encloses another while touching its boundary still contains it.

    Examples:
        >>> outer = Ring([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> inner = Ring([(2, 2), (4, 2), (4, 4), (2, 4)])
        >>> ring_relation(outer, inner)
        <RingRelation.CONTAINS: 'contains'>
    """
    poly_a = ring_to_polygon(ring_a)
    poly_b = ring_to_polygon(ring_b)

    if not poly_a.intersects(poly_b):
        return RingRelation.DISJOINT
    if poly_a.contains(poly_b):
        return RingRelation.CONTAINS
    if poly_b.contains(poly_a):
        return RingRelation.CONTAINED_BY
    if poly_a.touches(poly_b):
        return RingRelation.DISJOINT
    return RingRelation.CROSSES


def ring_union(ring_a: Ring, ring_b: Ring) -> Ring:
    """Outer boundary of the union of two crossing rings.

    Holes produced by the union are discarded and the result is oriented
    counter-clockwise.

    Raises:
        UnionError: If the union is not a single polygon
    """
    try:
        merged = ring_to_polygon(ring_a).union(ring_to_polygon(ring_b))
    except Exception as e:
        raise UnionError(f"Ring union failed: {e}")

    if not isinstance(merged, Polygon) or merged.is_empty:
        raise UnionError(f"Result of ring union wasn't a Polygon ({merged.geom_type})")

    merged = orient(merged, sign=1.0)
    return ring_from_coords(merged.exterior.coords)


__all__ = [
    'ring_relation',
    'ring_union',
]
