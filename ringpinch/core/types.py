"""Type definitions for ringpinch operations."""

from enum import Enum


class RingRelation(Enum):
    """Topological relation between two simple rings.

    Attributes:
        DISJOINT: Interiors do not overlap (rings may touch along the boundary)
        CONTAINS: First ring encloses the second
        CONTAINED_BY: First ring is enclosed by the second
        CROSSES: Interiors overlap but neither ring encloses the other

    Examples:
        >>> from ringpinch import ring_relation, RingRelation
        >>> ring_relation(outer, inner) is RingRelation.CONTAINS
        True
    """
    DISJOINT = 'disjoint'
    CONTAINS = 'contains'
    CONTAINED_BY = 'contained_by'
    CROSSES = 'crosses'


__all__ = [
    'RingRelation',
]
