"""Exception hierarchy for ringpinch.

Fatal errors abort the whole pinch operation. ``TiePointError`` and its
subclasses are raised inside the refinement engine when a candidate edit
must be discarded; they never escape :func:`ringpinch.pinch`.
"""


class RingPinchError(Exception):
    """Base exception for all ringpinch errors."""
    pass


class ConvexHullError(RingPinchError):
    """Raised when the angular sweep cannot produce a consistent convex hull."""
    pass


class TiePointError(RingPinchError):
    """Raised when a candidate tie-point cannot be added to a keep-set."""
    pass


class UnreachableTiePointError(TiePointError):
    """Raised when the sweep from one kept vertex to another makes a non-convex turn."""
    pass


class CrossingDetectedError(TiePointError):
    """Raised when a candidate edge intersects another edge of the ring.

    Attributes:
        edge: (from_index, to_index) of the rejected edge
    """

    def __init__(self, message: str, edge=None):
        super().__init__(message)
        self.edge = edge


class DegenerateAreaError(RingPinchError):
    """Raised when an excursion area comes out negative.

    This means the ring orientation or topology is not what the engine
    expects (the ring must be simple and counter-clockwise).
    """
    pass


class InvalidRingInputError(RingPinchError, ValueError):
    """Raised when a ring cannot be pinched (holes, too few vertices)."""
    pass


class UnionError(RingPinchError):
    """Raised when the union of two crossing rings is not a single polygon."""
    pass


__all__ = [
    'RingPinchError',
    'ConvexHullError',
    'TiePointError',
    'UnreachableTiePointError',
    'CrossingDetectedError',
    'DegenerateAreaError',
    'InvalidRingInputError',
    'UnionError',
]
