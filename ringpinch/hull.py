"""Angular gift-wrap sweep over ring vertices.

The same stepping primitive builds the convex hull that seeds the keep-set
and, in :mod:`ringpinch.refine`, checks that a rubber band stretched between
two kept vertices only makes convex turns.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from .core.errors import ConvexHullError
from .core.geometry import Vertex, seg_ang

TWO_PI = 2.0 * math.pi


def find_bottom_point(pts: Sequence[Vertex]) -> int:
    """Index of the vertex with the lowest y (first one wins ties)."""
    if not pts:
        raise ValueError("ring has no vertices")
    min_idx = 0
    min_y = pts[0][1]
    for i in range(1, len(pts)):
        if pts[i][1] < min_y:
            min_y = pts[i][1]
            min_idx = i
    return min_idx


def _normalize_angle(ang: float) -> float:
    while ang < 0:
        ang += TWO_PI
    while ang >= TWO_PI:
        ang -= TWO_PI
    return ang


def find_next_convex(
    pts: Sequence[Vertex],
    start_idx: int,
    limit_idx: int,
    start_ang: float
) -> Tuple[int, float]:
    """Take one step of the angular sweep.

    Scans the vertices after ``start_idx`` up to and including ``limit_idx``
    (cyclically) and picks the one whose direction from ``start_idx`` makes
    the smallest counter-clockwise angle with ``start_ang``. Only candidates
    in the open half-plane (angle below pi) qualify; when there are none the
    sweep steps straight to ``limit_idx`` and the returned angle is NaN.

    Args:
        pts: Ring vertices
        start_idx: Current vertex
        limit_idx: Last vertex the scan may consider
        start_ang: Reference direction in radians

    Returns:
        Tuple of (next vertex index, angle of the segment taken)

    Raises:
        ConvexHullError: If two consecutive candidates straddle the reference
            ray, i.e. the boundary wraps around the current vertex
    """
    npts = len(pts)
    v0 = pts[start_idx]
    min_angdiff = math.pi
    last_ad = None
    best_vert = -1
    best_segang = 0.0

    i = (start_idx + 1) % npts
    while i != start_idx:
        segang = seg_ang(v0, pts[i])
        angdiff = _normalize_angle(segang - start_ang)
        if last_ad is not None and (last_ad < math.pi) != (angdiff < math.pi):
            if abs(last_ad - angdiff) > math.pi:
                raise ConvexHullError(
                    f"segment from vertex {start_idx} crosses the reference ray near vertex {i}"
                )
        last_ad = angdiff
        if angdiff < min_angdiff:
            min_angdiff = angdiff
            best_vert = i
            best_segang = segang
        if i == limit_idx:
            break
        i = (i + 1) % npts

    if best_vert < 0:
        return limit_idx, math.nan
    return best_vert, best_segang


def find_convex_hull(pts: Sequence[Vertex]) -> np.ndarray:
    """Mark the convex hull vertices of a counter-clockwise ring.

    The sweep starts at the bottom vertex with a reference direction of 0
    and walks counter-clockwise until it returns to the start.

    Args:
        pts: Vertices of a CCW ring

    Returns:
        Boolean array, True for hull vertices

    Raises:
        ConvexHullError: If the ring is not amenable to a single sweep

    Examples:
        >>> keep = find_convex_hull([(0, 0), (10, 0), (5, 2), (10, 10), (0, 10)])
        >>> keep.tolist()
        [True, True, False, True, True]
    """
    npts = len(pts)
    keep = np.zeros(npts, dtype=bool)
    start_idx = find_bottom_point(pts)
    keep[start_idx] = True

    idx = start_idx
    ang = 0.0
    # each step marks a new vertex, so more than npts steps means a cycle
    for _ in range(npts):
        idx, ang = find_next_convex(pts, idx, start_idx, ang)
        if idx == start_idx:
            return keep
        if keep[idx]:
            raise ConvexHullError(f"sweep revisited vertex {idx}")
        keep[idx] = True

    raise ConvexHullError("sweep did not return to the start vertex")


__all__ = [
    'find_bottom_point',
    'find_next_convex',
    'find_convex_hull',
]
