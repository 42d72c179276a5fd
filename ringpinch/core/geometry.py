"""Geometry primitives shared by the hull sweep and the refinement engine.

All functions operate on plain ``(x, y)`` pairs or numpy arrays of them and
have no shared state. Comparisons against zero are exact on purpose: the
engine works on IEEE doubles and does not introduce tolerances.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence, Tuple

import numpy as np


class Vertex(NamedTuple):
    """A 2-D vertex."""
    x: float
    y: float


class BBox(NamedTuple):
    """Axis-aligned bounding box.

    ``empty`` marks the identity element of :meth:`union`; an empty box is
    different from a degenerate box around a single point.
    """
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0
    empty: bool = True

    @classmethod
    def from_points(cls, pts: Sequence[Tuple[float, float]]) -> "BBox":
        if len(pts) == 0:
            return EMPTY_BBOX
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys), False)

    def union(self, other: "BBox") -> "BBox":
        if self.empty:
            return other
        if other.empty:
            return self
        return BBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
            False,
        )

    def intersects(self, other: "BBox") -> bool:
        if self.empty or other.empty:
            return False
        return not (
            self.min_x > other.max_x or
            self.min_y > other.max_y or
            other.min_x > self.max_x or
            other.min_y > self.max_y
        )

    @property
    def width(self) -> float:
        return 0.0 if self.empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.empty else self.max_y - self.min_y


EMPTY_BBOX = BBox()


def seg_ang(v0, v1) -> float:
    """Angle of the segment ``v0 -> v1`` in radians, in ``(-pi, pi]``."""
    return math.atan2(v1[1] - v0[1], v1[0] - v0[0])


def seg_len(v0, v1) -> float:
    """Length of the segment ``v0 -> v1``."""
    dx = v1[0] - v0[0]
    dy = v1[1] - v0[1]
    return math.sqrt(dx * dx + dy * dy)


def dist_to_line(p1, p2, p3) -> float:
    """Distance of ``p3`` from the infinite line through ``p1`` and ``p2``.

    When ``p1`` and ``p2`` coincide the line is undefined and the distance
    to ``p1`` is returned instead.

    Examples:
        >>> dist_to_line((0, 0), (10, 0), (5, 2))
        2.0
    """
    d21x = p2[0] - p1[0]
    d21y = p2[1] - p1[1]
    d13x = p1[0] - p3[0]
    d13y = p1[1] - p3[1]
    length = math.sqrt(d21x * d21x + d21y * d21y)
    if length == 0:
        return math.sqrt(d13x * d13x + d13y * d13y)
    return abs(d21x * d13y - d13x * d21y) / length


def line_intersects_line(p1, p2, p3, p4, fail_on_coincident: bool = False) -> bool:
    """Test whether segment ``p1-p2`` intersects segment ``p3-p4``.

    End points are inclusive, so segments that merely touch intersect.
    Collinear overlapping segments intersect unless ``fail_on_coincident``
    is set; parallel segments on different lines never do.

    Args:
        p1, p2: End points of the first segment
        p3, p4: End points of the second segment
        fail_on_coincident: Report coincident segments as not intersecting

    Returns:
        True if the segments share at least one point

    Examples:
        >>> line_intersects_line((0, 0), (2, 2), (0, 2), (2, 0))
        True
        >>> line_intersects_line((0, 0), (1, 0), (0, 1), (1, 1))
        False
    """
    if (
        max(p1[0], p2[0]) < min(p3[0], p4[0]) or
        min(p1[0], p2[0]) > max(p3[0], p4[0]) or
        max(p1[1], p2[1]) < min(p3[1], p4[1]) or
        min(p1[1], p2[1]) > max(p3[1], p4[1])
    ):
        return False

    numer_a = (p4[0] - p3[0]) * (p1[1] - p3[1]) - (p4[1] - p3[1]) * (p1[0] - p3[0])
    numer_b = (p2[0] - p1[0]) * (p1[1] - p3[1]) - (p2[1] - p1[1]) * (p1[0] - p3[0])
    denom = (p4[1] - p3[1]) * (p2[0] - p1[0]) - (p4[0] - p3[0]) * (p2[1] - p1[1])

    if denom == 0:
        if numer_a == 0 and numer_b == 0:
            # coincident; the bounding boxes overlap so the segments touch
            return not fail_on_coincident
        return False

    ua = numer_a / denom
    ub = numer_b / denom
    return 0 <= ua <= 1 and 0 <= ub <= 1


def segments_intersect(
    p1,
    p2,
    starts: np.ndarray,
    ends: np.ndarray,
    fail_on_coincident: bool = False
) -> np.ndarray:
    """Vectorised :func:`line_intersects_line` of one segment against many.

    Args:
        p1, p2: End points of the query segment
        starts: Array (Nx2) of segment start points
        ends: Array (Nx2) of segment end points
        fail_on_coincident: Report coincident segments as not intersecting

    Returns:
        Boolean array of length N
    """
    starts = np.asarray(starts, dtype=float).reshape(-1, 2)
    ends = np.asarray(ends, dtype=float).reshape(-1, 2)
    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])
    x3, y3 = starts[:, 0], starts[:, 1]
    x4, y4 = ends[:, 0], ends[:, 1]

    overlap = ~(
        (max(x1, x2) < np.minimum(x3, x4)) |
        (min(x1, x2) > np.maximum(x3, x4)) |
        (max(y1, y2) < np.minimum(y3, y4)) |
        (min(y1, y2) > np.maximum(y3, y4))
    )

    numer_a = (x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)
    numer_b = (x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)
    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)

    parallel = denom == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        ua = numer_a / denom
        ub = numer_b / denom
    crossing = ~parallel & (ua >= 0) & (ua <= 1) & (ub >= 0) & (ub <= 1)

    if fail_on_coincident:
        return overlap & crossing
    coincident = parallel & (numer_a == 0) & (numer_b == 0)
    return overlap & (crossing | coincident)


def line_line_intersection(p1, p2, p3, p4) -> Vertex:
    """Intersection point of the line through ``p1, p2`` with the line through ``p3, p4``.

    Raises:
        ValueError: If the lines are parallel

    Examples:
        >>> line_line_intersection((0, 0), (2, 2), (0, 2), (2, 0))
        Vertex(x=1.0, y=1.0)
    """
    numer_a = (p4[0] - p3[0]) * (p1[1] - p3[1]) - (p4[1] - p3[1]) * (p1[0] - p3[0])
    denom = (p4[1] - p3[1]) * (p2[0] - p1[0]) - (p4[0] - p3[0]) * (p2[1] - p1[1])
    if denom == 0:
        raise ValueError("lines are parallel")
    ua = numer_a / denom
    return Vertex(p1[0] + ua * (p2[0] - p1[0]), p1[1] + ua * (p2[1] - p1[1]))


def oriented_area(pts: Sequence[Tuple[float, float]]) -> float:
    """Signed shoelace area of a closed vertex sequence (positive when CCW)."""
    n = len(pts)
    accum = 0.0
    for i in range(n):
        x0, y0 = pts[i][0], pts[i][1]
        x1, y1 = pts[(i + 1) % n][0], pts[(i + 1) % n][1]
        accum += x0 * y1 - x1 * y0
    return accum / 2.0


__all__ = [
    'Vertex',
    'BBox',
    'EMPTY_BBOX',
    'seg_ang',
    'seg_len',
    'dist_to_line',
    'line_intersects_line',
    'segments_intersect',
    'line_line_intersection',
    'oriented_area',
]
