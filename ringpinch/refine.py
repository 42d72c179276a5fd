"""Excursion refinement engine.

Starting from a hull-seeded keep-set, the engine repeatedly looks at every gap
between consecutive kept vertices and tries to approximate the boundary inside
it better: first by keeping a long, nearly straight run of vertices, then by
inserting the single tie-point with the best improvement score. Every edit is
made on a copy of the keep-set and validated with :func:`reach_point` before
it is committed, so a rejected candidate never leaves a trace.

Keep-sets are numpy boolean arrays with one entry per ring vertex; all index
walks are cyclic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from .core.config import DEFAULT_CONFIG, PinchConfig
from .core.errors import (
    ConvexHullError,
    CrossingDetectedError,
    DegenerateAreaError,
    RingPinchError,
    TiePointError,
    UnreachableTiePointError,
)
from .core.geometry import Vertex, dist_to_line, seg_ang, seg_len, segments_intersect
from .hull import find_next_convex


# ============================================================================
# Cyclic index helpers
# ============================================================================

def cyclic_range(npts: int, start: int, stop: int) -> Iterator[int]:
    """Indices from ``start`` up to but excluding ``stop``, wrapping at ``npts``."""
    i = start % npts
    stop = stop % npts
    while i != stop:
        yield i
        i = (i + 1) % npts


def cyclic_span(npts: int, start: int, stop: int) -> Iterator[int]:
    """Indices from ``start`` through ``stop`` inclusive, wrapping at ``npts``."""
    yield from cyclic_range(npts, start, stop)
    yield stop % npts


def next_keep(keep: np.ndarray, i: int) -> int:
    """Next kept index after ``i`` (cyclic), or ``i`` if no other vertex is kept."""
    kept = np.flatnonzero(keep)
    pos = np.searchsorted(kept, i, side='right')
    if pos < len(kept):
        return int(kept[pos])
    if len(kept) and kept[0] < i:
        return int(kept[0])
    return i


def prev_keep(keep: np.ndarray, i: int) -> int:
    """Previous kept index before ``i`` (cyclic), or ``i`` if no other vertex is kept."""
    kept = np.flatnonzero(keep)
    pos = np.searchsorted(kept, i, side='left') - 1
    if pos >= 0:
        return int(kept[pos])
    if len(kept) and kept[-1] > i:
        return int(kept[-1])
    return i


# ============================================================================
# Working context
# ============================================================================

@dataclass
class RingContext:
    """Read-only view of a CCW ring shared by all refinement steps.

    Attributes:
        pts: Ring vertices
        coords: Same vertices as an (N, 2) array
        edge_ends: ``coords`` rolled by one, so edge i runs coords[i] -> edge_ends[i]
        config: Engine settings
    """

    pts: Sequence[Vertex]
    coords: np.ndarray
    edge_ends: np.ndarray
    config: PinchConfig = field(default_factory=PinchConfig)

    @classmethod
    def from_points(cls, pts: Sequence[Vertex], config: Optional[PinchConfig] = None) -> "RingContext":
        coords = np.array(pts, dtype=float).reshape(-1, 2)
        return cls(
            pts=list(pts),
            coords=coords,
            edge_ends=np.roll(coords, -1, axis=0),
            config=config or DEFAULT_CONFIG,
        )

    @property
    def npts(self) -> int:
        return len(self.pts)


def subring_area(pts: Sequence[Vertex], frm: int, to: int) -> float:
    """Area between the chord ``to -> frm`` and the boundary path ``frm -> to``.

    For a CCW ring whose chord lies on the outside of the path this is the
    area of the excursion, and is never negative.

    Raises:
        DegenerateAreaError: If the area comes out negative
    """
    npts = len(pts)
    accum = 0.0
    for i in cyclic_span(npts, frm, to):
        i2 = frm if i == to else (i + 1) % npts
        x0, y0 = pts[i]
        x1, y1 = pts[i2]
        accum += x1 * y0 - x0 * y1
    if accum < 0:
        raise DegenerateAreaError(
            f"excursion area between vertices {frm} and {to} is negative ({accum / 2.0})"
        )
    return accum / 2.0


def is_mostly_linear(pts: Sequence[Vertex], frm: int, to: int, max_deviation: float = 1.0) -> bool:
    """True if every vertex strictly between ``frm`` and ``to`` lies near the chord."""
    npts = len(pts)
    p1 = pts[frm]
    p2 = pts[to]
    for i in cyclic_range(npts, frm + 1, to):
        if dist_to_line(p1, p2, pts[i]) > max_deviation:
            return False
    return True


def tiepoint_improvement(
    start_area: float,
    start_perimeter: float,
    area: float,
    perimeter: float
) -> float:
    """Score of replacing a chord by a path through a new tie-point.

    Positive scores mean the area removed outweighs the perimeter added.
    The constants are empirically tuned.
    """
    if start_perimeter == 0:
        return -2.0
    return ((start_area + 2.0) / (area + 2.0)) / (perimeter / start_perimeter) ** 2 - 2.0


# ============================================================================
# Validity oracle
# ============================================================================

def _edge_crosses(ctx: RingContext, keep: np.ndarray, pk: int, nk: int) -> bool:
    """Check the edge pk -> nk against ring edges and kept-polygon edges.

    Edges sharing an end point index with pk -> nk are ignored.
    """
    a = ctx.pts[pk]
    b = ctx.pts[nk]

    idx = np.arange(ctx.npts)
    idx_next = np.roll(idx, -1)
    candidates = (idx != pk) & (idx != nk) & (idx_next != pk) & (idx_next != nk)
    if segments_intersect(a, b, ctx.coords[candidates], ctx.edge_ends[candidates]).any():
        return True

    kept = np.flatnonzero(keep)
    kept_next = np.roll(kept, -1)
    candidates = (kept != pk) & (kept != nk) & (kept_next != pk) & (kept_next != nk)
    kept, kept_next = kept[candidates], kept_next[candidates]
    return bool(segments_intersect(a, b, ctx.coords[kept], ctx.coords[kept_next]).any())


def reach_point(ctx: RingContext, keep: np.ndarray, frm: int, to: int, ang: float) -> None:
    """Stretch a rubber band from ``frm`` to ``to`` and keep every vertex it touches.

    The band follows the angular sweep starting in direction ``ang``. Each
    new edge along the band is then checked for intersections.

    Args:
        ctx: Ring being refined
        keep: Keep-set to extend in place (callers pass a scratch copy)
        frm: Kept vertex the band starts from
        to: Kept vertex the band ends at
        ang: Initial reference direction in radians

    Raises:
        UnreachableTiePointError: If the sweep makes a non-convex turn
        CrossingDetectedError: If a new edge intersects another edge
    """
    idx = frm
    while True:
        try:
            idx, ang = find_next_convex(ctx.pts, idx, to, ang)
        except ConvexHullError as exc:
            raise UnreachableTiePointError(f"cannot reach vertex {to} from {frm}: {exc}") from exc
        keep[idx] = True
        if idx == to:
            break

    pk = frm
    while pk != to:
        nk = next_keep(keep, pk)
        if _edge_crosses(ctx, keep, pk, nk):
            raise CrossingDetectedError(f"edge {pk}->{nk} crosses the ring", edge=(pk, nk))
        pk = nk


def add_tiepoint(ctx: RingContext, keep: np.ndarray, mid: int) -> None:
    """Promote ``mid`` to a kept vertex and re-stretch both sides around it.

    ``keep`` is modified in place, so callers must work on a copy and throw
    it away when this raises.

    Raises:
        TiePointError: If either side cannot be reached or crosses the ring
    """
    pts = ctx.pts
    keep[mid] = True
    left = prev_keep(keep, mid)
    right = next_keep(keep, mid)

    reach_point(ctx, keep, left, mid, seg_ang(pts[left], pts[right]))

    pk = prev_keep(keep, mid)
    if pk == mid:
        raise RingPinchError(f"tie-point {mid} has no preceding kept vertex")
    reach_point(ctx, keep, mid, right, seg_ang(pts[mid], pts[pk]))


# ============================================================================
# Refinement strategies
# ============================================================================

def keep_linears(
    ctx: RingContext,
    keep: np.ndarray,
    frm: int,
    to: int,
    touch_points: np.ndarray
) -> bool:
    """Keep the first long, nearly straight run of vertices inside gap ``frm -> to``.

    Returns:
        True if a run was found and committed to ``keep``
    """
    pts = ctx.pts
    npts = ctx.npts
    min_length = ctx.config.min_linear_length
    max_deviation = ctx.config.max_linear_deviation

    if to == (frm + 1) % npts:
        return False

    for l_idx in cyclic_range(npts, frm, to):
        longest = l_idx
        perim = 0.0
        r_idx = (l_idx + 1) % npts
        while True:
            perim += seg_len(pts[(r_idx - 1) % npts], pts[r_idx])
            if perim > min_length and is_mostly_linear(pts, l_idx, r_idx, max_deviation):
                longest = r_idx
            else:
                break
            if r_idx == to:
                break
            r_idx = (r_idx + 1) % npts

        # a run has to span at least one intermediate vertex
        if longest == l_idx or longest == (l_idx + 1) % npts:
            continue

        candidate = keep.copy()
        try:
            if l_idx != frm:
                add_tiepoint(ctx, candidate, l_idx)
            if longest != to:
                add_tiepoint(ctx, candidate, longest)
        except TiePointError:
            continue

        touch_points[l_idx] = True
        touch_points[longest] = True
        for i in cyclic_span(npts, l_idx, longest):
            candidate[i] = True
        keep[:] = candidate
        return True

    return False


def _chain_totals(ctx: RingContext, keep: np.ndarray, frm: int, to: int) -> Tuple[float, float]:
    """Summed excursion area and chord length over kept vertices from ``frm`` to ``to``."""
    area = 0.0
    perim = 0.0
    pk = frm
    while True:
        nk = next_keep(keep, pk)
        area += subring_area(ctx.pts, pk, nk)
        perim += seg_len(ctx.pts[pk], ctx.pts[nk])
        if nk == to:
            return area, perim
        pk = nk


def refine_seg(ctx: RingContext, keep: np.ndarray, frm: int, to: int) -> Optional[int]:
    """Insert the tie-point with the best positive improvement into gap ``frm -> to``.

    Returns:
        Index of the inserted tie-point, or None when no candidate improves the gap
    """
    pts = ctx.pts
    npts = ctx.npts
    start_area = subring_area(pts, frm, to)
    start_perim = seg_len(pts[frm], pts[to])

    best_improvement = 0.0
    best_keep = None
    best_touchpt = None

    for testpt in cyclic_range(npts, frm + 1, to):
        candidate = keep.copy()
        try:
            add_tiepoint(ctx, candidate, testpt)
        except TiePointError:
            continue

        left_area, left_perim = _chain_totals(ctx, candidate, frm, testpt)
        right_area, right_perim = _chain_totals(ctx, candidate, testpt, to)
        improvement = tiepoint_improvement(
            start_area,
            start_perim,
            left_area + right_area,
            left_perim + right_perim,
        )

        if improvement > best_improvement:
            best_improvement = improvement
            best_keep = candidate
            best_touchpt = testpt

    if best_keep is None:
        return None

    keep[:] = best_keep
    return best_touchpt


def refine_ring(ctx: RingContext, keep: np.ndarray, touch_points: np.ndarray) -> int:
    """Grow ``keep`` until no gap between kept vertices can be improved.

    Returns:
        Number of passes made over the ring
    """
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for i in range(ctx.npts):
            if not keep[i]:
                continue
            while True:
                j = next_keep(keep, i)
                if subring_area(ctx.pts, i, j) > 0:
                    if keep_linears(ctx, keep, i, j, touch_points):
                        changed = True
                        continue
                    touchpt = refine_seg(ctx, keep, i, j)
                    if touchpt is not None:
                        touch_points[touchpt] = True
                        changed = True
                        continue
                break
    return passes


__all__ = [
    'cyclic_range',
    'cyclic_span',
    'next_keep',
    'prev_keep',
    'RingContext',
    'subring_area',
    'is_mostly_linear',
    'tiepoint_improvement',
    'reach_point',
    'add_tiepoint',
    'keep_linears',
    'refine_seg',
    'refine_ring',
]
