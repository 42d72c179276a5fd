"""Excursion pinching of rings and multi-polygons.

The pincher removes small detours from polygon boundaries (typically the
staircase artefacts of raster-to-vector tracing) by keeping only a subset of
the original vertices. The kept vertices always include the convex hull, and
the result never self-intersects.

Public entry points:
- :func:`pinch_ring_excursions` works on a single outer :class:`Ring`
- :func:`pinch` works on an :class:`Mpoly` and reconciles the pinched rings
- :func:`pinch_excursions` accepts and returns Shapely geometries
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from .convert import mpoly_from_shapely, mpoly_to_shapely
from .core.config import DEFAULT_CONFIG, PinchConfig
from .core.errors import InvalidRingInputError
from .core.ring import Mpoly, Ring
from .hull import find_convex_hull
from .metrics import measure_pinch
from .reconcile import RelationFunc, UnionFunc, reconcile_rings
from .refine import RingContext, refine_ring
from .relation import ring_relation, ring_union


@dataclass
class PinchResult:
    """Outcome of pinching a single ring.

    Attributes:
        ring: Pinched outer ring (kept vertices in original order, CCW)
        source: Counter-clockwise copy of the input the keep flags refer to
        keep: Boolean array, True for vertices retained in ``ring``
        touch_points: Boolean array of vertices used as tie-points or as
            end points of a collapsed linear run (diagnostics only)
        passes: Number of refinement passes made
    """

    ring: Ring
    source: Ring
    keep: np.ndarray
    touch_points: np.ndarray
    passes: int = 0

    @property
    def num_kept(self) -> int:
        return int(self.keep.sum())

    def touched_vertices(self) -> List:
        return [self.source.pts[i] for i in np.flatnonzero(self.touch_points)]


def _check_outer_ring(ring: Ring, idx: Optional[int] = None) -> None:
    where = f"Ring {idx}" if idx is not None else "Ring"
    if ring.is_hole:
        raise InvalidRingInputError(f"{where} is a hole; the pincher cannot be used on holes")
    if len(set(ring.pts)) < 3:
        raise InvalidRingInputError(f"{where} has fewer than 3 distinct vertices")


def pinch_ring_excursions(
    ring: Ring,
    config: Optional[PinchConfig] = None
) -> PinchResult:
    """Pinch the excursions of one outer ring.

    The ring is oriented counter-clockwise, its convex hull seeds the
    keep-set, and the refinement engine grows the keep-set until no gap can
    be improved. The input ring is not modified.

    Args:
        ring: Outer ring to simplify
        config: Engine settings (default: :data:`DEFAULT_CONFIG`)

    Returns:
        PinchResult holding the pinched ring and diagnostics

    Raises:
        InvalidRingInputError: If the ring is a hole or has fewer than 3 vertices
        ConvexHullError: If the hull sweep fails
        DegenerateAreaError: If an excursion area comes out negative

    Examples:
        >>> ring = Ring([(0, 0), (10, 0), (10, 10), (5, 10), (0, 10)])
        >>> pinch_ring_excursions(ring).ring.pts
        [Vertex(x=0.0, y=0.0), Vertex(x=10.0, y=0.0), Vertex(x=10.0, y=10.0), Vertex(x=5.0, y=10.0), Vertex(x=0.0, y=10.0)]
    """
    _check_outer_ring(ring)
    config = config or DEFAULT_CONFIG

    source = ring if ring.is_ccw() else ring.reversed()
    source = source.copy_metadata(source.pts)

    keep = find_convex_hull(source.pts)
    touch_points = np.zeros(len(source), dtype=bool)

    ctx = RingContext.from_points(source.pts, config)
    passes = refine_ring(ctx, keep, touch_points)

    pinched = Ring([pt for pt, kept in zip(source.pts, keep) if kept], False, None)
    return PinchResult(
        ring=pinched,
        source=source,
        keep=keep,
        touch_points=touch_points,
        passes=passes,
    )


def pinch(
    mpoly: Mpoly,
    config: Optional[PinchConfig] = None,
    relation: RelationFunc = ring_relation,
    union: UnionFunc = ring_union,
    verbose: bool = False
) -> Mpoly:
    """Pinch every ring of a multi-polygon and reconcile the results.

    Args:
        mpoly: Multi-polygon made of outer rings only
        config: Engine settings (default: :data:`DEFAULT_CONFIG`)
        relation: Ring relation classifier used during reconciliation
        union: Union of two crossing rings used during reconciliation
        verbose: Print per-ring progress (default: False)

    Returns:
        New Mpoly; the input is left untouched

    Raises:
        InvalidRingInputError: If any ring is a hole (checked before any work)
        ConvexHullError, DegenerateAreaError, UnionError: Fatal engine failures
    """
    for idx, ring in enumerate(mpoly.rings):
        _check_outer_ring(ring, idx)

    pinched: List[Ring] = []
    for idx, ring in enumerate(mpoly.rings):
        result = pinch_ring_excursions(ring, config)
        if verbose:
            print(
                f"Ring {idx}: kept {result.num_kept} of {len(ring)} vertices "
                f"({int(result.touch_points.sum())} touch points, {result.passes} pass(es))"
            )
        pinched.append(result.ring)

    out = reconcile_rings(Mpoly(pinched), relation=relation, union=union, verbose=verbose)

    if verbose:
        metrics = measure_pinch(mpoly, out)
        print(
            f"Pinched {metrics['original_vertices']} vertices down to {metrics['num_vertices']} "
            f"in {metrics['num_rings']} ring(s), area ratio {metrics['area_ratio']}"
        )
    return out


def _strip_holes(geometry: Union[Polygon, MultiPolygon]) -> Union[Polygon, MultiPolygon]:
    if isinstance(geometry, Polygon):
        return Polygon(geometry.exterior) if geometry.interiors else geometry
    return MultiPolygon([Polygon(p.exterior) for p in geometry.geoms])


def pinch_excursions(
    geometry: Union[Polygon, MultiPolygon],
    config: Optional[PinchConfig] = None,
    drop_holes: bool = False,
    verbose: bool = False
) -> BaseGeometry:
    """Pinch the excursions of a Shapely Polygon or MultiPolygon.

    Args:
        geometry: Polygon or MultiPolygon to simplify
        config: Engine settings (default: :data:`DEFAULT_CONFIG`)
        drop_holes: Remove interior rings before pinching. Without this a
            polygon with holes is rejected.
        verbose: Print per-ring progress (default: False)

    Returns:
        Polygon if a single ring remains, MultiPolygon otherwise

    Raises:
        TypeError: If geometry is not a Polygon or MultiPolygon
        InvalidRingInputError: If geometry has holes and drop_holes is False

    Examples:
        >>> from ringpinch.core import PinchConfig
        >>> jagged = Polygon([(0, 0), (40, 0), (40, 1), (80, 1), (80, 40), (0, 40)])
        >>> result = pinch_excursions(jagged)
        >>> result.is_valid
        True

        >>> # looser collinearity for very noisy traces
        >>> result = pinch_excursions(jagged, config=PinchConfig(max_linear_deviation=2.0))
    """
    if not isinstance(geometry, (Polygon, MultiPolygon)):
        raise TypeError("Input geometry must be a Polygon or MultiPolygon.")

    if drop_holes:
        geometry = _strip_holes(geometry)

    result = pinch(mpoly_from_shapely(geometry), config=config, verbose=verbose)
    return mpoly_to_shapely(result)


__all__ = [
    'PinchResult',
    'pinch_ring_excursions',
    'pinch',
    'pinch_excursions',
]
