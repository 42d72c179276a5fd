"""Before/after measurements for pinched multi-polygons.

Used for verbose reporting and in tests to compare a pinched result against
its source without repeating ad-hoc vertex counts and area checks.
"""

from __future__ import annotations

from typing import Dict, Optional

from shapely.geometry import Polygon

from .convert import ring_to_polygon
from .core.ring import Mpoly


def _safe_validity(mpoly: Mpoly) -> bool:
    try:
        return all(ring_to_polygon(ring).is_valid for ring in mpoly.rings if len(ring) >= 3)
    except Exception:
        return False


def _outer_area(mpoly: Mpoly) -> float:
    return sum(mpoly.rings[i].area() for i in mpoly.outer_rings())


def measure_pinch(
    original: Mpoly,
    pinched: Optional[Mpoly] = None,
) -> Dict[str, Optional[float]]:
    """Return vertex, ring and area metrics for ``pinched`` relative to ``original``.

    When ``pinched`` is omitted only the original is measured and the ratio
    entries are None.
    """
    target = pinched if pinched is not None else original
    original_area = _outer_area(original)
    area = _outer_area(target)

    area_ratio: Optional[float] = None
    vertex_ratio: Optional[float] = None
    if pinched is not None:
        if original_area > 0:
            area_ratio = area / original_area
        if original.num_vertices() > 0:
            vertex_ratio = pinched.num_vertices() / original.num_vertices()

    return {
        "num_rings": len(target),
        "num_vertices": target.num_vertices(),
        "original_vertices": original.num_vertices(),
        "area": area,
        "area_ratio": area_ratio,
        "vertex_ratio": vertex_ratio,
        "is_valid": _safe_validity(target),
    }


def ring_is_simple(ring) -> bool:
    """True if no two non-adjacent edges of the ring intersect."""
    if len(ring) < 3:
        return False
    return Polygon(ring.closed_coords()).exterior.is_simple


__all__ = [
    "measure_pinch",
    "ring_is_simple",
]
