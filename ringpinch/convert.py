"""Conversion between the ring model and Shapely / WKT geometries.

Rings never store their closing vertex; Shapely rings always do. Polygons
map to one outer ring followed by its holes, with hole ``parent_id`` values
pointing at the outer ring's index in the flattened list.
"""

from pathlib import Path
from typing import List, Optional, Union

import shapely.wkt
from shapely.geometry import GeometryCollection, LinearRing, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from .core.ring import Mpoly, Ring


def ring_from_coords(coords, is_hole: bool = False, parent_id: Optional[int] = None) -> Ring:
    """Build a ring from a coordinate sequence, dropping Z and the closing vertex."""
    return Ring([(c[0], c[1]) for c in coords], is_hole, parent_id)


def ring_to_linear_ring(ring: Ring) -> LinearRing:
    """Convert a ring to a closed Shapely LinearRing."""
    return LinearRing(ring.closed_coords())


def ring_to_polygon(ring: Ring) -> Polygon:
    """Polygon bounded by a single ring (no holes)."""
    return Polygon(ring.closed_coords())


def _polygon_rings(polygon: Polygon, offset: int) -> List[Ring]:
    rings = [ring_from_coords(polygon.exterior.coords)]
    for interior in polygon.interiors:
        rings.append(ring_from_coords(interior.coords, is_hole=True, parent_id=offset))
    return rings


def mpoly_from_shapely(geometry: BaseGeometry) -> Mpoly:
    """Flatten a Polygon, MultiPolygon or GeometryCollection of polygons into an Mpoly.

    Args:
        geometry: Shapely geometry to convert

    Returns:
        Mpoly with outer rings followed by their holes

    Raises:
        TypeError: If the geometry contains non-polygon parts
        ValueError: If the geometry has no rings

    Examples:
        >>> poly = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)], [[(2, 2), (4, 2), (4, 4)]])
        >>> mp = mpoly_from_shapely(poly)
        >>> [(r.is_hole, r.parent_id) for r in mp.rings]
        [(False, None), (True, 0)]
    """
    rings: List[Ring] = []

    def _collect(geom: BaseGeometry) -> None:
        if isinstance(geom, Polygon):
            if not geom.is_empty:
                rings.extend(_polygon_rings(geom, len(rings)))
        elif isinstance(geom, (MultiPolygon, GeometryCollection)):
            for part in geom.geoms:
                _collect(part)
        else:
            raise TypeError(f"Not a polygon type: {geom.geom_type}")

    _collect(geometry)

    if not rings:
        raise ValueError("Geometry has no rings")
    return Mpoly(rings)


def mpoly_to_shapely(mpoly: Mpoly) -> Union[Polygon, MultiPolygon]:
    """Assemble an Mpoly back into Shapely polygons.

    Returns a Polygon when there is exactly one outer ring and a MultiPolygon
    otherwise.

    Raises:
        ValueError: If a hole does not reference a valid outer ring
    """
    mpoly.validate()

    polygons = []
    for outer_idx in mpoly.outer_rings():
        shell = mpoly.rings[outer_idx].closed_coords()
        holes = [mpoly.rings[h].closed_coords() for h in mpoly.holes_of(outer_idx)]
        polygons.append(Polygon(shell, holes=holes))

    if len(polygons) == 1:
        return polygons[0]
    return MultiPolygon(polygons)


def mpoly_from_wkt(wkt: str) -> Mpoly:
    """Parse well-known text into an Mpoly."""
    return mpoly_from_shapely(shapely.wkt.loads(wkt))


def mpoly_to_wkt(mpoly: Mpoly, rounding_precision: int = -1) -> str:
    """Serialize an Mpoly to well-known text (rings closed explicitly)."""
    return shapely.wkt.dumps(mpoly_to_shapely(mpoly), rounding_precision=rounding_precision)


def read_wkt_file(path: Union[str, Path]) -> Mpoly:
    """Read an Mpoly from a file holding a single WKT geometry."""
    text = Path(path).read_text()
    return mpoly_from_wkt(" ".join(text.split()))


__all__ = [
    'ring_from_coords',
    'ring_to_linear_ring',
    'ring_to_polygon',
    'mpoly_from_shapely',
    'mpoly_to_shapely',
    'mpoly_from_wkt',
    'mpoly_to_wkt',
    'read_wkt_file',
]
