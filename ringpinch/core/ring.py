"""Ring and multi-polygon data model.

A :class:`Ring` is an implicitly closed vertex sequence; the closing vertex is
never stored. An :class:`Mpoly` is an ordered list of rings in which hole
rings point at their outer ring through ``parent_id``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np

from .geometry import BBox, EMPTY_BBOX, Vertex, oriented_area


@dataclass
class Ring:
    """Closed polygon boundary.

    Attributes:
        pts: Vertices in boundary order, without a duplicate closing vertex
        is_hole: True for interior rings
        parent_id: Index of the outer ring a hole belongs to (None for outer rings)

    Examples:
        >>> ring = Ring([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> ring.is_ccw()
        True
        >>> ring.area()
        100.0
    """

    pts: List[Vertex] = field(default_factory=list)
    is_hole: bool = False
    parent_id: Optional[int] = None

    def __post_init__(self) -> None:
        pts = [Vertex(float(p[0]), float(p[1])) for p in self.pts]
        if len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()
        self.pts = pts

    def __len__(self) -> int:
        return len(self.pts)

    def __iter__(self):
        return iter(self.pts)

    def oriented_area(self) -> float:
        return oriented_area(self.pts)

    def area(self) -> float:
        return abs(self.oriented_area())

    def is_ccw(self) -> bool:
        return self.oriented_area() > 0

    def bbox(self) -> BBox:
        return BBox.from_points(self.pts)

    def reversed(self) -> "Ring":
        """Return a copy with the vertex order reversed."""
        return self.copy_metadata(self.pts[::-1])

    def copy_metadata(self, pts: Optional[Iterable] = None) -> "Ring":
        """Return a new ring with this ring's metadata and the given vertices."""
        return Ring(list(pts) if pts is not None else [], self.is_hole, self.parent_id)

    def as_array(self) -> np.ndarray:
        """Vertices as an (N, 2) float array."""
        return np.array(self.pts, dtype=float).reshape(-1, 2)

    def closed_coords(self) -> List[Vertex]:
        """Vertices with the first one repeated at the end."""
        if not self.pts:
            return []
        return self.pts + [self.pts[0]]


@dataclass
class Mpoly:
    """Multi-polygon as a flat list of outer rings and holes.

    Attributes:
        rings: Rings in order; holes reference their outer ring by index
    """

    rings: List[Ring] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self):
        return iter(self.rings)

    def outer_rings(self) -> List[int]:
        return [i for i, ring in enumerate(self.rings) if not ring.is_hole]

    def holes_of(self, idx: int) -> List[int]:
        return [i for i, ring in enumerate(self.rings) if ring.is_hole and ring.parent_id == idx]

    def num_vertices(self) -> int:
        return sum(len(ring) for ring in self.rings)

    def bbox(self) -> BBox:
        bbox = EMPTY_BBOX
        for ring in self.rings:
            bbox = bbox.union(ring.bbox())
        return bbox

    def validate(self) -> None:
        """Check that every hole points at an outer ring.

        Raises:
            ValueError: If a hole has no parent or its parent is not an outer ring
        """
        for i, ring in enumerate(self.rings):
            if not ring.is_hole:
                continue
            parent = ring.parent_id
            if parent is None or not 0 <= parent < len(self.rings):
                raise ValueError(f"Hole {i} references missing parent {parent}")
            if self.rings[parent].is_hole:
                raise ValueError(f"Hole {i} references another hole ({parent})")

    def delete_ring(self, idx: int) -> None:
        """Remove the ring at ``idx`` together with its holes.

        Parent references of the remaining holes are renumbered so that they
        keep pointing at the same outer rings.
        """
        if not 0 <= idx < len(self.rings):
            raise IndexError(f"Ring index {idx} out of range")

        doomed = {idx}
        if not self.rings[idx].is_hole:
            doomed.update(self.holes_of(idx))

        new_index = {}
        kept: List[Ring] = []
        for i, ring in enumerate(self.rings):
            if i in doomed:
                continue
            new_index[i] = len(kept)
            kept.append(ring)

        for ring in kept:
            if ring.is_hole:
                ring.parent_id = new_index[ring.parent_id]

        self.rings = kept

    def split(self) -> List["Mpoly"]:
        """Split into one Mpoly per outer ring, each carrying its own holes."""
        self.validate()
        polys: List[Mpoly] = []
        for outer_idx in self.outer_rings():
            outer = self.rings[outer_idx]
            rings = [Ring(list(outer.pts), False, None)]
            for hole_idx in self.holes_of(outer_idx):
                rings.append(Ring(list(self.rings[hole_idx].pts), True, 0))
            polys.append(Mpoly(rings))
        return polys


__all__ = [
    'Ring',
    'Mpoly',
]
