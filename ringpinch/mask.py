"""Point-in-polygon tests and rasterization of multi-polygons.

Rasterization uses pixel-row crossings: for every row the x positions where
ring edges cross the row are collected and sorted, and pixels between
alternating crossings are inside.
"""

import math
from pathlib import Path
from typing import List, Union

import numpy as np

from .core.ring import Mpoly, Ring


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (``round`` would go to even)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def ring_contains_point(ring: Ring, px: float, py: float) -> bool:
    """Even-odd ray test of a point against a single ring."""
    npts = len(ring)
    num_crossings = 0
    for i in range(npts):
        x0, y0 = ring.pts[i]
        x1, y1 = ring.pts[(i + 1) % npts]
        # ray from (px, py) in the +x direction
        if x0 < px and x1 < px:
            continue
        y0_above = y0 >= py
        y1_above = y1 >= py
        if y0_above == y1_above:
            continue
        alpha = (py - y0) / (y1 - y0)
        cx = x0 + (x1 - x0) * alpha
        if cx > px:
            num_crossings += 1
    return num_crossings % 2 == 1


def polygon_contains_point(mpoly: Mpoly, px: float, py: float) -> bool:
    """True if the point is inside an odd number of rings (i.e. not in a hole)."""
    inside = sum(1 for ring in mpoly.rings if ring_contains_point(ring, px, py))
    return inside % 2 == 1


def get_row_crossings(mpoly: Mpoly, min_y: int, num_rows: int) -> List[np.ndarray]:
    """Sorted integer x crossings of all ring edges for each pixel row.

    Args:
        mpoly: Rings to rasterize, in pixel coordinates
        min_y: Pixel row of the first output row
        num_rows: Number of rows to compute

    Returns:
        One sorted int array per row

    Raises:
        ValueError: If a row ends up with an odd number of crossings
    """
    rows: List[List[int]] = [[] for _ in range(num_rows)]

    for ring in mpoly.rings:
        npts = len(ring)
        for j in range(npts):
            x0, y0 = ring.pts[j]
            x1, y1 = ring.pts[(j + 1) % npts]
            if y0 == y1:
                continue
            if y0 > y1:
                x0, y0, x1, y1 = x1, y1, x0, y0
            alpha = (x1 - x0) / (y1 - y0)
            for y in range(_round_half_away(y0), _round_half_away(y1)):
                row = y - min_y
                if row < 0 or row > num_rows - 1:
                    continue
                rows[row].append(_round_half_away(x0 + (y - y0) * alpha))

    crossings = []
    for row, values in enumerate(rows):
        if len(values) % 2:
            raise ValueError(f"Row {row + min_y} has an odd number of crossings")
        crossings.append(np.sort(np.array(values, dtype=int)))
    return crossings


def mask_from_mpoly(mpoly: Mpoly, width: int, height: int) -> np.ndarray:
    """Rasterize a multi-polygon in pixel coordinates to a boolean mask.

    Returns:
        Array of shape (height, width), True for pixels inside the polygon

    Examples:
        >>> square = Mpoly([Ring([(1, 1), (3, 1), (3, 3), (1, 3)])])
        >>> mask_from_mpoly(square, 4, 4).astype(int)
        array([[0, 0, 0, 0],
               [0, 1, 1, 0],
               [0, 1, 1, 0],
               [0, 0, 0, 0]])
    """
    rows = get_row_crossings(mpoly, 0, height)
    columns = np.arange(width)
    mask = np.zeros((height, width), dtype=bool)
    for y, crossings in enumerate(rows):
        if len(crossings):
            # number of crossings at or left of each pixel; odd means inside
            flips = np.searchsorted(crossings, columns, side='right')
            mask[y] = flips % 2 == 1
    return mask


def write_pbm(mask: np.ndarray, path: Union[str, Path]) -> None:
    """Write a mask as a binary PBM (P4) image, inside pixels white."""
    height, width = mask.shape
    bits = np.packbits(~mask.astype(bool), axis=1)
    with open(path, 'wb') as fout:
        fout.write(f"P4\n{width} {height}\n".encode('ascii'))
        fout.write(bits.tobytes())


__all__ = [
    'ring_contains_point',
    'polygon_contains_point',
    'get_row_crossings',
    'mask_from_mpoly',
    'write_pbm',
]
