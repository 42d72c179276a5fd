import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from shapely.geometry import Polygon

import ringpinch
from ringpinch.convert import ring_from_coords

from plot_geometry import plot_comparison, plot_pinch

# Pixel-traced blob: a disc rasterized on a unit grid, outlined as a staircase
radius = 30
coords = []
for y in range(-radius, radius):
    half = int(np.sqrt(radius ** 2 - (y + 0.5) ** 2))
    for pt in ((half, y), (half, y + 1)):
        if not coords or coords[-1] != pt:
            coords.append(pt)
left = [(-x, y) for x, y in reversed(coords)]
poly = Polygon(coords + left)

result = ringpinch.pinch_ring_excursions(ring_from_coords(poly.exterior.coords))
plot_pinch(result, title="Rasterized disc")

pinched = ringpinch.pinch_excursions(poly, verbose=True)
plot_comparison(poly, pinched, title="Rasterized disc")
