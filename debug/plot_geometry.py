"""Simple pinch result visualization helpers for debugging."""

import matplotlib.pyplot as plt
import numpy as np
from shapely.geometry import Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry

from ringpinch import PinchResult


def plot_comparison(original: BaseGeometry, modified: BaseGeometry, title: str = "Geometry Comparison"):
    """Plot original and pinched geometries side by side.

    Args:
        original: Original geometry
        modified: Geometry after pinching
        title: Plot title
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    _plot_geometry(ax1, original, color='red', alpha=0.5)
    ax1.set_title("Original")
    ax1.set_aspect('equal')
    ax1.grid(True, alpha=0.3)

    _plot_geometry(ax2, modified, color='blue', alpha=0.5)
    ax2.set_title("Pinched")
    ax2.set_aspect('equal')
    ax2.grid(True, alpha=0.3)

    fig.suptitle(title)
    plt.tight_layout()
    plt.show()


def plot_pinch(result: PinchResult, title: str = "Excursion Pinching"):
    """Overlay a pinched ring on its source, marking kept vertices and touch points.

    Args:
        result: Outcome of ``pinch_ring_excursions``
        title: Plot title
    """
    fig, ax = plt.subplots(figsize=(8, 8))

    src = np.array(result.source.closed_coords())
    out = np.array(result.ring.closed_coords())
    ax.plot(src[:, 0], src[:, 1], color='gray', linewidth=1, label='source')
    ax.fill(out[:, 0], out[:, 1], color='red', alpha=0.2, edgecolor='red', linewidth=1.5, label='pinched')

    kept = result.source.as_array()[result.keep]
    ax.scatter(kept[:, 0], kept[:, 1], color='red', s=12, zorder=3)

    if result.touch_points.any():
        touched = result.source.as_array()[result.touch_points]
        ax.scatter(touched[:, 0], touched[:, 1], facecolor='white', edgecolor='black',
                   s=60, zorder=4, label='touch points')

    ax.set_title(f"{title} ({result.num_kept}/{len(result.source)} vertices kept)")
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    ax.legend()
    plt.tight_layout()
    plt.show()


def _plot_geometry(ax, geom: BaseGeometry, color='blue', alpha=0.5):
    """Plot a Polygon or MultiPolygon on the given axes."""
    if isinstance(geom, Polygon):
        _plot_polygon(ax, geom, color=color, alpha=alpha)
    elif isinstance(geom, MultiPolygon):
        for poly in geom.geoms:
            _plot_polygon(ax, poly, color=color, alpha=alpha)


def _plot_polygon(ax, poly: Polygon, color='blue', alpha=0.5):
    """Plot a single polygon with holes.

    Args:
        ax: Matplotlib axes
        poly: Polygon to plot
        color: Fill color
        alpha: Transparency
    """
    x, y = poly.exterior.xy
    ax.fill(x, y, color=color, alpha=alpha, edgecolor='black', linewidth=1.5)

    for interior in poly.interiors:
        x, y = interior.xy
        ax.fill(x, y, color='white', edgecolor='black', linewidth=1)
