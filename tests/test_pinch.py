"""Tests for the pinching entry points."""

import numpy as np
import pytest
from shapely.geometry import LineString, MultiPolygon, Point, Polygon

from ringpinch import (
    InvalidRingInputError,
    RingPinchError,
    UnionError,
    Mpoly,
    PinchResult,
    Ring,
    Vertex,
    pinch,
    pinch_excursions,
    pinch_ring_excursions,
)
from ringpinch.convert import ring_to_polygon


NOTCHED = [(0, 0), (50, 0), (50, 25), (51, 25), (51, 0), (100, 0), (100, 100), (0, 100)]
NARROW_NOTCH = [(0, 0), (49, 0), (50, 5), (51, 0), (100, 0), (100, 100), (0, 100)]
WIDE_NOTCH = [(0, 0), (40, 0), (50, 10), (60, 0), (100, 0), (100, 100), (0, 100)]


def _staircase():
    """Right triangle whose hypotenuse is traced as two pixel stairs."""
    pts = [(0, 0), (40, 0), (40, 40)]
    for k in range(19, 0, -1):
        pts.append((2 * k, 2 * k + 2))
        pts.append((2 * k, 2 * k))
    pts.append((0, 2))
    return pts


class TestPinchRingExcursions:
    """Tests for pinch_ring_excursions."""

    def test_returns_pinch_result(self):
        result = pinch_ring_excursions(Ring(NARROW_NOTCH))
        assert isinstance(result, PinchResult)
        assert result.num_kept == 6
        assert result.passes == 1

    def test_narrow_spike_removed(self):
        result = pinch_ring_excursions(Ring(NARROW_NOTCH))
        assert result.ring.pts == [(0, 0), (49, 0), (51, 0), (100, 0), (100, 100), (0, 100)]
        assert result.touched_vertices() == []

    def test_idempotent(self):
        once = pinch_ring_excursions(Ring(NARROW_NOTCH)).ring
        twice = pinch_ring_excursions(once).ring
        assert twice.pts == once.pts

    def test_deep_notch_kept(self):
        result = pinch_ring_excursions(Ring(NOTCHED))
        assert result.ring.pts == Ring(NOTCHED).pts
        assert result.touched_vertices() == [Vertex(50, 0), Vertex(51, 25)]

    def test_wide_notch_tiepoint(self):
        result = pinch_ring_excursions(Ring(WIDE_NOTCH))
        assert len(result.ring) == 7
        assert result.touched_vertices() == [Vertex(50, 10)]

    def test_clockwise_input(self):
        ring = Ring([(0, 0), (0, 10), (10, 10), (10, 0)])
        result = pinch_ring_excursions(ring)

        assert result.ring.is_ccw()
        assert result.ring.pts == [(10, 0), (10, 10), (0, 10), (0, 0)]
        # input untouched
        assert ring.pts == [(0, 0), (0, 10), (10, 10), (10, 0)]

    def test_output_is_outer_ring(self):
        ring = Ring(NARROW_NOTCH, parent_id=None)
        result = pinch_ring_excursions(ring)
        assert not result.ring.is_hole
        assert result.ring.parent_id is None

    def test_hole_rejected(self):
        with pytest.raises(InvalidRingInputError):
            pinch_ring_excursions(Ring(NOTCHED, is_hole=True, parent_id=0))

    def test_too_few_vertices(self):
        with pytest.raises(InvalidRingInputError):
            pinch_ring_excursions(Ring([(0, 0), (1, 0), (0, 0)]))
        with pytest.raises(InvalidRingInputError):
            pinch_ring_excursions(Ring([(0, 0), (1, 0), (1, 0)]))

    def test_staircase_properties(self):
        source = Ring(_staircase())
        result = pinch_ring_excursions(source)
        out = ring_to_polygon(result.ring)
        src = ring_to_polygon(source)

        assert out.is_valid
        assert result.ring.is_ccw()
        assert len(result.ring) < len(source)
        assert set(result.ring.pts) <= set(source.pts)

        hull = src.convex_hull
        assert set(hull.exterior.coords) <= set(result.ring.pts)
        assert src.area - 1e-9 <= out.area <= hull.area + 1e-9

    def test_kept_vertices_preserve_order(self):
        source = Ring(_staircase())
        result = pinch_ring_excursions(source)
        kept = [source.pts[i] for i in np.flatnonzero(result.keep)]
        assert kept == result.ring.pts


class TestPinch:
    """Tests for multi-ring pinching with reconciliation."""

    def test_disjoint_rings(self):
        mp = Mpoly([Ring(NARROW_NOTCH), Ring([(200, 0), (210, 0), (210, 10), (200, 10)])])
        out = pinch(mp)

        assert len(out) == 2
        assert len(out.rings[0]) == 6
        assert out is not mp
        assert len(mp.rings[0]) == 7

    def test_enclosed_ring_dropped(self):
        mp = Mpoly([Ring(NOTCHED), Ring([(10, 50), (20, 50), (20, 60), (10, 60)])])
        out = pinch(mp)
        assert len(out) == 1
        assert out.rings[0].pts == Ring(NOTCHED).pts

    def test_hole_rejected_before_any_work(self):
        outer = Ring(NARROW_NOTCH)
        hole = Ring([(10, 10), (20, 10), (20, 20), (10, 20)], is_hole=True, parent_id=0)
        mp = Mpoly([outer, hole])

        with pytest.raises(InvalidRingInputError, match="Ring 1"):
            pinch(mp)
        assert len(mp.rings[0]) == 7

    def test_fatal_union_error_aborts_whole_operation(self):
        """A failed merge of one crossing pair leaves no partial result and no input changes."""
        def failing_union(a, b):
            raise UnionError("union unavailable")

        first = Ring([(0, 0), (10, 0), (10, 10), (0, 10)])
        second = Ring([(5, 5), (15, 5), (15, 15), (5, 15)])
        third = Ring([(200, 0), (210, 0), (210, 10), (200, 10)])
        mp = Mpoly([third, first, second])
        before = [list(ring.pts) for ring in mp.rings]

        result = None
        with pytest.raises(UnionError):
            result = pinch(mp, union=failing_union)

        assert result is None
        assert [ring.pts for ring in mp.rings] == before
        assert len(mp) == 3

    def test_fatal_engine_error_aborts_whole_operation(self):
        """A ring the engine cannot handle aborts pinching of every ring."""
        # self-intersecting, so an excursion area comes out negative
        looped = Ring([(0, 0), (10, 1), (10, -1), (0, 5)])
        mp = Mpoly([Ring(NARROW_NOTCH), looped])
        before = [list(ring.pts) for ring in mp.rings]

        with pytest.raises(RingPinchError):
            pinch(mp)
        assert [ring.pts for ring in mp.rings] == before

    def test_verbose(self, capsys):
        pinch(Mpoly([Ring(NARROW_NOTCH)]), verbose=True)
        captured = capsys.readouterr()

        assert "Ring 0: kept 6 of 7 vertices" in captured.out
        assert "Reconciliation finished" in captured.out
        assert "Pinched 7 vertices down to 6" in captured.out

    def test_quiet_by_default(self, capsys):
        pinch(Mpoly([Ring(NARROW_NOTCH)]))
        assert capsys.readouterr().out == ""


class TestPinchExcursions:
    """Tests for the Shapely entry point."""

    def test_polygon(self):
        result = pinch_excursions(Polygon(NARROW_NOTCH))
        assert isinstance(result, Polygon)
        assert len(result.exterior.coords) == 7
        assert result.is_valid

    def test_multipolygon(self):
        geom = MultiPolygon([
            Polygon(NARROW_NOTCH),
            Polygon([(200, 0), (210, 0), (210, 10), (200, 10)]),
        ])
        result = pinch_excursions(geom)
        assert isinstance(result, MultiPolygon)
        assert len(result.geoms) == 2

    def test_holes_rejected(self):
        poly = Polygon(NARROW_NOTCH, [[(10, 10), (20, 10), (20, 20), (10, 20)]])
        with pytest.raises(InvalidRingInputError):
            pinch_excursions(poly)

    def test_drop_holes(self):
        poly = Polygon(NARROW_NOTCH, [[(10, 10), (20, 10), (20, 20), (10, 20)]])
        result = pinch_excursions(poly, drop_holes=True)
        assert len(result.interiors) == 0
        assert len(result.exterior.coords) == 7

    def test_invalid_type(self):
        with pytest.raises(TypeError, match="Input geometry must be a Polygon or MultiPolygon"):
            pinch_excursions(LineString([(0, 0), (1, 1)]))
        with pytest.raises(TypeError):
            pinch_excursions(Point(0, 0))
