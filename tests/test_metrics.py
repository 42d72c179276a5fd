"""Tests for the metrics module."""

import pytest

from ringpinch import pinch
from ringpinch.core.ring import Mpoly, Ring
from ringpinch.metrics import measure_pinch, ring_is_simple


NARROW_NOTCH = [(0, 0), (49, 0), (50, 5), (51, 0), (100, 0), (100, 100), (0, 100)]


class TestRingIsSimple:
    """Tests for ring_is_simple helper function."""

    def test_square(self):
        assert ring_is_simple(Ring([(0, 0), (1, 0), (1, 1), (0, 1)]))

    def test_bowtie(self):
        assert not ring_is_simple(Ring([(0, 0), (1, 1), (0, 1), (1, 0)]))

    def test_too_short(self):
        assert not ring_is_simple(Ring([(0, 0), (1, 0)]))


class TestMeasurePinch:
    """Tests for measure_pinch function."""

    def test_original_only(self):
        """Ratios are None when nothing is compared."""
        metrics = measure_pinch(Mpoly([Ring(NARROW_NOTCH)]))

        assert metrics["num_rings"] == 1
        assert metrics["num_vertices"] == 7
        assert metrics["area_ratio"] is None
        assert metrics["vertex_ratio"] is None
        assert metrics["is_valid"] is True

    def test_pinched(self):
        original = Mpoly([Ring(NARROW_NOTCH)])
        metrics = measure_pinch(original, pinch(original))

        assert metrics["num_vertices"] == 6
        assert metrics["original_vertices"] == 7
        assert metrics["vertex_ratio"] == pytest.approx(6 / 7)
        assert metrics["area_ratio"] > 1.0
        assert metrics["area"] == pytest.approx(10000.0)
        assert metrics["is_valid"] is True

    def test_holes_not_counted_in_area(self):
        mp = Mpoly([
            Ring([(0, 0), (10, 0), (10, 10), (0, 10)]),
            Ring([(2, 2), (4, 2), (4, 4), (2, 4)], is_hole=True, parent_id=0),
        ])
        assert measure_pinch(mp)["area"] == 100.0

    def test_invalid_ring(self):
        mp = Mpoly([Ring([(0, 0), (1, 1), (0, 1), (1, 0)])])
        assert measure_pinch(mp)["is_valid"] is False

    def test_zero_area_original(self):
        original = Mpoly([Ring([(0, 0), (5, 0), (10, 0)])])
        pinched = Mpoly([Ring([(0, 0), (1, 0), (1, 1)])])
        metrics = measure_pinch(original, pinched)

        assert metrics["area_ratio"] is None
        assert metrics["vertex_ratio"] == 1.0
