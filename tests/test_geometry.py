"""Tests for geometry primitives and the bounding box type."""

import math

import numpy as np
import pytest

from ringpinch.core.geometry import (
    BBox,
    EMPTY_BBOX,
    Vertex,
    dist_to_line,
    line_intersects_line,
    line_line_intersection,
    oriented_area,
    seg_ang,
    seg_len,
    segments_intersect,
)


class TestSegmentMeasures:
    """Tests for seg_ang, seg_len and dist_to_line."""

    def test_seg_ang(self):
        assert seg_ang((0, 0), (1, 0)) == 0.0
        assert seg_ang((0, 0), (0, 1)) == pytest.approx(math.pi / 2)
        assert seg_ang((0, 0), (-1, 0)) == pytest.approx(math.pi)
        assert seg_ang((0, 0), (0, -1)) == pytest.approx(-math.pi / 2)

    def test_seg_len(self):
        assert seg_len((0, 0), (3, 4)) == 5.0
        assert seg_len((2, 2), (2, 2)) == 0.0

    def test_dist_to_line(self):
        assert dist_to_line((0, 0), (10, 0), (5, 2)) == pytest.approx(2.0)
        # the line is infinite, so points beyond the end points still project onto it
        assert dist_to_line((0, 0), (10, 0), (20, -3)) == pytest.approx(3.0)

    def test_dist_to_line_zero_length_chord(self):
        """A degenerate chord measures distance to its single point."""
        assert dist_to_line((1, 1), (1, 1), (4, 5)) == pytest.approx(5.0)


class TestLineIntersectsLine:
    """Tests for the scalar segment intersection test."""

    def test_crossing(self):
        assert line_intersects_line((0, 0), (2, 2), (0, 2), (2, 0))

    def test_touching_end_points(self):
        assert line_intersects_line((0, 0), (1, 0), (1, 0), (1, 1))

    def test_disjoint_bounding_boxes(self):
        assert not line_intersects_line((0, 0), (1, 0), (0, 1), (1, 1))

    def test_parallel_on_different_lines(self):
        assert not line_intersects_line((0, 0), (2, 2), (1, 0), (3, 2))

    def test_coincident_overlap(self):
        assert line_intersects_line((0, 0), (2, 0), (1, 0), (3, 0))
        assert not line_intersects_line((0, 0), (2, 0), (1, 0), (3, 0), fail_on_coincident=True)

    def test_t_junction_short_of_segment(self):
        # the second segment would hit the first only if extended
        assert not line_intersects_line((0, 0), (10, 0), (5, 1), (5, 3))


class TestSegmentsIntersect:
    """Tests for the vectorised intersection test."""

    def test_matches_scalar_version(self):
        starts = np.array([[0, 2], [1, 0], [5, 5], [1, 1]], dtype=float)
        ends = np.array([[2, 0], [3, 2], [6, 6], [3, 3]], dtype=float)
        result = segments_intersect((0, 0), (2, 2), starts, ends)

        expected = [
            line_intersects_line((0, 0), (2, 2), s, e) for s, e in zip(starts, ends)
        ]
        assert result.tolist() == expected
        assert result.tolist() == [True, False, False, True]

    def test_fail_on_coincident(self):
        starts = np.array([[1, 1]], dtype=float)
        ends = np.array([[3, 3]], dtype=float)
        assert not segments_intersect((0, 0), (2, 2), starts, ends, fail_on_coincident=True).any()

    def test_empty_input(self):
        result = segments_intersect((0, 0), (1, 1), np.empty((0, 2)), np.empty((0, 2)))
        assert result.shape == (0,)


class TestLineLineIntersection:
    """Tests for infinite line intersection."""

    def test_crossing_lines(self):
        assert line_line_intersection((0, 0), (2, 2), (0, 2), (2, 0)) == Vertex(1.0, 1.0)

    def test_intersection_outside_segments(self):
        pt = line_line_intersection((0, 0), (1, 0), (5, 1), (5, 2))
        assert pt.x == pytest.approx(5.0)
        assert pt.y == pytest.approx(0.0)

    def test_parallel_raises(self):
        with pytest.raises(ValueError):
            line_line_intersection((0, 0), (1, 0), (0, 1), (1, 1))


class TestOrientedArea:
    """Tests for the signed shoelace area."""

    def test_ccw_is_positive(self):
        assert oriented_area([(0, 0), (10, 0), (10, 10), (0, 10)]) == 100.0

    def test_cw_is_negative(self):
        assert oriented_area([(0, 0), (0, 10), (10, 10), (10, 0)]) == -100.0

    def test_degenerate(self):
        assert oriented_area([(0, 0), (5, 0), (10, 0)]) == 0.0


class TestBBox:
    """Tests for BBox."""

    def test_from_points(self):
        bbox = BBox.from_points([(1, 5), (-2, 3), (4, -1)])
        assert bbox == BBox(-2, -1, 4, 5, False)
        assert bbox.width == 6
        assert bbox.height == 6

    def test_from_no_points_is_empty(self):
        assert BBox.from_points([]) is EMPTY_BBOX
        assert EMPTY_BBOX.empty
        assert EMPTY_BBOX.width == 0.0

    def test_union_identity(self):
        bbox = BBox(0, 0, 1, 1, False)
        assert EMPTY_BBOX.union(bbox) == bbox
        assert bbox.union(EMPTY_BBOX) == bbox

    def test_union(self):
        a = BBox(0, 0, 1, 1, False)
        b = BBox(2, -1, 3, 0.5, False)
        assert a.union(b) == BBox(0, -1, 3, 1, False)

    def test_intersects(self):
        a = BBox(0, 0, 2, 2, False)
        assert a.intersects(BBox(1, 1, 3, 3, False))
        assert a.intersects(BBox(2, 2, 3, 3, False))
        assert not a.intersects(BBox(2.5, 0, 3, 1, False))
        assert not a.intersects(EMPTY_BBOX)
