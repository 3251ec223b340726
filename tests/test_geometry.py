"""Tests for geometry utilities."""

import math

from untangle.geometry import circular_positions, count_crossings, segments_intersect


class TestSegmentsIntersect:
    """Tests for the proper crossing predicate."""

    def test_crossing_diagonals(self):
        """Diagonals of a square cross."""
        assert segments_intersect((0, 0), (100, 100), (0, 100), (100, 0)) is True

    def test_symmetric(self):
        """Argument order does not change the result."""
        p1, p2, p3, p4 = (0, 0), (100, 100), (0, 100), (100, 0)
        assert segments_intersect(p3, p4, p1, p2)
        assert segments_intersect(p2, p1, p4, p3)

    def test_parallel_segments(self):
        """Parallel segments never cross."""
        assert segments_intersect((0, 0), (100, 0), (0, 50), (100, 50)) is False

    def test_shared_endpoint_is_not_crossing(self):
        """Segments meeting at a common endpoint do not cross."""
        assert segments_intersect((0, 0), (100, 0), (100, 0), (50, 80)) is False

    def test_t_junction_is_not_crossing(self):
        """An endpoint touching the other segment's body does not count."""
        assert segments_intersect((0, 0), (100, 0), (50, 0), (50, 80)) is False

    def test_collinear_overlap_is_not_crossing(self):
        """Overlapping collinear segments do not count."""
        assert segments_intersect((0, 0), (100, 0), (50, 0), (150, 0)) is False

    def test_collinear_disjoint(self):
        """Disjoint collinear segments do not cross."""
        assert segments_intersect((0, 0), (10, 0), (20, 0), (30, 0)) is False

    def test_lines_cross_outside_segments(self):
        """Supporting lines crossing beyond the segments do not count."""
        assert segments_intersect((0, 0), (10, 10), (100, 0), (90, 10)) is False

    def test_nearly_touching_crossing(self):
        """A crossing close to an endpoint is still detected."""
        assert segments_intersect((0, 0), (100, 0), (50, -1e-9), (50, 80)) is True


class TestCountCrossings:
    """Tests for crossing counts over a straight-line drawing."""

    def test_square_with_diagonals(self):
        """Square with diagonals has exactly 1 crossing."""
        positions = [(0, 0), (100, 0), (100, 100), (0, 100)]
        edges = [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2), (1, 3)]
        assert count_crossings(positions, edges) == 1

    def test_triangle(self):
        """Triangle has no crossings."""
        positions = [(0, 0), (100, 0), (50, 87)]
        assert count_crossings(positions, [(0, 1), (1, 2), (2, 0)]) == 0

    def test_empty(self):
        """Empty drawing has no crossings."""
        assert count_crossings([], []) == 0

    def test_star_never_crosses(self):
        """Edges sharing the centre are never tested."""
        positions = [(0, 0), (100, 0), (-100, 0), (0, 100), (0, -100)]
        edges = [(0, 1), (0, 2), (0, 3), (0, 4)]
        assert count_crossings(positions, edges) == 0


class TestCircularPositions:
    """Tests for circular placement."""

    def test_points_on_circle(self):
        """All points lie on the requested circle."""
        for x, y in circular_positions(7, 300.0):
            assert math.isclose(math.hypot(x, y), 300.0)

    def test_first_point_at_start_angle(self):
        """The first point sits at the start angle."""
        x, y = circular_positions(4, 100.0)[0]
        assert math.isclose(x, 100.0)
        assert math.isclose(y, 0.0, abs_tol=1e-9)

    def test_y_axis_points_down(self):
        """A quarter turn lands at negative y (upwards on screen)."""
        x, y = circular_positions(4, 100.0)[1]
        assert math.isclose(x, 0.0, abs_tol=1e-9)
        assert math.isclose(y, -100.0)

    def test_points_are_distinct(self):
        """Evenly spaced points are pairwise distinct."""
        points = circular_positions(12, 50.0)
        assert len(set(points)) == 12

    def test_returns_python_floats(self):
        """Positions are plain floats, not numpy scalars."""
        x, y = circular_positions(3, 10.0)[2]
        assert type(x) is float
        assert type(y) is float

    def test_empty(self):
        """Zero points gives an empty list."""
        assert circular_positions(0, 100.0) == []
