"""Tests for graph analysis utilities."""

from untangle.preprocessing import (
    build_adjacency,
    connected_components,
    degrees,
    has_independent_edges,
    is_connected,
    max_degree,
)


class TestConnectedComponents:
    """Tests for connected component detection."""

    def test_single_component(self):
        """Connected graph has one component."""
        components = connected_components(3, [(0, 1), (1, 2)])
        assert len(components) == 1
        assert sorted(components[0]) == [0, 1, 2]

    def test_multiple_components(self):
        """Disconnected graph has multiple components."""
        components = connected_components(4, [(0, 1), (2, 3)])
        assert len(components) == 2

    def test_isolated_vertices(self):
        """Isolated vertices are separate components."""
        assert len(connected_components(3, [])) == 3

    def test_is_connected(self):
        """is_connected reports connectivity."""
        assert is_connected(3, [(0, 1), (1, 2)]) is True
        assert is_connected(4, [(0, 1), (2, 3)]) is False

    def test_trivial_graphs_are_connected(self):
        """Graphs with 0 or 1 vertices are connected."""
        assert is_connected(0, []) is True
        assert is_connected(1, []) is True

    def test_out_of_range_edges_skipped(self):
        """Edges with invalid indices are ignored."""
        assert build_adjacency(2, [(0, 1), (0, 9)]) == [[1], [0]]


class TestDegrees:
    """Tests for degree statistics."""

    def test_degrees_of_star(self):
        """Centre of a star has degree n-1."""
        edges = [(0, 1), (0, 2), (0, 3)]
        assert degrees(4, edges) == [3, 1, 1, 1]
        assert max_degree(4, edges) == 3

    def test_empty(self):
        """Empty graph has max degree 0."""
        assert max_degree(0, []) == 0


class TestIndependentEdges:
    """Tests for detecting pairs of edges without a shared endpoint."""

    def test_path_of_four(self):
        """First and last edge of a 4-path are independent."""
        assert has_independent_edges([(0, 1), (1, 2), (2, 3)]) is True

    def test_star_has_none(self):
        """All star edges share the centre."""
        assert has_independent_edges([(0, 1), (0, 2), (0, 3)]) is False

    def test_triangle_has_none(self):
        """Every pair of triangle edges shares a vertex."""
        assert has_independent_edges([(0, 1), (1, 2), (2, 0)]) is False

    def test_empty(self):
        """No edges, no pairs."""
        assert has_independent_edges([]) is False
