"""Tests for the graph model."""

import pytest

from untangle import (
    DuplicateSegmentError,
    EventType,
    FrozenGraphError,
    Graph,
    LineSegmentState,
    SelfConnectionError,
    TopologyError,
    ValidationError,
    VertexState,
)


def create_path_graph(n=3):
    """Create a path 0 - 1 - ... - n-1 along the x axis."""
    graph = Graph()
    for i in range(n):
        graph.add_vertex(100.0 * i, 0.0)
    for i in range(n - 1):
        graph.connect(i, i + 1)
    return graph


class TestConnect:
    """Tests for segment creation and topology violations."""

    def test_connect_creates_symmetric_adjacency(self):
        """Both endpoints map to each other through the same segment."""
        graph = Graph()
        a = graph.add_vertex()
        b = graph.add_vertex()
        segment = graph.connect(a, b)

        assert a.segment_index_to(b.index) == segment.index
        assert b.segment_index_to(a.index) == segment.index
        assert graph.connected_vertices(a) == [b]
        assert graph.connected_vertices(b) == [a]

    def test_connect_to_self_fails(self):
        """Connecting a vertex to itself raises immediately."""
        graph = Graph()
        a = graph.add_vertex()

        with pytest.raises(SelfConnectionError):
            graph.connect(a, a)
        assert graph.segment_count == 0
        assert a.degree == 0

    def test_duplicate_connection_fails(self):
        """A second connection between the same pair fails; the first survives."""
        graph = Graph()
        a = graph.add_vertex()
        b = graph.add_vertex()
        first = graph.connect(a, b)

        with pytest.raises(DuplicateSegmentError):
            graph.connect(a, b)
        with pytest.raises(DuplicateSegmentError):
            graph.connect(b, a)

        assert graph.segments == [first]
        assert graph.segment_between(a, b) is first
        assert a.degree == 1
        assert b.degree == 1

    def test_topology_errors_are_validation_errors(self):
        """Topology errors share the validation hierarchy."""
        assert issubclass(SelfConnectionError, TopologyError)
        assert issubclass(DuplicateSegmentError, TopologyError)
        assert issubclass(TopologyError, ValidationError)
        assert issubclass(ValidationError, ValueError)

    def test_connect_by_index(self):
        """Vertices can be referenced by index."""
        graph = create_path_graph(3)
        assert graph.edges() == [(0, 1), (1, 2)]

    def test_out_of_range_index(self):
        """Unknown vertex indices are rejected."""
        graph = create_path_graph(2)
        with pytest.raises(TopologyError, match="out of bounds"):
            graph.connect(0, 5)

    def test_foreign_vertex(self):
        """Vertices of another graph are rejected."""
        graph = create_path_graph(2)
        other = create_path_graph(3)
        with pytest.raises(TopologyError, match="does not belong"):
            graph.connect(0, other.vertex(2))

    def test_frozen_graph(self):
        """A frozen graph accepts no new vertices or segments."""
        graph = create_path_graph(3)
        graph.freeze()

        with pytest.raises(FrozenGraphError):
            graph.add_vertex()
        with pytest.raises(FrozenGraphError):
            graph.connect(0, 2)
        assert graph.frozen


class TestLineSegment:
    """Tests for line segments."""

    def test_points_are_live(self):
        """Endpoint positions follow vertex moves."""
        graph = create_path_graph(2)
        segment = graph.segment(0)

        graph.vertex(1).set_position((50.0, 75.0))

        assert graph.segment_points(segment) == ((0.0, 0.0), (50.0, 75.0))

    def test_adjacency(self):
        """Segments sharing a vertex are adjacent, others independent."""
        graph = create_path_graph(4)
        s01, s12, s23 = graph.segments

        assert s01.is_adjacent(s12)
        assert s12.is_adjacent(s23)
        assert not s01.is_adjacent(s23)

    def test_other_endpoint(self):
        """other_endpoint returns the opposite vertex."""
        graph = create_path_graph(2)
        segment = graph.segment(0)
        assert segment.other_endpoint(0) == 1
        assert segment.other_endpoint(1) == 0
        with pytest.raises(ValueError):
            segment.other_endpoint(7)

    def test_initial_state(self):
        """New segments start in the normal state."""
        graph = create_path_graph(2)
        assert graph.segment(0).state == LineSegmentState.normal


class TestVertex:
    """Tests for vertex state and notifications."""

    def test_z_index_follows_state(self):
        """Stacking order is derived from the state."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)

        assert vertex.z_index == 0
        vertex.state = VertexState.connected_to_highlighted
        assert vertex.z_index == 1
        vertex.state = VertexState.under_mouse
        assert vertex.z_index == 2
        vertex.state = VertexState.dragged
        assert vertex.z_index == 2

    def test_state_change_notifies(self):
        """State changes report both state and z_index."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)
        events = []
        vertex.on(EventType.changed, events.append)

        vertex.state = VertexState.under_mouse
        vertex.state = VertexState.under_mouse  # unchanged: no event

        assert [e["property"] for e in events] == ["state", "z_index"]
        assert events[0]["source"] is vertex
        assert events[0]["value"] == VertexState.under_mouse

    def test_position_change_notifies(self):
        """Moving a vertex reports the new position."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)
        events = []
        vertex.on("changed", events.append)

        vertex.set_position([3, 4])

        assert vertex.position == (3.0, 4.0)
        assert events[0]["property"] == "position"
        assert events[0]["value"] == (3.0, 4.0)

    def test_invalid_position(self):
        """Malformed or non-finite positions are rejected."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)
        with pytest.raises(ValidationError):
            vertex.set_position((1.0,))
        with pytest.raises(ValidationError):
            vertex.set_position((float("nan"), 0.0))

    def test_default_size(self):
        """Vertices use the graph's vertex size."""
        assert Graph().add_vertex().size == 15.0
        assert Graph(vertex_size=20).add_vertex().size == 20.0


class TestObservable:
    """Tests for event subscription."""

    def test_off_detaches_listener(self):
        """Unsubscribed callbacks are no longer called."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)
        events = []
        vertex.on("changed", events.append)
        vertex.off("changed", events.append)

        vertex.set_position((1, 1))

        assert events == []
        assert vertex.listener_count("changed") == 0

    def test_multiple_listeners(self):
        """Every registered callback receives the event."""
        graph = create_path_graph(1)
        vertex = graph.vertex(0)
        first, second = [], []
        vertex.on("changed", first.append).on("changed", second.append)

        vertex.set_position((1, 1))

        assert len(first) == 1
        assert len(second) == 1

    def test_off_unknown_callback_is_ignored(self):
        """Removing a callback that was never added does nothing."""
        graph = create_path_graph(1)
        graph.vertex(0).off("solved", print)
