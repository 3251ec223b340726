"""
Graph model for Untangle levels.

This module provides the puzzle topology:
- Vertex: Node with position, interaction state and adjacency map
- LineSegment: Straight segment between two distinct vertices
- Graph: Arena owning vertices and segments by stable index

Vertices and segments refer to each other through indices into the owning
Graph, never through object references, so endpoint positions are always
read live from the arena.
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from .base import Observable
from .types import LineSegmentState, Point, PointLike, VertexState
from .validation import (
    DuplicateSegmentError,
    FrozenGraphError,
    SelfConnectionError,
    TopologyError,
    validate_point,
)

DEFAULT_VERTEX_SIZE = 15.0


class Vertex(Observable):
    """
    Graph vertex with position and interaction state.

    Attributes:
        index: Stable index in the owning graph
        x: X coordinate (centre)
        y: Y coordinate (centre)
        size: Display diameter
        state: Interaction state (see VertexState)
    """

    def __init__(
        self,
        index: int,
        x: float = 0.0,
        y: float = 0.0,
        size: float = DEFAULT_VERTEX_SIZE,
    ) -> None:
        super().__init__()
        self._index = index
        self._x = float(x)
        self._y = float(y)
        self._size = float(size)
        self._state = VertexState.normal
        # Connected vertex index -> segment index
        self._segment_map: dict[int, int] = {}

    @property
    def index(self) -> int:
        """Stable index in the owning graph."""
        return self._index

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def position(self) -> Point:
        """Current position as (x, y)."""
        return (self._x, self._y)

    @property
    def size(self) -> float:
        return self._size

    @property
    def state(self) -> VertexState:
        """Current interaction state."""
        return self._state

    @state.setter
    def state(self, value: VertexState) -> None:
        if self._state == value:
            return
        self._state = VertexState(value)
        self._notify_changed("state", self._state)
        self._notify_changed("z_index", self.z_index)

    @property
    def z_index(self) -> int:
        """Display stacking order, derived from the state."""
        if self._state == VertexState.connected_to_highlighted:
            return 1
        if self._state.is_highlighted:
            return 2
        return 0

    @property
    def connected_indices(self) -> list[int]:
        """Indices of the directly connected vertices."""
        return list(self._segment_map.keys())

    @property
    def segment_indices(self) -> list[int]:
        """Indices of the attached segments."""
        return list(self._segment_map.values())

    @property
    def degree(self) -> int:
        """Number of attached segments."""
        return len(self._segment_map)

    def is_connected_to(self, other_index: int) -> bool:
        return other_index in self._segment_map

    def segment_index_to(self, other_index: int) -> Optional[int]:
        """Index of the segment connecting to another vertex, if any."""
        return self._segment_map.get(other_index)

    def set_position(self, position: PointLike) -> None:
        """Move the vertex."""
        self._x, self._y = validate_point(position)
        self._notify_changed("position", (self._x, self._y))

    def _attach(self, other_index: int, segment_index: int) -> None:
        self._segment_map[other_index] = segment_index

    def __repr__(self) -> str:
        return f"Vertex(index={self._index}, x={self._x:.2f}, y={self._y:.2f})"


class LineSegment(Observable):
    """
    Straight segment connecting two distinct vertices.

    Attributes:
        index: Stable index in the owning graph
        vertex1: Index of the first endpoint
        vertex2: Index of the second endpoint
        state: Display state (see LineSegmentState)
    """

    def __init__(self, index: int, vertex1: int, vertex2: int) -> None:
        super().__init__()
        if vertex1 == vertex2:
            raise SelfConnectionError(f"A vertex cannot be connected to itself: {vertex1}")
        self._index = index
        self._vertex1 = vertex1
        self._vertex2 = vertex2
        self._state = LineSegmentState.normal

    @property
    def index(self) -> int:
        return self._index

    @property
    def vertex1(self) -> int:
        return self._vertex1

    @property
    def vertex2(self) -> int:
        return self._vertex2

    @property
    def endpoints(self) -> tuple[int, int]:
        return (self._vertex1, self._vertex2)

    @property
    def state(self) -> LineSegmentState:
        return self._state

    @state.setter
    def state(self, value: LineSegmentState) -> None:
        if self._state == value:
            return
        self._state = LineSegmentState(value)
        self._notify_changed("state", self._state)

    def has_endpoint(self, vertex_index: int) -> bool:
        return vertex_index == self._vertex1 or vertex_index == self._vertex2

    def other_endpoint(self, vertex_index: int) -> int:
        """The endpoint opposite to `vertex_index`."""
        if vertex_index == self._vertex1:
            return self._vertex2
        if vertex_index == self._vertex2:
            return self._vertex1
        raise ValueError(f"Vertex {vertex_index} is not an endpoint of {self!r}")

    def is_adjacent(self, other: LineSegment) -> bool:
        """Check if the segments share an endpoint."""
        return other.has_endpoint(self._vertex1) or other.has_endpoint(self._vertex2)

    def __repr__(self) -> str:
        return f"LineSegment({self._vertex1} -- {self._vertex2})"


VertexRef = Union[Vertex, int]


class Graph:
    """
    Arena of vertices and line segments.

    Membership can only grow, and only until the graph is frozen. A game
    level freezes its graph on construction.

    Example:
        graph = Graph()
        a = graph.add_vertex(0, 0)
        b = graph.add_vertex(100, 0)
        segment = graph.connect(a, b)
        p1, p2 = graph.segment_points(segment)
    """

    def __init__(self, *, vertex_size: float = DEFAULT_VERTEX_SIZE) -> None:
        self._vertices: list[Vertex] = []
        self._segments: list[LineSegment] = []
        self._vertex_size = float(vertex_size)
        self._frozen = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> list[Vertex]:
        """Vertices in index order (a copy of the arena list)."""
        return list(self._vertices)

    @property
    def segments(self) -> list[LineSegment]:
        """Segments in index order (a copy of the arena list)."""
        return list(self._segments)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further vertices or segments."""
        self._frozen = True

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_vertex(self, x: float = 0.0, y: float = 0.0) -> Vertex:
        """Append a new vertex at (x, y)."""
        if self._frozen:
            raise FrozenGraphError("Cannot add a vertex to a frozen graph")
        vertex = Vertex(len(self._vertices), x, y, size=self._vertex_size)
        self._vertices.append(vertex)
        return vertex

    def connect(self, a: VertexRef, b: VertexRef) -> LineSegment:
        """
        Connect two vertices with a new line segment.

        Raises:
            SelfConnectionError: If a and b are the same vertex
            DuplicateSegmentError: If a and b are already connected
            FrozenGraphError: If the graph is frozen
            TopologyError: If either vertex does not belong to this graph
        """
        if self._frozen:
            raise FrozenGraphError("Cannot connect vertices of a frozen graph")

        first = self.vertex(a)
        second = self.vertex(b)

        if first is second:
            raise SelfConnectionError(f"A vertex cannot be connected to itself: {first!r}")
        if first.is_connected_to(second.index):
            raise DuplicateSegmentError(
                f"A line segment between {first!r} and {second!r} already exists"
            )

        segment = LineSegment(len(self._segments), first.index, second.index)
        self._segments.append(segment)
        first._attach(second.index, segment.index)
        second._attach(first.index, segment.index)
        return segment

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def vertex(self, ref: VertexRef) -> Vertex:
        """
        Resolve a vertex or vertex index to a vertex of this graph.

        Raises:
            TopologyError: If the reference does not belong to this graph
        """
        if isinstance(ref, Vertex):
            if not self.contains(ref):
                raise TopologyError(f"{ref!r} does not belong to this graph")
            return ref
        index = int(ref)
        if not 0 <= index < len(self._vertices):
            raise TopologyError(
                f"Vertex index {index} out of bounds [0, {len(self._vertices)})"
            )
        return self._vertices[index]

    def segment(self, index: int) -> LineSegment:
        return self._segments[index]

    def contains(self, vertex: Vertex) -> bool:
        index = vertex.index
        return 0 <= index < len(self._vertices) and self._vertices[index] is vertex

    def contains_segment(self, segment: LineSegment) -> bool:
        index = segment.index
        return 0 <= index < len(self._segments) and self._segments[index] is segment

    def connected_vertices(self, ref: VertexRef) -> list[Vertex]:
        """Vertices directly connected to a vertex."""
        return [self._vertices[i] for i in self.vertex(ref).connected_indices]

    def segments_of(self, ref: VertexRef) -> list[LineSegment]:
        """Segments attached to a vertex."""
        return [self._segments[i] for i in self.vertex(ref).segment_indices]

    def segment_between(self, a: VertexRef, b: VertexRef) -> Optional[LineSegment]:
        """The segment connecting two vertices, if any."""
        index = self.vertex(a).segment_index_to(self.vertex(b).index)
        return None if index is None else self._segments[index]

    def segment_points(self, segment: LineSegment) -> tuple[Point, Point]:
        """Live endpoint positions of a segment."""
        return (
            self._vertices[segment.vertex1].position,
            self._vertices[segment.vertex2].position,
        )

    def edges(self) -> list[tuple[int, int]]:
        """(vertex1, vertex2) index pairs, one per segment."""
        return [segment.endpoints for segment in self._segments]

    def positions(self) -> list[Point]:
        """Current vertex positions, by index."""
        return [vertex.position for vertex in self._vertices]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._vertices)}, segments={len(self._segments)})"


__all__ = [
    "DEFAULT_VERTEX_SIZE",
    "Vertex",
    "LineSegment",
    "Graph",
    "VertexRef",
]
