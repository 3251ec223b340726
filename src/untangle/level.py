"""
Game level engine.

A GameLevel owns one frozen graph and keeps an index of which line segments
currently cross which. It exposes the interaction protocol used by a UI:

- set_hovered_vertex(): pointer enters or leaves a vertex
- start_drag() / drag_to() / finish_drag(): move a vertex

Crossings are computed from scratch once, when the level is built, and then
updated incrementally at the end of every drag: moving one vertex can only
change the crossing status of the segments attached to it. When the last
crossing disappears the level fires EventType.solved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

import numpy as np

from .base import Observable
from .config import DEFAULT_CONFIG, GameConfig
from .geometry import circular_positions, segments_intersect
from .graph import Graph, LineSegment, Vertex
from .preprocessing import has_independent_edges
from .types import EventType, LineSegmentState, Point, PointLike, VertexState
from .validation import InteractionError, TopologyError, ValidationError

if TYPE_CHECKING:
    from .generator import GeneratedGraph, GeneratedVertex
    from .saves import SavedVertex

logger = logging.getLogger(__name__)


class GameLevel(Observable):
    """
    A single Untangle level.

    Example:
        level = LevelGenerator(6, 8, 4).generate_level()
        level.on("solved", lambda event: print("solved!"))

        vertex = level.vertices[0]
        level.set_hovered_vertex(vertex)
        level.start_drag(vertex)
        level.drag_to((120.0, -40.0))
        level.finish_drag()
        print(level.intersection_count)
    """

    def __init__(
        self,
        graph: Graph,
        *,
        reset_positions: bool = False,
        config: Optional[GameConfig] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a level around an existing graph.

        The graph is frozen: no vertices or segments can be added afterwards.

        Args:
            graph: Puzzle topology (and positions, unless reset)
            reset_positions: If True, shuffle the vertices onto a circle until
                at least one crossing exists. If False, keep positions as given.
            config: Layout settings (radius)
            random_seed: Random seed for reproducible shuffles

        Raises:
            ValidationError: If reset_positions is requested for a graph that
                can never be tangled (no two independent segments)
        """
        super().__init__()
        graph.freeze()
        self._graph = graph
        self._config = config if config is not None else DEFAULT_CONFIG
        self._rng = np.random.default_rng(random_seed)
        self._intersections: dict[int, set[int]] = {
            segment.index: set() for segment in graph.segments
        }
        self._dragged_vertex: Optional[Vertex] = None
        self._hovered_vertex: Optional[Vertex] = None
        self._intersection_count = 0
        self._solved_signalled = False

        if reset_positions:
            if not has_independent_edges(graph.edges()):
                raise ValidationError(
                    "Graph has no pair of independent segments and can never be tangled"
                )
            attempts = 0
            while self._intersection_count == 0:
                self._reset_vertex_positions()
                self._calculate_all_intersections()
                attempts += 1
            logger.debug(
                "Shuffled level: %d vertices, %d intersections after %d attempt(s)",
                graph.vertex_count,
                self._intersection_count,
                attempts,
            )
        else:
            self._calculate_all_intersections()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_generated(
        cls,
        generated: Union[GeneratedGraph, Sequence[GeneratedVertex]],
        *,
        config: Optional[GameConfig] = None,
        random_seed: Optional[int] = None,
    ) -> GameLevel:
        """
        Build a tangled level from generator output.

        Args:
            generated: A GeneratedGraph or a sequence of generated vertices
            config: Layout settings
            random_seed: Random seed for the initial shuffle
        """
        config = config if config is not None else DEFAULT_CONFIG
        generated_vertices = getattr(generated, "vertices", generated)

        graph = Graph(vertex_size=config.vertex_size)
        mapping: dict[int, Vertex] = {}
        for generated_vertex in generated_vertices:
            vertex = graph.add_vertex()
            mapping[id(generated_vertex)] = vertex
            for other in generated_vertex.connected_vertices:
                target = mapping.get(id(other))
                # Not mapped yet: the segment is added when `other` comes up
                if target is not None:
                    graph.connect(vertex, target)

        return cls(graph, reset_positions=True, config=config, random_seed=random_seed)

    @classmethod
    def from_saved(
        cls,
        saved_vertices: Sequence[SavedVertex],
        *,
        config: Optional[GameConfig] = None,
    ) -> GameLevel:
        """
        Rebuild a level from saved vertices, keeping their positions exactly.

        Connections are listed on both endpoints; each segment is created once,
        when its second endpoint is read.

        Raises:
            TopologyError: If ids repeat, a vertex lists itself, or a
                connection is listed twice by the same vertex
        """
        config = config if config is not None else DEFAULT_CONFIG

        graph = Graph(vertex_size=config.vertex_size)
        mapping: dict[int, Vertex] = {}
        for saved_vertex in saved_vertices:
            if saved_vertex.id in mapping:
                raise TopologyError(f"Duplicate saved vertex id {saved_vertex.id}")
            vertex = graph.add_vertex(saved_vertex.x, saved_vertex.y)
            mapping[saved_vertex.id] = vertex
            for connected_id in saved_vertex.connected_vertex_ids:
                target = mapping.get(connected_id)
                if target is not None:
                    graph.connect(vertex, target)

        return cls(graph, reset_positions=False, config=config)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> Graph:
        """The level's frozen graph."""
        return self._graph

    @property
    def vertices(self) -> list[Vertex]:
        return self._graph.vertices

    @property
    def segments(self) -> list[LineSegment]:
        return self._graph.segments

    @property
    def game_objects(self) -> list[Any]:
        """All vertices followed by all segments."""
        objects: list[Any] = self._graph.vertices
        objects.extend(self._graph.segments)
        return objects

    @property
    def vertex_count(self) -> int:
        return self._graph.vertex_count

    @property
    def segment_count(self) -> int:
        return self._graph.segment_count

    @property
    def intersection_count(self) -> int:
        """Number of crossing segment pairs."""
        return self._intersection_count

    @property
    def is_solved(self) -> bool:
        return self._intersection_count == 0

    @property
    def is_dragging(self) -> bool:
        return self._dragged_vertex is not None

    @property
    def dragged_vertex(self) -> Optional[Vertex]:
        return self._dragged_vertex

    @property
    def hovered_vertex(self) -> Optional[Vertex]:
        return self._hovered_vertex

    def intersections_of(self, segment: LineSegment) -> list[LineSegment]:
        """Segments currently recorded as crossing `segment`."""
        return [self._graph.segment(i) for i in sorted(self._intersections[segment.index])]

    def intersection_index(self) -> dict[int, frozenset[int]]:
        """Snapshot of the crossing index, keyed by segment index."""
        return {index: frozenset(crossing) for index, crossing in self._intersections.items()}

    def segment_points(self, segment: LineSegment) -> tuple[Point, Point]:
        """Live endpoint positions of a segment."""
        return self._graph.segment_points(segment)

    def connected_vertices(self, vertex: Vertex) -> list[Vertex]:
        return self._graph.connected_vertices(vertex)

    def segments_of(self, vertex: Vertex) -> list[LineSegment]:
        return self._graph.segments_of(vertex)

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def set_hovered_vertex(self, vertex: Optional[Vertex]) -> None:
        """
        Record the vertex under the pointer (None when over empty space).

        While a drag is in progress only the record changes; vertex states are
        reconciled when the drag finishes.
        """
        if vertex is not None:
            self._require_vertex(vertex)
        if self._hovered_vertex is vertex:
            return

        if self._hovered_vertex is not None and not self.is_dragging:
            self._change_vertex_state(self._hovered_vertex, VertexState.normal)

        self._hovered_vertex = vertex

        if vertex is not None and not self.is_dragging:
            self._change_vertex_state(vertex, VertexState.under_mouse)

        self._notify_changed("hovered_vertex", vertex)

    def start_drag(self, vertex: Vertex) -> None:
        """Start dragging a vertex."""
        self._require_vertex(vertex)
        if self._dragged_vertex is not None:
            raise InteractionError(f"{self._dragged_vertex!r} is already being dragged")

        self._dragged_vertex = vertex
        self._change_vertex_state(vertex, VertexState.dragged)
        self._notify_changed("dragged_vertex", vertex)

    def drag_to(self, position: PointLike) -> None:
        """
        Move the dragged vertex.

        Crossings are not recomputed here; segment positions follow the vertex
        live, the crossing index catches up in finish_drag().
        """
        if self._dragged_vertex is None:
            raise InteractionError("No vertex is being dragged")
        self._dragged_vertex.set_position(position)

    def finish_drag(self) -> None:
        """Drop the dragged vertex and update crossings for its segments."""
        vertex = self._dragged_vertex
        if vertex is None:
            raise InteractionError("No vertex is being dragged")

        self._change_vertex_state(vertex, VertexState.normal)
        self._recalculate_intersections_for_vertex(vertex)
        self._dragged_vertex = None
        self._sync_hover()
        self._notify_changed("dragged_vertex", None)

        if self._intersection_count == 0:
            self._on_solved()

    # -------------------------------------------------------------------------
    # Intersections
    # -------------------------------------------------------------------------

    def _reset_vertex_positions(self) -> None:
        """Place the vertices on a circle in random order."""
        vertices = self._graph.vertices
        slots = circular_positions(len(vertices), self._config.layout_radius)
        for slot, vertex_index in zip(slots, self._rng.permutation(len(vertices))):
            vertices[int(vertex_index)].set_position(slot)

    def _calculate_all_intersections(self) -> None:
        """Rebuild the crossing index from scratch."""
        for crossing in self._intersections.values():
            crossing.clear()

        segments = self._graph.segments
        positions = self._graph.positions()
        n_segments = len(segments)
        count = 0

        for i in range(n_segments):
            segment = segments[i]
            p1 = positions[segment.vertex1]
            p2 = positions[segment.vertex2]
            for j in range(i + 1, n_segments):
                other = segments[j]
                if segment.is_adjacent(other):
                    continue
                if segments_intersect(p1, p2, positions[other.vertex1], positions[other.vertex2]):
                    self._intersections[i].add(j)
                    self._intersections[j].add(i)
                    count += 1

        for segment in segments:
            segment.state = self._segment_state(segment)

        self._set_intersection_count(count)
        logger.debug("Full recompute: %d segments, %d intersections", n_segments, count)

    def _recalculate_intersections_for_vertex(self, vertex: Vertex) -> None:
        """Update the crossing index for the segments attached to a vertex."""
        segments = self._graph.segments
        positions = self._graph.positions()
        count = self._intersection_count
        touched: set[int] = set()

        for segment in self._graph.segments_of(vertex):
            crossing = self._intersections[segment.index]
            p1 = positions[segment.vertex1]
            p2 = positions[segment.vertex2]
            for other in segments:
                if other is segment or segment.is_adjacent(other):
                    continue
                crosses = segments_intersect(
                    p1, p2, positions[other.vertex1], positions[other.vertex2]
                )
                known = other.index in crossing
                if crosses and not known:
                    crossing.add(other.index)
                    self._intersections[other.index].add(segment.index)
                    count += 1
                elif known and not crosses:
                    crossing.discard(other.index)
                    self._intersections[other.index].discard(segment.index)
                    count -= 1
                else:
                    continue
                touched.add(segment.index)
                touched.add(other.index)

        for index in touched:
            segment = self._graph.segment(index)
            segment.state = self._segment_state(segment)

        logger.debug(
            "Incremental recompute for %r: %d -> %d intersections",
            vertex,
            self._intersection_count,
            count,
        )
        self._set_intersection_count(count)

    def _set_intersection_count(self, value: int) -> None:
        if self._intersection_count == value:
            return
        self._intersection_count = value
        self._notify_changed("intersection_count", value)

    # -------------------------------------------------------------------------
    # Vertex state machine
    # -------------------------------------------------------------------------

    def _change_vertex_state(self, vertex: Vertex, state: VertexState) -> None:
        """
        Move a vertex to a new state, spotlighting or releasing its neighbourhood.

        Entering under_mouse/dragged highlights the attached segments and marks
        neighbours connected_to_highlighted. Leaving those states restores the
        neighbours and recolours the segments from the crossing index.
        """
        old_state = vertex.state
        if state == VertexState.normal:
            state = self._resting_state(vertex)
        vertex.state = state

        if state.is_highlighted:
            if not old_state.is_highlighted:
                for neighbor in self._graph.connected_vertices(vertex):
                    if not neighbor.state.is_highlighted:
                        neighbor.state = VertexState.connected_to_highlighted
                for segment in self._graph.segments_of(vertex):
                    segment.state = LineSegmentState.highlighted
        elif old_state.is_highlighted:
            for neighbor in self._graph.connected_vertices(vertex):
                if not neighbor.state.is_highlighted:
                    neighbor.state = self._resting_state(neighbor)
            for segment in self._graph.segments_of(vertex):
                segment.state = self._segment_state(segment)

    def _resting_state(self, vertex: Vertex) -> VertexState:
        """State of a vertex that is neither hovered nor dragged."""
        for neighbor in self._graph.connected_vertices(vertex):
            if neighbor.state.is_highlighted:
                return VertexState.connected_to_highlighted
        return VertexState.normal

    def _segment_state(self, segment: LineSegment) -> LineSegmentState:
        """Display state derived from endpoints and the crossing index."""
        graph = self._graph
        if (
            graph.vertex(segment.vertex1).state.is_highlighted
            or graph.vertex(segment.vertex2).state.is_highlighted
        ):
            return LineSegmentState.highlighted
        if self._intersections[segment.index]:
            return LineSegmentState.intersected
        return LineSegmentState.normal

    def _sync_hover(self) -> None:
        """Apply hover changes recorded while a drag was in progress."""
        for vertex in self._graph:
            if vertex.state == VertexState.under_mouse and vertex is not self._hovered_vertex:
                self._change_vertex_state(vertex, VertexState.normal)
        if self._hovered_vertex is not None:
            self._change_vertex_state(self._hovered_vertex, VertexState.under_mouse)

    def _require_vertex(self, vertex: Vertex) -> None:
        if not isinstance(vertex, Vertex) or not self._graph.contains(vertex):
            raise InteractionError(f"{vertex!r} does not belong to this level")

    def _on_solved(self) -> None:
        if self._solved_signalled:
            return
        self._solved_signalled = True
        logger.info("Level solved: %d vertices, %d segments", self.vertex_count, self.segment_count)
        self.trigger({"type": EventType.solved, "source": self})

    def __repr__(self) -> str:
        return (
            f"GameLevel(vertices={self.vertex_count}, segments={self.segment_count}, "
            f"intersections={self._intersection_count})"
        )


__all__ = ["GameLevel"]
