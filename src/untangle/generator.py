"""
Level generator.

Produces connected graphs with a bounded vertex degree that are guaranteed
to admit a crossing-free straight-line drawing.

Vertices are first assigned slots in a hidden convex order (points on a
circle). A Hamiltonian path through consecutive slots gives a spanning
structure of degree at most 2. Random chords are then added while both
endpoints stay under the degree bound and the chord does not interleave a
chord already accepted. Non-interleaving chords of a convex polygon never
cross, so the hidden layout is a planar drawing of the final graph; it is
returned alongside the topology as a solution witness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from .config import DEFAULT_CONFIG, GameConfig
from .geometry import circular_positions
from .types import Point
from .validation import validate_vertex_bounds

if TYPE_CHECKING:
    from .level import GameLevel

logger = logging.getLogger(__name__)


class GeneratedVertex:
    """
    Generator-side vertex exposing only adjacency.

    Consumed once by GameLevel construction; identity is the object itself.
    """

    __slots__ = ("_connected",)

    def __init__(self) -> None:
        self._connected: list[GeneratedVertex] = []

    @property
    def connected_vertices(self) -> tuple[GeneratedVertex, ...]:
        return tuple(self._connected)

    def _connect(self, other: GeneratedVertex) -> None:
        self._connected.append(other)
        other._connected.append(self)

    def __repr__(self) -> str:
        return f"GeneratedVertex(degree={len(self._connected)})"


@dataclass
class GeneratedGraph:
    """
    Output of LevelGenerator.generate().

    Attributes:
        vertices: Generated vertices
        solution: A crossing-free position for each vertex, by list order
    """

    vertices: list[GeneratedVertex]
    solution: list[Point] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def edges(self) -> list[tuple[int, int]]:
        """(source, target) index pairs into `vertices`, one per edge."""
        positions = {id(vertex): i for i, vertex in enumerate(self.vertices)}
        result: list[tuple[int, int]] = []
        for i, vertex in enumerate(self.vertices):
            for other in vertex.connected_vertices:
                j = positions[id(other)]
                if i < j:
                    result.append((i, j))
        return result


def _interleaved(a: int, b: int, c: int, d: int) -> bool:
    """Check if chords (a, b) and (c, d) of a convex polygon cross (a < b, c < d)."""
    return (a < c < b < d) or (c < a < d < b)


class LevelGenerator:
    """
    Generator of solvable Untangle graphs.

    Example:
        generator = LevelGenerator(6, 8, 4, random_seed=42)
        graph = generator.generate()
        level = generator.generate_level()
    """

    def __init__(
        self,
        min_vertex_count: int,
        max_vertex_count: int,
        max_degree: int,
        *,
        random_seed: Optional[int] = None,
        extra_edge_ratio: float = DEFAULT_CONFIG.extra_edge_ratio,
        config: Optional[GameConfig] = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            min_vertex_count: Smallest number of vertices (inclusive)
            max_vertex_count: Largest number of vertices (inclusive)
            max_degree: Maximum number of segments attached to any vertex
            random_seed: Random seed for reproducible graphs
            extra_edge_ratio: Upper bound on chords added beyond the spanning
                path, as a fraction of the vertex count
            config: Settings passed on to generated levels

        Raises:
            ValidationError: If the bounds admit no connected graph
        """
        (
            self._min_vertex_count,
            self._max_vertex_count,
            self._max_degree,
        ) = validate_vertex_bounds(min_vertex_count, max_vertex_count, max_degree)
        self._extra_edge_ratio = max(0.0, float(extra_edge_ratio))
        self._config = config if config is not None else DEFAULT_CONFIG
        self._random_seed = random_seed
        self._rng = np.random.default_rng(random_seed)

    @classmethod
    def for_level(
        cls,
        level_number: int,
        config: Optional[GameConfig] = None,
        *,
        random_seed: Optional[int] = None,
    ) -> LevelGenerator:
        """Create a generator sized for a level number."""
        config = config if config is not None else DEFAULT_CONFIG
        min_count, max_count = config.vertex_bounds(level_number)
        return cls(
            min_count,
            max_count,
            config.max_degree,
            random_seed=random_seed,
            extra_edge_ratio=config.extra_edge_ratio,
            config=config,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def min_vertex_count(self) -> int:
        return self._min_vertex_count

    @property
    def max_vertex_count(self) -> int:
        return self._max_vertex_count

    @property
    def max_degree(self) -> int:
        return self._max_degree

    @property
    def random_seed(self) -> Optional[int]:
        return self._random_seed

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self) -> GeneratedGraph:
        """
        Generate a connected, degree-bounded, solvable graph.

        Returns:
            GeneratedGraph with the vertices and a crossing-free witness layout
        """
        rng = self._rng
        n = int(rng.integers(self._min_vertex_count, self._max_vertex_count + 1))

        vertices = [GeneratedVertex() for _ in range(n)]
        # slot_owner[k] = vertex placed at slot k of the hidden convex order
        slot_owner = [int(i) for i in rng.permutation(n)]
        degree = [0] * n
        chords: list[tuple[int, int]] = []

        def link(a: int, b: int) -> None:
            vertices[slot_owner[a]]._connect(vertices[slot_owner[b]])
            degree[a] += 1
            degree[b] += 1
            chords.append((a, b))

        # Spanning path along the hull
        for slot in range(n - 1):
            link(slot, slot + 1)

        # Extra chords, including the edge closing the hull
        candidates = [(a, b) for a in range(n) for b in range(a + 2, n)]
        budget = int(round(self._extra_edge_ratio * n))
        added = 0
        for k in rng.permutation(len(candidates)):
            if added >= budget:
                break
            a, b = candidates[int(k)]
            if degree[a] >= self._max_degree or degree[b] >= self._max_degree:
                continue
            if any(_interleaved(a, b, c, d) for c, d in chords):
                continue
            link(a, b)
            added += 1

        slot_positions = circular_positions(n, self._config.layout_radius)
        solution: list[Point] = [(0.0, 0.0)] * n
        for slot, owner in enumerate(slot_owner):
            solution[owner] = slot_positions[slot]

        logger.debug(
            "Generated graph: %d vertices, %d edges (%d extra), max degree %d",
            n,
            len(chords),
            added,
            max(degree, default=0),
        )
        return GeneratedGraph(vertices=vertices, solution=solution)

    def generate_level(self) -> GameLevel:
        """Generate a graph and build a tangled level from it."""
        from .level import GameLevel

        seed = int(self._rng.integers(0, 2**32))
        return GameLevel.from_generated(self.generate(), config=self._config, random_seed=seed)


__all__ = [
    "GeneratedVertex",
    "GeneratedGraph",
    "LevelGenerator",
]
