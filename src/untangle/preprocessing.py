"""
Graph analysis utilities.

This module provides reusable functions for inspecting graph topology:
- Adjacency list construction
- Connected component detection
- Degree statistics

They are used by the level generator to check its postconditions and can
also be used directly on any (vertex count, edge list) description.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence


def build_adjacency(n: int, edges: Sequence[tuple[int, int]]) -> list[list[int]]:
    """
    Build an undirected adjacency list.

    Invalid indices (out of bounds) are silently skipped.

    Args:
        n: Number of vertices
        edges: (source, target) vertex index pairs

    Returns:
        For each vertex, the list of its neighbours
    """
    adj: list[list[int]] = [[] for _ in range(n)]
    for src, tgt in edges:
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append(tgt)
            adj[tgt].append(src)
    return adj


# =============================================================================
# Connected Components
# =============================================================================


def connected_components(n: int, edges: Sequence[tuple[int, int]]) -> list[list[int]]:
    """
    Find connected components in an undirected graph.

    Args:
        n: Number of vertices
        edges: (source, target) vertex index pairs

    Returns:
        List of components, where each component is a list of vertex indices.

    Example:
        >>> components = connected_components(4, [(0, 1), (2, 3)])
        >>> len(components)
        2
    """
    adj = build_adjacency(n, edges)

    visited = [False] * n
    components: list[list[int]] = []

    for start in range(n):
        if visited[start]:
            continue

        # BFS to find all vertices in this component
        component: list[int] = []
        queue: deque[int] = deque([start])
        visited[start] = True

        while queue:
            vertex = queue.popleft()
            component.append(vertex)

            for neighbor in adj[vertex]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)

        components.append(component)

    return components


def is_connected(n: int, edges: Sequence[tuple[int, int]]) -> bool:
    """
    Check if a graph is connected.

    Graphs with zero or one vertex are connected.
    """
    if n <= 1:
        return True
    return len(connected_components(n, edges)) == 1


# =============================================================================
# Degree Statistics
# =============================================================================


def degrees(n: int, edges: Sequence[tuple[int, int]]) -> list[int]:
    """Number of edges attached to each vertex."""
    return [len(neighbors) for neighbors in build_adjacency(n, edges)]


def max_degree(n: int, edges: Sequence[tuple[int, int]]) -> int:
    """Largest vertex degree, 0 for an empty graph."""
    return max(degrees(n, edges), default=0)


def has_independent_edges(edges: Sequence[tuple[int, int]]) -> bool:
    """
    Check if at least two edges share no endpoint.

    Only such a pair can ever cross in a straight-line drawing, so a graph
    without one (a star or a triangle) can never be tangled.
    """
    n_edges = len(edges)
    for i in range(n_edges):
        s1, t1 = edges[i]
        for j in range(i + 1, n_edges):
            s2, t2 = edges[j]
            if s1 != s2 and s1 != t2 and t1 != s2 and t1 != t2:
                return True
    return False


__all__ = [
    "build_adjacency",
    "connected_components",
    "is_connected",
    "degrees",
    "max_degree",
    "has_independent_edges",
]
