"""
Geometry utilities.

Provides the predicates and layouts the engine is built on:
- Segment crossing: proper (transversal) intersection of two segments
- Crossing count: number of crossing segment pairs in a straight-line drawing
- Circular positions: points evenly spaced on a circle

All predicates use exact orientation tests, never distance thresholds.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from .types import Point


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """
    Check if open segment (p1,p2) properly crosses open segment (p3,p4).

    Touching at an endpoint and collinear overlap are not crossings: each
    segment must have its endpoints strictly on opposite sides of the
    other's supporting line.

    Time Complexity: O(1)
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    x4, y4 = p4

    # Sides of p1 and p2 relative to line (p3, p4)
    d1 = (x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)
    d2 = (x4 - x3) * (y2 - y3) - (y4 - y3) * (x2 - x3)
    if not ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)):
        return False

    # Sides of p3 and p4 relative to line (p1, p2)
    d3 = (x2 - x1) * (y3 - y1) - (y2 - y1) * (x3 - x1)
    d4 = (x2 - x1) * (y4 - y1) - (y2 - y1) * (x4 - x1)
    return (d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)


def count_crossings(
    positions: Sequence[Point],
    edges: Sequence[Tuple[int, int]],
) -> int:
    """
    Count the number of edge crossings in a straight-line drawing.

    Two edges cross if their segments properly intersect. Edges that share
    an endpoint are never tested.

    Args:
        positions: Position of each vertex, by index
        edges: (source, target) vertex index pairs

    Returns:
        Number of crossing edge pairs

    Time Complexity: O(m^2) where m = number of edges
    """
    crossings = 0
    n_edges = len(edges)

    for i in range(n_edges):
        s1, t1 = edges[i]
        for j in range(i + 1, n_edges):
            s2, t2 = edges[j]
            # Skip if edges share an endpoint
            if s1 == s2 or s1 == t2 or t1 == s2 or t1 == t2:
                continue
            if segments_intersect(positions[s1], positions[t1], positions[s2], positions[t2]):
                crossings += 1

    return crossings


def circular_positions(
    count: int,
    radius: float,
    start_angle: float = 0.0,
) -> list[Point]:
    """
    Place `count` points evenly on a circle centred on the origin.

    The y axis points down (screen coordinates), so increasing angles run
    counter-clockwise on screen.

    Args:
        count: Number of points
        radius: Circle radius
        start_angle: Angle of the first point in radians

    Returns:
        List of (x, y) tuples
    """
    if count <= 0:
        return []

    angles = start_angle + 2 * math.pi * np.arange(count, dtype=np.float64) / count
    xs = np.cos(angles) * radius
    ys = -np.sin(angles) * radius
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


__all__ = [
    "segments_intersect",
    "count_crossings",
    "circular_positions",
]
