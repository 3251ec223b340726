"""
Common types for the Untangle puzzle engine.

This module provides the fundamental types shared by every component:
- EventType: Notifications emitted by observable objects
- Event: Event payload for callbacks
- VertexState: Interaction state of a vertex
- LineSegmentState: Display state of a line segment
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Optional, Sequence, TypedDict, Union


class EventType(IntEnum):
    """
    Engine notifications.

    - changed: A property of the source object has been committed
    - solved: A game level has reached zero intersections
    """

    changed = 0
    solved = 1


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    source: Any
    property: str
    value: Any


class VertexState(IntEnum):
    """
    Interaction state of a vertex.

    - normal: Not involved in any interaction
    - under_mouse: The pointer is hovering over the vertex
    - dragged: The vertex is being dragged
    - connected_to_highlighted: A neighbour is hovered or dragged
    """

    normal = 0
    under_mouse = 1
    dragged = 2
    connected_to_highlighted = 3

    @property
    def is_highlighted(self) -> bool:
        """Whether the vertex itself is the focus of an interaction."""
        return self in (VertexState.under_mouse, VertexState.dragged)


class LineSegmentState(IntEnum):
    """
    Display state of a line segment.

    - normal: Crosses no other segment
    - intersected: Crosses at least one other segment
    - highlighted: Attached to a hovered or dragged vertex
    """

    normal = 0
    intersected = 1
    highlighted = 2


# Type aliases
Point = tuple[float, float]
"""A 2D position as (x, y)."""

PointLike = Union[Point, Sequence[float]]
"""Input type for positions: (x, y) tuple, list, or sequence."""

EventCallback = Callable[[Optional[Event]], None]
"""Callback signature for event listeners."""


__all__ = [
    "EventType",
    "Event",
    "VertexState",
    "LineSegmentState",
    "Point",
    "PointLike",
    "EventCallback",
]
