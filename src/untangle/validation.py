"""
Error types and input validation for the Untangle engine.

Provides the exception hierarchy shared by the graph model, generator and
level engine, plus centralized validation functions for generator bounds and
positions. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Sequence


class ValidationError(ValueError):
    """Base exception for engine validation errors."""

    pass


class TopologyError(ValidationError):
    """Raised when an operation would break the graph topology."""

    pass


class SelfConnectionError(TopologyError):
    """Raised when a vertex is connected to itself."""

    pass


class DuplicateSegmentError(TopologyError):
    """Raised when two vertices are connected a second time."""

    pass


class FrozenGraphError(TopologyError):
    """Raised when a frozen graph is asked to add vertices or segments."""

    pass


class InteractionError(RuntimeError):
    """Raised when an interaction call violates its preconditions."""

    pass


def validate_vertex_bounds(
    min_vertex_count: int,
    max_vertex_count: int,
    max_degree: int,
) -> tuple[int, int, int]:
    """
    Validate level generator bounds.

    Args:
        min_vertex_count: Smallest number of vertices to generate
        max_vertex_count: Largest number of vertices to generate
        max_degree: Maximum number of segments attached to any vertex

    Returns:
        Validated (min_vertex_count, max_vertex_count, max_degree) tuple

    Raises:
        ValidationError: If the bounds are invalid or admit no connected graph
    """
    min_count, max_count, degree = int(min_vertex_count), int(max_vertex_count), int(max_degree)

    if min_count < 1:
        raise ValidationError(f"min_vertex_count must be >= 1, got {min_count}")
    if max_count < min_count:
        raise ValidationError(
            f"max_vertex_count must be >= min_vertex_count, got {max_count} < {min_count}"
        )
    if degree < 1:
        raise ValidationError(f"max_degree must be >= 1, got {degree}")
    if degree < 2 and max_count > 2:
        raise ValidationError(
            f"max_degree {degree} cannot connect more than 2 vertices, "
            f"got max_vertex_count {max_count}"
        )

    return min_count, max_count, degree


def validate_point(position: Sequence[float]) -> tuple[float, float]:
    """
    Validate a 2D position.

    Args:
        position: (x, y) sequence

    Returns:
        Validated (x, y) tuple of floats

    Raises:
        ValidationError: If the position is malformed or not finite
    """
    if len(position) != 2:
        raise ValidationError(f"Position must have 2 elements [x, y], got {len(position)}")

    x, y = float(position[0]), float(position[1])

    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValidationError(f"Position must be finite, got ({x}, {y})")

    return x, y


def validate_positive(name: str, value: Any) -> float:
    """
    Validate that a numeric setting is strictly positive.

    Raises:
        ValidationError: If value <= 0
    """
    number = float(value)
    if number <= 0:
        raise ValidationError(f"{name} must be positive, got {number}")
    return number


__all__ = [
    "ValidationError",
    "TopologyError",
    "SelfConnectionError",
    "DuplicateSegmentError",
    "FrozenGraphError",
    "InteractionError",
    "validate_vertex_bounds",
    "validate_point",
    "validate_positive",
]
