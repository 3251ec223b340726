"""Tunable settings for levels and game sessions."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import ValidationError, validate_positive


@dataclass
class GameConfig:
    # Layout
    layout_radius: float = 300.0
    vertex_size: float = 15.0

    # Level sizing: vertex bounds grow by vertices_per_level each level
    base_min_vertex_count: int = 4
    base_max_vertex_count: int = 6
    vertices_per_level: int = 2
    max_degree: int = 4

    # Extra chords added on top of the spanning path, as a fraction of N
    extra_edge_ratio: float = 0.75

    def __post_init__(self) -> None:
        validate_positive("layout_radius", self.layout_radius)
        validate_positive("vertex_size", self.vertex_size)
        if self.vertices_per_level < 0:
            raise ValidationError(
                f"vertices_per_level must be >= 0, got {self.vertices_per_level}"
            )
        if self.extra_edge_ratio < 0:
            raise ValidationError(f"extra_edge_ratio must be >= 0, got {self.extra_edge_ratio}")

    def vertex_bounds(self, level_number: int) -> tuple[int, int]:
        """Inclusive (min, max) vertex counts for a level number."""
        growth = self.vertices_per_level * level_number
        return self.base_min_vertex_count + growth, self.base_max_vertex_count + growth


DEFAULT_CONFIG = GameConfig()


__all__ = ["GameConfig", "DEFAULT_CONFIG"]
