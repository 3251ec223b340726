"""
Game session.

A Game owns the current level and the level number. When the level is
solved the number advances and a larger level replaces the old one.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .base import Observable
from .config import DEFAULT_CONFIG, GameConfig
from .generator import LevelGenerator
from .level import GameLevel
from .types import Event, EventType

logger = logging.getLogger(__name__)


class Game(Observable):
    """
    A game of Untangle: a sequence of levels of growing size.

    Example:
        game = Game.new(1)
        game.on("changed", lambda event: print(event["property"], event["value"]))
        # ... the player solves game.level ...
        print(game.level_number)  # 2
    """

    def __init__(
        self,
        level: Optional[GameLevel] = None,
        level_number: int = 1,
        *,
        config: Optional[GameConfig] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a game session.

        Args:
            level: Current level. If None, one is generated for level_number.
            level_number: Current level number
            config: Level sizing and layout settings
            random_seed: Random seed for reproducible level sequences
        """
        super().__init__()
        self._config = config if config is not None else DEFAULT_CONFIG
        self._rng = np.random.default_rng(random_seed)
        self._level: Optional[GameLevel] = None
        self._level_number = int(level_number)

        if level is None:
            self._generate_current_level()
        else:
            self.level = level

    @classmethod
    def new(
        cls,
        start_level_number: int = 1,
        *,
        config: Optional[GameConfig] = None,
        random_seed: Optional[int] = None,
    ) -> Game:
        """Start a new game at a given level number."""
        return cls(None, start_level_number, config=config, random_seed=random_seed)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def level_number(self) -> int:
        return self._level_number

    @level_number.setter
    def level_number(self, value: int) -> None:
        value = int(value)
        if self._level_number == value:
            return
        self._level_number = value
        self._notify_changed("level_number", value)

    @property
    def level(self) -> GameLevel:
        """The current level."""
        assert self._level is not None
        return self._level

    @level.setter
    def level(self, value: GameLevel) -> None:
        """Replace the current level, moving the solved listener over."""
        if self._level is value:
            return
        if self._level is not None:
            self._level.off(EventType.solved, self._on_level_solved)
        self._level = value
        self._level.on(EventType.solved, self._on_level_solved)
        self._notify_changed("level", value)

    # -------------------------------------------------------------------------
    # Level sequence
    # -------------------------------------------------------------------------

    def _generate_current_level(self) -> None:
        seed = int(self._rng.integers(0, 2**32))
        generator = LevelGenerator.for_level(
            self._level_number, self._config, random_seed=seed
        )
        self.level = generator.generate_level()
        logger.info(
            "Level %d: %d vertices, %d segments, %d intersections",
            self._level_number,
            self.level.vertex_count,
            self.level.segment_count,
            self.level.intersection_count,
        )

    def _on_level_solved(self, event: Optional[Event]) -> None:
        logger.info("Level %d solved", self._level_number)
        self.level_number += 1
        self._generate_current_level()

    def __repr__(self) -> str:
        return f"Game(level_number={self._level_number}, level={self._level!r})"


__all__ = ["Game"]
