"""
Game controller.

Glue between a UI and the engine: owns the current Game, translates pointer
events into level interaction calls, and performs new/save/load while
tracking whether the player has unsaved progress. It has no UI of its own;
dialogs and messages stay with the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .base import Observable
from .config import GameConfig
from .game import Game
from .graph import Vertex
from .saves import load_game, save_game
from .types import Event, EventType, PointLike

logger = logging.getLogger(__name__)

TITLE_FORMAT = "Untangle - Level {level_number}"


class GameController(Observable):
    """
    Controller for one application window.

    Example:
        controller = GameController()
        controller.handle_vertex_enter(vertex)
        controller.handle_vertex_down(vertex)
        controller.handle_pointer_move((10.0, 20.0), button_pressed=True)
        controller.handle_pointer_up()
        if controller.needs_save_prompt:
            controller.save_game("progress.usg")
    """

    def __init__(
        self,
        game: Optional[Game] = None,
        *,
        config: Optional[GameConfig] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        self._config = config
        self._random_seed = random_seed
        self._game: Optional[Game] = None
        self._needs_save_prompt = False
        self.game = game if game is not None else self._new_game()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def game(self) -> Game:
        assert self._game is not None
        return self._game

    @game.setter
    def game(self, value: Game) -> None:
        if self._game is value:
            return
        if self._game is not None:
            self._game.off(EventType.changed, self._on_game_changed)
        self._game = value
        self._game.on(EventType.changed, self._on_game_changed)
        self._notify_changed("game", value)
        self._notify_changed("title", self.title)

    @property
    def title(self) -> str:
        return TITLE_FORMAT.format(level_number=self.game.level_number)

    @property
    def needs_save_prompt(self) -> bool:
        """Whether the player has dragged a vertex since the last new/save/load."""
        return self._needs_save_prompt

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def new_game(self) -> Game:
        """Replace the current game with a fresh one at level 1."""
        self.game = self._new_game()
        self._needs_save_prompt = False
        return self.game

    def save_game(self, path: Union[str, Path]) -> Path:
        """Save the current game. Errors propagate to the caller."""
        written = save_game(self.game, path)
        self._needs_save_prompt = False
        return written

    def load_game(self, path: Union[str, Path]) -> Game:
        """
        Load a game, replacing the current one only if loading succeeds.

        Raises:
            OSError, SaveError: The current game is left untouched
        """
        game = load_game(path, config=self._config)
        self.game = game
        self._needs_save_prompt = False
        return game

    # -------------------------------------------------------------------------
    # Pointer handlers
    # -------------------------------------------------------------------------

    def handle_pointer_move(self, position: PointLike, button_pressed: bool) -> None:
        """Drag while the button is held; a release noticed mid-move ends the drag."""
        level = self.game.level
        if not level.is_dragging:
            return
        self._needs_save_prompt = True
        if button_pressed:
            level.drag_to(position)
        else:
            level.finish_drag()

    def handle_pointer_up(self) -> None:
        level = self.game.level
        if level.is_dragging:
            level.finish_drag()

    def handle_vertex_enter(self, vertex: Vertex) -> None:
        self.game.level.set_hovered_vertex(vertex)

    def handle_vertex_leave(self, vertex: Vertex) -> None:
        self.game.level.set_hovered_vertex(None)

    def handle_vertex_down(self, vertex: Vertex) -> None:
        self.game.level.start_drag(vertex)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _new_game(self) -> Game:
        return Game.new(1, config=self._config, random_seed=self._random_seed)

    def _on_game_changed(self, event: Optional[Event]) -> None:
        if event is not None and event.get("property") == "level_number":
            self._notify_changed("title", self.title)


__all__ = ["GameController", "TITLE_FORMAT"]
