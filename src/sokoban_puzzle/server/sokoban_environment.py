# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Environment Implementation.

Wraps a puzzle session behind the reset()/step()/state interface served
over HTTP. Each step carries one command: a move, a computer player move,
undo, clear, save, load or next.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union
from uuid import uuid4

from openenv.core.env_server.interfaces import Environment

from ..exceptions import MalformedEntry, NothingToUndo
from ..models import (
    Direction,
    PuzzleStatus,
    SokobanAction,
    SokobanObservation,
    SokobanState,
    is_bare_file_name,
)
from .levels import LevelSource, next_level, resolve_bundled, resolve_level
from .players import Player, RandomPlayer
from .session import PuzzleSession

logger = logging.getLogger(__name__)

LevelRef = Union[LevelSource, int, str, Path, None]

DEFAULT_SAVE_FILE = "sokoban_save.txt"


class SokobanEnvironment(Environment):
    """
    Sokoban puzzle environment.

    The goal is to push all boxes onto targets. The actor can move in
    four directions. If there's a box in the direction of movement and
    an empty cell or target behind it, the box will be pushed.

    Save files are plain file names resolved inside save_dir, so clients
    cannot reach files elsewhere on the server.

    Example:
        >>> env = SokobanEnvironment(level=1)
        >>> obs = env.reset()
        >>> print(f"Board size: {obs.board_shape}")
        >>> print(f"Number of boxes: {obs.num_boxes}")
        >>>
        >>> obs = env.step(SokobanAction(command="move", direction="EAST"))
        >>> print(f"Boxes on targets: {obs.boxes_on_goals}/{obs.num_targets}")
        >>> print(obs.message)
    """

    def __init__(
        self,
        level: LevelRef = None,
        save_dir: Union[str, Path] = ".",
        save_file: str = DEFAULT_SAVE_FILE,
        strict_load: bool = False,
        seed: Optional[int] = None,
        player: Optional[Player] = None,
    ):
        """
        Initialize the Sokoban environment.

        Args:
            level: Bundled level number, level file path or LevelSource
                   (default: first bundled level)
            save_dir: Directory holding save files
            save_file: Save file name used when an action names none
            strict_load: Reject unknown save-file tokens on load
            seed: Seed for the default random computer player
            player: Computer player for "player" commands (default: RandomPlayer)

        Raises:
            ValueError: If save_file is not a plain file name
        """
        super().__init__()
        if not is_bare_file_name(save_file):
            raise ValueError(f"Save file must be a plain file name, got {save_file!r}")
        self.level = resolve_level(level)
        self.save_dir = Path(save_dir)
        self.save_file = save_file
        self.strict_load = strict_load
        self.player = player or RandomPlayer(seed)

        self._state = SokobanState(episode_id=str(uuid4()), step_count=0)
        self._session = PuzzleSession(self.level, strict_load=strict_load)

        logger.info(
            f"SokobanEnvironment initialized with level={self.level.name}, "
            f"save_dir={self.save_dir}, strict_load={strict_load}"
        )

    @property
    def session(self) -> PuzzleSession:
        return self._session

    def reset(
        self,
        seed: Optional[int] = None,
        episode_id: Optional[str] = None,
        level: Union[LevelSource, int, str, None] = None,
        **kwargs: Any,
    ) -> SokobanObservation:
        """
        Start a new episode.

        Args:
            seed: Reseed the default random computer player
            episode_id: Identifier for the new episode (default: a fresh uuid)
            level: Bundled level number or LevelSource to switch to;
                   the current level if None

        Returns:
            SokobanObservation with the initial board state

        Raises:
            InvalidLevelSource: If level is not a known bundled level
        """
        if level is not None:
            self.level = resolve_bundled(level)
        if seed is not None and isinstance(self.player, RandomPlayer):
            self.player = RandomPlayer(seed)

        self._state = SokobanState(episode_id=episode_id or str(uuid4()), step_count=0)
        self._session = PuzzleSession(self.level, strict_load=self.strict_load)
        logger.info(f"Environment reset. New episode ID: {self._state.episode_id}")

        return self._get_observation(f"Level {self.level.name} started")

    def next_level(self) -> Optional[SokobanObservation]:
        """
        Start a new episode on the next bundled level.

        Returns:
            The new episode's first observation, or None after the last level
        """
        following = next_level(self.level)
        if following is None:
            return None
        return self.reset(level=following)

    def step(
        self,
        action: SokobanAction,
        timeout_s: Optional[float] = None,
        **kwargs: Any,
    ) -> SokobanObservation:
        """
        Execute one command.

        Args:
            action: SokobanAction naming the command and its arguments

        Returns:
            SokobanObservation with the updated board state

        Raises:
            ValueError: If the command is unknown or a move names no valid direction
        """
        self._state.step_count += 1

        handlers = {
            "move": self._do_move,
            "player": self._do_player_move,
            "undo": self._do_undo,
            "clear": self._do_clear,
            "save": self._do_save,
            "load": self._do_load,
            "next": self._do_next_level,
        }
        handler = handlers.get(action.command)
        if handler is None:
            raise ValueError(f"Unknown command: {action.command!r}")

        message = handler(action)
        observation = self._get_observation(message)
        if observation.is_solved:
            logger.info(f"Episode {self._state.episode_id} solved in {observation.moves_count} moves")
        logger.debug(f"Step {self._state.step_count}: command={action.command}, message={message!r}")
        return observation

    def _do_move(self, action: SokobanAction) -> str:
        if action.direction is None:
            raise ValueError("A move needs a direction")
        direction = Direction.parse(action.direction)
        if not self._session.move(direction):
            return "invalid move"
        if self._session.on_target():
            return "Level won!"
        return f"Moved {direction.name}"

    def _do_player_move(self, action: SokobanAction) -> str:
        choice = self._session.player_move(self.player)
        if choice is None:
            return "No valid moves"
        if self._session.on_target():
            return "Level won!"
        return f"Computer moved {choice.name}"

    def _do_undo(self, action: SokobanAction) -> str:
        try:
            self._session.undo()
        except NothingToUndo:
            return "Nothing to undo"
        return "Last move undone"

    def _do_clear(self, action: SokobanAction) -> str:
        self._session.reset()
        return "Game cleared"

    def _do_save(self, action: SokobanAction) -> str:
        return self._session.save(self._save_target(action))

    def _do_load(self, action: SokobanAction) -> str:
        try:
            return self._session.load(self._save_target(action))
        except MalformedEntry as e:
            logger.warning(f"Rejected save file: {e}")
            return f"Error loading from file: {e}"

    def _do_next_level(self, action: SokobanAction) -> str:
        following = next_level(self.level)
        if following is None:
            return "No more levels"
        self.level = following
        self._session = PuzzleSession(self.level, strict_load=self.strict_load)
        return f"Level {self.level.name} started"

    def _save_target(self, action: SokobanAction) -> Path:
        name = action.path or self.save_file
        if not is_bare_file_name(name):
            raise ValueError(f"Save file must be a plain file name, got {name!r}")
        return self.save_dir / name

    def _get_observation(self, message: str = "") -> SokobanObservation:
        """Create an observation from the current board state."""
        puzzle = self._session.puzzle
        status = puzzle.status
        boxes_on_goals = puzzle.num_on_target()

        return SokobanObservation(
            board=puzzle.lines(),
            board_codes=puzzle.to_array().flatten().tolist(),
            board_shape=[puzzle.num_rows, puzzle.num_cols],
            num_boxes=puzzle.num_boxes,
            num_targets=puzzle.num_targets,
            boxes_on_goals=boxes_on_goals,
            player_position=list(puzzle.actor_position),
            valid_moves=[d.name for d in puzzle.valid_moves()],
            moves_count=len(self._session.log),
            pushes_count=puzzle.pushes_count,
            status=status.value,
            message=message,
            is_solved=status is PuzzleStatus.WON,
            done=status is PuzzleStatus.WON,
            metadata={
                "step": self._state.step_count,
                "level": self.level.name,
            },
        )

    @property
    def state(self) -> SokobanState:
        """
        Get the current environment state.

        Returns:
            Current SokobanState with episode_id, step_count and the move log
        """
        self._state.level = self.level.name
        self._state.moves = self._session.serialize()
        self._state.status = self._session.status.value
        return self._state
