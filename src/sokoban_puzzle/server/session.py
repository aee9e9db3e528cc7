# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Puzzle session: a live puzzle plus the log of moves that produced it.

Undo, reset and load all rebuild the puzzle from the level source
and replay a move sequence against it. Observers registered on the session
survive rebuilds; after each rebuild they are told about every cell whose
display character differs from what they last saw.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Union

from ..exceptions import IOFailure
from ..models import Direction, Position, PuzzleStatus
from .grid import CellObserver
from .history import MoveLog, PathLike, read_save_file, write_save_file
from .levels import LevelSource
from .players import Player
from .puzzle import Sokoban

logger = logging.getLogger(__name__)

SAVE_OK = "Game saved to file"
SAVE_FAILED = "Error - save unsuccessful"
LOAD_OK = "Game loaded from file"
LOAD_FAILED = "Error loading from file"


class PuzzleSession:
    """
    One playthrough of a level.

    Example:
        >>> session = PuzzleSession(LevelSource.from_text("#####\\n#@$.#\\n#####"))
        >>> session.move(Direction.EAST)
        True
        >>> session.serialize()
        ['EAST']
        >>> session.undo()
        >>> session.status
        <PuzzleStatus.FRESH: 'fresh'>
    """

    def __init__(self, level: Union[LevelSource, Sequence[str]], strict_load: bool = False):
        """
        Start a session on a level.

        Args:
            level: The level source, or the rows of a level
            strict_load: Reject unknown save-file tokens on load

        Raises:
            InvalidLevelSource: If the level cannot be built
        """
        if not isinstance(level, LevelSource):
            level = LevelSource.from_lines(level)
        self._level = level
        self._strict_load = strict_load
        self._observers: List[CellObserver] = []
        self._log = MoveLog()
        self._puzzle = Sokoban(level.lines)
        logger.info(f"Session started on level {level.name}")

    @property
    def level(self) -> LevelSource:
        return self._level

    @property
    def puzzle(self) -> Sokoban:
        return self._puzzle

    @property
    def log(self) -> MoveLog:
        return self._log

    @property
    def status(self) -> PuzzleStatus:
        return self._puzzle.status

    @property
    def actor_position(self) -> Position:
        return self._puzzle.actor_position

    def add_observer(self, observer: CellObserver) -> None:
        self._observers.append(observer)
        self._puzzle.add_observer(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
        self._puzzle.remove_observer(observer)

    def can_move(self, direction: Direction) -> bool:
        return self._puzzle.can_move(direction)

    def valid_moves(self) -> List[Direction]:
        return self._puzzle.valid_moves()

    def on_target(self) -> bool:
        return self._puzzle.on_target()

    def num_on_target(self) -> int:
        return self._puzzle.num_on_target()

    def move(self, direction: Direction) -> bool:
        """
        Apply a move and record it.

        Returns:
            True if the move was legal and applied, False otherwise
        """
        if not self._puzzle.can_move(direction):
            logger.info(f"invalid move {direction.name} from {self._puzzle.actor_position}")
            return False
        self._puzzle.move(direction)
        self._log.record(direction)
        if self._puzzle.on_target():
            logger.info(f"Level {self._level.name} won after {len(self._log)} moves")
        return True

    def player_move(self, player: Player) -> Optional[Direction]:
        """
        Let a computer player make the next move.

        Returns:
            The direction played, or None when no move is legal
        """
        candidates = self._puzzle.valid_moves()
        if not candidates:
            logger.info("No legal moves for the computer player")
            return None
        choice = player.choose_move(candidates)
        self.move(choice)
        return choice

    def undo(self) -> None:
        """
        Take back the most recent move.

        The puzzle is rebuilt from the level source and every remaining
        logged move is replayed in order.

        Raises:
            NothingToUndo: If no move has been made
        """
        undone = self._log.pop()
        remaining = self._log.moves
        self.replay(remaining)
        logger.info(f"Undid {undone.name}, {len(self._log)} moves remain")

    def reset(self) -> None:
        """Return to the start of the level with an empty log."""
        self.replay(())
        logger.info("Game cleared")

    def replay(self, directions: Iterable[Direction]) -> None:
        """
        Rebuild the puzzle and apply a move sequence to it.

        Illegal directions are skipped; only applied moves enter the log.
        """
        previous = self._puzzle
        puzzle = Sokoban(self._level.lines)
        log = MoveLog()
        for direction in directions:
            if puzzle.can_move(direction):
                puzzle.move(direction)
                log.record(direction)
            else:
                logger.debug(f"Replay skipped illegal move {direction.name}")

        for observer in self._observers:
            previous.remove_observer(observer)
            puzzle.add_observer(observer)

        self._puzzle = puzzle
        self._log = log
        self._notify_changes(previous)

    def serialize(self) -> List[str]:
        return self._log.serialize()

    def deserialize(self, tokens: Iterable[str], strict: Optional[bool] = None) -> None:
        """
        Replay save-file tokens into a fresh puzzle.

        Raises:
            MalformedEntry: In strict mode, on a token that is not a direction
        """
        if strict is None:
            strict = self._strict_load
        directions = MoveLog.deserialize(tokens, strict=strict)
        self.replay(directions)

    def save(self, path: PathLike) -> str:
        """
        Write the move log to a file.

        Returns:
            A status message; I/O errors are reported here, not raised
        """
        try:
            write_save_file(path, self._log)
        except IOFailure as e:
            logger.error(f"Save failed: {e}")
            return SAVE_FAILED
        logger.info(f"Saved {len(self._log)} moves to {path}")
        return SAVE_OK

    def load(self, path: PathLike, strict: Optional[bool] = None) -> str:
        """
        Replace the session with the moves stored in a file.

        Returns:
            A status message; I/O errors are reported here, not raised

        Raises:
            MalformedEntry: In strict mode; the session is left unchanged
        """
        try:
            tokens = read_save_file(path)
        except IOFailure as e:
            logger.error(f"Load failed: {e}")
            return LOAD_FAILED
        self.deserialize(tokens, strict=strict)
        logger.info(f"Loaded {len(self._log)} moves from {path}")
        return LOAD_OK

    def _notify_changes(self, previous: Sokoban) -> None:
        if not self._observers:
            return
        # Both puzzles come from the same level, so their shapes match
        for row in range(1, self._puzzle.num_rows + 1):
            for col in range(1, self._puzzle.num_cols + 1):
                position = Position(row, col)
                char = self._puzzle.display_char_at(position)
                if previous.display_char_at(position) == char:
                    continue
                for observer in list(self._observers):
                    observer(position, char)

    def __str__(self) -> str:
        return str(self._puzzle)
