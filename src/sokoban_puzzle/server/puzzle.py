# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Puzzle Implementation.

A classic puzzle game where the actor pushes boxes onto targets.
The actor can move in four directions and push boxes (but not pull them).
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..models import Cell, Direction, Position, PuzzleStatus
from .grid import CellObserver, Grid

logger = logging.getLogger(__name__)


class Sokoban:
    """
    Sokoban puzzle state machine.

    Owns the grid and the actor position. Every mutation goes through
    move(); observers registered with add_observer() receive one
    (position, display character) notification per changed cell.

    Example:
        >>> puzzle = Sokoban(["#####", "#@$.#", "#####"])
        >>> puzzle.can_move(Direction.EAST)
        True
        >>> puzzle.move(Direction.EAST)
        Position(row=2, col=3)
        >>> puzzle.on_target()
        True
    """

    def __init__(self, lines: Optional[Sequence[str]]):
        """
        Build a puzzle from the rows of a level description.

        Args:
            lines: One string per row, top row first

        Raises:
            InvalidLevelSource: If the description is missing or malformed
        """
        self._grid = Grid(lines)
        self._actor = self._grid.find(Cell.ACTOR, Cell.TARGET_WITH_ACTOR)[0]
        self._num_targets = self._grid.count(
            Cell.TARGET, Cell.TARGET_WITH_BOX, Cell.TARGET_WITH_ACTOR
        )
        self._num_boxes = self._grid.count(Cell.BOX, Cell.TARGET_WITH_BOX)
        self._moves_count = 0
        self._pushes_count = 0

    @property
    def num_rows(self) -> int:
        return self._grid.num_rows

    @property
    def num_cols(self) -> int:
        return self._grid.num_cols

    @property
    def actor_position(self) -> Position:
        return self._actor

    @property
    def num_targets(self) -> int:
        """Number of target cells; fixed for the lifetime of the puzzle."""
        return self._num_targets

    @property
    def num_boxes(self) -> int:
        return self._num_boxes

    @property
    def moves_count(self) -> int:
        return self._moves_count

    @property
    def pushes_count(self) -> int:
        return self._pushes_count

    @property
    def status(self) -> PuzzleStatus:
        if self.on_target():
            return PuzzleStatus.WON
        if self._moves_count == 0:
            return PuzzleStatus.FRESH
        return PuzzleStatus.IN_PROGRESS

    def cell_at(self, position: Position) -> Cell:
        return self._grid.cell_at(position)

    def display_char_at(self, position: Position) -> str:
        return self._grid.display_char_at(position)

    def add_observer(self, observer: CellObserver) -> None:
        self._grid.add_observer(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        self._grid.remove_observer(observer)

    def can_move(self, direction: Direction) -> bool:
        """
        Check whether the actor may move in a direction.

        A step onto an empty cell or target is legal. A step onto a box is
        legal only when the cell beyond the box is an empty cell or target.
        No move is legal once the puzzle is won.
        """
        if self.on_target():
            return False
        target = self._actor.moved(direction)
        if not self._grid.in_bounds(target):
            return False
        cell = self._grid.cell_at(target)
        if cell.is_free:
            return True
        if cell.has_box:
            beyond = target.moved(direction)
            return self._grid.in_bounds(beyond) and self._grid.cell_at(beyond).is_free
        return False

    def valid_moves(self) -> List[Direction]:
        """Directions currently legal, in NORTH, SOUTH, EAST, WEST order."""
        return [direction for direction in Direction if self.can_move(direction)]

    def move(self, direction: Direction) -> Position:
        """
        Move the actor one cell, pushing a box if there is one.

        Illegal moves leave the puzzle unchanged.

        Returns:
            The actor position after the call
        """
        if not self.can_move(direction):
            logger.debug(f"Ignoring illegal move {direction.name} from {self._actor}")
            return self._actor

        target = self._actor.moved(direction)
        target_cell = self._grid.cell_at(target)

        if target_cell.has_box:
            beyond = target.moved(direction)
            self._grid.set_cell_at(beyond, self._grid.cell_at(beyond).with_box())
            target_cell = target_cell.vacated()
            self._pushes_count += 1
            logger.debug(f"Pushed box from {target} to {beyond}")

        self._grid.set_cell_at(self._actor, self._grid.cell_at(self._actor).vacated())
        self._grid.set_cell_at(target, target_cell.with_actor())

        self._actor = target
        self._moves_count += 1
        logger.debug(f"Moved {direction.name} to {target}")
        return self._actor

    def num_on_target(self) -> int:
        """Count how many boxes are currently on targets."""
        return int(np.count_nonzero(self._grid.to_array() == Cell.TARGET_WITH_BOX.code))

    def on_target(self) -> bool:
        """True when every target holds a box and no box is left off target."""
        return (
            self.num_on_target() == self._num_targets
            and self._grid.count(Cell.BOX) == 0
        )

    def lines(self) -> List[str]:
        return self._grid.lines()

    def to_array(self) -> np.ndarray:
        return self._grid.to_array()

    def __str__(self) -> str:
        return str(self._grid)
