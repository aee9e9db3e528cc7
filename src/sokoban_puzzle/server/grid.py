# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Grid model for the Sokoban puzzle.

The grid is a fixed-size rectangle of cells built once from the rows of a
level description. Positions are 1-indexed: row 1 is the top line of the
level and column 1 its first character.
"""

import logging
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np

from ..exceptions import InvalidLevelSource, OutOfBounds
from ..models import Cell, Position

logger = logging.getLogger(__name__)

# Called with the changed position and its new display character
CellObserver = Callable[[Position, str], None]


class Grid:
    """
    Rectangular array of cells.

    Rows shorter than the longest line are padded with empty cells. The
    dimensions never change after construction. set_cell_at() is the only
    mutation and notifies every registered observer, in registration order,
    when the content of a cell actually changes.
    """

    def __init__(self, lines: Optional[Sequence[str]]):
        if lines is None:
            raise InvalidLevelSource("Level source is missing")

        rows = [line.rstrip("\r\n") for line in lines]
        if not rows:
            raise InvalidLevelSource("Level source has no rows")

        self._num_rows = len(rows)
        self._num_cols = max(len(row) for row in rows)
        if self._num_cols == 0:
            raise InvalidLevelSource("Level source has no columns")

        self._cells: List[List[Cell]] = [
            [Cell.from_char(ch) for ch in row.ljust(self._num_cols)] for row in rows
        ]
        self._observers: List[CellObserver] = []

        actors = self.find(Cell.ACTOR, Cell.TARGET_WITH_ACTOR)
        if len(actors) != 1:
            raise InvalidLevelSource(
                f"Level must contain exactly one actor, found {len(actors)}"
            )

        logger.debug(f"Grid built with {self._num_rows} rows and {self._num_cols} cols")

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_cols(self) -> int:
        return self._num_cols

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 1 <= row <= self._num_rows and 1 <= col <= self._num_cols

    def cell_at(self, position: Position) -> Cell:
        """
        Get the content of a cell.

        Raises:
            OutOfBounds: If the position is outside the grid
        """
        if not self.in_bounds(position):
            raise OutOfBounds(position[0], position[1], self._num_rows, self._num_cols)
        return self._cells[position[0] - 1][position[1] - 1]

    def display_char_at(self, position: Position) -> str:
        return self.cell_at(position).char

    def set_cell_at(self, position: Position, cell: Cell) -> None:
        """
        Replace the content of a cell and notify observers of the change.

        Raises:
            OutOfBounds: If the position is outside the grid
        """
        if self.cell_at(position) is cell:
            return
        self._cells[position[0] - 1][position[1] - 1] = cell
        for observer in list(self._observers):
            observer(Position(*position), cell.char)

    def add_observer(self, observer: CellObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def positions(self) -> Iterator[Position]:
        """Iterate over every position, row by row."""
        for row in range(1, self._num_rows + 1):
            for col in range(1, self._num_cols + 1):
                yield Position(row, col)

    def find(self, *cells: Cell) -> List[Position]:
        """Positions whose content is one of the given cells."""
        return [pos for pos in self.positions() if self.cell_at(pos) in cells]

    def count(self, *cells: Cell) -> int:
        codes = self.to_array()
        return int(np.isin(codes, [cell.code for cell in cells]).sum())

    def to_array(self) -> np.ndarray:
        """Encode the grid as a (num_rows, num_cols) array of cell codes."""
        return np.array(
            [[cell.code for cell in row] for row in self._cells], dtype=int
        )

    def lines(self) -> List[str]:
        return ["".join(cell.char for cell in row) for row in self._cells]

    def __str__(self) -> str:
        return "\n".join(self.lines())
