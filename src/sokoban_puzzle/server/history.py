# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Move history for the Sokoban puzzle.

The move log is an ordered record of applied directions, oldest first.
It is saved as plain text with one direction name per line:

    NORTH
    EAST
    EAST
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from ..exceptions import IOFailure, MalformedEntry, NothingToUndo
from ..models import Direction

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class MoveLog:
    """Ordered sequence of successfully applied moves."""

    def __init__(self, moves: Optional[Iterable[Direction]] = None):
        self._moves: List[Direction] = list(moves or [])

    def record(self, direction: Direction) -> None:
        self._moves.append(direction)

    def pop(self) -> Direction:
        """
        Remove and return the most recent move.

        Raises:
            NothingToUndo: If the log is empty
        """
        if not self._moves:
            raise NothingToUndo()
        return self._moves.pop()

    def clear(self) -> None:
        self._moves.clear()

    @property
    def moves(self) -> Tuple[Direction, ...]:
        return tuple(self._moves)

    def serialize(self) -> List[str]:
        """Direction names in the order the moves were made."""
        return [direction.name for direction in self._moves]

    @staticmethod
    def deserialize(tokens: Iterable[str], strict: bool = False) -> List[Direction]:
        """
        Parse save-file tokens into directions.

        Tokens must match a direction name exactly, so " NORTH" or "north"
        is not a move. Blank lines are skipped. Any other token is skipped
        too, unless strict is set.

        Args:
            tokens: One token per save-file line
            strict: Reject unknown tokens instead of skipping them

        Raises:
            MalformedEntry: In strict mode, on the first unknown token
        """
        directions = []
        for line_number, token in enumerate(tokens, start=1):
            if not token.strip():
                continue
            direction = Direction.from_token(token)
            if direction is None:
                if strict:
                    raise MalformedEntry(token, line_number)
                logger.warning(f"Skipping unrecognized save-file entry {token!r} on line {line_number}")
                continue
            directions.append(direction)
        return directions

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Direction]:
        return iter(self._moves)

    def __repr__(self) -> str:
        return f"MoveLog({self.serialize()})"


def write_save_file(path: PathLike, log: MoveLog) -> None:
    """
    Write a move log to a save file, replacing any previous content.

    Raises:
        IOFailure: If the file cannot be written
    """
    content = "".join(f"{name}\n" for name in log.serialize())
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise IOFailure(str(path), f"Cannot write save file {path}: {e}") from e


def read_save_file(path: PathLike) -> List[str]:
    """
    Read the lines of a save file.

    Raises:
        IOFailure: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(str(path), f"Cannot read save file {path}: {e}") from e
