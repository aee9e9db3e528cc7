# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Data models for the Sokoban puzzle engine.

Sokoban is a classic puzzle game where the actor pushes boxes onto targets.
The actor can move in four directions and push boxes (but not pull them).
"""

from enum import Enum
from pathlib import PurePath
from typing import List, Literal, NamedTuple, Optional

from openenv.core.env_server.types import Action, Observation, State
from pydantic import Field, field_validator, model_validator

from .exceptions import InvalidLevelSource


class Direction(Enum):
    """The four compass directions, each carrying its (row, col) delta."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def delta(self) -> "tuple[int, int]":
        return self.value

    @classmethod
    def from_token(cls, token: str) -> Optional["Direction"]:
        """
        Look up a save-file token.

        Only the exact names NORTH, SOUTH, EAST and WEST are recognized.

        Returns:
            The matching Direction, or None for any other token
        """
        return cls.__members__.get(token)

    @classmethod
    def parse(cls, text: str) -> "Direction":
        """
        Parse user input into a Direction.

        Accepts direction names in any case and the aliases
        "up", "down", "right" and "left".

        Raises:
            ValueError: If the text names no direction
        """
        key = text.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        direction = cls.__members__.get(key.upper())
        if direction is None:
            raise ValueError(f"Unknown direction: {text!r}")
        return direction


_ALIASES = {
    "up": Direction.NORTH,
    "down": Direction.SOUTH,
    "right": Direction.EAST,
    "left": Direction.WEST,
}


class Position(NamedTuple):
    """A 1-indexed (row, col) grid address."""

    row: int
    col: int

    def moved(self, direction: Direction) -> "Position":
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


class Cell(Enum):
    """
    Content of one grid location.

    The value of each member is its display character. The mapping is
    bidirectional: Cell.from_char(cell.char) is cell.
    """

    WALL = "#"
    EMPTY = " "
    TARGET = "."
    BOX = "$"
    ACTOR = "@"
    TARGET_WITH_BOX = "*"
    TARGET_WITH_ACTOR = "+"

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        try:
            return cls(char)
        except ValueError:
            raise InvalidLevelSource(f"Unknown level character: {char!r}") from None

    @property
    def char(self) -> str:
        return self.value

    @property
    def code(self) -> int:
        """Integer encoding used for array views of the board."""
        return _CODES[self]

    @property
    def is_target(self) -> bool:
        return self in (Cell.TARGET, Cell.TARGET_WITH_BOX, Cell.TARGET_WITH_ACTOR)

    @property
    def has_box(self) -> bool:
        return self in (Cell.BOX, Cell.TARGET_WITH_BOX)

    @property
    def has_actor(self) -> bool:
        return self in (Cell.ACTOR, Cell.TARGET_WITH_ACTOR)

    @property
    def is_free(self) -> bool:
        """True for cells a box or the actor may enter."""
        return self in (Cell.EMPTY, Cell.TARGET)

    def with_box(self) -> "Cell":
        return Cell.TARGET_WITH_BOX if self.is_target else Cell.BOX

    def with_actor(self) -> "Cell":
        return Cell.TARGET_WITH_ACTOR if self.is_target else Cell.ACTOR

    def vacated(self) -> "Cell":
        """The cell left behind when its box or actor moves away."""
        return Cell.TARGET if self.is_target else Cell.EMPTY


# Cell type codes
_CODES = {
    Cell.EMPTY: 0,
    Cell.WALL: 1,
    Cell.BOX: 2,
    Cell.TARGET: 3,
    Cell.ACTOR: 4,
    Cell.TARGET_WITH_BOX: 5,
    Cell.TARGET_WITH_ACTOR: 6,
}


class PuzzleStatus(str, Enum):
    FRESH = "fresh"
    IN_PROGRESS = "in_progress"
    WON = "won"


Command = Literal["move", "player", "undo", "clear", "save", "load", "next"]


def is_bare_file_name(name: str) -> bool:
    """True if name is a single file name with no directory part."""
    if name in ("", ".", "..") or "\\" in name:
        return False
    return PurePath(name).name == name


class SokobanAction(Action):
    """
    Action for the Sokoban environment.

    Attributes:
        command: What to do ("move", "player", "undo", "clear", "save",
                 "load" or "next")
        direction: Direction to move, required for "move"
        path: Save file name for "save" and "load", resolved inside the
              server's save directory; the environment default if None
    """

    command: Command = Field(default="move", description="Command to execute")
    direction: Optional[str] = Field(
        default=None, description="Direction name or alias, for moves"
    )
    path: Optional[str] = Field(
        default=None, description="Bare save file name, for save and load"
    )

    @field_validator("direction")
    @classmethod
    def _known_direction(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            Direction.parse(value)
        return value

    @field_validator("path")
    @classmethod
    def _bare_file_name(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_bare_file_name(value):
            raise ValueError(f"Save file must be a plain file name, got {value!r}")
        return value

    @model_validator(mode="after")
    def _move_needs_direction(self) -> "SokobanAction":
        if self.command == "move" and self.direction is None:
            raise ValueError("A move needs a direction")
        return self


class SokobanObservation(Observation):
    """
    Observation from the Sokoban environment.

    Attributes:
        board: Rows of the board as display characters
        board_codes: Flattened board, each cell encoded as:
                0 = empty floor
                1 = wall
                2 = box
                3 = target
                4 = actor
                5 = box on target
                6 = actor on target
        board_shape: Shape of the board (rows, cols)
        num_boxes: Total number of boxes in the puzzle
        num_targets: Total number of targets in the puzzle
        boxes_on_goals: Number of boxes currently on targets
        player_position: 1-indexed (row, col) position of the actor
        valid_moves: Names of the directions currently legal
        moves_count: Number of moves in the move log
        pushes_count: Number of box pushes performed
        status: "fresh", "in_progress" or "won"
        message: Outcome of the last command, for display
        is_solved: Whether every box sits on a target
    """

    board: List[str] = Field(default_factory=list)
    board_codes: List[int] = Field(default_factory=list)
    board_shape: List[int] = Field(default_factory=list)
    num_boxes: int = 0
    num_targets: int = 0
    boxes_on_goals: int = 0
    player_position: List[int] = Field(default_factory=lambda: [0, 0])
    valid_moves: List[str] = Field(default_factory=list)
    moves_count: int = 0
    pushes_count: int = 0
    status: str = PuzzleStatus.FRESH.value
    message: str = ""
    is_solved: bool = False


class SokobanState(State):
    """Episode bookkeeping for the Sokoban environment."""

    level: str = Field(default="", description="Name of the level being played")
    moves: List[str] = Field(default_factory=list, description="The move log")
    status: str = PuzzleStatus.FRESH.value
