# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Sokoban Puzzle - grid puzzle engine with undo, save and load."""

from .client import SokobanEnv
from .exceptions import (
    InvalidLevelSource,
    IOFailure,
    MalformedEntry,
    NothingToUndo,
    OutOfBounds,
    SokobanError,
)
from .models import (
    Cell,
    Direction,
    Position,
    PuzzleStatus,
    SokobanAction,
    SokobanObservation,
    SokobanState,
)

__all__ = [
    "Cell",
    "Direction",
    "Position",
    "PuzzleStatus",
    "SokobanAction",
    "SokobanObservation",
    "SokobanState",
    "SokobanEnv",
    "SokobanError",
    "OutOfBounds",
    "InvalidLevelSource",
    "NothingToUndo",
    "IOFailure",
    "MalformedEntry",
]
