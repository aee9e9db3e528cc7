# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Sokoban puzzle engine and its HTTP server."""

from .grid import Grid
from .history import MoveLog, read_save_file, write_save_file
from .levels import (
    LevelSource,
    available_levels,
    next_level,
    resolve_bundled,
    resolve_level,
)
from .players import Player, RandomPlayer
from .puzzle import Sokoban
from .session import PuzzleSession
from .sokoban_environment import SokobanEnvironment

__all__ = [
    "Grid",
    "Sokoban",
    "MoveLog",
    "read_save_file",
    "write_save_file",
    "LevelSource",
    "available_levels",
    "next_level",
    "resolve_bundled",
    "resolve_level",
    "Player",
    "RandomPlayer",
    "PuzzleSession",
    "SokobanEnvironment",
]
