# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest configuration and shared fixtures for the Sokoban tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from sokoban_puzzle.server.levels import LevelSource
from sokoban_puzzle.server.puzzle import Sokoban
from sokoban_puzzle.server.session import PuzzleSession


# Actor in a corridor with a target two cells east
CORRIDOR = "#####\n#@ .#\n#####"

# Actor directly west of a box, which is directly west of a target
PUSH_ONTO_TARGET = "#####\n#@$.#\n#####"

# Open room: actor in the middle, a box directly north of it, a target in a corner
#
#   #######
#   #.    #
#   #  $  #
#   #  @  #
#   #     #
#   #######
OPEN_ROOM = "#######\n#.    #\n#  $  #\n#  @  #\n#     #\n#######"


@pytest.fixture
def corridor():
    return Sokoban(CORRIDOR.splitlines())


@pytest.fixture
def push_puzzle():
    return Sokoban(PUSH_ONTO_TARGET.splitlines())


@pytest.fixture
def open_room_level():
    return LevelSource.from_text(OPEN_ROOM, name="open-room")


@pytest.fixture
def session(open_room_level):
    return PuzzleSession(open_room_level)


@pytest.fixture
def recorder():
    """Observer that records every (position, char) notification."""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, position, char):
            self.events.append((tuple(position), char))

    return Recorder()
