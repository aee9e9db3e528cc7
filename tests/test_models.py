# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for action validation and the shared data models."""

import pytest
from pydantic import ValidationError

from sokoban_puzzle.models import Direction, SokobanAction, is_bare_file_name


def test_action_defaults_to_move():
    action = SokobanAction(direction="north")
    assert action.command == "move"
    assert Direction.parse(action.direction) is Direction.NORTH


@pytest.mark.parametrize(
    "fields",
    [
        {"command": "move"},
        {"command": "move", "direction": "sideways"},
        {"command": "teleport"},
        {"command": "save", "path": "../save.txt"},
        {"command": "load", "path": "/tmp/save.txt"},
        {"command": "undo", "speed": 2},
    ],
)
def test_invalid_actions(fields):
    with pytest.raises(ValidationError):
        SokobanAction(**fields)


def test_bare_file_names():
    assert is_bare_file_name("save.txt")
    assert is_bare_file_name("level-2.sav")
    for name in ("", ".", "..", "a/b.txt", "/etc/passwd", "..\\x.txt"):
        assert not is_bare_file_name(name)
