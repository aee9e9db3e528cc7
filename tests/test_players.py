# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for computer players."""

import pytest

from sokoban_puzzle.models import Direction
from sokoban_puzzle.server.players import Player, RandomPlayer


def test_random_player_picks_a_candidate():
    player = RandomPlayer(seed=1)
    candidates = [Direction.SOUTH, Direction.WEST]
    for _ in range(20):
        assert player.choose_move(candidates) in candidates


def test_random_player_is_reproducible_with_seed():
    candidates = list(Direction)
    a, b = RandomPlayer(seed=42), RandomPlayer(seed=42)
    assert [a.choose_move(candidates) for _ in range(10)] == [
        b.choose_move(candidates) for _ in range(10)
    ]


def test_random_player_rejects_empty_candidates():
    with pytest.raises(ValueError):
        RandomPlayer().choose_move([])


def test_player_is_abstract():
    with pytest.raises(TypeError):
        Player()
