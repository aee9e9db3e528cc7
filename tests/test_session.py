# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for undo, reset, save and load on a puzzle session."""

import pytest

from sokoban_puzzle.exceptions import MalformedEntry, NothingToUndo
from sokoban_puzzle.models import Direction, Position, PuzzleStatus
from sokoban_puzzle.server.levels import LevelSource
from sokoban_puzzle.server.players import RandomPlayer
from sokoban_puzzle.server.session import (
    LOAD_FAILED,
    LOAD_OK,
    SAVE_FAILED,
    SAVE_OK,
    PuzzleSession,
)

from conftest import PUSH_ONTO_TARGET

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def snapshot(session):
    return session.puzzle.lines(), session.actor_position


def test_move_records_only_legal_moves(session):
    assert session.move(N)  # pushes the box
    assert session.move(N) is False  # box would hit the wall
    assert session.serialize() == ["NORTH"]


def test_undo_with_empty_log(session):
    with pytest.raises(NothingToUndo):
        session.undo()


@pytest.mark.parametrize("direction", list(Direction))
def test_undo_restores_previous_board(session, direction):
    session.move(E)
    session.move(S)
    before = snapshot(session)
    if session.move(direction):
        session.undo()
    assert snapshot(session) == before
    assert session.serialize() == ["EAST", "SOUTH"]


def test_undo_after_push(session):
    before = snapshot(session)
    session.move(N)
    assert session.puzzle.pushes_count == 1
    session.undo()
    assert snapshot(session) == before
    assert session.puzzle.pushes_count == 0
    assert session.status is PuzzleStatus.FRESH


def test_undo_out_of_won_state():
    session = PuzzleSession(LevelSource.from_text(PUSH_ONTO_TARGET))
    session.move(E)
    assert session.status is PuzzleStatus.WON
    session.undo()
    assert session.status is PuzzleStatus.FRESH
    assert session.valid_moves() == [E]


def test_reset_returns_to_fresh(session):
    start = snapshot(session)
    session.move(W)
    session.move(N)
    session.reset()
    assert snapshot(session) == start
    assert len(session.log) == 0
    assert session.status is PuzzleStatus.FRESH


def test_observers_follow_rebuilds(session, recorder):
    session.add_observer(recorder)
    session.move(N)
    assert recorder.events == [((2, 4), "$"), ((4, 4), " "), ((3, 4), "@")]

    recorder.events.clear()
    session.undo()
    assert sorted(recorder.events) == [((2, 4), " "), ((3, 4), "$"), ((4, 4), "@")]

    recorder.events.clear()
    session.move(E)
    assert recorder.events == [((4, 4), " "), ((4, 5), "@")]

    session.remove_observer(recorder)
    recorder.events.clear()
    session.move(W)
    assert recorder.events == []


def test_save_writes_move_names(session, tmp_path):
    path = tmp_path / "save.txt"
    for direction in (N, E, E):
        assert session.move(direction)
    assert session.save(path) == SAVE_OK
    assert path.read_text(encoding="utf-8").splitlines() == ["NORTH", "EAST", "EAST"]


def test_load_reproduces_saved_session(session, open_room_level, tmp_path):
    path = tmp_path / "save.txt"
    for direction in (N, E, E):
        session.move(direction)
    session.save(path)

    other = PuzzleSession(open_room_level)
    other.move(W)
    assert other.load(path) == LOAD_OK
    assert snapshot(other) == snapshot(session)
    assert other.serialize() == ["NORTH", "EAST", "EAST"]
    assert other.on_target() == session.on_target()


def test_save_then_load_random_playthrough(open_room_level, tmp_path):
    path = tmp_path / "save.txt"
    session = PuzzleSession(open_room_level)
    player = RandomPlayer(seed=7)
    for _ in range(40):
        session.player_move(player)
    session.save(path)

    restored = PuzzleSession(open_room_level)
    restored.load(path)
    assert snapshot(restored) == snapshot(session)
    assert restored.num_on_target() == session.num_on_target()


def test_load_skips_unknown_lines(session, tmp_path):
    path = tmp_path / "save.txt"
    path.write_text("NORTH\n# comment\nEAST\n", encoding="utf-8")
    assert session.load(path) == LOAD_OK
    assert session.serialize() == ["NORTH", "EAST"]


def test_load_skips_illegal_moves(session, tmp_path):
    path = tmp_path / "save.txt"
    path.write_text("NORTH\nNORTH\nEAST\n", encoding="utf-8")
    session.load(path)
    assert session.serialize() == ["NORTH", "EAST"]


def test_strict_load_leaves_session_untouched(open_room_level, tmp_path):
    path = tmp_path / "save.txt"
    path.write_text("NORTH\nUPWARDS\n", encoding="utf-8")
    session = PuzzleSession(open_room_level, strict_load=True)
    session.move(E)
    before = snapshot(session)
    with pytest.raises(MalformedEntry):
        session.load(path)
    assert snapshot(session) == before
    assert session.serialize() == ["EAST"]


def test_io_failures_are_reported_as_status(session, tmp_path):
    assert session.load(tmp_path / "missing.txt") == LOAD_FAILED
    assert session.save(tmp_path / "missing-dir" / "save.txt") == SAVE_FAILED


def test_player_move_without_legal_moves():
    session = PuzzleSession(["###", "#@#", "###"])

    class Refusing(RandomPlayer):
        def choose_move(self, candidates):
            raise AssertionError("player must not be asked")

    assert session.player_move(Refusing()) is None
    assert session.actor_position == Position(2, 2)
