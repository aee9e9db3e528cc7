# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for the move engine and win detection."""

import pytest

from sokoban_puzzle.models import Cell, Direction, Position, PuzzleStatus
from sokoban_puzzle.server.puzzle import Sokoban

from conftest import OPEN_ROOM


def box_positions(puzzle):
    return [
        Position(r, c)
        for r in range(1, puzzle.num_rows + 1)
        for c in range(1, puzzle.num_cols + 1)
        if puzzle.cell_at(Position(r, c)).has_box
    ]


def test_corridor_legal_moves(corridor):
    """A wall blocks, an empty cell does not."""
    assert corridor.can_move(Direction.EAST)
    assert not corridor.can_move(Direction.NORTH)
    assert not corridor.can_move(Direction.SOUTH)
    assert not corridor.can_move(Direction.WEST)
    assert corridor.valid_moves() == [Direction.EAST]
    assert corridor.num_rows == 3 and corridor.num_cols == 5


def test_push_box_onto_target(push_puzzle):
    assert push_puzzle.num_on_target() == 0
    assert not push_puzzle.on_target()

    position = push_puzzle.move(Direction.EAST)

    assert position == Position(2, 3)
    assert push_puzzle.cell_at(Position(2, 4)) is Cell.TARGET_WITH_BOX
    assert push_puzzle.cell_at(Position(2, 3)) is Cell.ACTOR
    assert push_puzzle.cell_at(Position(2, 2)) is Cell.EMPTY
    assert push_puzzle.on_target()
    assert push_puzzle.num_on_target() == 1
    assert push_puzzle.pushes_count == 1
    assert push_puzzle.status is PuzzleStatus.WON


def test_box_against_wall_cannot_be_pushed():
    puzzle = Sokoban(["#####", "# @$#", "#. ##", "#####"])
    assert not puzzle.can_move(Direction.EAST)
    before = puzzle.lines()
    assert puzzle.move(Direction.EAST) == Position(2, 3)
    assert puzzle.lines() == before


def test_box_against_box_cannot_be_pushed():
    puzzle = Sokoban(["#######", "#@$$ .#", "#######"])
    assert not puzzle.can_move(Direction.EAST)


def test_box_at_grid_edge_cannot_be_pushed():
    """A push whose far cell lies outside the grid is illegal."""
    puzzle = Sokoban(["@$", " ."])
    assert not puzzle.can_move(Direction.EAST)
    assert not puzzle.can_move(Direction.NORTH)
    assert puzzle.can_move(Direction.SOUTH)


def test_actor_steps_off_target_leaving_it_intact():
    puzzle = Sokoban(["#####", "# + #", "# $.#", "#####"])
    assert puzzle.actor_position == Position(2, 3)
    puzzle.move(Direction.WEST)
    assert puzzle.cell_at(Position(2, 3)) is Cell.TARGET
    assert puzzle.cell_at(Position(2, 2)) is Cell.ACTOR
    assert puzzle.num_targets == 2


def test_push_box_off_target():
    puzzle = Sokoban(["######", "#@* .#", "######"])
    assert puzzle.num_on_target() == 1
    puzzle.move(Direction.EAST)
    assert puzzle.cell_at(Position(2, 3)) is Cell.TARGET_WITH_ACTOR
    assert puzzle.cell_at(Position(2, 4)) is Cell.BOX
    assert puzzle.num_on_target() == 0


def test_simple_step_changes_position_by_delta():
    puzzle = Sokoban(OPEN_ROOM.splitlines())
    for direction in (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.WEST):
        before = puzzle.actor_position
        vacated = puzzle.cell_at(before)
        after = puzzle.move(direction)
        assert after == before.moved(direction)
        assert puzzle.cell_at(before).is_target == vacated.is_target
        assert not puzzle.cell_at(before).has_box


def test_push_conserves_boxes():
    puzzle = Sokoban(OPEN_ROOM.splitlines())
    boxes_before = box_positions(puzzle)
    puzzle.move(Direction.NORTH)
    boxes_after = box_positions(puzzle)
    assert len(boxes_after) == len(boxes_before) == puzzle.num_boxes
    assert boxes_after == [Position(2, 4)]


@pytest.mark.parametrize("direction", list(Direction))
def test_can_move_matches_move_effect(direction):
    """can_move() is true exactly when move() changes the actor position."""
    layouts = [
        OPEN_ROOM.splitlines(),
        ["#####", "# @$#", "#. ##", "#####"],
        ["#######", "#@$$ .#", "#######"],
        ["@$", " ."],
    ]
    for lines in layouts:
        puzzle = Sokoban(lines)
        before = puzzle.actor_position
        predicted = puzzle.can_move(direction)
        assert (puzzle.move(direction) != before) == predicted


def test_move_notifies_each_changed_cell(push_puzzle, recorder):
    push_puzzle.add_observer(recorder)
    push_puzzle.move(Direction.EAST)
    assert recorder.events == [((2, 4), "*"), ((2, 2), " "), ((2, 3), "@")]


def test_won_puzzle_rejects_moves(push_puzzle):
    push_puzzle.move(Direction.EAST)
    assert push_puzzle.valid_moves() == []
    assert not push_puzzle.can_move(Direction.WEST)
    assert push_puzzle.move(Direction.WEST) == Position(2, 3)


def test_status_transitions(corridor):
    assert corridor.status is PuzzleStatus.FRESH
    corridor.move(Direction.EAST)
    assert corridor.status is PuzzleStatus.IN_PROGRESS
    assert not corridor.on_target()
    assert corridor.num_on_target() == 0
    assert corridor.num_targets == 1


def test_str_renders_rows(push_puzzle):
    assert str(push_puzzle) == "#####\n#@$.#\n#####"


def test_loose_box_blocks_win():
    """More boxes than targets: covering every target is not enough."""
    puzzle = Sokoban(["#######", "#@$.$ #", "#######"])
    assert puzzle.num_boxes == 2 and puzzle.num_targets == 1

    puzzle.move(Direction.EAST)

    assert puzzle.num_on_target() == 1
    assert not puzzle.on_target()
    assert puzzle.status is PuzzleStatus.IN_PROGRESS
    assert puzzle.valid_moves() == [Direction.WEST]
