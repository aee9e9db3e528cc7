# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for the Sokoban HTTP client that need no running server."""

from sokoban_puzzle.client import SokobanEnv
from sokoban_puzzle.models import SokobanAction


def test_step_payload():
    client = SokobanEnv("http://localhost:8000/")

    payload = client._step_payload(SokobanAction(command="move", direction="EAST"))
    assert payload == {"command": "move", "direction": "EAST"}

    payload = client._step_payload(SokobanAction(command="save", path="game.txt"))
    assert payload == {"command": "save", "path": "game.txt"}

    payload = client._step_payload(SokobanAction(command="undo", metadata={"source": "test"}))
    assert payload == {"command": "undo", "metadata": {"source": "test"}}

    assert client._step_payload(SokobanAction(command="next")) == {"command": "next"}
    client.close()


def test_parse_result_fills_defaults():
    with SokobanEnv("http://localhost:8000") as client:
        result = client._parse_result({"observation": {"board": ["@"]}, "done": True})
    assert result.done is True
    assert result.observation.board == ["@"]
    assert result.observation.done is True
    assert result.observation.valid_moves == []
    assert result.observation.status == "fresh"
