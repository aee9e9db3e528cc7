# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Environment HTTP Client.

This module provides the client for connecting to a Sokoban Environment server
over HTTP.
"""

from typing import Any, Dict, Optional, Union

from openenv.core.client_types import StepResult
from openenv.core.http_env_client import HTTPEnvClient

from .models import SokobanAction, SokobanObservation, SokobanState


class SokobanEnv(HTTPEnvClient[SokobanAction, SokobanObservation]):
    """
    HTTP client for the Sokoban Environment.

    This client connects to a Sokoban Environment HTTP server and provides
    methods to interact with it: reset(), step(), and state access.

    Example:
        >>> # Connect to a running server
        >>> client = SokobanEnv(base_url="http://localhost:8000")
        >>> result = client.reset(level=2)
        >>> print(f"Board shape: {result.observation.board_shape}")
        >>> print(f"Number of boxes: {result.observation.num_boxes}")
        >>>
        >>> # Make a move
        >>> result = client.move("EAST")
        >>> print(f"Boxes on targets: {result.observation.boxes_on_goals}")
        >>> print(f"Is solved: {result.observation.is_solved}")
        >>>
        >>> # Take it back
        >>> result = client.undo()
        >>> print(result.observation.message)

    Example with Docker:
        >>> client = SokobanEnv.from_docker_image("sokoban-env:latest")
        >>> result = client.reset()
        >>> result = client.move("right")
    """

    def reset(
        self, level: Union[int, str, None] = None, seed: Optional[int] = None
    ) -> StepResult[SokobanObservation]:
        """
        Start a new episode, optionally on another bundled level.

        Args:
            level: Bundled level number; the server's current level if None
            seed: Seed for the server's random computer player
        """
        body: Dict[str, Any] = {}
        if level is not None:
            body["level"] = level
        if seed is not None:
            body["seed"] = seed
        r = self._http.post(
            f"{self._base}/reset",
            json=body,
            headers=self._headers,
            timeout=self._timeout,
        )
        r.raise_for_status()
        return self._parse_result(r.json())

    def render(self) -> str:
        """Get the board as plain text."""
        r = self._http.get(
            f"{self._base}/render",
            headers=self._headers,
            timeout=self._timeout,
        )
        r.raise_for_status()
        return r.text

    def move(self, direction: str) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="move", direction=direction))

    def player_move(self) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="player"))

    def undo(self) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="undo"))

    def clear(self) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="clear"))

    def save(self, path: Optional[str] = None) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="save", path=path))

    def load(self, path: Optional[str] = None) -> StepResult[SokobanObservation]:
        return self.step(SokobanAction(command="load", path=path))

    def next_level(self) -> StepResult[SokobanObservation]:
        """Switch the server to the next bundled level."""
        return self.step(SokobanAction(command="next"))

    def close(self) -> None:
        self._http.close()
        super().close()

    def __enter__(self) -> "SokobanEnv":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _step_payload(self, action: SokobanAction) -> Dict:
        """
        Convert SokobanAction to JSON payload for step request.

        Args:
            action: SokobanAction instance

        Returns:
            Dictionary representation suitable for JSON encoding
        """
        payload: Dict[str, Any] = {"command": action.command}
        if action.direction is not None:
            payload["direction"] = action.direction
        if action.path is not None:
            payload["path"] = action.path
        if action.metadata:
            payload["metadata"] = action.metadata
        return payload

    def _parse_result(self, payload: Dict) -> StepResult[SokobanObservation]:
        """
        Parse server response into StepResult[SokobanObservation].

        Args:
            payload: JSON response from server

        Returns:
            StepResult with SokobanObservation
        """
        obs_data = payload.get("observation", {})
        observation = SokobanObservation(
            board=obs_data.get("board", []),
            board_codes=obs_data.get("board_codes", []),
            board_shape=obs_data.get("board_shape", []),
            num_boxes=obs_data.get("num_boxes", 0),
            num_targets=obs_data.get("num_targets", 0),
            boxes_on_goals=obs_data.get("boxes_on_goals", 0),
            player_position=obs_data.get("player_position", [0, 0]),
            valid_moves=obs_data.get("valid_moves", []),
            moves_count=obs_data.get("moves_count", 0),
            pushes_count=obs_data.get("pushes_count", 0),
            status=obs_data.get("status", "fresh"),
            message=obs_data.get("message", ""),
            is_solved=obs_data.get("is_solved", False),
            done=payload.get("done", False),
            reward=payload.get("reward"),
            metadata=obs_data.get("metadata", {}),
        )

        return StepResult(
            observation=observation,
            reward=payload.get("reward"),
            done=payload.get("done", False),
        )

    def _parse_state(self, payload: Dict) -> SokobanState:
        """
        Parse server response into SokobanState object.

        Args:
            payload: JSON response from /state endpoint

        Returns:
            SokobanState object
        """
        return SokobanState(
            episode_id=payload.get("episode_id"),
            step_count=payload.get("step_count", 0),
            level=payload.get("level", ""),
            moves=payload.get("moves", []),
            status=payload.get("status", "fresh"),
        )
