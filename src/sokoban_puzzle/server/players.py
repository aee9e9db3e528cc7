# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Computer players that pick a move from the currently legal directions."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models import Direction

logger = logging.getLogger(__name__)


class Player(ABC):
    """
    A move-choosing strategy.

    The puzzle never depends on how the choice is made, only on
    choose_move() returning one of the candidates.
    """

    name: str = "base"

    @abstractmethod
    def choose_move(self, candidates: Sequence[Direction]) -> Direction:
        """
        Pick one of the legal directions.

        Args:
            candidates: Non-empty sequence of currently legal directions

        Returns:
            One element of candidates

        Raises:
            ValueError: If candidates is empty
        """
        pass


class RandomPlayer(Player):
    """Picks uniformly among the legal directions."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_move(self, candidates: Sequence[Direction]) -> Direction:
        if not candidates:
            raise ValueError("RandomPlayer needs at least one legal direction")
        choice = self._rng.choice(list(candidates))
        logger.debug(f"Random player chose {choice.name} from {[d.name for d in candidates]}")
        return choice
