from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from catan_practice.domain.validation import vertex_pip_total

from .actions import ACTION_PLACE_SETUP_SETTLEMENT, GameAction
from .state import GameState


class FirstLegalPolicy:
    """Deterministic fallback policy used when no policy is provided."""

    def decide(self, state: GameState, legal_actions: Sequence[GameAction]) -> GameAction:
        if not legal_actions:
            raise ValueError("No legal actions available.")
        return legal_actions[0]


class RandomPolicy:
    def __init__(self, *, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def decide(self, state: GameState, legal_actions: Sequence[GameAction]) -> GameAction:
        if not legal_actions:
            raise ValueError("No legal actions available.")
        return self._rng.choice(list(legal_actions))


@dataclass
class PipGreedyPolicy:
    """
    Simulated opponent: settle on the richest open vertex by pip total,
    then take the first open road next to it.
    """

    def decide(self, state: GameState, legal_actions: Sequence[GameAction]) -> GameAction:
        if not legal_actions:
            raise ValueError("No legal actions available.")
        settlements = [action for action in legal_actions if action.kind == ACTION_PLACE_SETUP_SETTLEMENT]
        if not settlements:
            return legal_actions[0]
        tiles = state.board.tiles
        return max(
            settlements,
            key=lambda action: (vertex_pip_total(tiles, int(action.data["vertex_id"])), -int(action.data["vertex_id"])),
        )
