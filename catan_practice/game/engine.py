from __future__ import annotations

import random
from typing import Mapping, Protocol, Sequence

from catan_practice.config import DraftConfig
from catan_practice.domain.board import EdgeKey, board_from_layout
from catan_practice.domain.codec import decode_board, encode_board

from .actions import GameAction
from .policies import FirstLegalPolicy
from .rules import (
    PlacementResult,
    Rejection,
    apply_action,
    legal_road_edges,
    legal_settlement_vertices,
    list_legal_actions,
    place_road,
    place_settlement,
    undo,
)
from .state import DraftPhase, GameState, initialize_game_state, new_board

SEED_SPACE = 2**32


class EnginePolicy(Protocol):
    def decide(self, state: GameState, legal_actions: Sequence[GameAction]) -> GameAction:
        ...


class DraftSession:
    """
    Mutable holder for the current draft, driven by a front end.

    Every change goes through the pure rule functions; the session only swaps
    in the state they return, so a rejected placement or a failed load leaves
    the current draft untouched.
    """

    def __init__(
        self,
        config: DraftConfig | None = None,
        *,
        state: GameState | None = None,
        policies: Mapping[int, EnginePolicy] | None = None,
    ) -> None:
        self.config = config or DraftConfig()
        self.policies = dict(policies or {})
        self.last_rejection: Rejection | None = None
        self._default_policy: EnginePolicy = FirstLegalPolicy()
        self._rng = random.Random(self.config.seed)
        self.state = state if state is not None else self._fresh_state()

    @property
    def legal_settlement_vertices(self) -> set[int]:
        return legal_settlement_vertices(self.state)

    @property
    def legal_road_edges(self) -> set[EdgeKey]:
        return legal_road_edges(self.state)

    def is_finished(self) -> bool:
        return self.state.phase is DraftPhase.COMPLETE

    def can_undo(self) -> bool:
        return bool(self.state.history)

    def requires_new_board_confirmation(self) -> bool:
        return bool(self.state.history)

    def place_settlement(self, vertex_id: int) -> bool:
        return self._commit(place_settlement(self.state, vertex_id))

    def place_road(self, edge: EdgeKey) -> bool:
        return self._commit(place_road(self.state, edge))

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self.state = undo(self.state)
        self.last_rejection = None
        return True

    def new_board(self) -> GameState:
        self.state = self._fresh_state()
        self.last_rejection = None
        return self.state

    def save_board(self) -> str:
        return encode_board(self.state.board.tiles)

    def load_board(self, text: str) -> GameState:
        layout = decode_board(text)
        self.state = initialize_game_state(
            board_from_layout(layout),
            player_count=self.config.player_count,
            skip_roads=self.config.skip_roads,
        )
        self.last_rejection = None
        return self.state

    def play_tick(self) -> GameAction | None:
        if self.is_finished():
            return None
        legal_actions = list_legal_actions(self.state)
        if not legal_actions:
            return None

        current_player_id = self.state.current_player_id
        policy = self.policies.get(current_player_id, self._default_policy)
        action = policy.decide(self.state, legal_actions)
        if action not in legal_actions:
            raise ValueError(
                f"Policy for player {current_player_id} returned illegal action: {action}."
            )
        self.state = apply_action(self.state, action)
        self.last_rejection = None
        return action

    def autoplay(self, *, until_player: int | None = None, max_ticks: int | None = None) -> int:
        """Let policies place until the draft ends or `until_player` is up."""
        ticks = 0
        tick_cap = max_ticks if max_ticks is not None else 4 * len(self.state.setup_order)
        while not self.is_finished() and ticks < tick_cap:
            if until_player is not None and self.state.current_player_id == until_player:
                break
            if self.play_tick() is None:
                break
            ticks += 1
        return ticks

    def _commit(self, result: PlacementResult) -> bool:
        self.last_rejection = result.rejection
        if not result.accepted:
            return False
        self.state = result.state
        return True

    def _fresh_state(self) -> GameState:
        return new_board(
            self.config.skip_roads,
            seed=self._rng.randrange(SEED_SPACE),
            player_count=self.config.player_count,
            max_attempts=self.config.max_generation_attempts,
        )
