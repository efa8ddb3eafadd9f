from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict

from catan_practice.config import MAX_PLAYERS, MIN_PLAYERS, DraftConfig
from catan_practice.domain.board import BoardState, EdgeKey, normalize_edge
from catan_practice.domain.randomizer import MAX_RANDOMIZATION_ATTEMPTS, generate_randomized_board

from .actions import GameAction


class DraftPhase(str, Enum):
    PLACING_SETTLEMENT = "placing_settlement"
    PLACING_ROAD = "placing_road"
    COMPLETE = "complete"


class DraftRound(str, Enum):
    FIRST = "first"
    SECOND = "second"


@dataclass
class PlayerState:
    player_id: int
    settlements: set[int] = field(default_factory=set)
    roads: set[EdgeKey] = field(default_factory=set)

    def clone(self) -> "PlayerState":
        return replace(self, settlements=set(self.settlements), roads=set(self.roads))


@dataclass
class GameState:
    """One snapshot of the draft.

    Rule functions never mutate a state they are given; they clone it and
    return the copy. `event_log` is left out of equality so that undoing a
    placement gives back a state equal to the one before it.
    """

    board: BoardState
    player_count: int
    players: Dict[int, PlayerState]
    phase: DraftPhase
    current_player_id: int
    setup_order: tuple[int, ...]
    setup_index: int = 0
    pending_setup_vertex_id: int | None = None
    skip_roads: bool = False
    history: list[GameAction] = field(default_factory=list)
    event_log: list[str] = field(default_factory=list, compare=False)

    def clone(self) -> "GameState":
        return replace(
            self,
            players={player_id: player.clone() for player_id, player in self.players.items()},
            history=list(self.history),
            event_log=list(self.event_log),
        )

    @property
    def current_round(self) -> DraftRound | None:
        if self.phase is DraftPhase.COMPLETE:
            return None
        return DraftRound.FIRST if self.setup_index < self.player_count else DraftRound.SECOND

    def all_occupied_vertices(self) -> set[int]:
        return set().union(*(player.settlements for player in self.players.values()))

    def all_occupied_edges(self) -> set[EdgeKey]:
        return set().union(*(player.roads for player in self.players.values()))

    def settlement_owner(self, vertex_id: int) -> int | None:
        return next(
            (player_id for player_id, player in self.players.items() if vertex_id in player.settlements),
            None,
        )

    def road_owner(self, edge: EdgeKey) -> int | None:
        edge = normalize_edge(edge)
        return next((player_id for player_id, player in self.players.items() if edge in player.roads), None)

    def settlement_count(self) -> int:
        return sum(len(player.settlements) for player in self.players.values())

    def road_count(self) -> int:
        return sum(len(player.roads) for player in self.players.values())


def make_setup_order(player_count: int) -> tuple[int, ...]:
    """Snake order: 1..n for the first round, n..1 for the second."""
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValueError(f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}.")
    first_round = tuple(range(1, player_count + 1))
    return first_round + first_round[::-1]


def initialize_game_state(
    board: BoardState,
    *,
    player_count: int = 4,
    skip_roads: bool = False,
) -> GameState:
    order = make_setup_order(player_count)
    return GameState(
        board=board,
        player_count=player_count,
        players={player_id: PlayerState(player_id=player_id) for player_id in order[:player_count]},
        phase=DraftPhase.PLACING_SETTLEMENT,
        current_player_id=order[0],
        setup_order=order,
        skip_roads=bool(skip_roads),
    )


def new_board(
    skip_roads: bool = False,
    *,
    seed: int | None = None,
    player_count: int = 4,
    max_attempts: int = MAX_RANDOMIZATION_ATTEMPTS,
) -> GameState:
    board = generate_randomized_board(seed, max_attempts=max_attempts)
    return initialize_game_state(board, player_count=player_count, skip_roads=skip_roads)


def new_game(config: DraftConfig) -> GameState:
    return new_board(
        config.skip_roads,
        seed=config.seed,
        player_count=config.player_count,
        max_attempts=config.max_generation_attempts,
    )
