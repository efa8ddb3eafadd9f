"""Placement draft state machine."""

from .actions import (
    ACTION_PLACE_SETUP_ROAD,
    ACTION_PLACE_SETUP_SETTLEMENT,
    GameAction,
    place_setup_road,
    place_setup_settlement,
)
from .engine import DraftSession
from .policies import FirstLegalPolicy, PipGreedyPolicy, RandomPolicy
from .rules import (
    IllegalMove,
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
from .state import (
    DraftPhase,
    DraftRound,
    GameState,
    PlayerState,
    initialize_game_state,
    make_setup_order,
    new_board,
    new_game,
)

__all__ = [
    "ACTION_PLACE_SETUP_ROAD",
    "ACTION_PLACE_SETUP_SETTLEMENT",
    "DraftPhase",
    "DraftRound",
    "DraftSession",
    "FirstLegalPolicy",
    "GameAction",
    "GameState",
    "IllegalMove",
    "PipGreedyPolicy",
    "PlacementResult",
    "PlayerState",
    "RandomPolicy",
    "Rejection",
    "apply_action",
    "initialize_game_state",
    "legal_road_edges",
    "legal_settlement_vertices",
    "list_legal_actions",
    "make_setup_order",
    "new_board",
    "new_game",
    "place_road",
    "place_setup_road",
    "place_setup_settlement",
    "place_settlement",
    "undo",
]
