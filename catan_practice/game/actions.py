from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from catan_practice.domain.board import EdgeKey, normalize_edge

ACTION_PLACE_SETUP_SETTLEMENT = "place_setup_settlement"
ACTION_PLACE_SETUP_ROAD = "place_setup_road"


@dataclass(frozen=True)
class GameAction:
    """A placement request, or a history record when it also names the player."""

    kind: str
    data: Dict[str, Any] = field(default_factory=dict)


def place_setup_settlement(vertex_id: int) -> GameAction:
    return GameAction(ACTION_PLACE_SETUP_SETTLEMENT, {"vertex_id": int(vertex_id)})


def place_setup_road(edge: EdgeKey) -> GameAction:
    return GameAction(ACTION_PLACE_SETUP_ROAD, {"edge": tuple(edge)})


def settlement_record(vertex_id: int, player_id: int) -> GameAction:
    return GameAction(
        ACTION_PLACE_SETUP_SETTLEMENT,
        {"vertex_id": int(vertex_id), "player_id": int(player_id)},
    )


def road_record(edge: EdgeKey, player_id: int, anchor_vertex_id: int) -> GameAction:
    # The anchor lets undo reopen the road phase on the right settlement.
    return GameAction(
        ACTION_PLACE_SETUP_ROAD,
        {"edge": normalize_edge(edge), "player_id": int(player_id), "anchor_vertex_id": int(anchor_vertex_id)},
    )
