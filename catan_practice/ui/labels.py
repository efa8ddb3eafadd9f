from __future__ import annotations

from catan_practice.domain.board import Terrain
from catan_practice.game.state import DraftPhase, DraftRound, GameState

PLAYER_COLORS: dict[int, str] = {
    1: "Red",
    2: "Blue",
    3: "Orange",
    4: "Green",
}

TERRAIN_STYLES: dict[Terrain, str] = {
    Terrain.FOREST: "green4",
    Terrain.HILLS: "dark_orange3",
    Terrain.PASTURE: "green_yellow",
    Terrain.FIELDS: "gold1",
    Terrain.MOUNTAINS: "grey62",
    Terrain.DESERT: "tan",
}

PLAYER_STYLES: dict[int, str] = {
    1: "red",
    2: "blue",
    3: "orange1",
    4: "green",
}

SETUP_COMPLETE_LABEL = "Setup Complete!"
ROAD_PHASE_LABEL = "Place a road"

_ROUND_ORDINALS: dict[DraftRound, str] = {
    DraftRound.FIRST: "1st",
    DraftRound.SECOND: "2nd",
}


def player_label(player_id: int) -> str:
    color = PLAYER_COLORS.get(player_id)
    if color is None:
        return f"Player {player_id}"
    return f"Player {player_id} ({color})"


def current_player_label(state: GameState) -> str:
    if state.phase is DraftPhase.COMPLETE:
        return SETUP_COMPLETE_LABEL
    return player_label(state.current_player_id)


def phase_label(state: GameState) -> str:
    if state.phase is DraftPhase.PLACING_ROAD:
        return ROAD_PHASE_LABEL
    if state.phase is DraftPhase.COMPLETE:
        return "All placements done"
    round_ = state.current_round or DraftRound.FIRST
    return f"Place {_ROUND_ORDINALS[round_]} settlement"


def player_style(player_id: int) -> str:
    return PLAYER_STYLES.get(player_id, "white")
