from __future__ import annotations

from dataclasses import dataclass

from catan_practice.domain.board import EdgeKey, normalize_edge

from .actions import (
    ACTION_PLACE_SETUP_ROAD,
    ACTION_PLACE_SETUP_SETTLEMENT,
    GameAction,
    place_setup_road,
    place_setup_settlement,
    road_record,
    settlement_record,
)
from .state import DraftPhase, GameState

EVENT_LOG_LIMIT = 120


class IllegalMove(ValueError):
    """Raised when a placement targets an illegal spot or the wrong phase."""


@dataclass(frozen=True)
class Rejection:
    action: GameAction
    reason: str


@dataclass(frozen=True)
class PlacementResult:
    state: GameState
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def legal_settlement_vertices(state: GameState) -> set[int]:
    if state.phase is not DraftPhase.PLACING_SETTLEMENT:
        return set()
    return set(state.board.legal_settlement_vertices(state.all_occupied_vertices()))


def legal_road_edges(state: GameState) -> set[EdgeKey]:
    if state.phase is not DraftPhase.PLACING_ROAD or state.pending_setup_vertex_id is None:
        return set()
    occupied_edges = state.all_occupied_edges()
    return {
        edge
        for edge in state.board.topology.vertex_edges(state.pending_setup_vertex_id)
        if edge not in occupied_edges
    }


def list_legal_actions(state: GameState) -> list[GameAction]:
    if state.phase is DraftPhase.PLACING_SETTLEMENT:
        return [place_setup_settlement(vertex_id) for vertex_id in sorted(legal_settlement_vertices(state))]
    if state.phase is DraftPhase.PLACING_ROAD:
        return [place_setup_road(edge) for edge in sorted(legal_road_edges(state))]
    return []


def apply_action(state: GameState, action: GameAction) -> GameState:
    next_state = state.clone()
    kind = action.kind
    data = action.data

    if kind == ACTION_PLACE_SETUP_SETTLEMENT:
        if next_state.phase is not DraftPhase.PLACING_SETTLEMENT:
            raise IllegalMove("Settlement placement is only valid while placing settlements.")
        vertex_id = int(data["vertex_id"])
        if vertex_id not in legal_settlement_vertices(next_state):
            raise IllegalMove(f"Illegal setup settlement vertex: {vertex_id}.")
        player = next_state.players[next_state.current_player_id]
        player.settlements.add(vertex_id)
        next_state.history.append(settlement_record(vertex_id, player.player_id))
        _record_event(next_state, f"P{player.player_id} setup settlement at V{vertex_id}.")
        if next_state.skip_roads:
            _advance_setup_turn(next_state)
        else:
            next_state.pending_setup_vertex_id = vertex_id
            next_state.phase = DraftPhase.PLACING_ROAD
        return next_state

    if kind == ACTION_PLACE_SETUP_ROAD:
        if next_state.phase is not DraftPhase.PLACING_ROAD:
            raise IllegalMove("Road placement is only valid while placing roads.")
        endpoints = tuple(data["edge"])
        if len(endpoints) != 2:
            raise IllegalMove(f"A road joins exactly two vertices, got {endpoints}.")
        edge = normalize_edge(endpoints)
        if edge not in legal_road_edges(next_state):
            raise IllegalMove(f"Illegal setup road edge: {edge}.")
        player = next_state.players[next_state.current_player_id]
        anchor_vertex_id = next_state.pending_setup_vertex_id
        assert anchor_vertex_id is not None
        player.roads.add(edge)
        next_state.history.append(road_record(edge, player.player_id, anchor_vertex_id))
        next_state.pending_setup_vertex_id = None
        _record_event(next_state, f"P{player.player_id} setup road {edge[0]}-{edge[1]}.")
        _advance_setup_turn(next_state)
        return next_state

    raise IllegalMove(f"Unsupported action kind: {kind}")


def place_settlement(state: GameState, vertex_id: int) -> PlacementResult:
    return _try_apply(state, place_setup_settlement(vertex_id))


def place_road(state: GameState, edge: EdgeKey) -> PlacementResult:
    return _try_apply(state, place_setup_road(edge))


def undo(state: GameState) -> GameState:
    """Revert the most recent placement; a no-op when nothing was placed."""
    next_state = state.clone()
    if not next_state.history:
        return next_state

    record = next_state.history.pop()
    player_id = int(record.data["player_id"])
    player = next_state.players[player_id]

    if record.kind == ACTION_PLACE_SETUP_SETTLEMENT:
        vertex_id = int(record.data["vertex_id"])
        player.settlements.discard(vertex_id)
        if next_state.skip_roads:
            next_state.setup_index -= 1
        next_state.pending_setup_vertex_id = None
        next_state.phase = DraftPhase.PLACING_SETTLEMENT
        _record_event(next_state, f"Undo P{player_id} settlement at V{vertex_id}.")
    else:
        edge = normalize_edge(record.data["edge"])
        player.roads.discard(edge)
        next_state.setup_index -= 1
        next_state.pending_setup_vertex_id = int(record.data["anchor_vertex_id"])
        next_state.phase = DraftPhase.PLACING_ROAD
        _record_event(next_state, f"Undo P{player_id} road {edge[0]}-{edge[1]}.")

    next_state.current_player_id = player_id
    return next_state


def _try_apply(state: GameState, action: GameAction) -> PlacementResult:
    try:
        next_state = apply_action(state, action)
    except IllegalMove as exc:
        return PlacementResult(state=state, rejection=Rejection(action=action, reason=str(exc)))
    return PlacementResult(state=next_state)


def _advance_setup_turn(state: GameState) -> None:
    state.setup_index += 1
    if state.setup_index >= len(state.setup_order):
        state.phase = DraftPhase.COMPLETE
        _record_event(state, "Setup complete.")
        return
    state.current_player_id = state.setup_order[state.setup_index]
    state.phase = DraftPhase.PLACING_SETTLEMENT


def _record_event(state: GameState, text: str) -> None:
    state.event_log.append(text)
    if len(state.event_log) > EVENT_LOG_LIMIT:
        state.event_log = state.event_log[-EVENT_LOG_LIMIT:]
