from __future__ import annotations

from typing import Dict, Optional, Sequence

from .board import HexTile, Terrain, standard_topology

TERRAIN_COUNTS: Dict[Terrain, int] = {
    Terrain.FOREST: 4,
    Terrain.HILLS: 3,
    Terrain.PASTURE: 4,
    Terrain.FIELDS: 4,
    Terrain.MOUNTAINS: 3,
    Terrain.DESERT: 1,
}

NUMBER_TOKENS = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]
RED_TOKEN_NUMBERS = {6, 8}
VERTEX_PIP_LIMIT = 13

PIP_VALUES = {
    2: 1,
    3: 2,
    4: 3,
    5: 4,
    6: 5,
    8: 5,
    9: 4,
    10: 3,
    11: 2,
    12: 1,
}


def pip_value(token_number: Optional[int]) -> int:
    if token_number is None:
        return 0
    return PIP_VALUES.get(token_number, 0)


def vertex_pip_total(hexes: Sequence[HexTile], vertex_id: int) -> int:
    vertex = standard_topology().vertices[vertex_id]
    return sum(pip_value(hexes[hex_id].token_number) for hex_id in vertex.adjacent_hex_ids)


def is_valid_board(hexes: Sequence[HexTile]) -> bool:
    """Return True when a layout passes every placement constraint."""
    if len(hexes) != len(standard_topology().coords):
        return False
    return (
        validate_distinct_neighbor_numbers(hexes)
        and validate_red_token_spacing(hexes)
        and validate_vertex_pip_limit(hexes)
    )


def validate_distinct_neighbor_numbers(hexes: Sequence[HexTile]) -> bool:
    for first_id, second_id in _neighbor_pairs():
        number = hexes[first_id].token_number
        if number is not None and number == hexes[second_id].token_number:
            return False
    return True


def validate_red_token_spacing(hexes: Sequence[HexTile]) -> bool:
    red_tile_ids = {tile.id for tile in hexes if tile.token_number in RED_TOKEN_NUMBERS}
    if len(red_tile_ids) <= 1:
        return True

    for first_id, second_id in _neighbor_pairs():
        if first_id in red_tile_ids and second_id in red_tile_ids:
            return False
    return True


def validate_vertex_pip_limit(hexes: Sequence[HexTile], limit: int = VERTEX_PIP_LIMIT) -> bool:
    for vertex_id in standard_topology().vertices:
        if vertex_pip_total(hexes, vertex_id) >= limit:
            return False
    return True


def validate_standard_counts(hexes: Sequence[HexTile]) -> bool:
    terrain_counts: Dict[Terrain, int] = {terrain: 0 for terrain in TERRAIN_COUNTS}
    numbers = []
    for tile in hexes:
        terrain_counts[tile.terrain] += 1
        if tile.terrain is Terrain.DESERT:
            if tile.token_number is not None:
                return False
        elif tile.token_number is None:
            return False
        else:
            numbers.append(tile.token_number)

    if terrain_counts != TERRAIN_COUNTS:
        return False

    return sorted(numbers) == sorted(NUMBER_TOKENS)


def _neighbor_pairs() -> list[tuple[int, int]]:
    pairs = []
    for hex_id, neighbor_ids in standard_topology().hex_neighbors.items():
        for neighbor_id in neighbor_ids:
            if hex_id < neighbor_id:
                pairs.append((hex_id, neighbor_id))
    return pairs
