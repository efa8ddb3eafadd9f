from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

Point = Tuple[float, float]
EdgeKey = Tuple[int, int]

BOARD_RADIUS = 2
HEX_COUNT = 19
CORNER_ROUNDING = 6
SQRT3 = math.sqrt(3)


class Terrain(str, Enum):
    FOREST = "forest"
    HILLS = "hills"
    PASTURE = "pasture"
    FIELDS = "fields"
    MOUNTAINS = "mountains"
    DESERT = "desert"


@dataclass(frozen=True)
class HexTile:
    id: int
    q: int
    r: int
    terrain: Terrain
    token_number: Optional[int]


HexLayout = Tuple[HexTile, ...]


@dataclass(frozen=True)
class Vertex:
    id: int
    point: Point
    adjacent_hex_ids: Tuple[int, ...]
    adjacent_vertex_ids: Tuple[int, ...]


# Slot order runs row by row, top to bottom, left to right. The desert sits
# in the centre slot of the reference layout.
DEFAULT_TERRAIN_ORDER: Tuple[Terrain, ...] = (
    Terrain.MOUNTAINS, Terrain.PASTURE, Terrain.FOREST,
    Terrain.FIELDS, Terrain.HILLS, Terrain.PASTURE, Terrain.HILLS,
    Terrain.FIELDS, Terrain.FOREST, Terrain.DESERT, Terrain.FOREST, Terrain.MOUNTAINS,
    Terrain.FOREST, Terrain.MOUNTAINS, Terrain.FIELDS, Terrain.PASTURE,
    Terrain.HILLS, Terrain.FIELDS, Terrain.PASTURE,
)
DEFAULT_TOKEN_ORDER: Tuple[int, ...] = (10, 2, 9, 12, 6, 4, 10, 9, 11, 3, 8, 8, 3, 4, 5, 5, 6, 11)


def normalize_edge(edge: Sequence[int]) -> EdgeKey:
    first, second = int(edge[0]), int(edge[1])
    return (first, second) if first <= second else (second, first)


@dataclass
class BoardTopology:
    """Fixed 19-hex graph shared by every layout.

    Vertex and edge keys are plain integers and integer pairs so the draft
    state can reference them without holding on to any geometry objects.
    """

    coords: Tuple[Tuple[int, int], ...]
    hex_vertex_ids: Dict[int, Tuple[int, ...]]
    hex_neighbors: Dict[int, Tuple[int, ...]]
    vertices: Dict[int, Vertex]
    edges: Dict[EdgeKey, Tuple[int, ...]]

    def blocked_vertices(self, occupied_vertices: Iterable[int]) -> set[int]:
        """Occupied vertices plus everything one edge away from them."""
        blocked: set[int] = set()
        for vertex_id in occupied_vertices:
            blocked.add(vertex_id)
            blocked.update(self.vertices[vertex_id].adjacent_vertex_ids)
        return blocked

    def legal_settlement_vertices(self, occupied_vertices: Iterable[int]) -> List[int]:
        return sorted(self.vertices.keys() - self.blocked_vertices(occupied_vertices))

    def is_legal_settlement(self, vertex_id: int, occupied_vertices: Iterable[int]) -> bool:
        return vertex_id in self.vertices and vertex_id not in self.blocked_vertices(occupied_vertices)

    def vertex_edges(self, vertex_id: int) -> List[EdgeKey]:
        return [normalize_edge((vertex_id, other)) for other in self.vertices[vertex_id].adjacent_vertex_ids]

    @staticmethod
    def normalize_edge_key(vertex_a: int, vertex_b: int) -> EdgeKey:
        return normalize_edge((vertex_a, vertex_b))

    def edge_exists(self, edge: Sequence[int]) -> bool:
        return len(edge) == 2 and normalize_edge(edge) in self.edges


@dataclass
class BoardState:
    tiles: HexLayout
    topology: BoardTopology

    @property
    def vertices(self) -> Dict[int, Vertex]:
        return self.topology.vertices

    @property
    def edges(self) -> Dict[EdgeKey, Tuple[int, ...]]:
        return self.topology.edges

    def vertex_adjacent_tiles(self, vertex_id: int) -> List[HexTile]:
        return [self.tiles[hex_id] for hex_id in self.vertices[vertex_id].adjacent_hex_ids]

    def legal_settlement_vertices(self, occupied_vertices: Iterable[int]) -> List[int]:
        return self.topology.legal_settlement_vertices(occupied_vertices)

    def is_legal_settlement(self, vertex_id: int, occupied_vertices: Iterable[int]) -> bool:
        return self.topology.is_legal_settlement(vertex_id, occupied_vertices)

    def edge_exists(self, edge: Sequence[int]) -> bool:
        return self.topology.edge_exists(edge)


@lru_cache(maxsize=1)
def standard_topology() -> BoardTopology:
    coords = _slot_coords(BOARD_RADIUS)
    hex_vertex_ids, vertices, edge_hexes = _trace_corners(coords)

    neighbors: Dict[int, set[int]] = {hex_id: set() for hex_id in range(len(coords))}
    for hex_ids in edge_hexes.values():
        if len(hex_ids) == 2:
            first, second = hex_ids
            neighbors[first].add(second)
            neighbors[second].add(first)

    return BoardTopology(
        coords=coords,
        hex_vertex_ids=hex_vertex_ids,
        hex_neighbors={hex_id: tuple(sorted(ids)) for hex_id, ids in neighbors.items()},
        vertices=vertices,
        edges=edge_hexes,
    )


def adjacent_hex_indices(hex_id: int) -> set[int]:
    topology = standard_topology()
    if hex_id not in topology.hex_neighbors:
        raise ValueError(f"Hex index must be in [0, {HEX_COUNT - 1}], received {hex_id}.")
    return set(topology.hex_neighbors[hex_id])


def vertex_keys(hexes: Sequence[HexTile]) -> Dict[int, Tuple[int, ...]]:
    """Map every vertex key to the sorted ids of the hexes meeting there."""
    _require_full_layout(hexes)
    return {vertex_id: vertex.adjacent_hex_ids for vertex_id, vertex in standard_topology().vertices.items()}


def edge_keys(hexes: Sequence[HexTile]) -> Dict[EdgeKey, Tuple[int, int]]:
    """Map every edge key to its two endpoint vertex keys."""
    _require_full_layout(hexes)
    return {edge_key: (edge_key[0], edge_key[1]) for edge_key in standard_topology().edges}


def build_layout(
    terrain_order: Optional[Sequence[Terrain]] = None,
    token_order: Optional[Sequence[int]] = None,
) -> HexLayout:
    """Assign terrains to slots in order, then tokens to the non-desert slots."""
    coords = standard_topology().coords
    terrains = list(DEFAULT_TERRAIN_ORDER if terrain_order is None else terrain_order)
    tokens = list(DEFAULT_TOKEN_ORDER if token_order is None else token_order)

    if len(terrains) != len(coords):
        raise ValueError(f"Expected {len(coords)} terrains, received {len(terrains)}.")
    numbered_slots = [slot for slot, terrain in enumerate(terrains) if terrain is not Terrain.DESERT]
    if len(tokens) != len(numbered_slots):
        raise ValueError(f"Expected {len(numbered_slots)} number tokens, received {len(tokens)}.")

    token_by_slot = dict(zip(numbered_slots, (int(token) for token in tokens)))
    return tuple(
        HexTile(id=slot, q=q, r=r, terrain=terrains[slot], token_number=token_by_slot.get(slot))
        for slot, (q, r) in enumerate(coords)
    )


def build_standard_board(
    terrain_order: Optional[Sequence[Terrain]] = None,
    token_order: Optional[Sequence[int]] = None,
) -> BoardState:
    return board_from_layout(build_layout(terrain_order, token_order))


def board_from_layout(tiles: Sequence[HexTile]) -> BoardState:
    _require_full_layout(tiles)
    return BoardState(tiles=tuple(tiles), topology=standard_topology())


def _require_full_layout(hexes: Sequence[HexTile]) -> None:
    if len(hexes) != HEX_COUNT:
        raise ValueError(f"Expected {HEX_COUNT} hexes, received {len(hexes)}.")


def _slot_coords(radius: int) -> Tuple[Tuple[int, int], ...]:
    return tuple(
        (q, r)
        for r in range(-radius, radius + 1)
        for q in range(max(-radius, -r - radius), min(radius, radius - r) + 1)
    )


def _corner_points(q: int, r: int) -> List[Point]:
    """Pointy-top corners of a unit hex, clockwise from the upper right."""
    center_x = SQRT3 * (q + r / 2)
    center_y = 1.5 * r
    points = []
    for corner in range(6):
        angle = math.radians(60 * corner - 30)
        points.append((center_x + math.cos(angle), center_y + math.sin(angle)))
    return points


def _trace_corners(
    coords: Sequence[Tuple[int, int]],
) -> Tuple[Dict[int, Tuple[int, ...]], Dict[int, Vertex], Dict[EdgeKey, Tuple[int, ...]]]:
    """Merge shared hex corners into numbered vertices and collect the edges between them."""
    ids_by_point: Dict[Tuple[float, float], int] = {}
    points: List[Point] = []
    touching_hexes: List[set[int]] = []
    links: List[set[int]] = []
    edge_hexes: Dict[EdgeKey, List[int]] = {}
    hex_vertex_ids: Dict[int, Tuple[int, ...]] = {}

    for hex_id, (q, r) in enumerate(coords):
        ring: List[int] = []
        for point in _corner_points(q, r):
            rounded = (round(point[0], CORNER_ROUNDING), round(point[1], CORNER_ROUNDING))
            if rounded not in ids_by_point:
                ids_by_point[rounded] = len(points)
                points.append(point)
                touching_hexes.append(set())
                links.append(set())
            vertex_id = ids_by_point[rounded]
            touching_hexes[vertex_id].add(hex_id)
            ring.append(vertex_id)
        hex_vertex_ids[hex_id] = tuple(ring)

        for index, vertex_id in enumerate(ring):
            next_id = ring[(index + 1) % len(ring)]
            links[vertex_id].add(next_id)
            links[next_id].add(vertex_id)
            edge_hexes.setdefault(normalize_edge((vertex_id, next_id)), []).append(hex_id)

    vertices = {
        vertex_id: Vertex(
            id=vertex_id,
            point=point,
            adjacent_hex_ids=tuple(sorted(touching_hexes[vertex_id])),
            adjacent_vertex_ids=tuple(sorted(links[vertex_id])),
        )
        for vertex_id, point in enumerate(points)
    }
    edges = {edge_key: tuple(sorted(hex_ids)) for edge_key, hex_ids in edge_hexes.items()}
    return hex_vertex_ids, vertices, edges
