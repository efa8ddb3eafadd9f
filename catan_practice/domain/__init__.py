"""Board geometry, validation and generation."""

from .board import (
    BoardState,
    BoardTopology,
    EdgeKey,
    HexLayout,
    HexTile,
    Terrain,
    Vertex,
    adjacent_hex_indices,
    board_from_layout,
    build_standard_board,
    edge_keys,
    normalize_edge,
    standard_topology,
    vertex_keys,
)
from .codec import DecodeError, decode_board, encode_board
from .randomizer import GenerationExhausted, generate_board, generate_randomized_board
from .validation import (
    is_valid_board,
    pip_value,
    validate_distinct_neighbor_numbers,
    validate_red_token_spacing,
    validate_standard_counts,
    validate_vertex_pip_limit,
)

__all__ = [
    "BoardState",
    "BoardTopology",
    "DecodeError",
    "EdgeKey",
    "GenerationExhausted",
    "HexLayout",
    "HexTile",
    "Terrain",
    "Vertex",
    "adjacent_hex_indices",
    "board_from_layout",
    "build_standard_board",
    "decode_board",
    "edge_keys",
    "encode_board",
    "generate_board",
    "generate_randomized_board",
    "is_valid_board",
    "normalize_edge",
    "pip_value",
    "standard_topology",
    "validate_distinct_neighbor_numbers",
    "validate_red_token_spacing",
    "validate_standard_counts",
    "validate_vertex_pip_limit",
    "vertex_keys",
]
