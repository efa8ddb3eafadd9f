from __future__ import annotations

import random
from typing import Optional

from .board import BoardState, HexLayout, board_from_layout, build_layout
from .validation import NUMBER_TOKENS, TERRAIN_COUNTS, is_valid_board

MAX_RANDOMIZATION_ATTEMPTS = 10_000


class GenerationExhausted(RuntimeError):
    """Raised when no valid layout was found within the attempt cap."""


def generate_randomized_board(
    seed: Optional[int] = None,
    *,
    max_attempts: int = MAX_RANDOMIZATION_ATTEMPTS,
) -> BoardState:
    rng = random.Random(seed)

    terrain_pool = []
    for terrain, count in TERRAIN_COUNTS.items():
        terrain_pool.extend([terrain] * count)

    attempt_cap = max(1, int(max_attempts))
    for _ in range(attempt_cap):
        terrains = terrain_pool[:]
        rng.shuffle(terrains)

        numbers = NUMBER_TOKENS[:]
        rng.shuffle(numbers)

        layout = build_layout(terrain_order=terrains, token_order=numbers)
        if is_valid_board(layout):
            return board_from_layout(layout)

    raise GenerationExhausted(
        "Unable to generate a board that satisfies number placement constraints "
        f"after {attempt_cap} attempts."
    )


def generate_board(seed: Optional[int] = None) -> HexLayout:
    return generate_randomized_board(seed).tiles
