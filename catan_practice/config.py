from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from catan_practice.domain.randomizer import MAX_RANDOMIZATION_ATTEMPTS

MIN_PLAYERS = 2
MAX_PLAYERS = 4


@dataclass(frozen=True)
class DraftConfig:
    player_count: int = 4
    skip_roads: bool = False
    seed: Optional[int] = None
    max_generation_attempts: int = MAX_RANDOMIZATION_ATTEMPTS

    def __post_init__(self) -> None:
        if self.player_count < MIN_PLAYERS or self.player_count > MAX_PLAYERS:
            raise ValueError(f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}.")
        if self.max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1.")
