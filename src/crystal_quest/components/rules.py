from dataclasses import dataclass
from typing import Tuple

from crystal_quest.constants import (
    COMBO_BONUS_PER_LEVEL,
    CRYSTAL_KINDS,
    GRID_SIZE,
    INITIAL_MOVES,
    POINTS_PER_CELL,
)


@dataclass(frozen=True, slots=True)
class Rules:
    """Tunable game parameters; defaults mirror the constants module."""

    size: int = GRID_SIZE
    kinds: Tuple[str, ...] = CRYSTAL_KINDS
    initial_moves: int = INITIAL_MOVES
    points_per_cell: int = POINTS_PER_CELL
    combo_bonus_per_level: int = COMBO_BONUS_PER_LEVEL

    def __post_init__(self) -> None:
        if self.size < 3:
            raise ValueError(f"Board size must be at least 3, got {self.size}")
        if len(self.kinds) < 2:
            raise ValueError("At least two crystal kinds are required")
        if self.initial_moves < 0:
            raise ValueError(f"initial_moves must be non-negative, got {self.initial_moves}")
