from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from crystal_quest.components.board import Position


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True, slots=True)
class Match:
    """A maximal run of identical crystals.

    origin is the leftmost (horizontal) or topmost (vertical) cell of the run.
    """
    origin: Position
    orientation: Orientation
    length: int
    kind: str

    def cells(self) -> Tuple[Position, ...]:
        row, col = self.origin
        if self.orientation is Orientation.HORIZONTAL:
            return tuple(Position(row, col + i) for i in range(self.length))
        return tuple(Position(row + i, col) for i in range(self.length))
