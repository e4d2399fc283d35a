"""Game session value and the mutable ECS holder that points at the current one."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from crystal_quest.components.board import Board, Position


class Phase(Enum):
    """Move controller phases. Only IDLE and SELECTED are ever stored on a session."""
    IDLE = auto()
    SELECTED = auto()
    VALIDATING = auto()
    ACCEPTED_CASCADE = auto()
    REJECTED_BOUNCE = auto()


@dataclass(frozen=True, slots=True)
class GameSession:
    board: Board
    moves_remaining: int
    score: int = 0
    combo: int = 0
    game_over: bool = False
    phase: Phase = Phase.IDLE
    selected: Optional[Position] = None

    @property
    def accepts_input(self) -> bool:
        return not self.game_over and self.moves_remaining > 0

    def with_selection(self, pos: Optional[Position]) -> GameSession:
        if pos is None:
            return replace(self, phase=Phase.IDLE, selected=None)
        return replace(self, phase=Phase.SELECTED, selected=pos)


@dataclass(slots=True)
class SessionState:
    """Singleton component holding the current GameSession value."""
    session: GameSession
