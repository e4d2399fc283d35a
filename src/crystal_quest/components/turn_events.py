"""Ordered visual events produced by a transition.

The presentation layer replays these with whatever pacing it likes; nothing here
feeds back into the engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple, Union

from crystal_quest.components.board import Board, Position
from crystal_quest.components.match import Match


@dataclass(frozen=True, slots=True)
class TileSelected:
    position: Position
    previous: Optional[Position] = None


@dataclass(frozen=True, slots=True)
class SwapRejected:
    src: Position
    dst: Position


@dataclass(frozen=True, slots=True)
class SwapAccepted:
    src: Position
    dst: Position
    board: Board


@dataclass(frozen=True, slots=True)
class CascadeStep:
    depth: int
    matches: Tuple[Match, ...]
    cleared: FrozenSet[Position]
    fall_distances: Dict[Position, int]
    spawned: Tuple[Position, ...]
    board: Board
    points: int
    bonus: int

    @property
    def total(self) -> int:
        return self.points + self.bonus


@dataclass(frozen=True, slots=True)
class TurnSettled:
    depth: int
    score: int
    moves_remaining: int
    board: Board


@dataclass(frozen=True, slots=True)
class GameOver:
    score: int


TurnEvent = Union[TileSelected, SwapRejected, SwapAccepted, CascadeStep, TurnSettled, GameOver]
