from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol, Sequence, Tuple

from crystal_quest.components.board import Board, Position, board_from_rows, empty_positions
from crystal_quest.components.match import Match
from crystal_quest.systems.match_detection import find_matches, matched_cells


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class BoardInvariantError(RuntimeError):
    """A settled board still holds an empty cell or a match."""


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    kind: str

    @property
    def distance(self) -> int:
        return self.target.row - self.source.row


@dataclass(frozen=True, slots=True)
class ResolveStep:
    board: Board
    cleared: frozenset[Position]
    moves: Tuple[GravityMove, ...]
    spawned: Tuple[Position, ...]
    fall_distances: Dict[Position, int]


def generate_board(rng: RandomSource, kinds: Sequence[str], size: int) -> Board:
    """Fill every cell independently; no adjacency awareness."""
    return board_from_rows(
        [[rng.choice(kinds) for _ in range(size)] for _ in range(size)]
    )


def clear_cells(board: Board, positions: Iterable[Position]) -> Board:
    grid = [list(row) for row in board]
    for row, col in positions:
        grid[row][col] = None
    return board_from_rows(grid)


def compute_gravity_moves(board: Board) -> List[GravityMove]:
    """Stable per-column compaction toward the bottom row."""
    size = len(board)
    moves: List[GravityMove] = []
    for col in range(size):
        target_row = size - 1
        for row in range(size - 1, -1, -1):
            kind = board[row][col]
            if kind is None:
                continue
            if row != target_row:
                moves.append(GravityMove(source=Position(row, col), target=Position(target_row, col), kind=kind))
            target_row -= 1
    return moves


def apply_gravity_moves(board: Board, moves: Iterable[GravityMove]) -> Board:
    grid = [list(row) for row in board]
    # Moves per column are ordered bottom-up, so a target is always vacated before it is written.
    for move in moves:
        grid[move.target.row][move.target.col] = move.kind
        grid[move.source.row][move.source.col] = None
    return board_from_rows(grid)


def refill_empty_cells(board: Board, rng: RandomSource, kinds: Sequence[str]) -> Tuple[Board, List[Position]]:
    grid = [list(row) for row in board]
    spawned = empty_positions(board)
    for row, col in spawned:
        grid[row][col] = rng.choice(kinds)
    return board_from_rows(grid), spawned


def resolve(board: Board, matches: Iterable[Match], rng: RandomSource, kinds: Sequence[str]) -> ResolveStep:
    """One cascade step: clear matched cells, drop survivors, refill from the top."""
    cleared = matched_cells(matches)
    holed = clear_cells(board, cleared)
    moves = compute_gravity_moves(holed)
    compacted = apply_gravity_moves(holed, moves)
    filled, spawned = refill_empty_cells(compacted, rng, kinds)
    fall_distances: Dict[Position, int] = {move.target: move.distance for move in moves}
    for pos in spawned:
        # Fresh tiles fall in from just above the board.
        fall_distances[pos] = pos.row + 1
    return ResolveStep(
        board=filled,
        cleared=cleared,
        moves=tuple(moves),
        spawned=tuple(spawned),
        fall_distances=fall_distances,
    )


def generate_playable_board(rng: RandomSource, kinds: Sequence[str], size: int) -> Board:
    """Generate a board and resolve it until it holds no match.

    Only existing matches are repaired; the result may still have no legal move.
    """
    board = generate_board(rng, kinds, size)
    matches = find_matches(board)
    while matches:
        board = resolve(board, matches, rng, kinds).board
        matches = find_matches(board)
    return board


def check_settled_board(board: Board) -> None:
    empties = empty_positions(board)
    if empties:
        raise BoardInvariantError(f"Settled board has empty cells at {empties}")
    leftover = find_matches(board)
    if leftover:
        raise BoardInvariantError(f"Settled board still contains matches: {leftover}")
