from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

Token = Optional[str]
Row = Tuple[Token, ...]
Board = Tuple[Row, ...]


class Position(NamedTuple):
    row: int
    col: int

    def is_adjacent(self, other: Tuple[int, int]) -> bool:
        return abs(self.row - other[0]) + abs(self.col - other[1]) == 1


def board_from_rows(rows: Sequence[Sequence[Token]]) -> Board:
    return tuple(tuple(row) for row in rows)


def in_bounds(board: Board, pos: Tuple[int, int]) -> bool:
    size = len(board)
    return 0 <= pos[0] < size and 0 <= pos[1] < size


def token_at(board: Board, pos: Tuple[int, int]) -> Token:
    return board[pos[0]][pos[1]]


def iter_positions(board: Board) -> Iterator[Position]:
    for row in range(len(board)):
        for col in range(len(board[row])):
            yield Position(row, col)


def empty_positions(board: Board) -> list[Position]:
    return [pos for pos in iter_positions(board) if token_at(board, pos) is None]


def swapped(board: Board, a: Tuple[int, int], b: Tuple[int, int]) -> Board:
    """Return a copy of board with the tokens at a and b exchanged."""
    grid = [list(row) for row in board]
    grid[a[0]][a[1]], grid[b[0]][b[1]] = grid[b[0]][b[1]], grid[a[0]][a[1]]
    return board_from_rows(grid)
