from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from crystal_quest.components.board import Board, Position, in_bounds, swapped, token_at
from crystal_quest.components.match import Match, Orientation
from crystal_quest.constants import MIN_MATCH_LENGTH


def _scan_line(board: Board, line: int, orientation: Orientation) -> List[Match]:
    size = len(board)

    def cell(i: int) -> Position:
        if orientation is Orientation.HORIZONTAL:
            return Position(line, i)
        return Position(i, line)

    matches: List[Match] = []
    i = 0
    while i <= size - MIN_MATCH_LENGTH:
        kind = token_at(board, cell(i))
        if kind is not None and all(token_at(board, cell(i + k)) == kind for k in range(1, MIN_MATCH_LENGTH)):
            length = MIN_MATCH_LENGTH
            while i + length < size and token_at(board, cell(i + length)) == kind:
                length += 1
            matches.append(Match(origin=cell(i), orientation=orientation, length=length, kind=kind))
            # Resume after the run so one maximal run yields one record.
            i += length
        else:
            i += 1
    return matches


def find_matches(board: Board) -> Tuple[Match, ...]:
    """Detect all maximal horizontal and vertical runs of length >= 3.

    Rows are scanned first (top to bottom), then columns (left to right).
    """
    matches: List[Match] = []
    for row in range(len(board)):
        matches.extend(_scan_line(board, row, Orientation.HORIZONTAL))
    for col in range(len(board)):
        matches.extend(_scan_line(board, col, Orientation.VERTICAL))
    return tuple(matches)


def matched_cells(matches: Iterable[Match]) -> frozenset[Position]:
    """Union of cells covered by matches; a cell in two crossing runs appears once."""
    cells: Set[Position] = set()
    for match in matches:
        cells.update(match.cells())
    return frozenset(cells)


def _has_line_match(board: Board, pos: Position) -> bool:
    """Return True if a horizontal or vertical run of >= 3 passes through pos."""
    kind = token_at(board, pos)
    if kind is None:
        return False
    row, col = pos
    for d_row, d_col in ((0, 1), (1, 0)):
        run = 1
        r, c = row - d_row, col - d_col
        while in_bounds(board, (r, c)) and board[r][c] == kind:
            run += 1
            r, c = r - d_row, c - d_col
        r, c = row + d_row, col + d_col
        while in_bounds(board, (r, c)) and board[r][c] == kind:
            run += 1
            r, c = r + d_row, c + d_col
        if run >= MIN_MATCH_LENGTH:
            return True
    return False


def predict_swap_creates_match(board: Board, src: Position, dst: Position) -> bool:
    """Return True if swapping src/dst would put either cell inside a run."""
    if not (in_bounds(board, src) and in_bounds(board, dst)):
        return False
    candidate = swapped(board, src, dst)
    return _has_line_match(candidate, src) or _has_line_match(candidate, dst)


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a match. An empty list means a dead board."""
    size = len(board)
    swaps: List[Tuple[Position, Position]] = []
    for row in range(size):
        for col in range(size):
            pos = Position(row, col)
            right = Position(row, col + 1)
            if col + 1 < size and predict_swap_creates_match(board, pos, right):
                swaps.append((pos, right))
            down = Position(row + 1, col)
            if row + 1 < size and predict_swap_creates_match(board, pos, down):
                swaps.append((pos, down))
    return swaps
