from __future__ import annotations

import random
from typing import Iterable, List, Sequence

from crystal_quest.components.board import Board, board_from_rows
from crystal_quest.constants import CRYSTAL_KINDS

LETTERS = dict(zip("ABCDEF", CRYSTAL_KINDS))

# 8x8 layout with no two equal neighbours: cell (r, c) holds kind (c + 2r) % 6.
BASE_ROWS = [
    "ABCDEFAB",
    "CDEFABCD",
    "EFABCDEF",
    "ABCDEFAB",
    "CDEFABCD",
    "EFABCDEF",
    "ABCDEFAB",
    "CDEFABCD",
]


def board_from_letters(rows: Sequence[str]) -> Board:
    """Build a board from rows of letters A-F; '.' marks an empty cell."""
    return board_from_rows([[LETTERS.get(ch) for ch in row] for row in rows])


def letters_from_board(board: Board) -> List[str]:
    reverse = {kind: letter for letter, kind in LETTERS.items()}
    return ["".join(reverse.get(kind, '.') for kind in row) for row in board]


def with_rows(overrides: dict[int, str], base: Sequence[str] = BASE_ROWS) -> List[str]:
    rows = list(base)
    for index, row in overrides.items():
        rows[index] = row
    return rows


class ScriptedSource:
    """Random source that hands out scripted letters first, then falls back to a seeded Random."""

    def __init__(self, letters: Iterable[str] = (), seed: int = 0):
        self._queue = [LETTERS[ch] for ch in letters]
        self._fallback = random.Random(seed)
        self.draws = 0

    def choice(self, seq):
        self.draws += 1
        if self._queue:
            kind = self._queue.pop(0)
            assert kind in seq, f"{kind} not offered in {seq}"
            return kind
        return self._fallback.choice(seq)

    @property
    def exhausted(self) -> bool:
        return not self._queue
