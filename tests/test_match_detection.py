from crystal_quest.components.board import Position
from crystal_quest.components.match import Match, Orientation
from crystal_quest.systems.match_detection import (
    find_matches,
    find_valid_swaps,
    matched_cells,
    predict_swap_creates_match,
)
from tests.helpers import BASE_ROWS, LETTERS, board_from_letters, with_rows

# Swapping (6,2) with (7,2) completes a four-long run on the bottom row.
SWAP_ROWS = with_rows({6: "ABADEFAB", 7: "AAFAEBCD"})


def test_base_board_has_no_matches():
    assert find_matches(board_from_letters(BASE_ROWS)) == ()


def test_overlapping_run_reported_once():
    board = board_from_letters(with_rows({0: "AABAAACD"}))
    matches = find_matches(board)
    assert matches == (
        Match(origin=Position(0, 3), orientation=Orientation.HORIZONTAL, length=3, kind=LETTERS['A']),
    )


def test_run_of_five_yields_single_match_of_length_five():
    board = board_from_letters(with_rows({0: "AAAAADAB"}))
    matches = find_matches(board)
    assert len(matches) == 1
    assert matches[0].length == 5
    assert matches[0].origin == (0, 0)
    assert matches[0].cells() == tuple(Position(0, c) for c in range(5))


def test_crossing_runs_share_a_cell():
    board = board_from_letters(with_rows({1: "ADEFABCD", 2: "AAABCDEF", 3: "CBCDEFAB"}))
    matches = find_matches(board)
    # Rows are reported before columns.
    assert [m.orientation for m in matches] == [Orientation.HORIZONTAL, Orientation.VERTICAL]
    assert matches[0].origin == (2, 0) and matches[0].length == 3
    assert matches[1].origin == (0, 0) and matches[1].length == 3
    cells = matched_cells(matches)
    assert len(cells) == 5
    assert Position(2, 0) in cells


def test_vertical_run_at_bottom_edge():
    rows = with_rows({5: "EFABCDEB", 6: "ABCDEFAB", 7: "CDEFABCB"})
    matches = find_matches(board_from_letters(rows))
    assert len(matches) == 1
    match = matches[0]
    assert match.orientation is Orientation.VERTICAL
    assert match.origin == (5, 7)
    assert match.length == 3
    assert match.cells() == (Position(5, 7), Position(6, 7), Position(7, 7))


def test_empty_cells_never_match():
    rows = with_rows({0: "...DEFAB"})
    assert find_matches(board_from_letters(rows)) == ()


def test_predict_swap_creates_match():
    board = board_from_letters(SWAP_ROWS)
    assert predict_swap_creates_match(board, Position(6, 2), Position(7, 2))
    assert not predict_swap_creates_match(board, Position(0, 0), Position(0, 1))
    assert not predict_swap_creates_match(board, Position(7, 7), Position(8, 7))


def test_find_valid_swaps_lists_the_completing_swap():
    swaps = find_valid_swaps(board_from_letters(SWAP_ROWS))
    assert (Position(6, 2), Position(7, 2)) in swaps


def test_base_layout_is_a_dead_board():
    # No adjacent swap on the diagonal-stripe layout can line up three crystals.
    assert find_valid_swaps(board_from_letters(BASE_ROWS)) == []
