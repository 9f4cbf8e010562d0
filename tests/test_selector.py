import pytest

from board_locator.detection.search import Candidate, find_chessboards
from board_locator.detection.selector import BoardOption, select_board
from board_locator.rendering.synthetic import place_boards, render_board

SMALL = Candidate(0, 0, 40, 40)
MEDIUM = Candidate(50, 0, 64, 60)
LARGE = Candidate(0, 50, 96, 96)


def test_largest_and_smallest():
    candidates = [MEDIUM, SMALL, LARGE]
    assert select_board(candidates, BoardOption.LARGEST) == LARGE
    assert select_board(candidates, BoardOption.SMALLEST) == SMALL


def test_default_is_largest():
    assert select_board([SMALL, LARGE]) == LARGE


def test_string_options():
    assert select_board([SMALL, LARGE], "smallest") == SMALL
    assert select_board([SMALL, LARGE], "LARGEST") == LARGE


def test_empty_selection_is_none():
    assert select_board([]) is None
    assert select_board(iter([]), BoardOption.SMALLEST) is None


@pytest.mark.parametrize("option", ["medium", 3, None])
def test_invalid_option(option):
    with pytest.raises(ValueError):
        select_board([SMALL], option)
    with pytest.raises(ValueError):
        select_board([], option)


def test_ties_return_one_of_the_equal_candidates():
    a = Candidate(0, 0, 40, 40)
    b = Candidate(100, 0, 40, 40)
    assert select_board([a, b, Candidate(0, 0, 10, 10)]) in (a, b)


def test_selection_over_detected_boards():
    canvas = place_boards(
        (169, 124),
        [(render_board(6), (7, 9)), (render_board(11), (72, 21))],
    )
    boards = find_chessboards(canvas)
    assert select_board(boards, BoardOption.LARGEST) == Candidate(72, 21, 88, 88)
    assert select_board(boards, BoardOption.SMALLEST) == Candidate(7, 9, 48, 48)
