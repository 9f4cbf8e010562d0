import numpy as np
import pytest

from board_locator.detection.pixels import normalized_intensity
from board_locator.notation.fen import DEFAULT_POSITION, FenFormatError
from board_locator.rendering.synthetic import (
    BACKGROUND,
    BOARD_COLORS,
    checkerboard_array,
    place_boards,
    render_board,
)

LIGHT, DARK = BOARD_COLORS[0]


def test_board_layout():
    board = render_board(5)
    assert board.size == (40, 40)
    assert board.getpixel((0, 0)) == LIGHT      # a8
    assert board.getpixel((5, 0)) == DARK       # b8
    assert board.getpixel((0, 35)) == DARK      # a1
    assert board.getpixel((39, 39)) == LIGHT    # h1


def test_pieces_leave_tile_edges_clear():
    board = render_board(20, fen=DEFAULT_POSITION)
    assert board.getpixel((10, 10)) == (20, 20, 20)       # dark rook on a8
    assert board.getpixel((90, 150)) == (250, 250, 250)   # light king on e1
    assert board.getpixel((0, 0)) == LIGHT
    assert board.getpixel((80, 140)) == DARK              # e1 tile corner
    assert board.getpixel((50, 90)) == LIGHT              # empty c4


def test_invalid_inputs():
    with pytest.raises(ValueError):
        render_board(0)
    with pytest.raises(FenFormatError):
        render_board(8, fen="8/8")


def test_place_boards():
    canvas = place_boards((30, 20), [(render_board(1), (3, 4))], background=(1, 2, 3))
    assert canvas.size == (30, 20)
    assert canvas.getpixel((0, 0)) == (1, 2, 3)
    assert canvas.getpixel((3, 4)) == LIGHT
    assert canvas.getpixel((11, 4)) == (1, 2, 3)


def test_checkerboard_array():
    arr = checkerboard_array(3, origin=(2, 1))
    assert arr.shape == (24 + 2, 24 + 4, 3)
    assert tuple(arr[1, 2]) == LIGHT
    assert tuple(arr[0, 0]) == BACKGROUND
    assert arr.dtype == np.uint8


def test_palette_is_detectable():
    for light, dark in BOARD_COLORS:
        assert abs(normalized_intensity(light) - normalized_intensity(dark)) > 0.1
        assert abs(normalized_intensity(dark) - normalized_intensity(BACKGROUND)) > 0.1
