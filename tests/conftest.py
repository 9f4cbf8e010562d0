import logging
from typing import Sequence

import numpy as np
import pytest

from board_locator.detection.pixels import PixelSource
from board_locator.rendering.synthetic import BOARD_COLORS, checkerboard_array

LIGHT, DARK = BOARD_COLORS[0]


def grid_image(
    col_widths: Sequence[int],
    row_heights: Sequence[int],
    origin=(0, 0),
    canvas=None,
    light=LIGHT,
    dark=DARK,
    background=(0, 0, 0),
) -> np.ndarray:
    """RGB array with an irregular checker grid on a solid background."""
    ox, oy = origin
    w, h = sum(col_widths), sum(row_heights)
    cw, ch = canvas or (w + 2 * ox, h + 2 * oy)
    img = np.zeros((ch, cw, 3), dtype=np.uint8)
    img[:, :] = background
    y = oy
    for r, rh in enumerate(row_heights):
        x = ox
        for c, cw_ in enumerate(col_widths):
            img[y:y + rh, x:x + cw_] = light if (r + c) % 2 == 0 else dark
            x += cw_
        y += rh
    return img


@pytest.fixture
def board_source():
    """Factory: a single uniform board as an RGB PixelSource."""
    def _make(tile_size, origin=(0, 0), canvas_size=None, **colors):
        arr = checkerboard_array(tile_size, origin, canvas_size, **colors)
        return PixelSource(arr, channel_order="rgb")
    return _make


@pytest.fixture
def solid_source():
    def _make(width, height, color=(90, 90, 90)):
        arr = np.zeros((height, width, 3), dtype=np.uint8)
        arr[:, :] = color
        return PixelSource(arr, channel_order="rgb")
    return _make


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
