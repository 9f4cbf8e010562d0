"""
Synthetic Boards – Checkerboard Renderer
========================================

Renders flat, axis-aligned chessboards with Pillow so the detector can be
exercised without screenshots:

  1. **Board** – an 8×8 grid of ``tile_size`` pixel squares, a8 light.
  2. **Pieces** (optional) – a FEN position drawn as filled discs inset
     from the tile edges, so the top and left edge of every tile keeps
     the plain square colour.
  3. **Canvas** – one or more boards pasted onto a solid background.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from board_locator.notation.fen import fen_to_board

Color3 = Tuple[int, int, int]

# ── Board background colours (light, dark) tuples in RGB ──────────────
# A small palette that roughly covers common chess.com / lichess boards.

BOARD_COLORS: list[Tuple[Color3, Color3]] = [
    ((240, 217, 181), (181, 136, 99)),    # chess.com brown
    ((235, 236, 208), (119, 149, 86)),    # chess.com green
    ((222, 227, 230), (140, 162, 173)),   # chess.com blue/grey
    ((255, 255, 255), (86, 133, 67)),     # lichess green
    ((212, 202, 190), (100, 92, 89)),     # newspaper-ish
    ((255, 255, 230), (118, 150, 86)),    # light green
    ((240, 240, 240), (200, 200, 200)),   # greyscale
    ((255, 206, 158), (209, 139, 71)),    # warm orange/brown
]

BACKGROUND: Color3 = (0, 0, 0)

_LIGHT_PIECE: Tuple[Color3, Color3] = ((250, 250, 250), (30, 30, 30))  # fill, outline
_DARK_PIECE: Tuple[Color3, Color3] = ((20, 20, 20), (230, 230, 230))


def render_board(
    tile_size: int,
    light: Color3 = BOARD_COLORS[0][0],
    dark: Color3 = BOARD_COLORS[0][1],
    fen: Optional[str] = None,
) -> Image.Image:
    """Render an 8×8 board of ``8 * tile_size`` pixels per side.

    Parameters
    ----------
    tile_size : int
        Side length of one square in pixels.
    light, dark : tuple[int, int, int]
        RGB colours of the light and dark squares.
    fen : str, optional
        Position to draw on top of the squares.
    """
    if tile_size < 1:
        raise ValueError(f"tile_size must be >= 1, got {tile_size}")

    side = 8 * tile_size
    board = Image.new("RGB", (side, side), light)
    for row in range(8):
        for col in range(8):
            if (row + col) % 2 == 1:
                x, y = col * tile_size, row * tile_size
                board.paste(dark, (x, y, x + tile_size, y + tile_size))

    if fen is not None:
        _draw_pieces(board, fen_to_board(fen), tile_size)

    return board


def _draw_pieces(board: Image.Image, grid: list, tile_size: int) -> None:
    """Draw each piece as a disc that stays clear of the tile edges."""
    draw = ImageDraw.Draw(board)
    inset = max(1, tile_size // 5)
    for row, rank in enumerate(grid):
        for col, symbol in enumerate(rank):
            if symbol is None:
                continue
            fill, outline = _LIGHT_PIECE if symbol.isupper() else _DARK_PIECE
            x, y = col * tile_size, row * tile_size
            draw.ellipse(
                (x + inset, y + inset, x + tile_size - 1 - inset, y + tile_size - 1 - inset),
                fill=fill, outline=outline,
            )


def place_boards(
    canvas_size: Tuple[int, int],
    boards: Sequence[Tuple[Image.Image, Tuple[int, int]]],
    background: Color3 = BACKGROUND,
) -> Image.Image:
    """Paste ``(board, (x, y))`` pairs onto a ``(width, height)`` canvas."""
    canvas = Image.new("RGB", canvas_size, background)
    for board, origin in boards:
        canvas.paste(board, origin)
    return canvas


def checkerboard_array(
    tile_size: int,
    origin: Tuple[int, int] = (0, 0),
    canvas_size: Optional[Tuple[int, int]] = None,
    light: Color3 = BOARD_COLORS[0][0],
    dark: Color3 = BOARD_COLORS[0][1],
    background: Color3 = BACKGROUND,
) -> np.ndarray:
    """Single board on a canvas, returned as an ``(H, W, 3)`` RGB array.

    The canvas defaults to the board plus the origin offset on each side.
    """
    board = render_board(tile_size, light, dark)
    if canvas_size is None:
        canvas_size = (board.width + 2 * origin[0], board.height + 2 * origin[1])
    canvas = place_boards(canvas_size, [(board, origin)], background)
    return np.asarray(canvas)
