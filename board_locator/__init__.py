"""
Chessboard Locator
==================

Finds axis-aligned chessboards in arbitrary raster images – screenshots,
diagrams, scans – without knowing their position, size or count.  A
board is recognised by its structure alone: eight tiles of near-uniform,
alternating colour along its top edge and eight along its left edge.

Architecture:
    1. Pixel Source    – read-only RGB / intensity access (NumPy, OpenCV, Pillow)
    2. Segment Scanner – run length of uniform colour along one axis
    3. Board Search    – raster walk assembling 8 + 8 runs into rectangles
    4. Board Selector  – largest / smallest candidate
    5. Extraction      – crop, 64-square split, debug overlay
    6. FEN Utilities   – piece layout ↔ FEN text for downstream stages
"""

from board_locator.detection.extractor import BoardExtractor
from board_locator.detection.pixels import ImageNotFoundError, PixelSource
from board_locator.detection.search import Candidate, SearchConfig, find_chessboards
from board_locator.detection.selector import BoardOption, select_board

__version__ = "1.0.0"

__all__ = [
    "BoardExtractor",
    "BoardOption",
    "Candidate",
    "ImageNotFoundError",
    "PixelSource",
    "SearchConfig",
    "find_chessboards",
    "select_board",
]
