"""
Board Extractor – Detection Façade
==================================

Bundles an image with a :class:`SearchConfig` and exposes the detection
core plus the crop / square-extraction helpers downstream stages need.

Typical use::

    extractor = BoardExtractor("screenshot.png")
    board = extractor.find_chessboard(BoardOption.LARGEST)
    if board is not None:
        squares = extractor.extract_squares(board)   # 64 BGR tiles, a8 → h1

All image outputs follow the OpenCV convention (BGR ``uint8``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import cv2
import numpy as np

from board_locator.detection.pixels import ImageInput, PixelSource, as_pixel_source
from board_locator.detection.search import BOARD_TILES, Candidate, SearchConfig, find_chessboards
from board_locator.detection.selector import BoardOption, select_board

log = logging.getLogger(__name__)

_CANDIDATE_COLOR = (0, 200, 255)   # BGR amber
_SELECTED_COLOR = (0, 200, 0)      # BGR green


class BoardExtractor:
    """Detect and extract chessboards from one image.

    Parameters
    ----------
    image : str | Path | PixelSource | np.ndarray | PIL.Image.Image
        Image path or in-memory image (arrays are BGR).
    config : SearchConfig, optional
        Search parameters; defaults apply when omitted.
    """

    def __init__(
        self,
        image: ImageInput,
        config: Optional[SearchConfig] = None,
    ) -> None:
        self.source: PixelSource = as_pixel_source(image)
        self.config = config or SearchConfig()
        log.debug("Extractor ready  image=%dx%d  config=%s",
                  self.source.width, self.source.height, self.config)

    # ── Detection ──────────────────────────────────────────────────────

    def find_chessboards(self) -> List[Candidate]:
        """All candidates, in raster discovery order."""
        candidates = find_chessboards(self.source, self.config)
        if candidates:
            log.info(
                "Found %d chessboard candidate(s)",
                len(candidates),
                extra={"detail": "\n".join(_describe(c) for c in candidates)},
            )
        else:
            log.info("No chessboard found")
        return candidates

    def find_chessboard(
        self, option: Union[BoardOption, str] = BoardOption.LARGEST,
    ) -> Optional[Candidate]:
        """The largest (default) or smallest board, or ``None``."""
        option = BoardOption.coerce(option)
        board = select_board(self.find_chessboards(), option)
        if board is not None:
            log.info("Selected %s board: %s", option.value, _describe(board))
        return board

    # ── Extraction ─────────────────────────────────────────────────────

    def crop(self, candidate: Candidate) -> np.ndarray:
        """BGR copy of the image region covered by *candidate*."""
        bounds = Candidate(0, 0, self.source.width, self.source.height)
        if not bounds.contains(candidate.x, candidate.y):
            raise ValueError(f"Candidate {candidate} lies outside the image")
        x2 = min(candidate.right, self.source.width)
        y2 = min(candidate.bottom, self.source.height)
        region = self.source.rgb[candidate.y:y2, candidate.x:x2]
        if region.size == 0:
            raise ValueError(f"Candidate {candidate} is empty")
        return np.ascontiguousarray(region[:, :, ::-1])

    def extract_squares(
        self, candidate: Candidate, square_size: int = 64,
    ) -> List[np.ndarray]:
        """Split a detected board into 64 square images.

        The output order is **FEN row-major**: rank 8 (top row of the
        board) through rank 1, files a–h left-to-right within each rank.

        Parameters
        ----------
        candidate : Candidate
            Board to split.
        square_size : int
            Each square is resized to ``(square_size, square_size)``.

        Returns
        -------
        list[np.ndarray]
            64 BGR images (index 0 = a8, index 63 = h1).
        """
        board_img = self.crop(candidate)
        h, w = board_img.shape[:2]
        cell_h = h / BOARD_TILES
        cell_w = w / BOARD_TILES
        squares: List[np.ndarray] = []

        for row in range(BOARD_TILES):
            for col in range(BOARD_TILES):
                y1 = int(row * cell_h)
                y2 = max(int((row + 1) * cell_h), y1 + 1)
                x1 = int(col * cell_w)
                x2 = max(int((col + 1) * cell_w), x1 + 1)
                cell = board_img[y1:y2, x1:x2]
                squares.append(cv2.resize(cell, (square_size, square_size),
                                          interpolation=cv2.INTER_AREA))

        return squares

    # ── Debug visualisation ────────────────────────────────────────────

    def draw_candidates(
        self,
        candidates: Sequence[Candidate],
        selected: Optional[Candidate] = None,
    ) -> np.ndarray:
        """Outline every candidate (selected one in green) on a BGR copy."""
        vis = self.source.to_bgr()
        for index, cand in enumerate(candidates):
            color = _SELECTED_COLOR if cand == selected else _CANDIDATE_COLOR
            cv2.rectangle(vis, (cand.x, cand.y), (cand.right - 1, cand.bottom - 1), color, 2)
            cv2.putText(
                vis, f"#{index} {cand.width}x{cand.height}",
                (cand.x + 4, max(cand.y - 6, 12)),
                cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1,
            )
        return vis

    def save_debug(
        self,
        path: Union[str, Path],
        candidates: Sequence[Candidate],
        selected: Optional[Candidate] = None,
    ) -> np.ndarray:
        vis = self.draw_candidates(candidates, selected)
        try:
            written = cv2.imwrite(str(path), vis)
        except cv2.error as exc:
            raise ValueError(f"Could not write debug image to {path}: {exc}") from exc
        if not written:
            raise ValueError(f"Could not write debug image to {path}")
        log.info("Saved debug image to %s", path)
        return vis


def _describe(candidate: Candidate) -> str:
    return (f"x={candidate.x} y={candidate.y} "
            f"w={candidate.width} h={candidate.height}")
