"""
Board Search – Raster Walk over Run Lengths
===========================================

A chessboard seen straight on is eight equally long runs of alternating
colour along its top edge and eight more along its left edge.  The
search walks every pixel in row-major order and, at each pixel not yet
covered by a board it already found, *probes*:

  1. **X phase** – scan eight consecutive runs to the right.  The first
     run fixes the reference tile length (and must be at least
     ``min_tile_size``); each later run must stay within
     ``segment_ratio_tolerance`` of it.
  2. **Y phase** – only after a full X phase: scan eight runs downward
     from the same pixel, checked against the same reference length.
  3. Eight good runs on both axes register a :class:`Candidate` whose
     size is the sum of the runs on each axis.

Each probe also says where the walk continues on its row: past the
whole board (``8 * tile``) after a successful X phase, otherwise past
the first run (``tile``).

Row order matters: a pixel is skipped only if a candidate registered
*earlier in the same walk* covers it, so the result depends on the
order in which boards are met.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Union

import numpy as np

from board_locator.detection.pixels import ImageInput, PixelSource, as_pixel_source
from board_locator.detection.scanner import Axis, scan_segment

BOARD_TILES: int = 8


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ── Data classes ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class SearchConfig:
    """Tuning knobs for the board search."""
    max_color_delta: float = 0.1           # largest intensity step inside a tile
    segment_ratio_tolerance: float = 0.05  # allowed relative run-length deviation
    min_tile_size: int = 4                 # shortest acceptable first run (px)
    adapt_color_during_scan: bool = True   # baseline follows the last pixel

    def __post_init__(self) -> None:
        for name in ("max_color_delta", "segment_ratio_tolerance"):
            value = getattr(self, name)
            if not _is_number(value):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if not isinstance(self.adapt_color_during_scan, bool):
            raise ValueError(
                f"adapt_color_during_scan must be true or false, "
                f"got {self.adapt_color_during_scan!r}"
            )
        if not _is_number(self.min_tile_size) or int(self.min_tile_size) != self.min_tile_size:
            raise ValueError(f"min_tile_size must be an integer, got {self.min_tile_size!r}")
        if self.min_tile_size < 1:
            raise ValueError(f"min_tile_size must be >= 1, got {self.min_tile_size}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown search option(s): {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SearchConfig":
        """Read a configuration from a JSON object file."""
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Candidate:
    """Axis-aligned bounding box of a hypothesised chessboard."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> int:
        """Selection metric: ``width + height``."""
        return self.width + self.height

    def contains(self, px: int, py: int) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class Probe(NamedTuple):
    """Outcome of probing one start pixel."""
    candidate: Optional[Candidate]
    next_x: int


# ── Coverage bookkeeping ──────────────────────────────────────────────

class CoverageMap:
    """Boolean bitmap of pixels inside already-registered candidates."""

    def __init__(self, width: int, height: int) -> None:
        self._covered = np.zeros((height, width), dtype=bool)

    def mark(self, candidate: Candidate) -> None:
        self._covered[candidate.y:candidate.bottom, candidate.x:candidate.right] = True

    def is_covered(self, x: int, y: int) -> bool:
        return bool(self._covered[y, x])

    def next_uncovered(self, x: int, y: int) -> int:
        """First column ``>= x`` on row *y* that no candidate covers.

        Returns the row width when the rest of the row is covered.
        """
        row = self._covered[y, x:]
        free = np.flatnonzero(~row)
        if free.size == 0:
            return self._covered.shape[1]
        return x + int(free[0])


# ── Probing ───────────────────────────────────────────────────────────

def _deviation(length: int, reference: int) -> float:
    """Relative deviation of a run from the reference tile length."""
    return abs(length - reference) / reference


def probe(source: PixelSource, x: int, y: int, config: SearchConfig) -> Probe:
    """Try to grow a board whose top-left tile starts at ``(x, y)``.

    Returns
    -------
    Probe
        The registered candidate (or ``None``) and the next column the
        raster walk should visit on this row.
    """
    delta = config.max_color_delta
    tolerance = config.segment_ratio_tolerance
    adapt = config.adapt_color_during_scan

    # ---- X phase -------------------------------------------------------
    tile_length = 0
    cumulative_width = 0
    start_x = x
    x_success = False

    for i in range(BOARD_TILES):
        if start_x + tile_length > source.width:
            break

        length = scan_segment(source, start_x, y, Axis.X, delta, adapt)
        start_x += length
        cumulative_width += length

        if i == 0:
            tile_length = length
            if length < config.min_tile_size:
                break
        else:
            if _deviation(length, tile_length) > tolerance:
                break
            if i == BOARD_TILES - 1:
                x_success = True

    if not x_success:
        return Probe(None, x + tile_length)

    # ---- Y phase (same reference tile length) --------------------------
    cumulative_height = 0
    start_y = y
    candidate: Optional[Candidate] = None

    for i in range(BOARD_TILES):
        if start_y + tile_length > source.height:
            break

        length = scan_segment(source, x, start_y, Axis.Y, delta, adapt)
        start_y += length
        cumulative_height += length

        if _deviation(length, tile_length) > tolerance:
            break
        if i == BOARD_TILES - 1:
            candidate = Candidate(x, y, cumulative_width, cumulative_height)

    return Probe(candidate, x + BOARD_TILES * tile_length)


# ── Public API ────────────────────────────────────────────────────────

def iter_chessboards(
    image: ImageInput,
    config: Optional[SearchConfig] = None,
) -> Iterator[Candidate]:
    """Lazily yield candidates in discovery order.

    The input is validated immediately; scanning starts on the first
    ``next()``.
    """
    source = as_pixel_source(image)
    return _walk(source, config or SearchConfig())


def _walk(source: PixelSource, config: SearchConfig) -> Iterator[Candidate]:
    coverage = CoverageMap(source.width, source.height)

    for y in range(source.height):
        x = 0
        while x < source.width:
            if coverage.is_covered(x, y):
                x = coverage.next_uncovered(x, y)
                continue

            candidate, x = probe(source, x, y, config)
            if candidate is not None:
                coverage.mark(candidate)
                yield candidate


def find_chessboards(
    image: ImageInput,
    config: Optional[SearchConfig] = None,
) -> List[Candidate]:
    """Find every chessboard candidate in *image*.

    Parameters
    ----------
    image : PixelSource | np.ndarray | PIL.Image.Image | str | Path
        Image to search; arrays are BGR (OpenCV convention).
    config : SearchConfig, optional
        Search parameters; defaults apply when omitted.

    Returns
    -------
    list[Candidate]
        Candidates in raster discovery order (possibly empty).
    """
    return list(iter_chessboards(image, config))
