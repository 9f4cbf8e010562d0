"""
Segment Scanner – Directional Run Lengths
=========================================

Measures how far a run of "same enough" colour extends from a start
pixel along one cardinal axis.  Two pixels are compared through their
normalised intensity ``(R + G + B) / (3 * 255)``, read from the
precomputed :attr:`PixelSource.intensity` plane; the run stops at the
first pixel whose intensity differs from the baseline by more than
``max_delta``.

Intensities are float64.  A ``max_delta`` chosen to sit exactly on a
step between two grey levels (e.g. ``0.2`` for a step of 51) compares
as equal here, whereas single-precision arithmetic may round the step
to just above the threshold and end the run one pixel earlier.

With ``adapt=True`` the baseline drifts to the last accepted pixel, so
gentle gradients (vignetting, lighting falloff) do not end a run.  With
``adapt=False`` every pixel is compared against the run's first pixel.

The loop bound is ``x + i < width and y + i < height`` for *both* axes,
so a horizontal scan near the bottom of a wide image is also limited by
the remaining height.  When the bound is hit without a colour break the
scanner reports the distance to the edge along the scanned axis.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

from board_locator.detection.pixels import PixelSource

# First window size for the vectorised scan; doubles after each window.
_INITIAL_WINDOW: int = 32


class Axis(Enum):
    """Scan direction, stored as its unit step ``(dx, dy)``."""
    X = (1, 0)
    Y = (0, 1)

    @property
    def step(self) -> Tuple[int, int]:
        return self.value

    @classmethod
    def coerce(cls, axis: Union["Axis", Sequence[int]]) -> "Axis":
        """Accept an :class:`Axis` or a raw ``(dx, dy)`` step."""
        if isinstance(axis, Axis):
            return axis
        dx, dy = (int(v) for v in axis)
        if dx == 0 and dy == 0:
            raise ValueError(
                "A direction has to be assigned to the scan via either dx or dy"
            )
        try:
            return cls((dx, dy))
        except ValueError:
            raise ValueError(f"Unsupported scan step ({dx}, {dy})") from None


# ── Scanning ──────────────────────────────────────────────────────────

def scan_segment(
    source: PixelSource,
    x: int,
    y: int,
    axis: Union[Axis, Sequence[int]],
    max_delta: float,
    adapt: bool = True,
) -> int:
    """Return the length of the uniform run starting at ``(x, y)``.

    Parameters
    ----------
    source : PixelSource
        Image to scan.
    x, y : int
        Start pixel (must lie inside the image).
    axis : Axis | tuple[int, int]
        ``Axis.X`` / ``(1, 0)`` or ``Axis.Y`` / ``(0, 1)``.
    max_delta : float
        Largest intensity difference still treated as the same colour.
    adapt : bool
        Let the comparison baseline follow the last scanned pixel.

    Returns
    -------
    int
        Index of the first pixel exceeding *max_delta*, or the distance
        to the image edge along *axis* if no such pixel was found.
    """
    axis = Axis.coerce(axis)
    if not (0 <= x < source.width and 0 <= y < source.height):
        raise IndexError(f"Scan start ({x}, {y}) outside {source.width}x{source.height} image")
    limit = min(source.width - x, source.height - y)

    if axis is Axis.X:
        line = source.intensity[y, x:x + limit]
    else:
        line = source.intensity[y:y + limit, x]

    start = 0
    window = _INITIAL_WINDOW
    while start < limit:
        stop = min(limit, start + window)
        chunk = line[start:stop]
        if adapt:
            previous = line[start - 1] if start else line[0]
            deltas = np.abs(np.diff(chunk, prepend=previous))
        else:
            deltas = np.abs(chunk - line[0])

        breaks = np.flatnonzero(deltas > max_delta)
        if breaks.size:
            return start + int(breaks[0])

        start = stop
        window *= 2

    if axis is Axis.X:
        return source.width - x
    return source.height - y
