"""
Pixel Source – Read-only Raster Access
======================================

Wraps an in-memory image so the detection core can ask for the image
size and individual RGB pixels without caring where the pixels came
from.  Accepted inputs:

  • ``np.ndarray`` – OpenCV convention (BGR, ``uint8``), or RGB when
    constructed with ``channel_order="rgb"``.  Grayscale and 4-channel
    arrays are converted.
  • ``PIL.Image.Image`` – converted to RGB.
  • A file path – decoded with ``cv2.imread``.

Both backing arrays (RGB pixels and the normalised intensity plane) are
marked read-only; a search can never mutate the image it scans.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np
from PIL import Image

RGB = Tuple[int, int, int]

# Divisor of the channel sum: three channels, each 0–255.
INTENSITY_SCALE: float = 255.0 * 3


class ImageNotFoundError(FileNotFoundError):
    """Raised when an image path does not resolve to an existing file."""


def normalized_intensity(color) -> Union[float, np.ndarray]:
    """Mean of the three channels, each normalised to ``[0, 1]``.

    Accepts a single ``(r, g, b)`` triple or an ``(..., 3)`` array; the
    channel axis is always the last one.
    """
    channels = np.asarray(color, dtype=np.int32)
    return channels.sum(axis=-1) / INTENSITY_SCALE


# ── Pixel source ──────────────────────────────────────────────────────

class PixelSource:
    """Immutable RGB raster with a precomputed intensity plane.

    Parameters
    ----------
    pixels : np.ndarray
        ``(H, W)``, ``(H, W, 3)`` or ``(H, W, 4)`` array with values in
        ``[0, 255]``.
    channel_order : str
        ``"bgr"`` (default, OpenCV) or ``"rgb"``.
    """

    def __init__(self, pixels: np.ndarray, channel_order: str = "bgr") -> None:
        if pixels is None:
            raise ValueError("A pixel array is required")
        arr = np.asarray(pixels)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported image shape {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError(
                f"Image must have non-zero dimensions, got {arr.shape[1]}x{arr.shape[0]}"
            )

        order = channel_order.lower()
        if order not in ("bgr", "rgb"):
            raise ValueError(f"Unknown channel order: {channel_order!r}")

        arr = arr[:, :, :3]
        if order == "bgr":
            arr = arr[:, :, ::-1]
        rgb = np.array(arr, dtype=np.uint8, order="C")
        rgb.flags.writeable = False

        intensity = normalized_intensity(rgb)
        intensity.flags.writeable = False

        self._rgb = rgb
        self._intensity = intensity

    # ── Constructors ───────────────────────────────────────────────────

    @classmethod
    def from_pil(cls, image: Image.Image) -> "PixelSource":
        """Build a source from a Pillow image (any mode)."""
        return cls(np.asarray(image.convert("RGB")), channel_order="rgb")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PixelSource":
        """Decode an image file with OpenCV.

        Raises
        ------
        ImageNotFoundError
            If *path* is not an existing file.
        ValueError
            If OpenCV cannot decode the file.
        """
        path = Path(path)
        if not path.is_file():
            raise ImageNotFoundError(f"An image does not exist at the given path: {path}")
        image = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if image is None:
            raise ValueError(f"Could not decode image: {path}")
        return cls(image, channel_order="bgr")

    # ── Accessors ──────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return int(self._rgb.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgb.shape[0])

    @property
    def rgb(self) -> np.ndarray:
        """Read-only ``(H, W, 3)`` RGB array."""
        return self._rgb

    @property
    def intensity(self) -> np.ndarray:
        """Read-only ``(H, W)`` plane of ``(R + G + B) / (3 * 255)``."""
        return self._intensity

    def get_pixel(self, x: int, y: int) -> RGB:
        """Return the ``(r, g, b)`` triple at column *x*, row *y*."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = self._rgb[y, x]
        return int(r), int(g), int(b)

    def to_bgr(self) -> np.ndarray:
        """Return a writable BGR copy for OpenCV drawing / cropping."""
        return np.ascontiguousarray(self._rgb[:, :, ::-1])

    def __repr__(self) -> str:
        return f"PixelSource(width={self.width}, height={self.height})"


ImageInput = Union[PixelSource, np.ndarray, Image.Image, str, Path]


def as_pixel_source(image: ImageInput) -> PixelSource:
    """Coerce any supported image input into a :class:`PixelSource`.

    NumPy arrays are taken to be BGR, as everywhere else in OpenCV code.
    """
    if image is None:
        raise ValueError("An image is required")
    if isinstance(image, PixelSource):
        return image
    if isinstance(image, (str, Path)):
        return PixelSource.from_file(image)
    if isinstance(image, Image.Image):
        return PixelSource.from_pil(image)
    if isinstance(image, np.ndarray):
        return PixelSource(image, channel_order="bgr")
    raise ValueError(f"Unsupported image type: {type(image).__name__}")
