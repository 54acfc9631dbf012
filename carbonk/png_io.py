"""Load and save RGBA PNG images as flat lists of pixels."""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError


class OriginLocation(enum.Enum):
    """Which row comes first in a flat pixel list."""

    LOWER_LEFT = "lower_left"
    UPPER_LEFT = "upper_left"


Pixel = tuple[int, int, int, int]


def load_png(path, origin: OriginLocation) -> tuple[tuple[int, int], list[Pixel]]:
    """Read a PNG as 8-bit RGBA.

    Returns ``((width, height), pixels)`` with ``pixels`` in row order given by
    ``origin``. Raises OSError if the file cannot be opened and ValueError if
    it cannot be read as an image.
    """
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise OSError(f"Failed to open PNG image file '{path}'.") from exc
    with handle:
        try:
            with Image.open(handle) as image:
                image.load()
                rgba = image.convert("RGBA")
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise ValueError(f"Failed to read PNG image from '{path}'.") from exc

    width, height = rgba.size
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(height, width, 4)
    if origin is OriginLocation.LOWER_LEFT:
        pixels = pixels[::-1]
    return (width, height), [tuple(p) for p in pixels.reshape(-1, 4).tolist()]


def save_png(path, size: tuple[int, int], data: Sequence[Sequence[int]], origin: OriginLocation) -> None:
    """Write ``width * height`` RGBA pixels to ``path`` as a PNG."""
    width, height = size
    pixels = np.asarray(data, dtype=np.uint8)
    if pixels.size != width * height * 4:
        raise ValueError(
            f"expected {width * height} RGBA pixels for a {width}x{height} image"
        )
    pixels = pixels.reshape(height, width, 4)
    if origin is OriginLocation.LOWER_LEFT:
        pixels = pixels[::-1]
    Image.fromarray(np.ascontiguousarray(pixels), mode="RGBA").save(path, format="PNG")