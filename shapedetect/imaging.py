"""Image acquisition: decode encoded image files into flat RGBA buffers.

Kept outside the engine; the detection core only ever sees pixels.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from shapedetect.errors import ImageTooLargeError, InvalidImageError


def decode_image(data: bytes, max_pixels: int | None = None) -> tuple[bytes, int, int]:
    """Decode PNG/JPEG/... bytes into (rgba_bytes, width, height).

    The header size is checked against max_pixels before any pixel data is
    decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if max_pixels is not None and width * height > max_pixels:
                raise ImageTooLargeError(f"image has {width * height} pixels, limit is {max_pixels}")
            rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidImageError(f"cannot decode image: {e}") from e
    return rgba.tobytes(), int(width), int(height)


def load_image(path: str | Path, max_pixels: int | None = None) -> tuple[bytes, int, int]:
    return decode_image(Path(path).read_bytes(), max_pixels)
