"""Average the colour of a small pixel window inside a raw frame buffer.

Frames arrive as row-major byte buffers whose rows may be padded beyond
``width * bytes_per_pixel``. :class:`PixelBufferView` wraps such a buffer
without copying it, and :func:`sample` reads only the requested window, so it
is cheap enough to run on every preview frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.lib.stride_tricks import as_strided

from .sample import ColorSample

LIVE_WINDOW_SIZE = 10
STILL_WINDOW_SIZE = 20

Point = Tuple[float, float]
BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


class OutOfBoundsError(ValueError):
    """The sampling window contains no pixel inside the frame."""


@dataclass(frozen=True)
class PixelFormat:
    """Byte layout of one pixel: its size and where R, G and B live."""

    name: str
    bytes_per_pixel: int
    red_offset: int
    green_offset: int
    blue_offset: int

    def __post_init__(self) -> None:
        for offset in (self.red_offset, self.green_offset, self.blue_offset):
            if not 0 <= offset < self.bytes_per_pixel:
                raise ValueError(
                    f"Channel offset {offset} does not fit a "
                    f"{self.bytes_per_pixel}-byte pixel"
                )

    @classmethod
    def from_name(cls, name: str) -> "PixelFormat":
        key = name.strip().upper()
        try:
            return PIXEL_FORMATS[key]
        except KeyError:
            known = ", ".join(sorted(PIXEL_FORMATS))
            raise ValueError(f"Unknown pixel format '{name}'. Known: {known}") from None


BGRA = PixelFormat("BGRA", 4, red_offset=2, green_offset=1, blue_offset=0)
RGBA = PixelFormat("RGBA", 4, red_offset=0, green_offset=1, blue_offset=2)
ARGB = PixelFormat("ARGB", 4, red_offset=1, green_offset=2, blue_offset=3)
RGB = PixelFormat("RGB", 3, red_offset=0, green_offset=1, blue_offset=2)
BGR = PixelFormat("BGR", 3, red_offset=2, green_offset=1, blue_offset=0)

PIXEL_FORMATS: Dict[str, PixelFormat] = {
    fmt.name: fmt for fmt in (BGRA, RGBA, ARGB, RGB, BGR)
}


class PixelBufferView:
    """Read-only, stride-aware view over a row-major pixel buffer."""

    def __init__(
        self,
        buffer: BufferLike,
        width: int,
        height: int,
        bytes_per_row: int,
        pixel_format: PixelFormat = BGRA,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Invalid frame size {width}x{height}")
        min_row = width * pixel_format.bytes_per_pixel
        if bytes_per_row < min_row:
            raise ValueError(
                f"bytes_per_row={bytes_per_row} is smaller than one row of "
                f"{width} {pixel_format.name} pixels ({min_row} bytes)"
            )

        if isinstance(buffer, np.ndarray):
            if buffer.dtype != np.uint8:
                raise ValueError(
                    f"Pixel arrays must hold uint8 bytes, got dtype {buffer.dtype}"
                )
            flat = np.ascontiguousarray(buffer).reshape(-1)
        else:
            flat = np.frombuffer(buffer, dtype=np.uint8)

        # The last row may legitimately omit its padding.
        required = (height - 1) * bytes_per_row + min_row if height else 0
        if flat.size < required:
            raise ValueError(
                f"Buffer holds {flat.size} bytes but a {width}x{height} frame "
                f"with stride {bytes_per_row} needs {required}"
            )

        self.width = width
        self.height = height
        self.bytes_per_row = bytes_per_row
        self.pixel_format = pixel_format
        self._pixels = as_strided(
            flat,
            shape=(height, width, pixel_format.bytes_per_pixel),
            strides=(bytes_per_row, pixel_format.bytes_per_pixel, 1),
            writeable=False,
        )

    @classmethod
    def from_array(
        cls, array: np.ndarray, pixel_format: PixelFormat = BGR
    ) -> "PixelBufferView":
        """Wrap an ``(H, W, C)`` uint8 image such as an OpenCV or PIL frame."""

        if array.ndim != 3 or array.shape[2] != pixel_format.bytes_per_pixel:
            raise ValueError(
                f"Expected an (H, W, {pixel_format.bytes_per_pixel}) array for "
                f"{pixel_format.name}, got shape {array.shape}"
            )
        contiguous = np.ascontiguousarray(array)
        height, width, channels = contiguous.shape
        return cls(contiguous, width, height, width * channels, pixel_format)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def center(self) -> Point:
        return self.width / 2.0, self.height / 2.0

    def window(self, x0: int, y0: int, x1: int, y1: int) -> np.ndarray:
        """Return the ``[y0:y1, x0:x1]`` pixels; bounds must already be clamped."""

        return self._pixels[y0:y1, x0:x1]


def window_bounds(
    center: Point, window_size: int, width: int, height: int
) -> Tuple[int, int, int, int]:
    """Clamp a square window around *center* to the frame.

    The window starts ``window_size // 2`` pixels before ``floor(center)`` on
    each axis. The result may be empty (``x0 >= x1`` or ``y0 >= y1``).
    """

    start_x = int(math.floor(center[0])) - window_size // 2
    start_y = int(math.floor(center[1])) - window_size // 2
    x0 = max(start_x, 0)
    y0 = max(start_y, 0)
    x1 = min(start_x + window_size, width)
    y1 = min(start_y + window_size, height)
    return x0, y0, x1, y1


def sample(
    view: PixelBufferView,
    center: Optional[Sequence[float]] = None,
    window_size: int = LIVE_WINDOW_SIZE,
) -> ColorSample:
    """Average the in-bounds pixels of a square window around *center*.

    Pixels of the window that fall outside the frame are skipped rather than
    clamped, so the mean is over the pixels actually read. Raises
    :class:`OutOfBoundsError` when none are left.
    """

    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    point: Point = view.center if center is None else (center[0], center[1])
    if not (math.isfinite(point[0]) and math.isfinite(point[1])):
        raise OutOfBoundsError(f"Sampling point {point} is not a finite position")
    x0, y0, x1, y1 = window_bounds(point, window_size, view.width, view.height)
    if x0 >= x1 or y0 >= y1:
        raise OutOfBoundsError(
            f"Window of {window_size}px around {point} lies outside the "
            f"{view.width}x{view.height} frame"
        )

    pixels = view.window(x0, y0, x1, y1)
    count = (x1 - x0) * (y1 - y0)
    fmt = view.pixel_format
    red = int(pixels[..., fmt.red_offset].sum(dtype=np.int64))
    green = int(pixels[..., fmt.green_offset].sum(dtype=np.int64))
    blue = int(pixels[..., fmt.blue_offset].sum(dtype=np.int64))

    return ColorSample(
        (red / count) / 255.0,
        (green / count) / 255.0,
        (blue / count) / 255.0,
    )


def sample_frame(
    buffer: BufferLike,
    width: int,
    height: int,
    bytes_per_row: int,
    pixel_format: PixelFormat = BGRA,
    center_point: Optional[Sequence[float]] = None,
    window_size: int = LIVE_WINDOW_SIZE,
) -> ColorSample:
    """Flat-argument form of :func:`sample` for callers holding raw buffers."""

    view = PixelBufferView(buffer, width, height, bytes_per_row, pixel_format)
    return sample(view, center_point, window_size)


__all__ = [
    "ARGB",
    "BGR",
    "BGRA",
    "LIVE_WINDOW_SIZE",
    "OutOfBoundsError",
    "PIXEL_FORMATS",
    "PixelBufferView",
    "PixelFormat",
    "RGB",
    "RGBA",
    "STILL_WINDOW_SIZE",
    "sample",
    "sample_frame",
    "window_bounds",
]
