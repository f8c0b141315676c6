import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from chromaworks.libs.color.sampler import BGRA, PixelBufferView  # noqa: E402


def build_frame_bytes(pixels_rgb, pixel_format=BGRA, padding=0):
    """Pack an (H, W, 3) RGB array into a padded buffer in *pixel_format* order.

    Non-colour bytes (alpha, padding) are filled with 0xFF so they would skew
    any average that wrongly included them.
    """

    pixels_rgb = np.asarray(pixels_rgb, dtype=np.uint8)
    height, width, _ = pixels_rgb.shape
    bpp = pixel_format.bytes_per_pixel
    stride = width * bpp + padding
    raw = np.full((height, stride), 255, dtype=np.uint8)
    packed = raw[:, : width * bpp].reshape(height, width, bpp)
    packed[..., pixel_format.red_offset] = pixels_rgb[..., 0]
    packed[..., pixel_format.green_offset] = pixels_rgb[..., 1]
    packed[..., pixel_format.blue_offset] = pixels_rgb[..., 2]
    return raw.tobytes(), width, height, stride


@pytest.fixture
def make_view():
    """Build a :class:`PixelBufferView` from an RGB array."""

    def _make(pixels_rgb, pixel_format=BGRA, padding=0):
        buffer, width, height, stride = build_frame_bytes(
            pixels_rgb, pixel_format, padding
        )
        return PixelBufferView(buffer, width, height, stride, pixel_format)

    return _make


@pytest.fixture
def solid_view(make_view):
    """Build a uniformly coloured frame from 8-bit RGB channels."""

    def _make(rgb, width=32, height=24, pixel_format=BGRA, padding=0):
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[...] = rgb
        return make_view(pixels, pixel_format, padding)

    return _make


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    """Keep log files produced by CLI runs inside the test's tmp dir."""

    target = tmp_path / "logs"
    monkeypatch.setenv("CHROMAWORKS_LOG_DIR", str(target))
    return target
