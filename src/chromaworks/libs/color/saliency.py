"""Turn an externally computed saliency map into a sampling point.

Saliency detection itself happens elsewhere (e.g. a platform vision
framework); this module only locates the peak of the map it produced and maps
it onto the image it was computed for.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image


def salient_point(
    saliency_map: np.ndarray, image_size: Tuple[int, int]
) -> Optional[Tuple[float, float]]:
    """Return the image-space ``(x, y)`` of the strongest saliency value.

    Only strictly positive values count; ties resolve to the first maximum in
    row-major order. ``image_size`` is ``(width, height)``. Returns ``None``
    when the map is empty or has no positive value.
    """

    values = np.asarray(saliency_map, dtype=np.float32)
    if values.ndim != 2:
        raise ValueError(f"Saliency map must be 2-D, got shape {values.shape}")
    if values.size == 0:
        return None

    flat_index = int(np.argmax(values))
    map_y, map_x = np.unravel_index(flat_index, values.shape)
    if not values[map_y, map_x] > 0.0:
        return None

    map_height, map_width = values.shape
    image_width, image_height = image_size
    return (
        float(map_x) / map_width * image_width,
        float(map_y) / map_height * image_height,
    )


def load_saliency_map(path: Path) -> np.ndarray:
    """Read a grayscale saliency image as float32 values in [0, 1]."""

    try:
        with Image.open(path) as image:
            gray = image.convert("L")
            return np.asarray(gray, dtype=np.float32) / 255.0
    except OSError as exc:
        raise FileNotFoundError(f"Unable to read saliency map: {path}") from exc


__all__ = ["load_saliency_map", "salient_point"]
