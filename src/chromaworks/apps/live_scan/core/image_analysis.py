"""Name the colour of a still photo at a chosen or salient point."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from chromaworks.libs.color.naming import describe
from chromaworks.libs.color.saliency import load_saliency_map, salient_point
from chromaworks.libs.color.sample import ColorSample
from chromaworks.libs.color.sampler import (
    RGB,
    STILL_WINDOW_SIZE,
    PixelBufferView,
    sample,
)

logger = logging.getLogger(__name__)

PointSource = Literal["explicit", "saliency", "center"]


@dataclass(frozen=True)
class ImageAnalysisResult:
    path: Path
    color_name: str
    hex_code: str
    sample: ColorSample
    point: Tuple[float, float]
    point_source: PointSource

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "color_name": self.color_name,
            "hex_code": self.hex_code,
            "rgb": [self.sample.red, self.sample.green, self.sample.blue],
            "point": list(self.point),
            "point_source": self.point_source,
        }


def load_image_view(path: Path) -> PixelBufferView:
    """Decode *path* to packed 8-bit RGB and wrap it for sampling."""

    try:
        with Image.open(path) as image:
            rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
    except OSError as exc:
        raise FileNotFoundError(f"Unable to read image for analysis: {path}") from exc
    return PixelBufferView.from_array(rgb, RGB)


def _choose_point(
    view: PixelBufferView,
    point: Optional[Sequence[float]],
    saliency_map: Union[np.ndarray, Path, None],
) -> Tuple[Tuple[float, float], PointSource]:
    if point is not None:
        return (float(point[0]), float(point[1])), "explicit"

    if saliency_map is not None:
        values = (
            load_saliency_map(Path(saliency_map))
            if isinstance(saliency_map, (str, Path))
            else saliency_map
        )
        peak = salient_point(values, view.size)
        if peak is not None:
            return peak, "saliency"
        logger.warning("Saliency map has no positive values; sampling the centre")

    return view.center, "center"


def analyze_image(
    path: Path,
    *,
    point: Optional[Sequence[float]] = None,
    saliency_map: Union[np.ndarray, Path, None] = None,
    window_size: int = STILL_WINDOW_SIZE,
) -> ImageAnalysisResult:
    """Sample a ``window_size`` square of *path* and name its average colour.

    The point is, in order of preference: *point*, the peak of
    *saliency_map* (an array or a grayscale image path), or the image centre.
    Raises :class:`~chromaworks.libs.color.sampler.OutOfBoundsError` when the
    window misses the image entirely.
    """

    path = Path(path)
    view = load_image_view(path)
    chosen, source = _choose_point(view, point, saliency_map)
    average = sample(view, chosen, window_size)
    named = describe(average)
    logger.info(
        "%s: %s (%s) at %s via %s",
        path.name,
        named.name,
        named.hex_code,
        chosen,
        source,
    )
    return ImageAnalysisResult(
        path=path,
        color_name=named.name,
        hex_code=named.hex_code,
        sample=average,
        point=chosen,
        point_source=source,
    )


__all__ = ["ImageAnalysisResult", "analyze_image", "load_image_view"]
