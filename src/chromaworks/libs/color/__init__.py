"""Colour sampling, smoothing and naming primitives."""

from .naming import ColorNamer, NamedColor, describe, hue_family, name_color, name_from_hsb
from .sample import HSB, ColorSample, mean_color, rgb_to_hsb, to_hex
from .sampler import (
    BGR,
    BGRA,
    LIVE_WINDOW_SIZE,
    STILL_WINDOW_SIZE,
    OutOfBoundsError,
    PixelBufferView,
    PixelFormat,
    sample,
    sample_frame,
)
from .smoothing import RECOMMENDED_PUSH_INTERVAL, TemporalSmoother

__all__ = [
    "BGR",
    "BGRA",
    "ColorNamer",
    "ColorSample",
    "HSB",
    "LIVE_WINDOW_SIZE",
    "NamedColor",
    "OutOfBoundsError",
    "PixelBufferView",
    "PixelFormat",
    "RECOMMENDED_PUSH_INTERVAL",
    "STILL_WINDOW_SIZE",
    "TemporalSmoother",
    "describe",
    "hue_family",
    "mean_color",
    "name_color",
    "name_from_hsb",
    "rgb_to_hsb",
    "sample",
    "sample_frame",
    "to_hex",
]
