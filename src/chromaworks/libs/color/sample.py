"""Colour value model: normalised RGB samples, HSB view and hex codes."""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass
from typing import Iterable, NamedTuple

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


class HSB(NamedTuple):
    """Hue in [0, 1) as a fraction of 360 degrees; saturation/brightness in [0, 1]."""

    hue: float
    saturation: float
    brightness: float


@dataclass(frozen=True)
class ColorSample:
    """An opaque RGB colour with components in [0, 1] (alpha is always 1.0)."""

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for channel in ("red", "green", "blue"):
            value = getattr(self, channel)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{channel} component {value!r} outside [0, 1]")

    @classmethod
    def from_bytes(cls, red: int, green: int, blue: int) -> "ColorSample":
        """Build a sample from 8-bit channel values."""

        return cls(red / 255.0, green / 255.0, blue / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> "ColorSample":
        """Parse ``#RRGGBB`` (the leading ``#`` is optional)."""

        match = _HEX_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(f"Invalid hex colour: {value!r}")
        digits = match.group(1)
        return cls.from_bytes(
            int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
        )

    @property
    def alpha(self) -> float:
        return 1.0

    @property
    def hsb(self) -> HSB:
        return rgb_to_hsb(self)

    @property
    def hex_code(self) -> str:
        return to_hex(self)

    def as_bytes(self) -> tuple[int, int, int]:
        """Return the 0-255 integer channels used for the hex code."""

        return (
            _scale_channel(self.red),
            _scale_channel(self.green),
            _scale_channel(self.blue),
        )


def rgb_to_hsb(sample: ColorSample) -> HSB:
    """Standard RGB to HSB (a.k.a. HSV) conversion.

    Achromatic colours report a hue of 0.
    """

    hue, saturation, brightness = colorsys.rgb_to_hsv(
        sample.red, sample.green, sample.blue
    )
    return HSB(hue, saturation, brightness)


def _scale_channel(value: float) -> int:
    # half-up rounding; Python's round() would send 127.5 and 128.5 both to 128
    return min(255, max(0, int(math.floor(value * 255.0 + 0.5))))


def to_hex(sample: ColorSample) -> str:
    """Format a sample as an uppercase ``#RRGGBB`` string without alpha."""

    return "#{:02X}{:02X}{:02X}".format(*sample.as_bytes())


def _mean_channel(values: list[float]) -> float:
    # averaging offsets from the first value returns identical inputs unchanged
    first = values[0]
    mean = first + math.fsum(value - first for value in values) / len(values)
    return min(1.0, max(0.0, mean))


def mean_color(samples: Iterable[ColorSample]) -> ColorSample:
    """Component-wise arithmetic mean of one or more samples.

    Averaging identical samples returns exactly that sample.
    """

    items = list(samples)
    if not items:
        raise ValueError("Cannot average an empty collection of colour samples")
    return ColorSample(
        _mean_channel([item.red for item in items]),
        _mean_channel([item.green for item in items]),
        _mean_channel([item.blue for item in items]),
    )


__all__ = ["ColorSample", "HSB", "mean_color", "rgb_to_hsb", "to_hex"]
