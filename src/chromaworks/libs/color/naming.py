"""Deterministic English names for colours.

The namer works on the HSB view of a sample and walks an ordered decision
table: a grayscale gate, a hue family, the brown/pink family overrides and
finally generic brightness/saturation modifiers. All thresholds are compared
with the exact operators listed here; the first matching branch wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .sample import ColorSample, rgb_to_hsb, to_hex

# Upper bounds (exclusive) of each hue arc, in order. Hues from the last bound
# up to 1.0 wrap back around to red.
HUE_FAMILIES: Tuple[Tuple[float, str], ...] = (
    (0.04, "Red"),
    (0.125, "Orange"),
    (0.208, "Yellow"),
    (0.264, "Lime Green"),
    (0.458, "Green"),
    (0.556, "Cyan"),
    (0.736, "Blue"),
    (0.833, "Purple"),
    (0.96, "Magenta"),
)
WRAP_FAMILY = "Red"

BLACK_BRIGHTNESS = 0.1
GRAYSCALE_SATURATION = 0.1

_BROWN_FAMILIES = frozenset({"Orange", "Red", "Yellow"})
_PINK_FAMILIES = frozenset({"Red", "Magenta"})


@dataclass(frozen=True)
class NamedColor:
    """A human-readable name paired with the sample's ``#RRGGBB`` code."""

    name: str
    hex_code: str


def hue_family(hue: float) -> str:
    """Map a hue in [0, 1) to one of the nine base colour families."""

    for upper_bound, family in HUE_FAMILIES:
        if hue < upper_bound:
            return family
    return WRAP_FAMILY


def _grayscale_name(saturation: float, brightness: float) -> Optional[str]:
    if brightness < BLACK_BRIGHTNESS:
        return "Black"
    if saturation >= GRAYSCALE_SATURATION:
        return None
    if brightness > 0.95:
        return "White"
    elif brightness > 0.8:
        return "Off-White"
    elif brightness > 0.6:
        return "Light Gray"
    elif brightness < 0.3:
        return "Dark Gray"
    return "Gray"


def _family_override(family: str, saturation: float, brightness: float) -> Optional[str]:
    # Brown: dark-ish, reasonably saturated reds/oranges/yellows
    if family in _BROWN_FAMILIES and brightness < 0.6 and saturation > 0.2:
        if saturation < 0.4:
            return "Dull Brown"
        elif brightness < 0.3:
            return "Dark Brown"
        return "Brown"

    # Pink: light, partly desaturated reds/magentas
    if family in _PINK_FAMILIES and brightness > 0.7 and 0.2 < saturation < 0.8:
        if brightness > 0.9:
            return "Light Pink"
        elif saturation < 0.4:
            return "Pale Pink"
        return "Pink"

    return None


def _brightness_modifier(brightness: float) -> Optional[str]:
    if brightness > 0.9:
        return "Very Light"
    elif brightness > 0.8:
        return "Light"
    elif brightness < 0.2:
        return "Very Dark"
    elif brightness < 0.4:
        return "Dark"
    elif brightness < 0.5:
        return "Deep"
    return None


def _saturation_modifier(saturation: float, brightness: float) -> Optional[str]:
    if saturation < 0.2:
        return "Muted"
    elif saturation < 0.4:
        return "Dull"
    elif saturation > 0.8 and brightness > 0.5:
        return "Vivid"
    elif saturation > 0.6 and brightness > 0.5:
        return "Bright"
    return None


def name_from_hsb(hue: float, saturation: float, brightness: float) -> str:
    """Name a colour given directly in HSB coordinates."""

    gray = _grayscale_name(saturation, brightness)
    if gray is not None:
        return gray

    family = hue_family(hue)
    override = _family_override(family, saturation, brightness)
    if override is not None:
        return override

    modifiers: List[str] = []
    for modifier in (
        _brightness_modifier(brightness),
        _saturation_modifier(saturation, brightness),
    ):
        if modifier:
            modifiers.append(modifier)

    if not modifiers:
        return family
    return f"{' '.join(modifiers)} {family}"


def name_color(sample: ColorSample) -> str:
    """Name an RGB sample. Never fails; every colour gets a name."""

    hsb = rgb_to_hsb(sample)
    return name_from_hsb(hsb.hue, hsb.saturation, hsb.brightness)


def describe(sample: ColorSample) -> NamedColor:
    """Return the ``(name, hex)`` pair shown to the user for *sample*."""

    return NamedColor(name=name_color(sample), hex_code=to_hex(sample))


class ColorNamer:
    """Object form of :func:`name_color` for collaborators that hold a namer."""

    def name(self, sample: ColorSample) -> str:
        return name_color(sample)

    def describe(self, sample: ColorSample) -> NamedColor:
        return describe(sample)


__all__ = [
    "ColorNamer",
    "HUE_FAMILIES",
    "NamedColor",
    "describe",
    "hue_family",
    "name_color",
    "name_from_hsb",
]
