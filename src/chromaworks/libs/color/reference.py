"""Reference palette of standard, named colours.

Users learn colours by comparing what the camera sees against familiar named
swatches. The palette is grouped into sections for browsing; the system
colours use their light-appearance sRGB values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .sample import ColorSample, to_hex


@dataclass(frozen=True)
class ReferenceColor:
    name: str
    sample: ColorSample

    @property
    def hex_code(self) -> str:
        return to_hex(self.sample)


@dataclass(frozen=True)
class ColorSection:
    name: str
    colors: Tuple[ReferenceColor, ...]


def _rgb(name: str, red: float, green: float, blue: float) -> ReferenceColor:
    return ReferenceColor(name, ColorSample(red, green, blue))


def _hex(name: str, value: str) -> ReferenceColor:
    return ReferenceColor(name, ColorSample.from_hex(value))


STANDARD_SECTIONS: Tuple[ColorSection, ...] = (
    ColorSection(
        "Reds & Pinks",
        (
            _hex("Red", "#FF3B30"),
            _hex("Pink", "#FF2D55"),
            _rgb("Crimson", 0.86, 0.08, 0.24),
            _rgb("Maroon", 0.50, 0.00, 0.00),
            _rgb("Salmon", 0.98, 0.50, 0.45),
            _rgb("Rose", 1.00, 0.41, 0.71),
            _rgb("Cherry", 0.86, 0.18, 0.18),
            _rgb("Burgundy", 0.50, 0.00, 0.13),
            _rgb("Scarlet", 1.00, 0.14, 0.00),
            _rgb("Candy Pink", 1.00, 0.49, 0.70),
            _rgb("Coral", 1.00, 0.50, 0.31),
        ),
    ),
    ColorSection(
        "Oranges & Yellows",
        (
            _hex("Orange", "#FF9500"),
            _hex("Yellow", "#FFCC00"),
            _rgb("Gold", 1.00, 0.84, 0.00),
            _rgb("Amber", 1.00, 0.75, 0.00),
            _rgb("Peach", 1.00, 0.80, 0.65),
            _rgb("Mustard", 0.81, 0.67, 0.13),
            _rgb("Tangerine", 0.97, 0.56, 0.14),
            _rgb("Cantaloupe", 1.00, 0.76, 0.42),
            _rgb("Lemon", 1.00, 1.00, 0.00),
            _rgb("Saffron", 0.96, 0.86, 0.26),
        ),
    ),
    ColorSection(
        "Greens",
        (
            _hex("Green", "#34C759"),
            _rgb("Lime", 0.00, 1.00, 0.00),
            _hex("Teal", "#5AC8FA"),
            _rgb("Olive", 0.50, 0.50, 0.00),
            _rgb("Mint", 0.60, 1.00, 0.80),
            _rgb("Forest", 0.13, 0.55, 0.13),
            _rgb("Chartreuse", 0.50, 1.00, 0.00),
            _rgb("Emerald", 0.31, 0.78, 0.47),
            _rgb("Pistachio", 0.75, 0.60, 0.42),
            _rgb("Seafoam", 0.68, 1.00, 0.76),
        ),
    ),
    ColorSection(
        "Blues & Purples",
        (
            _hex("Blue", "#007AFF"),
            _hex("Indigo", "#5856D6"),
            _hex("Purple", "#AF52DE"),
            _rgb("Navy", 0.00, 0.00, 0.50),
            _rgb("Sky Blue", 0.53, 0.81, 0.98),
            _rgb("Lavender", 0.90, 0.90, 0.98),
            _rgb("Plum", 0.53, 0.13, 0.38),
            _rgb("Turquoise", 0.25, 0.88, 0.82),
            _rgb("Teal Blue", 0.00, 0.50, 0.60),
            _rgb("Violet", 0.93, 0.51, 0.93),
            _rgb("Electric Blue", 0.00, 0.53, 1.00),
        ),
    ),
    ColorSection(
        "Browns & Grays",
        (
            _rgb("Brown", 0.60, 0.40, 0.20),
            _hex("Gray", "#8E8E93"),
            _rgb("Black", 0.00, 0.00, 0.00),
            _rgb("White", 1.00, 1.00, 1.00),
            _rgb("Tan", 0.82, 0.70, 0.55),
            _rgb("Beige", 0.96, 0.96, 0.86),
            _rgb("Charcoal", 0.25, 0.25, 0.25),
            _rgb("Slate", 0.44, 0.50, 0.56),
            _rgb("Coffee", 0.39, 0.26, 0.13),
            _rgb("Ash Gray", 0.60, 0.60, 0.60),
            _rgb("Copper", 0.72, 0.45, 0.20),
            _rgb("Mocha", 0.60, 0.30, 0.20),
        ),
    ),
    ColorSection(
        "Pink & Purples",
        (
            _rgb("Fuchsia", 0.80, 0.00, 0.80),
            _rgb("Magenta", 1.00, 0.00, 1.00),
            _rgb("Lavender Blush", 1.00, 0.94, 0.96),
            _rgb("Mauve", 0.87, 0.60, 0.69),
            _rgb("Orchid", 0.85, 0.44, 0.84),
            _rgb("Blush", 1.00, 0.85, 0.87),
            _rgb("Lavender Pink", 0.98, 0.68, 0.82),
            _rgb("Amethyst", 0.60, 0.40, 0.80),
            _rgb("Periwinkle", 0.80, 0.80, 1.00),
        ),
    ),
    ColorSection(
        "Light & Dark",
        (
            _rgb("Light Gray", 0.83, 0.83, 0.83),
            _rgb("Dark Gray", 0.38, 0.38, 0.38),
            _rgb("Light Blue", 0.68, 0.85, 0.90),
            _rgb("Dark Blue", 0.00, 0.00, 0.55),
            _rgb("Light Green", 0.68, 1.00, 0.49),
            _rgb("Dark Teal", 0.00, 0.35, 0.30),
            _rgb("Light Pink", 1.00, 0.75, 0.80),
            _rgb("Charcoal Gray", 0.23, 0.23, 0.23),
        ),
    ),
)


def all_reference_colors() -> Tuple[ReferenceColor, ...]:
    """Every palette entry, in section order."""

    return tuple(color for section in STANDARD_SECTIONS for color in section.colors)


def find_section(name: str) -> Optional[ColorSection]:
    wanted = name.strip().lower()
    for section in STANDARD_SECTIONS:
        if section.name.lower() == wanted:
            return section
    return None


def find_reference(name: str) -> Optional[ReferenceColor]:
    """Case-insensitive lookup of a palette entry by name."""

    wanted = name.strip().lower()
    for color in all_reference_colors():
        if color.name.lower() == wanted:
            return color
    return None


def closest_reference(sample: ColorSample) -> ReferenceColor:
    """Palette entry nearest to *sample* in RGB space (first wins on ties)."""

    target = (sample.red, sample.green, sample.blue)

    def distance(color: ReferenceColor) -> float:
        ref = color.sample
        return math.dist(target, (ref.red, ref.green, ref.blue))

    # min() keeps the first of equally close entries
    return min(all_reference_colors(), key=distance)


__all__ = [
    "ColorSection",
    "ReferenceColor",
    "STANDARD_SECTIONS",
    "all_reference_colors",
    "closest_reference",
    "find_reference",
    "find_section",
]
