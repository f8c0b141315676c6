import pytest

from chromaworks.libs.color.sample import (
    HSB,
    ColorSample,
    mean_color,
    rgb_to_hsb,
    to_hex,
)


def test_components_must_be_normalised():
    with pytest.raises(ValueError):
        ColorSample(1.2, 0.0, 0.0)
    with pytest.raises(ValueError):
        ColorSample(0.0, -0.1, 0.0)


def test_alpha_is_always_opaque():
    assert ColorSample(0.1, 0.2, 0.3).alpha == 1.0


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((1.0, 0.0, 0.0), "#FF0000"),
        ((0.0, 0.0, 0.0), "#000000"),
        ((1.0, 1.0, 1.0), "#FFFFFF"),
        # 127.5 rounds half-up
        ((0.5, 0.5, 0.5), "#808080"),
        ((0.2, 0.15, 0.1), "#33261A"),
    ],
)
def test_to_hex_is_uppercase_and_rounded(rgb, expected):
    sample = ColorSample(*rgb)
    assert to_hex(sample) == expected
    assert sample.hex_code == expected


def test_from_bytes_round_trips_through_hex():
    sample = ColorSample.from_bytes(18, 52, 86)
    assert sample.hex_code == "#123456"
    assert sample.as_bytes() == (18, 52, 86)


@pytest.mark.parametrize("value", ["#12ab9F", "12AB9F", "  #12AB9F "])
def test_from_hex_accepts_optional_hash_and_any_case(value):
    assert ColorSample.from_hex(value).hex_code == "#12AB9F"


@pytest.mark.parametrize("value", ["#12AB9", "#GG0000", "", "#12345678"])
def test_from_hex_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        ColorSample.from_hex(value)


def test_rgb_to_hsb_primaries():
    assert rgb_to_hsb(ColorSample(1.0, 0.0, 0.0)) == HSB(0.0, 1.0, 1.0)
    green = ColorSample(0.0, 1.0, 0.0).hsb
    assert green.hue == pytest.approx(1 / 3)
    blue = ColorSample(0.0, 0.0, 1.0).hsb
    assert blue.hue == pytest.approx(2 / 3)


def test_rgb_to_hsb_achromatic_has_zero_hue_and_saturation():
    hsb = ColorSample(0.4, 0.4, 0.4).hsb
    assert hsb.hue == 0.0
    assert hsb.saturation == 0.0
    assert hsb.brightness == pytest.approx(0.4)


def test_rgb_to_hsb_black_is_all_zero():
    assert ColorSample(0.0, 0.0, 0.0).hsb == HSB(0.0, 0.0, 0.0)


def test_mean_color_is_component_wise():
    mean = mean_color(
        [ColorSample(1.0, 0.0, 0.2), ColorSample(0.0, 1.0, 0.4)]
    )
    assert mean.red == pytest.approx(0.5)
    assert mean.green == pytest.approx(0.5)
    assert mean.blue == pytest.approx(0.3)


def test_mean_color_of_identical_samples_is_exact():
    value = ColorSample(0.1, 0.7, 0.3)
    assert mean_color([value] * 7) == value
    # fsum(5 * x) / 5 lands one ulp away for this value
    odd = ColorSample(0.4049341374504143, 0.4049341374504143, 0.4049341374504143)
    assert mean_color([odd] * 5) == odd


def test_mean_color_stays_in_unit_range():
    mean = mean_color([ColorSample(1.0, 1.0, 0.0)] * 3 + [ColorSample(1.0, 0.0, 0.0)])
    assert mean.red == 1.0
    assert 0.0 <= mean.green <= 1.0
    assert mean.blue == 0.0


def test_mean_color_requires_samples():
    with pytest.raises(ValueError):
        mean_color([])
