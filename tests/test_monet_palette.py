import re

import pytest

from cam16 import from_int
from color_utils import blue, green, int_from_hex, lstar_from_int, red
from monet_palette import (
    ROLES,
    STYLES,
    VIBRANT_SECONDARY_ROTATIONS,
    MaterialYouPalette,
    PaletteFormatError,
    generate,
    get_hue_rotation,
    get_style,
    hue_expressive_tertiary,
    hue_vibrant_secondary,
)
from shades import RAMP_LENGTH

HEX_RE = re.compile(r"^#[0-9A-F]{6}$")


def hue_gap(a, b):
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


# ------------------------------------------------------------
# Hue rotation
# ------------------------------------------------------------


@pytest.mark.parametrize(
    "hue,expected",
    [(0.0, 18.0), (30.0, 48.0), (40.9, 58.9), (41.0, 56.0), (359.0, 11.0)],
)
def test_vibrant_secondary_segments(hue, expected):
    assert hue_vibrant_secondary(hue) == pytest.approx(expected)


def test_expressive_tertiary_wraps():
    assert hue_expressive_tertiary(350.0) == pytest.approx(110.0)


def test_rotation_of_invalid_hue_uses_zero():
    assert get_hue_rotation(-5.0, VIBRANT_SECONDARY_ROTATIONS) == pytest.approx(18.0)


# ------------------------------------------------------------
# Recipes
# ------------------------------------------------------------


@pytest.mark.parametrize("style", STYLES)
def test_every_style_covers_every_role(style):
    recipe = get_style(200.0, 60.0, style)
    assert tuple(recipe) == ROLES
    for hue, chroma in recipe.values():
        assert 0.0 <= hue < 360.0
        assert chroma >= 0.0


@pytest.mark.parametrize("style", STYLES)
def test_hue_wraps_before_recipes(style):
    assert get_style(370.0, 50.0, style) == get_style(10.0, 50.0, style)


def test_tonal_spot_recipe():
    recipe = get_style(300.0, 60.0, "TONAL_SPOT")
    assert recipe["accent1"] == (300.0, 36)
    assert recipe["accent2"] == (300.0, 16)
    assert recipe["accent3"] == (pytest.approx(0.0), 24)


def test_content_scales_seed_chroma():
    recipe = get_style(120.0, 60.0, "CONTENT")
    assert recipe["accent1"][1] == pytest.approx(60.0)
    assert recipe["accent2"][1] == pytest.approx(19.8)
    assert recipe["neutral1"][1] == pytest.approx(4.998)


def test_expressive_rotates_primary():
    assert get_style(200.0, 60.0, "EXPRESSIVE")["accent1"][0] == pytest.approx(80.0)


def test_unknown_style():
    with pytest.raises(ValueError):
        get_style(10.0, 48.0, "NEON")
    with pytest.raises(ValueError):
        generate("#1B6EF3", "tonal_spot")


# ------------------------------------------------------------
# Generated palettes
# ------------------------------------------------------------


def test_palette_shape(tonal_spot):
    for role in ROLES:
        ramp = tonal_spot.ramp(role)
        assert len(ramp) == RAMP_LENGTH
        assert ramp[0] == "#FFFFFF"
        assert all(HEX_RE.match(h) for h in ramp)


def test_generation_is_deterministic(seed, tonal_spot):
    assert generate(seed, "TONAL_SPOT") == tonal_spot
    assert generate(seed.lower(), "TONAL_SPOT") == tonal_spot


def test_tonal_spot_light_accent_is_light_blue(tonal_spot):
    argb = int_from_hex(tonal_spot.accent1[2])
    assert abs(lstar_from_int(argb) - 95.0) < 1.0
    assert blue(argb) > red(argb)


def test_tonal_spot_light_accents_share_hue_and_lightness(tonal_spot):
    argb1 = int_from_hex(tonal_spot.accent1[2])
    argb2 = int_from_hex(tonal_spot.accent2[2])
    a1, a2 = from_int(argb1), from_int(argb2)
    # near white the gamut limits both requests; accent1 never comes out duller
    assert a1.chroma >= a2.chroma - 1.0
    assert hue_gap(a1.hue, a2.hue) < 10.0
    assert abs(lstar_from_int(argb1) - lstar_from_int(argb2)) < 1.0


def test_tonal_spot_accents_differ_in_chroma(seed, tonal_spot):
    a1 = from_int(int_from_hex(tonal_spot.accent1[7]))
    a2 = from_int(int_from_hex(tonal_spot.accent2[7]))
    assert tonal_spot.accent1 != tonal_spot.accent2
    assert a1.chroma > a2.chroma + 10.0
    assert hue_gap(a1.hue, from_int(int_from_hex(seed)).hue) < 4.0


def test_monochromatic_is_gray(monochromatic):
    for role in ROLES:
        for h in monochromatic.ramp(role):
            argb = int_from_hex(h)
            assert red(argb) == green(argb) == blue(argb)


def test_rainbow_neutrals_are_gray(seed):
    palette = generate(seed, "RAINBOW")
    for h in palette.neutral1 + palette.neutral2:
        argb = int_from_hex(h)
        assert red(argb) == green(argb) == blue(argb)


def test_low_chroma_seed_is_boosted():
    # a near-gray seed still yields a colorful accent ramp
    palette = generate("#7A7B80", "CONTENT")
    assert from_int(int_from_hex(palette.accent1[7])).chroma > 30.0


def test_malformed_seed_is_tolerated():
    assert generate("not a color") == generate("#1B6EF3")


# ------------------------------------------------------------
# Mapping / frame
# ------------------------------------------------------------


def test_as_dict_round_trip(tonal_spot):
    data = tonal_spot.as_dict()
    assert sorted(data) == sorted(f"system_{role}" for role in ROLES)
    assert MaterialYouPalette.from_mapping(data) == tonal_spot


def test_from_mapping_accepts_plain_role_keys(tonal_spot):
    data = {role: [h.lower() for h in tonal_spot.ramp(role)] for role in ROLES}
    assert MaterialYouPalette.from_mapping(data) == tonal_spot


def test_from_mapping_rejects_missing_role(tonal_spot):
    data = tonal_spot.as_dict()
    del data["system_neutral2"]
    with pytest.raises(PaletteFormatError):
        MaterialYouPalette.from_mapping(data)


def test_from_mapping_rejects_short_ramp(tonal_spot):
    data = tonal_spot.as_dict()
    data["system_accent1"] = data["system_accent1"][:13]
    with pytest.raises(PaletteFormatError):
        MaterialYouPalette.from_mapping(data)


def test_from_mapping_rejects_bad_hex(tonal_spot):
    data = tonal_spot.as_dict()
    data["system_accent3"][4] = "#12ZZZZ"
    with pytest.raises(PaletteFormatError):
        MaterialYouPalette.from_mapping(data)


def test_ramp_rejects_unknown_role(tonal_spot):
    with pytest.raises(ValueError):
        tonal_spot.ramp("accent4")


def test_to_frame(tonal_spot):
    df = tonal_spot.to_frame()
    assert list(df.columns) == ["role", "shade", "hex"]
    assert len(df) == len(ROLES) * RAMP_LENGTH
    assert df.groupby("role").size().eq(RAMP_LENGTH).all()
    assert df.loc[(df.role == "accent2") & (df.shade == 0), "hex"].item() == "#FFFFFF"
