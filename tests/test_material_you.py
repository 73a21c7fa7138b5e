import logging

import pytest

from material_you import (
    NativePaletteUnavailable,
    generate_palette_from_color,
    get_material_you_palette,
    is_supported,
)
from monet_palette import PaletteFormatError, generate


def test_is_supported():
    assert not is_supported(None)
    assert is_supported(lambda: None)


def test_generate_palette_from_color(seed):
    assert generate_palette_from_color(seed, "VIBRANT") == generate(seed, "VIBRANT")


def test_without_native_uses_fallback(seed, caplog):
    with caplog.at_level(logging.INFO, logger="material_you"):
        palette = get_material_you_palette(fallback_seed=seed)
    assert palette == generate(seed, "TONAL_SPOT")
    assert "fallback palette" in caplog.text


def test_native_returning_nothing_uses_fallback(seed):
    palette = get_material_you_palette(seed, "SPRITZ", native=lambda: None)
    assert palette == generate(seed, "SPRITZ")


def test_native_raising_uses_fallback(seed, caplog):
    def native():
        raise NativePaletteUnavailable("no wallpaper service")

    with caplog.at_level(logging.INFO, logger="material_you"):
        palette = get_material_you_palette(seed, native=native)
    assert palette == generate(seed, "TONAL_SPOT")
    assert "no wallpaper service" in caplog.text


def test_native_palette_wins(seed, monochromatic):
    data = monochromatic.as_dict()
    palette = get_material_you_palette(seed, "TONAL_SPOT", native=lambda: data)
    assert palette == monochromatic


def test_malformed_native_palette_raises(seed):
    with pytest.raises(PaletteFormatError):
        get_material_you_palette(seed, native=lambda: {"system_accent1": ["#FFFFFF"]})


def test_other_native_errors_propagate(seed):
    def native():
        raise OSError("boom")

    with pytest.raises(OSError):
        get_material_you_palette(seed, native=native)
