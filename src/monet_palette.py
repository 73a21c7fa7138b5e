"""
Style recipes: derive the five Material You tonal ramps from one seed color.

Each style maps the seed's CAM16 hue/chroma to a (hue, chroma) pair per
role; every pair is expanded into a tonal ramp and rendered as hex strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

import pandas as pd

from cam16 import from_int
from color_utils import hex_from_int, int_from_hex, sanitize_degrees
from shades import RAMP_LENGTH, shades_of

# ============================================================
# Roles & styles
# ============================================================

ROLES = ("accent1", "accent2", "accent3", "neutral1", "neutral2")

STYLES = (
    "SPRITZ",
    "TONAL_SPOT",
    "VIBRANT",
    "EXPRESSIVE",
    "RAINBOW",
    "FRUIT_SALAD",
    "CONTENT",
    "MONOCHROMATIC",
)

# seeds are boosted to at least this chroma before a recipe is applied
ACCENT1_CHROMA = 48.0

HueChroma = Tuple[float, float]

# ============================================================
# Hue rotation tables: (segment start, rotation), last row closes at 360
# ============================================================

VIBRANT_SECONDARY_ROTATIONS = (
    (0, 18),
    (41, 15),
    (61, 10),
    (101, 12),
    (131, 15),
    (181, 18),
    (251, 15),
    (301, 12),
    (360, 12),
)

VIBRANT_TERTIARY_ROTATIONS = (
    (0, 35),
    (41, 30),
    (61, 20),
    (101, 25),
    (131, 30),
    (181, 35),
    (251, 30),
    (301, 25),
    (360, 25),
)

EXPRESSIVE_SECONDARY_ROTATIONS = (
    (0, 45),
    (21, 95),
    (51, 45),
    (121, 20),
    (151, 45),
    (191, 90),
    (271, 45),
    (321, 45),
    (360, 45),
)

EXPRESSIVE_TERTIARY_ROTATIONS = (
    (0, 120),
    (21, 120),
    (51, 20),
    (121, 45),
    (151, 20),
    (191, 15),
    (271, 20),
    (321, 120),
    (360, 120),
)


# ============================================================
# Hue arithmetic
# ============================================================


def wrap_degrees(degrees: float) -> float:
    return sanitize_degrees(degrees)


def hue_add(hue: float, amount: float) -> float:
    return wrap_degrees(hue + amount)


def hue_subtract(hue: float, amount: float) -> float:
    return wrap_degrees(hue - amount)


def get_hue_rotation(source_hue: float, rotations: Sequence[Tuple[float, float]]) -> float:
    """
    Rotate source_hue by the amount of the segment [start_i, start_i+1) it
    falls in.
    """
    hue = source_hue if 0 <= source_hue < 360 else 0.0
    for (start, rotation), (end, _) in zip(rotations, rotations[1:]):
        if start <= hue < end:
            return wrap_degrees(hue + rotation)
    # unreachable while the table spans 0..360
    return source_hue


def hue_vibrant_secondary(hue: float) -> float:
    return get_hue_rotation(hue, VIBRANT_SECONDARY_ROTATIONS)


def hue_vibrant_tertiary(hue: float) -> float:
    return get_hue_rotation(hue, VIBRANT_TERTIARY_ROTATIONS)


def hue_expressive_secondary(hue: float) -> float:
    return get_hue_rotation(hue, EXPRESSIVE_SECONDARY_ROTATIONS)


def hue_expressive_tertiary(hue: float) -> float:
    return get_hue_rotation(hue, EXPRESSIVE_TERTIARY_ROTATIONS)


# ============================================================
# Recipes
# ============================================================


def _roles(a1: HueChroma, a2: HueChroma, a3: HueChroma, n1: HueChroma, n2: HueChroma) -> Dict[str, HueChroma]:
    return dict(zip(ROLES, (a1, a2, a3, n1, n2)))


def get_style(hue: float, chroma: float, style: str) -> Dict[str, HueChroma]:
    """
    (hue, chroma) per role for one style, from the seed hue/chroma.
    """
    hue = sanitize_degrees(hue)

    if style == "SPRITZ":
        return _roles((hue, 12), (hue, 8), (hue, 16), (hue, 2), (hue, 2))
    if style == "TONAL_SPOT":
        return _roles((hue, 36), (hue, 16), (hue_add(hue, 60), 24), (hue, 4), (hue, 8))
    if style == "VIBRANT":
        return _roles(
            (hue, 130),
            (hue_vibrant_secondary(hue), 24),
            (hue_vibrant_tertiary(hue), 32),
            (hue, 10),
            (hue, 12),
        )
    if style == "EXPRESSIVE":
        return _roles(
            (hue_add(hue, 240), 40),
            (hue_expressive_secondary(hue), 24),
            (hue_expressive_tertiary(hue), 32),
            (hue_add(hue, 15), 8),
            (hue_add(hue, 15), 12),
        )
    if style == "RAINBOW":
        return _roles((hue, 48), (hue, 16), (hue_add(hue, 60), 24), (hue, 0), (hue, 0))
    if style == "FRUIT_SALAD":
        return _roles(
            (hue_subtract(hue, 50), 48),
            (hue_subtract(hue, 50), 36),
            (hue, 36),
            (hue, 10),
            (hue, 16),
        )
    if style == "CONTENT":
        return _roles(
            (hue, chroma),
            (hue, chroma * 0.33),
            (hue, chroma * 0.66),
            (hue, chroma * 0.0833),
            (hue, chroma * 0.1666),
        )
    if style == "MONOCHROMATIC":
        return _roles((hue, 0), (hue, 0), (hue, 0), (hue, 0), (hue, 0))

    raise ValueError(f"Unknown style {style!r}; expected one of {', '.join(STYLES)}")


# ============================================================
# Palette
# ============================================================


class PaletteFormatError(ValueError):
    pass


@dataclass(frozen=True)
class MaterialYouPalette:
    accent1: Tuple[str, ...]
    accent2: Tuple[str, ...]
    accent3: Tuple[str, ...]
    neutral1: Tuple[str, ...]
    neutral2: Tuple[str, ...]

    def ramp(self, role: str) -> Tuple[str, ...]:
        if role not in ROLES:
            raise ValueError(f"Unknown role {role!r}")
        return getattr(self, role)

    def as_dict(self) -> Dict[str, list]:
        """
        Plain mapping keyed like the Android system palette
        (system_accent1 .. system_neutral2).
        """
        return {f"system_{role}": list(self.ramp(role)) for role in ROLES}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Sequence[str]]) -> MaterialYouPalette:
        """
        Validate a palette mapping keyed by role or by system_<role>.
        """
        ramps = {}
        for role in ROLES:
            ramp = data.get(f"system_{role}", data.get(role))
            if ramp is None:
                raise PaletteFormatError(f"Palette is missing the {role} ramp")
            if isinstance(ramp, str) or len(ramp) != RAMP_LENGTH:
                raise PaletteFormatError(f"{role} ramp must hold {RAMP_LENGTH} colors")
            ramps[role] = tuple(_normalize_hex(v, role) for v in ramp)
        return cls(**ramps)

    def to_frame(self) -> pd.DataFrame:
        """
        Tidy table, one row per shade: role, shade, hex.
        """
        rows = [
            {"role": role, "shade": i, "hex": hex_color}
            for role in ROLES
            for i, hex_color in enumerate(self.ramp(role))
        ]
        return pd.DataFrame(rows, columns=["role", "shade", "hex"])


def _normalize_hex(value: str, role: str) -> str:
    text = str(value).strip().lstrip("#")
    if len(text) != 6 or any(ch not in "0123456789abcdefABCDEF" for ch in text):
        raise PaletteFormatError(f"{role} ramp has a malformed color {value!r}")
    return f"#{text.upper()}"


def generate(seed: str, style: str = "TONAL_SPOT") -> MaterialYouPalette:
    """
    Full palette from a "#RRGGBB" seed and a style name.
    """
    if style not in STYLES:
        raise ValueError(f"Unknown style {style!r}; expected one of {', '.join(STYLES)}")

    cam = from_int(int_from_hex(seed))
    chroma = max(cam.chroma, ACCENT1_CHROMA)

    recipe = get_style(cam.hue, chroma, style)
    ramps = {
        role: tuple(hex_from_int(argb) for argb in shades_of(hue, role_chroma))
        for role, (hue, role_chroma) in recipe.items()
    }
    return MaterialYouPalette(**ramps)
