"""
Conversions between packed ARGB integers, linear RGB, CIE XYZ and L*.

Colors travel through the library as 32-bit ARGB integers, always opaque.
Linear RGB components and XYZ use a 0..100 scale (Y = 100 is white).
"""

import logging
import math
import re

import numpy as np

# ============================================================
# Constants
# ============================================================

# sRGB reference white (D65, 2° observer)
WHITE_POINT_D65 = (95.047, 100.0, 108.883)

# Precise sRGB -> XYZ, corrected so that sRGB (1, 1, 1) maps onto D65.
SRGB_TO_XYZ = np.array(
    [
        [0.41233895, 0.35762064, 0.18051042],
        [0.2126, 0.7152, 0.0722],
        [0.01932141, 0.11916382, 0.95034478],
    ]
)

XYZ_TO_SRGB = np.array(
    [
        [3.2413774792388685, -1.5376652402851851, -0.49885366846268053],
        [-0.9691452513005321, 1.8758853451067872, 0.04156585616912061],
        [0.05562093689691305, -0.20395524564742123, 1.0571799111220335],
    ]
)

# Four-digit matrix from the sRGB standard, used when rendering CAM16 colors.
XYZ_TO_SRGB_LEGACY = np.array(
    [
        [3.2406, -1.5372, -0.4986],
        [-0.9689, 1.8758, 0.0415],
        [0.0557, -0.2040, 1.0570],
    ]
)

KAPPA = 24389.0 / 27.0
EPSILON = 216.0 / 24389.0

OPAQUE = 0xFF000000
BLACK = 0xFF000000
WHITE = 0xFFFFFFFF

# Android's default seed, used when a seed string carries no hex digits.
GOOGLE_BLUE = 0xFF1B6EF3

HEX_PREFIX_RE = re.compile(r"[0-9a-fA-F]*")

logger = logging.getLogger(__name__)


# ============================================================
# Scalar helpers
# ============================================================


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def signum(x: float) -> float:
    if x < 0:
        return -1.0
    if x == 0:
        return 0.0
    return 1.0


def lerp(start: float, stop: float, amount: float) -> float:
    return start + (stop - start) * amount


def sanitize_degrees(degrees: float) -> float:
    """
    Normalize an angle in degrees to [0, 360).
    """
    degrees = math.fmod(degrees, 360.0)
    if degrees < 0:
        degrees += 360.0
    # fmod of a tiny negative number plus 360 can round up to 360 itself
    if degrees >= 360.0:
        degrees = 0.0
    return degrees


# ============================================================
# Packed ARGB
# ============================================================


def red(argb: int) -> int:
    return (argb >> 16) & 0xFF


def green(argb: int) -> int:
    return (argb >> 8) & 0xFF


def blue(argb: int) -> int:
    return argb & 0xFF


def clamp_channel(value: float) -> int:
    return int(clamp(round(value), 0, 255))


def argb_from_rgb(r: float, g: float, b: float) -> int:
    return OPAQUE | (clamp_channel(r) << 16) | (clamp_channel(g) << 8) | clamp_channel(b)


def hex_from_int(argb: int) -> str:
    return f"#{argb & 0xFFFFFF:06X}"


def int_from_hex(text: str) -> int:
    """
    Parse "#RRGGBB" (case-insensitive, "#" optional) into an opaque ARGB int.

    Input is not validated. Only the run of hex digits at the start of the
    first six characters is read, so "#12ZZZZ" reads as 0x12; a string with
    no leading hex digits falls back to GOOGLE_BLUE.
    """
    digits = HEX_PREFIX_RE.match(text.lstrip("#")[:6]).group()
    if len(digits) != 6:
        logger.debug("Malformed seed %r, read as %r", text, digits)
    if not digits:
        return GOOGLE_BLUE
    return OPAQUE | int(digits, 16)


# ============================================================
# Transfer function
# ============================================================


def linearized(channel: float) -> float:
    """
    8-bit sRGB channel (0..255) -> linear component (0..100).
    """
    normalized = channel / 255.0
    if normalized <= 0.04045:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0


def true_delinearized(component: float) -> float:
    """
    Linear component (0..100) -> unrounded sRGB channel (0..255).
    """
    normalized = component / 100.0
    if normalized <= 0.0031308:
        delinearized = normalized * 12.92
    else:
        delinearized = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return delinearized * 255.0


def delinearized(component: float) -> int:
    return clamp_channel(true_delinearized(component))


def argb_from_linrgb(r: float, g: float, b: float) -> int:
    return argb_from_rgb(delinearized(r), delinearized(g), delinearized(b))


# ============================================================
# XYZ
# ============================================================


def linrgb_from_int(argb: int) -> np.ndarray:
    return np.array([linearized(red(argb)), linearized(green(argb)), linearized(blue(argb))])


def xyz_from_int(argb: int) -> np.ndarray:
    return SRGB_TO_XYZ @ linrgb_from_int(argb)


def argb_from_xyz(x: float, y: float, z: float) -> int:
    r, g, b = XYZ_TO_SRGB @ np.array([x, y, z])
    return argb_from_linrgb(float(r), float(g), float(b))


def xyz_to_color(x: float, y: float, z: float) -> int:
    """
    XYZ (D65) -> ARGB, clamping XYZ to the white point first.

    Out-of-gamut XYZ values end up clipped per channel, which distorts the
    color; callers compare the result's L* with what they asked for.
    """
    xyz = np.clip(np.array([x, y, z]), 0.0, WHITE_POINT_D65)
    r, g, b = XYZ_TO_SRGB_LEGACY @ xyz
    return argb_from_rgb(
        true_delinearized(float(r)),
        true_delinearized(float(g)),
        true_delinearized(float(b)),
    )


# ============================================================
# Luminance / L*
# ============================================================


def y_from_int(argb: int) -> float:
    return float(SRGB_TO_XYZ[1] @ linrgb_from_int(argb))


def lstar_from_y(y: float) -> float:
    y = y / 100.0
    if y <= EPSILON:
        return KAPPA * y
    return 116.0 * y ** (1.0 / 3.0) - 16.0


def lstar_from_int(argb: int) -> float:
    return lstar_from_y(y_from_int(argb))


def y_from_lstar(lstar: float) -> float:
    if lstar > 8.0:
        return ((lstar + 16.0) / 116.0) ** 3 * 100.0
    return lstar / KAPPA * 100.0


def int_from_lstar(lstar: float) -> int:
    """
    Gray with the given L*.

    A neutral under D65 has equal linear R, G and B, each equal to Y, so the
    three channels always come out identical.
    """
    channel = delinearized(y_from_lstar(clamp(lstar, 0.0, 100.0)))
    return argb_from_rgb(channel, channel, channel)
