"""
Tonal ramps: one hue/chroma pair rendered at fixed L* steps.

L* is perceptually linear in luminance, so contrast between two shades
depends only on how many steps apart they are: any two shades five steps
apart reach a WCAG contrast ratio of at least 4.5.
"""

from typing import Tuple

from cam16 import cam_to_color
from color_utils import WHITE, clamp

RAMP_LENGTH = 14

# L* 50 does not reach 4.5:1 against L* 100; 49.6 is the smallest L* that does.
MIDDLE_LSTAR = 49.6

# Blues and yellows reach far higher chroma than other hues at L* >= 90;
# capping keeps light shades consistent across hues.
MAX_LIGHT_CHROMA = 40.0
LIGHT_LSTAR = 90.0


def shade_lstars() -> Tuple[float, ...]:
    """
    Target L* of every shade after the leading white, lightest first.
    """
    lstars = [99.0, 95.0]
    for i in range(2, RAMP_LENGTH - 1):
        lstar = MIDDLE_LSTAR if i == 6 else 100.0 - 10.0 * (i - 1)
        lstars.append(clamp(lstar, 0.0, 100.0))
    return tuple(lstars)


def shades_of(hue: float, chroma: float) -> Tuple[int, ...]:
    """
    RAMP_LENGTH ARGB colors for a CAM16 hue/chroma, by descending lightness.
    The first is always pure white.
    """
    shades = [WHITE]
    for lstar in shade_lstars():
        shade_chroma = min(MAX_LIGHT_CHROMA, chroma) if lstar >= LIGHT_LSTAR else chroma
        shades.append(cam_to_color(hue, shade_chroma, lstar))
    return tuple(shades)
