"""
Solve (hue, chroma, L*) to an sRGB color under the default viewing frame.

The fast path runs a few Newton iterations on CAM16 lightness J with the
inverse model inlined. When the requested chroma is out of gamut it falls
back to a geometric search: intersect the RGB cube with the plane of the
requested luminance Y, find the cube edge segment whose hue range contains
the target hue, then bisect that segment along the critical planes where an
8-bit channel value changes.
"""

import math
from typing import Optional, Tuple

import numpy as np

from color_utils import (
    argb_from_linrgb,
    int_from_lstar,
    sanitize_degrees,
    signum,
    true_delinearized,
    y_from_lstar,
)
from viewing_frame import default_frame

LinRgb = Tuple[float, float, float]

# ============================================================
# Constants
# ============================================================

Y_FROM_LINRGB = (0.2126, 0.7152, 0.0722)

SCALED_DISCOUNT_FROM_LINRGB = np.array(
    [
        [0.001200833568784504, 0.002389694492170889, 0.0002795742885861124],
        [0.0005891086651375999, 0.0029785502573438758, 0.0003270666104008398],
        [0.00010146692491640572, 0.0005364214359186694, 0.0032979401770712076],
    ]
)

LINRGB_FROM_SCALED_DISCOUNT = np.array(
    [
        [1373.2198709594231, -1100.4251190754821, -7.278681089101213],
        [-271.815969077903, 559.6580465940733, -32.46047482791194],
        [1.9622899599665666, -57.173814538844006, 308.7233197812385],
    ]
)

NEWTON_ROUNDS = 5
Y_TOLERANCE = 0.002
LINRGB_CEILING = 100.01
BISECT_ROUNDS = 8

NO_VERTEX: LinRgb = (-1.0, -1.0, -1.0)


def _critical_planes() -> Tuple[float, ...]:
    # Linear value halfway between consecutive 8-bit channel values.
    normalized = (np.arange(255) + 0.5) / 255.0
    linear = np.where(
        normalized <= 0.04045,
        normalized / 12.92,
        ((normalized + 0.055) / 1.055) ** 2.4,
    )
    return tuple(float(v) for v in linear * 100.0)


CRITICAL_PLANES = _critical_planes()


# ============================================================
# CAM16 pieces specialised for the solver
# ============================================================


def chromatic_adaptation(component: float) -> float:
    af = abs(component) ** 0.42
    return signum(component) * 400.0 * af / (af + 27.13)


def inverse_chromatic_adaptation(adapted: float) -> float:
    adapted_abs = abs(adapted)
    if adapted_abs == 400.0:
        return signum(adapted) * math.inf
    # past 400 the base clamps to 0 rather than aborting the iteration
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
    return signum(adapted) * base ** (1.0 / 0.42)


def hue_of(linrgb: LinRgb) -> float:
    """
    CAM16 hue, in radians, of a linear RGB color.
    """
    r_d, g_d, b_d = SCALED_DISCOUNT_FROM_LINRGB @ np.array(linrgb)
    r_a = chromatic_adaptation(float(r_d))
    g_a = chromatic_adaptation(float(g_d))
    b_a = chromatic_adaptation(float(b_d))
    # redness-greenness, yellowness-blueness
    a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    return math.atan2(b, a)


def sanitize_radians(angle: float) -> float:
    return (angle + math.pi * 8.0) % (math.pi * 2.0)


def are_in_cyclic_order(a: float, b: float, c: float) -> bool:
    """
    True when travelling counter-clockwise from angle a to angle c passes b.
    """
    delta_ab = sanitize_radians(b - a)
    delta_ac = sanitize_radians(c - a)
    return delta_ab < delta_ac


# ============================================================
# Newton iteration on J
# ============================================================


def find_result_by_j(hue_radians: float, chroma: float, y: float) -> Optional[int]:
    """
    Color with the given hue, chroma and Y, or None when the combination is
    out of gamut or the iteration does not settle.
    """
    # initial estimate of J
    j = math.sqrt(y) * 11.0

    frame = default_frame()
    t_inner_coeff = 1.0 / (1.64 - 0.29**frame.n) ** 0.73
    e_hue = 0.25 * (math.cos(hue_radians + 2.0) + 3.8)
    p1 = e_hue * (50000.0 / 13.0) * frame.nc * frame.ncb
    h_sin = math.sin(hue_radians)
    h_cos = math.cos(hue_radians)
    ac_exponent = 1.0 / frame.c / frame.z
    k_r, k_g, k_b = Y_FROM_LINRGB

    for rnd in range(NEWTON_ROUNDS):
        j_normalized = j / 100.0
        alpha = 0.0 if chroma == 0 or j == 0 else chroma / math.sqrt(j_normalized)
        t = (alpha * t_inner_coeff) ** (1.0 / 0.9)
        ac = frame.aw * j_normalized**ac_exponent
        p2 = ac / frame.nbb
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        scaled = np.array(
            [
                inverse_chromatic_adaptation(r_a),
                inverse_chromatic_adaptation(g_a),
                inverse_chromatic_adaptation(b_a),
            ]
        )
        if not np.all(np.isfinite(scaled)):
            return None
        lin_r, lin_g, lin_b = (float(v) for v in LINRGB_FROM_SCALED_DISCOUNT @ scaled)

        if lin_r < 0 or lin_g < 0 or lin_b < 0:
            return None

        fnj = k_r * lin_r + k_g * lin_g + k_b * lin_b
        if fnj <= 0:
            return None

        if rnd == NEWTON_ROUNDS - 1 or abs(fnj - y) < Y_TOLERANCE:
            if lin_r > LINRGB_CEILING or lin_g > LINRGB_CEILING or lin_b > LINRGB_CEILING:
                return None
            return argb_from_linrgb(lin_r, lin_g, lin_b)

        # Newton step, 2 * f(J) / J approximates f'(J)
        j = j - (fnj - y) * j / (2.0 * fnj)

    return None


# ============================================================
# Geometric fallback
# ============================================================


def is_bounded(x: float) -> bool:
    return 0.0 <= x <= 100.0


def nth_vertex(y: float, n: int) -> LinRgb:
    """
    The nth (0..11) possible vertex of the intersection between the plane of
    luminance y and the linear RGB cube, or NO_VERTEX when that edge of the
    cube does not cross the plane.
    """
    k_r, k_g, k_b = Y_FROM_LINRGB
    coord_a = 0.0 if n % 4 <= 1 else 100.0
    coord_b = 0.0 if n % 2 == 0 else 100.0

    if n < 4:
        g, b = coord_a, coord_b
        r = (y - g * k_g - b * k_b) / k_r
        return (r, g, b) if is_bounded(r) else NO_VERTEX
    if n < 8:
        b, r = coord_a, coord_b
        g = (y - r * k_r - b * k_b) / k_g
        return (r, g, b) if is_bounded(g) else NO_VERTEX
    r, g = coord_a, coord_b
    b = (y - r * k_r - g * k_g) / k_b
    return (r, g, b) if is_bounded(b) else NO_VERTEX


def bisect_to_segment(y: float, target_hue: float) -> Tuple[LinRgb, LinRgb]:
    """
    Endpoints of the edge segment of the y-plane polygon that contains
    target_hue (radians).
    """
    left = right = NO_VERTEX
    left_hue = right_hue = 0.0
    initialized = False
    uncut = True

    for n in range(12):
        mid = nth_vertex(y, n)
        if mid[0] < 0:
            continue
        mid_hue = hue_of(mid)
        if not initialized:
            left = right = mid
            left_hue = right_hue = mid_hue
            initialized = True
            continue
        if uncut or are_in_cyclic_order(left_hue, mid_hue, right_hue):
            uncut = False
            if are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right, right_hue = mid, mid_hue
            else:
                left, left_hue = mid, mid_hue

    return left, right


def critical_plane_below(x: float) -> int:
    return math.floor(x - 0.5)


def critical_plane_above(x: float) -> int:
    return math.ceil(x - 0.5)


def intercept(source: float, mid: float, target: float) -> float:
    if target == source:
        return target
    return (mid - source) / (target - source)


def lerp_point(source: LinRgb, t: float, target: LinRgb) -> LinRgb:
    return (
        source[0] + (target[0] - source[0]) * t,
        source[1] + (target[1] - source[1]) * t,
        source[2] + (target[2] - source[2]) * t,
    )


def set_coordinate(source: LinRgb, coordinate: float, target: LinRgb, axis: int) -> LinRgb:
    """
    Intersection of segment source-target with the plane {axis = coordinate}.
    """
    t = intercept(source[axis], coordinate, target[axis])
    return lerp_point(source, t, target)


def bisect_to_limit(y: float, target_hue: float) -> LinRgb:
    """
    Color of luminance y on the RGB cube boundary whose hue is closest to
    target_hue (radians), in linear RGB.
    """
    left, right = bisect_to_segment(y, target_hue)
    left_hue = hue_of(left)

    for axis in range(3):
        if left[axis] == right[axis]:
            continue
        if left[axis] < right[axis]:
            l_plane = critical_plane_below(true_delinearized(left[axis]))
            r_plane = critical_plane_above(true_delinearized(right[axis]))
        else:
            l_plane = critical_plane_above(true_delinearized(left[axis]))
            r_plane = critical_plane_below(true_delinearized(right[axis]))

        for _ in range(BISECT_ROUNDS):
            if abs(r_plane - l_plane) <= 1:
                break
            m_plane = (l_plane + r_plane) // 2
            mid = set_coordinate(left, CRITICAL_PLANES[m_plane], right, axis)
            mid_hue = hue_of(mid)
            if are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right = mid
                r_plane = m_plane
            else:
                left = mid
                left_hue = mid_hue
                l_plane = m_plane

    return (
        (left[0] + right[0]) / 2.0,
        (left[1] + right[1]) / 2.0,
        (left[2] + right[2]) / 2.0,
    )


# ============================================================
# Entry point
# ============================================================


def solve_to_int(hue_degrees: float, chroma: float, lstar: float) -> int:
    """
    sRGB color closest to the given CAM16 hue/chroma and L*.

    Hue and L* are honoured as closely as 8-bit sRGB allows; when the chroma
    is out of reach the most chromatic in-gamut color is returned instead.
    """
    if chroma < 0.0001 or lstar < 0.0001 or lstar > 99.9999:
        return int_from_lstar(lstar)

    hue_radians = math.radians(sanitize_degrees(hue_degrees))
    y = y_from_lstar(lstar)

    exact = find_result_by_j(hue_radians, chroma, y)
    if exact is not None:
        return exact

    return argb_from_linrgb(*bisect_to_limit(y, hue_radians))
