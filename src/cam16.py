"""
CAM16 color appearance model, extended with L* as the lightness axis and
coupled to gamut mapping into sRGB.

A Cam holds the appearance of a color under a Frame. Hue and chroma come
from CAM16; the tone used to pick colors is L*, since L* tracks luminance
and luminance is what contrast requirements are written in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from color_utils import (
    int_from_lstar,
    lstar_from_int,
    sanitize_degrees,
    signum,
    xyz_from_int,
    xyz_to_color,
)
from hct_solver import solve_to_int
from viewing_frame import CAM16RGB_TO_XYZ, XYZ_TO_CAM16RGB, Frame, default_frame

# ============================================================
# Search tolerances
# ============================================================

# chroma binary search stops once floor and ceiling are this close
CHROMA_SEARCH_ENDPOINT = 0.4
# J binary search stops once floor and ceiling are this close
LIGHTNESS_SEARCH_ENDPOINT = 0.01
# largest accepted difference between requested and returned L*
DL_MAX = 0.2
# largest accepted CAM16-UCS distance between requested and returned color
DE_MAX = 1.0


# ============================================================
# Appearance coordinates
# ============================================================


@dataclass(frozen=True)
class Cam:
    hue: float
    chroma: float
    j: float
    q: float
    m: float
    s: float
    jstar: float
    astar: float
    bstar: float

    def distance(self, other: Cam) -> float:
        """
        Color difference in CAM16-UCS, comparable to delta E in L*a*b*.
        """
        d_j = self.jstar - other.jstar
        d_a = self.astar - other.astar
        d_b = self.bstar - other.bstar
        de_prime = math.sqrt(d_j * d_j + d_a * d_a + d_b * d_b)
        return 1.41 * de_prime**0.63

    def viewed(self, frame: Optional[Frame] = None) -> int:
        """
        ARGB color that produces this appearance in the given frame.

        Appearances outside sRGB come back clipped.
        """
        frame = frame or default_frame()

        if self.chroma == 0 or self.j == 0:
            alpha = 0.0
        else:
            alpha = self.chroma / math.sqrt(self.j / 100.0)

        t = (alpha / (1.64 - 0.29**frame.n) ** 0.73) ** (1.0 / 0.9)
        h_rad = math.radians(self.hue)

        e_hue = 0.25 * (math.cos(h_rad + 2.0) + 3.8)
        ac = frame.aw * (self.j / 100.0) ** (1.0 / frame.c / frame.z)
        p1 = e_hue * (50000.0 / 13.0) * frame.nc * frame.ncb
        p2 = ac / frame.nbb

        h_sin = math.sin(h_rad)
        h_cos = math.cos(h_rad)

        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        rgb_a = (
            (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0,
            (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0,
            (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0,
        )

        rgb_f = []
        for adapted, d in zip(rgb_a, frame.rgb_d):
            adapted_abs = abs(adapted)
            if adapted_abs >= 400.0:
                base = 0.0
            else:
                base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
            c_i = signum(adapted) * (100.0 / frame.fl) * base ** (1.0 / 0.42)
            rgb_f.append(c_i / d)

        x, y, z = CAM16RGB_TO_XYZ @ np.array(rgb_f)
        return xyz_to_color(float(x), float(y), float(z))


# ============================================================
# Forward transforms
# ============================================================


def from_int(argb: int, frame: Optional[Frame] = None) -> Cam:
    """
    Appearance of an ARGB color viewed in frame (default: sRGB frame).
    """
    frame = frame or default_frame()

    # XYZ -> cone responses, then discount the illuminant
    r_t, g_t, b_t = XYZ_TO_CAM16RGB @ xyz_from_int(argb)
    r_d = frame.rgb_d[0] * float(r_t)
    g_d = frame.rgb_d[1] * float(g_t)
    b_d = frame.rgb_d[2] * float(b_t)

    # chromatic adaptation
    r_af = (frame.fl * abs(r_d) / 100.0) ** 0.42
    g_af = (frame.fl * abs(g_d) / 100.0) ** 0.42
    b_af = (frame.fl * abs(b_d) / 100.0) ** 0.42
    r_a = signum(r_d) * 400.0 * r_af / (r_af + 27.13)
    g_a = signum(g_d) * 400.0 * g_af / (g_af + 27.13)
    b_a = signum(b_d) * 400.0 * b_af / (b_af + 27.13)

    # redness-greenness, yellowness-blueness
    a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
    b = (r_a + g_a - 2.0 * b_a) / 9.0

    u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
    p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

    hue = sanitize_degrees(math.degrees(math.atan2(b, a)))
    hue_radians = math.radians(hue)

    # achromatic response, lightness, brightness
    ac = p2 * frame.nbb
    j = 100.0 * (ac / frame.aw) ** (frame.c * frame.z)
    q = (4.0 / frame.c) * math.sqrt(j / 100.0) * (frame.aw + 4.0) * frame.fl_root

    hue_prime = hue + 360.0 if hue < 20.14 else hue
    e_hue = 0.25 * (math.cos(math.radians(hue_prime) + 2.0) + 3.8)
    p1 = (50000.0 / 13.0) * e_hue * frame.nc * frame.ncb
    t = p1 * math.hypot(a, b) / (u + 0.305)
    alpha = t**0.9 * (1.64 - 0.29**frame.n) ** 0.73

    # chroma, colorfulness, saturation
    c = alpha * math.sqrt(j / 100.0)
    m = c * frame.fl_root
    s = 50.0 * math.sqrt(alpha * frame.c / (frame.aw + 4.0))

    return _with_ucs(hue, c, j, q, m, s, hue_radians)


def from_jch(j: float, c: float, h: float, frame: Optional[Frame] = None) -> Cam:
    """
    Appearance from lightness J, chroma C and hue h (degrees).
    """
    frame = frame or default_frame()
    q = (4.0 / frame.c) * math.sqrt(j / 100.0) * (frame.aw + 4.0) * frame.fl_root
    m = c * frame.fl_root
    alpha = 0.0 if j == 0 else c / math.sqrt(j / 100.0)
    s = 50.0 * math.sqrt(alpha * frame.c / (frame.aw + 4.0))
    return _with_ucs(h, c, j, q, m, s, math.radians(h))


def _with_ucs(hue, c, j, q, m, s, hue_radians) -> Cam:
    jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
    mstar = (1.0 / 0.0228) * math.log1p(0.0228 * m)
    return Cam(
        hue=hue,
        chroma=c,
        j=j,
        q=q,
        m=m,
        s=s,
        jstar=jstar,
        astar=mstar * math.cos(hue_radians),
        bstar=mstar * math.sin(hue_radians),
    )


# ============================================================
# Gamut-constrained lookup
# ============================================================


def find_cam_by_j(hue: float, chroma: float, lstar: float, frame: Frame) -> Optional[Cam]:
    """
    Binary search on J for a color whose clipped sRGB rendering has the
    requested L*, without its hue drifting more than DE_MAX.

    Returns None when no J qualifies at this chroma.
    """
    low, high = 0.0, 100.0
    best_dl = best_de = 1000.0
    best: Optional[Cam] = None

    while abs(low - high) > LIGHTNESS_SEARCH_ENDPOINT:
        mid = low + (high - low) / 2.0

        # Out-of-gamut appearances are clipped to 0..255 on the way to ARGB.
        clipped = from_jch(mid, chroma, hue, frame).viewed(frame)
        clipped_lstar = lstar_from_int(clipped)
        d_l = abs(lstar - clipped_lstar)

        if d_l < DL_MAX:
            # Lightness and chroma may be distorted by clipping; only hue
            # drift disqualifies the candidate.
            cam_clipped = from_int(clipped, frame)
            d_e = cam_clipped.distance(from_jch(cam_clipped.j, cam_clipped.chroma, hue, frame))
            if d_e <= DE_MAX:
                best_dl, best_de = d_l, d_e
                best = cam_clipped

        if best_dl == 0 and best_de == 0:
            break

        if clipped_lstar < lstar:
            low = mid
        else:
            high = mid

    return best


def get_int(hue: float, chroma: float, lstar: float, frame: Optional[Frame] = None) -> int:
    """
    ARGB color for CAM16 hue/chroma and L*, seen in frame.

    The L* of the result always matches the request; the chroma may come
    out lower, since e.g. a light red of high chroma does not exist.
    """
    frame = frame or default_frame()
    if frame is default_frame():
        return solve_to_int(hue, chroma, lstar)

    if chroma < 1.0 or round(lstar) <= 0 or round(lstar) >= 100:
        return int_from_lstar(lstar)

    hue = 0.0 if hue < 0 else min(360.0, hue)

    # Probe the requested chroma first; if it fails, bisect toward 0.
    high = chroma
    mid = chroma
    low = 0.0
    first_probe = True
    answer: Optional[Cam] = None

    while abs(low - high) >= CHROMA_SEARCH_ENDPOINT:
        candidate = find_cam_by_j(hue, mid, lstar, frame)

        if first_probe:
            if candidate is not None:
                return candidate.viewed(frame)
            first_probe = False
            mid = low + (high - low) / 2.0
            continue

        if candidate is None:
            high = mid
        else:
            answer = candidate
            low = mid
        mid = low + (high - low) / 2.0

    # Every L* exists at zero chroma.
    if answer is None:
        return int_from_lstar(lstar)
    return answer.viewed(frame)


def cam_to_color(hue: float, chroma: float, lstar: float) -> int:
    return get_int(hue, chroma, lstar)
