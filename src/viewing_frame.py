"""
Viewing conditions ("frame") for the CAM16 color appearance model.

Everything in a Frame depends only on the environment a color is seen in,
so it is computed once and shared by every conversion made in that frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

import numpy as np

from color_utils import WHITE_POINT_D65, clamp, lerp, y_from_lstar

# XYZ -> CAM16 'cone' responses (M16)
XYZ_TO_CAM16RGB = np.array(
    [
        [0.401288, 0.650173, -0.051461],
        [-0.250268, 1.204414, 0.045854],
        [-0.002079, 0.048952, 0.953127],
    ]
)

CAM16RGB_TO_XYZ = np.array(
    [
        [1.86206786, -1.01125463, 0.14918677],
        [0.38752654, 0.62144744, -0.00897398],
        [-0.0158415, -0.03412294, 1.04996444],
    ]
)


@dataclass(frozen=True)
class Frame:
    n: float
    aw: float
    nbb: float
    ncb: float
    c: float
    nc: float
    rgb_d: Tuple[float, float, float]
    fl: float
    fl_root: float
    z: float

    @classmethod
    def make(
        cls,
        white_point: Tuple[float, float, float],
        adapting_luminance: float,
        background_lstar: float,
        surround: float,
        discounting_illuminant: bool,
    ) -> Frame:
        """
        Build viewing conditions.

        white_point: XYZ of the reference white, Y = 100.
        adapting_luminance: L_A in cd/m^2.
        background_lstar: L* of the background.
        surround: 0 (dark) .. 2 (average).
        discounting_illuminant: full adaptation to the illuminant when True.
        """
        r_w, g_w, b_w = XYZ_TO_CAM16RGB @ np.array(white_point, dtype=float)

        # surround in (0, 2) -> CAM16 F in (0.8, 1.0)
        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = clamp(d, 0.0, 1.0)
        nc = f

        # 100 rather than the white point's Y: later steps already scale
        # appearance relative to the white.
        rgb_d = tuple(float(d * (100.0 / w) + 1.0 - d) for w in (r_w, g_w, b_w))

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k**4
        k4f = 1.0 - k4
        fl = k4 * adapting_luminance + 0.1 * k4f * k4f * (5.0 * adapting_luminance) ** (1.0 / 3.0)

        n = y_from_lstar(background_lstar) / white_point[1]
        z = 1.48 + math.sqrt(n)
        nbb = 0.725 / n**0.2
        ncb = nbb

        rgb_a = []
        for d_i, w in zip(rgb_d, (r_w, g_w, b_w)):
            factor = (fl * d_i * float(w) / 100.0) ** 0.42
            rgb_a.append(400.0 * factor / (factor + 27.13))
        aw = (2.0 * rgb_a[0] + rgb_a[1] + 0.05 * rgb_a[2]) * nbb

        return cls(
            n=n,
            aw=aw,
            nbb=nbb,
            ncb=ncb,
            c=c,
            nc=nc,
            rgb_d=rgb_d,
            fl=fl,
            fl_root=fl**0.25,
            z=z,
        )


@lru_cache(maxsize=None)
def default_frame() -> Frame:
    """
    sRGB-like viewing conditions: D65, a 200 lux room (L_A ~ 11.72 cd/m^2),
    mid-gray background, average surround, no illuminant discounting.
    """
    return Frame.make(
        WHITE_POINT_D65,
        (200.0 / math.pi) * y_from_lstar(50.0) / 100.0,
        50.0,
        2.0,
        False,
    )
