import math

import numpy as np
import pytest

from cam16 import DL_MAX, Cam, find_cam_by_j, from_int, from_jch, get_int
from color_utils import (
    BLACK,
    WHITE,
    WHITE_POINT_D65,
    blue,
    green,
    int_from_lstar,
    lstar_from_int,
    red,
    xyz_from_int,
    y_from_lstar,
)
from hct_solver import solve_to_int
from viewing_frame import Frame, default_frame

# hue, chroma, J of the primaries in the default frame
REFERENCE = {
    0xFFFF0000: (27.408, 113.357, 46.445),
    0xFF00FF00: (142.139, 108.410, 79.331),
    0xFF0000FF: (282.788, 87.230, 25.465),
    0xFFFFFFFF: (209.492, 2.869, 100.0),
}


def dim_frame() -> Frame:
    return Frame.make(WHITE_POINT_D65, 50.0, 30.0, 1.0, False)


@pytest.mark.parametrize("argb,expected", list(REFERENCE.items()))
def test_from_int_reference_values(argb, expected):
    cam = from_int(argb)
    hue, chroma, j = expected
    assert cam.hue == pytest.approx(hue, abs=0.01)
    assert cam.chroma == pytest.approx(chroma, abs=0.01)
    assert cam.j == pytest.approx(j, abs=0.01)


def test_black_has_no_appearance():
    cam = from_int(BLACK)
    assert cam.j == 0
    assert cam.chroma == 0
    assert cam.m == 0


@pytest.mark.parametrize("argb", [0xFFFF0000, 0xFF4285F4, 0xFF9ACD32, 0xFF8B4513])
def test_from_int_matches_colour(argb):
    colour = pytest.importorskip("colour")
    y_b = y_from_lstar(50.0)
    spec = colour.XYZ_to_CAM16(
        xyz_from_int(argb),
        np.array(WHITE_POINT_D65),
        (200.0 / math.pi) * y_b / 100.0,
        y_b,
        colour.VIEWING_CONDITIONS_CAM16["Average"],
    )
    cam = from_int(argb)
    assert cam.j == pytest.approx(spec.J, abs=0.5)
    assert cam.chroma == pytest.approx(spec.C, abs=0.5)
    assert cam.hue == pytest.approx(spec.h, abs=0.5)


# ------------------------------------------------------------
# Distance
# ------------------------------------------------------------


def test_distance_to_self_is_zero():
    cam = from_int(0xFF1B6EF3)
    assert cam.distance(cam) == 0


def test_distance_is_symmetric_and_positive():
    a = from_int(0xFF1B6EF3)
    b = from_int(0xFF1B6EF4)
    c = from_int(0xFFFF0000)
    assert a.distance(c) == pytest.approx(c.distance(a))
    assert 0 < a.distance(b) < a.distance(c)


# ------------------------------------------------------------
# Inverse transform
# ------------------------------------------------------------


@pytest.mark.parametrize("argb", [0xFFFF0000, 0xFF00FF00, 0xFF0000FF, 0xFF1B6EF3, 0xFF7F7F7F, 0xFFFAEBD7])
def test_viewed_round_trip(argb):
    back = from_int(argb).viewed()
    for channel in (red, green, blue):
        assert abs(channel(back) - channel(argb)) <= 1


def test_from_jch_round_trip():
    cam = from_int(0xFF1B6EF3)
    rebuilt = from_jch(cam.j, cam.chroma, cam.hue)
    assert isinstance(rebuilt, Cam)
    assert rebuilt.distance(cam) == pytest.approx(0.0, abs=1e-6)
    back = rebuilt.viewed()
    assert abs(blue(back) - 0xF3) <= 1


def test_viewed_in_other_frame_round_trip():
    frame = dim_frame()
    argb = 0xFF4285F4
    back = from_int(argb, frame).viewed(frame)
    for channel in (red, green, blue):
        assert abs(channel(back) - channel(argb)) <= 1


# ------------------------------------------------------------
# get_int
# ------------------------------------------------------------


def test_default_frame_is_cached():
    assert default_frame() is default_frame()


@pytest.mark.parametrize("hue,chroma,lstar", [(27.4, 40.0, 50.0), (282.8, 130.0, 30.0), (120.0, 16.0, 90.0)])
def test_get_int_default_frame_uses_solver(hue, chroma, lstar):
    assert get_int(hue, chroma, lstar) == solve_to_int(hue, chroma, lstar)
    assert get_int(hue, chroma, lstar, default_frame()) == solve_to_int(hue, chroma, lstar)


@pytest.mark.parametrize("hue,chroma,lstar", [(120.0, 20.0, 60.0), (27.4, 60.0, 45.0), (282.8, 30.0, 80.0)])
def test_get_int_other_frame_keeps_lstar(hue, chroma, lstar):
    argb = get_int(hue, chroma, lstar, dim_frame())
    assert abs(lstar_from_int(argb) - lstar) < 1.0


def test_get_int_other_frame_achromatic_and_extremes():
    frame = dim_frame()
    assert get_int(120.0, 0.5, 60.0, frame) == int_from_lstar(60.0)
    assert get_int(120.0, 40.0, 100.0, frame) == WHITE
    assert get_int(120.0, 40.0, 0.0, frame) == BLACK


def test_find_cam_by_j_result_matches_lstar():
    frame = dim_frame()
    cam = find_cam_by_j(120.0, 10.0, 60.0, frame)
    assert cam is not None
    assert abs(lstar_from_int(cam.viewed(frame)) - 60.0) < 1.0


def test_get_int_other_frame_lowers_unreachable_chroma():
    frame = dim_frame()
    argb = get_int(282.8, 130.0, 30.0, frame)
    assert argb != int_from_lstar(30.0)
    assert 30.0 < from_int(argb, frame).chroma < 130.0
    assert abs(lstar_from_int(argb) - 30.0) < DL_MAX


def test_get_int_other_frame_gray_keeps_lstar():
    # near-black requests stay a dark gray instead of snapping to black
    argb = get_int(120.0, 0.5, 0.8, dim_frame())
    assert argb == int_from_lstar(0.8)
    assert argb != BLACK
    assert red(argb) == green(argb) == blue(argb)
