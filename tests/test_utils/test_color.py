"""Tests for the color math helpers."""

import pytest

from dxfscene.utils.color import (
    Hls,
    contrast_ratio,
    darken,
    hls_to_rgb,
    lighten,
    luminance,
    pack_rgb,
    rgb_to_hls,
    to_linear,
    to_srgb,
    unpack_rgb,
)


def _channel_diff(c1: int, c2: int) -> int:
    return max(abs(a - b) for a, b in zip(unpack_rgb(c1), unpack_rgb(c2)))


def test_luminance_extremes():
    assert luminance(0xFFFFFF) == pytest.approx(1.0, abs=1e-6)
    assert luminance(0x000000) == pytest.approx(0.0, abs=1e-6)


def test_luminance_weights_green_highest():
    assert luminance(0x00FF00) > luminance(0xFF0000) > luminance(0x0000FF)


@pytest.mark.parametrize("color", [0x000000, 0xFFFFFF, 0x808080, 0x3366CC, 0xC04020])
def test_contrast_ratio_with_itself(color):
    assert contrast_ratio(color, color) == pytest.approx(1.0)


def test_contrast_ratio_black_white():
    assert contrast_ratio(0xFFFFFF, 0x000000) == pytest.approx(21.0)
    assert contrast_ratio(0x000000, 0xFFFFFF) == pytest.approx(1 / 21.0)


def test_mid_gray_on_white():
    assert 1 / contrast_ratio(0x808080, 0xFFFFFF) == pytest.approx(3.95, abs=0.01)


def test_linear_srgb_inverse():
    for c in (0.0, 0.01, 0.2, 0.5, 0.9, 1.0):
        assert to_srgb(to_linear(c)) == pytest.approx(c, abs=1e-3)


def test_pack_unpack():
    assert unpack_rgb(0x123456) == (0x12, 0x34, 0x56)
    assert pack_rgb(0x12, 0x34, 0x56) == 0x123456


def test_hls_achromatic():
    hls = rgb_to_hls(0x808080)
    assert hls.s == 0.0
    assert hls.h == 0.0
    assert hls_to_rgb(hls) == 0x808080


@pytest.mark.parametrize("color", [0xFF0000, 0x00FF00, 0x0000FF, 0x3366CC, 0xC04020, 0xFFFFFF])
def test_hls_round_trip(color):
    assert _channel_diff(hls_to_rgb(rgb_to_hls(color)), color) <= 1


def test_hls_hue_of_primaries():
    assert rgb_to_hls(0xFF0000).h == pytest.approx(0.0)
    assert rgb_to_hls(0x00FF00).h == pytest.approx(1 / 3)
    assert rgb_to_hls(0x0000FF).h == pytest.approx(2 / 3)


def test_lighten_clamps_lightness():
    assert lighten(0x808080, 100.0) == 0xFFFFFF


def test_darken_lowers_luminance():
    assert luminance(darken(0x3366CC, 2.0)) < luminance(0x3366CC)


def test_black_stays_black_under_hls():
    assert hls_to_rgb(Hls(0.0, 0.0, 0.0)) == 0x000000


@pytest.mark.parametrize("color", [0x3366CC, 0xC04020, 0x20A040])
@pytest.mark.parametrize("factor", [1.0, 0.9, 0.75])
def test_darken_undoes_lighten(color, factor):
    assert _channel_diff(darken(lighten(color, factor), factor), color) <= 1
