"""Color math: sRGB/linear conversion, WCAG luminance, HLS. No engine imports.

Colors are packed 24-bit RGB integers (0xRRGGBB). HLS values are computed over
linearized components, each in [0, 1].
"""

from __future__ import annotations

from typing import NamedTuple

WHITE = 0xFFFFFF
BLACK = 0x000000

# WCAG 2.0 relative luminance coefficients
_LUM_R = 0.2126
_LUM_G = 0.7152
_LUM_B = 0.0722

_LINEAR_THRESHOLD = 0.03928
_SRGB_THRESHOLD = 0.003
_GAMMA = 2.4


class Hls(NamedTuple):
    h: float
    l: float  # noqa: E741
    s: float


def unpack_rgb(color: int) -> tuple[int, int, int]:
    """0xRRGGBB -> (r, g, b) with components in 0..255."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def pack_rgb(r: int, g: int, b: int) -> int:
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def to_linear(c: float) -> float:
    """sRGB component -> linear light."""
    if c <= _LINEAR_THRESHOLD:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** _GAMMA


def to_srgb(c: float) -> float:
    """Linear light component -> sRGB."""
    if c < _SRGB_THRESHOLD:
        return c * 12.92
    return 1.055 * c ** (1 / _GAMMA) - 0.055


def _linear_components(color: int) -> tuple[float, float, float]:
    r, g, b = unpack_rgb(color)
    return to_linear(r / 255), to_linear(g / 255), to_linear(b / 255)


def luminance(color: int) -> float:
    """Relative luminance in [0, 1].

    https://www.w3.org/TR/2008/REC-WCAG20-20081211/#relativeluminancedef
    """
    r, g, b = _linear_components(color)
    return _LUM_R * r + _LUM_G * g + _LUM_B * b


def contrast_ratio(c1: int, c2: int) -> float:
    """WCAG contrast ratio. Greater than one when c1 is brighter than c2."""
    return (luminance(c1) + 0.05) / (luminance(c2) + 0.05)


def rgb_to_hls(color: int) -> Hls:
    r, g, b = _linear_components(color)
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    lightness = (max_c + min_c) / 2

    if max_c == min_c:
        # Achromatic
        return Hls(0.0, lightness, 0.0)

    d = max_c - min_c
    if lightness > 0.5:
        saturation = d / (2 - max_c - min_c)
    else:
        saturation = d / (max_c + min_c)

    if max_c == r:
        hue = (g - b) / d + (6 if g < b else 0)
    elif max_c == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4
    return Hls(hue / 6, lightness, saturation)


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _quantize(c: float) -> int:
    return min(max(round(to_srgb(c) * 255), 0), 255)


def hls_to_rgb(hls: Hls) -> int:
    h, lightness, s = hls
    if s == 0:
        r = g = b = lightness
    else:
        if lightness < 0.5:
            q = lightness * (1 + s)
        else:
            q = lightness + s - lightness * s
        p = 2 * lightness - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)
    return pack_rgb(_quantize(r), _quantize(g), _quantize(b))


def lighten(color: int, factor: float) -> int:
    """Multiply HLS lightness by ``factor``, clamped to 1."""
    hls = rgb_to_hls(color)
    return hls_to_rgb(hls._replace(l=min(hls.l * factor, 1.0)))


def darken(color: int, factor: float) -> int:
    """Divide HLS lightness by ``factor``."""
    hls = rgb_to_hls(color)
    return hls_to_rgb(hls._replace(l=hls.l / factor))
