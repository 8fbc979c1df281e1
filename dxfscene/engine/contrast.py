"""Color contrast correction against the background color.

Policy, in order:
1. Both ``black_white_inversion`` and ``color_correction`` off: no change.
2. Pure white on a light background becomes black, pure black on a dark
   background becomes white.
3. With ``color_correction`` on, colors whose contrast ratio with the
   background is below ``MIN_TARGET_RATIO`` are lightened or darkened towards
   a target luminance.
"""

from __future__ import annotations

import math

from dxfscene.engine.config import SceneOptions
from dxfscene.utils.color import (
    BLACK,
    WHITE,
    Hls,
    contrast_ratio,
    darken,
    hls_to_rgb,
    lighten,
    luminance,
)

MIN_TARGET_RATIO = 1.5
LIGHT_BACKGROUND_LUM = 0.8
DARK_BACKGROUND_LUM = 0.2


def correct_color(color: int, background: int, options: SceneOptions) -> int:
    if not options.color_correction and not options.black_white_inversion:
        return color

    bkg_lum = luminance(background)
    if options.black_white_inversion:
        if color == WHITE and bkg_lum >= LIGHT_BACKGROUND_LUM:
            return BLACK
        if color == BLACK and bkg_lum <= DARK_BACKGROUND_LUM:
            return WHITE

    if not options.color_correction:
        return color

    ratio = contrast_ratio(color, background)
    diff = ratio if ratio >= 1 else 1 / ratio
    if diff >= MIN_TARGET_RATIO:
        return color

    fg_lum = luminance(color)
    target_lum = bkg_lum / 2 if bkg_lum > 0.5 else bkg_lum * 2
    if target_lum > fg_lum:
        if fg_lum == 0:
            # Black has no lightness to scale
            return hls_to_rgb(Hls(0.0, target_lum, 0.0))
        return lighten(color, target_lum / fg_lum)
    factor = fg_lum / target_lum if target_lum > 0 else math.inf
    return darken(color, factor)


class ColorCorrector:
    """``correct_color`` bound to a set of options and their background color."""

    def __init__(self, options: SceneOptions | None = None) -> None:
        self.options = options or SceneOptions()

    @property
    def background(self) -> int:
        return self.options.clear_color

    def __call__(self, color: int) -> int:
        return correct_color(color, self.background, self.options)
