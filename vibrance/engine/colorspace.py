# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Color model and conversions.

Colors travel through the engine as packed integers:
- RGB:  0xRRGGBB            (swatch colors)
- ARGB: 0xAARRGGBB          (text colors, compositing)

HSL follows the Android convention used by the target bands:
- hue in degrees [0, 360)
- saturation and lightness in [0, 1]

Contrast math is WCAG 2.x relative luminance.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


WHITE = 0xFFFFFFFF
BLACK = 0xFF000000

MIN_ALPHA_SEARCH_MAX_ITERATIONS = 10
MIN_ALPHA_SEARCH_PRECISION = 1


# =============================================================================
# Packed integers
# =============================================================================


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into 0xRRGGBB."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def pack_argb(a: int, r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into 0xAARRGGBB."""
    return ((a & 0xFF) << 24) | pack_rgb(r, g, b)


def alpha(color: int) -> int:
    return (color >> 24) & 0xFF


def red(color: int) -> int:
    return (color >> 16) & 0xFF


def green(color: int) -> int:
    return (color >> 8) & 0xFF


def blue(color: int) -> int:
    return color & 0xFF


def set_alpha_component(color: int, alpha_value: int) -> int:
    """Return ``color`` with its alpha byte replaced."""
    if not 0 <= alpha_value <= 255:
        raise ValueError(f"alpha must be between 0 and 255, got {alpha_value}")
    return (color & 0x00FFFFFF) | (alpha_value << 24)


def opaque(rgb: int) -> int:
    """Promote a 0xRRGGBB value to a fully opaque ARGB value."""
    return 0xFF000000 | (rgb & 0x00FFFFFF)


def to_hex(rgb: int) -> str:
    """Format a packed RGB value as "#RRGGBB"."""
    return f"#{rgb & 0xFFFFFF:06X}"


def to_hex_argb(color: int) -> str:
    """Format a packed ARGB value as "#AARRGGBB"."""
    return f"#{color & 0xFFFFFFFF:08X}"


def from_hex(hex_color: str) -> int:
    """
    Parse "#RRGGBB" / "RRGGBB" into packed RGB, or "#AARRGGBB" into ARGB.
    """
    value = hex_color.lstrip("#")
    if len(value) not in (6, 8):
        raise ValueError(f"Expected 6 or 8 hex digits, got {hex_color!r}")
    return int(value, 16)


# =============================================================================
# RGB ↔ HSL
# =============================================================================


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Convert 8-bit RGB components to HSL.

    Returns:
        (hue, saturation, lightness) with hue in [0, 360) and the other
        two in [0, 1]. Achromatic colors have hue and saturation 0.
    """
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    max_c = max(rf, gf, bf)
    min_c = min(rf, gf, bf)
    delta = max_c - min_c

    lightness = (max_c + min_c) / 2.0

    if max_c == min_c:
        hue = saturation = 0.0
    else:
        if max_c == rf:
            hue = math.fmod((gf - bf) / delta, 6.0)
        elif max_c == gf:
            hue = ((bf - rf) / delta) + 2.0
        else:
            hue = ((rf - gf) / delta) + 4.0
        saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))

    hue = math.fmod(hue * 60.0, 360.0)
    if hue < 0:
        hue += 360.0

    return (
        _constrain(hue, 0.0, 360.0),
        _constrain(saturation, 0.0, 1.0),
        _constrain(lightness, 0.0, 1.0),
    )


def color_to_hsl(rgb: int) -> tuple[float, float, float]:
    """HSL of a packed RGB (or ARGB, alpha ignored) color."""
    return rgb_to_hsl(red(rgb), green(rgb), blue(rgb))


def rgb_to_hsl_batch(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    Vectorized RGB → HSL for arrays of 8-bit colors.

    Args:
        pixels: Array of shape (..., 3) with uint8 RGB values

    Returns:
        Array of shape (..., 3) with (hue, saturation, lightness),
        matching rgb_to_hsl element for element.
    """
    rgb = np.asarray(pixels, dtype=np.float64) / 255.0
    rf = rgb[..., 0]
    gf = rgb[..., 1]
    bf = rgb[..., 2]

    max_c = rgb.max(axis=-1)
    min_c = rgb.min(axis=-1)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, 1.0)

    hue = np.where(
        max_c == rf,
        np.fmod((gf - bf) / safe_delta, 6.0),
        np.where(
            max_c == gf,
            (bf - rf) / safe_delta + 2.0,
            (rf - gf) / safe_delta + 4.0,
        ),
    )
    hue = np.where(chromatic, hue, 0.0)
    hue = np.fmod(hue * 60.0, 360.0)
    hue = np.where(hue < 0, hue + 360.0, hue)

    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    saturation = np.where(
        chromatic, delta / np.where(denom > 0, denom, 1.0), 0.0
    )

    return np.stack(
        [
            np.clip(hue, 0.0, 360.0),
            np.clip(saturation, 0.0, 1.0),
            np.clip(lightness, 0.0, 1.0),
        ],
        axis=-1,
    )


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """
    Convert HSL to 8-bit RGB components.

    Inverse of rgb_to_hsl (up to rounding).
    """
    c = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    m = lightness - 0.5 * c
    x = c * (1.0 - abs(math.fmod(hue / 60.0, 2.0) - 1.0))

    segment = int(hue) // 60

    if segment == 0:
        rf, gf, bf = c + m, x + m, m
    elif segment == 1:
        rf, gf, bf = x + m, c + m, m
    elif segment == 2:
        rf, gf, bf = m, c + m, x + m
    elif segment == 3:
        rf, gf, bf = m, x + m, c + m
    elif segment == 4:
        rf, gf, bf = x + m, m, c + m
    else:
        # 5, and 6 for hue == 360
        rf, gf, bf = c + m, m, x + m

    return (
        int(_constrain(round(255.0 * rf), 0, 255)),
        int(_constrain(round(255.0 * gf), 0, 255)),
        int(_constrain(round(255.0 * bf), 0, 255)),
    )


def hsl_to_color(hsl: tuple[float, float, float]) -> int:
    """Packed RGB of an (hue, saturation, lightness) triple."""
    return pack_rgb(*hsl_to_rgb(*hsl))


# =============================================================================
# Luminance & Contrast
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4)
    )


_LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def calculate_luminance(color: int) -> float:
    """
    Relative luminance of a color (alpha ignored), in [0, 1].

    0.0 is darkest black, 1.0 is lightest white.
    """
    srgb = np.array([red(color), green(color), blue(color)], dtype=np.float64) / 255.0
    return float(np.dot(srgb_to_linear(srgb), _LUMINANCE_WEIGHTS))


def composite_colors(foreground: int, background: int) -> int:
    """
    Composite a (possibly translucent) ARGB foreground over an ARGB background.

    Integer source-over blending, per channel.
    """
    bg_alpha = alpha(background)
    fg_alpha = alpha(foreground)
    a = _composite_alpha(fg_alpha, bg_alpha)

    r = _composite_component(red(foreground), fg_alpha, red(background), bg_alpha, a)
    g = _composite_component(green(foreground), fg_alpha, green(background), bg_alpha, a)
    b = _composite_component(blue(foreground), fg_alpha, blue(background), bg_alpha, a)

    return pack_argb(a, r, g, b)


def _composite_alpha(foreground_alpha: int, background_alpha: int) -> int:
    return 0xFF - (((0xFF - background_alpha) * (0xFF - foreground_alpha)) // 0xFF)


def _composite_component(fg_c: int, fg_a: int, bg_c: int, bg_a: int, a: int) -> int:
    if a == 0:
        return 0
    return ((0xFF * fg_c * fg_a) + (bg_c * bg_a * (0xFF - fg_a))) // (a * 0xFF)


def calculate_contrast(foreground: int, background: int) -> float:
    """
    WCAG contrast ratio between two ARGB colors, in [1, 21].

    A translucent foreground is composited over the background first.

    Raises:
        ValueError: If the background is not fully opaque.
    """
    if alpha(background) != 255:
        raise ValueError(
            f"background can not be translucent: {to_hex_argb(background)}"
        )
    if alpha(foreground) < 255:
        foreground = composite_colors(foreground, background)

    luminance1 = calculate_luminance(foreground) + 0.05
    luminance2 = calculate_luminance(background) + 0.05

    return max(luminance1, luminance2) / min(luminance1, luminance2)


def calculate_minimum_alpha(
    foreground: int,
    background: int,
    min_contrast_ratio: float,
) -> int:
    """
    Minimum alpha for ``foreground`` over ``background`` reaching a contrast ratio.

    Binary search over alpha in [0, 255].

    Args:
        foreground: ARGB foreground (its own alpha is ignored)
        background: Opaque ARGB background
        min_contrast_ratio: Required WCAG contrast ratio

    Returns:
        Alpha in [0, 255], or -1 if even the opaque foreground falls short.
    """
    if alpha(background) != 255:
        raise ValueError(
            f"background can not be translucent: {to_hex_argb(background)}"
        )

    # First check that a completely opaque foreground has sufficient contrast
    test_foreground = set_alpha_component(foreground, 255)
    if calculate_contrast(test_foreground, background) < min_contrast_ratio:
        return -1

    iterations = 0
    min_alpha = 0
    max_alpha = 255

    while (
        iterations <= MIN_ALPHA_SEARCH_MAX_ITERATIONS
        and (max_alpha - min_alpha) > MIN_ALPHA_SEARCH_PRECISION
    ):
        test_alpha = (min_alpha + max_alpha) // 2
        test_foreground = set_alpha_component(foreground, test_alpha)
        if calculate_contrast(test_foreground, background) < min_contrast_ratio:
            min_alpha = test_alpha
        else:
            max_alpha = test_alpha
        iterations += 1

    # Conservative: max_alpha always satisfies the ratio
    return max_alpha


def _constrain(value: float, low: float, high: float) -> float:
    return low if value < low else high if value > high else value
