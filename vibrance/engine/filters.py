# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Color filters applied during histogram construction.

A filter decides whether a quantized color may contribute to the palette.
Colors rejected by any active filter are dropped together with all of
their samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, runtime_checkable

from vibrance.errors import ConfigurationError


@runtime_checkable
class Filter(Protocol):
    """
    Predicate over a color and its HSL values.

    Args (of is_allowed):
        rgb: Packed 0xRRGGBB color
        hsl: (hue in degrees, saturation, lightness)
    """

    def is_allowed(self, rgb: int, hsl: tuple[float, float, float]) -> bool:
        ...


@dataclass(frozen=True)
class DefaultFilter:
    """
    Rejects near-black, near-white, and colors near the red side of the I line.

    The I line band (hue 10-37°, low-ish saturation) covers skin tones,
    which would otherwise dominate "vibrant" selections on portraits.
    """

    black_max_lightness: float = 0.05
    white_min_lightness: float = 0.95
    i_line_min_hue: float = 10.0
    i_line_max_hue: float = 37.0
    i_line_max_saturation: float = 0.82

    def is_allowed(self, rgb: int, hsl: tuple[float, float, float]) -> bool:
        return not (
            self.is_white(hsl) or self.is_black(hsl) or self.is_near_red_i_line(hsl)
        )

    def is_black(self, hsl: tuple[float, float, float]) -> bool:
        return hsl[2] <= self.black_max_lightness

    def is_white(self, hsl: tuple[float, float, float]) -> bool:
        return hsl[2] >= self.white_min_lightness

    def is_near_red_i_line(self, hsl: tuple[float, float, float]) -> bool:
        return (
            self.i_line_min_hue <= hsl[0] <= self.i_line_max_hue
            and hsl[1] <= self.i_line_max_saturation
        )


DEFAULT_FILTER = DefaultFilter()


def validate_filters(filters: Iterable[object]) -> tuple[Filter, ...]:
    """Return filters as a tuple, rejecting objects without is_allowed()."""
    result = tuple(filters)
    for f in result:
        if not callable(getattr(f, "is_allowed", None)):
            raise ConfigurationError(
                f"Filter must define is_allowed(rgb, hsl), got {type(f).__name__}"
            )
    return result


def is_allowed(
    rgb: int,
    hsl: tuple[float, float, float],
    filters: tuple[Filter, ...],
) -> bool:
    """True when every filter accepts the color (vacuously true for no filters)."""
    return all(f.is_allowed(rgb, hsl) for f in filters)
