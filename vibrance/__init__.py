# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Vibrance -- Prominent color extraction for theming.

Reduces pixel samples to a handful of representative swatches with a
median cut, then picks vibrant and muted swatches (light, normal, dark)
along with readable text colors for each.

Quick start::

    from vibrance import generate

    palette = generate(pixels)          # (H, W, 3) uint8 array
    palette.vibrant_swatch              # Swatch or None
    palette.get_dominant_color(0x000000)
    palette.to_json()
"""

from __future__ import annotations

__version__ = "1.0.0"

from vibrance.engine import PaletteBuilder, PaletteConfig, generate
from vibrance.engine.filters import DEFAULT_FILTER, Filter
from vibrance.errors import ConfigurationError, InvariantViolation, PaletteError
from vibrance.schema import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Palette,
    Swatch,
    Target,
    TargetBuilder,
)

__all__ = [
    # Core API
    "generate",
    "PaletteBuilder",
    "PaletteConfig",
    "Palette",
    # Types (commonly needed)
    "Swatch",
    "Target",
    "TargetBuilder",
    "Filter",
    "DEFAULT_FILTER",
    # Standard targets
    "LIGHT_VIBRANT",
    "VIBRANT",
    "DARK_VIBRANT",
    "LIGHT_MUTED",
    "MUTED",
    "DARK_MUTED",
    "DEFAULT_TARGETS",
    # Errors
    "PaletteError",
    "ConfigurationError",
    "InvariantViolation",
    # Version
    "__version__",
]
