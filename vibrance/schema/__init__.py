# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Value types produced and consumed by the palette engine.

All types in this module are immutable (frozen dataclasses).
Targets are changed through TargetBuilder, never in place.
"""

from vibrance.schema.swatch import (
    MIN_CONTRAST_BODY_TEXT,
    MIN_CONTRAST_TITLE_TEXT,
    Palette,
    Swatch,
)
from vibrance.schema.target import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
    TargetBuilder,
)

__all__ = [
    # Results
    "Swatch",
    "Palette",
    "MIN_CONTRAST_TITLE_TEXT",
    "MIN_CONTRAST_BODY_TEXT",
    # Targets
    "Target",
    "TargetBuilder",
    "LIGHT_VIBRANT",
    "VIBRANT",
    "DARK_VIBRANT",
    "LIGHT_MUTED",
    "MUTED",
    "DARK_MUTED",
    "DEFAULT_TARGETS",
]
