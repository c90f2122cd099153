# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""Configuration for palette generation."""

from __future__ import annotations

from dataclasses import dataclass

from vibrance.errors import ConfigurationError
from vibrance.engine.filters import DEFAULT_FILTER, Filter, validate_filters
from vibrance.engine.histogram import QUANTIZE_WORD_WIDTH, validate_word_width
from vibrance.schema.target import DEFAULT_TARGETS, Target


DEFAULT_CALCULATE_NUMBER_COLORS = 16


@dataclass(frozen=True)
class PaletteConfig:
    """
    Settings for one palette generation run.

    Validated on construction, so a bad setting fails before any pixel
    is read.
    """

    # Maximum number of swatches (median-cut boxes).
    # Landscapes: 10-16 works well. Faces: raise to ~24.
    max_colors: int = DEFAULT_CALCULATE_NUMBER_COLORS

    # Bits per channel after quantization (5 → 2^15 color space)
    word_width: int = QUANTIZE_WORD_WIDTH

    # A color is kept only if every filter allows it
    filters: tuple[Filter, ...] = (DEFAULT_FILTER,)

    # Scored in order; earlier exclusive targets claim swatches first
    targets: tuple[Target, ...] = DEFAULT_TARGETS

    def __post_init__(self) -> None:
        if isinstance(self.max_colors, bool) or not isinstance(self.max_colors, int):
            raise ConfigurationError(
                f"max_colors must be an integer, got {type(self.max_colors).__name__}"
            )
        if self.max_colors <= 0:
            raise ConfigurationError(f"max_colors must be > 0, got {self.max_colors}")

        validate_word_width(self.word_width)
        object.__setattr__(self, "filters", validate_filters(self.filters))

        targets = tuple(self.targets)
        for target in targets:
            if not isinstance(target, Target):
                raise ConfigurationError(
                    f"targets must be Target instances, got {type(target).__name__}"
                )
        object.__setattr__(self, "targets", targets)
