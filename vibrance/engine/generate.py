# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Main palette generation API.

This is the primary entry point for Vibrance's engine:

    samples → histogram → median cut → swatches → target selection → Palette
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import numpy as np
from numpy.typing import NDArray

from vibrance.engine.config import PaletteConfig
from vibrance.engine.filters import Filter
from vibrance.engine.histogram import build_histogram
from vibrance.engine.image import DEFAULT_RESIZE_BITMAP_AREA, Region, load_samples
from vibrance.engine.quantizer import quantize
from vibrance.engine.selection import select_swatches
from vibrance.schema.swatch import Palette, Swatch
from vibrance.schema.target import Target

logger = logging.getLogger(__name__)


def generate(
    samples: Any,
    *,
    config: Optional[PaletteConfig] = None,
    **overrides: Any,
) -> Palette:
    """
    Generate a palette from 8-bit RGB(A) pixel samples.

    Args:
        samples: One of:
            - NumPy array (or nested sequence) of shape (..., 3) or (..., 4),
              8-bit channels. Alpha is ignored.
            - 1-D integer array of packed 0xRRGGBB values.
            None or an empty array yields an empty palette.
        config: Generation settings (default: PaletteConfig())
        **overrides: PaletteConfig fields to replace, e.g. max_colors=24

    Returns:
        Palette with all swatches, per-target selections and the dominant swatch

    Raises:
        ConfigurationError: If a setting is invalid (before any sample is read)

    Example:
        >>> from vibrance import generate
        >>> palette = generate(pixels, max_colors=24)
        >>> palette.vibrant_swatch
        Swatch(red=227, green=58, blue=41, population=812)
    """
    config = config if config is not None else PaletteConfig()
    if overrides:
        config = dataclasses.replace(config, **overrides)

    histogram = build_histogram(samples, config.word_width, config.filters)
    swatches = quantize(histogram, config.max_colors, config.word_width)
    palette = Palette(
        swatches=swatches,
        targets=config.targets,
        selected=select_swatches(swatches, config.targets),
    )

    logger.debug(
        "Generated palette: %d colors → %d swatches, %d/%d targets selected",
        len(histogram),
        len(palette.swatches),
        len(palette.selected),
        len(palette.targets),
    )
    return palette


class PaletteBuilder:
    """
    Step-by-step palette configuration.

    Built either from pixel samples (full pipeline) or from a ready swatch
    list, in which case quantization and filters are skipped and only
    target selection runs. Setters validate immediately and return the
    builder so calls can be chained:

        palette = (
            PaletteBuilder(pixels)
            .maximum_color_count(24)
            .clear_filters()
            .generate()
        )
    """

    def __init__(self, samples: Any = None) -> None:
        self._samples = samples
        self._swatches: Optional[tuple[Swatch, ...]] = None
        self._config = PaletteConfig()

    @classmethod
    def from_swatches(cls, swatches: Iterable[Swatch]) -> PaletteBuilder:
        """Builder that only runs target selection over ``swatches``."""
        builder = cls()
        builder._swatches = tuple(swatches)
        return builder

    @classmethod
    def from_image(
        cls,
        image: Union[str, Path, NDArray[np.uint8], Any],
        *,
        resize_area: int = DEFAULT_RESIZE_BITMAP_AREA,
        region: Optional[Region] = None,
    ) -> PaletteBuilder:
        """Builder over the samples of an image (see load_samples)."""
        return cls(load_samples(image, resize_area=resize_area, region=region))

    @property
    def config(self) -> PaletteConfig:
        return self._config

    def maximum_color_count(self, colors: int) -> PaletteBuilder:
        """Set the maximum number of swatches (default 16)."""
        self._config = dataclasses.replace(self._config, max_colors=colors)
        return self

    def quantize_word_width(self, word_width: int) -> PaletteBuilder:
        """Set the bits per channel used for quantization (default 5)."""
        self._config = dataclasses.replace(self._config, word_width=word_width)
        return self

    def clear_filters(self) -> PaletteBuilder:
        self._config = dataclasses.replace(self._config, filters=())
        return self

    def add_filter(self, color_filter: Filter) -> PaletteBuilder:
        self._config = dataclasses.replace(
            self._config, filters=self._config.filters + (color_filter,)
        )
        return self

    def clear_targets(self) -> PaletteBuilder:
        self._config = dataclasses.replace(self._config, targets=())
        return self

    def add_target(self, target: Target) -> PaletteBuilder:
        """Append a target; adding one that is already present is a no-op."""
        if target not in self._config.targets:
            self._config = dataclasses.replace(
                self._config, targets=self._config.targets + (target,)
            )
        return self

    def generate(self) -> Palette:
        if self._swatches is not None:
            return Palette.from_swatches(self._swatches, self._config.targets)
        return generate(self._samples, config=self._config)
