# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Palette engine for Vibrance.

Deterministic quantization, median cut and target selection over 8-bit
pixel samples. Image decoding lives in vibrance.engine.image and is optional.
"""

from vibrance.engine.config import PaletteConfig
from vibrance.engine.filters import DEFAULT_FILTER, DefaultFilter, Filter
from vibrance.engine.generate import PaletteBuilder, generate
from vibrance.engine.histogram import build_histogram, merge_histograms
from vibrance.engine.image import load_samples
from vibrance.engine.quantizer import quantize, split_boxes
from vibrance.engine.selection import find_dominant_swatch, select_swatches

__all__ = [
    "generate",
    "PaletteBuilder",
    "PaletteConfig",
    # Filters
    "Filter",
    "DefaultFilter",
    "DEFAULT_FILTER",
    # Pipeline stages
    "build_histogram",
    "merge_histograms",
    "split_boxes",
    "quantize",
    "select_swatches",
    "find_dominant_swatch",
    # Image adapter (Pillow optional)
    "load_samples",
]
