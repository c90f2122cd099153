# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Quantization and histogram construction.

Each 8-bit sample is reduced to ``word_width`` bits per channel and packed as
``r << 2W | g << W | b``. The histogram maps every distinct quantized color
to the number of samples that fell into it.

Quantization and counting are vectorized (NumPy); filters are evaluated once
per distinct quantized color, not once per sample.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from vibrance.errors import ConfigurationError
from vibrance.engine.colorspace import pack_rgb, rgb_to_hsl_batch
from vibrance.engine.filters import Filter, is_allowed

logger = logging.getLogger(__name__)

QUANTIZE_WORD_WIDTH = 5


# =============================================================================
# Word width helpers
# =============================================================================


def validate_word_width(word_width: int) -> int:
    """Return ``word_width`` if it is a usable channel width (1..8 bits)."""
    if isinstance(word_width, bool) or not isinstance(word_width, (int, np.integer)):
        raise ConfigurationError(
            f"word_width must be an integer, got {type(word_width).__name__}"
        )
    if not 1 <= word_width <= 8:
        raise ConfigurationError(f"word_width must be 1-8, got {word_width}")
    return int(word_width)


def modify_word_width(value: Any, current_width: int, target_width: int) -> Any:
    """
    Change the bit width of a channel value (int or integer array).

    Narrowing keeps the most significant bits. Widening shifts up and
    replicates the high bits into the vacated low bits, so the largest
    narrow value maps to the largest wide value (31 → 255 for 5 → 8).
    """
    if target_width <= current_width:
        return (value >> (current_width - target_width)) & ((1 << target_width) - 1)

    result = value * 0
    bits = 0
    while bits < target_width:
        result = (result << current_width) | value
        bits += current_width
    return (result >> (bits - target_width)) & ((1 << target_width) - 1)


def quantize_from_rgb888(r: int, g: int, b: int, word_width: int = QUANTIZE_WORD_WIDTH) -> int:
    """Quantize an 8-bit RGB triple to a packed color of ``word_width`` bits per channel."""
    qr = modify_word_width(r, 8, word_width)
    qg = modify_word_width(g, 8, word_width)
    qb = modify_word_width(b, 8, word_width)
    return (qr << (word_width + word_width)) | (qg << word_width) | qb


def quantized_red(color: int, word_width: int = QUANTIZE_WORD_WIDTH) -> int:
    return (color >> (word_width + word_width)) & ((1 << word_width) - 1)


def quantized_green(color: int, word_width: int = QUANTIZE_WORD_WIDTH) -> int:
    return (color >> word_width) & ((1 << word_width) - 1)


def quantized_blue(color: int, word_width: int = QUANTIZE_WORD_WIDTH) -> int:
    return color & ((1 << word_width) - 1)


def approximate_to_rgb888(color: int, word_width: int = QUANTIZE_WORD_WIDTH) -> int:
    """Expand a quantized color back to packed 0xRRGGBB."""
    return pack_rgb(
        modify_word_width(quantized_red(color, word_width), word_width, 8),
        modify_word_width(quantized_green(color, word_width), word_width, 8),
        modify_word_width(quantized_blue(color, word_width), word_width, 8),
    )


def approximate_to_rgb888_batch(
    colors: NDArray[np.int64],
    word_width: int = QUANTIZE_WORD_WIDTH,
) -> NDArray[np.uint8]:
    """
    Expand an array of quantized colors to 8-bit channels.

    Returns:
        Array of shape (N, 3) with uint8 RGB values
    """
    colors = np.asarray(colors, dtype=np.int64)
    mask = (1 << word_width) - 1
    channels = np.stack(
        [
            (colors >> (word_width + word_width)) & mask,
            (colors >> word_width) & mask,
            colors & mask,
        ],
        axis=-1,
    )
    return modify_word_width(channels, word_width, 8).astype(np.uint8)


# =============================================================================
# Sample ingestion
# =============================================================================


def as_rgb_samples(samples: Any) -> Optional[NDArray[np.uint8]]:
    """
    Normalize pixel samples to an (N, 3) uint8 array.

    Accepted forms:
        - Array-like of shape (..., 3) or (..., 4) with 8-bit channel values
          (alpha is ignored)
        - 1-D integer array of packed 0xRRGGBB / 0xAARRGGBB samples

    Returns:
        (N, 3) uint8 array, or None for missing / empty input.
    """
    if samples is None:
        return None
    if isinstance(samples, (str, bytes)):
        raise TypeError(f"Expected pixel samples, got {type(samples).__name__}")

    arr = np.atleast_1d(np.asarray(samples))
    if arr.size == 0:
        return None
    if arr.dtype == object or not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Expected integer samples, got dtype {arr.dtype}")

    if arr.ndim == 1:
        packed = arr.astype(np.int64) & 0xFFFFFF
        return np.stack(
            [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
            axis=-1,
        ).astype(np.uint8)

    if arr.shape[-1] not in (3, 4):
        raise ValueError(
            f"Expected (..., 3) or (..., 4) samples, got shape {arr.shape}"
        )

    flat = arr.reshape(-1, arr.shape[-1])[:, :3]
    if flat.dtype != np.uint8:
        if flat.min() < 0 or flat.max() > 255:
            raise ValueError("Expected 8-bit channel values in [0, 255]")
        flat = flat.astype(np.uint8)
    return flat


# =============================================================================
# Histogram
# =============================================================================


def build_histogram(
    samples: Any,
    word_width: int = QUANTIZE_WORD_WIDTH,
    filters: tuple[Filter, ...] = (),
) -> dict[int, int]:
    """
    Build a quantized color histogram from pixel samples.

    Args:
        samples: Pixel samples (see as_rgb_samples)
        word_width: Bits per channel after quantization
        filters: Active filters; a color is kept only if all accept it.
            Filters see the quantized color expanded back to 8 bits.

    Returns:
        Dict of quantized color → sample count, keys ascending.
        Empty for missing or empty input.
    """
    word_width = validate_word_width(word_width)
    rgb = as_rgb_samples(samples)
    if rgb is None:
        logger.debug("No pixel samples; histogram is empty")
        return {}

    quantized = _quantize_array(rgb, word_width)
    colors, counts = np.unique(quantized, return_counts=True)

    if filters:
        approx = approximate_to_rgb888_batch(colors, word_width)
        hsl = rgb_to_hsl_batch(approx)
        keep = np.fromiter(
            (
                is_allowed(
                    pack_rgb(int(c[0]), int(c[1]), int(c[2])),
                    (float(h[0]), float(h[1]), float(h[2])),
                    filters,
                )
                for c, h in zip(approx, hsl)
            ),
            dtype=bool,
            count=len(colors),
        )
        logger.debug(
            "Filters rejected %d of %d quantized colors",
            int((~keep).sum()),
            len(colors),
        )
        colors = colors[keep]
        counts = counts[keep]

    histogram = {int(c): int(n) for c, n in zip(colors, counts)}
    logger.debug(
        "Histogram: %d samples, %d distinct colors at %d bits/channel",
        len(rgb),
        len(histogram),
        word_width,
    )
    return histogram


def merge_histograms(*histograms: dict[int, int]) -> dict[int, int]:
    """
    Sum per-color counts of several histograms (e.g. built per image shard).

    Integer addition per key, so the result does not depend on shard order.
    """
    total: Counter[int] = Counter()
    for histogram in histograms:
        total.update(histogram)
    return {color: total[color] for color in sorted(total) if total[color] > 0}


def _quantize_array(rgb: NDArray[np.uint8], word_width: int) -> NDArray[np.int64]:
    """Quantize (N, 3) uint8 samples to packed int64 colors."""
    shift = 8 - word_width
    channels = rgb.astype(np.int64) >> shift
    return (
        (channels[:, 0] << (word_width + word_width))
        | (channels[:, 1] << word_width)
        | channels[:, 2]
    )
