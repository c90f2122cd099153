# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Median-cut quantization.

The distinct quantized colors live in one shared NumPy array (the color
list). A ColorBox is an inclusive index range into that array plus cached
channel bounds and population. Splitting sorts only the box's sub-range
along its longest channel and cuts it at the population-weighted median,
so boxes always partition the color list without copying colors.

Boxes are kept in a heap ordered by volume (largest first, insertion order
on ties). Splitting stops at the requested box count, or as soon as the
largest box holds a single color: every other box is then at most as large
and cannot hold more than one color either.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from enum import Enum
from typing import Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from vibrance.errors import ConfigurationError, InvariantViolation
from vibrance.engine.histogram import (
    QUANTIZE_WORD_WIDTH,
    approximate_to_rgb888,
    modify_word_width,
    validate_word_width,
)
from vibrance.schema.swatch import Swatch

logger = logging.getLogger(__name__)


class Dimension(Enum):
    """Color channel a box can be split along."""
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class ColorBox:
    """
    A tightly fitting box around ``colors[lower_index..upper_index]``.

    Bounds and population are cached; fit_box() recomputes them and must
    run whenever the index range changes.
    """

    __slots__ = (
        "_colors", "_keys", "_counts", "_word_width",
        "lower_index", "upper_index", "population",
        "min_red", "max_red", "min_green", "max_green", "min_blue", "max_blue",
    )

    def __init__(
        self,
        colors: NDArray[np.int64],
        keys: NDArray[np.int64],
        counts: NDArray[np.int64],
        lower_index: int,
        upper_index: int,
        word_width: int = QUANTIZE_WORD_WIDTH,
    ) -> None:
        self._colors = colors
        self._keys = keys
        self._counts = counts
        self._word_width = word_width
        self.lower_index = lower_index
        self.upper_index = upper_index
        self.fit_box()

    @property
    def volume(self) -> int:
        return (
            (self.max_red - self.min_red + 1)
            * (self.max_green - self.min_green + 1)
            * (self.max_blue - self.min_blue + 1)
        )

    @property
    def color_count(self) -> int:
        return 1 + self.upper_index - self.lower_index

    def can_split(self) -> bool:
        return self.color_count > 1

    def _range(self) -> NDArray[np.int64]:
        return self._colors[self.lower_index:self.upper_index + 1]

    def _populations(self) -> NDArray[np.int64]:
        return self._counts[np.searchsorted(self._keys, self._range())]

    def _channels(self) -> tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.int64]]:
        colors = self._range()
        w = self._word_width
        mask = (1 << w) - 1
        return (colors >> (w + w)) & mask, (colors >> w) & mask, colors & mask

    def fit_box(self) -> None:
        """Recompute channel bounds and population for the current range."""
        r, g, b = self._channels()
        self.min_red, self.max_red = int(r.min()), int(r.max())
        self.min_green, self.max_green = int(g.min()), int(g.max())
        self.min_blue, self.max_blue = int(b.min()), int(b.max())
        self.population = int(self._populations().sum())

    def longest_color_dimension(self) -> Dimension:
        """Channel with the widest range; red, then green, wins ties."""
        red_length = self.max_red - self.min_red
        green_length = self.max_green - self.min_green
        blue_length = self.max_blue - self.min_blue

        if red_length >= green_length and red_length >= blue_length:
            return Dimension.RED
        if green_length >= red_length and green_length >= blue_length:
            return Dimension.GREEN
        return Dimension.BLUE

    def find_split_point(self) -> int:
        """
        Sort this box's colors along the longest dimension and find the median.

        Returns:
            Index of the last color of the lower half: the first index whose
            cumulative population reaches half the box population, capped so
            the upper half keeps at least one color.
        """
        dimension = self.longest_color_dimension()

        # Move the chosen channel to the most significant slot so a plain
        # integer sort orders by it, then move it back.
        _modify_significant_octet(
            self._colors, dimension, self.lower_index, self.upper_index, self._word_width
        )
        lo, hi = self.lower_index, self.upper_index + 1
        self._colors[lo:hi] = np.sort(self._colors[lo:hi])
        _modify_significant_octet(
            self._colors, dimension, self.lower_index, self.upper_index, self._word_width
        )

        midpoint = self.population // 2
        cumulative = np.cumsum(self._populations())
        hits = np.flatnonzero(cumulative >= midpoint)
        if hits.size:
            return min(self.upper_index - 1, self.lower_index + int(hits[0]))
        return self.lower_index

    def split_box(self) -> ColorBox:
        """
        Split at the median along the longest dimension.

        This box keeps the lower half; the returned new box holds the upper half.
        """
        if not self.can_split():
            raise InvariantViolation(
                f"Can not split a box with only 1 color "
                f"(range {self.lower_index}..{self.upper_index})"
            )

        split_point = self.find_split_point()
        new_box = ColorBox(
            self._colors,
            self._keys,
            self._counts,
            split_point + 1,
            self.upper_index,
            self._word_width,
        )

        self.upper_index = split_point
        self.fit_box()

        return new_box

    def average_color(self) -> Swatch:
        """Population-weighted mean color of this box, as a Swatch."""
        populations = self._populations()
        total = int(populations.sum())
        if total <= 0:
            raise InvariantViolation(
                f"Box {self.lower_index}..{self.upper_index} has zero population"
            )

        r, g, b = self._channels()
        w = self._word_width
        red_mean = _round_half_up(int(np.dot(populations, r)) / total)
        green_mean = _round_half_up(int(np.dot(populations, g)) / total)
        blue_mean = _round_half_up(int(np.dot(populations, b)) / total)

        return Swatch(
            red=modify_word_width(red_mean, w, 8),
            green=modify_word_width(green_mean, w, 8),
            blue=modify_word_width(blue_mean, w, 8),
            population=total,
        )

    def __repr__(self) -> str:
        return (
            f"ColorBox([{self.lower_index}, {self.upper_index}], "
            f"population={self.population}, volume={self.volume})"
        )


def split_boxes(
    colors: NDArray[np.int64],
    histogram: Mapping[int, int],
    max_boxes: int,
    word_width: int = QUANTIZE_WORD_WIDTH,
) -> list[ColorBox]:
    """
    Median-cut the color list into at most ``max_boxes`` boxes.

    Args:
        colors: Distinct quantized colors. Reordered in place when it is an
            int64 array; never resized.
        histogram: Quantized color → population, covering every color
        max_boxes: Upper bound on the number of boxes
        word_width: Bits per channel of the quantized colors

    Returns:
        Boxes in queue order (largest volume first, insertion order on ties).
        Their index ranges partition [0, len(colors) - 1].
    """
    if max_boxes <= 0:
        raise ConfigurationError(f"max_boxes must be > 0, got {max_boxes}")
    word_width = validate_word_width(word_width)

    colors = np.asarray(colors, dtype=np.int64)
    if len(colors) == 0:
        return []

    keys = np.array(sorted(histogram), dtype=np.int64)
    counts = np.array([histogram[k] for k in keys.tolist()], dtype=np.int64)

    sequence = itertools.count()
    queue: list[tuple[int, int, ColorBox]] = []

    def offer(box: ColorBox) -> None:
        heapq.heappush(queue, (-box.volume, next(sequence), box))

    offer(ColorBox(colors, keys, counts, 0, len(colors) - 1, word_width))

    splits = 0
    while len(queue) < max_boxes:
        largest = queue[0][2]
        if not largest.can_split():
            logger.debug(
                "Largest box holds one color; stopping at %d boxes", len(queue)
            )
            break
        heapq.heappop(queue)
        offer(largest.split_box())
        offer(largest)
        splits += 1

    logger.debug("Median cut: %d splits, %d boxes", splits, len(queue))
    return [box for _, _, box in sorted(queue)]


def generate_average_colors(boxes: Iterable[ColorBox]) -> list[Swatch]:
    """Reduce each box to its average-color swatch."""
    return [box.average_color() for box in boxes]


def quantize(
    histogram: Mapping[int, int],
    max_colors: int,
    word_width: int = QUANTIZE_WORD_WIDTH,
) -> list[Swatch]:
    """
    Reduce a histogram to at most ``max_colors`` swatches.

    If the histogram already has no more than ``max_colors`` colors, each
    color becomes its own swatch (histogram order). Otherwise the colors
    are median-cut and each box is averaged.

    Args:
        histogram: Quantized color → population
        max_colors: Maximum number of swatches
        word_width: Bits per channel of the quantized colors

    Returns:
        List of Swatch; empty for an empty histogram.
    """
    if max_colors <= 0:
        raise ConfigurationError(f"max_colors must be > 0, got {max_colors}")
    word_width = validate_word_width(word_width)

    if not histogram:
        return []

    if len(histogram) <= max_colors:
        logger.debug(
            "%d distinct colors <= %d requested; skipping median cut",
            len(histogram),
            max_colors,
        )
        return [
            Swatch.from_rgb(approximate_to_rgb888(color, word_width), population)
            for color, population in histogram.items()
        ]

    colors = np.fromiter(histogram.keys(), dtype=np.int64, count=len(histogram))
    boxes = split_boxes(colors, histogram, max_colors, word_width)
    return generate_average_colors(boxes)


def _modify_significant_octet(
    colors: NDArray[np.int64],
    dimension: Dimension,
    lower: int,
    upper: int,
    word_width: int,
) -> None:
    """
    Swap the red slot with the given channel for colors[lower..upper], in place.

    The swap is its own inverse, so calling it twice restores RGB order.
    """
    if dimension == Dimension.RED:
        return

    w = word_width
    mask = (1 << w) - 1
    sub = colors[lower:upper + 1]
    r = (sub >> (w + w)) & mask
    g = (sub >> w) & mask
    b = sub & mask

    if dimension == Dimension.GREEN:
        colors[lower:upper + 1] = (g << (w + w)) | (r << w) | b
    else:
        colors[lower:upper + 1] = (b << (w + w)) | (g << w) | r


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
