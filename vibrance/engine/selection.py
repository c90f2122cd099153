# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Target scoring and swatch selection.

For each target (in order), every swatch inside the target's saturation and
lightness bands is scored:

    score = w_sat * closeness(saturation) + w_luma * closeness(lightness)
          + w_pop * population / max_population

where closeness is 1.0 at the target value and falls linearly to 0.0 at
the band edge on that side. The best swatch is selected. Exclusive targets
claim their swatch so later targets cannot pick it again.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from vibrance.schema.swatch import Swatch
from vibrance.schema.target import Target

logger = logging.getLogger(__name__)


def closeness(value: float, minimum: float, target: float, maximum: float) -> float:
    """
    Linear closeness of ``value`` to ``target`` within [minimum, maximum].

    Returns:
        1.0 at the target, 0.0 at (or beyond) the band edge, clipped to [0, 1].
    """
    span = (maximum - target) if value >= target else (target - minimum)
    if span <= 0:
        return 1.0 if value == target else 0.0
    return min(1.0, max(0.0, 1.0 - abs(value - target) / span))


def score_swatch(swatch: Swatch, target: Target, max_population: int) -> float:
    """Weighted score of one swatch for one target (higher is better)."""
    _, saturation, lightness = swatch.hsl
    w_sat, w_luma, w_pop = target.normalized_weights()

    saturation_score = closeness(
        saturation,
        target.minimum_saturation,
        target.target_saturation,
        target.maximum_saturation,
    )
    lightness_score = closeness(
        lightness,
        target.minimum_lightness,
        target.target_lightness,
        target.maximum_lightness,
    )
    population_score = (
        min(1.0, max(0.0, swatch.population / max_population))
        if max_population > 0 else 0.0
    )

    return (
        w_sat * saturation_score
        + w_luma * lightness_score
        + w_pop * population_score
    )


def find_dominant_swatch(swatches: Iterable[Swatch]) -> Optional[Swatch]:
    """Swatch with the largest population; the first one wins ties."""
    dominant: Optional[Swatch] = None
    for swatch in swatches:
        if dominant is None or swatch.population > dominant.population:
            dominant = swatch
    return dominant


def select_swatches(
    swatches: Sequence[Swatch],
    targets: Sequence[Target],
) -> dict[Target, Swatch]:
    """
    Pick at most one swatch per target.

    Args:
        swatches: Candidate swatches
        targets: Targets in selection order

    Returns:
        Dict of target → selected swatch, in target order. Targets with no
        swatch inside their bands are omitted.
    """
    selected: dict[Target, Swatch] = {}
    if not swatches:
        return selected

    dominant = find_dominant_swatch(swatches)
    max_population = dominant.population if dominant is not None else 0
    used: set[Swatch] = set()

    for target in targets:
        best: Optional[Swatch] = None
        best_score = 0.0

        for swatch in swatches:
            if swatch in used:
                continue
            _, saturation, lightness = swatch.hsl
            if not target.accepts(saturation, lightness):
                continue

            score = score_swatch(swatch, target, max_population)
            if best is None or score > best_score:
                best = swatch
                best_score = score

        if best is None:
            logger.debug("Target '%s': no eligible swatch", target.name)
            continue

        logger.debug("Target '%s': selected %s (score %.3f)", target.name, best.hex, best_score)
        selected[target] = best
        if target.exclusive:
            used.add(best)

    return selected
