# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Perceptual selection targets.

A Target describes the swatch a caller wants from a palette: acceptable
saturation and lightness bands, the ideal value inside each band, and how
much saturation, lightness and population matter when ranking candidates.

Targets are immutable. Customize one with TargetBuilder (or
``dataclasses.replace``) before generating a palette:

    >>> from vibrance.schema import TargetBuilder, VIBRANT
    >>> punchy = TargetBuilder(VIBRANT).set_minimum_saturation(0.6).build()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vibrance.errors import ConfigurationError


# =============================================================================
# Standard bands
# =============================================================================

TARGET_DARK_LUMA = 0.26
MAX_DARK_LUMA = 0.45

MIN_LIGHT_LUMA = 0.55
TARGET_LIGHT_LUMA = 0.74

MIN_NORMAL_LUMA = 0.3
TARGET_NORMAL_LUMA = 0.5
MAX_NORMAL_LUMA = 0.7

TARGET_MUTED_SATURATION = 0.3
MAX_MUTED_SATURATION = 0.4

TARGET_VIBRANT_SATURATION = 1.0
MIN_VIBRANT_SATURATION = 0.35

WEIGHT_SATURATION = 0.24
WEIGHT_LUMA = 0.52
WEIGHT_POPULATION = 0.24


@dataclass(frozen=True, slots=True)
class Target:
    """
    A named saturation/lightness profile used to pick one swatch.

    Attributes:
        name: Identifier (e.g. "vibrant"); part of equality
        minimum_saturation / target_saturation / maximum_saturation:
            Saturation band in [0, 1]; swatches outside are not candidates
        minimum_lightness / target_lightness / maximum_lightness:
            Lightness band in [0, 1]
        saturation_weight / lightness_weight / population_weight:
            Relative importance of each score term (>= 0)
        exclusive: If True, a swatch selected for this target is not
            offered to targets processed after it
    """
    name: str
    minimum_saturation: float = 0.0
    target_saturation: float = 0.5
    maximum_saturation: float = 1.0
    minimum_lightness: float = 0.0
    target_lightness: float = 0.5
    maximum_lightness: float = 1.0
    saturation_weight: float = WEIGHT_SATURATION
    lightness_weight: float = WEIGHT_LUMA
    population_weight: float = WEIGHT_POPULATION
    exclusive: bool = True

    def __post_init__(self) -> None:
        """Reject malformed bands and weights."""
        for field_name in (
            "minimum_saturation", "target_saturation", "maximum_saturation",
            "minimum_lightness", "target_lightness", "maximum_lightness",
        ):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"Target '{self.name}': {field_name} must be 0-1, got {value}"
                )
        if self.minimum_saturation > self.maximum_saturation:
            raise ConfigurationError(
                f"Target '{self.name}': minimum_saturation "
                f"{self.minimum_saturation} > maximum_saturation {self.maximum_saturation}"
            )
        if self.minimum_lightness > self.maximum_lightness:
            raise ConfigurationError(
                f"Target '{self.name}': minimum_lightness "
                f"{self.minimum_lightness} > maximum_lightness {self.maximum_lightness}"
            )
        for field_name in ("saturation_weight", "lightness_weight", "population_weight"):
            value = getattr(self, field_name)
            if value < 0.0:
                raise ConfigurationError(
                    f"Target '{self.name}': {field_name} must be >= 0, got {value}"
                )

    def normalized_weights(self) -> tuple[float, float, float]:
        """
        (saturation, lightness, population) weights scaled to sum to 1.0.

        Returned unchanged when they sum to zero.
        """
        weights = (self.saturation_weight, self.lightness_weight, self.population_weight)
        total = sum(weights)
        if total <= 0:
            return weights
        return tuple(w / total for w in weights)  # type: ignore[return-value]

    def accepts(self, saturation: float, lightness: float) -> bool:
        """True if the values fall inside both bands (inclusive)."""
        return (
            self.minimum_saturation <= saturation <= self.maximum_saturation
            and self.minimum_lightness <= lightness <= self.maximum_lightness
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "saturation": [
                self.minimum_saturation, self.target_saturation, self.maximum_saturation,
            ],
            "lightness": [
                self.minimum_lightness, self.target_lightness, self.maximum_lightness,
            ],
            "weights": [
                self.saturation_weight, self.lightness_weight, self.population_weight,
            ],
            "exclusive": self.exclusive,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Target:
        """Deserialize from dictionary."""
        s_min, s_target, s_max = data.get("saturation", (0.0, 0.5, 1.0))
        l_min, l_target, l_max = data.get("lightness", (0.0, 0.5, 1.0))
        w_sat, w_luma, w_pop = data.get(
            "weights", (WEIGHT_SATURATION, WEIGHT_LUMA, WEIGHT_POPULATION)
        )
        return cls(
            name=data["name"],
            minimum_saturation=s_min,
            target_saturation=s_target,
            maximum_saturation=s_max,
            minimum_lightness=l_min,
            target_lightness=l_target,
            maximum_lightness=l_max,
            saturation_weight=w_sat,
            lightness_weight=w_luma,
            population_weight=w_pop,
            exclusive=data.get("exclusive", True),
        )


class TargetBuilder:
    """
    Chained mutation API for building a customized Target.

    Setters only record values; validation happens once, in build().
    """

    def __init__(self, base: Optional[Target] = None, *, name: Optional[str] = None) -> None:
        base = base or Target(name=name or "custom")
        self._values = {
            "name": name or base.name,
            "minimum_saturation": base.minimum_saturation,
            "target_saturation": base.target_saturation,
            "maximum_saturation": base.maximum_saturation,
            "minimum_lightness": base.minimum_lightness,
            "target_lightness": base.target_lightness,
            "maximum_lightness": base.maximum_lightness,
            "saturation_weight": base.saturation_weight,
            "lightness_weight": base.lightness_weight,
            "population_weight": base.population_weight,
            "exclusive": base.exclusive,
        }

    def set_name(self, name: str) -> TargetBuilder:
        self._values["name"] = name
        return self

    def set_minimum_saturation(self, value: float) -> TargetBuilder:
        self._values["minimum_saturation"] = value
        return self

    def set_target_saturation(self, value: float) -> TargetBuilder:
        self._values["target_saturation"] = value
        return self

    def set_maximum_saturation(self, value: float) -> TargetBuilder:
        self._values["maximum_saturation"] = value
        return self

    def set_minimum_lightness(self, value: float) -> TargetBuilder:
        self._values["minimum_lightness"] = value
        return self

    def set_target_lightness(self, value: float) -> TargetBuilder:
        self._values["target_lightness"] = value
        return self

    def set_maximum_lightness(self, value: float) -> TargetBuilder:
        self._values["maximum_lightness"] = value
        return self

    def set_saturation_weight(self, weight: float) -> TargetBuilder:
        self._values["saturation_weight"] = weight
        return self

    def set_lightness_weight(self, weight: float) -> TargetBuilder:
        self._values["lightness_weight"] = weight
        return self

    def set_population_weight(self, weight: float) -> TargetBuilder:
        self._values["population_weight"] = weight
        return self

    def set_exclusive(self, exclusive: bool) -> TargetBuilder:
        self._values["exclusive"] = exclusive
        return self

    def build(self) -> Target:
        """Create the Target; raises ConfigurationError for malformed bands."""
        return Target(**self._values)


# =============================================================================
# Standard targets
# =============================================================================

_LIGHT = dict(minimum_lightness=MIN_LIGHT_LUMA, target_lightness=TARGET_LIGHT_LUMA)
_NORMAL = dict(
    minimum_lightness=MIN_NORMAL_LUMA,
    target_lightness=TARGET_NORMAL_LUMA,
    maximum_lightness=MAX_NORMAL_LUMA,
)
_DARK = dict(target_lightness=TARGET_DARK_LUMA, maximum_lightness=MAX_DARK_LUMA)

_VIBRANT = dict(
    minimum_saturation=MIN_VIBRANT_SATURATION,
    target_saturation=TARGET_VIBRANT_SATURATION,
)
_MUTED = dict(
    target_saturation=TARGET_MUTED_SATURATION,
    maximum_saturation=MAX_MUTED_SATURATION,
)

LIGHT_VIBRANT = Target(name="light_vibrant", **_LIGHT, **_VIBRANT)
VIBRANT = Target(name="vibrant", **_NORMAL, **_VIBRANT)
DARK_VIBRANT = Target(name="dark_vibrant", **_DARK, **_VIBRANT)
LIGHT_MUTED = Target(name="light_muted", **_LIGHT, **_MUTED)
MUTED = Target(name="muted", **_NORMAL, **_MUTED)
DARK_MUTED = Target(name="dark_muted", **_DARK, **_MUTED)

# Selection order matters for exclusivity
DEFAULT_TARGETS: tuple[Target, ...] = (
    LIGHT_VIBRANT,
    VIBRANT,
    DARK_VIBRANT,
    LIGHT_MUTED,
    MUTED,
    DARK_MUTED,
)
