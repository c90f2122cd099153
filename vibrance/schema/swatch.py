# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Swatch and Palette: immutable results of palette generation.

Design principles:
- Immutable: frozen dataclasses, read-only selection mapping
- Deterministic: same samples + same config → identical palette
- Serializable: to_dict()/to_json() for theming pipelines

Color encoding:
- Swatch colors are packed 0xRRGGBB integers plus 0-255 channels
- Text colors are packed 0xAARRGGBB (white or black at a minimal alpha)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from vibrance.schema.target import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
)


MIN_CONTRAST_TITLE_TEXT = 3.0
MIN_CONTRAST_BODY_TEXT = 4.5


# =============================================================================
# Swatch
# =============================================================================


@dataclass(frozen=True, slots=True)
class Swatch:
    """
    A representative color and the number of pixels it summarizes.

    Two swatches are equal when population and RGB both match.

    Attributes:
        red, green, blue: 8-bit channels (0-255)
        population: Number of samples that contributed to this color
        hsl: (hue in degrees, saturation, lightness), derived
        title_text_color: ARGB color for large text on this swatch
            (contrast >= 3.0), derived
        body_text_color: ARGB color for body text on this swatch
            (contrast >= 4.5), derived
    """
    red: int
    green: int
    blue: int
    population: int
    hsl: tuple[float, float, float] = field(init=False, repr=False, compare=False)
    title_text_color: int = field(init=False, repr=False, compare=False)
    body_text_color: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate channels and derive HSL and text colors."""
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name.capitalize()} must be 0-255, got {value}")
        if self.population < 0:
            raise ValueError(f"Population must be >= 0, got {self.population}")

        from vibrance.engine.colorspace import rgb_to_hsl
        object.__setattr__(self, "hsl", rgb_to_hsl(self.red, self.green, self.blue))

        title, body = _generate_text_colors(self.rgb)
        object.__setattr__(self, "title_text_color", title)
        object.__setattr__(self, "body_text_color", body)

    @property
    def rgb(self) -> int:
        """Packed 0xRRGGBB value."""
        return (self.red << 16) | (self.green << 8) | self.blue

    @property
    def hex(self) -> str:
        """Hex string like "#3941C8"."""
        return f"#{self.rgb:06X}"

    @property
    def saturation(self) -> float:
        return self.hsl[1]

    @property
    def lightness(self) -> float:
        return self.hsl[2]

    @classmethod
    def from_rgb(cls, rgb: int, population: int) -> Swatch:
        """Create from a packed 0xRRGGBB (alpha byte ignored)."""
        return cls(
            red=(rgb >> 16) & 0xFF,
            green=(rgb >> 8) & 0xFF,
            blue=rgb & 0xFF,
            population=population,
        )

    @classmethod
    def from_hsl(cls, hsl: tuple[float, float, float], population: int) -> Swatch:
        """Create from (hue, saturation, lightness); stored HSL is recomputed from RGB."""
        from vibrance.engine.colorspace import hsl_to_rgb
        r, g, b = hsl_to_rgb(*hsl)
        return cls(red=r, green=g, blue=b, population=population)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "rgb": [self.red, self.green, self.blue],
            "population": self.population,
            "hsl": [round(v, 4) for v in self.hsl],
            "title_text_color": f"#{self.title_text_color:08X}",
            "body_text_color": f"#{self.body_text_color:08X}",
        }

    @classmethod
    def from_dict(cls, data: dict) -> Swatch:
        """Deserialize from dictionary (derived fields are recomputed)."""
        r, g, b = data["rgb"]
        return cls(red=r, green=g, blue=b, population=data["population"])


def _generate_text_colors(rgb: int) -> tuple[int, int]:
    """
    Pick (title, body) text colors for a swatch background.

    White is tried first, as most swatch colors are dark enough for it.
    If white cannot reach both thresholds, black is tried. If neither
    works for both roles, each role takes whichever color reaches it.
    """
    from vibrance.engine.colorspace import (
        BLACK,
        WHITE,
        calculate_minimum_alpha,
        opaque,
        set_alpha_component,
    )

    background = opaque(rgb)

    light_body_alpha = calculate_minimum_alpha(WHITE, background, MIN_CONTRAST_BODY_TEXT)
    light_title_alpha = calculate_minimum_alpha(WHITE, background, MIN_CONTRAST_TITLE_TEXT)

    if light_body_alpha != -1 and light_title_alpha != -1:
        return (
            set_alpha_component(WHITE, light_title_alpha),
            set_alpha_component(WHITE, light_body_alpha),
        )

    dark_body_alpha = calculate_minimum_alpha(BLACK, background, MIN_CONTRAST_BODY_TEXT)
    dark_title_alpha = calculate_minimum_alpha(BLACK, background, MIN_CONTRAST_TITLE_TEXT)

    if dark_body_alpha != -1 and dark_title_alpha != -1:
        return (
            set_alpha_component(BLACK, dark_title_alpha),
            set_alpha_component(BLACK, dark_body_alpha),
        )

    # Mismatched: title and body end up on different base colors
    title = (
        set_alpha_component(WHITE, light_title_alpha)
        if light_title_alpha != -1
        else set_alpha_component(BLACK, max(dark_title_alpha, 0))
    )
    body = (
        set_alpha_component(WHITE, light_body_alpha)
        if light_body_alpha != -1
        else set_alpha_component(BLACK, max(dark_body_alpha, 0))
    )
    return title, body


# =============================================================================
# Palette
# =============================================================================


@dataclass(frozen=True, slots=True)
class Palette:
    """
    Result of palette generation.

    Attributes:
        swatches: All swatches produced by quantization
        targets: Targets that were scored, in selection order
        selected: Read-only mapping target → chosen swatch. Targets with
            no eligible swatch are absent.
        dominant_swatch: Swatch with the largest population (first one
            wins ties), None for an empty palette. Derived.

    Usage:
        palette = generate(samples)
        palette.vibrant_swatch          # Swatch or None
        palette.get_color_for_target(MUTED, 0x808080)
    """
    swatches: tuple[Swatch, ...]
    targets: tuple[Target, ...] = DEFAULT_TARGETS
    selected: Mapping[Target, Swatch] = field(default_factory=dict)
    dominant_swatch: Optional[Swatch] = field(init=False)

    def __post_init__(self) -> None:
        """Freeze containers and validate the selection."""
        object.__setattr__(self, "swatches", tuple(self.swatches))
        object.__setattr__(self, "targets", tuple(self.targets))

        selected = dict(self.selected)
        for target, swatch in selected.items():
            if target not in self.targets:
                raise ValueError(f"Selected target '{target.name}' is not in targets")
            if swatch not in self.swatches:
                raise ValueError(
                    f"Swatch {swatch.hex} selected for '{target.name}' is not in swatches"
                )
        object.__setattr__(self, "selected", MappingProxyType(selected))

        from vibrance.engine.selection import find_dominant_swatch
        object.__setattr__(self, "dominant_swatch", find_dominant_swatch(self.swatches))

    @classmethod
    def from_swatches(
        cls,
        swatches: Iterable[Swatch],
        targets: Iterable[Target] = DEFAULT_TARGETS,
    ) -> Palette:
        """Run target selection over an existing swatch list."""
        from vibrance.engine.selection import select_swatches
        swatches = tuple(swatches)
        targets = tuple(targets)
        return cls(
            swatches=swatches,
            targets=targets,
            selected=select_swatches(swatches, targets),
        )

    def get_swatch_for_target(self, target: Target) -> Optional[Swatch]:
        """The swatch selected for ``target``, or None."""
        return self.selected.get(target)

    def get_color_for_target(self, target: Target, default: int) -> int:
        """Packed RGB of the swatch selected for ``target``, or ``default``."""
        swatch = self.selected.get(target)
        return swatch.rgb if swatch is not None else default

    def get_dominant_color(self, default: int) -> int:
        """Packed RGB of the dominant swatch, or ``default``."""
        return self.dominant_swatch.rgb if self.dominant_swatch is not None else default

    @property
    def light_vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(LIGHT_VIBRANT)

    @property
    def vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(VIBRANT)

    @property
    def dark_vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(DARK_VIBRANT)

    @property
    def light_muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(LIGHT_MUTED)

    @property
    def muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(MUTED)

    @property
    def dark_muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(DARK_MUTED)

    def to_dict(self) -> dict:
        """
        Serialize to dictionary.

        Selections are stored as target name → index into "swatches".
        """
        index = {swatch: i for i, swatch in enumerate(self.swatches)}
        return {
            "swatches": [s.to_dict() for s in self.swatches],
            "targets": [t.to_dict() for t in self.targets],
            "selected": {
                target.name: index[swatch] for target, swatch in self.selected.items()
            },
            "dominant": (
                index[self.dominant_swatch] if self.dominant_swatch is not None else None
            ),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> Palette:
        """Deserialize from dictionary."""
        swatches = tuple(Swatch.from_dict(s) for s in data["swatches"])
        targets = tuple(Target.from_dict(t) for t in data.get("targets", ()))
        by_name = {t.name: t for t in targets}
        selected = {
            by_name[name]: swatches[i] for name, i in data.get("selected", {}).items()
        }
        return cls(swatches=swatches, targets=targets, selected=selected)

    @classmethod
    def from_json(cls, json_str: str) -> Palette:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
