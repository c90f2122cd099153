# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""End-to-end tests for palette generation."""

import numpy as np
import pytest

from vibrance import (
    DEFAULT_TARGETS,
    MUTED,
    VIBRANT,
    ConfigurationError,
    Palette,
    PaletteBuilder,
    PaletteConfig,
    Swatch,
    TargetBuilder,
    generate,
)


def _random_pixels(seed, shape=(60, 80, 3)):
    return np.random.RandomState(seed).randint(0, 256, shape).astype(np.uint8)


def _blocks(*colors_and_counts):
    rows = [[c] * n for c, n in colors_and_counts]
    return np.array([p for row in rows for p in row], dtype=np.uint8)


class TestScenarios:

    def test_single_color(self):
        """Four identical red samples become one red swatch."""
        palette = generate(_blocks(((255, 0, 0), 4)))
        expected = Swatch(red=255, green=0, blue=0, population=4)
        assert palette.swatches == (expected,)
        assert palette.dominant_swatch == expected
        assert palette.vibrant_swatch == expected

    def test_black_and_white_only(self):
        """The default filter removes every sample."""
        palette = generate(_blocks(((255, 255, 255), 500), ((0, 0, 0), 500)))
        assert palette.swatches == ()
        assert dict(palette.selected) == {}
        assert palette.dominant_swatch is None
        assert palette.get_dominant_color(0x112233) == 0x112233

    def test_one_color_requested(self):
        """Three equally sized, well-separated colors average into one swatch."""
        samples = _blocks(((255, 0, 0), 10), ((0, 255, 0), 10), ((0, 0, 255), 10))
        palette = generate(samples, max_colors=1)
        assert palette.swatches == (Swatch(red=82, green=82, blue=82, population=30),)
        assert palette.muted_swatch == palette.swatches[0]


class TestGenerate:

    def test_swatch_count_bound(self):
        for max_colors in (1, 4, 16):
            palette = generate(_random_pixels(1), max_colors=max_colors)
            assert 0 < len(palette.swatches) <= max_colors

    def test_population_conservation_without_filters(self):
        pixels = _random_pixels(2)
        palette = generate(pixels, filters=())
        assert sum(s.population for s in palette.swatches) == pixels.shape[0] * pixels.shape[1]

    def test_deterministic(self):
        pixels = _random_pixels(3)
        assert generate(pixels).to_dict() == generate(pixels.copy()).to_dict()

    def test_exclusive_targets_get_distinct_swatches(self):
        palette = generate(_random_pixels(4), max_colors=24)
        chosen = list(palette.selected.values())
        assert len(set(chosen)) == len(chosen)

    def test_dominant_is_most_populous(self):
        palette = generate(_random_pixels(5))
        assert palette.dominant_swatch.population == max(s.population for s in palette.swatches)

    def test_rgba_and_packed_inputs_agree(self):
        pixels = _random_pixels(6, shape=(500, 3))
        rgba = np.concatenate([pixels, np.full((500, 1), 128, dtype=np.uint8)], axis=1)
        packed = (
            (pixels[:, 0].astype(np.int64) << 16)
            | (pixels[:, 1].astype(np.int64) << 8)
            | pixels[:, 2].astype(np.int64)
        )
        expected = generate(pixels).swatches
        assert generate(rgba).swatches == expected
        assert generate(packed).swatches == expected

    @pytest.mark.parametrize("samples", [None, np.empty((0, 3), dtype=np.uint8)])
    def test_empty_input(self, samples):
        palette = generate(samples)
        assert isinstance(palette, Palette)
        assert palette.swatches == ()
        assert palette.dominant_swatch is None

    def test_config_object(self):
        config = PaletteConfig(max_colors=2, filters=())
        palette = generate(_random_pixels(7), config=config)
        assert len(palette.swatches) == 2

    def test_overrides_apply_on_top_of_config(self):
        config = PaletteConfig(max_colors=2)
        palette = generate(_random_pixels(8), config=config, max_colors=3)
        assert len(palette.swatches) == 3

    def test_custom_targets(self):
        accent = TargetBuilder(VIBRANT, name="accent").build()
        palette = generate(_random_pixels(9), targets=(accent,))
        assert palette.targets == (accent,)
        assert set(palette.selected) <= {accent}


class TestConfiguration:

    @pytest.mark.parametrize("max_colors", [0, -1])
    def test_max_colors_must_be_positive(self, max_colors):
        with pytest.raises(ConfigurationError):
            generate(_random_pixels(10), max_colors=max_colors)

    def test_max_colors_must_be_int(self):
        with pytest.raises(ConfigurationError):
            PaletteConfig(max_colors=2.5)

    def test_word_width_range(self):
        with pytest.raises(ConfigurationError):
            PaletteConfig(word_width=9)

    def test_filters_must_define_is_allowed(self):
        with pytest.raises(ConfigurationError):
            PaletteConfig(filters=(object(),))

    def test_targets_must_be_targets(self):
        with pytest.raises(ConfigurationError):
            PaletteConfig(targets=("vibrant",))

    def test_fails_before_reading_samples(self):
        """A bad config is reported even when the samples are also bad."""
        with pytest.raises(ConfigurationError):
            generate("not pixels", max_colors=0)

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            generate(_random_pixels(11), colours=5)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            PaletteConfig(max_colors=0)


class TestPaletteBuilder:

    def test_defaults_match_generate(self):
        pixels = _random_pixels(12)
        assert PaletteBuilder(pixels).generate().to_dict() == generate(pixels).to_dict()

    def test_maximum_color_count(self):
        palette = PaletteBuilder(_random_pixels(13)).maximum_color_count(3).generate()
        assert len(palette.swatches) <= 3

    def test_setters_validate_immediately(self):
        builder = PaletteBuilder(_random_pixels(14))
        with pytest.raises(ConfigurationError):
            builder.maximum_color_count(0)
        with pytest.raises(ConfigurationError):
            builder.quantize_word_width(0)

    def test_clear_filters_keeps_black_and_white(self):
        samples = _blocks(((255, 255, 255), 5), ((0, 0, 0), 5))
        palette = PaletteBuilder(samples).clear_filters().generate()
        assert sorted(s.rgb for s in palette.swatches) == [0x000000, 0xFFFFFF]

    def test_add_filter(self):
        class RejectRed:
            def is_allowed(self, rgb, hsl):
                return rgb != 0xFF0000

        samples = _blocks(((255, 0, 0), 5), ((0, 0, 255), 5))
        palette = PaletteBuilder(samples).add_filter(RejectRed()).generate()
        assert [s.rgb for s in palette.swatches] == [0x0000FF]

    def test_targets(self):
        accent = TargetBuilder(VIBRANT, name="accent").build()
        builder = PaletteBuilder(_random_pixels(15)).clear_targets().add_target(accent)
        builder.add_target(accent)
        assert builder.config.targets == (accent,)
        assert builder.generate().targets == (accent,)

    def test_word_width(self):
        samples = _blocks(((0, 0, 0), 1), ((100, 0, 0), 1), ((200, 0, 0), 1))
        palette = PaletteBuilder(samples).clear_filters().quantize_word_width(1).generate()
        assert len(palette.swatches) == 2

    def test_from_swatches_skips_quantization_and_filters(self):
        black = Swatch(red=0, green=0, blue=0, population=10)
        red = Swatch(red=255, green=0, blue=0, population=3)
        gray = Swatch(red=100, green=100, blue=100, population=5)
        palette = PaletteBuilder.from_swatches([black, red, gray]).generate()
        assert palette.swatches == (black, red, gray)
        assert palette.dominant_swatch == black
        assert palette.vibrant_swatch == red
        assert palette.muted_swatch == gray

    def test_from_swatches_respects_targets(self):
        red = Swatch(red=255, green=0, blue=0, population=3)
        palette = PaletteBuilder.from_swatches([red]).clear_targets().add_target(MUTED).generate()
        assert palette.targets == (MUTED,)
        assert dict(palette.selected) == {}

    def test_from_image_array(self):
        pixels = np.zeros((10, 10, 3), dtype=np.uint8)
        pixels[:, :5] = (255, 0, 0)
        palette = PaletteBuilder.from_image(pixels, region=(0, 0, 5, 10)).generate()
        assert palette.swatches == (Swatch(red=255, green=0, blue=0, population=50),)

    def test_default_targets(self):
        assert PaletteBuilder().config.targets == DEFAULT_TARGETS
