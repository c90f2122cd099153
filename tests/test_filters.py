# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""Tests for color filters."""

import pytest

from vibrance.engine.colorspace import rgb_to_hsl
from vibrance.engine.filters import (
    DEFAULT_FILTER,
    DefaultFilter,
    Filter,
    is_allowed,
    validate_filters,
)
from vibrance.errors import ConfigurationError


def _allowed(r, g, b):
    return DEFAULT_FILTER.is_allowed((r << 16) | (g << 8) | b, rgb_to_hsl(r, g, b))


class TestDefaultFilter:

    def test_allows_saturated_colors(self):
        assert _allowed(255, 0, 0)
        assert _allowed(0, 128, 255)

    def test_rejects_black(self):
        assert not _allowed(0, 0, 0)
        assert not _allowed(8, 8, 8)

    def test_rejects_white(self):
        assert not _allowed(255, 255, 255)
        assert not _allowed(250, 250, 250)

    def test_band_edges_are_inclusive(self):
        f = DefaultFilter()
        assert f.is_black((0.0, 0.0, 0.05))
        assert f.is_white((0.0, 0.0, 0.95))
        assert not f.is_black((0.0, 0.0, 0.06))

    def test_rejects_skin_tone(self):
        """Hue in 10-37° with moderate saturation sits on the I line."""
        assert DEFAULT_FILTER.is_near_red_i_line((25.0, 0.5, 0.6))
        assert not DEFAULT_FILTER.is_allowed(0, (25.0, 0.5, 0.6))

    def test_allows_saturated_orange(self):
        assert not DEFAULT_FILTER.is_near_red_i_line((25.0, 0.9, 0.5))

    def test_is_filter(self):
        assert isinstance(DEFAULT_FILTER, Filter)


class RejectBlue:
    def is_allowed(self, rgb, hsl):
        return rgb != 0x0000FF


class TestFilterHelpers:

    def test_all_filters_must_allow(self):
        filters = (DEFAULT_FILTER, RejectBlue())
        assert is_allowed(0xFF0000, rgb_to_hsl(255, 0, 0), filters)
        assert not is_allowed(0x0000FF, rgb_to_hsl(0, 0, 255), filters)

    def test_no_filters_allows_everything(self):
        assert is_allowed(0xFFFFFF, (0.0, 0.0, 1.0), ())

    def test_validate_accepts_duck_typed(self):
        filters = validate_filters([RejectBlue()])
        assert isinstance(filters, tuple)
        assert len(filters) == 1

    def test_validate_rejects_non_filter(self):
        with pytest.raises(ConfigurationError):
            validate_filters([object()])
