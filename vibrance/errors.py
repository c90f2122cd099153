# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Error types raised by Vibrance.

Empty or missing pixel input is not an error: it produces an empty palette.
Only configuration mistakes and broken internal invariants raise.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for all Vibrance errors."""


class ConfigurationError(PaletteError, ValueError):
    """
    Invalid palette configuration.

    Raised when a config, target or filter is built, before any pixel
    processing starts (e.g. max_colors <= 0, a band with min > max).
    """


class InvariantViolation(PaletteError, RuntimeError):
    """
    Internal logic defect in the quantizer.

    A box with zero population or a split of a single-color box means the
    splitter produced wrong state. These are never user-facing input errors.
    """
