# Copyright (c) 2026 Coriro
# SPDX-License-Identifier: MIT

"""
Image → pixel samples adapter.

Decoding, cropping and scaling are not part of the quantization engine;
this module only turns an image into the (N, 4) uint8 sample array that
the engine consumes. File paths and PIL images require Pillow
(pip install vibrance[image]).
"""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
from numpy.typing import NDArray


DEFAULT_RESIZE_BITMAP_AREA = 112 * 112

Region = tuple[int, int, int, int]


def load_samples(
    image: Union[str, Path, NDArray[np.uint8], Any],
    *,
    resize_area: int = DEFAULT_RESIZE_BITMAP_AREA,
    region: Optional[Region] = None,
) -> NDArray[np.uint8]:
    """
    Produce RGBA pixel samples from an image.

    Args:
        image: One of:
            - Path to an image file (str or Path)
            - PIL.Image.Image
            - NumPy array of shape (H, W, 3) or (H, W, 4), dtype uint8
        resize_area: If the (cropped) image covers more pixels than this,
            scale it down so its area roughly matches. Values <= 0
            disable scaling. Smaller areas are faster but lose detail.
        region: Optional (left, top, right, bottom) rectangle; only pixels
            inside it are sampled. Must intersect the image.

    Returns:
        Array of shape (N, 4) with uint8 RGBA samples.
    """
    pixels = _load_image(image)

    if region is not None:
        pixels = _crop(pixels, region)

    if resize_area > 0:
        height, width = pixels.shape[:2]
        if height * width > resize_area:
            scale = math.sqrt(resize_area / (height * width))
            new_height = max(1, int(math.ceil(height * scale)))
            new_width = max(1, int(math.ceil(width * scale)))
            pixels = _downsample(pixels, new_height, new_width)

    return pixels.reshape(-1, 4)


def _require_pillow():
    try:
        from PIL import Image
    except ImportError as e:
        raise ImportError(
            "Pillow is required for image loading. "
            "Install with: pip install vibrance[image]"
        ) from e
    return Image


def _load_image(image: Union[str, Path, NDArray[np.uint8], Any]) -> NDArray[np.uint8]:
    """
    Load an image as an (H, W, 4) uint8 RGBA array.

    Arrays are validated; alpha is appended to RGB arrays.
    """
    if isinstance(image, np.ndarray):
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {image.shape}"
            )
        if image.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {image.dtype}")
        if image.shape[2] == 3:
            alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
            return np.concatenate([image, alpha], axis=2)
        return image

    if isinstance(image, (str, Path)):
        Image = _require_pillow()
        with Image.open(image) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)

    # A PIL image can only exist if PIL.Image has already been imported
    pil_image = sys.modules.get("PIL.Image")
    if pil_image is not None and isinstance(image, pil_image.Image):
        return np.array(image.convert("RGBA"), dtype=np.uint8)

    raise TypeError(
        f"Expected file path, PIL image or numpy array, got {type(image)}"
    )


def _crop(pixels: NDArray[np.uint8], region: Region) -> NDArray[np.uint8]:
    """Crop to the intersection of ``region`` with the image bounds."""
    left, top, right, bottom = region
    height, width = pixels.shape[:2]

    x1, y1 = max(0, left), max(0, top)
    x2, y2 = min(width, right), min(height, bottom)
    if x1 >= x2 or y1 >= y2:
        raise ValueError(
            f"The given region {region} must intersect with the image's "
            f"dimensions ({width}x{height})"
        )
    return pixels[y1:y2, x1:x2]


def _downsample(
    pixels: NDArray[np.uint8],
    new_height: int,
    new_width: int,
) -> NDArray[np.uint8]:
    """Downsample an RGBA array using PIL (Lanczos)."""
    Image = _require_pillow()
    img = Image.fromarray(np.ascontiguousarray(pixels), mode="RGBA")
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return np.array(img, dtype=np.uint8)
