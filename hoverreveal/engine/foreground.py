"""Foreground classification: is a pixel part of a drawn shape or blank paper.

The same cutoff is used twice on purpose: a pixel is background when every
channel is above it, and foreground when its mean brightness is below it.
Light grey line edges that are not near-white in every channel therefore
stay foreground.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# 8-bit cutoff for "near white". Shared by both tests below.
FOREGROUND_THRESHOLD = 245


def is_foreground(r: int, g: int, b: int) -> bool:
    """Per-pixel predicate on 8-bit RGB channels."""
    if r > FOREGROUND_THRESHOLD and g > FOREGROUND_THRESHOLD and b > FOREGROUND_THRESHOLD:
        return False
    brightness = (r + g + b) / 3
    return brightness < FOREGROUND_THRESHOLD


def foreground_mask(rgba: NDArray[np.uint8]) -> NDArray[np.bool_]:
    """Vectorised is_foreground over an (H, W, 3|4) buffer. Returns (H, W) bool."""
    rgb = rgba[..., :3].astype(np.int32)
    near_white = np.all(rgb > FOREGROUND_THRESHOLD, axis=-1)
    # sum < 3*T is exact integer arithmetic for mean < T
    dark_enough = rgb.sum(axis=-1) < 3 * FOREGROUND_THRESHOLD
    return ~near_white & dark_enough
