"""Connected-component labeling of the foreground mask.

Labels are assigned in row-major discovery order of each component's first
pixel (1, 2, 3, ...), with 0 reserved for background, so two runs over the
same buffer produce identical arrays. Adjacency is 4-connected.
"""

from __future__ import annotations

import logging
import time

import numpy as np
from numpy.typing import NDArray

from hoverreveal.engine.foreground import foreground_mask

logger = logging.getLogger(__name__)

LABEL_DTYPE = np.uint32


def build_label_map(base: NDArray[np.uint8]) -> tuple[NDArray[np.uint32], int]:
    """Label every 4-connected foreground region of an (H, W, 4) RGBA buffer.

    Returns ``(labels, component_count)`` where ``labels`` is an (H, W)
    row-major array, 0 for background and 1..component_count otherwise.
    """
    if base.ndim != 3 or base.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3|4) pixel buffer, got shape {base.shape}")

    start = time.perf_counter()
    rows, cols = base.shape[:2]

    # flat row-major working copies
    mask = foreground_mask(base).ravel().tolist()
    labels = [0] * (rows * cols)
    current_label = 0

    for p in range(rows * cols):
        if labels[p] or not mask[p]:
            continue
        current_label += 1
        _flood_fill(mask, labels, cols, p, current_label)

    result = np.asarray(labels, dtype=LABEL_DTYPE).reshape(rows, cols)
    elapsed = (time.perf_counter() - start) * 1000
    logger.debug("Labeled %dx%d buffer: %d components in %.1fms", cols, rows, current_label, elapsed)
    return result, current_label


def _flood_fill(
    mask: list[bool],
    labels: list[int],
    cols: int,
    start: int,
    label: int,
) -> None:
    """Explicit-stack flood fill over flat row-major indices."""
    size = len(mask)
    stack = [start]
    labels[start] = label

    while stack:
        q = stack.pop()
        qx = q % cols
        if qx > 0:
            n = q - 1
            if mask[n] and not labels[n]:
                labels[n] = label
                stack.append(n)
        if qx < cols - 1:
            n = q + 1
            if mask[n] and not labels[n]:
                labels[n] = label
                stack.append(n)
        n = q - cols
        if n >= 0 and mask[n] and not labels[n]:
            labels[n] = label
            stack.append(n)
        n = q + cols
        if n < size and mask[n] and not labels[n]:
            labels[n] = label
            stack.append(n)
