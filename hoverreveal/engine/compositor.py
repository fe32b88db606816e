"""Recolor pass: greyscale base with the active item's components taken from the overlay."""

from __future__ import annotations

from typing import Collection

import numpy as np
from numpy.typing import NDArray

OPAQUE = 255


class Compositor:
    """Renders frames for one image pair, reusing its output and mask buffers.

    ``render()`` returns the internal buffer; it is overwritten by the next
    call, so copy it if it has to outlive that.
    """

    def __init__(
        self,
        base: NDArray[np.uint8],
        overlay: NDArray[np.uint8],
        labels: NDArray[np.uint32],
        component_count: int | None = None,
    ) -> None:
        if base.shape != overlay.shape:
            raise ValueError(f"Base {base.shape} and overlay {overlay.shape} differ in shape")
        if base.ndim != 3 or base.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA buffers, got {base.shape}")
        if labels.shape != base.shape[:2]:
            raise ValueError(f"Label array {labels.shape} does not match buffer {base.shape[:2]}")

        self._base = base
        self._overlay = overlay
        # intp copy of the labels, built once for take()
        self._index = np.ascontiguousarray(labels, dtype=np.intp)
        if component_count is None:
            component_count = int(labels.max()) if labels.size else 0
        self._member = np.zeros(component_count + 1, dtype=bool)
        self._mask = np.zeros(labels.shape, dtype=bool)
        self._out = np.empty_like(base)

    def render(self, active_labels: Collection[int] | None = None) -> NDArray[np.uint8]:
        np.copyto(self._out, self._base)
        if not active_labels:
            return self._out

        self._member[:] = False
        for label in active_labels:
            if 0 < label < len(self._member):
                self._member[label] = True
        np.take(self._member, self._index, out=self._mask, mode="clip")

        np.copyto(self._out, self._overlay, where=self._mask[..., np.newaxis])
        np.copyto(self._out[..., 3], OPAQUE, where=self._mask)
        return self._out


def render(
    base: NDArray[np.uint8],
    overlay: NDArray[np.uint8],
    labels: NDArray[np.uint32],
    active_labels: Collection[int] | None = None,
) -> NDArray[np.uint8]:
    """One-shot render into a fresh buffer."""
    return Compositor(base, overlay, labels).render(active_labels).copy()
