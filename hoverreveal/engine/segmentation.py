"""Segmentation and Scene: the values built once after both images are decoded.

Segmentation = label array + item lookup tables. Scene adds the two pixel
buffers, the catalog and one shared compositor. Everything but the
compositor's scratch buffers is read-only after construction; the arrays
are flagged non-writeable so accidental mutation fails loudly.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Collection, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from hoverreveal.engine.compositor import Compositor
from hoverreveal.engine.labeling import build_label_map
from hoverreveal.engine.resolver import ItemResolution, resolve_items
from hoverreveal.imaging.loader import check_same_size
from hoverreveal.models.catalog import CatalogItem, ItemCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segmentation:
    labels: NDArray[np.uint32]
    component_count: int
    resolution: ItemResolution

    @property
    def width(self) -> int:
        return int(self.labels.shape[1])

    @property
    def height(self) -> int:
        return int(self.labels.shape[0])

    def item_for_label(self, label: int) -> str | None:
        return self.resolution.item_for_label(label)

    def labels_for(self, key: str | None) -> frozenset[int]:
        return self.resolution.labels_for(key)


@dataclass(frozen=True)
class Scene:
    base: NDArray[np.uint8]
    overlay: NDArray[np.uint8]
    segmentation: Segmentation
    catalog: ItemCatalog
    # One compositor per scene; its buffers are shared by every session
    compositor: Compositor
    render_lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def width(self) -> int:
        return self.segmentation.width

    @property
    def height(self) -> int:
        return self.segmentation.height

    def item(self, key: str | None) -> CatalogItem | None:
        if key is None:
            return None
        return self.catalog.get(key)

    @contextmanager
    def frame(self, active_labels: Collection[int] | None) -> Iterator[NDArray[np.uint8]]:
        """Render under the scene lock. The yielded buffer is only valid inside the block."""
        with self.render_lock:
            yield self.compositor.render(active_labels)


def build_segmentation(base: NDArray[np.uint8], catalog: ItemCatalog) -> Segmentation:
    start = time.perf_counter()
    labels, count = build_label_map(base)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Segmented components: %d (%.0fms)", count, elapsed)

    resolution = resolve_items(labels, catalog.items, count)
    labels.setflags(write=False)
    return Segmentation(labels=labels, component_count=count, resolution=resolution)


def build_scene(
    base: NDArray[np.uint8],
    overlay: NDArray[np.uint8],
    catalog: ItemCatalog,
) -> Scene:
    """Validate the pair, segment the base and resolve the catalog."""
    check_same_size(base, overlay)
    base = _as_rgba(base)
    overlay = _as_rgba(overlay)
    segmentation = build_segmentation(base, catalog)
    base.setflags(write=False)
    overlay.setflags(write=False)
    compositor = Compositor(base, overlay, segmentation.labels, segmentation.component_count)
    return Scene(
        base=base,
        overlay=overlay,
        segmentation=segmentation,
        catalog=catalog,
        compositor=compositor,
    )


def _as_rgba(pixels: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Own a contiguous uint8 RGBA copy; RGB input gets an opaque alpha channel."""
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3|4) pixel buffer, got shape {pixels.shape}")
    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([pixels.astype(np.uint8), alpha], axis=2)
    return np.array(pixels, dtype=np.uint8, copy=True, order="C")
