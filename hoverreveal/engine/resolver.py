"""Item resolution: group labeled components into catalog items.

Each item owns the components its anchor points land on. Items are processed
in catalog order; when two items claim the same component the later one
wins the label -> item entry. Unmapped components are not an error, only a
diagnostic count for whoever authors the anchors.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from hoverreveal.models.catalog import CatalogItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemResolution:
    """Lookup tables produced by resolve_items()."""

    # Indexed by label; entry 0 (background) is always None
    label_to_item: tuple[str | None, ...]
    # Catalog order is preserved
    item_to_labels: dict[str, frozenset[int]] = field(default_factory=dict)
    # label -> every item key that claimed it, in catalog order (only shared labels)
    conflicts: dict[int, tuple[str, ...]] = field(default_factory=dict)

    @property
    def component_count(self) -> int:
        return len(self.label_to_item) - 1

    @property
    def unmapped_count(self) -> int:
        return sum(1 for key in self.label_to_item[1:] if key is None)

    @property
    def mapped_counts(self) -> dict[str, int]:
        return {key: len(labels) for key, labels in self.item_to_labels.items()}

    def item_for_label(self, label: int) -> str | None:
        if 0 < label < len(self.label_to_item):
            return self.label_to_item[label]
        return None

    def labels_for(self, key: str | None) -> frozenset[int]:
        if key is None:
            return frozenset()
        return self.item_to_labels.get(key, frozenset())


def anchor_to_pixel(nx: float, ny: float, width: int, height: int) -> tuple[int, int] | None:
    """Normalized anchor -> pixel coordinate, or None when it falls off the image."""
    px = math.floor(nx * width)
    py = math.floor(ny * height)
    if px < 0 or px >= width or py < 0 or py >= height:
        return None
    return px, py


def resolve_items(
    labels: NDArray[np.uint32],
    catalog: Sequence["CatalogItem"],
    component_count: int | None = None,
) -> ItemResolution:
    """Build label -> item and item -> labels tables from anchor samples."""
    height, width = labels.shape
    if component_count is None:
        component_count = int(labels.max()) if labels.size else 0

    label_to_item: list[str | None] = [None] * (component_count + 1)
    item_to_labels: dict[str, frozenset[int]] = {}
    claims: dict[int, list[str]] = {}

    for item in catalog:
        # dict keeps anchor discovery order for logs
        found: dict[int, None] = {}
        for nx, ny in item.anchors:
            pixel = anchor_to_pixel(nx, ny, width, height)
            if pixel is None:
                continue
            label = int(labels[pixel[1], pixel[0]])
            if label:
                found[label] = None

        item_to_labels[item.key] = frozenset(found)
        for label in found:
            claims.setdefault(label, []).append(item.key)
            label_to_item[label] = item.key

        if not found:
            logger.warning("Item %r: no anchor landed on a component", item.key)

    conflicts = {label: tuple(keys) for label, keys in claims.items() if len(keys) > 1}
    for label, keys in sorted(conflicts.items()):
        logger.warning(
            "Component %d claimed by %s; %r wins",
            label,
            ", ".join(keys),
            keys[-1],
        )

    resolution = ItemResolution(
        label_to_item=tuple(label_to_item),
        item_to_labels=item_to_labels,
        conflicts=conflicts,
    )
    logger.info(
        "Mapped items: %s",
        ", ".join(f"{k}:{n}" for k, n in resolution.mapped_counts.items()),
    )
    logger.info(
        "Unmapped components: %d of %d",
        resolution.unmapped_count,
        resolution.component_count,
    )
    return resolution
