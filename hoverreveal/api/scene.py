"""GET /api/scene: segmentation diagnostics, plus the anchor-authoring probe."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from hoverreveal.dependencies import get_scene
from hoverreveal.engine.hit_test import pointer_to_normalized, pointer_to_pixel
from hoverreveal.engine.segmentation import Scene
from hoverreveal.models.requests import PointerRequest
from hoverreveal.models.responses import ItemSummary, ProbeResponse, SceneResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scene")


@router.get("", response_model=SceneResponse)
def scene_diagnostics(scene: Scene = Depends(get_scene)) -> SceneResponse:
    resolution = scene.segmentation.resolution
    return SceneResponse(
        width=scene.width,
        height=scene.height,
        component_count=scene.segmentation.component_count,
        unmapped_component_count=resolution.unmapped_count,
        mapped_items=resolution.mapped_counts,
        conflicts={label: list(keys) for label, keys in resolution.conflicts.items()},
    )


@router.get("/items", response_model=list[ItemSummary])
def scene_items(scene: Scene = Depends(get_scene)) -> list[ItemSummary]:
    counts = scene.segmentation.resolution.mapped_counts
    return [
        ItemSummary(key=item.key, title=item.title, component_count=counts.get(item.key, 0))
        for item in scene.catalog.items
    ]


@router.post("/probe", response_model=ProbeResponse)
def probe(req: PointerRequest, scene: Scene = Depends(get_scene)) -> ProbeResponse:
    """Report where a pointer lands, in anchor coordinates, for tuning the catalog."""
    rect = req.rect.to_rect()
    normalized = pointer_to_normalized(req.x, req.y, rect)
    pixel = pointer_to_pixel(req.x, req.y, rect, scene.width, scene.height)

    label = 0
    if pixel is not None:
        label = int(scene.segmentation.labels[pixel[1], pixel[0]])
    item = scene.segmentation.item_for_label(label)

    if normalized is not None:
        normalized = (round(normalized[0], 3), round(normalized[1], 3))
        logger.debug("Probe pt: %.3f %.3f comp: %d item: %s", normalized[0], normalized[1], label, item)

    return ProbeResponse(normalized=normalized, pixel=pixel, label=label, item=item)
