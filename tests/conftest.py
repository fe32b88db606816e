"""Shared test fixtures: synthetic greyscale/colour buffer pairs and a catalog."""

from __future__ import annotations

import json

import numpy as np
import pytest
from PIL import Image

from hoverreveal.config import Settings
from hoverreveal.engine.segmentation import build_scene
from hoverreveal.models.catalog import parse_catalog

WHITE = (255, 255, 255)
GREY = (100, 100, 100)
RED = (220, 40, 40)


def blank(width: int, height: int) -> np.ndarray:
    """Opaque white RGBA buffer."""
    return np.full((height, width, 4), 255, dtype=np.uint8)


def paint(buf: np.ndarray, x0: int, y0: int, x1: int, y1: int, rgb=GREY) -> np.ndarray:
    """Fill the half-open box [x0, x1) x [y0, y1) with ``rgb``."""
    buf[y0:y1, x0:x1, :3] = rgb
    return buf


# 20x10 scene: three grey boxes on white; the overlay has the same boxes in red.
#   A: x 2-4, y 2-4    B: x 8-10, y 2-4    C: x 14-17, y 5-8
SCENE_W, SCENE_H = 20, 10
BOXES = {
    "A": (2, 2, 5, 5),
    "B": (8, 2, 11, 5),
    "C": (14, 5, 18, 9),
}

# Anchors sit on pixel centres: A(3,3) B(9,3) C(15,6); ghost is background (0,0)
SCENE_CATALOG = {
    "items": [
        {"key": "pair", "title": "Pair", "message": "Two boxes", "anchors": [[0.175, 0.35], [0.475, 0.35]]},
        {"key": "solo", "title": "Solo", "message": "One box", "anchors": [[0.775, 0.65]]},
        {"key": "ghost", "title": "Ghost", "message": "Nothing here", "anchors": [[0.01, 0.01]]},
    ]
}


def scene_buffers() -> tuple[np.ndarray, np.ndarray]:
    base = blank(SCENE_W, SCENE_H)
    overlay = blank(SCENE_W, SCENE_H)
    for box in BOXES.values():
        paint(base, *box, rgb=GREY)
        paint(overlay, *box, rgb=RED)
    return base, overlay


def save_png(path, pixels: np.ndarray) -> None:
    Image.fromarray(pixels).save(path, format="PNG")


@pytest.fixture
def scene_catalog():
    return parse_catalog(SCENE_CATALOG)


@pytest.fixture
def scene(scene_catalog):
    base, overlay = scene_buffers()
    return build_scene(base, overlay, scene_catalog)


@pytest.fixture
def scene_files(tmp_path):
    """Base PNG, overlay PNG and catalog JSON on disk."""
    base, overlay = scene_buffers()
    base_path = tmp_path / "grey.png"
    overlay_path = tmp_path / "colour.png"
    catalog_path = tmp_path / "catalog.json"
    save_png(base_path, base)
    save_png(overlay_path, overlay)
    catalog_path.write_text(json.dumps(SCENE_CATALOG), encoding="utf-8")
    return base_path, overlay_path, catalog_path


@pytest.fixture
def scene_settings(scene_files) -> Settings:
    base_path, overlay_path, catalog_path = scene_files
    return Settings(
        base_image=str(base_path),
        overlay_image=str(overlay_path),
        catalog_path=str(catalog_path),
        _env_file=None,
    )
