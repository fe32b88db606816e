"""hoverreveal raster segmentation and hover-reveal engine."""

from hoverreveal.engine.compositor import Compositor
from hoverreveal.engine.foreground import is_foreground
from hoverreveal.engine.hit_test import DisplayRect, locate
from hoverreveal.engine.labeling import build_label_map
from hoverreveal.engine.resolver import ItemResolution, resolve_items
from hoverreveal.engine.segmentation import Scene, Segmentation, build_scene
from hoverreveal.engine.session import HoverUpdate, ItemDetail, Session, SessionStore

__all__ = [
    "Compositor",
    "is_foreground",
    "DisplayRect",
    "locate",
    "build_label_map",
    "ItemResolution",
    "resolve_items",
    "Scene",
    "Segmentation",
    "build_scene",
    "HoverUpdate",
    "ItemDetail",
    "Session",
    "SessionStore",
]
