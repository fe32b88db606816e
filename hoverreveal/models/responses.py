"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    scene_loaded: bool = False


class ItemSummary(BaseModel):
    key: str
    title: str
    component_count: int = 0


class SceneResponse(BaseModel):
    width: int
    height: int
    component_count: int
    unmapped_component_count: int
    mapped_items: dict[str, int] = Field(default_factory=dict)
    # label -> item keys that claimed it (last one wins)
    conflicts: dict[int, list[str]] = Field(default_factory=dict)


class ProbeResponse(BaseModel):
    normalized: tuple[float, float] | None = None
    pixel: tuple[int, int] | None = None
    label: int = 0
    item: str | None = None


class SessionResponse(BaseModel):
    session_id: str
    active_item: str | None = None


class HoverResponse(BaseModel):
    active_item: str | None = None
    changed: bool = False
    cursor: str = "default"


class ItemDetailModel(BaseModel):
    key: str
    title: str
    message: str


class ClickResponse(BaseModel):
    detail: ItemDetailModel | None = None
