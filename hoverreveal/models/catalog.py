"""Item catalog models: named items anchored by normalized sample points."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The item catalog is missing or invalid."""


class CatalogItem(BaseModel):
    key: str = Field(..., min_length=1, description="Unique item key")
    title: str = Field(..., description="Display title")
    message: str = Field(..., description="Detail message shown on click")
    anchors: list[tuple[float, float]] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("anchors", "pts"),
        description="Normalized (x, y) sample points in [0, 1]",
    )

    @field_validator("anchors")
    @classmethod
    def _anchors_in_unit_square(cls, v: list[tuple[float, float]]) -> list[tuple[float, float]]:
        for nx, ny in v:
            if not (0.0 <= nx <= 1.0 and 0.0 <= ny <= 1.0):
                raise ValueError(f"anchor ({nx}, {ny}) is outside [0, 1]")
        return v


class ItemCatalog(BaseModel):
    items: list[CatalogItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_keys(self) -> "ItemCatalog":
        seen: set[str] = set()
        for item in self.items:
            if item.key in seen:
                raise ValueError(f"duplicate item key {item.key!r}")
            seen.add(item.key)
        return self

    def get(self, key: str) -> CatalogItem | None:
        for item in self.items:
            if item.key == key:
                return item
        return None


def parse_catalog(data: object) -> ItemCatalog:
    """Accept either ``{"items": [...]}`` or a bare list of items."""
    if isinstance(data, list):
        data = {"items": data}
    try:
        return ItemCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"invalid catalog: {e}") from e


def load_catalog(path: str | Path) -> ItemCatalog:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"{path}: cannot read catalog: {e.strerror or e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogError(f"{path}: not valid JSON: {e}") from e

    catalog = parse_catalog(data)
    logger.info("Loaded catalog %s: %d items", path, len(catalog.items))
    return catalog
