"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hoverreveal.engine.hit_test import DisplayRect


class RectModel(BaseModel):
    left: float = Field(0.0, description="Left edge of the rendered surface")
    top: float = Field(0.0, description="Top edge of the rendered surface")
    width: float = Field(..., description="Rendered width in display units")
    height: float = Field(..., description="Rendered height in display units")

    def to_rect(self) -> DisplayRect:
        return DisplayRect(left=self.left, top=self.top, width=self.width, height=self.height)


class PointerRequest(BaseModel):
    x: float = Field(..., description="Pointer x in display coordinates")
    y: float = Field(..., description="Pointer y in display coordinates")
    rect: RectModel = Field(..., description="Current bounding rectangle of the surface")
