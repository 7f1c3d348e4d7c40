from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResolvedVariant(BaseModel):
    breakpoint_key: str
    width: int
    source_image_id: int
    absolute_url: str


class Resolution(BaseModel):
    """Outcome of resolving one size: variants in breakpoint order plus warnings."""

    set_key: str
    variants: dict[str, ResolvedVariant] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.variants


class RenderAttributes(BaseModel):
    """Attributes for the rendered markup; ``None`` means use the default."""

    model_config = ConfigDict(populate_by_name=True)

    class_: Optional[str] = Field(default=None, alias="class")
    alt: Optional[str] = None
    title: Optional[str] = None
