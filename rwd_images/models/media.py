from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeneratedVariant(BaseModel):
    """A resized rendition already produced by the host media system."""

    model_config = ConfigDict(populate_by_name=True)

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    relative_path: str = Field(..., alias="file")  # file name relative to the image directory


class ImageMetadata(BaseModel):
    """Stored metadata of a source image, keyed like the host writes it."""

    model_config = ConfigDict(populate_by_name=True)

    natural_width: int = Field(0, ge=0, alias="width")
    natural_height: int = Field(0, ge=0, alias="height")
    file: str = ""  # e.g., "2024/05/photo.jpg"
    generated_variants: dict[str, GeneratedVariant] = Field(default_factory=dict, alias="sizes")
    alt: str = ""


class ImageHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
