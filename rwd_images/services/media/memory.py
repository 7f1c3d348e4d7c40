from __future__ import annotations

from typing import Any, Mapping, Optional

from rwd_images.models import ImageMetadata

from .base import MediaNotFoundError, MediaRepository


class InMemoryMediaRepository(MediaRepository):
    """Dict-backed repository for hosts that already hold metadata in memory.

    An image added with ``None`` metadata exists but has nothing stored for
    it, like an upload whose sizes were never generated.
    """

    name = "memory"

    def __init__(self, images: Mapping[int, Any] | None = None) -> None:
        self._images: dict[int, Optional[ImageMetadata]] = {}
        for image_id, metadata in (images or {}).items():
            self.add(image_id, metadata)

    def add(self, image_id: int, metadata: ImageMetadata | Mapping[str, Any] | None) -> Optional[ImageMetadata]:
        if metadata is not None and not isinstance(metadata, ImageMetadata):
            metadata = ImageMetadata.model_validate(metadata)
        self._images[int(image_id)] = metadata
        return metadata

    def exists(self, image_id: int) -> bool:
        return image_id in self._images

    def get_metadata(self, image_id: int) -> ImageMetadata:
        metadata = self._images.get(image_id)
        if metadata is None:
            raise MediaNotFoundError(image_id)
        return metadata
