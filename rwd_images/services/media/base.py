from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from rwd_images.models import ImageHandle, ImageMetadata


class MediaNotFoundError(LookupError):
    """Raised when the media store has no metadata for an image id."""

    def __init__(self, image_id: int) -> None:
        super().__init__(f"No metadata stored for image {image_id}")
        self.image_id = image_id


class MediaRepository(ABC):
    """Abstract interface for the host media store.

    Implementations only read metadata that the host already produced; they
    never generate or write image files.
    """

    name: str = "abstract"

    def resolve_handle(self, ref: Any) -> Optional[ImageHandle]:
        """Turn an ImageHandle, integer id or numeric string into a handle.

        Returns ``None`` for anything that does not name a stored image.
        """

        image_id = _coerce_id(ref)
        if image_id is None or not self.exists(image_id):
            return None
        return ref if isinstance(ref, ImageHandle) else ImageHandle(id=image_id)

    @abstractmethod
    def exists(self, image_id: int) -> bool:
        ...

    @abstractmethod
    def get_metadata(self, image_id: int) -> ImageMetadata:
        """Return stored metadata or raise MediaNotFoundError."""


class RenderContext(ABC):
    """Facts about the request being rendered, used for the https upgrade."""

    @abstractmethod
    def is_secure_request(self) -> bool:
        ...

    @abstractmethod
    def current_host(self) -> str:
        ...


class StaticRenderContext(RenderContext):
    def __init__(self, secure: bool = False, host: str = "") -> None:
        self._secure = secure
        self._host = host

    def is_secure_request(self) -> bool:
        return self._secure

    def current_host(self) -> str:
        return self._host


def _coerce_id(ref: Any) -> Optional[int]:
    if isinstance(ref, ImageHandle):
        return ref.id
    if isinstance(ref, bool) or ref is None:
        return None
    if isinstance(ref, int):
        return ref
    if isinstance(ref, str) and ref.strip().isdigit():
        return int(ref.strip())
    return None
