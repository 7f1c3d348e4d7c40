"""Process-lifetime memoisation of metadata and base URL lookups.

Both caches are keyed by image id and never invalidated; a change to an
image's generated sizes after its first lookup is not observed until the
process restarts. Two threads filling the same key compute the same value,
so the last write simply wins and no lock is taken.
"""
from __future__ import annotations

import logging
import posixpath
from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Optional, TypeVar
from urllib.parse import urlsplit

from rwd_images.models import ImageMetadata

from .media import MediaNotFoundError, MediaRepository, RenderContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

SECURE_SCHEME = "https"


class Cache(ABC):
    """Get-or-compute storage injected into the metadata and URL caches."""

    @abstractmethod
    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        ...

    def clear(self) -> None:  # pragma: no cover
        pass


class MemoryCache(Cache):
    def __init__(self) -> None:
        self._values: dict[Hashable, Any] = {}

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        if key in self._values:
            return self._values[key]
        value = compute()
        self._values[key] = value
        return value

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def clear(self) -> None:
        self._values.clear()


class NoCache(Cache):
    """Computes on every call."""

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        return compute()


class MetadataCache:
    def __init__(self, repository: MediaRepository, cache: Cache | None = None) -> None:
        self.repository = repository
        self._cache = cache if cache is not None else MemoryCache()

    def get_metadata(self, image_id: int) -> Optional[ImageMetadata]:
        """Return the image's metadata, or ``None`` when the store has none.

        A miss is cached like a hit.
        """

        return self._cache.get_or_compute(image_id, lambda: self._fetch(image_id))

    def _fetch(self, image_id: int) -> Optional[ImageMetadata]:
        try:
            metadata = self.repository.get_metadata(image_id)
        except MediaNotFoundError:
            logger.warning("No metadata for image %s", image_id)
            return None
        logger.debug("Cached metadata for image %s", image_id)
        return metadata


class BaseUrlCache:
    """Public URL of the directory holding an image and its generated variants."""

    def __init__(self, metadata: MetadataCache, uploads_base_url: str, cache: Cache | None = None) -> None:
        self._metadata = metadata
        self._uploads_base_url = uploads_base_url.rstrip("/") + "/"
        self._cache = cache if cache is not None else MemoryCache()

    def get_base_url(self, image_id: int, context: RenderContext | None = None) -> str:
        base_url = self._cache.get_or_compute(image_id, lambda: self._compute(image_id))
        return upgrade_scheme(base_url, context)

    def _compute(self, image_id: int) -> str:
        metadata = self._metadata.get_metadata(image_id)
        dirname = posixpath.dirname(metadata.file.lstrip("/")) if metadata else ""
        if dirname:
            dirname += "/"
        return self._uploads_base_url + dirname


def upgrade_scheme(url: str, context: RenderContext | None) -> str:
    """Rewrite ``url`` to https when the current request is secure and on the same host."""

    if context is None or not context.is_secure_request():
        return url
    parts = urlsplit(url)
    if parts.scheme == SECURE_SCHEME:
        return url
    host = context.current_host().lower()
    if host and host in (parts.netloc.lower(), (parts.hostname or "").lower()):
        return parts._replace(scheme=SECURE_SCHEME).geturl()
    return url
