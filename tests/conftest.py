"""Pytest configuration and shared fixtures for rwd-images tests."""

from collections import Counter

import pytest

from rwd_images.config import Settings
from rwd_images.models import ImageMetadata
from rwd_images.services.cache import BaseUrlCache, MetadataCache
from rwd_images.services.images import ResponsiveImageService
from rwd_images.services.media import InMemoryMediaRepository, StaticRenderContext
from rwd_images.services.registry import SizeRegistry
from rwd_images.services.resolver import VariantResolver

UPLOADS = "http://example.com/uploads"

PICTURE_TEMPLATE = '<img srcset="{src}" alt="{alt}" title="{title}">'


class CountingMediaRepository(InMemoryMediaRepository):
    """In-memory repository recording how often metadata is fetched per image."""

    def __init__(self, images=None):
        super().__init__(images)
        self.calls = Counter()

    def get_metadata(self, image_id):
        self.calls[image_id] += 1
        return super().get_metadata(image_id)


def photo_metadata(width=1600, directory="2024/05", name="photo", sizes=None, alt=""):
    """Build metadata for an upload with the given generated sizes {key: (w, h)}."""
    sizes = {"mobile": (400, 300), "desktop": (1200, 900)} if sizes is None else sizes
    return ImageMetadata.model_validate(
        {
            "width": width,
            "height": int(width * 0.75),
            "file": f"{directory}/{name}.jpg" if directory else f"{name}.jpg",
            "sizes": {
                key: {"width": w, "height": h, "file": f"{name}-{w}x{h}.jpg"} for key, (w, h) in sizes.items()
            },
            "alt": alt,
        }
    )


@pytest.fixture
def settings() -> Settings:
    """Return settings pointing at a fixed uploads URL."""
    return Settings(uploads_base_url=UPLOADS, media_backend="memory", sizes_file=None)


@pytest.fixture
def registry() -> SizeRegistry:
    """Return a registry with the 'hero' set: mobile 400x300, desktop 1200x900."""
    registry = SizeRegistry()
    registry.register_size("hero", "1600x1200")
    registry.register_breakpoint("hero", "mobile", [400, 300], {"picture": PICTURE_TEMPLATE})
    registry.register_breakpoint("hero", "desktop", "1200x900", {"picture": PICTURE_TEMPLATE})
    return registry


@pytest.fixture
def repository() -> CountingMediaRepository:
    """Return a repository holding image 1 (1600px wide, both hero breakpoints generated)."""
    return CountingMediaRepository({1: photo_metadata(alt="A <b>sunny</b> beach ")})


@pytest.fixture
def metadata_cache(repository) -> MetadataCache:
    return MetadataCache(repository)


@pytest.fixture
def resolver(registry, metadata_cache) -> VariantResolver:
    return VariantResolver(registry, metadata_cache, BaseUrlCache(metadata_cache, UPLOADS))


@pytest.fixture
def service(registry, repository, settings) -> ResponsiveImageService:
    return ResponsiveImageService(registry, repository, settings=settings)


@pytest.fixture
def secure_context() -> StaticRenderContext:
    return StaticRenderContext(secure=True, host="example.com")
