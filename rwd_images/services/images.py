"""Entry point combining resolution and rendering.

    service = get_image_service()
    service.render_responsive_image("hero", 42, {"mobile": 43}, context=context)
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any, Mapping

from rwd_images.config import Settings, get_settings
from rwd_images.models import ImageHandle, RenderAttributes, Resolution

from .cache import BaseUrlCache, MetadataCache
from .loader import load_sizes
from .media import MediaRepository, RenderContext, build_repository
from .registry import SizeRegistry
from .renderer import Aspect, MarkupRenderer
from .resolver import VariantResolver

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]*>")


class ResponsiveImageService:
    def __init__(
        self,
        registry: SizeRegistry,
        repository: MediaRepository,
        *,
        settings: Settings | None = None,
        metadata_cache: MetadataCache | None = None,
        base_urls: BaseUrlCache | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.registry = registry
        self.metadata = metadata_cache or MetadataCache(repository)
        self.base_urls = base_urls or BaseUrlCache(self.metadata, settings.uploads_base_url)
        self.resolver = VariantResolver(registry, self.metadata, self.base_urls)
        self.renderer = MarkupRenderer(eol=settings.eol, picture_class=settings.picture_class)

    @property
    def repository(self) -> MediaRepository:
        return self.metadata.repository

    def resolve(
        self,
        set_key: str,
        primary: ImageHandle,
        overrides: Mapping[str, Any] | None = None,
        *,
        context: RenderContext | None = None,
    ) -> Resolution:
        return self.resolver.resolve(set_key, primary, overrides, context=context)

    def render_responsive_image(
        self,
        set_key: str,
        primary_ref: Any,
        overrides: Mapping[str, Any] | None = None,
        attributes: RenderAttributes | Mapping[str, Any] | None = None,
        *,
        context: RenderContext | None = None,
        aspect: Aspect = "picture",
        selector: str = "",
    ) -> str:
        markup, _ = self.render_with_resolution(
            set_key, primary_ref, overrides, attributes, context=context, aspect=aspect, selector=selector
        )
        return markup

    def render_with_resolution(
        self,
        set_key: str,
        primary_ref: Any,
        overrides: Mapping[str, Any] | None = None,
        attributes: RenderAttributes | Mapping[str, Any] | None = None,
        *,
        context: RenderContext | None = None,
        aspect: Aspect = "picture",
        selector: str = "",
    ) -> tuple[str, Resolution | None]:
        """Resolve ``set_key`` for ``primary_ref`` and render it.

        Returns the markup with the resolution it was built from. The markup
        is empty and the resolution ``None`` when the primary image does not
        resolve.
        """

        primary = self.repository.resolve_handle(primary_ref)
        if primary is None:
            logger.debug("Primary image %r does not resolve, rendering nothing", primary_ref)
            return "", None

        resolution = self.resolve(set_key, primary, overrides, context=context)
        rwd_set = self.registry.find_set(set_key)
        if rwd_set is None:
            return self.renderer.warnings_comment(resolution.warnings), resolution

        markup = self.renderer.render(
            resolution.variants,
            rwd_set,
            self._attributes(primary, attributes),
            resolution.warnings,
            aspect=aspect,
            selector=selector,
        )
        return markup, resolution

    def _attributes(
        self, primary: ImageHandle, attributes: RenderAttributes | Mapping[str, Any] | None
    ) -> RenderAttributes:
        if not isinstance(attributes, RenderAttributes):
            attributes = RenderAttributes.model_validate(attributes or {})
        if attributes.alt is None:
            metadata = self.metadata.get_metadata(primary.id)
            alt = _TAG.sub("", metadata.alt).strip() if metadata else ""
            attributes = attributes.model_copy(update={"alt": alt})
        return attributes


def build_image_service(settings: Settings) -> ResponsiveImageService:
    registry = SizeRegistry()
    if settings.sizes_file:
        load_sizes(registry, settings.sizes_file)
    return ResponsiveImageService(registry, build_repository(settings), settings=settings)


@lru_cache()
def get_image_service() -> ResponsiveImageService:  # pragma: no cover
    """Return the process-wide service built from settings."""

    return build_image_service(get_settings())


def render_responsive_image(
    set_key: str,
    primary_ref: Any,
    overrides: Mapping[str, Any] | None = None,
    attributes: RenderAttributes | Mapping[str, Any] | None = None,
    *,
    context: RenderContext | None = None,
) -> str:
    """Facade for the configured service."""

    return get_image_service().render_responsive_image(
        set_key, primary_ref, overrides, attributes, context=context
    )
