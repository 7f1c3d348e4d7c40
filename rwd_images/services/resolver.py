"""Pick the generated image variant to serve for each breakpoint of a set.

The width of the primary image's own rendition of the set key (or its
natural width when that rendition does not exist) is the ceiling for every
breakpoint. A variant wider than the ceiling is skipped without a warning,
since serving it would upscale past what the primary image offers. A
variant that was never generated is skipped with a warning.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from rwd_images.models import ImageHandle, Resolution, ResolvedVariant

from .cache import BaseUrlCache, MetadataCache
from .media import RenderContext
from .registry import SizeRegistry

logger = logging.getLogger(__name__)


class VariantResolver:
    def __init__(self, registry: SizeRegistry, metadata: MetadataCache, base_urls: BaseUrlCache) -> None:
        self.registry = registry
        self.metadata = metadata
        self.base_urls = base_urls

    def resolve(
        self,
        set_key: str,
        primary: ImageHandle,
        overrides: Mapping[str, Any] | None = None,
        *,
        context: RenderContext | None = None,
    ) -> Resolution:
        """Resolve ``set_key`` for ``primary``.

        ``overrides`` maps breakpoint keys to alternate images (handles or
        ids); an override that does not resolve falls back to ``primary``.
        Never raises for resolution problems: they end up in
        ``Resolution.warnings``.
        """

        resolution = Resolution(set_key=set_key)
        rwd_set = self.registry.find_set(set_key)
        if rwd_set is None:
            logger.warning("Unknown image size '%s'", set_key)
            resolution.warnings.append(f'Unknown image size "{set_key}"')
            return resolution

        sources = self._override_handles(overrides)
        baseline = self.baseline_width(set_key, primary)

        for breakpoint_key in rwd_set.breakpoint_keys:
            source = sources.get(breakpoint_key, primary)
            metadata = self.metadata.get_metadata(source.id)
            variant = metadata.generated_variants.get(breakpoint_key) if metadata else None
            if variant is None:
                logger.warning("Image %s has no generated size '%s:%s'", source.id, set_key, breakpoint_key)
                resolution.warnings.append(f'Attachment {source.id}: missing image size "{set_key}:{breakpoint_key}"')
                continue

            if variant.width > baseline:
                continue

            resolution.variants[breakpoint_key] = ResolvedVariant(
                breakpoint_key=breakpoint_key,
                width=variant.width,
                source_image_id=source.id,
                absolute_url=self.base_urls.get_base_url(source.id, context) + variant.relative_path,
            )

        return resolution

    def baseline_width(self, set_key: str, primary: ImageHandle) -> int:
        """Widest variant allowed for ``primary``; ``0`` when it has no metadata."""

        metadata = self.metadata.get_metadata(primary.id)
        if metadata is None:
            return 0
        own = metadata.generated_variants.get(set_key)
        return own.width if own is not None else metadata.natural_width

    def _override_handles(self, overrides: Mapping[str, Any] | None) -> dict[str, ImageHandle]:
        handles: dict[str, ImageHandle] = {}
        for breakpoint_key, ref in (overrides or {}).items():
            handle: Optional[ImageHandle] = self.metadata.repository.resolve_handle(ref)
            if handle is not None:
                handles[breakpoint_key] = handle
            else:
                logger.debug("Override for '%s' does not resolve, using the primary image", breakpoint_key)
        return handles
