"""Registry of image sizes and responsive sets.

Built once at startup and handed to the resolver; nothing reads it through
module globals. Re-registering a key silently replaces the previous entry.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from rwd_images.models import BreakpointOption, ResponsiveSet, SizeDefinition, parse_size

logger = logging.getLogger(__name__)

# Host sizes whose dimensions are also persisted as site options.
CORE_SIZES = ("thumbnail", "medium", "medium_large", "large")


class SizeRegistry:
    """Size definitions, breakpoint options and responsive sets by key."""

    def __init__(self) -> None:
        self.sizes: dict[str, SizeDefinition] = {}
        self.options: dict[str, BreakpointOption] = {}
        self.sets: dict[str, ResponsiveSet] = {}
        self.core_sizes: dict[str, SizeDefinition] = {}

    # ------------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------------

    def register_size(
        self,
        key: str,
        params: Any,
        magnifications: Mapping[str, float] | None = None,
    ) -> SizeDefinition:
        """Parse and store a size plus one derived size per magnification descriptor."""

        size = parse_size(key, params)
        self._store_size(size)
        for descriptor, factor in (magnifications or {}).items():
            self._store_size(size.derive_magnification(descriptor, factor))
        return size

    def _store_size(self, size: SizeDefinition) -> None:
        if size.key in self.sizes:
            logger.debug("Image size '%s' re-registered, replacing previous definition", size.key)
        self.sizes[size.key] = size
        if size.key in CORE_SIZES:
            self.core_sizes[size.key] = size
        logger.debug("Registered image size '%s' (%s crop=%s)", size.key, size.token, size.crop)

    def get_size(self, key: str) -> Optional[SizeDefinition]:
        return self.sizes.get(key)

    # ------------------------------------------------------------------
    # Breakpoints and sets
    # ------------------------------------------------------------------

    def register(
        self,
        breakpoint_key: str,
        params: Any,
        templates: Mapping[str, Any] | None = None,
        magnifications: Mapping[str, float] | None = None,
    ) -> BreakpointOption:
        """Create a breakpoint option; its size is registered under the breakpoint key."""

        size = self.register_size(breakpoint_key, params, magnifications)
        option = BreakpointOption.from_templates(breakpoint_key, size, templates)
        self.options[breakpoint_key] = option
        return option

    def register_set(self, set_key: str, options: Iterable[BreakpointOption]) -> ResponsiveSet:
        """Group options under ``set_key``, replacing any set already stored there."""

        rwd_set = ResponsiveSet(key=set_key, options={option.key: option for option in options})
        self.sets[set_key] = rwd_set
        logger.debug("Registered responsive set '%s' with breakpoints %s", set_key, rwd_set.breakpoint_keys)
        return rwd_set

    def register_breakpoint(
        self,
        set_key: str,
        breakpoint_key: str,
        params: Any,
        templates: Mapping[str, Any] | None = None,
        magnifications: Mapping[str, float] | None = None,
    ) -> ResponsiveSet:
        """Register one breakpoint and append it to ``set_key``, creating the set if needed."""

        option = self.register(breakpoint_key, params, templates, magnifications)
        current = self.sets.get(set_key)
        if current is None:
            current = ResponsiveSet(key=set_key)
        self.sets[set_key] = current.with_option(option)
        return self.sets[set_key]

    def find_set(self, set_key: str) -> Optional[ResponsiveSet]:
        return self.sets.get(set_key)
