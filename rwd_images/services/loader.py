"""Register sizes and responsive sets from a JSON document.

Expected shape::

    {
      "sizes": {"hero": {"size": "1600x900", "retina": {"2x": 2}}},
      "sets": {
        "hero": {
          "mobile": {"size": [400, 300], "picture": "<source media=...>"},
          "desktop": {"size": "1200x900", "srcset": "{src} {w}w"}
        }
      }
    }

Sizes are registered before sets, each in document order.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from rwd_images.models import SizeValidationError

from .registry import SizeRegistry

logger = logging.getLogger(__name__)


def load_sizes(registry: SizeRegistry, source: Path | str | Mapping[str, Any]) -> SizeRegistry:
    if isinstance(source, Mapping):
        document: Mapping[str, Any] = source
    else:
        document = json.loads(Path(source).read_text(encoding="utf-8"))

    for key, entry in (document.get("sizes") or {}).items():
        params, extras = _split_entry(key, entry)
        registry.register_size(key, params, extras.get("retina"))

    for set_key, breakpoints in (document.get("sets") or {}).items():
        for breakpoint_key, entry in breakpoints.items():
            params, extras = _split_entry(breakpoint_key, entry)
            retina = extras.pop("retina", None)
            registry.register_breakpoint(set_key, breakpoint_key, params, extras, retina)

    logger.info("Loaded %d image sizes and %d responsive sets", len(registry.sizes), len(registry.sets))
    return registry


def _split_entry(key: str, entry: Any) -> tuple[Any, dict[str, Any]]:
    """Return (size params, remaining options) for a raw size entry."""

    if isinstance(entry, Mapping):
        if "size" not in entry:
            raise SizeValidationError(key, entry)
        extras = dict(entry)
        return extras.pop("size"), extras
    return entry, {}
