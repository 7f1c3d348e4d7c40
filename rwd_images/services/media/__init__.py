from __future__ import annotations

from .base import MediaNotFoundError, MediaRepository, RenderContext, StaticRenderContext
from .local import LocalMediaRepository
from .memory import InMemoryMediaRepository
from .registry import build_repository

__all__ = [
    "MediaNotFoundError",
    "MediaRepository",
    "RenderContext",
    "StaticRenderContext",
    "InMemoryMediaRepository",
    "LocalMediaRepository",
    "build_repository",
]
