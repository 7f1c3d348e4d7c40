from __future__ import annotations

from rwd_images.config import Settings

from .base import MediaRepository
from .firebase_repo import FirebaseMediaRepository
from .local import LocalMediaRepository
from .memory import InMemoryMediaRepository

_REPOSITORIES: dict[str, type[MediaRepository]] = {
    "memory": InMemoryMediaRepository,
    "local": LocalMediaRepository,
    "firebase": FirebaseMediaRepository,
}


def build_repository(settings: Settings) -> MediaRepository:
    backend = settings.media_backend.lower()
    if backend not in _REPOSITORIES:
        raise ValueError(f"Unsupported media backend: {backend}")
    if backend == "local":
        return LocalMediaRepository(settings.media_root)
    if backend == "firebase":
        return FirebaseMediaRepository(settings=settings)
    return _REPOSITORIES[backend]()
