"""Filesystem media repository.

Reads metadata sidecars stored next to the uploads::

    {media_root}/{image_id}.json
    {media_root}/2024/05/photo.jpg
    {media_root}/2024/05/photo-400x300.jpg

A sidecar has the same shape the host writes (``width``, ``height``,
``file``, ``sizes``, ``alt``). When the natural dimensions are missing they
are read from the original file with Pillow.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from PIL import Image
from pydantic import ValidationError

from rwd_images.models import ImageMetadata

from .base import MediaNotFoundError, MediaRepository

logger = logging.getLogger(__name__)


class LocalMediaRepository(MediaRepository):
    name = "local"

    def __init__(self, media_root: Path | str) -> None:
        self._root = Path(media_root)
        if not self._root.is_dir():  # pragma: no cover
            logger.warning("Media root '%s' does not exist.", self._root)

    def _sidecar(self, image_id: int) -> Path:
        return self._root / f"{image_id}.json"

    def exists(self, image_id: int) -> bool:
        return self._sidecar(image_id).is_file()

    def get_metadata(self, image_id: int) -> ImageMetadata:
        sidecar = self._sidecar(image_id)
        try:
            raw = json.loads(sidecar.read_text(encoding="utf-8"))
            metadata = ImageMetadata.model_validate(raw)
        except FileNotFoundError as exc:
            raise MediaNotFoundError(image_id) from exc
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Unreadable metadata sidecar %s: %s", sidecar, exc)
            raise MediaNotFoundError(image_id) from exc

        if metadata.file and not (metadata.natural_width and metadata.natural_height):
            width, height = _read_dimensions(self._root / metadata.file)
            metadata = metadata.model_copy(update={"natural_width": width, "natural_height": height})
        return metadata


def _read_dimensions(path: Path) -> tuple[int, int]:
    """Return (width, height) of an image file, or (0, 0) when it cannot be read."""

    try:
        with Image.open(path) as img:
            return img.size
    except (OSError, Image.DecompressionBombError) as exc:
        logger.warning("Cannot read dimensions of %s: %s", path, exc)
        return 0, 0
