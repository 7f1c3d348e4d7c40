"""Firebase Realtime Database media repository.

Attachments are stored under the following path structure:

/attachments/{image_id}             an attachment exists when this node exists
/attachments/{image_id}/metadata    stored metadata of the attachment

Metadata is validated with the ImageMetadata model before being returned.
"""
from __future__ import annotations

import json
import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, db

from rwd_images.config import Settings, get_settings
from rwd_images.models import ImageMetadata

from .base import MediaNotFoundError, MediaRepository

logger = logging.getLogger(__name__)


def initialise_app(settings: Settings) -> None:
    """Initialise the Firebase Admin SDK exactly once."""

    if firebase_admin._apps:  # type: ignore[attr-defined]
        return
    try:
        if settings.firebase_credentials_json:
            # Accept path or JSON string
            cred_obj: credentials.Base = (
                credentials.Certificate(settings.firebase_credentials_json)
                if settings.firebase_credentials_json.endswith(".json")
                else credentials.Certificate(json.loads(settings.firebase_credentials_json))
            )
        else:
            # Attempt default credentials (useful on Cloud Run with workload identity)
            cred_obj = credentials.ApplicationDefault()

        firebase_admin.initialize_app(
            cred_obj,
            {
                "databaseURL": f"https://{settings.project_id}.firebaseio.com"
                if settings.project_id
                else None,
            },
        )
        logger.info("Firebase Admin SDK initialised.")
    except Exception as exc:  # pragma: no cover
        logger.exception("Failed to initialise Firebase Admin SDK: %s", exc)
        raise


class FirebaseMediaRepository(MediaRepository):
    name = "firebase"

    def __init__(self, root: Any = None, settings: Settings | None = None) -> None:
        if root is None:
            initialise_app(settings or get_settings())
            root = db.reference("/")
        self._root = root

    def _attachment_ref(self, image_id: int):
        return self._root.child("attachments").child(str(image_id))

    def exists(self, image_id: int) -> bool:
        return self._attachment_ref(image_id).get(shallow=True) is not None

    def get_metadata(self, image_id: int) -> ImageMetadata:
        data = self._attachment_ref(image_id).child("metadata").get()
        if data is None:
            raise MediaNotFoundError(image_id)
        logger.debug("Fetched metadata for image_id=%s", image_id)
        return ImageMetadata.model_validate(data)
