# listings/storage.py
import os
import uuid
import logging

from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

UPLOAD_DIR = "cars"


def save_listing_images(files):
    """Store uploaded photos and return ``(names, urls)`` in upload order."""
    names, urls = [], []
    try:
        for upload in files:
            extension = os.path.splitext(upload.name)[1].lower()
            name = default_storage.save(
                f"{UPLOAD_DIR}/{uuid.uuid4().hex}{extension}", upload
            )
            names.append(name)
            urls.append(default_storage.url(name))
    except Exception:
        delete_stored_images(names)
        raise
    return names, urls


def delete_stored_images(names):
    """Best-effort cleanup of stored photos after a failed listing create."""
    for name in names:
        try:
            default_storage.delete(name)
        except OSError as e:
            logger.error(f"Error deleting file {name}: {str(e)}")
