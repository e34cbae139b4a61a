# listings/validators.py
import logging

from django.conf import settings
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_listing_image(value):
    """
    Validate an uploaded listing photo
    - Size limit: MAX_IMAGE_UPLOAD_SIZE (10MB by default)
    - Must be one of ALLOWED_IMAGE_TYPES
    """
    if value.size > settings.MAX_IMAGE_UPLOAD_SIZE:
        limit_mb = settings.MAX_IMAGE_UPLOAD_SIZE // (1024 * 1024)
        raise ValidationError(f"File size too large. Maximum size is {limit_mb}MB")

    content_type = getattr(value, "content_type", "") or ""
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            f"Invalid file type {content_type or 'unknown'}. "
            f"Allowed types: {', '.join(settings.ALLOWED_IMAGE_TYPES)}"
        )

    return value


def validate_image_count(files):
    if not files:
        raise ValidationError("No images uploaded")
    if len(files) > settings.MAX_LISTING_IMAGES:
        raise ValidationError(
            f"Too many files. Maximum is {settings.MAX_LISTING_IMAGES} files"
        )
    logger.debug(f"Validated {len(files)} listing images")
    return files
