"""
Product image upload helpers.

Files go through Django's default storage, which is S3 (see
``marketplace.storage_backends.MediaStorage``) when ``USE_S3`` is on and the
local media directory otherwise.
"""
import logging

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone

logger = logging.getLogger(__name__)


def build_image_path(user_id, filename, now=None):
    """product-images/<user_id>-<epoch millis>.<ext>"""
    now = now or timezone.now()
    extension = filename.rsplit('.', 1)[-1].lower() if filename else 'jpg'
    timestamp = int(now.timestamp() * 1000)
    return f"{settings.PRODUCT_IMAGE_FOLDER}/{user_id}-{timestamp}.{extension}"


def upload_product_image(file_obj, user):
    """
    Store an uploaded image and return ``(stored_name, public_url)``.

    Returns ``(None, None)`` when the store rejects the file.
    """
    path = build_image_path(user.id, getattr(file_obj, 'name', ''))

    try:
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        stored_name = default_storage.save(path, file_obj)
        public_url = default_storage.url(stored_name)
    except Exception as e:
        logger.error(f"Image upload failed for user {user.id} ({path}): {e}")
        return None, None

    logger.info(f"Image uploaded: {stored_name}")
    return stored_name, public_url


def delete_product_image(stored_name):
    """Remove a stored image; returns whether anything was deleted."""
    if not stored_name:
        return False

    try:
        if not default_storage.exists(stored_name):
            return False
        default_storage.delete(stored_name)
    except Exception as e:
        logger.error(f"Image delete failed ({stored_name}): {e}")
        return False

    logger.info(f"Image deleted: {stored_name}")
    return True
