from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage
import logging

logger = logging.getLogger(__name__)


class MediaStorage(S3Boto3Storage):
    """S3 storage for uploaded product images"""
    location = 'media'
    file_overwrite = False
    default_acl = None
    object_parameters = {'CacheControl': 'max-age=86400'}

    def __init__(self, *args, **kwargs):
        if not settings.AWS_STORAGE_BUCKET_NAME:
            logger.error("AWS_STORAGE_BUCKET_NAME is not set while USE_S3 is enabled")
            raise ValueError("AWS_STORAGE_BUCKET_NAME is not set. Check the .env file.")

        kwargs.setdefault('bucket_name', settings.AWS_STORAGE_BUCKET_NAME)
        super().__init__(*args, **kwargs)
        logger.info(f"MediaStorage initialised: bucket={self.bucket_name}, location={self.location}")

    def _save(self, name, content):
        logger.info(f"Saving file to S3: {name}")
        result = super()._save(name, content)
        logger.info(f"Saved file to S3: {result}")
        return result
