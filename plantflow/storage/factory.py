from plantflow.storage.interface import KeyValueStore
from plantflow.storage.filesystem import FilesystemKeyValueStore
from plantflow.config import settings


def get_storage() -> KeyValueStore:
    """
    Factory function to create the appropriate side-channel implementation
    based on environment variables.

    Returns:
        A storage implementation (S3 or Filesystem)
    """
    # Determine which storage to use
    storage_type = settings.STORAGE_TYPE.lower()

    if storage_type == "s3":
        from plantflow.storage.s3 import S3KeyValueStore

        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when using S3 storage")

        return S3KeyValueStore(
            bucket_name=settings.S3_BUCKET,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION
        )
    else:
        # Use filesystem storage
        return FilesystemKeyValueStore(base_dir=settings.RESULTS_STORAGE_DIR)
