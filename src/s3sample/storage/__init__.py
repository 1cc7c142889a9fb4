"""Object storage clients for s3sample."""

from s3sample.storage.client import StorageClient, StoredObject
from s3sample.storage.s3 import S3StorageClient

__all__ = ["S3StorageClient", "StorageClient", "StoredObject"]
