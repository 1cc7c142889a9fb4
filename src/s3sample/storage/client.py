"""Storage client protocol for s3sample."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol


@dataclass
class StoredObject:
    """A downloaded object.

    Attributes:
        content_type: The object's Content-Type, if S3 reported one.
        body: Readable binary stream over the object bytes. The caller
            closes it once consumed.
    """

    content_type: str | None
    body: Any


class StorageClient(Protocol):
    """Protocol defining the operations the walkthrough drives.

    Implementations raise botocore ``ClientError`` when S3 answers with an
    error response and ``BotoCoreError`` when no response was received.
    """

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets owned by the caller."""
        ...

    def get_object(self, bucket: str, key: str) -> StoredObject:
        """Fetch an object.

        Args:
            bucket: The bucket name.
            key: The object key.

        Returns:
            The object's content type and an open body stream.
        """
        ...

    def put_object(self, bucket: str, key: str, path: Path) -> str:
        """Upload a local file as an object.

        Args:
            bucket: The bucket name.
            key: The object key.
            path: Local file whose bytes become the object body.

        Returns:
            The ETag of the stored object, quotes stripped.
        """
        ...

    def create_bucket(self, bucket: str) -> None:
        """Create a bucket in the client's region."""
        ...
