"""Amazon S3 storage client for s3sample.

Thin synchronous wrapper over a botocore S3 client. Errors are not
translated here: ``ClientError`` and ``BotoCoreError`` reach the
dispatcher untouched so it can classify them.

Credentials are resolved via the standard AWS credential chain
(env vars, ~/.aws/credentials, IAM role, etc.) unless explicit keys
are configured.
"""

import logging
from pathlib import Path

from botocore.config import Config as BotoConfig
from botocore.session import get_session

from s3sample.config import StorageConfig
from s3sample.storage.client import StoredObject

logger = logging.getLogger(__name__)

# Region where CreateBucket must not carry a LocationConstraint.
_DEFAULT_REGION = "us-east-1"


class S3StorageClient:
    """StorageClient backed by a real S3 (or S3-compatible) endpoint.

    Attributes:
        region: The AWS region requests are signed for.
        endpoint_url: Optional endpoint override for S3-compatible servers.
        use_path_style: Force path-style addressing.
    """

    def __init__(
        self,
        region: str = "ap-northeast-1",
        endpoint_url: str = "",
        use_path_style: bool = False,
        access_key_id: str = "",
        secret_access_key: str = "",
    ) -> None:
        self.region = region
        self.endpoint_url = endpoint_url
        self.use_path_style = use_path_style
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self._client = None

    @classmethod
    def from_config(cls, config: StorageConfig) -> "S3StorageClient":
        """Build a client from the storage section of the configuration."""
        return cls(
            region=config.region,
            endpoint_url=config.endpoint_url,
            use_path_style=config.use_path_style,
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
        )

    def init(self) -> None:
        """Create the botocore S3 client.

        No request is sent; credentials are resolved lazily on first use.
        """
        client_kwargs: dict = {"region_name": self.region}
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
        if self.use_path_style:
            client_kwargs["config"] = BotoConfig(s3={"addressing_style": "path"})

        session = get_session()
        if self.access_key_id and self.secret_access_key:
            session.set_credentials(self.access_key_id, self.secret_access_key)
        self._client = session.create_client("s3", **client_kwargs)

        logger.info(
            "S3 client initialized: region=%s endpoint=%s",
            self.region,
            self.endpoint_url or "default",
        )

    def close(self) -> None:
        """Close the botocore client's connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def list_buckets(self) -> list[str]:
        resp = self._client.list_buckets()
        return [bucket["Name"] for bucket in resp.get("Buckets", [])]

    def get_object(self, bucket: str, key: str) -> StoredObject:
        resp = self._client.get_object(Bucket=bucket, Key=key)
        return StoredObject(content_type=resp.get("ContentType"), body=resp["Body"])

    def put_object(self, bucket: str, key: str, path: Path) -> str:
        """Upload ``path`` under ``bucket/key``.

        The file is opened in binary mode for the duration of the request
        only.
        """
        with open(path, "rb") as fh:
            resp = self._client.put_object(Bucket=bucket, Key=key, Body=fh)
        etag = resp.get("ETag", "")
        return etag.strip('"')

    def create_bucket(self, bucket: str) -> None:
        kwargs: dict = {"Bucket": bucket}
        if self.region and self.region != _DEFAULT_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        self._client.create_bucket(**kwargs)
