"""Shared pytest fixtures for s3sample tests.

The dispatcher only talks to the StorageClient protocol, so most tests
run against FakeStorageClient, which records every call in order and can
be told to raise on a given operation. No network access is needed.
"""

import io
from pathlib import Path

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from s3sample.console import Console
from s3sample.storage.client import StoredObject


def client_error(
    code: str = "AccessDenied",
    message: str = "Access Denied",
    status: int = 403,
    request_id: str = "4442587FB7D0A2F9",
    operation: str = "TestOperation",
) -> ClientError:
    """Create a botocore ClientError shaped like a real S3 error response."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {
                "RequestId": request_id,
                "HTTPStatusCode": status,
                "HTTPHeaders": {"x-amz-request-id": request_id},
            },
        },
        operation,
    )


def endpoint_error(url: str = "https://s3.ap-northeast-1.amazonaws.com/") -> EndpointConnectionError:
    """Create the error botocore raises when S3 cannot be reached."""
    return EndpointConnectionError(endpoint_url=url)


class TrackingBody(io.BytesIO):
    """BytesIO that remembers it was closed after the buffer is gone."""

    was_closed = False

    def close(self) -> None:
        self.was_closed = True
        super().close()


class FakeStorageClient:
    """In-memory StorageClient that records calls.

    Attributes:
        calls: (operation, args) tuples in call order.
        uploads: key -> bytes read from the uploaded file at call time.
        failures: operation name -> exception raised by that operation.
    """

    def __init__(self, buckets=None, body=b"", content_type="text/plain"):
        self.buckets = list(buckets or [])
        self.body = body
        self.content_type = content_type
        self.calls: list[tuple[str, tuple]] = []
        self.uploads: dict[str, bytes] = {}
        self.upload_paths: dict[str, Path] = {}
        self.failures: dict[str, Exception] = {}
        self.last_body: TrackingBody | None = None

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, args))
        if operation in self.failures:
            raise self.failures[operation]

    def list_buckets(self):
        self._record("list_buckets")
        return list(self.buckets)

    def get_object(self, bucket, key):
        self._record("get_object", bucket, key)
        self.last_body = TrackingBody(self.body)
        return StoredObject(content_type=self.content_type, body=self.last_body)

    def put_object(self, bucket, key, path):
        self.upload_paths[key] = Path(path)
        self.uploads[key] = Path(path).read_bytes()
        self._record("put_object", bucket, key, path)
        return "d41d8cd98f00b204e9800998ecf8427e"

    def create_bucket(self, bucket):
        self._record("create_bucket", bucket)

    @property
    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]


@pytest.fixture
def storage() -> FakeStorageClient:
    """A fake storage client with two buckets and a small text object."""
    return FakeStorageClient(
        buckets=["ig-s3-test-bucket", "logs"],
        body=b"first line\nsecond line\n",
    )


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output) -> Console:
    """Console writing into the ``output`` buffer."""
    return Console(output)
