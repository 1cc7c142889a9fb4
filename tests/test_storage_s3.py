"""Unit tests for the S3 storage client.

All tests use a mocked botocore client; no real AWS credentials or network
access required. The mock is injected directly onto client._client, or
patched in at the session level for init() tests.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from conftest import client_error
from s3sample.config import StorageConfig
from s3sample.storage.s3 import S3StorageClient


def _make_client(region="ap-northeast-1"):
    """Create an S3StorageClient with a mock botocore client (skip init)."""
    client = S3StorageClient(region=region)
    client._client = MagicMock()
    return client


class TestInit:
    """Tests for init(), close() and from_config()."""

    def test_init_creates_s3_client_for_region(self):
        with patch("s3sample.storage.s3.get_session") as mock_get_session:
            client = S3StorageClient(region="ap-northeast-1")
            client.init()

            session = mock_get_session.return_value
            session.create_client.assert_called_once_with("s3", region_name="ap-northeast-1")
            session.set_credentials.assert_not_called()
            assert client._client is session.create_client.return_value

    def test_init_with_endpoint_and_path_style(self):
        with patch("s3sample.storage.s3.get_session") as mock_get_session:
            client = S3StorageClient(
                region="us-east-1",
                endpoint_url="http://localhost:9000",
                use_path_style=True,
            )
            client.init()

            kwargs = mock_get_session.return_value.create_client.call_args.kwargs
            assert kwargs["endpoint_url"] == "http://localhost:9000"
            assert kwargs["config"].s3 == {"addressing_style": "path"}

    def test_init_with_explicit_credentials(self):
        with patch("s3sample.storage.s3.get_session") as mock_get_session:
            client = S3StorageClient(access_key_id="AKID", secret_access_key="SECRET")
            client.init()

            mock_get_session.return_value.set_credentials.assert_called_once_with(
                "AKID", "SECRET"
            )

    def test_half_credentials_use_default_chain(self):
        with patch("s3sample.storage.s3.get_session") as mock_get_session:
            client = S3StorageClient(access_key_id="AKID")
            client.init()
            mock_get_session.return_value.set_credentials.assert_not_called()

    def test_close_releases_client(self):
        client = _make_client()
        inner = client._client
        client.close()
        inner.close.assert_called_once()
        assert client._client is None

    def test_close_noop_when_not_initialized(self):
        S3StorageClient().close()

    def test_from_config(self):
        config = StorageConfig(
            region="eu-west-1",
            endpoint_url="http://minio:9000",
            use_path_style=True,
            access_key_id="a",
            secret_access_key="b",
        )
        client = S3StorageClient.from_config(config)
        assert client.region == "eu-west-1"
        assert client.endpoint_url == "http://minio:9000"
        assert client.use_path_style is True
        assert client.access_key_id == "a"
        assert client.secret_access_key == "b"


class TestListBuckets:
    """Tests for list_buckets()."""

    def test_returns_names(self):
        client = _make_client()
        client._client.list_buckets.return_value = {
            "Buckets": [{"Name": "alpha"}, {"Name": "beta"}],
            "Owner": {"ID": "owner"},
        }
        assert client.list_buckets() == ["alpha", "beta"]

    def test_no_buckets(self):
        client = _make_client()
        client._client.list_buckets.return_value = {"Owner": {"ID": "owner"}}
        assert client.list_buckets() == []


class TestGetObject:
    """Tests for get_object()."""

    def test_returns_content_type_and_body(self):
        client = _make_client()
        body = io.BytesIO(b"data")
        client._client.get_object.return_value = {
            "ContentType": "text/plain",
            "Body": body,
        }

        obj = client.get_object("bucket", "key")

        client._client.get_object.assert_called_once_with(Bucket="bucket", Key="key")
        assert obj.content_type == "text/plain"
        assert obj.body is body

    def test_missing_content_type(self):
        client = _make_client()
        client._client.get_object.return_value = {"Body": io.BytesIO(b"")}
        assert client.get_object("b", "k").content_type is None

    def test_client_error_propagates(self):
        client = _make_client()
        client._client.get_object.side_effect = client_error("NoSuchKey", status=404)
        with pytest.raises(ClientError):
            client.get_object("b", "missing")


class TestPutObject:
    """Tests for put_object()."""

    def test_uploads_file_contents(self, tmp_path):
        path = tmp_path / "upload.txt"
        path.write_bytes(b"hello\n")
        client = _make_client()
        seen = {}

        def fake_put(**kwargs):
            seen.update(kwargs, data=kwargs["Body"].read())
            return {"ETag": '"5d41402abc4b2a76b9719d911017c592"'}

        client._client.put_object.side_effect = fake_put

        etag = client.put_object("bucket", "key", path)

        assert etag == "5d41402abc4b2a76b9719d911017c592"
        assert seen["Bucket"] == "bucket"
        assert seen["Key"] == "key"
        assert seen["data"] == b"hello\n"
        assert seen["Body"].closed

    def test_file_closed_on_error(self, tmp_path):
        path = tmp_path / "upload.txt"
        path.write_bytes(b"x")
        client = _make_client()
        handles = []

        def failing_put(**kwargs):
            handles.append(kwargs["Body"])
            raise client_error("AccessDenied")

        client._client.put_object.side_effect = failing_put

        with pytest.raises(ClientError):
            client.put_object("bucket", "key", path)
        assert handles[0].closed


class TestCreateBucket:
    """Tests for create_bucket()."""

    def test_location_constraint_outside_us_east_1(self):
        client = _make_client(region="ap-northeast-1")
        client.create_bucket("ig-s3-test-bucket")
        client._client.create_bucket.assert_called_once_with(
            Bucket="ig-s3-test-bucket",
            CreateBucketConfiguration={"LocationConstraint": "ap-northeast-1"},
        )

    def test_no_location_constraint_in_us_east_1(self):
        client = _make_client(region="us-east-1")
        client.create_bucket("b")
        client._client.create_bucket.assert_called_once_with(Bucket="b")
