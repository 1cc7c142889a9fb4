"""Mode dispatch for the S3 walkthrough.

A run performs exactly one of three operations, picked by a single
selector string:

    "1"       list buckets, then download and print one object
    "2"       upload a generated sample file under a fresh key
    other     create the configured bucket

Storage failures are caught around the whole operation and returned as
values, never raised. There is no retry and no fallback to another mode.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path

from s3sample.console import Console, display_text_stream
from s3sample.errors import (
    CLASSIFIED_EXCEPTIONS,
    BackendRejected,
    TransportFailure,
    classify_error,
)
from s3sample.sample_file import create_sample_file
from s3sample.storage.client import StorageClient

logger = logging.getLogger(__name__)

MODE_DOWNLOAD = "1"
MODE_UPLOAD = "2"
DEFAULT_SELECTOR = MODE_DOWNLOAD

DEFAULT_BUCKET = "ig-s3-test-bucket"
DEFAULT_DOWNLOAD_KEY = "MyObjectKey2"
UPLOAD_KEY_PREFIX = "uploadFile"

PATH_DOWNLOAD = "download"
PATH_UPLOAD = "upload"
PATH_CREATE_BUCKET = "create-bucket"

SampleFileFactory = Callable[[], AbstractContextManager[Path]]


@dataclass(frozen=True)
class Completed:
    """The selected operation ran to the end.

    Attributes:
        path: Which operation ran (download, upload or create-bucket).
        bucket: Bucket the operation targeted.
        key: Object key involved, or None for create-bucket.
    """

    path: str
    bucket: str
    key: str | None = None


DispatchResult = Completed | BackendRejected | TransportFailure


def resolve_selector(argv: Sequence[str]) -> str:
    """Pick the mode selector from the command-line arguments.

    Only a single argument is honoured; with none (or several) the
    download mode is used.
    """
    if len(argv) == 1:
        return argv[0]
    return DEFAULT_SELECTOR


def select_path(selector: str) -> str:
    """Map a selector onto the operation it runs."""
    if selector == MODE_DOWNLOAD:
        return PATH_DOWNLOAD
    if selector == MODE_UPLOAD:
        return PATH_UPLOAD
    return PATH_CREATE_BUCKET


def new_upload_key() -> str:
    """Return a fresh ``uploadFile<uuid4>`` object key."""
    return UPLOAD_KEY_PREFIX + str(uuid.uuid4())


def _download(client: StorageClient, console: Console, bucket: str, key: str) -> Completed:
    console.write_line("Listing buckets")
    for name in client.list_buckets():
        console.write_line(" - " + name)
    console.write_line()

    console.write_line("Downloading an object")
    obj = client.get_object(bucket, key)
    console.write_line(f"Content-Type: {obj.content_type}")
    lines = display_text_stream(obj.body, console)
    logger.info("Downloaded %s/%s (%d lines)", bucket, key, lines)
    return Completed(path=PATH_DOWNLOAD, bucket=bucket, key=key)


def _upload(
    client: StorageClient,
    console: Console,
    bucket: str,
    sample_file: SampleFileFactory,
    key_factory: Callable[[], str],
) -> Completed:
    console.write_line("Uploading a new object to S3 from a file")
    console.write_line()
    key = key_factory()
    with sample_file() as path:
        etag = client.put_object(bucket, key, path)
    logger.info("Uploaded %s/%s etag=%s", bucket, key, etag)
    return Completed(path=PATH_UPLOAD, bucket=bucket, key=key)


def _create_bucket(client: StorageClient, console: Console, bucket: str) -> Completed:
    console.write_line(f"Creating bucket {bucket}")
    console.write_line()
    client.create_bucket(bucket)
    logger.info("Created bucket %s", bucket)
    return Completed(path=PATH_CREATE_BUCKET, bucket=bucket)


def dispatch(
    selector: str,
    client: StorageClient,
    console: Console,
    *,
    bucket: str = DEFAULT_BUCKET,
    download_key: str = DEFAULT_DOWNLOAD_KEY,
    sample_file: SampleFileFactory = create_sample_file,
    key_factory: Callable[[], str] = new_upload_key,
) -> DispatchResult:
    """Run the operation chosen by ``selector`` against ``client``.

    Args:
        selector: Mode selector; see select_path().
        client: Storage client the operation is issued against.
        console: Transcript output.
        bucket: Bucket every operation targets.
        download_key: Object fetched by the download path.
        sample_file: Context manager factory yielding the file to upload.
        key_factory: Produces the key for the upload path.

    Returns:
        ``Completed`` on success, otherwise the classified failure.
        Storage errors never propagate; local I/O errors do.
    """
    path = select_path(selector)
    logger.debug("Selector %r -> %s", selector, path)

    try:
        if path == PATH_DOWNLOAD:
            return _download(client, console, bucket, download_key)
        if path == PATH_UPLOAD:
            return _upload(client, console, bucket, sample_file, key_factory)
        return _create_bucket(client, console, bucket)
    except CLASSIFIED_EXCEPTIONS as exc:
        failure = classify_error(exc)
        if isinstance(failure, BackendRejected):
            logger.error(
                "%s rejected by S3: %s %s",
                path,
                failure.status_code,
                failure.error_code,
                extra={
                    "operation": path,
                    "bucket": bucket,
                    "status": failure.status_code,
                    "request_id": failure.request_id,
                },
            )
        else:
            logger.error(
                "%s failed before reaching S3: %s",
                path,
                failure.message,
                extra={"operation": path, "bucket": bucket},
            )
        return failure


def report(result: DispatchResult, console: Console) -> None:
    """Print the diagnostic block for a failed dispatch.

    Completed results print nothing.
    """
    if isinstance(result, Completed):
        return
    console.write_lines(result.report_lines())
