"""Temporary sample file used by the upload walkthrough."""

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_LINES = (
    "abcdefghijklmnopqrstuvwxyz",
    "01234567890112345678901234",
    "!@#$%^&*()-=[]{};':',.<>/?",
    "01234567890112345678901234",
    "abcdefghijklmnopqrstuvwxyz",
)
SAMPLE_CONTENT = "".join(line + "\n" for line in SAMPLE_LINES).encode("ascii")


@contextmanager
def create_sample_file(directory: str | None = None) -> Iterator[Path]:
    """Write the sample payload to a fresh temp file and yield its path.

    The file handle is closed before the path is yielded, including when
    writing fails. The file is removed when the block exits; removal is
    best-effort and only logged on failure.

    Args:
        directory: Directory for the temp file. Defaults to the system
            temp directory.

    Yields:
        Path of a closed file holding exactly SAMPLE_CONTENT.
    """
    fd, name = tempfile.mkstemp(prefix="s3sample-", suffix=".txt", dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(SAMPLE_CONTENT)
        logger.debug("Sample file written: %s (%d bytes)", path, len(SAMPLE_CONTENT))
        yield path
    finally:
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not remove sample file %s: %s", path, exc)
