"""Diagnostic logging for the s3sample CLI.

The walkthrough transcript goes to stdout through ``Console``; everything
emitted through ``logging`` goes to a single stderr handler, so redirecting
stdout captures the transcript alone. Storage failures are logged with
``operation``/``bucket``/``key``/``status``/``request_id`` extras, which
both formatters render.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

# Extra record attributes rendered by both formatters, in this order.
EXTRA_FIELDS = ("operation", "bucket", "key", "status", "request_id")

# Third-party loggers that are noisy at INFO (credential lookup, endpoint
# resolution) and only shown when running at DEBUG.
_QUIET_LOGGERS = ("botocore", "urllib3")


def record_extras(record: logging.LogRecord) -> dict[str, object]:
    """Return the EXTRA_FIELDS set on ``record``, skipping missing ones."""
    extras = {}
    for name in EXTRA_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            extras[name] = value
    return extras


class TextFormatter(logging.Formatter):
    """Human-readable lines with extras appended as ``key=value`` pairs.

    Example::

        2026-10-19 10:00:00,000 ERROR s3sample.dispatcher: create-bucket rejected by S3: 409 BucketAlreadyExists [operation=create-bucket bucket=ig-s3-test-bucket status=409 request_id=4442587FB7D0A2F9]
    """

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{name}={value}" for name, value in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Fields: timestamp, level, logger, message, exception, plus extras.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(record_extras(record))
        return json.dumps(entry, default=str)


def build_formatter(fmt: str) -> logging.Formatter:
    """Return the formatter for ``fmt``; anything but 'json' is text."""
    if fmt == "json":
        return JSONFormatter()
    return TextFormatter()


def configure_logging(
    level: str = "INFO", fmt: str = "text", stream: TextIO | None = None
) -> None:
    """Configure root logging for a CLI run.

    Replaces any existing root handlers with one handler on ``stream``.
    botocore and urllib3 are held at WARNING unless ``level`` is DEBUG.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        fmt: 'text' for human-readable lines, 'json' for structured.
        stream: Destination. Defaults to stderr.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(build_formatter(fmt))
    root.addHandler(handler)

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
