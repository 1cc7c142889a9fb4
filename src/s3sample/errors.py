"""Failure taxonomy for s3sample.

Every storage call fails in one of two ways:

* ``BackendRejected``: the request reached S3 and came back with an error
  response (botocore ``ClientError``). Status, error code, error type and
  request id are known.
* ``TransportFailure``: the request never completed a round trip (botocore
  ``BotoCoreError``: no network, no credentials, a parameter rejected before
  sending, a read timeout). Only a message is available.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from botocore.exceptions import BotoCoreError, ClientError

SERVICE_REJECTED_BANNER = (
    "Caught an AmazonServiceException, which means your request made it "
    "to Amazon S3, but was rejected with an error response for some reason."
)
TRANSPORT_FAILURE_BANNER = (
    "Caught an AmazonClientException, which means the client encountered "
    "a serious internal problem while trying to communicate with S3, "
    "such as not being able to access the network."
)


class ErrorType(str, Enum):
    """Which side of the wire a rejected request is blamed on."""

    CLIENT = "Client"
    SERVICE = "Service"
    UNKNOWN = "Unknown"

    @classmethod
    def from_status(cls, status_code: int | None) -> ErrorType:
        """Map an HTTP status code onto a fault category.

        5xx is a service fault; any other status on an error response
        (4xx, or a 3xx redirect such as PermanentRedirect) is a client fault.
        """
        if status_code is None:
            return cls.UNKNOWN
        if status_code >= 500:
            return cls.SERVICE
        return cls.CLIENT


def _blank(value) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class BackendRejected:
    """S3 processed the request and answered with an error.

    Attributes:
        message: Human-readable error description from the response.
        status_code: HTTP status code of the error response.
        error_code: S3 error code string (e.g. "NoSuchKey", "AccessDenied").
        error_type: Client or service fault.
        request_id: The ``x-amz-request-id`` of the failed request.
    """

    message: str
    status_code: int | None
    error_code: str
    error_type: ErrorType
    request_id: str | None

    def report_lines(self) -> list[str]:
        return [
            SERVICE_REJECTED_BANNER,
            f"Error Message:    {self.message}",
            f"HTTP Status Code: {_blank(self.status_code)}",
            f"AWS Error Code:   {self.error_code}",
            f"Error Type:       {self.error_type.value}",
            f"Request ID:       {_blank(self.request_id)}",
        ]


@dataclass(frozen=True)
class TransportFailure:
    """The request did not complete a round trip to S3."""

    message: str

    def report_lines(self) -> list[str]:
        return [
            TRANSPORT_FAILURE_BANNER,
            f"Error Message: {self.message}",
        ]


StorageFailure = BackendRejected | TransportFailure

# Exceptions converted by classify_error(); anything else propagates.
CLASSIFIED_EXCEPTIONS = (ClientError, BotoCoreError)


def _backend_rejected(exc: ClientError) -> BackendRejected:
    response = exc.response or {}
    error = response.get("Error", {})
    metadata = response.get("ResponseMetadata", {})

    status_code = metadata.get("HTTPStatusCode")
    if status_code is None and str(error.get("Code", "")).isdigit():
        # HEAD-style errors carry only the status as their code.
        status_code = int(error["Code"])

    request_id = metadata.get("RequestId")
    if request_id is None:
        request_id = metadata.get("HTTPHeaders", {}).get("x-amz-request-id")

    return BackendRejected(
        message=error.get("Message") or str(exc),
        status_code=status_code,
        error_code=error.get("Code", ""),
        error_type=ErrorType.from_status(status_code),
        request_id=request_id,
    )


def classify_error(exc: Exception) -> StorageFailure:
    """Convert a botocore exception into one of the two failure categories.

    Args:
        exc: A ``ClientError`` or ``BotoCoreError`` raised by a storage call.

    Returns:
        ``BackendRejected`` for error responses, ``TransportFailure`` for
        everything that never got one.

    Raises:
        TypeError: If ``exc`` is not a botocore exception.
    """
    if isinstance(exc, ClientError):
        return _backend_rejected(exc)
    if isinstance(exc, BotoCoreError):
        return TransportFailure(message=str(exc))
    raise TypeError(f"Not a storage failure: {type(exc).__name__}")
