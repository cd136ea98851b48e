"""
Capture failures and their classification into API error codes.

The browser reports most failures only as text (e.g. "net::ERR_NAME_NOT_RESOLVED
at https://..."), so classification falls back to substring matching when the
capture layer could not tag the failure with a kind.
"""

from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
    """Failure categories known at the browser boundary."""
    TIMEOUT = "timeout"
    NAME_NOT_RESOLVED = "name_not_resolved"
    CONNECTION_REFUSED = "connection_refused"
    OTHER = "other"


class CaptureFailure(Exception):
    """Raised when a capture does not produce an image."""

    def __init__(self, raw_message: str, kind: FailureKind | None = None):
        self.raw_message = raw_message
        self.kind = kind
        super().__init__(raw_message)


@dataclass(frozen=True)
class ClassifiedError:
    """A capture failure mapped to a stable error code and HTTP status."""
    code: str
    http_status: int
    message: str
    details: str

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


FAILURE_MESSAGE = "Failed to capture screenshot"

_CODES_BY_KIND = {
    FailureKind.TIMEOUT: ("TIMEOUT", 504),
    FailureKind.NAME_NOT_RESOLVED: ("DOMAIN_NOT_FOUND", 400),
    FailureKind.CONNECTION_REFUSED: ("CONNECTION_REFUSED", 400),
    FailureKind.OTHER: ("CAPTURE_FAILED", 500),
}

# Ordered: first match wins
_TEXT_PATTERNS = (
    ("timeout", FailureKind.TIMEOUT),
    ("net::err_name_not_resolved", FailureKind.NAME_NOT_RESOLVED),
    ("net::err_connection_refused", FailureKind.CONNECTION_REFUSED),
)


def infer_failure_kind(message: str) -> FailureKind:
    """Best-effort failure kind from error text."""
    text = (message or "").lower()
    for pattern, kind in _TEXT_PATTERNS:
        if pattern in text:
            return kind
    return FailureKind.OTHER


def classify_failure(failure: CaptureFailure) -> ClassifiedError:
    """
    Map a capture failure to an API error.

    A kind set by the capture layer wins; otherwise the raw message text is
    matched. Treat the result as approximate.
    """
    kind = failure.kind or infer_failure_kind(failure.raw_message)
    code, status = _CODES_BY_KIND[kind]
    return ClassifiedError(
        code=code,
        http_status=status,
        message=FAILURE_MESSAGE,
        details=failure.raw_message,
    )
