"""Normalization of upstream failures into the error envelope.

Every route reports failures with the same body shape::

    {"message": <str>, "details": <upstream body or local message>}

The status is the upstream HTTP status when the upstream answered, else 500.
"""

from typing import Any, Optional

import httpx

from ..models import ErrorEnvelope

DEFAULT_ERROR_STATUS = 500


class UpstreamFailure(Exception):
    """A failed upstream call.

    Attributes:
        message: Local description of the failure (exception text).
        status: Upstream HTTP status, None when no response was received.
        body: Upstream response body (parsed JSON or raw text), None if absent.
    """

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    @property
    def has_body(self) -> bool:
        return self.body is not None and self.body != ""

    @classmethod
    def from_response(cls, response: httpx.Response, message: str) -> "UpstreamFailure":
        return cls(message=message, status=response.status_code, body=read_body(response))

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UpstreamFailure":
        """Map any exception raised around an upstream call to a failure value."""
        if isinstance(exc, UpstreamFailure):
            return exc
        if isinstance(exc, httpx.HTTPStatusError):
            return cls.from_response(exc.response, str(exc))
        # Transport errors and local errors carry no upstream response
        return cls(message=str(exc) or type(exc).__name__)


def read_body(response: httpx.Response) -> Any:
    """Return the response body as JSON when possible, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def normalize_failure(failure: UpstreamFailure, fallback_message: str) -> tuple[int, ErrorEnvelope]:
    """Build the status code and error envelope for a failure.

    Message precedence: upstream ``message``, upstream ``error``, then
    ``fallback_message``. Falsy upstream values are skipped; others are
    returned unchanged, whatever their JSON type.
    """
    body = failure.body if failure.has_body else None

    message = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")

    envelope = ErrorEnvelope(
        message=message or fallback_message,
        details=body if body is not None else failure.message,
    )
    return failure.status or DEFAULT_ERROR_STATUS, envelope
