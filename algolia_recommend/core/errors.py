"""Error taxonomy for the recommendation client.

Every failure surfaced by ``Dispatcher.send`` is a ``RecommendError``
carrying ``status_code`` (0 for transport-level failures), an optional
human-readable ``message`` and the raw response ``body``.
"""

from __future__ import annotations

from pydantic import BaseModel


class RecommendError(Exception):
    """Base exception for all recommendation client errors."""

    def __init__(self, text: str, status_code: int = 0, message: str | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(text)


class TransportError(RecommendError):
    """Raised when a host could not be reached or the exchange broke down.

    ``retryable`` records whether the failure moved the dispatcher on to
    the next host.
    """

    def __init__(self, host: str, detail: str, retryable: bool = True) -> None:
        self.host = host
        self.detail = detail
        self.retryable = retryable
        super().__init__(f"Transport error for {host}: {detail}", message=detail)


class ApiError(RecommendError):
    """Raised for a non-2xx response from a reachable host."""

    def __init__(self, status_code: int, message: str | None = None, body: str = "") -> None:
        super().__init__(
            f"Algolia API error (status {status_code}): {message!r}",
            status_code=status_code,
            message=message,
            body=body,
        )

    @property
    def retryable(self) -> bool:
        return self.status_code == 429 or 500 <= self.status_code < 600


class DecodeError(RecommendError):
    """Raised when a 2xx body cannot be parsed into the requested shape."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        self.reason = reason
        super().__init__(
            f"Decode error (status {status_code}): {reason}",
            status_code=status_code,
            message=reason,
            body=body,
        )


class HostsExhaustedError(RecommendError):
    """Raised when every host failed retryably.

    Mirrors the status, message and body of the last error seen.  With no
    attempt at all the status is 0 and the message ``all hosts failed``.
    """

    def __init__(self, last_error: RecommendError | None, attempts: int) -> None:
        self.last_error = last_error
        self.attempts = attempts
        if last_error is None:
            super().__init__("All hosts failed", message="all hosts failed")
            return
        super().__init__(
            f"All {attempts} host(s) failed; last error: {last_error}",
            status_code=last_error.status_code,
            message=last_error.message,
            body=last_error.body,
        )


class ErrorDetail(BaseModel):
    """Structured view of a failure: ``{code, status_code, message, raw_body}``."""

    code: str
    status_code: int = 0
    message: str | None = None
    raw_body: str = ""

    @classmethod
    def from_exception(cls, exc: Exception) -> "ErrorDetail":
        """Create from an exception, mapping to machine-readable codes.

        Never leaks internal details for unhandled exceptions.
        """
        if isinstance(exc, HostsExhaustedError):
            code = "HOSTS_EXHAUSTED"
        elif isinstance(exc, ApiError):
            code = "API_ERROR"
        elif isinstance(exc, TransportError):
            code = "TRANSPORT_ERROR"
        elif isinstance(exc, DecodeError):
            code = "DECODE_ERROR"
        elif isinstance(exc, RecommendError):
            code = "RECOMMEND_ERROR"
        else:
            return cls(code="INTERNAL_ERROR", message="An internal error occurred")

        return cls(
            code=code,
            status_code=exc.status_code,
            message=exc.message,
            raw_body=exc.body,
        )
