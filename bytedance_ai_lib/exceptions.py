"""
Custom exception hierarchy for the ByteDance AI library.

All public exceptions inherit from :class:`ByteDanceAiError`, allowing callers
to catch a single base class for any library failure while still being able
to differentiate specific error conditions when needed.

Remote failures are split into two families:

* :class:`TransientApiError` – the call may succeed when repeated (rate
  limiting, temporary unavailability, dropped connections).  The retry
  template retries these.
* :class:`NonTransientApiError` – repeating the call will not help
  (authentication problems, malformed requests).  These propagate at once.
"""

from typing import Optional


class ByteDanceAiError(Exception):
    """Base exception for all library-specific errors."""

    pass


class ApiError(ByteDanceAiError):
    """
    Raised when the vendor API answers with an error or cannot be reached.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    status_code : Optional[int]
        HTTP status code, ``None`` when no response was received.
    body : Optional[str]
        Raw response body, if any.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def is_retryable(self) -> bool:
        return self.retryable


class TransientApiError(ApiError):
    """Raised for failures that may disappear when the call is repeated."""

    retryable = True


class RateLimitError(TransientApiError):
    """Raised when the server returns HTTP 429 – request rate limit exceeded."""

    pass


class NonTransientApiError(ApiError):
    """Raised for failures that will not disappear when the call is repeated."""

    retryable = False


class AuthenticationError(NonTransientApiError):
    """Raised when the server returns HTTP 401/403 – invalid or missing token."""

    pass


class InvalidArgumentError(ByteDanceAiError, ValueError):
    """Raised when caller input is rejected before any network call."""

    pass


class UnsupportedOperationError(ByteDanceAiError, NotImplementedError):
    """Raised when an operation is not offered by the vendor API."""

    pass
