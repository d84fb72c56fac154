"""OpenFIGI client error types.

Every failure raised by the client is a ``FigiError``. The subclass tells
the caller what to do about it:

* ``FigiValidationError``: the request is malformed; fix it locally, do
  not retry. Never reaches the network.
* ``TransportError``: no HTTP response at all (connection, timeout, URL).
* ``StatusError``: the server answered with a non-2xx status. Rate
  limiting and 5xx responses are ``retryable``.
* ``ApiItemError``: a 2xx response carried ``{"error": ...}`` for one
  item; sibling items in a batch are unaffected.
* ``ResponseFormatError``: a 2xx body that matches no known shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class FigiErrorCode(Enum):
    """Error classification codes."""

    VALIDATION_FAILED = "validation_failed"
    MISSING_FIELD = "missing_field"
    BATCH_SIZE = "batch_size"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    BAD_REQUEST = "bad_request"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NOT_ACCEPTABLE = "not_acceptable"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNEXPECTED_STATUS = "unexpected_status"
    API_ITEM = "api_item"
    NO_MATCH = "no_match"
    RESPONSE_FORMAT = "response_format"


class FigiError(Exception):
    """OpenFIGI client exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether repeating the same call later may succeed.
    """

    def __init__(
        self,
        message: str,
        code: FigiErrorCode = FigiErrorCode.TRANSPORT,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class FigiValidationError(FigiError, ValueError):
    """Local, pre-send failure: filter rule, missing field or batch size."""

    def __init__(
        self,
        message: str,
        code: FigiErrorCode = FigiErrorCode.VALIDATION_FAILED,
        field: str | None = None,
    ) -> None:
        super().__init__(message, code=code, retryable=False)
        self.field = field


class TransportError(FigiError):
    """Network, timeout or URL-construction failure; no HTTP status."""

    def __init__(
        self,
        message: str,
        code: FigiErrorCode = FigiErrorCode.TRANSPORT,
        url: str | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, code=code, retryable=retryable)
        self.url = url


class StatusError(FigiError):
    """HTTP response with a non-2xx status.

    Attributes:
        status: HTTP status code.
        body: Raw response text (best effort, may be empty).
        url: Request URL.
        retry_after: Seconds to wait before retrying, when the server said so.
        rate_limit: Rate-limit headers found on the response.
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: FigiErrorCode = FigiErrorCode.UNEXPECTED_STATUS,
        retryable: bool = False,
        body: str = "",
        url: str | None = None,
        retry_after: float | None = None,
        rate_limit: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=code, retryable=retryable)
        self.status = status
        self.body = body
        self.url = url
        self.retry_after = retry_after
        self.rate_limit = dict(rate_limit or {})


class ApiItemError(FigiError):
    """Error payload (``{"error": ...}``) delivered inside a 2xx response.

    Attributes:
        status: The (successful) HTTP status of the enclosing response.
        index: Position of the item in its batch, or ``None`` for a
            single-object response.
    """

    def __init__(
        self,
        message: str,
        status: int = 200,
        index: int | None = None,
        code: FigiErrorCode = FigiErrorCode.API_ITEM,
    ) -> None:
        super().__init__(message, code=code, retryable=False)
        self.status = status
        self.index = index

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ApiItemError):
            return NotImplemented
        return (
            self.message == other.message
            and self.status == other.status
            and self.index == other.index
            and self.code == other.code
        )

    def __hash__(self) -> int:
        return hash((self.message, self.status, self.index, self.code))


class ResponseFormatError(FigiError):
    """2xx response whose body is not valid JSON of the expected shape."""

    def __init__(self, message: str, status: int = 200, body: str = "") -> None:
        super().__init__(message, code=FigiErrorCode.RESPONSE_FORMAT, retryable=False)
        self.status = status
        self.body = body
