"""Map non-2xx HTTP responses to ``StatusError``.

Only the status code and rate-limit headers shape the message; the body
is carried along as raw context text.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping

from figiclient.errors import FigiErrorCode, StatusError

RATE_LIMIT_HEADERS = (
    "ratelimit-policy",
    "ratelimit-limit",
    "ratelimit-remaining",
    "ratelimit-reset",
    "retry-after",
    "x-ratelimit-limit",
    "x-ratelimit-remaining",
    "x-ratelimit-reset",
)

UNAVAILABLE_STATUSES = frozenset({502, 503, 504})

_TEMPLATES: dict[int, tuple[FigiErrorCode, str]] = {
    400: (FigiErrorCode.BAD_REQUEST,
          "Bad request to {url}: Invalid request body or parameters."),
    401: (FigiErrorCode.AUTH_FAILED,
          "Unauthorized access to {url}: API key is missing or invalid."),
    404: (FigiErrorCode.NOT_FOUND,
          "Not found error from {url}: The requested resource could not be found."),
    405: (FigiErrorCode.METHOD_NOT_ALLOWED,
          "Method not allowed for {url}: The requested method is not supported "
          "for this endpoint."),
    406: (FigiErrorCode.NOT_ACCEPTABLE,
          "Not acceptable request to {url}: Unsupported Accept header type."),
    413: (FigiErrorCode.PAYLOAD_TOO_LARGE,
          "Payload too large for {url}: Too many mapping jobs in request "
          "(max 100 with API key, 5 without)."),
    500: (FigiErrorCode.SERVER_ERROR,
          "Internal server error from {url}: OpenFIGI service is experiencing "
          "issues. Retry with exponential backoff."),
}


def rate_limit_info(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return the rate-limit headers present, keyed by lower-case name."""
    if not headers:
        return {}
    lowered = {str(k).lower(): str(v) for k, v in headers.items()}
    return {name: lowered[name] for name in RATE_LIMIT_HEADERS if name in lowered}


def parse_retry_after(info: Mapping[str, str], now: datetime | None = None) -> float | None:
    """Seconds to wait, from ``retry-after`` or the ``*ratelimit-reset`` headers.

    ``retry-after`` may be delta-seconds or an HTTP date; reset headers are
    read as delta-seconds.
    """
    raw = info.get("retry-after")
    if raw is not None:
        seconds = _seconds(raw)
        if seconds is not None:
            return seconds
        try:
            when = parsedate_to_datetime(raw)
        except (TypeError, ValueError):
            when = None
        if when is not None:
            if when.tzinfo is None:
                when = when.replace(tzinfo=timezone.utc)
            now = now or datetime.now(timezone.utc)
            return max(0.0, (when - now).total_seconds())
    for name in ("ratelimit-reset", "x-ratelimit-reset"):
        if name in info:
            seconds = _seconds(info[name])
            if seconds is not None:
                return seconds
    return None


def _seconds(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def _rate_limit_message(info: Mapping[str, str]) -> str:
    if not info:
        return "Rate limit exceeded"
    details = ", ".join(f"{name}: {value}" for name, value in info.items())
    return f"Rate limit exceeded ({details})"


def classify(
    status: int,
    headers: Mapping[str, str] | None,
    body: str | None,
    url: str = "",
) -> StatusError:
    """Build the ``StatusError`` for a non-2xx response.

    Args:
        status: HTTP status code.
        headers: Response headers (any case).
        body: Response text, or ``None`` if it could not be read.
        url: Request URL, embedded in the message.
    """
    text = body or ""
    info = rate_limit_info(headers)

    if status == 429:
        return StatusError(
            f"{_rate_limit_message(info)} for {url}. Please retry later.",
            status=status,
            code=FigiErrorCode.RATE_LIMITED,
            retryable=True,
            body=text,
            url=url,
            retry_after=parse_retry_after(info),
            rate_limit=info,
        )

    if status in UNAVAILABLE_STATUSES:
        return StatusError(
            f"Service unavailable from {url}: OpenFIGI service is temporarily "
            "unavailable. Please retry later.",
            status=status,
            code=FigiErrorCode.UNAVAILABLE,
            retryable=True,
            body=text,
            url=url,
            retry_after=parse_retry_after(info),
            rate_limit=info,
        )

    if status in _TEMPLATES:
        code, template = _TEMPLATES[status]
        return StatusError(
            template.format(url=url),
            status=status,
            code=code,
            retryable=status >= 500,
            body=text,
            url=url,
            rate_limit=info,
        )

    return StatusError(
        f"Unexpected HTTP status {status} from {url}: {text}",
        status=status,
        code=FigiErrorCode.UNEXPECTED_STATUS,
        retryable=status >= 500,
        body=text,
        url=url,
        rate_limit=info,
    )
