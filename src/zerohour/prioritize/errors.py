"""Remote ranking error classification.

Every failure of the remote ranking path is reduced to a
:class:`RemoteErrorKind` so it can be reported with a distinct message.
None of these errors ever reaches the caller of the prioritizer.
"""

from __future__ import annotations

import asyncio
import enum

import openai

from zerohour.config import ZeroHourConfig


class RemoteErrorKind(enum.Enum):
    """Category of a remote ranking failure."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    MALFORMED = "malformed"
    TRANSPORT = "transport"


class MalformedResponseError(ValueError):
    """The remote service answered, but not with the expected JSON shape."""


_STATUS_KINDS = {
    401: RemoteErrorKind.AUTH,
    403: RemoteErrorKind.AUTH,
    404: RemoteErrorKind.NOT_FOUND,
    429: RemoteErrorKind.RATE_LIMIT,
}


def classify_remote_error(error: BaseException) -> RemoteErrorKind:
    """Map an exception raised during a remote ranking call to its kind."""
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return RemoteErrorKind.AUTH
    if isinstance(error, openai.RateLimitError):
        return RemoteErrorKind.RATE_LIMIT
    if isinstance(error, openai.NotFoundError):
        return RemoteErrorKind.NOT_FOUND
    if isinstance(error, (openai.APITimeoutError, asyncio.TimeoutError)):
        return RemoteErrorKind.TIMEOUT

    status_code = getattr(error, "status_code", None)
    if status_code in _STATUS_KINDS:
        return _STATUS_KINDS[status_code]

    # JSONDecodeError is a ValueError subclass
    if isinstance(error, ValueError):
        return RemoteErrorKind.MALFORMED
    return RemoteErrorKind.TRANSPORT


def describe_remote_error(
    kind: RemoteErrorKind,
    error: BaseException,
    config: ZeroHourConfig,
) -> str:
    """Human-readable diagnostic for a classified remote failure."""
    if kind == RemoteErrorKind.AUTH:
        return "Groq API key invalid. Check GROQ_API_KEY or api_key in config.yaml."
    if kind == RemoteErrorKind.RATE_LIMIT:
        return "Groq API quota exceeded (429). Falling back to local analysis."
    if kind == RemoteErrorKind.NOT_FOUND:
        return f"Groq model not found ({config.model}) at {config.base_url}."
    if kind == RemoteErrorKind.TIMEOUT:
        return f"Groq request timed out after {config.batch_timeout:g}s."
    if kind == RemoteErrorKind.MALFORMED:
        return f"Groq returned an unusable response: {error}"
    return f"AI analysis failed: {error}"
