"""
modrinthpy.exceptions
---------------------

Error types raised by modrinthpy.

Every error derives from ModrinthError and may carry the HTTP status (`code`)
and the raw requests.Response (`response`) that produced it. The search
cursor and the fail-soft client helpers catch ModrinthError and turn it into
an empty result, so these mostly surface from Transport.request(), model
decoding and downloads.
"""

from typing import Any, Dict, Optional, Tuple, Type


class ModrinthError(Exception):
    """
    Root of the modrinthpy error hierarchy.

    Attributes
    ----------
    message: str
        Description of the failure.
    code: Optional[int]
        HTTP status of the failing response, when there was one.
    response: Optional[Any]
        The requests.Response (or decoded payload) involved, kept for inspection.
    """

    def __init__(self, message: str, code: Optional[int] = None, response: Optional[Any] = None):
        self.message = message
        self.code = code
        self.response = response
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (HTTP {self.code})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class InvalidArgumentError(ModrinthError, ValueError):
    """Bad caller input: unknown facet type, empty facet value, unknown sort index, missing POST body."""


class InvalidFormatError(ModrinthError):
    """An API payload lacks a required field or holds a value that cannot be decoded."""


class ChecksumMismatchError(ModrinthError):
    """A downloaded file does not hash to the digest declared by the API."""


class DownloadError(ModrinthError):
    """A version file could not be fetched or written to disk."""


class BadRequestError(ModrinthError):
    """400: the API rejected the query parameters or body."""


class UnauthorizedError(ModrinthError):
    """401: the token is missing, expired or lacks a scope."""


class ForbiddenError(ModrinthError):
    """403: the token is valid but may not access this resource."""


class NotFoundError(ModrinthError):
    """404: no project, version, user or team with that id/slug."""


class RateLimitError(ModrinthError):
    """429: the per-minute request allowance is used up; see Transport.rate_limit."""


class ServerError(ModrinthError):
    """5xx: the API failed while handling the request."""


class NetworkError(ModrinthError):
    """The request never got a response (DNS, refused connection, timeout)."""


class InvalidResponseError(ModrinthError):
    """A successful response whose body is not valid JSON."""


_STATUS_ERRORS: Dict[int, Tuple[Type[ModrinthError], str]] = {
    400: (BadRequestError, "Bad Request"),
    401: (UnauthorizedError, "Unauthorized"),
    403: (ForbiddenError, "Forbidden"),
    404: (NotFoundError, "Not Found"),
    429: (RateLimitError, "Too Many Requests"),
}


def map_http_status(status_code: int, message: str = "", response: Optional[Any] = None) -> ModrinthError:
    """
    Build the error matching an HTTP failure status.

    Unlisted 4xx codes produce a plain ModrinthError; any 5xx produces ServerError.
    The error is returned, not raised.
    """
    if status_code in _STATUS_ERRORS:
        error_cls, reason = _STATUS_ERRORS[status_code]
    elif 500 <= status_code < 600:
        error_cls, reason = ServerError, "Server Error"
    else:
        error_cls, reason = ModrinthError, f"HTTP {status_code}"
    return error_cls(message or reason, status_code, response)


__all__ = [
    "ModrinthError",
    "InvalidArgumentError",
    "InvalidFormatError",
    "ChecksumMismatchError",
    "DownloadError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
    "InvalidResponseError",
    "map_http_status",
]
