from __future__ import annotations

"""Mesos HTTP v1 API status codes and their canned error messages.

The message strings are matched verbatim by callers, so they must stay
stable. Any status code >= 300 is an error; the nine well-known codes below
get a canned message, everything else classifies as ``UNRECOGNIZED`` with an
empty base message.
"""

from enum import Enum
from http import HTTPStatus
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from .apierrors import APIError

# Limits the length of the details message read from a response body.
MAX_SIZE_DETAILS = 4 * 1024

MSG_NOT_LEADER = "call sent to a non-leading master"
MSG_AUTH = "call not authenticated"
MSG_UNSUBSCRIBED = "no subscription established"
MSG_VERSION = "incompatible API version"
MSG_MALFORMED = "malformed request"
MSG_MEDIA_TYPE = "unsupported media type"
# Temporary; should clear on its own.
MSG_RATE_LIMIT = "rate limited"
# Master or agent is recovering, or doesn't yet know it is the leader. Temporary.
MSG_UNAVAILABLE = "mesos server unavailable"
# libprocess may not have set up its http routes yet.
MSG_NOT_FOUND = "mesos http endpoint not found"


class Code(int):
    """An HTTP response status code as reported by the Mesos v1 API."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Code({int(self)})"

    def is_error(self) -> bool:
        """Return ``True`` for every code that is not informational or successful."""

        return self >= 300

    def error(self, details: str = "") -> Optional["APIError"]:
        """Build the classified error for this code, or ``None`` for non-errors."""

        from .apierrors import new_error

        return new_error(self, details)

    def matches(self, err: Optional[BaseException]) -> bool:
        """Return ``True`` if ``err`` is an API error carrying exactly this code.

        A ``None`` error matches any non-error code.
        """

        from .apierrors import matches

        return matches(self, err)


CODE_NOT_LEADER = Code(HTTPStatus.TEMPORARY_REDIRECT)
CODE_NOT_AUTHENTICATED = Code(HTTPStatus.UNAUTHORIZED)
CODE_UNSUBSCRIBED = Code(HTTPStatus.FORBIDDEN)
CODE_INCOMPATIBLE_VERSION = Code(HTTPStatus.CONFLICT)
CODE_MALFORMED_REQUEST = Code(HTTPStatus.BAD_REQUEST)
CODE_UNSUPPORTED_MEDIA_TYPE = Code(HTTPStatus.NOT_ACCEPTABLE)
CODE_RATE_LIMIT_EXCEEDED = Code(HTTPStatus.TOO_MANY_REQUESTS)
CODE_MESOS_UNAVAILABLE = Code(HTTPStatus.SERVICE_UNAVAILABLE)
CODE_NOT_FOUND = Code(HTTPStatus.NOT_FOUND)


class ErrorKind(Enum):
    NOT_LEADER = "not_leader"
    NOT_AUTHENTICATED = "not_authenticated"
    UNSUBSCRIBED = "unsubscribed"
    INCOMPATIBLE_VERSION = "incompatible_version"
    MALFORMED_REQUEST = "malformed_request"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    MESOS_UNAVAILABLE = "mesos_unavailable"
    NOT_FOUND = "not_found"
    UNRECOGNIZED = "unrecognized"


_KINDS: Mapping[int, ErrorKind] = MappingProxyType(
    {
        CODE_NOT_LEADER: ErrorKind.NOT_LEADER,
        CODE_NOT_AUTHENTICATED: ErrorKind.NOT_AUTHENTICATED,
        CODE_UNSUBSCRIBED: ErrorKind.UNSUBSCRIBED,
        CODE_INCOMPATIBLE_VERSION: ErrorKind.INCOMPATIBLE_VERSION,
        CODE_MALFORMED_REQUEST: ErrorKind.MALFORMED_REQUEST,
        CODE_UNSUPPORTED_MEDIA_TYPE: ErrorKind.UNSUPPORTED_MEDIA_TYPE,
        CODE_RATE_LIMIT_EXCEEDED: ErrorKind.RATE_LIMIT_EXCEEDED,
        CODE_MESOS_UNAVAILABLE: ErrorKind.MESOS_UNAVAILABLE,
        CODE_NOT_FOUND: ErrorKind.NOT_FOUND,
    }
)

# Maps HTTP response codes to their Mesos v1 API error messages.
ERROR_TABLE: Mapping[int, str] = MappingProxyType(
    {
        CODE_NOT_LEADER: MSG_NOT_LEADER,
        CODE_MALFORMED_REQUEST: MSG_MALFORMED,
        CODE_INCOMPATIBLE_VERSION: MSG_VERSION,
        CODE_UNSUBSCRIBED: MSG_UNSUBSCRIBED,
        CODE_NOT_AUTHENTICATED: MSG_AUTH,
        CODE_UNSUPPORTED_MEDIA_TYPE: MSG_MEDIA_TYPE,
        CODE_NOT_FOUND: MSG_NOT_FOUND,
        CODE_MESOS_UNAVAILABLE: MSG_UNAVAILABLE,
        CODE_RATE_LIMIT_EXCEEDED: MSG_RATE_LIMIT,
    }
)


def is_error(code: int) -> bool:
    return Code(code).is_error()


def kind_for(code: int) -> ErrorKind:
    """Return the error kind tag for ``code``; unknown codes are ``UNRECOGNIZED``."""

    return _KINDS.get(int(code), ErrorKind.UNRECOGNIZED)


__all__ = [
    "CODE_INCOMPATIBLE_VERSION",
    "CODE_MALFORMED_REQUEST",
    "CODE_MESOS_UNAVAILABLE",
    "CODE_NOT_AUTHENTICATED",
    "CODE_NOT_FOUND",
    "CODE_NOT_LEADER",
    "CODE_RATE_LIMIT_EXCEEDED",
    "CODE_UNSUBSCRIBED",
    "CODE_UNSUPPORTED_MEDIA_TYPE",
    "Code",
    "ERROR_TABLE",
    "ErrorKind",
    "MAX_SIZE_DETAILS",
    "is_error",
    "kind_for",
]
