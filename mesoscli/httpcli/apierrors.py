from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Any, BinaryIO, Optional

import requests

from . import config
from .codes import (
    CODE_UNSUBSCRIBED,
    ERROR_TABLE,
    MAX_SIZE_DETAILS,
    Code,
    ErrorKind,
    kind_for,
)
from .config_validation import validate_runtime_config
from .logging_utils import _httpcli_event

TEMPORARY_KINDS = frozenset(
    {
        ErrorKind.RATE_LIMIT_EXCEEDED,
        ErrorKind.MESOS_UNAVAILABLE,
        # NOT_FOUND is deliberately absent: mesos answers 404 during a startup
        # race before its routes exist, but also for invalid endpoints, and the
        # two cannot be told apart (MESOS-7697).
    }
)

# Codes that each mean the event subscription stream between the client and
# mesos has been severed. Only mutate through add_subscription_loss_code().
_SUBSCRIPTION_LOSS_LOCK = Lock()
_SUBSCRIPTION_LOSS_CODES: set[Code] = {CODE_UNSUBSCRIBED}


@dataclass(frozen=True)
class RawResponse:
    """Minimal response shape for transports other than ``requests``."""

    status_code: int
    body: Optional[BinaryIO] = None


class APIError(Exception):
    """An HTTP v1 API error reported by mesos.

    ``message`` is the canned message for ``code`` (empty for unrecognised
    codes), followed by ``": <details>"`` when the response carried details.
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self._code = Code(code)
        self._kind = kind_for(code)
        self._message = message

    @property
    def code(self) -> Code:
        return self._code

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"APIError(code={int(self._code)}, kind={self._kind.value}, message={self._message!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (int(self._code), self._message))

    def temporary(self) -> bool:
        """Return ``True`` if the condition should clear without intervention."""

        return self._kind in TEMPORARY_KINDS

    def subscription_loss(self) -> bool:
        """Return ``True`` if the event subscription stream has been severed."""

        with _SUBSCRIPTION_LOSS_LOCK:
            return self._code in _SUBSCRIPTION_LOSS_CODES


def new_error(code: int, details: str = "") -> Optional[APIError]:
    """Build an ``APIError`` for ``code``, or return ``None`` for non-error codes."""

    code = Code(code)
    if not code.is_error():
        return None
    message = ERROR_TABLE.get(code, "")
    if details:
        message = message + ": " + details
    return APIError(code, message)


def matches(code: int, err: Optional[BaseException]) -> bool:
    """Return ``True`` if ``err`` is an ``APIError`` carrying exactly ``code``.

    ``None`` matches every non-error code: no error was expected and none
    occurred.
    """

    if err is None:
        return not Code(code).is_error()
    return isinstance(err, APIError) and err.code == code


def _status_of(response: Any) -> Optional[int]:
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status", None)
    if status is None:
        return None
    try:
        return int(status)
    except (TypeError, ValueError):
        return None


def _read_details(response: Any) -> str:
    """Read at most ``MAX_SIZE_DETAILS`` bytes of the body, best effort."""

    buf = bytearray()
    try:
        if isinstance(response, requests.Response):
            for chunk in response.iter_content(chunk_size=MAX_SIZE_DETAILS):
                if not chunk:
                    continue
                buf.extend(chunk[: MAX_SIZE_DETAILS - len(buf)])
                if len(buf) >= MAX_SIZE_DETAILS:
                    break
        else:
            body = getattr(response, "body", None)
            while body is not None and len(buf) < MAX_SIZE_DETAILS:
                chunk = body.read(MAX_SIZE_DETAILS - len(buf))
                if not chunk:
                    break
                if isinstance(chunk, str):
                    chunk = chunk.encode("utf-8")
                buf.extend(chunk[: MAX_SIZE_DETAILS - len(buf)])
    except Exception as exc:  # noqa: BLE001
        # Details are diagnostic only; the status code already decides the error.
        _httpcli_event(
            "error",
            phase="details_read",
            http_status=_status_of(response),
            bytes_read=len(buf),
            error_repr=repr(exc),
        )
    return buf.decode("utf-8", errors="replace")


def _release(response: Any) -> None:
    try:
        if isinstance(response, requests.Response):
            response.close()
            return
        body = getattr(response, "body", None)
        if body is not None:
            body.close()
    except Exception as exc:  # noqa: BLE001
        _httpcli_event(
            "error",
            phase="body_release",
            http_status=_status_of(response),
            error_repr=repr(exc),
        )


def from_response(response: Any) -> Optional[APIError]:
    """Return an ``APIError`` for a response whose status indicates an error.

    Up to ``MAX_SIZE_DETAILS`` bytes of the body are captured as details.
    Returns ``None`` for ``None`` responses and non-error status codes. The
    body is released on every path, including success.
    """

    if response is None:
        return None

    try:
        status = _status_of(response)
        if status is None:
            return None
        code = Code(status)
        if not code.is_error():
            return None

        details = _read_details(response)
        err = new_error(code, details)
        _httpcli_event(
            "classify",
            http_status=status,
            kind=err.kind.value if err is not None else None,
            details_bytes=len(details.encode("utf-8")),
        )
        return err
    finally:
        _release(response)


def raise_for_api_error(response: Any) -> None:
    """Raise the classified ``APIError`` for ``response``, if it has one."""

    err = from_response(response)
    if err is not None:
        raise err


def add_subscription_loss_code(code: int) -> None:
    """Register another code that indicates the event subscription was lost."""

    code = Code(code)
    if not code.is_error():
        raise ValueError(f"{int(code)} is not an error status code")
    with _SUBSCRIPTION_LOSS_LOCK:
        already = code in _SUBSCRIPTION_LOSS_CODES
        _SUBSCRIPTION_LOSS_CODES.add(code)
    if not already:
        _httpcli_event(
            "state",
            phase="subscription_loss",
            kind="code_registered",
            http_status=int(code),
        )


def subscription_loss_codes() -> frozenset[Code]:
    with _SUBSCRIPTION_LOSS_LOCK:
        return frozenset(_SUBSCRIPTION_LOSS_CODES)


def register_configured_subscription_loss_codes() -> frozenset[Code]:
    """Validate configuration and register its extra subscription-loss codes."""

    validate_runtime_config()
    for code in config.SUBSCRIPTION_LOSS_CODES:
        add_subscription_loss_code(code)
    return subscription_loss_codes()


__all__ = [
    "APIError",
    "RawResponse",
    "TEMPORARY_KINDS",
    "add_subscription_loss_code",
    "from_response",
    "matches",
    "new_error",
    "raise_for_api_error",
    "register_configured_subscription_loss_codes",
    "subscription_loss_codes",
]
