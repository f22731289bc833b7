r"""Error type raised by the Cloud Targets client.

Every failure surfaced by the client is an ``ApiError``. The ``kind``
attribute tells apart the server describing what went wrong (service
error), the server failing without a structured body (general error),
the network layer failing before a status code was observed (transport
error), the server sending unparsable JSON (malformed body), and the
poll loop running out of its time or attempt budget (poll timeout).
"""

from __future__ import annotations

__all__ = ["ApiError", "ErrorKind"]

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Discriminant of ``ApiError``.

    Attributes:
        SERVICE: The server returned a JSON error body.
        GENERAL: The server returned a non-JSON error body.
        TRANSPORT: The request never produced a status code.
        MALFORMED_BODY: A body announced as JSON could not be parsed.
        POLL_TIMEOUT: The poll loop exhausted its configured budget.
    """

    SERVICE = "service"
    GENERAL = "general"
    TRANSPORT = "transport"
    MALFORMED_BODY = "malformed_body"
    POLL_TIMEOUT = "poll_timeout"


class ApiError(Exception):
    """Exception raised when an operation against the API fails.

    Use the classmethod constructors rather than calling the initializer
    directly; they fill the fields that are meaningful for each kind.

    Args:
        kind: The kind of failure.
        message: A descriptive error message.
        code: The error code reported by the server, or the HTTP status
            code for general errors.
        reason: The machine-readable reason reported by the server.
        raw_body: The raw text of a body that could not be parsed.
        location: The status URL of the asynchronous operation, if any.
        status: The last status payload observed by the poll loop.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from cloudtargets.exceptions import ApiError
        >>> error = ApiError.service("bad name", 400, "INVALID_NAME")
        >>> str(error)
        'INVALID_NAME (400): bad name'
        >>> error.is_service
        True

        ```
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        code: Any = None,
        reason: Any = None,
        raw_body: str | None = None,
        location: str | None = None,
        status: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.reason = reason
        self.raw_body = raw_body
        self.location = location
        self.status = status
        self.cause = cause

    @classmethod
    def service(cls, message: Any, code: Any, reason: Any) -> ApiError:
        r"""Create the error for a structured JSON error body."""
        return cls(ErrorKind.SERVICE, message, code=code, reason=reason)

    @classmethod
    def general(cls, message: str, code: int) -> ApiError:
        r"""Create the error for a non-JSON error body."""
        return cls(ErrorKind.GENERAL, message, code=code)

    @classmethod
    def transport(cls, cause: BaseException) -> ApiError:
        r"""Create the error for a failure of the network layer."""
        message = f"{type(cause).__name__}: {cause}"
        return cls(ErrorKind.TRANSPORT, message, cause=cause)

    @classmethod
    def malformed_body(cls, raw_body: str, cause: BaseException | None = None) -> ApiError:
        r"""Create the error for a JSON body that failed to parse.

        The message is the raw body itself so that nothing the server sent
        is lost.
        """
        return cls(ErrorKind.MALFORMED_BODY, raw_body, raw_body=raw_body, cause=cause)

    @classmethod
    def poll_timeout(
        cls, location: str, status: dict[str, Any] | None, message: str
    ) -> ApiError:
        r"""Create the error for a poll loop that ran out of budget."""
        return cls(ErrorKind.POLL_TIMEOUT, message, location=location, status=status)

    @property
    def is_service(self) -> bool:
        return self.kind is ErrorKind.SERVICE

    @property
    def is_general(self) -> bool:
        return self.kind is ErrorKind.GENERAL

    @property
    def is_transport(self) -> bool:
        return self.kind is ErrorKind.TRANSPORT

    @property
    def is_malformed_body(self) -> bool:
        return self.kind is ErrorKind.MALFORMED_BODY

    @property
    def is_poll_timeout(self) -> bool:
        return self.kind is ErrorKind.POLL_TIMEOUT

    def __str__(self) -> str:
        if self.kind is ErrorKind.SERVICE:
            return f"{self.reason} ({self.code}): {self.message}"
        if self.kind is ErrorKind.GENERAL:
            return f"({self.code}): {self.message}"
        return str(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.name}, message={self.message!r}, code={self.code!r})"
