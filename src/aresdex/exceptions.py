r"""Exceptions raised by the exchange client.

``ExchangeRequestError`` is the single structured error a caller
receives when a call fails: it distinguishes the error kind, the textual
status code and the message of the last attempt.
"""

from __future__ import annotations

__all__ = [
    "ErrorKind",
    "ExchangeRequestError",
    "RetryCancelledError",
    "SigningError",
    "SubClientNotConfiguredError",
]

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aresdex.request import Failure


class ErrorKind(str, Enum):
    """Kind of failure of a single request attempt."""

    # Connection, DNS or timeout failure before any response
    TRANSPORT_ERROR = "transport_error"
    # Status other than 200/201
    PROTOCOL_ERROR = "protocol_error"
    # 200/201 response whose body does not match the expected shape
    DECODE_ERROR = "decode_error"


class ExchangeRequestError(Exception):
    """Raised when an exchange API call fails.

    Args:
        operation_name: The name of the endpoint method that failed.
        kind: The kind of the last failure.
        code: The textual HTTP status code (e.g. ``"503"``), or an empty
            string if no response was received.
        message: The response body text or the error description.

    Example:
        ```pycon
        >>> from aresdex.exceptions import ErrorKind, ExchangeRequestError
        >>> error = ExchangeRequestError("get_markets", ErrorKind.PROTOCOL_ERROR, "503", "unavailable")
        >>> error.code
        '503'
        >>> str(error)
        'get_markets failed with protocol_error (503): unavailable'

        ```
    """

    def __init__(
        self,
        operation_name: str,
        kind: ErrorKind,
        code: str,
        message: str,
    ) -> None:
        self.operation_name = operation_name
        self.kind = kind
        self.code = code
        self.message = message
        status = f" ({code})" if code else ""
        super().__init__(f"{operation_name} failed with {kind.value}{status}: {message}")

    @classmethod
    def from_failure(cls, operation_name: str, failure: Failure) -> ExchangeRequestError:
        """Create an error from a failed attempt outcome.

        Args:
            operation_name: The name of the endpoint method.
            failure: The failed outcome.

        Returns:
            The error.
        """
        return cls(
            operation_name=operation_name,
            kind=failure.kind,
            code=failure.code,
            message=failure.message,
        )

    @property
    def status_code(self) -> int | None:
        """The HTTP status code as an integer, if a response was
        received."""
        return int(self.code) if self.code.isdigit() else None


class RetryCancelledError(Exception):
    """Raised when a retry sequence is aborted through its cancellation
    event.

    Args:
        operation_name: The name of the endpoint method.
        last_error: The error of the last failed attempt, or ``None`` if
            the sequence was cancelled before its first attempt.
    """

    def __init__(
        self, operation_name: str, last_error: ExchangeRequestError | None = None
    ) -> None:
        self.operation_name = operation_name
        self.last_error = last_error
        detail = f": last error: {last_error}" if last_error is not None else ""
        super().__init__(f"{operation_name} was cancelled{detail}")


class SubClientNotConfiguredError(RuntimeError):
    """Raised when an authenticated sub-client is requested but the
    matching credentials were not supplied.

    Args:
        surface: The name of the missing sub-client surface.
    """

    def __init__(self, surface: str) -> None:
        self.surface = surface
        super().__init__(
            f"The {surface} sub-client is not configured: no matching credentials were "
            "supplied when the client was created"
        )


class SigningError(Exception):
    """Raised when the request signer cannot produce a signature."""
