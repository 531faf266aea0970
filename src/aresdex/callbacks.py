r"""Retry notifications delivered to the error handlers.

An error handler is a callable receiving a ``RetryNotification`` each
time an attempt fails and another attempt is scheduled. Handlers may be
invoked from concurrently running retry sequences, so they must not rely
on unsynchronized shared state.

Example:
    ```pycon
    >>> from aresdex import ExchangeClient, ClientOptions
    >>> from aresdex.callbacks import RetryNotification
    >>> def log_retry(notification: RetryNotification) -> None:
    ...     print(f"{notification.operation_name} retry in {notification.delay}s")
    ...
    >>> client = ExchangeClient(
    ...     "https://indexer.example.com", ClientOptions(public_error_handler=log_retry)
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ErrorHandler",
    "RetryNotification",
    "default_error_handler",
    "invoke_error_handler",
]

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aresdex.exceptions import ExchangeRequestError

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryNotification:
    """Information passed to an error handler before a retry.

    Attributes:
        operation_name: The name of the endpoint method being retried.
        error: The error of the attempt that just failed.
        delay: The wait time in seconds before the next attempt.
        attempt: The number of the attempt that failed (1-indexed).
    """

    operation_name: str
    error: ExchangeRequestError
    delay: float
    attempt: int


ErrorHandler = Callable[[RetryNotification], None]


def default_error_handler(notification: RetryNotification) -> None:
    """Write one line describing the failed attempt to the standard
    error stream.

    Args:
        notification: The retry notification.
    """
    # A single write call keeps lines from concurrent sequences whole
    sys.stderr.write(
        f"Error fetching data from exchange API::{notification.operation_name}: "
        f"{notification.error}, retrying in {notification.delay:.3f}s\n"
    )


def invoke_error_handler(
    error_handler: ErrorHandler | None,
    notification: RetryNotification,
) -> None:
    """Invoke the error handler, or the default one if none is set.

    Args:
        error_handler: Optional handler to invoke.
        notification: The retry notification.

    Raises:
        Exception: Any exception raised by the handler, after it has
            been logged.
    """
    handler = error_handler if error_handler is not None else default_error_handler
    try:
        handler(notification)
    except Exception:
        logger.exception(f"Error handler failed for {notification.operation_name}")
        raise
