r"""Asynchronous retry executor for exchange API calls.

This module provides the RetryExecutor class that repeatedly invokes a
single-attempt request under a backoff policy until it succeeds or no
attempt remains.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import asyncio
import logging
from contextlib import suppress
from typing import TYPE_CHECKING, Any

from aresdex.callbacks import RetryNotification, invoke_error_handler
from aresdex.exceptions import ExchangeRequestError, RetryCancelledError
from aresdex.request import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aresdex.backoff import BackoffPolicy
    from aresdex.callbacks import ErrorHandler
    from aresdex.request import ResponseOutcome

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a logical call with automatic retry logic.

    Each call of ``execute`` runs its own sequence: the attempt counter
    and the last failure are local to the call, so one executor can be
    shared by any number of concurrent calls.

    The sequence for attempt ``n`` (0-indexed) is:

    - ``Success``: the payload is returned.
    - ``Failure`` with ``n >= policy.max_attempts``: the last failure is
      raised as an ``ExchangeRequestError``.
    - ``Failure`` otherwise: the error handler receives a
      ``RetryNotification``, the executor waits ``policy.delay(n)``
      and runs attempt ``n + 1``.

    Every failure kind is retried the same way: the policy only looks at
    the attempt count. A malformed payload (``DECODE_ERROR``) or a 4xx
    response is therefore retried like a timeout.

    Args:
        error_handler: Optional handler receiving the retry
            notifications. If ``None``, a line is written to stderr.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresdex.backoff import BackoffPolicy
        >>> from aresdex.request import Success
        >>> from aresdex.retry import RetryExecutor
        >>> async def attempt():
        ...     return Success(status_code=200, payload={"id": "X"})
        ...
        >>> executor = RetryExecutor()
        >>> asyncio.run(executor.execute("get_order_by_id", attempt, BackoffPolicy()))
        {'id': 'X'}

        ```
    """

    def __init__(self, error_handler: ErrorHandler | None = None) -> None:
        self.error_handler = error_handler

    async def execute(
        self,
        operation_name: str,
        attempt_func: Callable[[], Awaitable[ResponseOutcome]],
        policy: BackoffPolicy,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Execute a call with automatic retry logic.

        Args:
            operation_name: The name of the endpoint method, used to
                label notifications and errors.
            attempt_func: Async function sending one attempt and
                returning its outcome.
            policy: The backoff policy of the call.
            cancel_event: Optional event aborting the sequence when set.
                It is checked before each attempt and watched during the
                backoff wait.

        Returns:
            The payload of the first successful attempt.

        Raises:
            ExchangeRequestError: If all attempts fail. The error
                describes the last attempt.
            RetryCancelledError: If ``cancel_event`` is set before the
                sequence completes.
        """
        last_failure: Failure | None = None
        for attempt in range(policy.total_attempts):
            if cancel_event is not None and cancel_event.is_set():
                raise self._cancelled(operation_name, last_failure)

            outcome = await attempt_func()
            if isinstance(outcome, Success):
                logger.debug(f"{operation_name} succeeded on attempt {attempt + 1}")
                return outcome.payload

            last_failure = outcome
            error = ExchangeRequestError.from_failure(operation_name, outcome)
            if not policy.allows_retry(attempt):
                logger.debug(
                    f"{operation_name} failed after {attempt + 1} attempt(s), "
                    f"no attempt remaining: {error}"
                )
                raise error

            delay = policy.delay(attempt)
            logger.debug(
                f"{operation_name} attempt {attempt + 1}/{policy.total_attempts} failed, "
                f"retrying in {delay:.3f}s"
            )
            invoke_error_handler(
                self.error_handler,
                RetryNotification(
                    operation_name=operation_name,
                    error=error,
                    delay=delay,
                    attempt=attempt + 1,
                ),
            )
            await self._wait(delay, cancel_event)

        msg = f"{operation_name} ended without outcome"  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover

    @staticmethod
    async def _wait(delay: float, cancel_event: asyncio.Event | None) -> None:
        if cancel_event is None:
            await asyncio.sleep(delay)
            return
        with suppress(asyncio.TimeoutError):
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)

    @staticmethod
    def _cancelled(operation_name: str, last_failure: Failure | None) -> RetryCancelledError:
        logger.debug(f"{operation_name} cancelled")
        last_error = (
            ExchangeRequestError.from_failure(operation_name, last_failure)
            if last_failure is not None
            else None
        )
        return RetryCancelledError(operation_name, last_error)
