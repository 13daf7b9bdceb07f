"""
Retry template wrapping a single remote call.

The template repeats a callback while it fails with a *retryable* exception
(by default :class:`~bytedance_ai_lib.exceptions.TransientApiError`), waiting
an exponentially growing, capped interval between attempts.  Any other
exception propagates at once.  When the attempts are exhausted the last
retryable exception is re-raised unchanged.

Listeners registered on the template observe every failed attempt and the
final success, together with a :class:`RetryContext` holding the number of
failed attempts so far.

Example
-------
>>> template = RetryTemplate(max_attempts=3, initial_interval=0.1)
>>> template.execute(lambda ctx: api.chat_completion_entity(request))
"""

import logging
import time
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar, Union

from bytedance_ai_lib.constants import (
    DEFAULT_RETRY_INITIAL_INTERVAL_SEC,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_MAX_INTERVAL_SEC,
    DEFAULT_RETRY_MULTIPLIER,
)
from bytedance_ai_lib.exceptions import InvalidArgumentError, TransientApiError

T = TypeVar("T")

ExceptionTypes = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


class RetryContext:
    """
    State of one logical operation executed by a :class:`RetryTemplate`.

    Attributes
    ----------
    retry_count : int
        Number of failed attempts so far.
    last_exception : Optional[BaseException]
        Exception raised by the most recent failed attempt.
    exhausted : bool
        ``True`` once no further attempt will be made after a failure.
    """

    def __init__(self) -> None:
        self.retry_count = 0
        self.last_exception: Optional[BaseException] = None
        self.exhausted = False

    def register_failure(self, exc: BaseException) -> None:
        self.retry_count += 1
        self.last_exception = exc


class RetryListener:
    """
    Callback interface notified by :class:`RetryTemplate`.

    All methods are no-ops; subclasses override the ones they need.
    """

    def on_error(self, context: RetryContext, exc: BaseException) -> None:
        pass

    def on_success(self, context: RetryContext, result: Any) -> None:
        pass

    def close(self, context: RetryContext, exc: Optional[BaseException]) -> None:
        pass


class LoggingRetryListener(RetryListener):
    """Logs failed attempts at WARNING and exhausted operations at ERROR."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def on_error(self, context: RetryContext, exc: BaseException) -> None:
        self.logger.warning("Attempt %d failed: %s", context.retry_count, exc)

    def close(self, context: RetryContext, exc: Optional[BaseException]) -> None:
        if exc is not None:
            self.logger.error(
                "Giving up after %d attempt(s): %s", context.retry_count, exc
            )


class RetryTemplate:
    """
    Bounded retry with exponential backoff.

    Parameters
    ----------
    max_attempts : int
        Upper bound on the number of attempts (the first call included).
    initial_interval : float
        Delay in seconds before the second attempt.
    multiplier : float
        Factor applied to the delay after every failed attempt.
    max_interval : float
        Ceiling of a single delay in seconds.
    retry_on : ExceptionTypes
        Exception type(s) considered transient.
    sleep : Callable[[float], None]
        Function used to wait; tests may pass a no-op.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is created.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS,
        initial_interval: float = DEFAULT_RETRY_INITIAL_INTERVAL_SEC,
        multiplier: float = DEFAULT_RETRY_MULTIPLIER,
        max_interval: float = DEFAULT_RETRY_MAX_INTERVAL_SEC,
        retry_on: ExceptionTypes = TransientApiError,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_attempts < 1:
            raise InvalidArgumentError("max_attempts must be at least 1")
        if initial_interval < 0 or max_interval < 0:
            raise InvalidArgumentError("Backoff intervals must not be negative")
        if multiplier < 1:
            raise InvalidArgumentError("multiplier must be at least 1")

        self.max_attempts = max_attempts
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval
        self.retry_on = retry_on
        self._sleep = sleep
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: List[RetryListener] = []

    def register_listener(self, listener: RetryListener) -> None:
        self._listeners.append(listener)

    @property
    def listeners(self) -> List[RetryListener]:
        return list(self._listeners)

    def backoff_interval(self, retry_count: int) -> float:
        """Delay before the attempt following the ``retry_count``-th failure."""
        interval = self.initial_interval * (self.multiplier ** (retry_count - 1))
        return min(interval, self.max_interval)

    def can_retry(self, context: RetryContext) -> bool:
        exc = context.last_exception
        if exc is None:
            return context.retry_count < self.max_attempts
        if context.retry_count >= self.max_attempts:
            return False
        return isinstance(exc, self.retry_on)

    def execute(self, callback: Callable[[RetryContext], T]) -> T:
        """
        Run ``callback`` until it succeeds, fails fatally or attempts run out.

        Parameters
        ----------
        callback : Callable[[RetryContext], T]
            The remote call; receives the live context.

        Returns
        -------
        T
            The callback result of the first successful attempt.

        Raises
        ------
        BaseException
            The non-retryable exception, or the last retryable one when the
            attempts are exhausted.
        """
        context = RetryContext()
        while True:
            try:
                result = callback(context)
            except Exception as exc:
                context.register_failure(exc)
                for listener in self._listeners:
                    listener.on_error(context, exc)
                if not self.can_retry(context):
                    context.exhausted = True
                    for listener in self._listeners:
                        listener.close(context, exc)
                    raise
                delay = self.backoff_interval(context.retry_count)
                self.logger.debug(
                    "Retrying in %.3fs (attempt %d/%d)",
                    delay,
                    context.retry_count + 1,
                    self.max_attempts,
                )
                self._sleep(delay)
                continue

            for listener in self._listeners:
                listener.on_success(context, result)
            for listener in self._listeners:
                listener.close(context, None)
            return result


def default_retry_template(
    logger: Optional[logging.Logger] = None,
) -> RetryTemplate:
    """
    Template used by the models when none is supplied: 10 attempts, 2 s
    initial delay multiplied by 5 up to 3 minutes, transient errors only.
    """
    template = RetryTemplate(logger=logger)
    template.register_listener(LoggingRetryListener(logger))
    return template
