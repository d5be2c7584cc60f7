r"""Ready-made ``should_retry`` predicates.

The retry engine never inspects errors: deciding which failures are
transient is left to the ``should_retry`` predicate. This module
provides predicates for the common cases, including one for network
calls made with ``httpx``.

Example:
    ```pycon
    >>> from aslot import RetryOptions
    >>> from aslot.predicates import retry_if_transient_http_error
    >>> options = RetryOptions(max_attempts=5, should_retry=retry_if_transient_http_error)

    ```
"""

from __future__ import annotations

__all__ = [
    "all_of",
    "max_elapsed",
    "retry_if_exception_type",
    "retry_if_transient_http_error",
    "retry_unless_exception_type",
]

import logging
import time
from typing import TYPE_CHECKING

import httpx

from aslot.core.config import RETRY_STATUS_CODES
from aslot.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def retry_if_exception_type(
    *exc_types: type[BaseException],
) -> Callable[[Exception, int], bool]:
    """Retry only errors that are instances of ``exc_types``.

    Example:
        ```pycon
        >>> from aslot.predicates import retry_if_exception_type
        >>> should_retry = retry_if_exception_type(ConnectionError, TimeoutError)
        >>> should_retry(ConnectionResetError(), 1)
        True
        >>> should_retry(ValueError(), 1)
        False

        ```
    """
    if not exc_types:
        msg = "retry_if_exception_type requires at least one exception type"
        raise ConfigurationError(msg)

    def predicate(error: Exception, attempt: int) -> bool:  # noqa: ARG001
        return isinstance(error, exc_types)

    return predicate


def retry_unless_exception_type(
    *exc_types: type[BaseException],
) -> Callable[[Exception, int], bool]:
    """Retry every error except instances of ``exc_types``.

    Typical use is to stop on permanent failures such as validation
    errors.

    Example:
        ```pycon
        >>> from aslot.predicates import retry_unless_exception_type
        >>> should_retry = retry_unless_exception_type(ValueError)
        >>> should_retry(ValueError(), 1)
        False
        >>> should_retry(OSError(), 1)
        True

        ```
    """
    if not exc_types:
        msg = "retry_unless_exception_type requires at least one exception type"
        raise ConfigurationError(msg)

    def predicate(error: Exception, attempt: int) -> bool:  # noqa: ARG001
        return not isinstance(error, exc_types)

    return predicate


def retry_if_transient_http_error(error: Exception, attempt: int) -> bool:  # noqa: ARG001
    """Retry transient ``httpx`` failures.

    Transient failures are timeouts, transport errors (connection
    refused, reset, ...) and ``httpx.HTTPStatusError`` raised by
    ``Response.raise_for_status()`` for a status in
    ``RETRY_STATUS_CODES`` (429, 500, 502, 503, 504). Everything else,
    including 4xx client errors, is not retried.

    Example:
        ```pycon
        >>> import httpx
        >>> from aslot.predicates import retry_if_transient_http_error
        >>> retry_if_transient_http_error(httpx.ConnectTimeout("timed out"), 1)
        True
        >>> request = httpx.Request("GET", "https://example.com")
        >>> response = httpx.Response(404, request=request)
        >>> error = httpx.HTTPStatusError("not found", request=request, response=response)
        >>> retry_if_transient_http_error(error, 1)
        False

        ```
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRY_STATUS_CODES
    # TimeoutException is a TransportError subclass
    return isinstance(error, httpx.TransportError)


def max_elapsed(seconds: float) -> Callable[[Exception, int], bool]:
    """Stop retrying once ``seconds`` have passed since the first failure.

    The clock starts at the first call of the predicate, so build a new
    predicate for every ``retry`` call.

    Args:
        seconds: The time budget. Must be > 0.

    Example:
        ```pycon
        >>> from aslot.predicates import max_elapsed
        >>> should_retry = max_elapsed(60.0)
        >>> should_retry(OSError(), 1)
        True

        ```
    """
    if seconds <= 0:
        msg = f"seconds must be > 0, got {seconds}"
        raise ConfigurationError(msg)
    started_at: list[float] = []

    def predicate(error: Exception, attempt: int) -> bool:  # noqa: ARG001
        now = time.monotonic()
        if not started_at:
            started_at.append(now)
        elapsed = now - started_at[0]
        if elapsed >= seconds:
            logger.debug(f"Retry time budget exhausted ({elapsed:.2f}s >= {seconds:.2f}s)")
            return False
        return True

    return predicate


def all_of(
    *predicates: Callable[[Exception, int], bool],
) -> Callable[[Exception, int], bool]:
    """Retry only when every predicate agrees.

    Example:
        ```pycon
        >>> from aslot.predicates import all_of, max_elapsed, retry_if_exception_type
        >>> should_retry = all_of(retry_if_exception_type(OSError), max_elapsed(30.0))
        >>> should_retry(OSError(), 1), should_retry(KeyError(), 2)
        (True, False)

        ```
    """

    def predicate(error: Exception, attempt: int) -> bool:
        return all(check(error, attempt) for check in predicates)

    return predicate
