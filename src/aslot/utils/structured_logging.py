r"""Structured (JSON) logging for pool and retry lifecycle events.

The pool and the retry engine emit their lifecycle events through
``log_structured`` with machine-readable fields (``event``, ``attempt``,
``delay``, ``duration``, ...). Attaching ``StructuredFormatter`` to the
``aslot`` logger turns these events into JSON lines; with a regular
formatter they read as plain messages.

Example:
    ```python
    import logging
    from aslot.utils.structured_logging import StructuredFormatter, task_label

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("aslot")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    with task_label("sync-repo-42"):
        await retry(fetch, RetryOptions(max_attempts=5))
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_task_label",
    "get_task_label",
    "log_structured",
    "set_task_label",
    "task_label",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

# Context-local, so each asyncio task sees its own label
_task_label: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aslot_task_label", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def get_task_label() -> str | None:
    """Return the task label of the current context, if any.

    Example:
        ```pycon
        >>> from aslot.utils.structured_logging import get_task_label, set_task_label
        >>> set_task_label("job-1")
        >>> get_task_label()
        'job-1'

        ```
    """
    return _task_label.get()


def set_task_label(label: str) -> None:
    """Set the task label attached to log records of the current context.

    Args:
        label: A caller-chosen identifier (job id, repository name, ...).
    """
    _task_label.set(label)


def clear_task_label() -> None:
    """Remove the task label of the current context."""
    _task_label.set(None)


@contextmanager
def task_label(label: str) -> Generator[None, None, None]:
    """Attach ``label`` to log records emitted inside the ``with`` block.

    The previous label is restored on exit.

    Example:
        ```pycon
        >>> from aslot.utils.structured_logging import get_task_label, task_label
        >>> with task_label("nightly-sync"):
        ...     get_task_label()
        ...
        'nightly-sync'

        ```
    """
    token = _task_label.set(label)
    try:
        yield
    finally:
        _task_label.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes one JSON object with the fields ``timestamp``,
    ``level``, ``logger``, ``message``, ``module``, ``function`` and
    ``line``, the current task label (as ``task_label``) when one is set,
    the formatted exception when present, and every field passed via
    ``extra``. Values that are not JSON serializable are rendered with
    ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from aslot.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("task done", extra={"event": "task_completed"})
        >>> json.loads(stream.getvalue())["event"]
        'task_completed'

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        label = get_task_label()
        if label is not None:
            log_data["task_label"] = label

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the record time as ISO 8601 UTC with milliseconds.

        ``datefmt`` is ignored.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    Nothing is built or emitted when ``level`` is disabled for
    ``logger``. Keys of ``extra`` must not clash with ``LogRecord``
    attributes.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.DEBUG``).
        message: Log message.
        **extra: Additional structured fields.

    Example:
        ```pycon
        >>> import logging
        >>> from aslot.utils.structured_logging import log_structured
        >>> log_structured(
        ...     logging.getLogger("aslot"), logging.DEBUG, "slot acquired", running=1
        ... )

        ```
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
