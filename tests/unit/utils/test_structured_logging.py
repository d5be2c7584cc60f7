from __future__ import annotations

import asyncio
import json
import logging
from io import StringIO

import pytest

from aslot.utils.structured_logging import (
    StructuredFormatter,
    clear_task_label,
    get_task_label,
    log_structured,
    set_task_label,
    task_label,
)


@pytest.fixture
def json_logger() -> tuple[logging.Logger, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("test_aslot_structured")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


#########################################
#     Tests for task label handling     #
#########################################


def test_get_task_label_initially_none() -> None:
    clear_task_label()
    assert get_task_label() is None


def test_set_and_clear_task_label() -> None:
    set_task_label("job-1")
    assert get_task_label() == "job-1"
    clear_task_label()
    assert get_task_label() is None


def test_task_label_context_manager_restores_previous() -> None:
    set_task_label("outer")
    with task_label("inner"):
        assert get_task_label() == "inner"
    assert get_task_label() == "outer"
    clear_task_label()


@pytest.mark.asyncio
async def test_task_label_is_task_local() -> None:
    async def labelled(label: str) -> str | None:
        with task_label(label):
            await asyncio.sleep(0)
            return get_task_label()

    assert await asyncio.gather(labelled("a"), labelled("b")) == ["a", "b"]


##########################################
#     Tests for StructuredFormatter      #
##########################################


def test_structured_formatter_basic_fields(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    logger.info("hello %s", "world")

    data = json.loads(stream.getvalue())
    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["logger"] == "test_aslot_structured"
    assert data["timestamp"].endswith("Z")
    assert "task_label" not in data


def test_structured_formatter_includes_extra_and_label(
    json_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = json_logger
    with task_label("sync-42"):
        logger.debug("slot acquired", extra={"event": "slot_acquired", "running": 2})

    data = json.loads(stream.getvalue())
    assert data["event"] == "slot_acquired"
    assert data["running"] == 2
    assert data["task_label"] == "sync-42"


def test_structured_formatter_exception(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        logger.exception("failed")

    data = json.loads(stream.getvalue())
    assert "ValueError: boom" in data["exception"]


def test_structured_formatter_non_serializable_extra(
    json_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = json_logger
    logger.info("error", extra={"error": OSError("reset")})

    assert json.loads(stream.getvalue())["error"] == "OSError('reset')"


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    log_structured(logger, logging.INFO, "retry scheduled", attempt=1, delay=0.5)

    data = json.loads(stream.getvalue())
    assert data["message"] == "retry scheduled"
    assert data["attempt"] == 1
    assert data["delay"] == 0.5


def test_log_structured_disabled_level(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    logger.setLevel(logging.WARNING)
    log_structured(logger, logging.DEBUG, "hidden", attempt=1)
    assert stream.getvalue() == ""
