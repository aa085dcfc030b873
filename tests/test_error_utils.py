import asyncio
import logging

import pytest
from loguru import logger

from annotated_exceptions.caused import CausedException
from annotated_exceptions.error_utils import log_and_wrap, wrap_exceptions
from annotated_exceptions.web import NotFound


class StorageError(CausedException):
    pass


def test_log_and_wrap_raises_wrapped_error(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    sink_id = logger.add(caplog.handler, level="ERROR", format="{message}")
    original = OSError("disk full")
    try:
        raise original
    except OSError as exc:
        with pytest.raises(StorageError) as info:
            log_and_wrap(exc, StorageError, logger, {"code": "STORAGE_FULL"})
    logger.remove(sink_id)

    wrapped = info.value
    assert wrapped.message == "disk full"
    assert wrapped.error is original
    assert wrapped.__cause__ is original
    assert wrapped.code == "STORAGE_FULL"
    assert "disk full" in caplog.text


def test_log_and_wrap_rejects_non_caused_class() -> None:
    with pytest.raises(TypeError):
        log_and_wrap(ValueError("boom"), NotFound)  # type: ignore[arg-type]


def test_wrap_exceptions_rejects_non_caused_class() -> None:
    with pytest.raises(TypeError):
        wrap_exceptions(NotFound)  # type: ignore[arg-type]


def test_wrap_exceptions_sync(caplog: pytest.LogCaptureFixture) -> None:
    @wrap_exceptions(StorageError, label="Storage")
    def save(value: int) -> int:
        if value < 0:
            raise ValueError("negative")
        return value * 2

    assert save(2) == 4
    assert save.__name__ == "save"

    caplog.set_level(logging.ERROR)
    sink_id = logger.add(caplog.handler, level="ERROR", format="{message}")
    with pytest.raises(StorageError) as info:
        save(-1)
    logger.remove(sink_id)

    assert info.value.message == "negative"
    assert isinstance(info.value.error, ValueError)
    assert info.value.label == "Storage"
    assert "negative" in caplog.text


def test_wrap_exceptions_passes_own_errors_through() -> None:
    own = StorageError("already wrapped")

    @wrap_exceptions(StorageError)
    def save() -> None:
        raise own

    with pytest.raises(StorageError) as info:
        save()
    assert info.value is own
    assert info.value.error is None


@pytest.mark.asyncio
async def test_wrap_exceptions_async() -> None:
    @wrap_exceptions(StorageError, code="ASYNC_STORAGE")
    async def load(key: str) -> str:
        if not key:
            raise KeyError("empty key")
        return key.upper()

    assert await load("a") == "A"
    with pytest.raises(StorageError) as info:
        await load("")
    assert info.value.code == "ASYNC_STORAGE"
    assert isinstance(info.value.__cause__, KeyError)


@pytest.mark.asyncio
async def test_wrap_exceptions_async_lets_cancellation_through() -> None:
    @wrap_exceptions(StorageError)
    async def load() -> None:
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await load()
