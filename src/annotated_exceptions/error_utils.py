from __future__ import annotations

import asyncio
import functools
import inspect
import traceback
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, NoReturn, ParamSpec, TypeVar

from loguru import logger

from annotated_exceptions.caused import CausedException

if TYPE_CHECKING:
    from loguru import Logger

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int = 6) -> str:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def _ensure_caused(exc_cls: Any) -> None:
    if not (isinstance(exc_cls, type) and issubclass(exc_cls, CausedException)):
        raise TypeError(f"{exc_cls!r} is not a CausedException subclass")


def log_and_wrap(
    exc: BaseException,
    exc_cls: type[CausedException],
    log: Logger = logger,
    metadata: Mapping[str, Any] | None = None,
) -> NoReturn:
    """Log a short traceback of *exc* and re-raise it wrapped in *exc_cls*."""
    _ensure_caused(exc_cls)
    formatted_tb = _format_tail(exc)
    log.opt(exception=exc).error("{}", formatted_tb)
    wrapped = exc_cls(str(exc), {**(metadata or {}), "error": exc})
    raise wrapped from exc


def wrap_exceptions(
    exc_cls: type[CausedException], **metadata: Any
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to log short traceback and wrap errors into *exc_cls*.

    Errors that already are *exc_cls* propagate untouched.
    """
    _ensure_caused(exc_cls)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except (asyncio.CancelledError, exc_cls):
                    raise
                except Exception as exc:
                    log_and_wrap(exc, exc_cls, logger, metadata)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except exc_cls:
                raise
            except Exception as exc:
                log_and_wrap(exc, exc_cls, logger, metadata)

        return sync_wrapper  # type: ignore[return-value]

    return decorator
