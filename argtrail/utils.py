# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import functools
import inspect
import logging
import os
from typing import Any, Awaitable, Callable, TypeVar

import pythonjsonlogger.json
from rich.logging import RichHandler

T = TypeVar("T")


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    if is_coroutine(function):
        return function  # type: ignore

    @functools.wraps(function)
    async def async_wrapper(*args, **kwargs) -> T:
        result = function(*args, **kwargs)
        if inspect.isawaitable(result):
            return await result
        return result

    if not callable(function):
        raise TypeError(f"{function} is not callable")

    return async_wrapper


def setup_logging(
    mode: str | None = None,
    console_log_level: int = logging.WARNING,
) -> logging.Handler:
    """
    Attach a single console handler for Argtrail logs.

    Args:
        mode (str | None): `"cli"` for Rich console output, `"json"` for one JSON
            object per record. Falls back to `ARGTRAIL_LOG_MODE`, then `"cli"`.
        console_log_level (int): Level for the handler.

    Returns:
        logging.Handler: The installed handler.

    Raises:
        ValueError: If `mode` is not `"cli"` or `"json"`.
    """
    mode = mode or os.getenv("ARGTRAIL_LOG_MODE") or "cli"

    if mode == "cli":
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    handler.setLevel(console_log_level)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(console_log_level)

    logging.getLogger("argtrail").debug("Logging initialized in '%s' mode.", mode)
    return handler
