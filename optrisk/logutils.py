from __future__ import annotations

import logging
import os
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

from loguru import logger

from optrisk.config import get as cfg_get


def _format_result(result: Any, max_length: int = 200) -> str:
    """Return a string representation of ``result`` truncated if necessary."""
    text = str(result)
    if len(text) > max_length:
        return f"{text[:max_length]}... [truncated {len(text)} chars]"
    return text


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # Skip internal frames from the logging module
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _is_debug() -> bool:
    debug_env = os.getenv("OPTRISK_DEBUG", "0")
    return debug_env not in {"0", "", "false", "False"}


def setup_logging(
    default_level: int = logging.INFO,
    *,
    stdout: bool = False,
) -> None:
    """Configure loguru logging based on configuration and environment."""

    level_name = os.getenv("OPTRISK_LOG_LEVEL", cfg_get("LOG_LEVEL", "INFO")).upper()
    if _is_debug():
        level_name = "DEBUG"

    level = getattr(logging, level_name, default_level)
    stream = sys.stdout if stdout else sys.stderr

    logger.remove()
    logger.add(
        stream,
        level=level,
        format="{level} - {time:HH:mm:ss}: {message}",
    )
    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.debug(
        f"Logging setup: OPTRISK_DEBUG={os.getenv('OPTRISK_DEBUG', '0')}, "
        f"OPTRISK_LOG_LEVEL={level_name}"
    )


T = TypeVar("T")


def log_result(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator that logs function calls and their return value."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        logger.debug(f"calling {func.__name__}")
        result = func(*args, **kwargs)
        logger.debug(f"{func.__name__} -> {_format_result(result)}")
        return result

    return wrapper


__all__ = ["logger", "setup_logging", "log_result", "InterceptHandler"]
