"""Logging utilities for infotree.

The package logs through loguru and is disabled on import, so applications
see nothing until they call :func:`enable_logging` (or
``logger.enable("infotree")`` with their own handler).
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class LoggingHandle:
    """Handle returned by :func:`enable_logging`.

    Removes its handler on :meth:`disable` or when used as a context manager.
    When the last active handle goes away the infotree logger is disabled
    again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = builder.create_decision_tree()
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; a second call does nothing."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
    sink=sys.stderr,
) -> LoggingHandle:
    """Enable infotree logging.

    Args:
        level (LogLevel): Minimum level to emit. ``"DEBUG"`` shows one line per
            trained tree and forest member; ``"TRACE"`` shows every split
            chosen during induction.
        log_format (LogFormat): ``"short"`` shows the function name only,
            ``"full"`` adds module and line number.
        sink: Any loguru sink. Defaults to ``sys.stderr``.

    Returns:
        LoggingHandle: Handle that removes the handler when disabled.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sink,
        level=level,
        filter=_is_infotree_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_infotree_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
