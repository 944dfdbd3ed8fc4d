"""Logging utilities for id3tree.

Library code logs through loguru with structured keyword context. The
``id3tree`` logger is disabled on package import; ``enable_logging()`` turns
it on and attaches a stderr handler that only passes id3tree records.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that records are not printed twice once ``enable_logging()`` adds its own
    handler. If handler 0 was already removed by the application the removal
    is a no-op.
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

with contextlib.suppress(ValueError):
    logger.remove(0)

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - "
    "<level>{message}</level> {extra}"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> {extra}"
)


class LoggingHandle:
    """Handle for one id3tree logging handler.

    Keeps the handler ID returned by ``logger.add()`` and removes it again on
    ``disable()`` or when used as a context manager. When the last active
    handle is disabled the ``id3tree`` logger is disabled again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     build_tree(records, CUSTOMER_SCHEMA)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the logging handle.

        Args:
            handler_id (int): The loguru handler ID from logger.add().
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; disable id3tree logging if it was the last one."""
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
        """Enter context manager.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and disable logging."""
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of handles that have not been disabled yet.

        Returns:
            int: Count of active handles.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Enable id3tree logging on stderr.

    Training logs each split at DEBUG and a tree summary at INFO; discarded
    input rows and unreadable files are logged at WARNING and ERROR.

    Args:
        level (LogLevel): Minimum level to display. Defaults to "INFO".
        log_format (LogFormat): "short" shows the function name only, "full"
            adds module and line number.

    Returns:
        LoggingHandle: Handle that removes the handler again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_id3tree_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_id3tree_record(record: Record) -> bool:
    """Pass only records emitted from inside the id3tree package.

    Args:
        record (Record): The loguru record to filter.

    Returns:
        bool: True if the record originates from id3tree.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
