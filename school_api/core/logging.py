from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional, Union

# Request-scoped values stamped onto every log record
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
school_id_var: ContextVar[Optional[str]] = ContextVar("school_id", default=None)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | school=%(school_id)s | "
    "%(message)s"
)

# Libraries whose INFO output drowns request logs
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "alembic.runtime.migration")


class LoggingContextFilter(logging.Filter):
    """
    Copy the correlation id and the caller's school id from contextvars onto
    the record; '-' when a value is not bound (startup, background work).
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.correlation_id = correlation_id_var.get() or "-"
        record.school_id = school_id_var.get() or "-"
        return True


# PUBLIC_INTERFACE
def configure_logging(level: Union[int, str, None] = None) -> None:
    """
    Install a single stdout handler on the root logger.

    `level` accepts a logging constant or a name such as "DEBUG"; it defaults
    to the LOG_LEVEL application setting.
    """
    if level is None:
        from school_api.core.settings import get_app_settings

        level = get_app_settings().LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(LoggingContextFilter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
