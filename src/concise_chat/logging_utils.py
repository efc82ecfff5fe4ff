"""Logging configuration for concise_chat.

All modules log through ``logging.getLogger(__name__)`` under the
``concise_chat`` namespace. The CLI configures a stderr handler; the TUI
swaps it for a LogPanelHandler so records land in the log panel instead of
corrupting the terminal display.
"""

import logging
from collections.abc import Callable

PACKAGE_LOGGER = "concise_chat"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# (level_name, component, message)
LogSink = Callable[[str, str, str], None]


def configure_logging(level: str | int = "warning", handler: logging.Handler | None = None) -> logging.Logger:
    """Configure the package logger.

    Replaces any handler installed by a previous call, so it is safe to call
    again when the TUI takes over the terminal.

    Args:
        level: Level name ("debug", "info", ...) or numeric level
        handler: Handler to install (stderr StreamHandler if None)

    Returns:
        The package logger
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


class LogPanelHandler(logging.Handler):
    """Forward log records to a sink such as the TUI log panel."""

    def __init__(self, sink: LogSink, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            component = record.name.rsplit(".", 1)[-1]
            self._sink(record.levelname.lower(), component, self.format(record))
        except Exception:
            self.handleError(record)
