"""Opt-in structured logging for applications embedding ``respond``.

The helpers log through Loguru, but the package disables its own logger on
import so a library user sees nothing unless they ask for it. Calling
:func:`setup_logging` enables the ``respond`` logger and installs a sink.

Formatter types:
- **console**: Human-readable with inline context (development)
- **json**: Generic structured format, one JSON object per line

Standard library logging is routed through Loguru as well, so records from
the web server hosting the helpers end up in the same sink.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Final, Protocol

from loguru import logger

# Name Loguru uses to enable or disable records emitted by this package
PACKAGE_LOGGER_NAME: Final[str] = "respond"

DEFAULT_LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message} | {extra}"
)


class _LoggingState:
    """Simple state holder to track if logging has been configured."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()


class SettingsProtocol(Protocol):
    """Protocol for settings objects that setup_logging can accept."""

    @property
    def debug(self) -> bool:
        """Debug mode flag."""
        ...

    @property
    def log_config(self) -> LogConfigProtocol:
        """Log configuration."""
        ...


class LogConfigProtocol(Protocol):
    """Protocol for log configuration objects."""

    @property
    def log_level(self) -> str:
        """Logging level."""
        ...

    @property
    def log_formatter_type(self) -> str:
        """Log formatter type."""
        ...


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Forward log record to Loguru.

        Args:
            record: Standard library LogRecord to forward.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        try:
            frame = sys._getframe(6)
            depth = 6
            while frame and frame.f_code.co_filename == logging.__file__:
                next_frame = frame.f_back
                if next_frame is None:
                    break
                frame = next_frame
                depth += 1
        except ValueError:
            # _getframe can fail if there aren't enough frames
            depth = 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def serialize_for_json(record: dict[str, Any]) -> str:
    """Format log record as a single JSON line.

    Args:
        record: Loguru record to format.

    Returns:
        str: JSON-formatted log entry with newline.
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    if extra := record.get("extra", {}):
        filtered_extra = {k: v for k, v in extra.items() if not k.startswith("_")}
        if filtered_extra:
            log_entry.update(filtered_extra)

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return json.dumps(log_entry, default=str) + "\n"


def setup_logging(settings: SettingsProtocol) -> None:
    """Enable the package logger and configure a Loguru sink.

    Args:
        settings: Settings containing log configuration.

    Note:
        This function ensures it's only called once using module state.

        It configures logging for the whole process: existing Loguru sinks
        are removed and the root standard library logger is reset to a
        single handler forwarding to Loguru. Applications that manage their
        own sinks should call ``logger.enable("respond")`` instead.
    """
    if _state.configured:
        return

    logger.remove()

    formatter_type = settings.log_config.log_formatter_type

    if formatter_type == "json":

        def structured_sink(message: object) -> None:
            """Custom sink that formats and writes structured logs."""
            if hasattr(message, "record"):
                sys.stdout.write(serialize_for_json(message.record))
                sys.stdout.flush()

        logger.add(
            structured_sink,
            level=settings.log_config.log_level,
            diagnose=False,
            backtrace=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=DEFAULT_LOG_FORMAT,
            level=settings.log_config.log_level,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.enable(PACKAGE_LOGGER_NAME)
    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        formatter_type=formatter_type,
        log_level=settings.log_config.log_level,
    )

    _state.configured = True
