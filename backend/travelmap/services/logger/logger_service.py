"""
Centralized Logger Service for the travel map backend.

Provides a unified logging interface on top of loguru:
- Console output with emoji support
- Optional file logging with rotation
- Per-service loggers bound to a logger name and source

Architecture:
- Type-safe enum-based configuration
- Structured context passed via ``extra_context``
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...enums import LogEmoji, LoggerName, LogLevel, LogSource

CONSOLE_FORMAT = (
    "<dim>[{time:YYYY-MM-DD HH:mm:ss}]</dim> "
    "<level>[{level: ^8}]</level> "
    "<cyan>{extra[source]: ^10}</cyan> [{extra[logger_name]}] "
    "{message}"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[source]} | {extra[logger_name]} | {message} | {extra[context]}"
)

_configured = False


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    log_file: Optional[str] = None,
    enable_console: bool = True,
) -> None:
    """
    Install loguru sinks for the application.

    Safe to call more than once; existing sinks are replaced.

    Args:
        level: Minimum log level for all sinks
        log_file: Optional path for a rotating file sink
        enable_console: Whether to log to stderr
    """
    global _configured

    logger.remove()
    logger.configure(
        extra={"source": LogSource.SYSTEM.value, "logger_name": "root", "context": {}}
    )

    if enable_console:
        logger.add(
            sys.stderr,
            level=level.value,
            format=CONSOLE_FORMAT,
            colorize=sys.stderr.isatty(),
        )

    if log_file:
        logger.add(
            log_file,
            level=level.value,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention=5,
            enqueue=True,
        )

    _configured = True


def is_configured() -> bool:
    return _configured


class ServiceLogger:
    """
    Logger pre-bound to a logger name and source.

    Emoji priority (highest to lowest):
    1. Direct: emoji passed to the log method call
    2. Instance-set: default emoji given when creating the service logger
    3. Fallback: emoji based on log level
    """

    def __init__(
        self,
        logger_name: LoggerName,
        source: LogSource = LogSource.SYSTEM,
        default_emoji: Optional[LogEmoji] = None,
    ):
        self.logger_name = logger_name
        self.source = source
        self.default_emoji = default_emoji
        self._logger = logger.bind(
            logger_name=logger_name.value, source=source.value, context={}
        )

    def _resolve_emoji(
        self, method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if self.default_emoji is not None:
            return self.default_emoji
        return fallback_emoji

    def _log(
        self,
        level: LogLevel,
        message: str,
        emoji: LogEmoji,
        extra_context: Optional[Dict[str, Any]] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        bound = self._logger.bind(context=extra_context or {})
        if exception is not None:
            message = f"{message}: {exception}"
            bound = bound.opt(exception=exception)
        bound.log(level.value, f"{emoji.value} {message}")

    def debug(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        self._log(
            LogLevel.DEBUG,
            message,
            self._resolve_emoji(emoji, LogEmoji.DEBUG),
            extra_context,
        )

    def info(
        self,
        message: str,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        self._log(
            LogLevel.INFO,
            message,
            self._resolve_emoji(emoji, LogEmoji.INFO),
            extra_context,
        )

    def warning(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        self._log(
            LogLevel.WARNING,
            message,
            self._resolve_emoji(emoji, LogEmoji.WARNING),
            extra_context,
            exception,
        )

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict[str, Any]] = None,
        emoji: Optional[LogEmoji] = None,
    ) -> None:
        self._log(
            LogLevel.ERROR,
            message,
            self._resolve_emoji(emoji, LogEmoji.ERROR),
            extra_context,
            exception,
        )


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
) -> ServiceLogger:
    """
    Factory function to create a pre-configured logger for a specific service.

    Example:
        from ...services.logger import get_service_logger
        from ...enums import LoggerName, LogSource

        logger = get_service_logger(LoggerName.IMAGE_PIPELINE, LogSource.PIPELINE)
        logger.warning("Re-encode failed, keeping original", exception=e)
    """
    return ServiceLogger(logger_name, source, default_emoji)
