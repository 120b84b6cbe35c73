import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: Any, default: "LogLevel" = None) -> "LogLevel":
        """Accept a LogLevel or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return default or cls.INFO


_RANKS = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


class Slogger:
    log_path = "logs/ipam_console.log"
    min_level = LogLevel.DEBUG

    @classmethod
    def configure(cls, path: Optional[str] = None, level: Any = None) -> None:
        """
        Point the logger at a different file and/or raise the minimum level.

        Args:
            path: New log file path (directories are created on first write)
            level: Minimum level to write, as a LogLevel or its name
        """
        if path:
            cls.log_path = path
        if level is not None:
            cls.min_level = LogLevel.parse(level, cls.min_level)

    @classmethod
    def _ensure_log_directory(cls):
        """Ensure that the logs directory exists."""
        log_dir = os.path.dirname(cls.log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

    @staticmethod
    def _format_context(context: Optional[Dict[str, Any]]) -> str:
        if not context:
            return ""
        return " | " + " | ".join(f"{k}={v}" for k, v in context.items())

    @classmethod
    def _write(cls, line: str) -> None:
        cls._ensure_log_directory()
        with open(cls.log_path, "a", encoding="utf-8") as f:
            f.write(line)

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Log a message with an optional level and context.

        Args:
            message: The message to log
            level: The log level (DEBUG, INFO, WARNING, ERROR)
            context: Optional dictionary of contextual information
        """
        if level.rank < cls.min_level.rank:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {level.value} - {message}{cls._format_context(context)}\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a debug message."""
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an info message."""
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a warning message."""
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an error message."""
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: BaseException, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """
        Log an exception followed by its traceback.

        Args:
            e: The exception to log
            message: What was being attempted when it was raised
            context: Optional dictionary of contextual information
        """
        error_context = dict(context or {})
        error_context.update({
            "exception_type": type(e).__name__,
            "exception_message": str(e),
        })
        cls.error(f"{message}: {type(e).__name__} - {e}", error_context)

        if e.__traceback__ is not None:
            exc_traceback = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        else:
            exc_traceback = traceback.format_exc()
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {LogLevel.ERROR.value} - TRACEBACK:\n{exc_traceback}\n")
