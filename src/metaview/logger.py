"""
Centralized logging configuration for MetaView.
"""

import logging
import os
import re
import sys
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Context var to hold request/trace id
REQUEST_ID: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def _resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


class ZoneFormatter(logging.Formatter):
    """Formatter that renders %(asctime)s in a configured time zone."""

    def __init__(self, fmt=None, datefmt=None, tz: str = "UTC"):
        super().__init__(fmt, datefmt)
        self.tz = _resolve_zone(tz)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime('%Y-%m-%dT%H:%M:%S %Z')


class RequestIdFilter(logging.Filter):
    """Inject request_id from contextvar into log records."""
    def filter(self, record: logging.LogRecord) -> bool:
        rid = REQUEST_ID.get()
        if not hasattr(record, "request_id"):
            record.request_id = rid or "-"
        return True


class _StripANSIFormatter(ZoneFormatter):
    ansi_re = re.compile(r"\x1b\[[0-9;]*m")

    def __init__(self, fmt=None, datefmt=None, tz: str = "UTC", keep_color: bool = False):
        super().__init__(fmt, datefmt, tz=tz)
        self.keep_color = keep_color

    def format(self, record):
        s = super().format(record)
        return s if self.keep_color else self.ansi_re.sub("", s)


class LoggerManager:
    """Manages application-wide logging configuration."""

    _instance: Optional['LoggerManager'] = None
    _configured: bool = False

    DETAILED_FORMAT = (
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] '
        '- [rid:%(request_id)s] - %(message)s'
    )
    SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - [rid:%(request_id)s] - %(message)s'

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_configured(self) -> bool:
        return LoggerManager._configured

    def setup_logging(
        self,
        level: str = "INFO",
        log_dir: str = "logs",
        timezone: str = "UTC",
    ) -> Path:
        """
        Configure application-wide logging.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory receiving metaview.log
            timezone: IANA zone used for timestamps

        Returns:
            Path of the log file
        """
        log_level = getattr(logging, level.upper(), logging.INFO)

        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / "metaview.log"

        req_filter = RequestIdFilter()

        # File handler - detailed logging
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            ZoneFormatter(self.DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S', tz=timezone)
        )
        file_handler.addFilter(req_filter)

        # Console handler - simpler logging, ANSI stripped on dumb terminals
        supports_color = sys.stdout.isatty() and os.getenv("TERM") not in (None, "dumb")
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(
            _StripANSIFormatter(
                self.SIMPLE_FORMAT, datefmt='%H:%M:%S', tz=timezone, keep_color=supports_color
            )
        )
        console_handler.addFilter(req_filter)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Remove existing handlers to avoid duplicates (Streamlit reruns call this again)
        root_logger.handlers.clear()
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        # Route server loggers through the same handlers
        for lname in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
            lg = logging.getLogger(lname)
            lg.setLevel(log_level)
            lg.handlers.clear()
            lg.addHandler(file_handler)
            lg.addHandler(console_handler)
            lg.propagate = False

        logger = logging.getLogger(__name__)
        logger.info("=" * 60)
        logger.info("MetaView Starting")
        logger.info(f"Log File: {log_file}")
        logger.info(f"Log Level: {level.upper()}")
        started_at = datetime.now(_resolve_zone(timezone)).strftime('%Y-%m-%d %H:%M:%S %Z')
        logger.info(f"Started at: {started_at}")
        logger.info("=" * 60)

        # Suppress noisy third-party loggers
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)
        logging.getLogger('asyncio').setLevel(logging.WARNING)

        LoggerManager._configured = True
        return log_file

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger instance for a specific module.

        Args:
            name: Logger name (typically __name__ of the module)

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)


def ensure_logging(level: str = "INFO", log_dir: str = "logs", timezone: str = "UTC") -> Optional[Path]:
    """
    Configure logging unless it already is.

    Returns:
        Path of the log file when this call configured logging, else None
    """
    manager = LoggerManager()
    if manager.is_configured:
        return None
    return manager.setup_logging(level=level, log_dir=log_dir, timezone=timezone)


def get_logger(name: str) -> logging.Logger:
    """
    Convenience function to get a logger.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logger instance
    """
    manager = LoggerManager()
    return manager.get_logger(name)


# Request ID helpers (used by API middleware)

def bind_request_id(request_id: Optional[str]) -> None:
    REQUEST_ID.set(request_id)


def clear_request_id() -> None:
    REQUEST_ID.set(None)


__all__ = [
    "LoggerManager",
    "ZoneFormatter",
    "RequestIdFilter",
    "ensure_logging",
    "get_logger",
    "bind_request_id",
    "clear_request_id",
]
