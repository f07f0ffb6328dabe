"""
Logging configuration for the cart engine

Console output for development, an optional rotating JSON log file, and
structlog wired over the standard library for structured loggers.
"""

import logging
import logging.handlers
import os
import sys
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from cartsync.infrastructure.configuration.config import Settings, get_config
from cartsync.infrastructure.utilities.constants import LoggingSettings


class CartJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with cart-engine specific fields"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["thread_name"] = threading.current_thread().name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "owner_key"):
            log_record["owner_key"] = record.owner_key

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


def _configure_structlog() -> None:
    """Configure structlog for structured logging"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging(config: Optional[Settings] = None) -> None:
    """Setup logging for the process"""
    config = config or get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    if config.environment != "production":
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(console_handler)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LoggingSettings.MAX_LOG_FILE_SIZE,
            backupCount=LoggingSettings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(CartJsonFormatter())
        root_logger.addHandler(file_handler)

    _configure_structlog()

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "✅ Logging configured - Level: %s, JSON file: %s",
        config.log_level,
        config.log_file or "disabled",
    )


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class PerformanceLogger:
    """Context manager for performance logging"""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None, details: Optional[Dict[str, Any]] = None):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            self.logger.debug(
                "Completed operation: %s in %.1fms",
                self.operation_name,
                self.duration_ms,
                extra={"operation": self.operation_name, "operation_time": self.duration_ms, **self.details},
            )
        else:
            self.logger.warning(
                "Failed operation: %s after %.1fms (%s)",
                self.operation_name,
                self.duration_ms,
                exc_type.__name__,
                extra={"operation": self.operation_name, "operation_time": self.duration_ms, **self.details},
            )
        return False
