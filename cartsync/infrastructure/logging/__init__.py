"""
Logging Infrastructure
"""

from .logging_config import (
    CartJsonFormatter,
    PerformanceLogger,
    get_structured_logger,
    setup_logging,
)

__all__ = [
    "CartJsonFormatter",
    "PerformanceLogger",
    "get_structured_logger",
    "setup_logging",
]
