"""
Observability module.

Provides process-wide logging configuration and structured logging helpers.
"""

from jobstatus.observability.logger import configure_logging
from jobstatus.observability.log_utils import log_exception_with_context, log_with_context

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
]
