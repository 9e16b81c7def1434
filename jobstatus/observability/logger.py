"""
Logger configuration.

Configures the root logger once per process (API server or Celery worker)
with an ISO timestamp format and the level taken from settings.

Dependencies: logging (stdlib), jobstatus.configs
System role: Centralized logging configuration
"""

import logging
import sys

from jobstatus.configs import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure Python logging for the current process.

    Args:
        level: Log level name; defaults to LOG_LEVEL, or DEBUG when DEBUG is set
    """
    level_name = (level or get_settings().effective_log_level).upper()

    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.addHandler(handler)

    # Broker and store clients are chatty at DEBUG
    for noisy in ("kombu", "amqp", "redis", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

