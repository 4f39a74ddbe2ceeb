"""
Centralized logging configuration for the pen inventory backend.

This module provides request-aware logging: every record carries the id,
method and path of the HTTP request that produced it, so the log lines of
one webhook delivery can be followed even when requests interleave on
Flask's worker threads.

Features:
    - Request id / method / path in all log messages ("-" outside requests)
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper functions for getting loggers with consistent naming

Log Format:
    2025-12-03 10:15:30 [INFO    ] [-] app - Starting application
    2025-12-03 10:15:31 [INFO    ] [3f2a9c1e POST /temp-save] services.staging_store - Saved customization ...
    2025-12-03 10:15:32 [INFO    ] [7b01d4aa POST /payment-webhook] order.5c1f0e2d - Inventory updated and order logged

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes request context automatically")

    # For one staged order
    order_logger = get_order_logger(temp_order_id)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import g, has_request_context, request


APP_LOGGER_NAME = "pen_inventory"


# =============================================================================
# REQUEST CONTEXT FILTER
# =============================================================================

class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds HTTP request context to all log records.

    Adds three attributes to each record:
        - request_id: Short id assigned by the app's before_request hook
        - method: HTTP method
        - path: Request path

    Outside a request (startup, shutdown) all three are "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.request_id = g.get("request_id", "-")
            record.method = request.method
            record.path = request.path
        else:
            record.request_id = "-"
            record.method = "-"
            record.path = "-"

        # Context only, never drop a record
        return True


class _RequestContextFormatter(logging.Formatter):
    """Renders the request part as "-" or "<id> <METHOD> <path>"."""

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "request_id", "-") == "-":
            record.request_context = "-"
        else:
            record.request_context = f"{record.request_id} {record.method} {record.path}"
        return super().format(record)


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with request context.

    This sets up:
    1. Console handler (always enabled)
    2. Rotating file handler (optional)
    3. Error file handler (optional) - ERROR/CRITICAL only
    4. Request context filter on every handler

    Args:
        app_name: Name of the root logger (default: "pen_inventory")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False

    # Allows re-configuration (tests create many apps)
    logger.handlers.clear()

    formatter = _RequestContextFormatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(request_context)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    context_filter = RequestContextFilter()

    # ---------------------------------------------------------------------
    # Console Handler (always enabled)
    # ---------------------------------------------------------------------
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    # ---------------------------------------------------------------------
    # File Handlers (optional)
    # ---------------------------------------------------------------------
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(context_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Example:
        # In services/staging_store.py
        logger = get_logger(__name__)
        # Logger name: "pen_inventory.services.staging_store"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def get_order_logger(temp_order_id: str) -> logging.Logger:
    """
    Get a logger for one staged order.

    Uses the first 8 characters of the tempOrderId so all lines about one
    order can be grepped together.

    Example:
        get_order_logger("5c1f0e2d-...")  # "pen_inventory.order.5c1f0e2d"
    """
    temp_order_id = str(temp_order_id)
    short_id = temp_order_id[:8] if len(temp_order_id) >= 8 else temp_order_id
    return logging.getLogger(f"{APP_LOGGER_NAME}.order.{short_id}")
