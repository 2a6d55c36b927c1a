"""Logging configuration for the application."""

import logging
import sys

_configured = False

def setup_logging(level: int = logging.INFO):
    """Configure logging for the application."""
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    # Service loggers whose fail-closed paths must stay visible
    loggers = [
        'meritbadge.events.service',
        'meritbadge.auth.supabase',
        'meritbadge.db.event_store',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.INFO)
        # Don't add handler here since it's already handled by root logger

    _configured = True
