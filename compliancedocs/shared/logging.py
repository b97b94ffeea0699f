"""Logging configuration for the application."""

import logging
import sys

from compliancedocs.shared.context import get_current_user_id


class _ActorFilter(logging.Filter):
    """Attach the authenticated user id (or '-') to every record as %(user_id)s."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.user_id = get_current_user_id() or "-"
        return True


def setup_logging(debug: bool = False) -> None:
    """Configure application-wide logging.

    Level is DEBUG when debug is True, otherwise INFO. Output goes to stdout.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_ActorFilter())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [user=%(user_id)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
