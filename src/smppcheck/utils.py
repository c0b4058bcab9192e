"""
smppcheck Utilities Module

Logging setup and small helpers shared by the command line and the session
adapter.
"""

import logging
from typing import Optional

from .config.defaults import DEFAULT_LOG_FORMAT


def mask_sensitive_data(text: str, field_name: str = '') -> str:
    """Mask sensitive data for logging."""
    if 'password' in field_name.lower():
        return '*' * min(len(text), 8) if text else ''
    return text


def setup_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
) -> None:
    """Set up basic logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)


def preview(text: str, limit: int = 40) -> str:
    """Shorten message text for log lines."""
    if len(text) <= limit:
        return text
    return f'{text[: limit - 3]}...'


__all__ = [
    'mask_sensitive_data',
    'setup_logging',
    'preview',
]
