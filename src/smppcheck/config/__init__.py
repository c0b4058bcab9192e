"""
smppcheck Configuration Management

Session, reassembly and logging settings with validation, loaded from
dictionaries, JSON files, the environment and .env files.
"""

from .base import BaseConfig
from .defaults import (
    DEFAULT_ENQUIRE_LINK_INTERVAL,
    DEFAULT_LOG_FORMAT,
    DEFAULT_PART_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_SUBMIT_DELAY,
)
from .settings import (
    LoggingConfig,
    ReassemblyConfig,
    SessionConfig,
    load_session_config,
)

__all__ = [
    # Base configuration class
    'BaseConfig',
    # Settings
    'SessionConfig',
    'ReassemblyConfig',
    'LoggingConfig',
    'load_session_config',
    # Defaults
    'DEFAULT_PORT',
    'DEFAULT_ENQUIRE_LINK_INTERVAL',
    'DEFAULT_READ_TIMEOUT',
    'DEFAULT_SUBMIT_DELAY',
    'DEFAULT_PART_TIMEOUT',
    'DEFAULT_LOG_FORMAT',
]
