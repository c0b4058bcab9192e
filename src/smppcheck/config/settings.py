"""
smppcheck Configuration Settings

Session, reassembly and logging configuration. Session settings come from the
environment, optionally seeded from a .env file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

from ..exceptions import SMPPConfigurationException
from .base import BaseConfig
from .defaults import (
    DEFAULT_ENQUIRE_LINK_INTERVAL,
    DEFAULT_LOG_FORMAT,
    DEFAULT_PART_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_SUBMIT_DELAY,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig(BaseConfig):
    """SMPP session settings; only host is required"""

    host: str = field(default='', metadata={'env': 'SMPP_HOST'})
    port: int = field(default=DEFAULT_PORT, metadata={'env': 'SMPP_PORT'})
    system_id: str = field(default='', metadata={'env': 'SYSTEM_ID'})
    password: str = field(default='', metadata={'env': 'PASSWORD'})
    system_type: str = field(default='', metadata={'env': 'SYSTEM_TYPE'})
    enquire_link_interval: float = field(
        default=DEFAULT_ENQUIRE_LINK_INTERVAL, metadata={'env': 'SMPP_ENQUIRE_LINK'}
    )
    read_timeout: float = field(
        default=DEFAULT_READ_TIMEOUT, metadata={'env': 'SMPP_READ_TIMEOUT'}
    )
    tls: bool = field(default=True, metadata={'env': 'SMPP_TLS'})
    tls_insecure: bool = field(default=True, metadata={'env': 'SMPP_TLS_INSECURE'})
    source_addr: str = field(default='', metadata={'env': 'SMPP_SOURCE'})
    dest_addr: str = field(default='', metadata={'env': 'SMPP_DEST'})
    close_on_unknown_pdu: bool = field(
        default=False, metadata={'env': 'SMPP_CLOSE_ON_UNKNOWN_PDU'}
    )
    submit_delay: float = field(
        default=DEFAULT_SUBMIT_DELAY, metadata={'env': 'SMPP_SUBMIT_DELAY'}
    )

    @property
    def address(self) -> str:
        return f'{self.host}:{self.port}'

    def validate(self) -> None:
        """Validate session configuration."""
        if not self.host:
            raise SMPPConfigurationException(
                'SMPP_HOST is required', config_key='SMPP_HOST'
            )

        if not (1 <= self.port <= 65535):
            raise SMPPConfigurationException(
                f'Invalid port: {self.port} (must be 1-65535)',
                config_key='SMPP_PORT',
                config_value=str(self.port),
            )

        if self.enquire_link_interval <= 0:
            raise SMPPConfigurationException(
                'enquire_link_interval must be positive',
                config_key='SMPP_ENQUIRE_LINK',
                config_value=str(self.enquire_link_interval),
            )

        if self.read_timeout <= 0:
            raise SMPPConfigurationException(
                'read_timeout must be positive',
                config_key='SMPP_READ_TIMEOUT',
                config_value=str(self.read_timeout),
            )

        if self.submit_delay < 0:
            raise SMPPConfigurationException(
                'submit_delay must be non-negative',
                config_key='SMPP_SUBMIT_DELAY',
                config_value=str(self.submit_delay),
            )


@dataclass
class ReassemblyConfig(BaseConfig):
    """Concatenated-message tracking settings"""

    # Seconds an incomplete message is kept; 0 disables eviction.
    part_timeout: float = field(
        default=DEFAULT_PART_TIMEOUT, metadata={'env': 'SMPP_PART_TIMEOUT'}
    )

    def validate(self) -> None:
        if self.part_timeout < 0:
            raise SMPPConfigurationException(
                'part_timeout must be non-negative',
                config_key='SMPP_PART_TIMEOUT',
                config_value=str(self.part_timeout),
            )


@dataclass
class LoggingConfig(BaseConfig):
    """Logging configuration settings"""

    level: str = field(default='INFO', metadata={'env': 'SMPPCHECK_LOG_LEVEL'})
    format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = field(
        default=None, metadata={'env': 'SMPPCHECK_LOG_FILE'}
    )

    def validate(self) -> None:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.level.upper() not in valid_levels:
            raise SMPPConfigurationException(
                f'Invalid log level: {self.level}',
                config_key='level',
                config_value=self.level,
            )


def load_session_config(
    env_file: Optional[Union[str, Path]] = None, **overrides
) -> SessionConfig:
    """
    Load session settings from a .env file and the environment.

    Variables already set in the environment win over the .env file. A missing
    .env file is not an error.

    Args:
        env_file: Explicit .env path; the nearest .env is searched when omitted
        **overrides: Values taking precedence over both

    Raises:
        SMPPConfigurationException: If a required setting is missing or invalid
    """
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
    loaded = load_dotenv(dotenv_path=env_file)
    logger.debug(f'.env loaded: {loaded}')

    data = SessionConfig.env_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return SessionConfig.from_dict(data)
