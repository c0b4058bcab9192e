"""
Configuration Base Class

Dataclass-based configuration with validation and loading from dictionaries,
environment variables and JSON files.
"""

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

from ..exceptions import SMPPConfigurationException

T = TypeVar('T', bound='BaseConfig')

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def _convert(field_type: Any, value: str) -> Any:
    """Convert an environment string to a field's declared type."""
    if field_type is bool:
        return value.strip().lower() in _TRUE_VALUES
    if field_type is int:
        return int(value)
    if field_type is float:
        return float(value)
    return value


@dataclasses.dataclass
class BaseConfig:
    """Base configuration class with validation and serialization."""

    def validate(self) -> None:
        """Validate configuration values. Override in subclasses."""

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary, ignoring unknown keys."""
        field_names = {f.name for f in dataclasses.fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}

        try:
            instance = cls(**filtered_data)
            instance.validate()
            return instance
        except (TypeError, ValueError) as e:
            raise SMPPConfigurationException(
                f'Invalid configuration data for {cls.__name__}: {e}',
                original_error=e,
            ) from e

    @classmethod
    def from_env(cls: Type[T], prefix: str = '') -> T:
        """Create config from environment variables."""
        return cls.from_dict(cls.env_dict(prefix))

    @classmethod
    def env_dict(cls, prefix: str = '') -> Dict[str, Any]:
        """
        Collect set environment variables for this config's fields.

        A field's variable name is taken from its 'env' metadata when set,
        otherwise it is the prefix followed by the upper-cased field name.
        Empty variables count as unset.
        """
        env_data: Dict[str, Any] = {}
        prefix = prefix.upper()

        for f in dataclasses.fields(cls):
            env_key = f.metadata.get('env') or f'{prefix}{f.name.upper()}'
            env_value = os.getenv(env_key)
            if env_value is None or env_value == '':
                continue

            try:
                env_data[f.name] = _convert(f.type, env_value)
            except (ValueError, TypeError) as e:
                raise SMPPConfigurationException(
                    f'Invalid environment value for {env_key}: {env_value}',
                    config_key=env_key,
                    config_value=env_value,
                    original_error=e,
                ) from e

        return env_data

    @classmethod
    def from_file(cls: Type[T], file_path: Union[str, Path]) -> T:
        """Create config from JSON file."""
        file_path = Path(file_path)

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SMPPConfigurationException(
                f'Invalid JSON in configuration file: {file_path}',
                config_key='config_file',
                config_value=str(file_path),
                original_error=e,
            ) from e
        except OSError as e:
            raise SMPPConfigurationException(
                f'Error reading configuration file: {file_path}',
                config_key='config_file',
                config_value=str(file_path),
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise SMPPConfigurationException(
                'Configuration file must contain a JSON object',
                config_key='config_file',
                config_value=str(file_path),
            )
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return dataclasses.asdict(self)
