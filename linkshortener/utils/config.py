"""Utility functions for application configuration management.

Configuration is assembled from three layers, later layers winning:

    1. Built-in defaults (see AppConfig)
    2. A YAML document, by default `<project root>/config/<APP_ENV>.yml`
    3. Environment variable overrides (see utils.constants)

The YAML document follows this structure:

    link:
      ttl_seconds: 86400
      default_click_limit: 100      # -1 means unlimited
    cleanup:
      interval_seconds: 3600
    shortener:
      domain: short.ly
      code_length: 6
    notifications:
      enabled: true

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    config_path() -> Path
        Return the YAML configuration file used when none is given explicitly.

    load_config(path: str | Path | None = None) -> AppConfig
        Load, merge and validate the application configuration.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> config = load_config()
    >>> config.link_ttl_seconds
    86400
"""

import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.constants import (
    APP_ENV_ENV,
    PROJECT_ROOT_ENV,
    CONFIG_PATH_ENV,
    LINK_TTL_SECONDS_ENV,
    LINK_DEFAULT_CLICK_LIMIT_ENV,
    CLEANUP_INTERVAL_SECONDS_ENV,
    SHORTENER_DOMAIN_ENV,
    SHORTENER_CODE_LENGTH_ENV,
    NOTIFICATIONS_ENABLED_ENV,
    ONE_DAY_SECONDS,
    ONE_HOUR_SECONDS,
    DEFAULT_CLICK_LIMIT,
    DEFAULT_SHORTCODE_LENGTH,
    DEFAULT_SHORTENER_DOMAIN,
    MAX_SHORTCODE_LENGTH,
    UNLIMITED_CLICKS,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Validated application configuration

    Attributes:
        link_ttl_seconds (int):
            Lifetime of a new short URL.
        default_click_limit (int):
            Click quota applied when the user gives none (-1 = unlimited).
        cleanup_interval_seconds (int):
            Period of the background cleanup sweep.
        shortcode_length (int):
            Length of generated short codes.
        notifications_enabled (bool):
            Whether expiry / quota notifications are delivered.
        shortener_domain (str):
            Public domain used to render short links.
    """

    link_ttl_seconds: int = ONE_DAY_SECONDS
    default_click_limit: int = DEFAULT_CLICK_LIMIT
    cleanup_interval_seconds: int = ONE_HOUR_SECONDS
    shortcode_length: int = DEFAULT_SHORTCODE_LENGTH
    notifications_enabled: bool = True
    shortener_domain: str = DEFAULT_SHORTENER_DOMAIN

    def __post_init__(self):
        if self.link_ttl_seconds <= 0:
            raise BadConfigurationError(f'Link TTL must be positive (given value: {self.link_ttl_seconds}).')
        if self.default_click_limit < 0 and self.default_click_limit != UNLIMITED_CLICKS:
            raise BadConfigurationError(
                f'Default click limit must be non-negative or {UNLIMITED_CLICKS} (given value: {self.default_click_limit}).'
            )
        if self.cleanup_interval_seconds <= 0:
            raise BadConfigurationError(f'Cleanup interval must be positive (given value: {self.cleanup_interval_seconds}).')
        if not 1 <= self.shortcode_length <= MAX_SHORTCODE_LENGTH:
            raise BadConfigurationError(
                f'Short code length must be between 1 and {MAX_SHORTCODE_LENGTH} (given value: {self.shortcode_length}).'
            )
        if not self.shortener_domain:
            raise BadConfigurationError('Shortener domain must be a non-empty string.')


_TRUE_VALUES = frozenset({'true', '1', 'yes', 'on'})
_FALSE_VALUES = frozenset({'false', '0', 'no', 'off'})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads the PROJECT_ROOT environment variable and falls back to the
    directory containing the `linkshortener` package.
    """
    return Path(os.environ.get(PROJECT_ROOT_ENV, Path(__file__).resolve().parents[2]))


def config_path() -> Path:
    return project_root() / 'config' / f'{app_env()}.yml'


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise BadConfigurationError(f"Invalid integer value for '{name}': {value!r}")
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise BadConfigurationError(f"Invalid integer value for '{name}': {value!r}") from e


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise BadConfigurationError(f"Invalid boolean value for '{name}': {value!r}")


def _parse_str(name: str, value: Any) -> str:
    return str(value).strip()


# (YAML section, YAML key, environment variable, AppConfig field, parser)
_SETTINGS = (
    ('link', 'ttl_seconds', LINK_TTL_SECONDS_ENV, 'link_ttl_seconds', _parse_int),
    ('link', 'default_click_limit', LINK_DEFAULT_CLICK_LIMIT_ENV, 'default_click_limit', _parse_int),
    ('cleanup', 'interval_seconds', CLEANUP_INTERVAL_SECONDS_ENV, 'cleanup_interval_seconds', _parse_int),
    ('shortener', 'code_length', SHORTENER_CODE_LENGTH_ENV, 'shortcode_length', _parse_int),
    ('shortener', 'domain', SHORTENER_DOMAIN_ENV, 'shortener_domain', _parse_str),
    ('notifications', 'enabled', NOTIFICATIONS_ENABLED_ENV, 'notifications_enabled', _parse_bool),
)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file into a Python dictionary.

    Returns {} for empty files.

    Raises:
        FileNotFoundError:
            If the file does not exist.
        BadConfigurationError:
            If the document is not valid YAML or not a mapping.
    """
    if not path.is_file():
        raise FileNotFoundError(f'YAML not found: {path}')
    with path.open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Malformed YAML configuration in {path}') from e

    data = data or {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f'Configuration root must be a mapping in {path}')
    return data


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """Load the application configuration

    Args:
        path (str | Path | None):
            Explicit YAML file. Falls back to `LINKSHORTENER_CONFIG`, then to
            `<project root>/config/<APP_ENV>.yml`.

    Returns:
        AppConfig: the merged and validated configuration.

    Raises:
        FileNotFoundError:
            If an explicitly requested file does not exist.
        BadConfigurationError:
            If a value cannot be parsed or fails validation.

    Example:
        >>> os.environ['LINK_TTL_SECONDS'] = '60'
        >>> load_config().link_ttl_seconds
        60
    """
    explicit = path or os.environ.get(CONFIG_PATH_ENV)
    yaml_path = Path(explicit) if explicit else config_path()

    try:
        document = _load_yaml(yaml_path)
    except FileNotFoundError:
        if explicit:
            raise
        logger.warning('Configuration file not found, using defaults.', extra={'configPath': str(yaml_path)})
        document = {}
    else:
        logger.info('Loaded configuration file.', extra={'configPath': str(yaml_path)})

    values: dict[str, Any] = {}
    for section, key, env_name, field_name, parser in _SETTINGS:
        block = document.get(section) or {}
        if not isinstance(block, dict):
            raise BadConfigurationError(f"Section '{section}' must be a mapping in {yaml_path}")
        if key in block and block[key] is not None:
            values[field_name] = parser(f'{section}.{key}', block[key])
        if os.environ.get(env_name):
            values[field_name] = parser(env_name, os.environ[env_name])

    config = AppConfig(**values)
    logger.info(
        'Configuration loaded.',
        extra={field.name: getattr(config, field.name) for field in fields(config)},
    )
    return config
