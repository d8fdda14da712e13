"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), project_root() and config_path() read environment variables.

2. AppConfig validation
   - Ensures defaults match the documented values.
   - Ensures invalid values raise BadConfigurationError.

3. Configuration loading behavior
   - Ensures load_config() reads YAML files and applies environment overrides.
   - Ensures a missing default file falls back to defaults while a missing
     explicit file raises FileNotFoundError.
   - Ensures malformed documents and values raise BadConfigurationError.
"""

from pathlib import Path

import pytest

from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils import config
from linkshortener.utils.config import AppConfig, load_config


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """Point PROJECT_ROOT at an empty temporary project."""
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    return tmp_path


@pytest.fixture
def write_yaml(tmp_path):
    def _write(content: str, name: str = 'app.yml') -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path

    return _write


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    assert config.app_env() == 'local'
    monkeypatch.setenv('APP_ENV', 'DEV')
    assert config.app_env() == 'dev'


def test_project_root(monkeypatch, tmp_path):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    assert config.project_root() == tmp_path


def test_project_root_defaults_to_repository_root(monkeypatch):
    monkeypatch.delenv('PROJECT_ROOT', raising=False)
    assert (config.project_root() / 'linkshortener' / '__init__.py').is_file()


def test_config_path(project, monkeypatch):
    monkeypatch.setenv('APP_ENV', 'test')
    assert config.config_path() == project / 'config' / 'test.yml'


# -------------------------------
# 2. AppConfig validation
# -------------------------------


def test_app_config_defaults():
    app_config = AppConfig()

    assert app_config.link_ttl_seconds == 86400
    assert app_config.default_click_limit == 100
    assert app_config.cleanup_interval_seconds == 3600
    assert app_config.shortcode_length == 6
    assert app_config.notifications_enabled is True
    assert app_config.shortener_domain == 'short.ly'


def test_app_config_accepts_unlimited_click_limit():
    assert AppConfig(default_click_limit=-1).default_click_limit == -1


@pytest.mark.parametrize(
    'overrides',
    [
        {'link_ttl_seconds': 0},
        {'link_ttl_seconds': -10},
        {'default_click_limit': -2},
        {'cleanup_interval_seconds': 0},
        {'shortcode_length': 0},
        {'shortcode_length': 65},
        {'shortener_domain': ''},
    ],
)
def test_app_config_invalid_values(overrides):
    with pytest.raises(BadConfigurationError):
        AppConfig(**overrides)


# -------------------------------
# 3. Configuration loading behavior
# -------------------------------


def test_load_config_from_yaml(write_yaml):
    path = write_yaml(
        """
link:
  ttl_seconds: 120
  default_click_limit: -1
cleanup:
  interval_seconds: 30
shortener:
  domain: https://sho.rt
  code_length: 8
notifications:
  enabled: false
"""
    )

    app_config = load_config(path)

    assert app_config == AppConfig(
        link_ttl_seconds=120,
        default_click_limit=-1,
        cleanup_interval_seconds=30,
        shortcode_length=8,
        notifications_enabled=False,
        shortener_domain='https://sho.rt',
    )


def test_load_config_partial_yaml_keeps_defaults(write_yaml):
    app_config = load_config(str(write_yaml('link:\n  ttl_seconds: 60\n')))

    assert app_config.link_ttl_seconds == 60
    assert app_config.default_click_limit == 100
    assert app_config.cleanup_interval_seconds == 3600


def test_load_config_empty_yaml(write_yaml):
    assert load_config(write_yaml('')) == AppConfig()


def test_load_config_default_path(project, write_yaml):
    write_yaml('shortener:\n  code_length: 7\n', name='config/local.yml')
    assert load_config().shortcode_length == 7


def test_load_config_path_from_environment(monkeypatch, write_yaml):
    monkeypatch.setenv('LINKSHORTENER_CONFIG', str(write_yaml('cleanup:\n  interval_seconds: 10\n')))
    assert load_config().cleanup_interval_seconds == 10


def test_load_config_missing_default_file_uses_defaults(project):
    assert load_config() == AppConfig()


def test_load_config_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'missing.yml')


def test_load_config_environment_overrides(project, monkeypatch, write_yaml):
    write_yaml('link:\n  ttl_seconds: 120\n  default_click_limit: 5\n', name='config/local.yml')
    monkeypatch.setenv('LINK_TTL_SECONDS', '900')
    monkeypatch.setenv('LINK_DEFAULT_CLICK_LIMIT', '-1')
    monkeypatch.setenv('CLEANUP_INTERVAL_SECONDS', ' 15 ')
    monkeypatch.setenv('SHORTENER_DOMAIN', 'go.example')
    monkeypatch.setenv('SHORTENER_CODE_LENGTH', '10')
    monkeypatch.setenv('NOTIFICATIONS_ENABLED', 'off')

    app_config = load_config()

    assert app_config.link_ttl_seconds == 900
    assert app_config.default_click_limit == -1
    assert app_config.cleanup_interval_seconds == 15
    assert app_config.shortener_domain == 'go.example'
    assert app_config.shortcode_length == 10
    assert app_config.notifications_enabled is False


@pytest.mark.parametrize('value, expected', [('true', True), ('YES', True), ('1', True), ('False', False), ('no', False)])
def test_load_config_boolean_overrides(project, monkeypatch, value, expected):
    monkeypatch.setenv('NOTIFICATIONS_ENABLED', value)
    assert load_config().notifications_enabled is expected


@pytest.mark.parametrize(
    'env_name, value',
    [
        ('LINK_TTL_SECONDS', 'a day'),
        ('LINK_TTL_SECONDS', '0'),
        ('LINK_DEFAULT_CLICK_LIMIT', '-5'),
        ('SHORTENER_CODE_LENGTH', '6.5'),
        ('NOTIFICATIONS_ENABLED', 'maybe'),
    ],
)
def test_load_config_invalid_environment_values(project, monkeypatch, env_name, value):
    monkeypatch.setenv(env_name, value)
    with pytest.raises(BadConfigurationError):
        load_config()


@pytest.mark.parametrize(
    'content',
    [
        'link: [unclosed',
        '- just\n- a\n- list\n',
        'link: 42\n',
        'link:\n  ttl_seconds: true\n',
        'notifications:\n  enabled: sometimes\n',
    ],
)
def test_load_config_malformed_yaml(write_yaml, content):
    with pytest.raises(BadConfigurationError):
        load_config(write_yaml(content))
