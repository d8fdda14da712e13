from linkshortener.utils.config import AppConfig, app_env, project_root, config_path, load_config
from linkshortener.utils.helpers import utc_now, get_short_url, format_click_limit
from linkshortener.utils.shortener import generate_shortcode, ShortcodeGenerator
from linkshortener.utils.validation import is_valid_url, validate_url
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'AppConfig',
    'app_env',
    'project_root',
    'config_path',
    'load_config',
    'utc_now',
    'get_short_url',
    'format_click_limit',
    'generate_shortcode',
    'ShortcodeGenerator',
    'is_valid_url',
    'validate_url',
    'initialize_logging',
]
