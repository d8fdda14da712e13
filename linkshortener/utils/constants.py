# Application environment
APP_ENV_ENV = 'APP_ENV'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Explicit path to the YAML configuration file
CONFIG_PATH_ENV = 'LINKSHORTENER_CONFIG'

# Configuration overrides (win over the YAML file)
LINK_TTL_SECONDS_ENV = 'LINK_TTL_SECONDS'
LINK_DEFAULT_CLICK_LIMIT_ENV = 'LINK_DEFAULT_CLICK_LIMIT'
CLEANUP_INTERVAL_SECONDS_ENV = 'CLEANUP_INTERVAL_SECONDS'
SHORTENER_DOMAIN_ENV = 'SHORTENER_DOMAIN'
SHORTENER_CODE_LENGTH_ENV = 'SHORTENER_CODE_LENGTH'
NOTIFICATIONS_ENABLED_ENV = 'NOTIFICATIONS_ENABLED'

# Default short URL TTL duration
ONE_DAY_SECONDS = 86_400  # 60 * 60 * 24
ONE_HOUR_SECONDS = 3_600

# Click limit sentinel for links without a quota
UNLIMITED_CLICKS = -1

# Default per-link click quota
DEFAULT_CLICK_LIMIT = 100

# Short code generation
DEFAULT_SHORTCODE_LENGTH = 6
MAX_SHORTCODE_LENGTH = 64
MAX_SHORTCODE_ATTEMPTS = 10

# Default public domain used to render short links
DEFAULT_SHORTENER_DOMAIN = 'short.ly'

# Number of lock stripes guarding the in-memory stores
LOCK_STRIPES = 64
