"""Domain exceptions raised by the link shortener services.

Every exception carries an `error_code` class attribute so the console (or
any other front end) can map failures without string matching.

Classes:
    LinkShortenerError:
        Base class for all application-specific errors.

    InvalidArgumentError:
        Malformed URL, invalid click limit, unknown owner at creation time.

    NotFoundError:
        Unknown short code on update or delete.

    ForbiddenError:
        Mutation attempted by a user who does not own the link.

    ExhaustedRetriesError:
        Short code generation kept colliding with existing links.

    ConfigurationError / BadConfigurationError:
        Invalid application configuration.
"""


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:link_shortener_error'


class InvalidArgumentError(LinkShortenerError):
    """Raised when an operation receives an invalid argument."""

    error_code = 'app:invalid_argument_error'


class NotFoundError(LinkShortenerError):
    """Raised when a short URL does not exist."""

    error_code = 'app:not_found_error'


class ForbiddenError(LinkShortenerError):
    """Raised when a user tries to modify a link owned by somebody else."""

    error_code = 'app:forbidden_error'


class ExhaustedRetriesError(LinkShortenerError):
    """Raised when no unique short code could be generated."""

    error_code = 'app:exhausted_retries_error'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
