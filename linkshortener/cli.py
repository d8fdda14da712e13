"""Interactive console for the link shortener

This CLI follows this procedure:
- Step 1: Parse CLI arguments
- Step 2: Load configuration and initialize logging
- Step 3: Wire DAOs, services and the cleanup scheduler
- Step 4: Identify the user (existing UUID or a brand new one)
- Step 5: Read and execute commands until `exit`, EOF or Ctrl+C
- Step 6: Stop the cleanup scheduler

CLI usage:
    $ linkshortener
    $ linkshortener --config config/dev.yml --log-level DEBUG
    $ python -m linkshortener

Console commands:
    create <url> [limit]   shorten a URL (limit: max clicks, -1 = unlimited)
    open <code>            follow a short link in the browser
    list                   show your links
    info <code>            show link details without counting a click
    update <code> <limit>  change the click limit of your link
    delete <code>          delete your link
    stats                  show system statistics
    uuid                   show your UUID
    cleanup                remove expired links now
    help                   show help
    exit, quit             leave
"""

import sys
import shlex
import logging
import argparse
import webbrowser
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TextIO
from uuid import UUID

from linkshortener.dao.memory import ShortURLMemoryDAO, UserMemoryDAO
from linkshortener.exceptions import ForbiddenError, LinkShortenerError
from linkshortener.models import LinkStatus, ShortURLModel
from linkshortener.services import CleanupScheduler, LinkService, notification_sink
from linkshortener.types import URLOpener
from linkshortener.utils import (
    AppConfig,
    ShortcodeGenerator,
    format_click_limit,
    get_short_url,
    initialize_logging,
    load_config,
)


logger = logging.getLogger(__name__)

DATE_FORMAT = '%d.%m.%Y %H:%M:%S'

STATUS_LABELS = {
    LinkStatus.ACTIVE: '[active]',
    LinkStatus.EXPIRED: '[expired]',
    LinkStatus.QUOTA_EXHAUSTED: '[limit reached]',
}

HELP_TEXT = """
Available commands:

  create <URL> [limit]   Create a short link
                         URL: full link (http:// or https://)
                         limit: max number of clicks, -1 for unlimited (default: {default_limit})
                         Example: create https://example.com 50

  open <code>            Open a short link in the browser
  list                   Show all your links
  info <code>            Show link details
  update <code> <limit>  Change the click limit
  delete <code>          Delete a link (owner only)
  stats                  Show system statistics
  uuid                   Show your UUID
  cleanup                Remove expired links now
  help                   Show this help
  exit, quit             Leave the program"""


@dataclass
class Application:
    config: AppConfig
    service: LinkService
    scheduler: CleanupScheduler


def build_application(config: AppConfig, stream: Optional[TextIO] = None) -> Application:
    """Wire stores, services and the cleanup scheduler

    Args:
        config (AppConfig):
            Application configuration.
        stream (TextIO | None):
            Console stream for user-facing notifications. None only logs them.

    Returns:
        Application: wired (not yet started) components.
    """
    service = LinkService(
        users=UserMemoryDAO(),
        short_urls=ShortURLMemoryDAO(),
        generator=ShortcodeGenerator(length=config.shortcode_length),
        notifications=notification_sink(config.notifications_enabled, stream=stream),
        config=config,
    )
    scheduler = CleanupScheduler(service, interval_seconds=config.cleanup_interval_seconds)
    return Application(config=config, service=service, scheduler=scheduler)


def open_in_browser(url: str) -> bool:
    try:
        return webbrowser.open(url)
    except webbrowser.Error:
        logger.exception('Error opening URL in browser.', extra={'url': url})
        return False


def _format_date(value: datetime) -> str:
    return value.astimezone().strftime(DATE_FORMAT)


def _truncate(text: str, length: int) -> str:
    return text if len(text) <= length else f'{text[: length - 3]}...'


class ConsoleInterface:
    """Read commands from a text stream and run them against LinkService

    Domain errors are printed and never stop the loop.

    Args:
        service (LinkService):
            Link lifecycle service.
        config (AppConfig):
            Used for defaults shown to the user and rendering short links.
        stdin (TextIO | None):
            Command source. Defaults to sys.stdin.
        stdout (TextIO | None):
            Output stream. Defaults to sys.stdout.
        opener (URLOpener):
            Opens a URL, returns True on success. Defaults to the web browser.
    """

    def __init__(
        self,
        service: LinkService,
        config: AppConfig,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        opener: URLOpener = open_in_browser,
    ):
        self.service = service
        self.config = config
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.opener = opener
        self.user_id: Optional[UUID] = None
        self.running = False

        self.commands = {
            'help': self.handle_help,
            'create': self.handle_create,
            'open': self.handle_open,
            'list': self.handle_list,
            'info': self.handle_info,
            'update': self.handle_update,
            'delete': self.handle_delete,
            'stats': self.handle_stats,
            'uuid': self.handle_uuid,
            'cleanup': self.handle_cleanup,
            'exit': self.handle_exit,
            'quit': self.handle_exit,
        }

    def print(self, *lines: str) -> None:
        for line in lines:
            print(line, file=self.stdout)
        self.stdout.flush()

    def prompt(self, text: str) -> Optional[str]:
        """Print a prompt and read one line, None on EOF"""
        print(text, end='', file=self.stdout, flush=True)
        line = self.stdin.readline()
        return None if line == '' else line.strip()

    # -------------------------------
    # Session
    # -------------------------------

    def start(self) -> None:
        self.print('', '=== URL Shortener ===', "Type 'help' for the list of commands")
        self.login()

        self.running = True
        while self.running:
            line = self.prompt('\n> ')
            if line is None:
                break
            if line:
                self.execute(line)

    def login(self) -> UUID:
        answer = self.prompt('\nEnter your UUID (or press Enter to create a new user): ')
        if answer:
            try:
                user_id = UUID(answer)
            except ValueError:
                self.print('Invalid UUID, creating a new account')
            else:
                if self.service.user_exists(user_id):
                    self.user_id = user_id
                    self.print('Signed in successfully')
                    return user_id
                self.print('User not found, creating a new account')

        self.user_id = self.service.create_user()
        self.print('', 'New user created', f'Your UUID: {self.user_id}', 'Keep this UUID for future sessions!')
        return self.user_id

    def execute(self, line: str) -> None:
        try:
            command, *args = shlex.split(line)
        except ValueError as e:
            self.print(f'Error: {e}')
            return

        handler = self.commands.get(command.lower())
        if handler is None:
            self.print("Unknown command. Type 'help' for the list of commands.")
            return

        try:
            handler(args)
        except ForbiddenError as e:
            self.print(f'Access denied: {e}')
        except LinkShortenerError as e:
            self.print(f'Error: {e}')
        except Exception:
            logger.exception('Error processing command.', extra={'command': command})
            self.print('An error occurred while executing the command')

    # -------------------------------
    # Commands
    # -------------------------------

    def handle_help(self, args: list[str]) -> None:
        self.print(HELP_TEXT.format(default_limit=format_click_limit(self.config.default_click_limit)))

    def handle_create(self, args: list[str]) -> None:
        if not args:
            self.print('Usage: create <URL> [limit]')
            return

        click_limit = None
        if len(args) > 1:
            try:
                click_limit = int(args[1])
            except ValueError:
                self.print('Invalid limit, using the default value')

        short_url = self.service.create_short_url(args[0], self.user_id, click_limit)
        self.print(
            '',
            'Short link created!',
            f'Short code:   {short_url.shortcode}',
            f'Short link:   {get_short_url(short_url.shortcode, self.config.shortener_domain)}',
            f'Original URL: {short_url.target}',
            f'Expires:      {_format_date(short_url.expires_at)}',
            f'Click limit:  {format_click_limit(short_url.click_limit)}',
        )

    def handle_open(self, args: list[str]) -> None:
        if not args:
            self.print('Usage: open <code>')
            return

        shortcode = args[0]
        target = self.service.access(shortcode)
        if target is None:
            self.print('Link is unavailable or not found')
            short_url = self.service.get_info(shortcode)
            if short_url is not None:
                status = short_url.status(self.service.clock())
                if status is LinkStatus.EXPIRED:
                    self.print('Reason: the link has expired')
                elif status is LinkStatus.QUOTA_EXHAUSTED:
                    self.print('Reason: the click limit is reached')
            return

        self.print(f'Opening URL: {target}')
        if not self.opener(target):
            self.print('Could not open a browser', f'Copy the link: {target}')

    def handle_list(self, args: list[str]) -> None:
        links = self.service.list_by_owner(self.user_id)
        if not links:
            self.print('', 'You have not created any links yet')
            return

        now = self.service.clock()
        self.print('', f'Your links ({len(links)}):', '-' * 100)
        for link in links:
            self.print(
                f'{STATUS_LABELS[link.status(now)]} {link.shortcode} | {_truncate(link.target, 60)}',
                f'   Clicks: {link.click_count}/{format_click_limit(link.click_limit)} | Expires: {_format_date(link.expires_at)}',
                '',
            )

    def handle_info(self, args: list[str]) -> None:
        if not args:
            self.print('Usage: info <code>')
            return

        short_url = self.service.get_info(args[0])
        if short_url is None:
            self.print('Link not found')
            return
        self.print(*self._describe(short_url))

    def _describe(self, short_url: ShortURLModel) -> list[str]:
        owner = 'you' if short_url.is_owned_by(self.user_id) else 'another user'
        return [
            '',
            'Link information:',
            '-' * 80,
            f'Short code:   {short_url.shortcode}',
            f'Short link:   {get_short_url(short_url.shortcode, self.config.shortener_domain)}',
            f'Original URL: {short_url.target}',
            f'Owner:        {owner}',
            f'Created:      {_format_date(short_url.created_at)}',
            f'Expires:      {_format_date(short_url.expires_at)}',
            f'Clicks:       {short_url.click_count}/{format_click_limit(short_url.click_limit)}',
            f'Status:       {short_url.status(self.service.clock())}',
        ]

    def handle_update(self, args: list[str]) -> None:
        if len(args) < 2:
            self.print('Usage: update <code> <new_limit>')
            return

        try:
            click_limit = int(args[1])
        except ValueError:
            self.print('Error: the limit must be an integer')
            return

        self.service.update_click_limit(args[0], self.user_id, click_limit)
        self.print(f'Click limit updated: {format_click_limit(click_limit)}')

    def handle_delete(self, args: list[str]) -> None:
        if not args:
            self.print('Usage: delete <code>')
            return

        self.service.delete_short_url(args[0], self.user_id)
        self.print('Link deleted')

    def handle_stats(self, args: list[str]) -> None:
        statistics = self.service.statistics()
        ttl = self.config.link_ttl_seconds
        self.print(
            '',
            'System statistics:',
            '-' * 40,
            f'Users: {statistics.user_count}, Links: {statistics.link_count}',
            f'Default TTL: {ttl}s ({ttl // 3600}h)',
            f'Default click limit: {format_click_limit(self.config.default_click_limit)}',
        )

    def handle_uuid(self, args: list[str]) -> None:
        self.print('', f'Your UUID: {self.user_id}')

    def handle_cleanup(self, args: list[str]) -> None:
        self.print('Removing expired links...')
        deleted = self.service.cleanup_expired()
        self.print(f'Cleanup finished. Links removed: {deleted}')

    def handle_exit(self, args: list[str]) -> None:
        self.print('', 'Goodbye!')
        self.running = False


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        int: process exit code.
    """
    parser = argparse.ArgumentParser(
        prog='linkshortener',
        description='Interactive URL shortener with link TTL and click limits',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML configuration file (default: $LINKSHORTENER_CONFIG or config/<APP_ENV>.yml)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level, e.g. DEBUG, INFO, WARNING (default: $LOG_LEVEL or INFO)',
    )
    args = parser.parse_args(argv)

    initialize_logging(args.log_level)
    try:
        config = load_config(args.config)
    except (FileNotFoundError, LinkShortenerError) as e:
        logger.exception('Failed to load configuration.')
        print(f'Configuration error: {e}', file=sys.stderr)
        return 1

    app = build_application(config, stream=sys.stdout)
    logger.info('Starting URL shortener.')
    with app.scheduler:
        try:
            ConsoleInterface(app.service, config).start()
        except KeyboardInterrupt:
            print('\nGoodbye!')
    logger.info('URL shortener terminated.')
    return 0
