"""Notification sinks for link lifecycle events

A sink is told when somebody tries to use an expired link, when a link runs
out of clicks and when the cleanup sweep removes an expired link.

Classes:
    NotificationSink:
        Interface implemented by every sink.
    NullNotificationSink:
        Discards every event (notifications disabled).
    LoggingNotificationSink:
        Records events through the standard logging module.
    ConsoleNotificationSink:
        Prints human readable messages to a text stream (the console).

Functions:
    notification_sink(enabled, stream=None) -> NotificationSink
        Pick the sink matching the configuration.
"""

import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from linkshortener.utils.helpers import format_click_limit


logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    @abstractmethod
    def on_expired(self, shortcode: str, target: str) -> None:
        pass

    @abstractmethod
    def on_quota_exhausted(self, shortcode: str, target: str, limit: int) -> None:
        pass


class NullNotificationSink(NotificationSink):
    def on_expired(self, shortcode: str, target: str) -> None:
        pass

    def on_quota_exhausted(self, shortcode: str, target: str, limit: int) -> None:
        pass


class LoggingNotificationSink(NotificationSink):
    def on_expired(self, shortcode: str, target: str) -> None:
        logger.info('Link expired notification.', extra={'shortcode': shortcode, 'target': target})

    def on_quota_exhausted(self, shortcode: str, target: str, limit: int) -> None:
        logger.info('Click limit reached notification.', extra={'shortcode': shortcode, 'target': target, 'clickLimit': limit})


class ConsoleNotificationSink(LoggingNotificationSink):
    """Print notifications for the interactive user

    Messages are also logged (see LoggingNotificationSink).

    Args:
        stream (TextIO | None):
            Output stream. Defaults to sys.stdout at the time of each write.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _write(self, message: str) -> None:
        stream = self.stream or sys.stdout
        print(message, file=stream, flush=True)

    def on_expired(self, shortcode: str, target: str) -> None:
        self._write(f'\n[!] NOTICE: link has expired\n    Short code:   {shortcode}\n    Original URL: {target}\n')
        super().on_expired(shortcode, target)

    def on_quota_exhausted(self, shortcode: str, target: str, limit: int) -> None:
        self._write(
            f'\n[!] NOTICE: click limit reached\n'
            f'    Short code:   {shortcode}\n'
            f'    Original URL: {target}\n'
            f'    Click limit:  {format_click_limit(limit)}\n'
        )
        super().on_quota_exhausted(shortcode, target, limit)


def notification_sink(enabled: bool, stream: Optional[TextIO] = None) -> NotificationSink:
    """Return the sink matching the `notifications_enabled` setting

    Args:
        enabled (bool):
            False yields a NullNotificationSink.
        stream (TextIO | None):
            When given, notifications are printed there as well as logged.

    Returns:
        NotificationSink: the selected sink.
    """
    if not enabled:
        return NullNotificationSink()
    if stream is not None:
        return ConsoleNotificationSink(stream)
    return LoggingNotificationSink()
