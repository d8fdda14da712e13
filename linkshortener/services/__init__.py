from linkshortener.services.notifications import (
    NotificationSink,
    NullNotificationSink,
    LoggingNotificationSink,
    ConsoleNotificationSink,
    notification_sink,
)
from linkshortener.services.link_service import LinkService, Statistics
from linkshortener.services.cleanup import CleanupScheduler


__all__ = [
    'NotificationSink',
    'NullNotificationSink',
    'LoggingNotificationSink',
    'ConsoleNotificationSink',
    'notification_sink',
    'LinkService',
    'Statistics',
    'CleanupScheduler',
]
