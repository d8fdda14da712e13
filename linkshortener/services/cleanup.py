"""Background removal of expired short URLs

CleanupScheduler runs LinkService.cleanup_expired() on a dedicated daemon
thread every `interval_seconds`. The thread and the foreground share state
only through the thread-safe DAOs.

Behavior:
    - The first sweep fires one interval after start().
    - At most one sweep runs at a time; a tick that finds a sweep in flight
      is skipped.
    - An exception raised by a sweep is logged and the loop keeps going.
    - stop() prevents new ticks and waits for an in-flight sweep to finish.

Example:
    >>> with CleanupScheduler(link_service, interval_seconds=3600):
    ...     console.start()
"""

import logging
import threading
from typing import Optional

from linkshortener.services.link_service import LinkService


logger = logging.getLogger(__name__)


class CleanupScheduler:
    """Periodically delete expired links

    Args:
        link_service (LinkService):
            Service whose cleanup_expired() is invoked.
        interval_seconds (float):
            Period between sweeps.

    Raises:
        ValueError:
            If interval_seconds is not positive.
    """

    THREAD_NAME = 'cleanup-scheduler'

    def __init__(self, link_service: LinkService, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f'Cleanup interval must be positive (given value: {interval_seconds}).')

        self.link_service = link_service
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._sweep_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> 'CleanupScheduler':
        if self._thread is not None:
            raise RuntimeError('Cleanup scheduler can only be started once.')

        self._thread = threading.Thread(target=self._loop, name=self.THREAD_NAME, daemon=True)
        self._thread.start()
        logger.info('Cleanup scheduler started.', extra={'intervalSeconds': self.interval_seconds})
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop scheduling sweeps

        Blocks until the worker thread exits, which includes finishing a
        sweep that is already running. Safe to call more than once.

        Args:
            timeout (float | None):
                Maximum time to wait for the worker thread. None waits forever.
        """
        self._stop_event.set()
        if self._thread is None:
            return

        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning('Cleanup scheduler did not stop in time.', extra={'timeout': timeout})
        else:
            logger.info('Cleanup scheduler stopped.')

    def run_once(self) -> Optional[int]:
        """Run one sweep unless another one is in flight

        Returns:
            int | None:
                Number of deleted links, None if the sweep was skipped or failed.
        """
        if not self._sweep_lock.acquire(blocking=False):
            logger.warning('Previous cleanup still running, skipping tick.')
            return None

        try:
            deleted = self.link_service.cleanup_expired()
        except Exception:
            logger.exception('Error during cleanup.')
            return None
        finally:
            self._sweep_lock.release()

        if deleted > 0:
            logger.info('Cleanup completed.', extra={'deleted': deleted})
        return deleted

    def _loop(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()

    def __enter__(self) -> 'CleanupScheduler':
        return self.start()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
