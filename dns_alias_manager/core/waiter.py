"""
Convergence Waiter - Block until a submitted change is in sync

A background thread polls the change status on a fixed interval while the
calling thread waits on a completion event with a deadline. The poller is
stopped and joined before wait() returns, so no status query is issued after
the caller gets its result.
"""

import logging
import threading
import time
from typing import Callable, Optional

from .change_tracker import ChangeTracker
from .models import ChangeStatus, WaitOutcome, WaitResult
from ..errors import ConvergenceTimeout

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_TIMEOUT = 60.0


class _ChangePoller(threading.Thread):
    """Polls one change until it is in sync, fails, or is stopped."""

    def __init__(
        self,
        tracker: ChangeTracker,
        change_id: str,
        poll_interval: float,
        on_poll: Optional[Callable[[ChangeStatus], None]] = None,
    ):
        super().__init__(name=f"change-poller-{change_id}", daemon=True)
        self.tracker = tracker
        self.change_id = change_id
        self.poll_interval = poll_interval
        self.on_poll = on_poll
        self.stopped = threading.Event()
        self.done = threading.Event()
        self.status: Optional[ChangeStatus] = None
        self.error: Optional[BaseException] = None
        self.polls = 0

    def run(self):
        try:
            # Event.wait doubles as an interruptible sleep
            while not self.stopped.wait(self.poll_interval):
                status = self.tracker.get_change_status(self.change_id)
                self.polls += 1
                self.status = status
                if self.on_poll:
                    self.on_poll(status)
                if status.is_in_sync:
                    break
        except Exception as e:
            # Handed to the waiting thread, which re-raises it
            self.error = e
        finally:
            self.done.set()

    def stop(self):
        self.stopped.set()
        if self.is_alive():
            self.join()


class ConvergenceWaiter:
    """Waits for changes to propagate to every authoritative server."""

    def __init__(
        self,
        tracker: ChangeTracker,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        self.tracker = tracker
        self.poll_interval = poll_interval
        self.timeout = timeout

    def wait(
        self,
        change: ChangeStatus,
        timeout: Optional[float] = None,
        raise_on_timeout: bool = False,
        on_poll: Optional[Callable[[ChangeStatus], None]] = None,
    ) -> WaitResult:
        """
        Wait until a change is in sync or the timeout elapses.

        Args:
            change: Status returned when the change was submitted
            timeout: Seconds to wait, defaults to the waiter's timeout
            raise_on_timeout: Raise ConvergenceTimeout instead of returning
                a TIMED_OUT result
            on_poll: Called from the polling thread with every fresh status

        Returns:
            WaitResult with outcome CONVERGED or TIMED_OUT

        Raises:
            ValueError: If timeout is negative
            DNSAliasError: Any error raised by a status query ends the wait
        """
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must not be negative")
        if change.is_in_sync:
            logger.debug(f"Change {change.id} already in sync")
            return WaitResult(WaitOutcome.CONVERGED, change.id, status=change)

        timeout = self.timeout if timeout is None else timeout
        poller = _ChangePoller(self.tracker, change.id, self.poll_interval, on_poll)
        started = time.monotonic()
        logger.debug(
            f"Waiting up to {timeout:g}s for change {change.id} "
            f"(poll interval {self.poll_interval:g}s)"
        )

        poller.start()
        try:
            poller.done.wait(timeout)
        finally:
            poller.stop()

        elapsed = time.monotonic() - started

        if poller.error is not None:
            logger.error(f"Error checking status of change {change.id}: {poller.error}")
            raise poller.error

        if poller.status is not None and poller.status.is_in_sync:
            logger.info(f"Change {change.id} in sync after {elapsed:.1f}s")
            return WaitResult(
                WaitOutcome.CONVERGED,
                change.id,
                status=poller.status,
                elapsed=elapsed,
                polls=poller.polls,
            )

        logger.warning(f"Change {change.id} not in sync after {timeout:g}s")
        if raise_on_timeout:
            raise ConvergenceTimeout(change.id, timeout)
        return WaitResult(
            WaitOutcome.TIMED_OUT,
            change.id,
            status=poller.status or change,
            elapsed=elapsed,
            polls=poller.polls,
        )
