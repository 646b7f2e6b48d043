"""
Delayed loading indicator.

Turns an ``is_loading`` input into a ``value`` output that only becomes
True once loading has lasted ``delay_ms``. Requests that resolve faster
never show a spinner; slow ones show it until the moment they finish.
"""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything exposing ``call_later`` with asyncio's signature."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class ThreadTimerScheduler:
    """Scheduler for synchronous callers: each timer runs on a daemon thread."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> threading.Timer:
        timer = threading.Timer(delay, callback, args=args)
        timer.daemon = True
        timer.start()
        return timer


class DelayedLoading:
    """
    One boolean in, one boolean out, with a grace period.

    Args:
        delay_ms: Grace period in milliseconds before ``value`` turns True.
        scheduler: Timer source. Defaults to the running asyncio loop, or
            to a ``ThreadTimerScheduler`` outside of one.
        on_change: Called with the new ``value`` whenever it flips.
    """

    def __init__(
        self,
        delay_ms: float = 200,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[bool], None]] = None,
    ):
        self.delay_ms = max(delay_ms or 0, 0)
        self._scheduler = scheduler
        self._on_change = on_change
        self._is_loading = False
        self._value = False
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._disposed = False
        # Thread timers fire off the caller's thread.
        self._lock = threading.RLock()

    @property
    def value(self) -> bool:
        return self._value

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def update(self, is_loading: bool) -> bool:
        """Feed the current loading flag and return the visible flag."""
        with self._lock:
            if self._disposed:
                return False

            is_loading = bool(is_loading)
            if not is_loading:
                self._is_loading = False
                self._cancel_timer()
                self._set_value(False)
                return self._value

            if not self._is_loading:
                self._is_loading = True
                self._arm()
            return self._value

    def dispose(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._disposed = True
            self._is_loading = False
            self._value = False

    def _resolve_scheduler(self) -> Scheduler:
        if self._scheduler is not None:
            return self._scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return ThreadTimerScheduler()

    def _arm(self) -> None:
        self._cancel_timer()
        self._generation += 1
        self._timer = self._resolve_scheduler().call_later(
            self.delay_ms / 1000, self._fire, self._generation
        )

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            if self._disposed or not self._is_loading:
                return
            logger.debug(f"Loading exceeded {self.delay_ms}ms, showing indicator")
            self._set_value(True)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1

    def _set_value(self, value: bool) -> None:
        if value == self._value:
            return
        self._value = value
        if self._on_change is not None:
            self._on_change(value)
