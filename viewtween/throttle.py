# throttle.py

import asyncio
from typing import Callable, Optional


class TrailingThrottle:
    """
    Calls ``callback`` at most once per interval, keeping the last call of a burst.

    With ``rush_first`` the first call of a burst runs immediately. Calls made
    while the interval is running only replace the stored arguments; when the
    interval elapses the stored call is replayed, so the final call of a burst
    always runs exactly once. A replay goes through the throttle again and
    therefore opens a new interval.

    Timers are ``asyncio`` timer handles, so the throttle must be called from
    inside a running event loop unless ``loop`` is given.
    """
    def __init__(
        self,
        interval_ms: float,
        callback: Callable,
        rush_first: bool = True,
        loop: Optional[asyncio.AbstractEventLoop] = None
    ):
        """
        Args:
            interval_ms: Minimum time between two calls of ``callback``
            callback: Function to rate-limit
            rush_first: Run the leading call immediately
            loop: Event loop for the timers (default: the running loop)
        """
        self.interval = interval_ms
        self.callback = callback
        self.rush_first = rush_first
        self._loop = loop
        self._timer: Optional[asyncio.TimerHandle] = None
        self._lock = False
        self._pending = None
        self.closed = False

    def __call__(self, *args, **kwargs) -> None:
        if self.closed:
            return

        if self._lock:
            self._pending = (args, kwargs)
            return

        self._lock = True
        if self.rush_first and self._pending is None:
            try:
                self.callback(*args, **kwargs)
            finally:
                self._start_timer()
        else:
            self._pending = (args, kwargs)
            self._start_timer()

    @property
    def pending(self) -> bool:
        """Whether a call is waiting for the interval to elapse."""
        return self._pending is not None

    def close(self) -> None:
        """Cancel the running interval and drop any stored call."""
        self.closed = True
        self._pending = None
        if self._timer:
            self._timer.cancel()
            self._timer = None

    def _start_timer(self) -> None:
        if self.closed:
            return
        if self._timer:
            self._timer.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._timer = loop.call_later(self.interval / 1000, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._lock = False

        if self._pending is None:
            return

        args, kwargs = self._pending
        self._pending = None
        if self.rush_first:
            self(*args, **kwargs)
        else:
            self._lock = True
            try:
                self.callback(*args, **kwargs)
            finally:
                self._start_timer()
