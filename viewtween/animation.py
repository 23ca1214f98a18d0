# animation.py

from typing import Callable, Optional

from . import utils
from .easing import ProgressionFn


class Animation:
    """
    Clock for a single tween.

    Converts wall-clock time (ms) into normalized elapsed time ``t`` and, via
    the progression function, into progression ``p``. Once invalidated, the
    animation stays dead regardless of time.
    """
    def __init__(
        self,
        time_start: Optional[float] = None,
        time_end: Optional[float] = None,
        duration: Optional[float] = None,
        progression_fn: Optional[ProgressionFn] = None,
        clock: Callable[[], float] = utils.now
    ):
        """
        Args:
            time_start: Start time (ms). Defaults to now.
            time_end: End time (ms). Takes precedence over ``duration``.
            duration: Duration (ms).
            progression_fn: Easing applied to ``t``. Linear when omitted.
            clock: Time source in ms; used when methods are called without
                an explicit time.

        Raises:
            ValueError: If neither ``time_end`` nor ``duration`` is given, or
                the resulting duration is not positive.
        """
        self._clock = clock
        self.time_start = time_start if time_start is not None else clock()
        self.progression_fn = progression_fn
        self.done = False

        if time_end is not None:
            self.set_time_end(time_end)
        elif duration is not None:
            self.set_duration(duration)
        else:
            raise ValueError("One of 'time_end' or 'duration' must be specified!")

    def __repr__(self):
        return "Animation(start=%s, duration=%s, done=%s)" % (self.time_start, self.duration, self.done)

    def now(self) -> float:
        return self._clock()

    def _time(self, time: Optional[float]) -> float:
        return self._clock() if time is None else time

    def is_alive(self, time: Optional[float] = None) -> bool:
        if self.done:
            return False
        return self.get_t(time) < 1

    def invalidate(self) -> None:
        self.done = True

    def get_elapsed(self, time: Optional[float] = None) -> float:
        return self._time(time) - self.time_start

    def get_t(self, time: Optional[float] = None) -> float:
        """Normalized elapsed time; not clamped."""
        return self.get_elapsed(time) / self.duration

    def get_p(self, time: Optional[float] = None) -> float:
        """Progression in [0, 1]."""
        t = self.get_t(time)
        p = self.progression_fn(t) if self.progression_fn else t
        return utils.clamp(p, 0, 1)

    def set_time_start(self, time: float) -> None:
        self.time_start = time
        self.set_time_end(self.time_end)

    def set_time_end(self, time: float) -> None:
        self._check_duration(time - self.time_start)
        self.time_end = time
        self.duration = self.time_end - self.time_start

    def set_duration(self, duration: float) -> None:
        self._check_duration(duration)
        self.duration = duration
        self.time_end = self.time_start + self.duration

    @staticmethod
    def _check_duration(duration: float) -> None:
        if duration <= 0:
            raise ValueError(f"Animation duration must be positive, got {duration}")
