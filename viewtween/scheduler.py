# scheduler.py

from typing import Callable, Optional

from .throttle import TrailingThrottle


class FrameLoop:
    """
    Drives ``ViewTween.update()`` once per frame until the tween stops.

    Each tick is a throttled call, so frames are at least ``interval_ms``
    apart and the loop always gets one last tick after its final request.
    The loop ends when the tween is invalidated from outside, when
    ``update()`` asks to stop, or when the animation clock runs out.
    """
    def __init__(
        self,
        tween,
        interval_ms: float,
        on_close: Optional[Callable] = None,
        logger=None
    ):
        """
        Args:
            tween: ViewTween to drive
            interval_ms: Minimum time between frames
            on_close: Called with the tween once the loop has ended
            logger: Optional Logger
        """
        self.tween = tween
        self.on_close = on_close
        self.logger = logger
        self.frames = 0
        self.closed = False
        self._throttle = TrailingThrottle(interval_ms, self._tick, rush_first=True)

    def start(self) -> None:
        self._throttle()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._throttle.close()
        if self.logger:
            self.logger.debug(f"Frame loop closed after {self.frames} frames: {self.tween!r}")
        if self.on_close:
            self.on_close(self.tween)

    def _tick(self) -> None:
        tween = self.tween

        if not tween.is_valid():
            self.close()
            return

        now = tween.animation.now()
        try:
            stop = tween.update(now)
        except Exception as e:
            if self.logger:
                self.logger.error(f"Frame update failed for viewport {tween.viewport_id}: {e}")
            tween.invalidate()
            self.close()
            raise
        self.frames += 1

        if stop or not tween.animation.is_alive(now):
            self.close()
            tween.invalidate()
        else:
            self._throttle()
