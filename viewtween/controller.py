# controller.py

import asyncio
from typing import Dict, Optional

from . import utils
from .config import ScrollConfig
from .errors import ViewportGoneError
from .logger import Logger
from .scheduler import FrameLoop
from .throttle import TrailingThrottle
from .tween import ViewTween


class ScrollController:
    """
    Entry point for smooth scrolling: one live tween per viewport.

    A scroll request arriving while a tween is still running replaces it with
    a continuation tween. The continuation starts from wherever the viewport
    currently is, uses the sharper continuation curve, and reuses the fold map
    of the tween it replaces (folds are assumed not to change mid-flight).
    """
    def __init__(self, host, config: Optional[ScrollConfig] = None, logger=None):
        """
        Args:
            host: Host whose viewports are scrolled
            config: ScrollConfig; defaults are used when omitted
            logger: Logger; one is created from the config when omitted
        """
        self.host = host
        self.config = config or ScrollConfig()
        self.logger = logger or Logger(__name__, self.config.logging_enabled, self.config.log_file)
        self.tweens: Dict[int, ViewTween] = {}
        self.loops: Dict[int, FrameLoop] = {}

        # Coalesce rapid repeated requests (e.g. a held-down key) into the last one
        self.scroll = TrailingThrottle(
            self.config.scroll_throttle_interval,
            self._request_scroll,
            rush_first=True
        )

    def _request_scroll(
        self,
        viewport_id: int = 0,
        delta: float = 0,
        duration: Optional[float] = None,
        lock_cursor: bool = False
    ) -> None:
        now = utils.now()
        asyncio.get_running_loop().call_soon(
            self._begin_scroll, viewport_id, delta, duration, lock_cursor, now)

    def _begin_scroll(
        self,
        viewport_id: int,
        delta: float,
        duration: Optional[float],
        lock_cursor: bool,
        requested_at: float
    ) -> None:
        if self.scroll.closed:
            return
        try:
            viewport_id = viewport_id or self.host.current_viewport()
            self.start(self._create_tween(viewport_id, delta, duration, lock_cursor, requested_at))
        except ViewportGoneError as e:
            self.logger.debug(f"Scroll request dropped: {e}")

    def _create_tween(
        self,
        viewport_id: int,
        delta: float,
        duration: Optional[float],
        lock_cursor: bool,
        requested_at: float
    ) -> ViewTween:
        delta = utils.round_half_up(delta)
        duration = duration or self.config.duration
        last_tween = self.tweens.get(viewport_id)

        if last_tween and last_tween.is_valid():
            self.cancel(viewport_id)
            # Back-dated to the request so construction latency does not stall the motion
            tween = ViewTween(
                self.host,
                viewport_id,
                time_start=requested_at,
                duration=duration,
                lock_cursor=lock_cursor,
                scroll_delta=delta,
                progression_fn=self.config.continuation_fn,
                folds=last_tween.folds,
                logger=self.logger
            )
            self.logger.debug(f"Continuation for viewport {viewport_id} replaces {last_tween!r}")
        else:
            tween = ViewTween(
                self.host,
                viewport_id,
                duration=duration,
                lock_cursor=lock_cursor,
                scroll_delta=delta,
                progression_fn=self.config.progression_fn,
                logger=self.logger
            )

        self.tweens[viewport_id] = tween
        return tween

    def start(self, tween: ViewTween) -> FrameLoop:
        """Register ``tween`` as its viewport's live tween and start animating it."""
        self.tweens[tween.viewport_id] = tween
        loop = FrameLoop(
            tween,
            self.config.frame_interval,
            on_close=self._release,
            logger=self.logger
        )
        self.loops[tween.viewport_id] = loop
        loop.start()
        return loop

    def live_tween(self, viewport_id: int = 0) -> Optional[ViewTween]:
        viewport_id = viewport_id or self.host.current_viewport()
        tween = self.tweens.get(viewport_id)
        if tween and tween.is_valid():
            return tween
        return None

    def cancel(self, viewport_id: int = 0) -> None:
        """Stop the viewport's animation where it currently is."""
        viewport_id = viewport_id or self.host.current_viewport()
        tween = self.tweens.get(viewport_id)
        if tween:
            tween.invalidate()
        loop = self.loops.get(viewport_id)
        if loop:
            loop.close()

    def close(self) -> None:
        """Cancel every running animation and any pending scroll request."""
        self.scroll.close()
        for viewport_id in list(self.tweens):
            self.cancel(viewport_id)

    def _release(self, tween: ViewTween) -> None:
        viewport_id = tween.viewport_id
        if self.tweens.get(viewport_id) is tween:
            del self.tweens[viewport_id]
        loop = self.loops.get(viewport_id)
        if loop and loop.tween is tween:
            del self.loops[viewport_id]
