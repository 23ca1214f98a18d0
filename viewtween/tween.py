# tween.py

from enum import Enum
from typing import Callable, Optional, Tuple

from . import utils
from .animation import Animation
from .easing import DEFAULT_PROGRESSION_FN, ProgressionFn
from .errors import MissingScrollTargetError, ViewportGoneError
from .folds import FoldMap, find_folds_delta, find_folds_range


class TweenState(Enum):
    CONSTRUCTED = 'constructed'
    ANIMATING = 'animating'
    ARRIVED = 'arrived'
    CANCELLED = 'cancelled'
    DETACHED = 'detached'


TERMINAL_STATES = frozenset({TweenState.ARRIVED, TweenState.CANCELLED, TweenState.DETACHED})


class ViewTween:
    """
    Animates the top line of one viewport towards a target line.

    Distances are counted in visual rows: a closed region is a single row no
    matter how many content lines it spans. The tween converts the requested
    distance into a target content line once, at construction, and on every
    ``update()`` resolves the interpolated distance back into a content line
    through its ``FoldMap``.

    When scrolling up hits line 1 before the requested distance is used up
    (and the cursor is not locked), the remaining distance is spent moving
    the cursor instead.
    """
    def __init__(
        self,
        host,
        viewport_id: int = 0,
        *,
        target_line: Optional[int] = None,
        scroll_delta: Optional[int] = None,
        min_line: Optional[int] = None,
        max_line: Optional[int] = None,
        lock_cursor: bool = False,
        folds: Optional[FoldMap] = None,
        time_start: Optional[float] = None,
        time_end: Optional[float] = None,
        duration: Optional[float] = None,
        progression_fn: Optional[ProgressionFn] = None,
        clock: Callable[[], float] = utils.now,
        logger=None
    ):
        """
        Args:
            host: Host the viewport lives in
            viewport_id: Viewport to scroll; 0 for the current one
            target_line: Absolute top line to scroll to
            scroll_delta: Signed number of visual rows to scroll
            min_line: Lowest allowed top line (default 1)
            max_line: Highest allowed top line (default: last line)
            lock_cursor: Never hand the remaining distance over to the cursor
            folds: Pre-built fold map; scanned from the host when omitted
            time_start: Animation start (ms)
            time_end: Animation end (ms)
            duration: Animation duration (ms)
            progression_fn: Easing curve
            clock: Time source in ms
            logger: Optional Logger

        Raises:
            MissingScrollTargetError: If neither ``target_line`` nor
                ``scroll_delta`` is given.
        """
        if target_line is None and scroll_delta is None:
            raise MissingScrollTargetError("One of 'target_line' or 'scroll_delta' must be specified!")

        self.host = host
        self.logger = logger
        self.viewport_id = viewport_id or host.current_viewport()

        self.min_line = 1 if min_line is None else min_line
        self.max_line = host.line_count(self.viewport_id) if max_line is None else max_line
        self.orig_view = host.get_view(self.viewport_id)
        self.orig_top_line = self.orig_view.top_line
        self.orig_bottom_line = host.bottom_line(self.viewport_id)
        self.lock_cursor = lock_cursor
        self.cursor_from: Optional[Tuple[int, int]] = None
        self.done = False
        self.state = TweenState.CONSTRUCTED

        # The final top line must not land inside a closed region
        max_fold = host.closed_fold_at(self.viewport_id, self.max_line)
        if max_fold:
            self.max_line = max_fold[0]

        self.max_line = max(1, self.max_line - utils.get_scrolloff(host, self.viewport_id))

        self.animation = Animation(
            time_start=time_start,
            time_end=time_end,
            duration=duration,
            progression_fn=progression_fn or DEFAULT_PROGRESSION_FN,
            clock=clock
        )

        self.folds = folds if folds is not None else self._find_folds(target_line, scroll_delta)

        if target_line is not None:
            self.scroll_delta = self.get_scroll_delta(self.orig_top_line, target_line)
        else:
            self.scroll_delta = scroll_delta

        self.target_line = self.resolve_scroll_delta(self.orig_top_line, self.scroll_delta)

        if self.logger:
            self.logger.debug(
                f"Tween for viewport {self.viewport_id}: {self.orig_top_line} -> {self.target_line} "
                f"({self.scroll_delta} rows, {self.animation.duration:.0f}ms)"
            )

    def __repr__(self):
        return "ViewTween(viewport=%s, %s -> %s, %s)" % (
            self.viewport_id, self.orig_top_line, self.target_line, self.state.value)

    def _find_folds(self, target_line: Optional[int], scroll_delta: Optional[int]) -> FoldMap:
        height = self.host.height(self.viewport_id)

        if target_line is not None:
            direction = utils.sign(target_line - self.orig_top_line)
        else:
            direction = utils.sign(scroll_delta)

        if direction == 0:
            return FoldMap()

        # Start at the viewport edge facing the direction of travel, and scan
        # one extra window height beyond the target.
        line_from = self.orig_top_line if direction == 1 else self.orig_bottom_line

        if target_line is not None:
            return find_folds_range(self.host, self.viewport_id, line_from, target_line + height * direction)
        return find_folds_delta(self.host, self.viewport_id, line_from, scroll_delta + height * direction)

    def invalidate(self) -> None:
        if self.state not in TERMINAL_STATES:
            expired = self.animation.get_t() >= 1
            self.state = TweenState.ARRIVED if expired else TweenState.CANCELLED
        self.animation.invalidate()
        self.done = True

    def is_valid(self) -> bool:
        return not self.done

    def get_scroll_delta(self, line_from: int, line_to: int) -> int:
        """
        Count the visual rows between two content lines.

        Args:
            line_from: Start line
            line_to: End line, clamped to ``max_line``

        Returns:
            Signed number of visual rows
        """
        line_from = max(line_from, 1)
        line_to = min(line_to, self.max_line)
        direction = utils.sign(line_to - line_from)

        if direction == 0:
            return 0

        cur = line_from
        delta = 0

        while (line_to - cur) * direction > 0:
            cur = self.folds.step(cur, direction)
            delta += direction

        return delta

    def resolve_scroll_delta(self, line: int, delta: float) -> int:
        """
        Find the content line ``delta`` visual rows away from ``line``.

        Args:
            line: Start line
            delta: Signed number of visual rows; fractional values are rounded

        Returns:
            Target line clamped to ``[min_line, max_line]``
        """
        direction = utils.sign(delta)

        if direction == 0:
            return line

        steps = utils.round_half_up(delta * direction)
        ret = line

        for _ in range(steps):
            ret = self.folds.step(ret, direction)

        return utils.clamp(ret, self.min_line, self.max_line)

    def resolve_cursor(self, line: int, top_line: Optional[int] = None) -> int:
        """Clamp a cursor line into the band the scroll-off allows for ``top_line``."""
        if top_line is None:
            top_line = self.host.get_view(self.viewport_id).top_line
        height = self.host.height(self.viewport_id)
        so = utils.get_scrolloff(self.host, self.viewport_id)

        # No margin above the first lines of the content
        low = top_line if top_line < so else self.resolve_scroll_delta(top_line, so)
        high = self.resolve_scroll_delta(top_line, height - so - 1)

        return utils.clamp(line, low, high)

    def update(self, now: Optional[float] = None) -> bool:
        """
        Advance the animation by one frame.

        Args:
            now: Frame time (ms); defaults to the clock

        Returns:
            True when the tween should stop.
        """
        try:
            return self._update(now)
        except ViewportGoneError:
            if self.logger:
                self.logger.debug(f"Viewport {self.viewport_id} went away mid-animation")
            self._finish(TweenState.DETACHED)
            return True

    def _update(self, now: Optional[float]) -> bool:
        host = self.host
        viewport_id = self.viewport_id

        if not host.viewport_exists(viewport_id):
            raise ViewportGoneError(viewport_id)

        cursor = host.get_cursor(viewport_id)

        if not host.is_viewport_active(viewport_id):
            # Off-screen: jump to the end instead of animating
            host.set_view(
                viewport_id,
                top_line=self.target_line,
                cursor_line=self.resolve_cursor(cursor[0], self.target_line)
            )
            if self.logger:
                self.logger.debug(f"Viewport {viewport_id} left the active tab; snapped to {self.target_line}")
            self._finish(TweenState.DETACHED)
            return True

        if self.state == TweenState.CONSTRUCTED:
            self.state = TweenState.ANIMATING

        p = self.animation.get_p(now)

        if self.cursor_from is not None:
            # The top line is already at line 1: move the cursor for the
            # remaining duration.
            cursor_line = self.resolve_scroll_delta(self.cursor_from[0], self.scroll_delta * p)
            host.set_cursor(viewport_id, cursor_line, 0)
            host.set_view(viewport_id, want_column=self.orig_view.want_column)

            if cursor[0] == 1 and self.scroll_delta < 0:
                self._finish(TweenState.ARRIVED)
                return True
            return False

        top_line = self.resolve_scroll_delta(self.orig_top_line, self.scroll_delta * p)
        host.set_view(
            viewport_id,
            top_line=top_line,
            cursor_line=self.resolve_cursor(cursor[0], top_line)
        )

        if top_line != self.target_line:
            return False

        if not self.lock_cursor and top_line == 1 and self.scroll_delta != 0:
            if cursor[0] == 1:
                self._finish(TweenState.ARRIVED)
                return True

            self.cursor_from = cursor
            self.scroll_delta -= self.get_scroll_delta(self.orig_top_line, self.target_line) + 1
            if self.logger:
                self.logger.debug(
                    f"Viewport {viewport_id} reached line 1; moving cursor from {cursor[0]} "
                    f"({self.scroll_delta} rows)"
                )
            return False

        self._finish(TweenState.ARRIVED)
        return True

    def _finish(self, state: TweenState) -> None:
        if self.state not in TERMINAL_STATES:
            self.state = state
