# actions.py

from typing import Optional

from . import utils


class ScrollActions:
    """
    Editor-style scroll commands built on ``ScrollController.scroll``.

    Each method computes a visual-row delta from the viewport's geometry and
    issues one scroll request. ``viewport_id`` 0 means the current viewport.
    """
    def __init__(self, controller):
        self.controller = controller
        self.host = controller.host

    @property
    def duration(self) -> float:
        return self.controller.config.duration

    def _viewport(self, viewport_id: int) -> int:
        return viewport_id or self.host.current_viewport()

    def half_page_up(self, count: int = 0, duration: Optional[float] = None, viewport_id: int = 0) -> None:
        """Like Vim's CTRL-U; a count sets the half-page amount first."""
        viewport_id = self._viewport(viewport_id)
        if count > 0:
            self.host.set_scroll_amount(viewport_id, count)
        self.controller.scroll(viewport_id, -self.host.scroll_amount(viewport_id), duration)

    def half_page_down(self, count: int = 0, duration: Optional[float] = None, viewport_id: int = 0) -> None:
        """Like Vim's CTRL-D; a count sets the half-page amount first."""
        viewport_id = self._viewport(viewport_id)
        if count > 0:
            self.host.set_scroll_amount(viewport_id, count)
        self.controller.scroll(viewport_id, self.host.scroll_amount(viewport_id), duration)

    def page_up(self, count: int = 1, duration: Optional[float] = None, viewport_id: int = 0) -> None:
        """Like Vim's CTRL-B."""
        viewport_id = self._viewport(viewport_id)
        self.controller.scroll(viewport_id, -(max(count, 1) * self.host.height(viewport_id)), duration)

    def page_down(self, count: int = 1, duration: Optional[float] = None, viewport_id: int = 0) -> None:
        """Like Vim's CTRL-F."""
        viewport_id = self._viewport(viewport_id)
        self.controller.scroll(viewport_id, max(count, 1) * self.host.height(viewport_id), duration)

    def cursor_top(
        self,
        duration: Optional[float] = None,
        delta_time_scale: bool = False,
        viewport_id: int = 0
    ) -> None:
        """Like Vim's zt: scroll so the cursor sits at the top of the viewport."""
        viewport_id = self._viewport(viewport_id)
        height, so, window_line = self._geometry(viewport_id)
        delta = window_line - so - 1
        self._scroll_cursor(viewport_id, delta, height - so * 2, duration, delta_time_scale)

    def cursor_bottom(
        self,
        duration: Optional[float] = None,
        delta_time_scale: bool = False,
        viewport_id: int = 0
    ) -> None:
        """Like Vim's zb: scroll so the cursor sits at the bottom of the viewport."""
        viewport_id = self._viewport(viewport_id)
        height, so, window_line = self._geometry(viewport_id)
        delta = -(height - window_line - so)
        self._scroll_cursor(viewport_id, delta, height - so * 2, duration, delta_time_scale)

    def cursor_center(
        self,
        duration: Optional[float] = None,
        delta_time_scale: bool = False,
        viewport_id: int = 0
    ) -> None:
        """Like Vim's zz: scroll so the cursor sits in the middle of the viewport."""
        viewport_id = self._viewport(viewport_id)
        height, so, window_line = self._geometry(viewport_id)
        delta = -(height / 2 - window_line)
        self._scroll_cursor(viewport_id, delta, (height - so * 2) / 2, duration, delta_time_scale)

    def _geometry(self, viewport_id: int):
        height = self.host.height(viewport_id)
        so = utils.get_scrolloff(self.host, viewport_id)
        return height, so, self.host.window_line(viewport_id)

    def _scroll_cursor(self, viewport_id, delta, scroll_height, duration, delta_time_scale) -> None:
        if utils.round_half_up(delta) == 0:
            return

        duration = duration or self.duration
        if delta_time_scale and scroll_height > 0:
            duration *= abs(delta) / scroll_height

        self.controller.scroll(viewport_id, delta, duration, True)
