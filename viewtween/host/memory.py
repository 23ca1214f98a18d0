# host/memory.py

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from ..errors import ViewportGoneError
from ..utils import clamp
from .base import Host, ViewportView


@dataclass
class Fold:
    """A collapsible region spanning ``start..end`` (inclusive)."""
    start: int
    end: int
    closed: bool = True

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


@dataclass
class MemoryViewport:
    line_count: int
    height: int
    scrolloff: int = 0
    tab: int = 1
    view: ViewportView = field(default_factory=ViewportView)
    folds: List[Fold] = field(default_factory=list)
    scroll: int = 0  # 0: half the height


class MemoryHost(Host):
    """
    Host backed by plain Python state.

    Behaves like an editor window manager reduced to what the tween engine
    observes: a top line written inside a closed region snaps to the region's
    start, and positions are clamped to the content.
    """

    FIRST_VIEWPORT_ID = 1000

    def __init__(self):
        self.viewports: Dict[int, MemoryViewport] = {}
        self.current: Optional[int] = None
        self.current_tab = 1
        self._next_id = self.FIRST_VIEWPORT_ID

    # Viewport management

    def add_viewport(
        self,
        line_count: int,
        height: int,
        scrolloff: int = 0,
        folds: Optional[List[Fold]] = None,
        tab: Optional[int] = None,
        top_line: int = 1,
        cursor_line: int = 1
    ) -> int:
        """
        Create a viewport and focus it if nothing has focus yet.

        Returns:
            The new viewport id.
        """
        viewport_id = self._next_id
        self._next_id += 1
        self.viewports[viewport_id] = MemoryViewport(
            line_count=line_count,
            height=height,
            scrolloff=scrolloff,
            tab=self.current_tab if tab is None else tab,
            folds=list(folds or []),
        )
        self.set_view(viewport_id, top_line=top_line, cursor_line=cursor_line)
        if self.current is None:
            self.current = viewport_id
        return viewport_id

    def close_viewport(self, viewport_id: int) -> None:
        self._get(viewport_id)
        del self.viewports[viewport_id]
        if self.current == viewport_id:
            self.current = next(iter(self.viewports), None)

    def focus(self, viewport_id: int) -> None:
        self.current = viewport_id
        self.current_tab = self._get(viewport_id).tab

    def switch_tab(self, tab: int) -> None:
        self.current_tab = tab
        on_tab = [vid for vid, vp in self.viewports.items() if vp.tab == tab]
        self.current = on_tab[0] if on_tab else None

    def add_fold(self, viewport_id: int, start: int, end: int, closed: bool = True) -> Fold:
        fold = Fold(start, end, closed)
        self._get(viewport_id).folds.append(fold)
        return fold

    def folds_at(self, viewport_id: int, line: int) -> List[Fold]:
        """All regions containing ``line``, outermost first."""
        folds = [f for f in self._get(viewport_id).folds if f.contains(line)]
        return sorted(folds, key=lambda f: (f.start, -f.end))

    # Host interface

    def current_viewport(self) -> int:
        if self.current is None:
            raise ViewportGoneError(0)
        return self.current

    def viewport_exists(self, viewport_id: int) -> bool:
        return viewport_id in self.viewports

    def is_viewport_active(self, viewport_id: int) -> bool:
        return self._get(viewport_id).tab == self.current_tab

    def get_view(self, viewport_id: int) -> ViewportView:
        return replace(self._get(viewport_id).view)

    def set_view(self, viewport_id: int, **fields) -> None:
        vp = self._get(viewport_id)
        view = replace(vp.view, **fields)

        view.top_line = clamp(view.top_line, 1, vp.line_count)
        fold = self.closed_fold_at(viewport_id, view.top_line)
        if fold:
            view.top_line = fold[0]
        view.cursor_line = clamp(view.cursor_line, 1, vp.line_count)
        vp.view = view

    def get_cursor(self, viewport_id: int) -> Tuple[int, int]:
        view = self._get(viewport_id).view
        return view.cursor_line, view.cursor_column

    def set_cursor(self, viewport_id: int, line: int, column: int) -> None:
        self.set_view(viewport_id, cursor_line=line, cursor_column=column)

    def line_count(self, viewport_id: int) -> int:
        return self._get(viewport_id).line_count

    def height(self, viewport_id: int) -> int:
        return self._get(viewport_id).height

    def get_option_scrolloff(self, viewport_id: int) -> int:
        return self._get(viewport_id).scrolloff

    def bottom_line(self, viewport_id: int) -> int:
        vp = self._get(viewport_id)
        line = vp.view.top_line
        rows = 1
        while rows < vp.height:
            following = self._next_row(viewport_id, line)
            if following > vp.line_count:
                break
            line = following
            rows += 1

        fold = self.closed_fold_at(viewport_id, line)
        return fold[1] if fold else line

    def window_line(self, viewport_id: int) -> int:
        view = self._get(viewport_id).view
        fold = self.closed_fold_at(viewport_id, view.cursor_line)
        cursor_row_start = fold[0] if fold else view.cursor_line

        line = view.top_line
        row = 1
        while line < cursor_row_start:
            line = self._next_row(viewport_id, line)
            row += 1
        return row

    def closed_fold_at(self, viewport_id: int, line: int) -> Optional[Tuple[int, int]]:
        for fold in self.folds_at(viewport_id, line):
            if fold.closed:
                return fold.start, fold.end
        return None

    def scroll_amount(self, viewport_id: int) -> int:
        vp = self._get(viewport_id)
        return vp.scroll or max(vp.height // 2, 1)

    def set_scroll_amount(self, viewport_id: int, amount: int) -> None:
        self._get(viewport_id).scroll = max(amount, 0)

    # Helpers

    def _get(self, viewport_id: int) -> MemoryViewport:
        try:
            return self.viewports[viewport_id]
        except KeyError:
            raise ViewportGoneError(viewport_id) from None

    def _next_row(self, viewport_id: int, line: int) -> int:
        fold = self.closed_fold_at(viewport_id, line)
        return (fold[1] if fold else line) + 1
