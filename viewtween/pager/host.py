# pager/host.py

from typing import Callable, List, Optional, Tuple

from ..host import Fold, MemoryHost
from ..utils import clamp, get_scrolloff
from .document import Document


class PagerHost(MemoryHost):
    """
    Single-viewport host for the terminal pager.

    Keeps the view state in memory and notifies ``on_change`` after every
    write so the application can redraw.
    """
    def __init__(
        self,
        document: Document,
        height: int = 24,
        scrolloff: int = 0,
        open_folds: bool = False,
        on_change: Optional[Callable[[], None]] = None
    ):
        """
        Args:
            document: Document to page through
            height: Initial number of text rows
            scrolloff: Scroll-off margin
            open_folds: Start with every marker region open
            on_change: Called after the view or the folds change
        """
        super().__init__()
        self.document = document
        self.on_change = on_change
        self.viewport_id = self.add_viewport(
            line_count=len(document.lines),
            height=max(height, 1),
            scrolloff=scrolloff,
            folds=[Fold(start, end, closed=not open_folds) for start, end in document.folds],
        )

    def set_view(self, viewport_id: int, **fields) -> None:
        super().set_view(viewport_id, **fields)
        self._changed()

    def set_height(self, height: int) -> None:
        vp = self._get(self.viewport_id)
        height = max(height, 1)
        if vp.height != height:
            vp.height = height
            self._changed()

    def visible_rows(self) -> List[Tuple[int, Optional[Tuple[int, int]]]]:
        """``(line, closed_region)`` for each row on screen, top to bottom."""
        vp = self._get(self.viewport_id)
        rows = []
        line = vp.view.top_line
        while len(rows) < vp.height and line <= vp.line_count:
            fold = self.closed_fold_at(self.viewport_id, line)
            rows.append((line, fold))
            line = self._next_row(self.viewport_id, line)
        return rows

    # Cursor motion

    def move_cursor(self, rows: int) -> None:
        """Move the cursor by visual rows and scroll just enough to keep it in view."""
        vp = self._get(self.viewport_id)
        line = vp.view.cursor_line
        direction = 1 if rows > 0 else -1
        for _ in range(abs(rows)):
            fold = self.closed_fold_at(self.viewport_id, line)
            if fold:
                line = fold[1] + 1 if direction > 0 else fold[0] - 1
            else:
                line += direction
            line = clamp(line, 1, vp.line_count)
        fold = self.closed_fold_at(self.viewport_id, line)
        if fold:
            line = fold[0]
        self.set_view(self.viewport_id, cursor_line=line)
        self.follow_cursor()

    def follow_cursor(self) -> None:
        vp = self._get(self.viewport_id)
        so = get_scrolloff(self, self.viewport_id)

        while self.window_line(self.viewport_id) - 1 < so and vp.view.top_line > 1:
            top = vp.view.top_line - 1
            fold = self.closed_fold_at(self.viewport_id, top)
            self.set_view(self.viewport_id, top_line=fold[0] if fold else top)

        while self.window_line(self.viewport_id) > vp.height - so and vp.view.top_line < vp.line_count:
            self.set_view(self.viewport_id, top_line=self._next_row(self.viewport_id, vp.view.top_line))

    # Folding

    def open_fold(self, line: int) -> bool:
        """Open the outermost closed region at ``line``."""
        for fold in self.folds_at(self.viewport_id, line):
            if fold.closed:
                fold.closed = False
                self._changed()
                return True
        return False

    def close_fold(self, line: int) -> bool:
        """Close the innermost open region at ``line``."""
        for fold in reversed(self.folds_at(self.viewport_id, line)):
            if not fold.closed:
                fold.closed = True
                view = self._get(self.viewport_id).view
                outer = self.closed_fold_at(self.viewport_id, line)
                # Re-snap the top line and put the cursor on the region's first line
                self.set_view(self.viewport_id, top_line=view.top_line, cursor_line=outer[0])
                self.follow_cursor()
                return True
        return False

    def toggle_fold(self, line: int) -> bool:
        if self.closed_fold_at(self.viewport_id, line):
            return self.open_fold(line)
        return self.close_fold(line)

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
