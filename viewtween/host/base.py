# host/base.py

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class ViewportView:
    """
    Position record of a viewport.

    Lines are 1-based content lines; columns are 0-based.
    """
    top_line: int = 1
    cursor_line: int = 1
    cursor_column: int = 0
    want_column: int = 0


class Host:
    """
    Synchronous primitives a host surface must provide.

    Every method taking a ``viewport_id`` raises ``ViewportGoneError`` when the
    viewport does not exist, except ``viewport_exists`` itself.
    """

    def current_viewport(self) -> int:
        """Identifier of the viewport that has focus."""
        raise NotImplementedError

    def viewport_exists(self, viewport_id: int) -> bool:
        raise NotImplementedError

    def is_viewport_active(self, viewport_id: int) -> bool:
        """Whether the viewport lives on the currently displayed tab."""
        raise NotImplementedError

    def get_view(self, viewport_id: int) -> ViewportView:
        raise NotImplementedError

    def set_view(self, viewport_id: int, **fields) -> None:
        """Update only the given ``ViewportView`` fields."""
        raise NotImplementedError

    def get_cursor(self, viewport_id: int) -> Tuple[int, int]:
        raise NotImplementedError

    def set_cursor(self, viewport_id: int, line: int, column: int) -> None:
        raise NotImplementedError

    def line_count(self, viewport_id: int) -> int:
        raise NotImplementedError

    def height(self, viewport_id: int) -> int:
        """Number of visible rows."""
        raise NotImplementedError

    def get_option_scrolloff(self, viewport_id: int) -> int:
        """Raw scroll-off setting, not clamped to the height."""
        raise NotImplementedError

    def bottom_line(self, viewport_id: int) -> int:
        """Last content line displayed in the viewport."""
        raise NotImplementedError

    def window_line(self, viewport_id: int) -> int:
        """1-based visual row of the cursor inside the viewport."""
        raise NotImplementedError

    def closed_fold_at(self, viewport_id: int, line: int) -> Optional[Tuple[int, int]]:
        """``(start, end)`` of the outermost closed region containing ``line``."""
        raise NotImplementedError

    def scroll_amount(self, viewport_id: int) -> int:
        """Rows moved by a half-page scroll."""
        raise NotImplementedError

    def set_scroll_amount(self, viewport_id: int, amount: int) -> None:
        raise NotImplementedError
