# errors.py


class ViewTweenError(Exception):
    """Base class for errors raised by viewtween."""


class MissingScrollTargetError(ViewTweenError, ValueError):
    """A tween was constructed with neither a target line nor a scroll delta."""


class ViewportGoneError(ViewTweenError):
    """The host no longer knows the viewport (closed, or never existed)."""

    def __init__(self, viewport_id: int):
        super().__init__(f"Invalid viewport id: {viewport_id}")
        self.viewport_id = viewport_id
