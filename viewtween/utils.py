# utils.py

import math
import time


def clamp(value, min_value, max_value):
    if value < min_value:
        return min_value
    if value > max_value:
        return max_value
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def sign(n) -> int:
    return (n > 0) - (n < 0)


def now() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


def get_scrolloff(host, viewport_id: int) -> int:
    """Scroll-off margin of a viewport, clamped to at most half its height."""
    height = host.height(viewport_id)
    return clamp(host.get_option_scrolloff(viewport_id), 0, height // 2)
