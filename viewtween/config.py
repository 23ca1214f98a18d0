# config.py

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .easing import (
    DEFAULT_CONTINUATION_FN,
    DEFAULT_PROGRESSION_FN,
    ProgressionFn,
    curve_from_dict,
)


@dataclass
class ScrollConfig:
    """
    Settings shared by every tween a controller creates.

    Durations and intervals are in milliseconds.
    """
    duration: float = 250
    max_framerate: float = 144
    scroll_throttle: Optional[float] = None
    progression_fn: ProgressionFn = DEFAULT_PROGRESSION_FN
    continuation_fn: ProgressionFn = DEFAULT_CONTINUATION_FN
    logging_enabled: bool = False
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.duration <= 0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if self.max_framerate <= 0:
            raise ValueError(f"max_framerate must be positive, got {self.max_framerate}")
        if self.scroll_throttle is not None and self.scroll_throttle < 0:
            raise ValueError(f"scroll_throttle must not be negative, got {self.scroll_throttle}")

    @property
    def frame_interval(self) -> float:
        return 1000 / self.max_framerate

    @property
    def scroll_throttle_interval(self) -> float:
        """Window in which repeated scroll requests are coalesced."""
        if self.scroll_throttle is None:
            return self.duration / 2
        return self.scroll_throttle

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScrollConfig":
        """
        Build a config from plain values.

        Easing curves are given as ``progression`` and ``continuation``
        entries, e.g. ``{"curve": "ease_out", "k": 0.55}``.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        values = dict(data)
        kwargs = {}

        if 'progression' in values:
            kwargs['progression_fn'] = curve_from_dict(values.pop('progression'))
        if 'continuation' in values:
            kwargs['continuation_fn'] = curve_from_dict(values.pop('continuation'))

        scalar_fields = {f.name for f in fields(cls)} - {'progression_fn', 'continuation_fn'}
        unknown = set(values) - scalar_fields
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        kwargs.update(values)
        return cls(**kwargs)
