# __init__.py

from .logger import Logger
from .config import ScrollConfig
from .errors import MissingScrollTargetError, ViewportGoneError, ViewTweenError
from .animation import Animation
from .folds import FoldEdge, FoldMap, find_folds_delta, find_folds_range
from .tween import TweenState, ViewTween
from .throttle import TrailingThrottle
from .scheduler import FrameLoop
from .controller import ScrollController
from .actions import ScrollActions
from .host import Fold, Host, MemoryHost, ViewportView

__all__ = [
    "Animation",
    "Fold",
    "FoldEdge",
    "FoldMap",
    "FrameLoop",
    "Host",
    "Logger",
    "MemoryHost",
    "MissingScrollTargetError",
    "ScrollActions",
    "ScrollConfig",
    "ScrollController",
    "TrailingThrottle",
    "TweenState",
    "ViewTween",
    "ViewTweenError",
    "ViewportGoneError",
    "ViewportView",
    "find_folds_delta",
    "find_folds_range",
]
