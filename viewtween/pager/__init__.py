# pager/__init__.py

from .document import Document, parse_marker_folds
from .host import PagerHost
from .app import Pager

__all__ = ['Document', 'PagerHost', 'Pager', 'parse_marker_folds']
