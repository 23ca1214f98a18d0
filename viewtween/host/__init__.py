# host/__init__.py

from .base import Host, ViewportView
from .memory import Fold, MemoryHost, MemoryViewport

__all__ = ['Host', 'ViewportView', 'Fold', 'MemoryHost', 'MemoryViewport']
