"""cellpad - a terminal text editor built on a small editing core."""

import logging

from .model import DocumentBuffer, Viewport
from .navigation import NavigationEngine
from .selection import CursorPosition, SelectionModel
from .undo import DocumentSnapshot, HistoryLog

# The editor owns the terminal; log output goes nowhere unless configured
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'CursorPosition',
    'DocumentBuffer',
    'DocumentSnapshot',
    'HistoryLog',
    'NavigationEngine',
    'SelectionModel',
    'Viewport',
]
