"""lineedit - A small line-oriented terminal text editor."""

import logging

from .buffer import LineBuffer
from .cursor import CursorController
from .errors import EditorError, LoadError, OutOfRange, SaveError
from .session import EditorSession
from .view import ViewFrame, render_frame

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'LineBuffer',
    'CursorController',
    'EditorSession',
    'ViewFrame',
    'render_frame',
    'EditorError',
    'LoadError',
    'SaveError',
    'OutOfRange',
]
