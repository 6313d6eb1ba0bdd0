"""Editing session: one buffer, one cursor, one file.

The session is the object the key handlers operate on. It owns all the
editor's mutable state; nothing is kept at module level.
"""

import logging
from typing import Optional

from .buffer import Char, LineBuffer
from .constants import EditorConstants
from .cursor import CursorController
from .errors import SaveError
from .settings import Settings
from .storage import read_lines, write_lines
from .view import ViewFrame, render_frame

logger = logging.getLogger(__name__)


class EditorSession:
    """Buffer and cursor for a single open document."""

    def __init__(self, buffer: Optional[LineBuffer] = None,
                 filename: Optional[str] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        if buffer is None:
            buffer = LineBuffer(capacity=self.settings.initial_capacity,
                                encoding=self.settings.encoding)
        self.buffer = buffer
        self.cursor = CursorController()
        self.filename = filename
        self.modified = False
        self.status_message: Optional[str] = None

    @classmethod
    def open(cls, path: str, settings: Optional[Settings] = None) -> "EditorSession":
        """Load ``path`` into a new session.

        Raises:
            LoadError: if the file cannot be read.
        """
        settings = settings or Settings()
        lines = read_lines(path, encoding=settings.encoding)
        buffer = LineBuffer.load(lines, capacity=settings.initial_capacity,
                                 encoding=settings.encoding)
        return cls(buffer=buffer, filename=path, settings=settings)

    # --- Editing ---

    def insert_char(self, ch: Char):
        cursor = self.cursor
        self.buffer.insert_char(cursor.row, cursor.column, ch)
        cursor.column += 1
        self.modified = True

    def backspace(self):
        cursor = self.cursor
        if cursor.row == 0 and cursor.column == 0:
            return
        cursor.row, cursor.column = self.buffer.delete_char_before(cursor.row, cursor.column)
        self.modified = True

    def delete(self):
        cursor = self.cursor
        before = self.buffer.line_count, self.buffer.line_length(cursor.row)
        self.buffer.delete_char_at(cursor.row, cursor.column)
        if (self.buffer.line_count, self.buffer.line_length(cursor.row)) != before:
            self.modified = True

    def newline(self):
        cursor = self.cursor
        cursor.row = self.buffer.split_line(cursor.row, cursor.column)
        cursor.column = 0
        self.modified = True

    # --- Movement ---

    def move(self, direction: str):
        """Move the cursor one step, unchecked; ``clamp`` repairs it."""
        moves = {
            'up': self.cursor.move_up,
            'down': self.cursor.move_down,
            'left': self.cursor.move_left,
            'right': self.cursor.move_right,
        }
        try:
            move = moves[direction]
        except KeyError:
            raise ValueError(f"unknown direction: {direction!r}") from None
        move()

    def clamp(self, viewport_height: int, viewport_width: int):
        self.cursor = self.cursor.clamp(self.buffer, viewport_height, viewport_width)

    def frame(self, viewport_height: int, viewport_width: int) -> ViewFrame:
        return render_frame(self.buffer, self.cursor, viewport_height, viewport_width)

    # --- Persistence ---

    def save(self) -> bool:
        """Write the buffer back to ``filename``.

        Returns True on success. On failure the document stays in memory,
        the modified flag is left alone and the status message says so.
        """
        if not self.filename:
            logger.warning("Save requested for a session without a filename")
            self.status_message = EditorConstants.SAVE_FAILED_MESSAGE
            return False
        try:
            write_lines(self.filename, self.buffer.serialize(),
                        encoding=self.buffer.encoding,
                        atomic=self.settings.atomic_save)
        except SaveError as e:
            logger.warning(f"{e}")
            self.status_message = EditorConstants.SAVE_FAILED_MESSAGE
            return False
        self.modified = False
        self.status_message = EditorConstants.SAVE_OK_MESSAGE
        return True
