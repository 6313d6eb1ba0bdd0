"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .view import ViewFrame

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys through curtsies."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()  # type: ignore

    def cleanup(self):
        """Leave raw input and fullscreen mode."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown must not mask the exception that ended the loop
                logger.warning(f"Could not restore terminal input mode: {e}")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def draw_frame(self, frame: ViewFrame, status_message: Optional[str] = None):
        """Redraw the whole screen from ``frame``.

        Lines arrive already cut to the viewport. The status message, if
        any, is shown in reverse video on the bottom row.
        """
        print(self.term.home + self.term.clear, end='')

        for y, line in enumerate(frame.lines):
            if line:
                print(self.term.move(y, 0) + line, end='')

        if status_message:
            print(self.term.move(self.term.height - 1, 0) + self.term.clear_eol, end='')
            print(self.term.reverse + f" {status_message} " + self.term.normal, end='')

        print(self.term.move(frame.cursor_y, frame.cursor_x) + self.term.normal_cursor,
              end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None on timeout or when
            input has not been set up.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))  # type: ignore

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1  # Reserve one line for status
