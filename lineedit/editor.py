"""Main editor controller: the key event loop."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import CommandRegistry
from .keyboard import KeyboardHandler, KeyEvent
from .session import EditorSession
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)

RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize


class Editor:
    """Runs one editing session against the terminal.

    Every event follows the same path: dispatch the key to a command,
    clamp the cursor against the current viewport, redraw.
    """

    def __init__(self, session: EditorSession,
                 terminal: Optional[TerminalInterface] = None):
        self.session = session
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()
        self.running = False
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop until Escape is pressed."""
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = self._disable_flow_control()
        try:
            self._refresh()
            while self.running:
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    logger.debug(f"Terminal resized to {self.terminal.width}x{self.terminal.height}")
                    self._refresh()
                if 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        if self.running:
                            self._draw()
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.warning(f"Could not restore terminal settings: {e}")
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _disable_flow_control(self):
        """Turn off IXON/IXOFF so Ctrl-S reaches the editor as a key."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
        except (termios.error, OSError, ValueError):
            # stdin is not a terminal (tests, pipes)
            return None
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        return old_settings

    def handle_key_event(self, key_event: KeyEvent):
        """Dispatch one key event and clamp the cursor."""
        # A status message lasts until the next key
        self.session.status_message = None
        self.command_registry.execute(self, key_event)
        self.clamp()

    def clamp(self):
        self.session.clamp(self.terminal.height, self.terminal.width)

    def _refresh(self):
        self.clamp()
        self._draw()

    def _draw(self):
        """Draw the current editor state to terminal."""
        frame = self.session.frame(self.terminal.height, self.terminal.width)
        self.terminal.draw_frame(frame, self.session.status_message)
