"""lineedit CLI entry point.

Allows running via `python -m lineedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string

LOG_FILE_ENV = f"{EditorConstants.ENV_PREFIX}LOG_FILE"
LOG_LEVEL_ENV = f"{EditorConstants.ENV_PREFIX}LOG_LEVEL"


def configure_logging() -> None:
    """Send log records to ``$LINEEDIT_LOG_FILE`` if it is set.

    The editor owns the whole screen, so there is no stderr fallback.
    """
    log_file = os.environ.get(LOG_FILE_ENV)
    if not log_file:
        return
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("lineedit")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .keyboard import KeyboardHandler, KeyType
    from .terminal import TerminalInterface

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            print(f"type={ev.key_type.value} value={ev.value} raw='{_escape_bytes(ev.raw)}'\r")
    finally:
        term.cleanup()


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0
    if len(args) != 1:
        print(EditorConstants.USAGE_MESSAGE, file=sys.stderr)
        return 1

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .errors import LoadError
    from .session import EditorSession
    from .settings import load_settings

    settings = load_settings()
    try:
        session = EditorSession.open(args[0], settings)
    except LoadError as e:
        logging.getLogger(__name__).warning(f"{e}")
        print(f"Error loading file: {e}", file=sys.stderr)
        return 1

    Editor(session).run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
