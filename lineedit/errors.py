"""Exception types raised by the editor core and its storage layer."""

from typing import Optional


class EditorError(Exception):
    """Base class for all lineedit errors."""


class LoadError(EditorError):
    """A document could not be read or decoded."""

    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        if path:
            super().__init__(f"Cannot load {path}: {reason}")
        else:
            super().__init__(f"Cannot load document: {reason}")


class SaveError(EditorError):
    """A document could not be written back to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot save to {path}: {reason}")


class OutOfRange(EditorError, IndexError):
    """A line or column index violates an operation's precondition.

    This signals a caller bug (clamp was skipped), not a user error.
    Operations raise it before touching any state.
    """
