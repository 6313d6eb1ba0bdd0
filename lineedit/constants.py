"""Constants and configuration defaults for the lineedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Line table
    INITIAL_CAPACITY = 256  # Line slots allocated for a freshly loaded document

    # Text encoding
    DEFAULT_ENCODING = "utf-8"
    ENCODING_ERRORS = "surrogateescape"  # Keeps undecodable file bytes intact
    LINE_TERMINATOR = b"\n"

    # Input
    PRINTABLE_MIN = 0x20  # Space
    PRINTABLE_MAX = 0x7E  # Tilde

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Status messages
    SAVE_OK_MESSAGE = "File saved successfully"
    SAVE_FAILED_MESSAGE = "ERROR: Failed to save file"
    USAGE_MESSAGE = "Usage: lineedit FILE"

    # Environment
    ENV_PREFIX = "LINEEDIT_"
