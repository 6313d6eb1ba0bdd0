"""Reading and writing documents as newline-terminated lines."""

import logging
import os
import tempfile
from typing import Iterable

from .constants import EditorConstants
from .errors import LoadError, SaveError

logger = logging.getLogger(__name__)


def read_lines(path: str, encoding: str = EditorConstants.DEFAULT_ENCODING) -> list[str]:
    """Read ``path`` and return its lines without their ``\\n`` separators.

    Only ``\\n`` separates lines; a ``\\r`` before it stays part of the
    line. A final newline does not start an extra empty line. An empty
    file yields an empty list.

    Raises:
        LoadError: if the file is missing, unreadable, or its bytes cannot be
            decoded with ``encoding``.
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError as e:
        raise LoadError(path, "no such file") from e
    except OSError as e:
        raise LoadError(path, e.strerror or str(e)) from e

    if not data:
        lines = []
    else:
        raw_lines = data.split(EditorConstants.LINE_TERMINATOR)
        if data.endswith(EditorConstants.LINE_TERMINATOR):
            raw_lines.pop()
        try:
            lines = [raw.decode(encoding, EditorConstants.ENCODING_ERRORS) for raw in raw_lines]
        except LookupError as e:
            raise LoadError(path, f"unknown encoding {encoding}") from e
        except UnicodeError as e:
            raise LoadError(path, f"cannot decode as {encoding}") from e

    logger.info(f"Loaded {len(lines)} lines from {path}")
    return lines


def write_lines(path: str, lines: Iterable[str],
                encoding: str = EditorConstants.DEFAULT_ENCODING,
                atomic: bool = True) -> None:
    """Write ``lines`` to ``path``, each followed by ``\\n``.

    With ``atomic`` the data goes to a temporary file in the same directory
    which then replaces ``path``, so a failed save leaves the old file
    untouched.

    Raises:
        SaveError: if encoding, opening, writing or closing fails.
    """
    try:
        payload = b"".join(
            line.encode(encoding, EditorConstants.ENCODING_ERRORS) + EditorConstants.LINE_TERMINATOR
            for line in lines
        )
    except (LookupError, UnicodeError) as e:
        raise SaveError(path, f"cannot encode as {encoding}") from e

    if atomic:
        _write_atomic(path, payload)
    else:
        try:
            with open(path, 'wb') as f:
                f.write(payload)
        except OSError as e:
            logger.warning(f"Save to {path} failed: {e}")
            raise SaveError(path, e.strerror or str(e)) from e
    logger.info(f"Saved {len(payload)} bytes to {path}")


def _write_atomic(path: str, payload: bytes) -> None:
    # Temp file must live in the target directory for os.replace to be atomic
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(payload)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        _copy_mode(path, temp_filename)
        os.replace(temp_filename, path)
    except OSError as e:
        logger.warning(f"Save to {path} failed: {e}")
        if temp_filename is not None and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove {temp_filename}: {cleanup_error}")
        raise SaveError(path, e.strerror or str(e)) from e


def _copy_mode(path: str, temp_filename: str) -> None:
    # NamedTemporaryFile creates 0600 files; keep the original permissions
    try:
        mode = os.stat(path).st_mode
    except FileNotFoundError:
        return
    os.chmod(temp_filename, mode & 0o7777)
