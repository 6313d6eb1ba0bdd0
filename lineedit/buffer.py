"""Line buffer: the document as an ordered, growable table of byte lines."""

import logging
from typing import Iterable, Iterator, Optional, Union

from .constants import EditorConstants
from .errors import LoadError, OutOfRange

logger = logging.getLogger(__name__)

Char = Union[str, int]


class LineBuffer:
    """Ordered sequence of mutable byte lines.

    Each line is a ``bytearray`` holding the line's content without its
    newline. The table of lines is a slot list with an explicit capacity
    that doubles when it runs out, so appending n lines reallocates the
    table O(log n) times.

    The buffer always holds at least one line. An empty document is a
    single empty line.

    Every mutating method checks its indices first and raises
    ``OutOfRange`` without touching the buffer if they are invalid.
    """

    def __init__(self, capacity: int = EditorConstants.INITIAL_CAPACITY,
                 encoding: str = EditorConstants.DEFAULT_ENCODING):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.encoding = encoding
        self._slots: list[Optional[bytearray]] = [None] * capacity
        self._slots[0] = bytearray()
        self._count = 1
        self.reallocations = 0

    @classmethod
    def load(cls, lines_of_text: Iterable[str],
             capacity: int = EditorConstants.INITIAL_CAPACITY,
             encoding: str = EditorConstants.DEFAULT_ENCODING) -> "LineBuffer":
        """Build a buffer from a sequence of text lines.

        A trailing ``\\n`` on an input line is stripped; ``\\r`` is kept as
        content. An empty sequence produces one empty line.
        """
        buf = cls(capacity=capacity, encoding=encoding)
        buf._count = 0
        buf._slots[0] = None
        for index, text in enumerate(lines_of_text):
            if text.endswith("\n"):
                text = text[:-1]
            try:
                data = text.encode(encoding, EditorConstants.ENCODING_ERRORS)
            except UnicodeError as e:
                raise LoadError(None, f"line {index + 1} is not valid {encoding}") from e
            buf._append(bytearray(data))
        if buf._count == 0:
            buf._append(bytearray())
        return buf

    def serialize(self) -> list[str]:
        """Return the lines in order, without terminators, for saving."""
        return [self.text(row) for row in range(self._count)]

    # --- Read access ---

    @property
    def line_count(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[bytes]:
        for row in range(self._count):
            yield bytes(self._slots[row])

    def line(self, row: int) -> bytes:
        """Return a copy of line ``row``."""
        self._check_row(row)
        return bytes(self._slots[row])

    def line_length(self, row: int) -> int:
        self._check_row(row)
        return len(self._slots[row])

    def text(self, row: int) -> str:
        """Return line ``row`` decoded with the buffer's encoding."""
        self._check_row(row)
        return self._slots[row].decode(self.encoding, EditorConstants.ENCODING_ERRORS)

    # --- Editing primitives ---

    def insert_char(self, row: int, column: int, ch: Char) -> None:
        """Insert ``ch`` before column ``column`` of line ``row``.

        ``column`` may equal the line length (append). The character class
        is not checked here; callers filter what they accept.
        """
        self._check_column(row, column)
        byte = self._encode_char(ch)
        self._slots[row].insert(column, byte)

    def delete_char_before(self, row: int, column: int) -> tuple[int, int]:
        """Backspace at ``(row, column)``; return the new cursor position.

        At column 0 the line is merged onto the end of the previous one.
        At the very start of the document nothing happens.
        """
        self._check_column(row, column)
        if column > 0:
            del self._slots[row][column - 1]
            return (row, column - 1)
        if row == 0:
            return (0, 0)
        previous = self._slots[row - 1]
        previous_length = len(previous)
        previous.extend(self._slots[row])
        self.remove_line(row)
        return (row - 1, previous_length)

    def delete_char_at(self, row: int, column: int) -> None:
        """Forward delete at ``(row, column)``.

        At the end of a line the next line is pulled up onto it; at the end
        of the last line nothing happens.
        """
        self._check_column(row, column)
        line = self._slots[row]
        if column < len(line):
            del line[column]
        elif row + 1 < self._count:
            line.extend(self._slots[row + 1])
            self.remove_line(row + 1)

    def split_line(self, row: int, column: int) -> int:
        """Break line ``row`` at ``column`` and return the new line's index."""
        self._check_column(row, column)
        self._ensure_capacity(self._count + 1)
        line = self._slots[row]
        remainder = line[column:]
        del line[column:]
        self._insert_slot(row + 1, remainder)
        return row + 1

    def remove_line(self, at: int) -> None:
        """Delete line ``at`` and shift the following lines up.

        Removing the only line leaves one empty line behind.
        """
        self._check_row(at)
        if self._count == 1:
            self._slots[0] = bytearray()
            return
        count = self._count
        self._slots[at:count - 1] = self._slots[at + 1:count]
        self._slots[count - 1] = None
        self._count -= 1

    # --- Internals ---

    def _append(self, line: bytearray) -> None:
        self._ensure_capacity(self._count + 1)
        self._slots[self._count] = line
        self._count += 1

    def _insert_slot(self, at: int, line: bytearray) -> None:
        count = self._count
        self._slots[at + 1:count + 1] = self._slots[at:count]
        self._slots[at] = line
        self._count += 1

    def _ensure_capacity(self, required: int) -> None:
        capacity = len(self._slots)
        if required <= capacity:
            return
        new_capacity = capacity * 2
        while new_capacity < required:
            new_capacity *= 2
        self._slots.extend([None] * (new_capacity - capacity))
        self.reallocations += 1
        logger.debug(f"Line table grown from {capacity} to {new_capacity} slots")

    def _encode_char(self, ch: Char) -> int:
        if isinstance(ch, int):
            if not 0 <= ch <= 0xFF:
                raise ValueError(f"byte value out of range: {ch}")
            return ch
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        data = ch.encode(self.encoding, EditorConstants.ENCODING_ERRORS)
        if len(data) != 1:
            raise ValueError(f"{ch!r} does not encode to a single byte in {self.encoding}")
        return data[0]

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self._count:
            raise OutOfRange(f"row {row} outside [0, {self._count})")

    def _check_column(self, row: int, column: int) -> None:
        self._check_row(row)
        length = len(self._slots[row])
        if not 0 <= column <= length:
            raise OutOfRange(f"column {column} outside [0, {length}] on row {row}")
