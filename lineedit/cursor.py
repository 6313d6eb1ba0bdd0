"""Cursor position and viewport scroll arithmetic."""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import LineBuffer


@dataclass
class CursorController:
    """Cursor position plus the viewport's scroll offsets.

    Movement is deliberately unchecked: ``move_up`` on row 0 leaves row at
    -1 and ``move_right`` past the end of a line leaves column past the
    end. ``clamp`` is the only place where bounds are enforced, and it has
    to run after every event before the state is used to index the buffer
    or draw the screen. Do not add per-move bounds checks; they would change
    where the viewport scrolls to.
    """

    row: int = 0
    column: int = 0
    row_scroll: int = 0
    col_scroll: int = 0

    def move_up(self):
        self.row -= 1

    def move_down(self):
        self.row += 1

    def move_left(self):
        self.column -= 1

    def move_right(self):
        self.column += 1

    def reset(self):
        self.row = self.column = 0
        self.row_scroll = self.col_scroll = 0

    def clamp(self, buffer: "LineBuffer", viewport_height: int,
              viewport_width: int) -> "CursorController":
        """Return the state pulled back inside the buffer and the viewport.

        Row is clamped first, then column against the clamped row's length,
        then each scroll offset is moved just far enough to show the cursor.
        Clamping an already valid state returns an equal state.
        """
        height = max(1, viewport_height)
        width = max(1, viewport_width)

        row = min(max(self.row, 0), buffer.line_count - 1)
        column = min(max(self.column, 0), buffer.line_length(row))

        row_scroll = self.row_scroll
        if row < row_scroll:
            row_scroll = row
        elif row >= row_scroll + height:
            row_scroll = row - height + 1

        col_scroll = self.col_scroll
        if column < col_scroll:
            col_scroll = column
        elif column >= col_scroll + width:
            col_scroll = column - width + 1

        return replace(self, row=row, column=column,
                       row_scroll=row_scroll, col_scroll=col_scroll)

    def screen_position(self) -> tuple[int, int]:
        """Cursor position relative to the top-left of the viewport."""
        return (self.row - self.row_scroll, self.column - self.col_scroll)
