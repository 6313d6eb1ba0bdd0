"""Read-only projection of the buffer onto the viewport."""

from dataclasses import dataclass, field

from .buffer import LineBuffer
from .cursor import CursorController


@dataclass
class ViewFrame:
    """What the rendering surface should draw.

    ``lines`` holds at most ``height`` entries, already cut to the visible
    column range. ``cursor_y``/``cursor_x`` are screen-relative.
    """
    lines: list[str] = field(default_factory=list)
    cursor_y: int = 0
    cursor_x: int = 0


def render_frame(buffer: LineBuffer, cursor: CursorController,
                 viewport_height: int, viewport_width: int) -> ViewFrame:
    """Cut the visible slice out of ``buffer``.

    Expects a cursor that has been clamped against the same viewport. As in
    ``CursorController.clamp``, dimensions below 1 count as 1.
    Rows past the end of the document are omitted; a line shorter than the
    horizontal scroll offset renders as an empty string.
    """
    first = cursor.row_scroll
    last = min(first + max(1, viewport_height), buffer.line_count)
    start = cursor.col_scroll
    stop = start + max(1, viewport_width)

    lines = []
    for row in range(first, last):
        visible = buffer.line(row)[start:stop]
        lines.append(visible.decode(buffer.encoding, errors="replace"))

    cursor_y, cursor_x = cursor.screen_position()
    return ViewFrame(lines=lines, cursor_y=cursor_y, cursor_x=cursor_x)
