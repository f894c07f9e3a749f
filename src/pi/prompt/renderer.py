"""Renderer - erase-then-redraw of prompt frames.

The renderer remembers the last frame it drew. Before drawing a new one it
moves the cursor back to the first row of that frame and clears downward.
Row counts are recomputed from the remembered lines at the current terminal
width on every render, so a resize between two renders still erases the
right number of rows.
"""

from __future__ import annotations

from pi.prompt.frame import Frame
from pi.prompt.terminal import Terminal
from pi.prompt.utils import count_rows


def _content_rows(frame: Frame, width: int) -> int:
    return sum(count_rows(line, width) for line in frame.lines)


def cursor_position(frame: Frame, width: int) -> tuple[int, int]:
    """Terminal ``(row, column)`` of the frame's cursor, relative to its top.

    Without a cursor target the cursor rests at the start of the last row.
    A column that is a whole multiple of *width* lands at the start of the
    next row, which may be one row past the frame's text.
    """
    if not frame.lines:
        return 0, 0

    if frame.cursor is None:
        return _content_rows(frame, width) - 1, 0

    line_idx, col = frame.cursor
    row = sum(count_rows(line, width) for line in frame.lines[:line_idx])
    if width <= 0:
        return row, col

    wrapped = col // width
    return row + wrapped, col - wrapped * width


def frame_rows(frame: Frame, width: int) -> int:
    """Terminal rows *frame* occupies when wrapped at *width*."""
    if not frame.lines:
        return 0
    return max(_content_rows(frame, width), cursor_position(frame, width)[0] + 1)


class Renderer:
    """Draws frames for one prompt invocation.

    Cursor movement, clearing and cursor visibility go through the
    ``Terminal`` capability methods; only frame text is written directly.
    """

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._previous: Frame | None = None
        self._finished = False
        self.render_count = 0

    @property
    def previous_frame(self) -> Frame | None:
        return self._previous

    def render(self, frame: Frame) -> None:
        """Replace the previous frame with *frame*."""
        if self._finished:
            raise RuntimeError("the final frame was already rendered")

        term = self._terminal
        width = term.columns
        term.hide_cursor()
        self._erase_previous(width)
        if frame.lines:
            term.write("\r\n".join(frame.lines))

        if frame.cursor is not None:
            bottom = _content_rows(frame, width) - 1
            row, col = cursor_position(frame, width)
            if row > bottom:
                # The cursor line fills its last row exactly.
                term.write("\r\n")
            else:
                term.move_by(row - bottom)
            term.move_to_column(col)
            term.show_cursor()

        self._previous = frame
        self.render_count += 1

    def render_final(self, frame: Frame) -> None:
        """Draw the answered (or canceled) frame and stop rendering."""
        if self._finished:
            raise RuntimeError("the final frame was already rendered")

        term = self._terminal
        self._erase_previous(term.columns)
        if frame.lines:
            term.write("\r\n".join(frame.lines) + "\r\n")
        term.show_cursor()

        self._previous = None
        self._finished = True
        self.render_count += 1

    def release(self) -> None:
        """Leave the cursor on a fresh line below the current frame."""
        if self._finished:
            return
        term = self._terminal
        if self._previous is not None and self._previous.lines:
            width = term.columns
            row, _ = cursor_position(self._previous, width)
            term.move_by(frame_rows(self._previous, width) - 1 - row)
            term.write("\r\n")
        term.show_cursor()
        self._previous = None
        self._finished = True

    def _erase_previous(self, width: int) -> None:
        term = self._terminal
        if self._previous is not None:
            row, _ = cursor_position(self._previous, width)
            term.move_by(-row)
        term.move_to_column(0)
        term.clear_from_cursor()
