"""Terminal abstraction for raw-mode key reading and output.

Provides the ``Terminal`` protocol the prompt driver talks to and a
``ProcessTerminal`` implementation over ``sys.stdin``/``sys.stdout`` that
manages raw mode, bracketed paste and cursor visibility with ANSI escape
sequences.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import Protocol

from pi.prompt.errors import NotTTYError, PromptIOError
from pi.prompt.keys import KeyEvent, parse_key_event
from pi.prompt.stdin_buffer import InputChunk, StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"

# Seconds to wait for the rest of an escape sequence before treating a
# lone ESC as the Escape key.
_ESCAPE_TIMEOUT = 0.05


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations used by prompts."""

    def start(self) -> None:
        """Enter raw mode."""
        ...

    def stop(self) -> None:
        """Restore the terminal mode saved by ``start``."""
        ...

    def read_key(self) -> KeyEvent:
        """Block until the next key event."""
        ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    def move_by(self, lines: int) -> None: ...

    def move_to_column(self, column: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_from_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    Raw mode is managed with :mod:`tty` and :mod:`termios`. Key presses are
    read with blocking ``os.read`` calls and split into sequences by a
    :class:`StdinBuffer`.
    """

    def __init__(self) -> None:
        self._original_termios: list | None = None
        self._stdin_buffer = StdinBuffer()
        self._pending: deque[KeyEvent] = deque()
        self._write_log_path: str = os.environ.get("PI_PROMPT_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and bracketed paste."""
        if not sys.stdin.isatty():
            raise NotTTYError("The input device is not a TTY")

        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._raw_write(_BRACKETED_PASTE_ENABLE)
        logger.debug("terminal entered raw mode")

    def stop(self) -> None:
        """Restore terminal attributes and cursor visibility."""
        self._stdin_buffer.clear()
        self._pending.clear()
        if self._original_termios is None:
            return

        self._raw_write(_BRACKETED_PASTE_DISABLE + _SHOW_CURSOR)
        termios.tcsetattr(
            sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios
        )
        self._original_termios = None
        logger.debug("terminal restored")

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyEvent:
        """Block until a complete key event is available."""
        fd = sys.stdin.fileno()
        while not self._pending:
            if self._stdin_buffer.pending:
                ready, _, _ = select.select([fd], [], [], _ESCAPE_TIMEOUT)
                if not ready:
                    self._queue(self._stdin_buffer.flush())
                    continue

            raw = os.read(fd, 4096)
            if not raw:
                raise PromptIOError("stdin closed while waiting for a key")
            self._queue(self._stdin_buffer.process(raw.decode("utf-8", errors="replace")))

        return self._pending.popleft()

    def _queue(self, chunks: list[InputChunk]) -> None:
        for chunk in chunks:
            if chunk.paste:
                text = chunk.data.replace("\r\n", "").replace("\r", "").replace("\n", "")
                if text:
                    self._pending.append(KeyEvent.paste(text))
                continue
            event = parse_key_event(chunk.data)
            if event is None:
                logger.debug("ignoring unrecognised input %r", chunk.data)
                continue
            self._pending.append(event)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("could not append to %s", self._write_log_path)

    def move_by(self, lines: int) -> None:
        """Move the cursor up (negative) or down (positive) by *lines*."""
        if lines < 0:
            self._raw_write(_CURSOR_UP_FMT.format(-lines))
        elif lines > 0:
            self._raw_write(_CURSOR_DOWN_FMT.format(lines))

    def move_to_column(self, column: int) -> None:
        """Move the cursor to *column* (zero-based) of the current row."""
        self._raw_write("\r")
        if column > 0:
            self._raw_write(_CURSOR_RIGHT_FMT.format(column))

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    def clear_from_cursor(self) -> None:
        self._raw_write(_CLEAR_FROM_CURSOR)

    def _raw_write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
