"""TextEditor - single-line, grapheme-aware text buffer with a cursor."""

from __future__ import annotations

from typing import Callable, Literal

from pi.prompt.frame import CURSOR_MARKER
from pi.prompt.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from pi.prompt.keys import KeyEvent
from pi.prompt.utils import (
    get_segmenter,
    grapheme_length,
    is_control_text,
    is_punctuation_char,
    is_whitespace_char,
)

_segmenter = get_segmenter()

# "content": the text changed; "position": only the cursor moved;
# "clean": nothing happened.
EditResult = Literal["content", "position", "clean"]


class TextEditor:
    """Text buffer whose cursor always sits on a grapheme boundary.

    The value is kept as a ``str``; the cursor is stored as a string offset
    internally and reported in grapheme clusters through ``cursor``.
    """

    def __init__(self, value: str = "") -> None:
        self._value: str = value
        self._cursor: int = len(value)

    # -- accessors ----------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        """Cursor position in grapheme clusters, ``0 <= cursor <= length``."""
        return grapheme_length(self._value[: self._cursor])

    @property
    def length(self) -> int:
        """Length of the content in grapheme clusters."""
        return grapheme_length(self._value)

    def is_empty(self) -> bool:
        return not self._value

    def before_cursor(self) -> str:
        return self._value[: self._cursor]

    def after_cursor(self) -> str:
        return self._value[self._cursor :]

    # -- key dispatch -------------------------------------------------------

    def handle_key(
        self, event: KeyEvent, keybindings: PromptKeybindingsManager | None = None
    ) -> EditResult:
        """Apply *event* to the buffer.

        Editing keys are looked up in *keybindings* (the process-wide
        bindings by default); printable ``"char"`` events are inserted.
        """
        kb = keybindings or get_prompt_keybindings()

        actions: list[tuple[str, Callable[[], EditResult]]] = [
            ("deleteCharBackward", self.delete_backward),
            ("deleteCharForward", self.delete_forward),
            ("deleteWordBackward", self.delete_word_backward),
            ("deleteWordForward", self.delete_word_forward),
            ("deleteToLineStart", self.delete_to_start),
            ("deleteToLineEnd", self.delete_to_end),
            ("cursorLeft", self.move_left),
            ("cursorRight", self.move_right),
            ("cursorWordLeft", self.move_word_left),
            ("cursorWordRight", self.move_word_right),
            ("cursorLineStart", self.move_to_start),
            ("cursorLineEnd", self.move_to_end),
        ]
        for action, operation in actions:
            if kb.matches(event, action):  # type: ignore[arg-type]
                return operation()

        if event.kind == "char" and not event.has_modifier and not is_control_text(event.text):
            return self.insert(event.text)

        return "clean"

    # -- insertion ----------------------------------------------------------

    def insert(self, text: str) -> EditResult:
        """Insert *text* at the cursor and move the cursor past it."""
        if not text:
            return "clean"
        before = self._value[: self._cursor] + text
        self._value = before + self._value[self._cursor :]
        # A combining mark joins the grapheme before it, so snap to the
        # nearest boundary instead of trusting the raw offset.
        self._cursor = self._snap_to_boundary(len(before))
        return "content"

    def replace(self, text: str) -> EditResult:
        """Replace the whole content; the cursor moves to the end."""
        if text == self._value:
            return self.move_to_end()
        self._value = text
        self._cursor = len(text)
        return "content"

    # -- deletion -----------------------------------------------------------

    def delete_backward(self) -> EditResult:
        if self._cursor == 0:
            return "clean"
        start = self._cursor - len(_segmenter.segment(self._value[: self._cursor])[-1])
        return self._delete_range(start, self._cursor)

    def delete_forward(self) -> EditResult:
        if self._cursor >= len(self._value):
            return "clean"
        end = self._cursor + len(_segmenter.segment(self._value[self._cursor :])[0])
        return self._delete_range(self._cursor, end)

    def delete_word_backward(self) -> EditResult:
        return self._delete_range(self._word_start_before(), self._cursor)

    def delete_word_forward(self) -> EditResult:
        return self._delete_range(self._cursor, self._word_end_after())

    def delete_to_start(self) -> EditResult:
        return self._delete_range(0, self._cursor)

    def delete_to_end(self) -> EditResult:
        return self._delete_range(self._cursor, len(self._value))

    def _delete_range(self, start: int, end: int) -> EditResult:
        if start >= end:
            return "clean"
        self._value = self._value[:start] + self._value[end:]
        self._cursor = start
        return "content"

    # -- cursor motion ------------------------------------------------------

    def move_left(self) -> EditResult:
        if self._cursor == 0:
            return "clean"
        last = _segmenter.segment(self._value[: self._cursor])[-1]
        return self._move_to(self._cursor - len(last))

    def move_right(self) -> EditResult:
        if self._cursor >= len(self._value):
            return "clean"
        first = _segmenter.segment(self._value[self._cursor :])[0]
        return self._move_to(self._cursor + len(first))

    def move_word_left(self) -> EditResult:
        return self._move_to(self._word_start_before())

    def move_word_right(self) -> EditResult:
        return self._move_to(self._word_end_after())

    def move_to_start(self) -> EditResult:
        return self._move_to(0)

    def move_to_end(self) -> EditResult:
        return self._move_to(len(self._value))

    def _move_to(self, offset: int) -> EditResult:
        if offset == self._cursor:
            return "clean"
        self._cursor = offset
        return "position"

    # -- word boundaries ----------------------------------------------------

    def _word_start_before(self) -> int:
        """Offset of the start of the word before the cursor."""
        offset = self._cursor
        graphemes = _segmenter.segment(self._value[:offset])

        while graphemes and is_whitespace_char(graphemes[-1]):
            offset -= len(graphemes.pop())

        if graphemes and is_punctuation_char(graphemes[-1]):
            while graphemes and is_punctuation_char(graphemes[-1]):
                offset -= len(graphemes.pop())
        else:
            while (
                graphemes
                and not is_whitespace_char(graphemes[-1])
                and not is_punctuation_char(graphemes[-1])
            ):
                offset -= len(graphemes.pop())
        return offset

    def _word_end_after(self) -> int:
        """Offset of the end of the word after the cursor."""
        offset = self._cursor
        graphemes = _segmenter.segment(self._value[offset:])
        idx = 0

        while idx < len(graphemes) and is_whitespace_char(graphemes[idx]):
            offset += len(graphemes[idx])
            idx += 1

        if idx < len(graphemes) and is_punctuation_char(graphemes[idx]):
            while idx < len(graphemes) and is_punctuation_char(graphemes[idx]):
                offset += len(graphemes[idx])
                idx += 1
        else:
            while (
                idx < len(graphemes)
                and not is_whitespace_char(graphemes[idx])
                and not is_punctuation_char(graphemes[idx])
            ):
                offset += len(graphemes[idx])
                idx += 1
        return offset

    def _snap_to_boundary(self, offset: int) -> int:
        pos = 0
        for g in _segmenter.segment(self._value):
            if pos + len(g) > offset:
                break
            pos += len(g)
        return pos

    # -- rendering ----------------------------------------------------------

    def render(self, style: Callable[[str], str], *, show_cursor: bool = True) -> str:
        """Styled content with the cursor marker at the cursor position."""
        marker = CURSOR_MARKER if show_cursor else ""
        return style(self.before_cursor()) + marker + style(self.after_cursor())
