"""Frames: the complete description of what a prompt shows on screen.

Prompts draw into a ``FrameBuilder`` on every state change. Lines are plain
strings that may carry ANSI styling; a prompt that wants the terminal cursor
inside its text places ``CURSOR_MARKER`` there and ``Frame`` turns the marker
into a cursor target.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from pi.prompt.render_config import RenderConfig
from pi.prompt.utils import visible_width

# APC sequence that terminals ignore; never written out, only used as a
# placeholder while a frame is being built.
CURSOR_MARKER = "\x1b_pi:c\x07"


@dataclass(frozen=True)
class Frame:
    """Styled lines plus an optional ``(line, column)`` cursor target.

    Lines never contain line breaks; build frames with ``from_lines``.
    """

    lines: tuple[str, ...] = ()
    cursor: tuple[int, int] | None = None

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> Frame:
        """Build a frame, extracting the first ``CURSOR_MARKER`` found.

        Embedded line breaks (multi-line messages, help or errors) start
        new frame lines, so every frame line begins at column zero.
        """
        cleaned = [
            part
            for line in lines
            for part in line.replace("\r\n", "\n").split("\n")
        ]
        cursor: tuple[int, int] | None = None

        for row, line in enumerate(cleaned):
            pos = line.find(CURSOR_MARKER)
            if pos == -1:
                continue
            if cursor is None:
                cursor = (row, visible_width(line[:pos]))
            cleaned[row] = line.replace(CURSOR_MARKER, "")

        return cls(tuple(cleaned), cursor)


@dataclass
class FrameBuilder:
    """Accumulates the lines of one frame using a render config."""

    config: RenderConfig
    _lines: list[str] = field(default_factory=list)

    def line(self, *tokens: str) -> None:
        """Append one line made of already-styled tokens."""
        self._lines.append("".join(tokens))

    def build(self) -> Frame:
        return Frame.from_lines(self._lines)

    # -- common lines -------------------------------------------------------

    def prompt_line(
        self,
        message: str,
        *,
        default: str | None = None,
        content: str = "",
    ) -> None:
        """``? message (default) content``."""
        cfg = self.config
        tokens = [cfg.prompt_prefix_style(cfg.prompt_prefix), " ", cfg.prompt(message)]
        if default is not None:
            tokens += [" ", cfg.default_value(f"({default})")]
        tokens.append(" ")
        if content:
            tokens.append(content)
        self.line(*tokens)

    def answered_line(self, message: str, answer: str) -> None:
        """``> message answer``, the final frame of a submitted prompt."""
        cfg = self.config
        self.line(
            cfg.answered_prompt_prefix_style(cfg.answered_prompt_prefix),
            " ",
            cfg.prompt(message),
            " ",
            cfg.answer(answer),
        )

    def canceled_line(self, message: str) -> None:
        cfg = self.config
        self.line(
            cfg.prompt_prefix_style(cfg.prompt_prefix),
            " ",
            cfg.prompt(message),
            " ",
            cfg.canceled_indicator_style(cfg.canceled_indicator),
        )

    def error_line(self, message: str | None) -> None:
        cfg = self.config
        text = message if message is not None else cfg.default_error_message
        self.line(cfg.error_prefix_style(cfg.error_prefix), " ", cfg.error_message(text))

    def help_line(self, message: str) -> None:
        self.line(self.config.help_message(f"[{message}]"))

    # -- option lists -------------------------------------------------------

    def option_lines(
        self,
        labels: Sequence[str],
        *,
        cursor: int | None,
        first: bool,
        last: bool,
        checked: Sequence[bool] | None = None,
        style: Callable[[str], str] | None = None,
    ) -> None:
        """Render one page of options with cursor and scroll indicators."""
        cfg = self.config
        prefix_width = max(
            visible_width(cfg.highlighted_option_prefix),
            visible_width(cfg.scroll_up_prefix),
            visible_width(cfg.scroll_down_prefix),
        )
        last_idx = len(labels) - 1

        for idx, label in enumerate(labels):
            highlighted = idx == cursor
            if highlighted:
                prefix = cfg.highlighted_option_prefix_style(
                    cfg.highlighted_option_prefix
                )
                raw_prefix = cfg.highlighted_option_prefix
            elif idx == 0 and not first:
                prefix = raw_prefix = cfg.scroll_up_prefix
            elif idx == last_idx and not last:
                prefix = raw_prefix = cfg.scroll_down_prefix
            else:
                prefix = raw_prefix = ""
            padding = " " * (prefix_width - visible_width(raw_prefix))

            tokens = [prefix, padding, " "]
            if checked is not None:
                box = cfg.selected_checkbox if checked[idx] else cfg.unselected_checkbox
                tokens += [box, " "]

            if highlighted and cfg.selected_option is not None:
                text_style = cfg.selected_option
            else:
                text_style = style or cfg.option
            tokens.append(text_style(label))
            self.line(*tokens)
