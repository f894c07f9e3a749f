"""Shared plumbing for prompt state machines and their configuration values.

Each prompt kind comes in two parts:

* an immutable configuration dataclass (``Select``, ``Text``, ...) built with
  keyword arguments and ``with_*`` calls that return modified copies;
* a state machine (``SelectPrompt``, ``TextPrompt``, ...) created from that
  configuration right before the event loop starts. Creating it is where
  invalid configuration is rejected.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Generic, Literal, TypeVar

from pi.prompt.answer import Answer
from pi.prompt.driver import run_prompt
from pi.prompt.frame import CURSOR_MARKER, Frame, FrameBuilder
from pi.prompt.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from pi.prompt.keys import KeyEvent
from pi.prompt.render_config import RenderConfig, get_render_config
from pi.prompt.terminal import ProcessTerminal, Terminal
from pi.prompt.text_editor import TextEditor
from pi.prompt.validator import Validation

T = TypeVar("T")
C = TypeVar("C", bound="PromptConfig[Any]")

LoopAction = Literal["submit", "cancel", "interrupt"]


class Prompt(Generic[T]):
    """Base state machine: key handling, submission and frames."""

    def __init__(
        self,
        message: str,
        *,
        help_message: str | None = None,
        render_config: RenderConfig | None = None,
        keybindings: PromptKeybindingsManager | None = None,
    ) -> None:
        self.message = message
        self.help_message = help_message
        # Captured once; a later set_render_config() does not affect us.
        self.render_config = render_config or get_render_config()
        self.keybindings = keybindings or get_prompt_keybindings()
        self.error: Validation | None = None

    # -- hooks for subclasses -----------------------------------------------

    def setup(self, terminal: Terminal) -> None:
        """Called once the terminal is in raw mode, before the first frame."""

    def action_for(self, event: KeyEvent) -> LoopAction | None:
        """Map *event* to a loop-level action, or ``None`` for ``handle``."""
        kb = self.keybindings
        if kb.matches(event, "interrupt"):
            return "interrupt"
        if kb.matches(event, "cancel"):
            return "cancel"
        if kb.matches(event, "submit"):
            return "submit"
        return None

    def handle(self, event: KeyEvent) -> bool:
        """React to a non-loop key; return ``True`` when a redraw is needed."""
        raise NotImplementedError

    def submit(self) -> Answer[T] | None:
        """Try to produce the answer; ``None`` keeps the prompt running."""
        raise NotImplementedError

    def pre_cancel(self) -> bool:
        """Return ``False`` to swallow a cancel key instead of canceling."""
        return True

    def render(self, frame: FrameBuilder) -> None:
        raise NotImplementedError

    def format_answer(self, value: T) -> str:
        raise NotImplementedError

    # -- shared helpers -----------------------------------------------------

    def reject(self, validation: Validation) -> None:
        self.error = validation

    def render_error(self, frame: FrameBuilder) -> None:
        if self.error is not None:
            frame.error_line(self.error.message)

    def render_help(self, frame: FrameBuilder, message: str | None = None) -> None:
        text = message if message is not None else self.help_message
        if text:
            frame.help_line(text)

    def render_input(self, editor: TextEditor, placeholder: str | None = None) -> str:
        """Styled input text with the cursor marker, or the placeholder."""
        cfg = self.render_config
        if editor.is_empty() and placeholder:
            return CURSOR_MARKER + cfg.placeholder(placeholder)
        return editor.render(cfg.text_input)

    def frame(self) -> Frame:
        builder = FrameBuilder(self.render_config)
        self.render(builder)
        return builder.build()

    def answered_frame(self, value: T) -> Frame:
        builder = FrameBuilder(self.render_config)
        builder.answered_line(self.message, self.format_answer(value))
        return builder.build()

    def canceled_frame(self) -> Frame:
        builder = FrameBuilder(self.render_config)
        builder.canceled_line(self.message)
        return builder.build()


class PromptConfig(Generic[T]):
    """Entry points shared by all prompt configuration dataclasses."""

    render_config: RenderConfig | None
    help_message: str | None

    def create_prompt(self) -> Prompt[T]:
        """Validate the configuration and build the state machine."""
        raise NotImplementedError

    def answer(self, terminal: Terminal | None = None) -> Answer[T]:
        """Run the prompt and return its ``Answer``."""
        prompt = self.create_prompt()
        return run_prompt(prompt, terminal or ProcessTerminal())

    def prompt(self, terminal: Terminal | None = None) -> T:
        """Run the prompt; cancellation and interruption raise."""
        return self.answer(terminal).unwrap()

    def prompt_skippable(self, terminal: Terminal | None = None) -> T | None:
        """Run the prompt; cancellation returns ``None``."""
        answer = self.answer(terminal)
        if answer.status == "canceled":
            return None
        return answer.unwrap()

    # -- fluent configuration -----------------------------------------------

    def with_options(self: C, **changes: Any) -> C:
        """Copy with arbitrary fields replaced."""
        return replace(self, **changes)  # type: ignore[type-var]

    def with_help_message(self: C, message: str) -> C:
        return replace(self, help_message=message)  # type: ignore[type-var]

    def without_help_message(self: C) -> C:
        return replace(self, help_message=None)  # type: ignore[type-var]

    def with_render_config(self: C, config: RenderConfig) -> C:
        return replace(self, render_config=config)  # type: ignore[type-var]
