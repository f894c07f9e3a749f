"""Password prompt: text input that is hidden or masked on screen."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Literal

from pi.prompt.answer import Answer
from pi.prompt.formatter import format_password
from pi.prompt.frame import CURSOR_MARKER, FrameBuilder
from pi.prompt.keys import KeyEvent
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.render_config import RenderConfig
from pi.prompt.text_editor import TextEditor
from pi.prompt.validator import Validation, Validator, run_validators

# "hidden" shows nothing, "masked" one mask character per grapheme,
# "full" the actual text.
PasswordDisplayMode = Literal["hidden", "masked", "full"]

DEFAULT_CONFIRMATION_MESSAGE = "Confirmation:"
DEFAULT_CONFIRMATION_ERROR = "The answers don't match."


@dataclass(frozen=True)
class Password(PromptConfig[str]):
    """Configuration of a password prompt.

    By default the password is asked twice and both entries must match.
    With ``enable_display_toggle`` Ctrl+R reveals the text while typing.
    """

    message: str
    display_mode: PasswordDisplayMode = "hidden"
    enable_display_toggle: bool = False
    enable_confirmation: bool = True
    confirmation_message: str = DEFAULT_CONFIRMATION_MESSAGE
    confirmation_error_message: str = DEFAULT_CONFIRMATION_ERROR
    help_message: str | None = None
    validators: tuple[Validator, ...] = ()
    formatter: Callable[[str], str] = format_password
    render_config: RenderConfig | None = None

    def with_display_mode(self, mode: PasswordDisplayMode) -> Password:
        return replace(self, display_mode=mode)

    def with_display_toggle_enabled(self) -> Password:
        return replace(self, enable_display_toggle=True)

    def without_confirmation(self) -> Password:
        return replace(self, enable_confirmation=False)

    def with_custom_confirmation_message(self, message: str) -> Password:
        return replace(self, confirmation_message=message)

    def with_custom_confirmation_error_message(self, message: str) -> Password:
        return replace(self, confirmation_error_message=message)

    def with_validator(self, validator: Validator) -> Password:
        return replace(self, validators=self.validators + (validator,))

    def with_formatter(self, formatter: Callable[[str], str]) -> Password:
        return replace(self, formatter=formatter)

    def create_prompt(self) -> PasswordPrompt:
        return PasswordPrompt(self)


class PasswordPrompt(Prompt[str]):
    """State machine for ``Password``.

    Revealing only changes how frames are drawn; the buffers always hold
    the literal input.
    """

    def __init__(self, config: Password) -> None:
        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._config = config
        self.input = TextEditor()
        self.confirmation: TextEditor | None = None
        self.revealed = False

    @property
    def active_input(self) -> TextEditor:
        return self.confirmation if self.confirmation is not None else self.input

    @property
    def display_mode(self) -> PasswordDisplayMode:
        return "full" if self.revealed else self._config.display_mode

    def handle(self, event: KeyEvent) -> bool:
        if self._config.enable_display_toggle and self.keybindings.matches(
            event, "toggleDisplayMode"
        ):
            self.revealed = not self.revealed
            return True
        return self.active_input.handle_key(event, self.keybindings) != "clean"

    def submit(self) -> Answer[str] | None:
        config = self._config

        if self.confirmation is None:
            validation = run_validators(self.input.value, config.validators)
            if not validation.is_valid:
                self.reject(validation)
                return None
            if config.enable_confirmation:
                self.confirmation = TextEditor()
                return None
            return Answer.submitted(self.input.value)

        if self.confirmation.value != self.input.value:
            self._restart()
            self.reject(Validation.invalid(config.confirmation_error_message))
            return None
        return Answer.submitted(self.input.value)

    def pre_cancel(self) -> bool:
        # Esc while confirming goes back to the first entry.
        if self.confirmation is not None:
            self._restart()
            return False
        return True

    def _restart(self) -> None:
        self.input = TextEditor()
        self.confirmation = None

    def format_answer(self, value: str) -> str:
        return self._config.formatter(value)

    # -- rendering ----------------------------------------------------------

    def _masked(self, editor: TextEditor, *, show_cursor: bool) -> str:
        marker = CURSOR_MARKER if show_cursor else ""
        mode = self.display_mode
        if mode == "full":
            return editor.render(self.render_config.text_input, show_cursor=show_cursor)
        if mode == "hidden":
            return marker

        mask = self.render_config.password_mask
        style = self.render_config.text_input
        before = editor.cursor
        return style(mask * before) + marker + style(mask * (editor.length - before))

    def render(self, frame: FrameBuilder) -> None:
        confirming = self.confirmation is not None
        frame.prompt_line(
            self.message, content=self._masked(self.input, show_cursor=not confirming)
        )
        if self.confirmation is not None:
            frame.prompt_line(
                self._config.confirmation_message,
                content=self._masked(self.confirmation, show_cursor=True),
            )
        self.render_error(frame)
        self.render_help(frame)
