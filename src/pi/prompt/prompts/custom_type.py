"""CustomType prompt: free text parsed into a typed value."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, TypeVar

from pi.prompt.answer import Answer
from pi.prompt.frame import FrameBuilder
from pi.prompt.keys import KeyEvent
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.render_config import RenderConfig
from pi.prompt.text_editor import TextEditor
from pi.prompt.validator import Validator, parse_and_validate, run_validators

T = TypeVar("T")

DEFAULT_ERROR_MESSAGE = "Invalid input"


@dataclass(frozen=True)
class CustomType(PromptConfig[T]):
    """Configuration of a typed-value prompt.

    *parser* turns the input text into a value and raises ``ValueError``
    when it cannot; the prompt then shows *error_message* and keeps the
    text so the user can fix it. Validators receive the parsed value.
    """

    message: str
    parser: Callable[[str], T]
    formatter: Callable[[T], str] = str
    default: T | None = None
    default_value_formatter: Callable[[T], str] | None = None
    error_message: str = DEFAULT_ERROR_MESSAGE
    placeholder: str | None = None
    starting_input: str = ""
    help_message: str | None = None
    validators: tuple[Validator, ...] = ()
    render_config: RenderConfig | None = None

    def with_default(self, default: T) -> CustomType[T]:
        return replace(self, default=default)

    def with_formatter(self, formatter: Callable[[T], str]) -> CustomType[T]:
        return replace(self, formatter=formatter)

    def with_default_value_formatter(self, formatter: Callable[[T], str]) -> CustomType[T]:
        return replace(self, default_value_formatter=formatter)

    def with_error_message(self, message: str) -> CustomType[T]:
        return replace(self, error_message=message)

    def with_placeholder(self, placeholder: str) -> CustomType[T]:
        return replace(self, placeholder=placeholder)

    def with_starting_input(self, text: str) -> CustomType[T]:
        return replace(self, starting_input=text)

    def with_validator(self, validator: Validator) -> CustomType[T]:
        return replace(self, validators=self.validators + (validator,))

    def create_prompt(self) -> CustomTypePrompt[T]:
        return CustomTypePrompt(self)


class CustomTypePrompt(Prompt[T]):
    """State machine for ``CustomType`` (and ``Confirm``)."""

    def __init__(self, config: CustomType[T]) -> None:
        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._config = config
        self.input = TextEditor(config.starting_input)

    def handle(self, event: KeyEvent) -> bool:
        return self.input.handle_key(event, self.keybindings) != "clean"

    def submit(self) -> Answer[T] | None:
        config = self._config
        if self.input.is_empty() and config.default is not None:
            validation = run_validators(config.default, config.validators)
            if not validation.is_valid:
                self.reject(validation)
                return None
            return Answer.submitted(config.default)

        result = parse_and_validate(
            self.input.value, config.parser, config.validators, config.error_message
        )
        if not result.is_valid:
            self.reject(result.validation)
            return None
        return Answer.submitted(result.value)

    def format_answer(self, value: T) -> str:
        return self._config.formatter(value)

    def render(self, frame: FrameBuilder) -> None:
        config = self._config
        default = None
        if config.default is not None:
            default_formatter = config.default_value_formatter or config.formatter
            default = default_formatter(config.default)

        frame.prompt_line(
            self.message,
            default=default,
            content=self.render_input(self.input, config.placeholder),
        )
        self.render_error(frame)
        self.render_help(frame)

