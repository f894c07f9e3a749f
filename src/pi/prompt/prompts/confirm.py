"""Confirm prompt: a yes/no question."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from pi.prompt.formatter import format_bool, format_bool_default
from pi.prompt.parser import parse_bool
from pi.prompt.prompts.base import PromptConfig
from pi.prompt.prompts.custom_type import CustomType, CustomTypePrompt
from pi.prompt.render_config import RenderConfig

DEFAULT_CONFIRM_ERROR = "Invalid answer, try typing 'y' for yes or 'n' for no"


@dataclass(frozen=True)
class Confirm(PromptConfig[bool]):
    """Configuration of a yes/no prompt.

    Accepts ``y``, ``yes``, ``n`` and ``no`` in any case. With a default,
    pressing Enter on empty input answers the default.
    """

    message: str
    default: bool | None = None
    placeholder: str | None = None
    starting_input: str = ""
    help_message: str | None = None
    formatter: Callable[[bool], str] = format_bool
    default_value_formatter: Callable[[bool], str] = format_bool_default
    parser: Callable[[str], bool] = parse_bool
    error_message: str = DEFAULT_CONFIRM_ERROR
    render_config: RenderConfig | None = None

    def with_default(self, default: bool) -> Confirm:
        return replace(self, default=default)

    def with_placeholder(self, placeholder: str) -> Confirm:
        return replace(self, placeholder=placeholder)

    def with_error_message(self, message: str) -> Confirm:
        return replace(self, error_message=message)

    def as_custom_type(self) -> CustomType[bool]:
        return CustomType(
            message=self.message,
            parser=self.parser,
            formatter=self.formatter,
            default=self.default,
            default_value_formatter=self.default_value_formatter,
            error_message=self.error_message,
            placeholder=self.placeholder,
            starting_input=self.starting_input,
            help_message=self.help_message,
            render_config=self.render_config,
        )

    def create_prompt(self) -> CustomTypePrompt[bool]:
        return self.as_custom_type().create_prompt()
