"""MultiSelect prompt: pick any number of options from a filterable list."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Sequence, TypeVar

from pi.prompt.answer import Answer
from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.formatter import format_options
from pi.prompt.frame import FrameBuilder
from pi.prompt.fuzzy import Scorer, fuzzy_scorer
from pi.prompt.keys import KeyEvent
from pi.prompt.list_engine import ListEngine, ListOption
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.prompts.select import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_VIM_MODE,
    navigate_list,
    render_page,
)
from pi.prompt.render_config import RenderConfig
from pi.prompt.terminal import Terminal
from pi.prompt.validator import Validator, run_validators

T = TypeVar("T")

DEFAULT_MULTI_SELECT_HELP = "↑↓ to move, space to select one, → to all, ← to none, type to filter"


@dataclass(frozen=True)
class MultiSelect(PromptConfig[list[ListOption[T]]]):
    """Configuration of a multiple-choice prompt.

    Validators receive the list of selected ``ListOption`` values, so the
    length validators constrain the selection count.
    """

    message: str
    options: Sequence[T]
    default: Sequence[int] = ()
    help_message: str | None = DEFAULT_MULTI_SELECT_HELP
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    starting_cursor: int = 0
    starting_filter_input: str = ""
    filter_input_enabled: bool = True
    keep_filter: bool = True
    reset_cursor: bool = True
    scorer: Scorer = fuzzy_scorer
    sort_by_score: bool = True
    validators: tuple[Validator, ...] = ()
    formatter: Callable[[Sequence[ListOption[T]]], str] = format_options
    render_config: RenderConfig | None = None

    def with_default(self, indices: Sequence[int]) -> MultiSelect[T]:
        return replace(self, default=tuple(indices))

    def with_page_size(self, page_size: int) -> MultiSelect[T]:
        return replace(self, page_size=page_size)

    def with_vim_mode(self, vim_mode: bool = True) -> MultiSelect[T]:
        return replace(self, vim_mode=vim_mode)

    def with_starting_cursor(self, starting_cursor: int) -> MultiSelect[T]:
        return replace(self, starting_cursor=starting_cursor)

    def with_keep_filter(self, keep_filter: bool) -> MultiSelect[T]:
        return replace(self, keep_filter=keep_filter)

    def with_scorer(self, scorer: Scorer, *, sort_by_score: bool = True) -> MultiSelect[T]:
        return replace(self, scorer=scorer, sort_by_score=sort_by_score)

    def with_validator(self, validator: Validator) -> MultiSelect[T]:
        return replace(self, validators=self.validators + (validator,))

    def with_formatter(self, formatter: Callable[[Sequence[ListOption[T]]], str]) -> MultiSelect[T]:
        return replace(self, formatter=formatter)

    def without_filtering(self) -> MultiSelect[T]:
        return replace(self, filter_input_enabled=False)

    def create_prompt(self) -> MultiSelectPrompt[T]:
        return MultiSelectPrompt(self)

    def raw_prompt(self, terminal: Terminal | None = None) -> list[ListOption[T]]:
        return self.answer(terminal).unwrap()

    def prompt(self, terminal: Terminal | None = None) -> list[T]:
        return [option.value for option in self.raw_prompt(terminal)]

    def prompt_skippable(self, terminal: Terminal | None = None) -> list[T] | None:
        options = super().prompt_skippable(terminal)
        return None if options is None else [option.value for option in options]


class MultiSelectPrompt(Prompt[list[ListOption[T]]]):
    """State machine for ``MultiSelect``."""

    def __init__(self, config: MultiSelect[T]) -> None:
        count = len(config.options)
        if not count:
            raise InvalidConfigurationError("Available options can not be empty")
        for index in config.default:
            if not 0 <= index < count:
                raise InvalidConfigurationError(
                    f"Index {index} is out-of-bounds for length {count} of options"
                )
        if not 0 <= config.starting_cursor < count:
            raise InvalidConfigurationError(
                f"Starting cursor index {config.starting_cursor} is out-of-bounds "
                f"for length {count} of options"
            )

        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._validators = config.validators
        self._formatter = config.formatter
        self._vim_mode = config.vim_mode
        self._keep_filter = config.keep_filter
        self._filter_enabled = config.filter_input_enabled
        self.list = ListEngine(
            config.options,
            scorer=config.scorer,
            page_size=config.page_size,
            sort_by_score=config.sort_by_score,
            reset_cursor=config.reset_cursor,
            starting_cursor=config.starting_cursor,
            selected=config.default,
            filter_input=config.starting_filter_input if config.filter_input_enabled else "",
        )

    def handle(self, event: KeyEvent) -> bool:
        kb = self.keybindings
        engine = self.list

        if kb.matches(event, "toggleOption"):
            if not engine.toggle_current():
                return False
            if not self._keep_filter and not engine.filter.is_empty():
                engine.set_filter_input("")
            return True
        if kb.matches(event, "selectAll"):
            engine.select_all()
            return True
        if kb.matches(event, "clearSelection"):
            engine.clear_all()
            return True

        moved = navigate_list(self, engine, event, self._vim_mode)
        if moved is not None:
            return moved
        if not self._filter_enabled:
            return False
        return engine.handle_filter_key(event, kb) != "clean"

    def submit(self) -> Answer[list[ListOption[T]]] | None:
        selected = self.list.selected_options()
        validation = run_validators(selected, self._validators)
        if not validation.is_valid:
            self.reject(validation)
            return None
        return Answer.submitted(selected)

    def format_answer(self, value: list[ListOption[T]]) -> str:
        return self._formatter(value)

    def render(self, frame: FrameBuilder) -> None:
        content = ""
        if self._filter_enabled:
            content = self.list.filter.render(self.render_config.text_input)
        frame.prompt_line(self.message, content=content)
        self.render_error(frame)
        render_page(frame, self.list, checkboxes=True)
        self.render_help(frame)
