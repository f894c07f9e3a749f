"""Select prompt: pick one option from a filterable list."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence, TypeVar

from pi.prompt.answer import Answer
from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.frame import FrameBuilder
from pi.prompt.fuzzy import Scorer, fuzzy_scorer
from pi.prompt.keys import KeyEvent
from pi.prompt.list_engine import ListEngine, ListOption
from pi.prompt.prompts.base import LoopAction, Prompt, PromptConfig
from pi.prompt.render_config import RenderConfig
from pi.prompt.terminal import Terminal

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 7
DEFAULT_VIM_MODE = False
DEFAULT_SELECT_HELP = "↑↓ to move, enter to select, type to filter"


def navigate_list(
    prompt: Prompt[Any], engine: ListEngine[Any], event: KeyEvent, vim_mode: bool
) -> bool | None:
    """Apply list navigation keys; ``None`` when *event* is not one."""
    kb = prompt.keybindings
    if kb.matches(event, "selectUp", vim_mode=vim_mode):
        engine.move_cursor(-1, wrap=True)
        return True
    if kb.matches(event, "selectDown", vim_mode=vim_mode):
        engine.move_cursor(1, wrap=True)
        return True
    if kb.matches(event, "selectPageUp"):
        return engine.page_up()
    if kb.matches(event, "selectPageDown"):
        return engine.page_down()
    if kb.matches(event, "selectFirst"):
        return engine.move_to_start()
    if kb.matches(event, "selectLast"):
        return engine.move_to_end()
    return None


def render_page(
    frame: FrameBuilder, engine: ListEngine[Any], *, checkboxes: bool = False
) -> None:
    page = engine.current_page()
    frame.option_lines(
        [engine.label(option) for option in page.items],
        cursor=page.cursor,
        first=page.first,
        last=page.last,
        checked=[engine.is_selected(o.index) for o in page.items] if checkboxes else None,
    )


@dataclass(frozen=True)
class Select(PromptConfig[ListOption[T]]):
    """Configuration of a single-choice prompt.

    ``prompt()`` returns the chosen value; ``raw_prompt()`` returns the
    ``ListOption`` so the caller also learns its original index.
    """

    message: str
    options: Sequence[T]
    help_message: str | None = DEFAULT_SELECT_HELP
    page_size: int = DEFAULT_PAGE_SIZE
    vim_mode: bool = DEFAULT_VIM_MODE
    starting_cursor: int = 0
    starting_filter_input: str = ""
    filter_input_enabled: bool = True
    reset_cursor: bool = True
    scorer: Scorer = fuzzy_scorer
    sort_by_score: bool = True
    formatter: Callable[[ListOption[T]], str] = str
    render_config: RenderConfig | None = None

    def with_page_size(self, page_size: int) -> Select[T]:
        return replace(self, page_size=page_size)

    def with_vim_mode(self, vim_mode: bool = True) -> Select[T]:
        return replace(self, vim_mode=vim_mode)

    def with_starting_cursor(self, starting_cursor: int) -> Select[T]:
        return replace(self, starting_cursor=starting_cursor)

    def with_starting_filter_input(self, text: str) -> Select[T]:
        return replace(self, starting_filter_input=text)

    def with_scorer(self, scorer: Scorer, *, sort_by_score: bool = True) -> Select[T]:
        return replace(self, scorer=scorer, sort_by_score=sort_by_score)

    def with_formatter(self, formatter: Callable[[ListOption[T]], str]) -> Select[T]:
        return replace(self, formatter=formatter)

    def with_reset_cursor(self, reset_cursor: bool) -> Select[T]:
        return replace(self, reset_cursor=reset_cursor)

    def without_filtering(self) -> Select[T]:
        return replace(self, filter_input_enabled=False)

    def create_prompt(self) -> SelectPrompt[T]:
        return SelectPrompt(self)

    def raw_prompt(self, terminal: Terminal | None = None) -> ListOption[T]:
        return self.answer(terminal).unwrap()

    def prompt(self, terminal: Terminal | None = None) -> T:
        return self.raw_prompt(terminal).value

    def prompt_skippable(self, terminal: Terminal | None = None) -> T | None:
        option = super().prompt_skippable(terminal)
        return None if option is None else option.value


class SelectPrompt(Prompt[ListOption[T]]):
    """State machine for ``Select``."""

    def __init__(self, config: Select[T]) -> None:
        if not config.options:
            raise InvalidConfigurationError("Available options can not be empty")
        if not 0 <= config.starting_cursor < len(config.options):
            raise InvalidConfigurationError(
                f"Starting cursor index {config.starting_cursor} is out-of-bounds "
                f"for length {len(config.options)} of options"
            )

        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._formatter = config.formatter
        self._vim_mode = config.vim_mode
        self._filter_enabled = config.filter_input_enabled
        self.list = ListEngine(
            config.options,
            scorer=config.scorer,
            page_size=config.page_size,
            sort_by_score=config.sort_by_score,
            reset_cursor=config.reset_cursor,
            starting_cursor=config.starting_cursor,
            filter_input=config.starting_filter_input if config.filter_input_enabled else "",
        )

    def action_for(self, event: KeyEvent) -> LoopAction | None:
        action = super().action_for(event)
        # Space submits until the user starts typing a filter.
        if action is None and event.id == "space" and self.list.filter.is_empty():
            return "submit"
        return action

    def handle(self, event: KeyEvent) -> bool:
        moved = navigate_list(self, self.list, event, self._vim_mode)
        if moved is not None:
            return moved
        if not self._filter_enabled:
            return False
        return self.list.handle_filter_key(event, self.keybindings) != "clean"

    def submit(self) -> Answer[ListOption[T]] | None:
        option = self.list.current()
        if option is None:
            return None
        return Answer.submitted(option)

    def format_answer(self, value: ListOption[T]) -> str:
        return self._formatter(value)

    def render(self, frame: FrameBuilder) -> None:
        content = ""
        if self._filter_enabled:
            content = self.list.filter.render(self.render_config.text_input)
        frame.prompt_line(self.message, content=content)
        render_page(frame, self.list)
        self.render_help(frame)
