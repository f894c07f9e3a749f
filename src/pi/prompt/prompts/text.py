"""Text prompt: free text input with optional autocompletion."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from pi.prompt.answer import Answer
from pi.prompt.autocompletion import Autocomplete
from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.formatter import format_string
from pi.prompt.frame import FrameBuilder
from pi.prompt.history import History
from pi.prompt.keys import KeyEvent
from pi.prompt.list_engine import paginate
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.prompts.select import DEFAULT_PAGE_SIZE
from pi.prompt.render_config import RenderConfig
from pi.prompt.terminal import Terminal
from pi.prompt.text_editor import TextEditor
from pi.prompt.validator import Validator, run_validators

DEFAULT_AUTOCOMPLETE_HELP = "↑↓ to move, tab to autocomplete, enter to submit"


@dataclass(frozen=True)
class Text(PromptConfig[str]):
    """Configuration of a free text prompt."""

    message: str
    initial_value: str = ""
    default: str | None = None
    placeholder: str | None = None
    help_message: str | None = None
    show_autocomplete_help: bool = True
    autocompleter: Autocomplete | None = None
    history: History | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    validators: tuple[Validator, ...] = ()
    formatter: Callable[[str], str] = format_string
    render_config: RenderConfig | None = None

    def with_initial_value(self, value: str) -> Text:
        return replace(self, initial_value=value)

    def with_default(self, default: str) -> Text:
        return replace(self, default=default)

    def with_placeholder(self, placeholder: str) -> Text:
        return replace(self, placeholder=placeholder)

    def with_autocomplete(self, autocompleter: Autocomplete) -> Text:
        return replace(self, autocompleter=autocompleter)

    def with_history(self, history: History) -> Text:
        return replace(self, history=history)

    def with_page_size(self, page_size: int) -> Text:
        return replace(self, page_size=page_size)

    def with_validator(self, validator: Validator) -> Text:
        return replace(self, validators=self.validators + (validator,))

    def with_formatter(self, formatter: Callable[[str], str]) -> Text:
        return replace(self, formatter=formatter)

    def without_help_message(self) -> Text:
        return replace(self, help_message=None, show_autocomplete_help=False)

    def create_prompt(self) -> TextPrompt:
        return TextPrompt(self)


class TextPrompt(Prompt[str]):
    """State machine for ``Text``.

    Suggestions are recomputed whenever the input content changes; the
    highlighted suggestion starts out empty and is moved with the list keys.
    While no suggestion is listed, the list keys browse the history instead.
    """

    def __init__(self, config: Text) -> None:
        if config.page_size < 1:
            raise InvalidConfigurationError("Page size must be at least 1")

        help_message = config.help_message
        if help_message is None and config.autocompleter and config.show_autocomplete_help:
            help_message = DEFAULT_AUTOCOMPLETE_HELP

        super().__init__(
            config.message,
            help_message=help_message,
            render_config=config.render_config,
        )
        self._config = config
        self.input = TextEditor(config.initial_value)
        self.suggestions: list[str] = []
        self.highlighted: int | None = None
        # Input typed before history browsing started, restored when
        # browsing steps past the most recent entry.
        self._draft: str | None = None

    def setup(self, terminal: Terminal) -> None:
        self._refresh_suggestions()

    # -- suggestions --------------------------------------------------------

    def _refresh_suggestions(self) -> None:
        self.highlighted = None
        if self._config.autocompleter is None:
            self.suggestions = []
            return
        self.suggestions = list(self._config.autocompleter.get_suggestions(self.input.value))

    def highlighted_suggestion(self) -> str | None:
        if self.highlighted is None:
            return None
        return self.suggestions[self.highlighted]

    def _move_highlight(self, delta: int, *, wrap: bool) -> bool:
        count = len(self.suggestions)
        if not count:
            return False
        if self.highlighted is None:
            target = 0 if delta > 0 else count - 1
        elif wrap:
            target = (self.highlighted + delta) % count
        else:
            target = max(0, min(self.highlighted + delta, count - 1))
        changed = target != self.highlighted
        self.highlighted = target
        return changed

    def _autocomplete(self) -> bool:
        autocompleter = self._config.autocompleter
        if autocompleter is None:
            return False
        completion = autocompleter.get_completion(self.input.value, self.highlighted_suggestion())
        if completion is None:
            return False
        self.input.replace(completion)
        self._refresh_suggestions()
        return True

    # -- history ------------------------------------------------------------

    def _browse_history(self, earlier: bool) -> bool:
        history = self._config.history
        if history is None:
            return False
        entry = history.earlier_element() if earlier else history.later_element()
        if entry is None:
            if earlier or self._draft is None:
                return False
            entry, self._draft = self._draft, None
        elif self._draft is None:
            self._draft = self.input.value
        if entry == self.input.value:
            return False
        self.input.replace(entry)
        self._refresh_suggestions()
        return True

    # -- state machine ------------------------------------------------------

    def handle(self, event: KeyEvent) -> bool:
        kb = self.keybindings
        page_size = self._config.page_size

        if kb.matches(event, "selectUp"):
            if not self.suggestions:
                return self._browse_history(earlier=True)
            return self._move_highlight(-1, wrap=True)
        if kb.matches(event, "selectDown"):
            if not self.suggestions:
                return self._browse_history(earlier=False)
            return self._move_highlight(1, wrap=True)
        if kb.matches(event, "selectPageUp"):
            return self._move_highlight(-page_size, wrap=False)
        if kb.matches(event, "selectPageDown"):
            return self._move_highlight(page_size, wrap=False)
        if kb.matches(event, "autocomplete"):
            return self._autocomplete()

        result = self.input.handle_key(event, kb)
        if result == "content":
            self._refresh_suggestions()
        return result != "clean"

    def submit(self) -> Answer[str] | None:
        value = self.highlighted_suggestion()
        if value is None:
            value = self.input.value
            if not value and self._config.default is not None:
                value = self._config.default

        validation = run_validators(value, self._config.validators)
        if not validation.is_valid:
            self.reject(validation)
            return None
        if self._config.history is not None:
            self._config.history.prepend_element(value)
        return Answer.submitted(value)

    def format_answer(self, value: str) -> str:
        return self._config.formatter(value)

    def render(self, frame: FrameBuilder) -> None:
        config = self._config
        frame.prompt_line(
            self.message,
            default=config.default,
            content=self.render_input(self.input, config.placeholder),
        )
        self.render_error(frame)

        if self.suggestions:
            start, end = paginate(config.page_size, len(self.suggestions), self.highlighted or 0)
            frame.option_lines(
                self.suggestions[start:end],
                cursor=None if self.highlighted is None else self.highlighted - start,
                first=start == 0,
                last=end == len(self.suggestions),
            )
        self.render_help(frame)
