"""List engine shared by the choice prompts.

Owns the immutable option set, the filter input, the scored/ordered
visible subset, the cursor into that subset, pagination and (for
MultiSelect) the set of selected original indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Sequence, TypeVar

from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.fuzzy import Scorer, fuzzy_scorer
from pi.prompt.keybindings import PromptKeybindingsManager
from pi.prompt.keys import KeyEvent
from pi.prompt.text_editor import EditResult, TextEditor

T = TypeVar("T")


@dataclass(frozen=True)
class ListOption(Generic[T]):
    """An option value together with its index in the caller's list."""

    index: int
    value: T

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ScoredOption(Generic[T]):
    option: ListOption[T]
    score: int


@dataclass(frozen=True)
class Page(Generic[T]):
    """The window of visible options that contains the cursor."""

    items: tuple[ListOption[T], ...]
    cursor: int | None
    first: bool
    last: bool
    total: int

    @property
    def more_above(self) -> bool:
        return not self.first

    @property
    def more_below(self) -> bool:
        return not self.last


def paginate(page_size: int, total: int, cursor: int) -> tuple[int, int]:
    """Return the ``(start, end)`` window of *page_size* items around *cursor*.

    The window is pinned to the top while the cursor is within the first
    half page and to the bottom within the last half page; in between the
    cursor is kept centred.
    """
    if total <= page_size:
        return 0, total

    half = page_size // 2
    if cursor < half:
        start = 0
    elif total - cursor - 1 < half:
        start = total - page_size
    else:
        start = cursor - half
    return start, start + page_size


class ListEngine(Generic[T]):
    """Filterable, paginated list with a cursor and optional selection."""

    def __init__(
        self,
        options: Sequence[T],
        *,
        scorer: Scorer = fuzzy_scorer,
        page_size: int = 7,
        sort_by_score: bool = True,
        reset_cursor: bool = True,
        starting_cursor: int = 0,
        selected: Iterable[int] = (),
        filter_input: str = "",
        labeler: Callable[[T], str] = str,
    ) -> None:
        if page_size < 1:
            raise InvalidConfigurationError("Page size must be at least 1")

        self._options: tuple[ListOption[T], ...] = tuple(
            ListOption(i, value) for i, value in enumerate(options)
        )
        self._labels: tuple[str, ...] = tuple(labeler(value) for value in options)
        self._scorer = scorer
        self._sort_by_score = sort_by_score
        self._reset_cursor = reset_cursor
        self.page_size = page_size

        self.filter = TextEditor(filter_input)
        self._selected: set[int] = set(selected)

        self._scored: list[ScoredOption[T]] = self._score(filter_input)
        self._visible: list[ListOption[T]] = [s.option for s in self._scored]
        self._cursor: int | None = (
            min(max(starting_cursor, 0), len(self._visible) - 1) if self._visible else None
        )

    # -- accessors ----------------------------------------------------------

    @property
    def options(self) -> tuple[ListOption[T], ...]:
        return self._options

    @property
    def visible(self) -> list[ListOption[T]]:
        return list(self._visible)

    @property
    def scored(self) -> list[ScoredOption[T]]:
        return list(self._scored)

    @property
    def cursor(self) -> int | None:
        """Index into the visible subset, ``None`` when nothing is visible."""
        return self._cursor

    def label(self, option: ListOption[T]) -> str:
        return self._labels[option.index]

    def current(self) -> ListOption[T] | None:
        if self._cursor is None:
            return None
        return self._visible[self._cursor]

    # -- filtering ----------------------------------------------------------

    def set_filter_input(self, text: str) -> bool:
        """Replace the filter text and recompute the visible subset.

        Returns ``True`` when the visible subset changed.
        """
        self.filter.replace(text)
        return self._refilter()

    def handle_filter_key(
        self, event: KeyEvent, keybindings: PromptKeybindingsManager | None = None
    ) -> EditResult:
        """Edit the filter input; rescoring happens when its content changes."""
        result = self.filter.handle_key(event, keybindings)
        if result == "content":
            self._refilter()
        return result

    def _score(self, text: str) -> list[ScoredOption[T]]:
        scored: list[ScoredOption[T]] = []
        for option, label in zip(self._options, self._labels):
            score = self._scorer(text, option.value, label, option.index)
            if score is not None:
                scored.append(ScoredOption(option, score))

        if self._sort_by_score:
            # Stable tie-break on the caller's ordering, not discovery order.
            scored.sort(key=lambda s: (-s.score, s.option.index))
        return scored

    def _refilter(self) -> bool:
        previous = self.current()
        scored = self._score(self.filter.value)
        visible = [s.option for s in scored]
        changed = [o.index for o in visible] != [o.index for o in self._visible]

        self._scored = scored
        self._visible = visible

        if not visible:
            self._cursor = None
        elif changed or self._cursor is None:
            self._cursor = self._cursor_after_change(previous)
        return changed

    def _cursor_after_change(self, previous: ListOption[T] | None) -> int:
        if self._reset_cursor or previous is None or self._cursor is None:
            return 0
        for position, option in enumerate(self._visible):
            if option.index == previous.index:
                return position
        return min(self._cursor, len(self._visible) - 1)

    # -- cursor motion ------------------------------------------------------

    def move_cursor(self, delta: int, *, wrap: bool = False) -> bool:
        """Move the cursor by *delta*; clamps unless *wrap* is set."""
        if self._cursor is None:
            return False
        count = len(self._visible)
        if wrap:
            target = (self._cursor + delta) % count
        else:
            target = max(0, min(self._cursor + delta, count - 1))
        return self._set_cursor(target)

    def move_to_start(self) -> bool:
        if self._cursor is None:
            return False
        return self._set_cursor(0)

    def move_to_end(self) -> bool:
        if self._cursor is None:
            return False
        return self._set_cursor(len(self._visible) - 1)

    def page_up(self) -> bool:
        return self.move_cursor(-self.page_size)

    def page_down(self) -> bool:
        return self.move_cursor(self.page_size)

    def _set_cursor(self, target: int) -> bool:
        if target == self._cursor:
            return False
        self._cursor = target
        return True

    # -- selection ----------------------------------------------------------

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def toggle_current(self) -> bool:
        """Flip the selection of the option under the cursor."""
        option = self.current()
        if option is None:
            return False
        if option.index in self._selected:
            self._selected.remove(option.index)
        else:
            self._selected.add(option.index)
        return True

    def select_all(self) -> None:
        """Select every option, visible or not."""
        self._selected = {option.index for option in self._options}

    def clear_all(self) -> None:
        """Deselect every option, visible or not."""
        self._selected.clear()

    @property
    def selected_indices(self) -> list[int]:
        return sorted(self._selected)

    def selected_options(self) -> list[ListOption[T]]:
        """Selected options in the caller's original order."""
        return [self._options[i] for i in sorted(self._selected)]

    # -- pagination ---------------------------------------------------------

    def current_page(self) -> Page[T]:
        total = len(self._visible)
        start, end = paginate(self.page_size, total, self._cursor or 0)
        return Page(
            items=tuple(self._visible[start:end]),
            cursor=None if self._cursor is None else self._cursor - start,
            first=start == 0,
            last=end == total,
            total=total,
        )
