"""Autocompletion capability for the Text prompt."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence


class Autocomplete(Protocol):
    """Source of suggestions and completions for free text input."""

    def get_suggestions(self, input: str) -> list[str]:
        """Suggestions to list below the input for its current content."""
        ...

    def get_completion(self, input: str, highlighted_suggestion: str | None) -> str | None:
        """Text that should replace the input when Tab is pressed.

        ``None`` leaves the input untouched.
        """
        ...


class SuggestionList:
    """Autocompleter over a fixed list of words.

    Suggests the words that contain the input (case-insensitive); Tab
    completes to the highlighted suggestion, or to the longest common
    prefix of all suggestions when nothing is highlighted.
    """

    def __init__(
        self,
        words: Sequence[str],
        *,
        matcher: Callable[[str, str], bool] | None = None,
    ) -> None:
        self._words = list(words)
        self._matcher = matcher or (lambda input, word: input.lower() in word.lower())

    def get_suggestions(self, input: str) -> list[str]:
        return [word for word in self._words if self._matcher(input, word)]

    def get_completion(self, input: str, highlighted_suggestion: str | None) -> str | None:
        if highlighted_suggestion is not None:
            return highlighted_suggestion

        suggestions = self.get_suggestions(input)
        if not suggestions:
            return None
        prefix = suggestions[0]
        for word in suggestions[1:]:
            while not word.startswith(prefix):
                prefix = prefix[:-1]
        if len(prefix) <= len(input):
            return None
        return prefix
