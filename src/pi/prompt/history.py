"""Entry history for the Text prompt.

Up walks towards older entries and Down back towards newer ones; each step
replaces the input with the returned entry. A history object is meant to be
shared between prompts, so an answer submitted to one prompt can be recalled
in the next.
"""

from __future__ import annotations

from typing import Protocol, Sequence


class History(Protocol):
    """Navigation over previously submitted entries.

    ``None`` from either move leaves the input untouched.
    """

    def earlier_element(self) -> str | None:
        """Step to the next less recent entry and return it."""
        ...

    def later_element(self) -> str | None:
        """Step to the next more recent entry and return it."""
        ...

    def prepend_element(self, entry: str) -> None:
        """Record *entry* as the most recent one."""
        ...


class SimpleHistory:
    """In-memory history, most recent entry first.

    Stepping earlier past the oldest entry keeps returning it. Stepping
    later from the most recent entry returns ``None`` and leaves browsing,
    so the next earlier step starts again from the most recent entry.
    """

    def __init__(self, entries: Sequence[str] = ()) -> None:
        self._entries = list(entries)
        self._index = -1

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def earlier_element(self) -> str | None:
        if not self._entries:
            return None
        if self._index < len(self._entries) - 1:
            self._index += 1
        return self._entries[self._index]

    def later_element(self) -> str | None:
        if self._index >= 1:
            self._index -= 1
            return self._entries[self._index]
        self._index = -1
        return None

    def prepend_element(self, entry: str) -> None:
        if not entry:
            return
        self._entries.insert(0, entry)
        self._index = -1
