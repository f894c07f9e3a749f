"""Default formatters: how a submitted answer is shown on screen.

Formatters only affect the final answered line; the value returned to the
caller is never touched.
"""

from __future__ import annotations

import datetime
from typing import Any, Sequence

from pi.prompt.list_engine import ListOption


def format_string(value: str) -> str:
    return value


def format_bool(value: bool) -> str:
    return "Yes" if value else "No"


def format_bool_default(value: bool) -> str:
    """Hint shown next to a Confirm message for its default value."""
    return "Y/n" if value else "y/N"


def format_date(value: datetime.date) -> str:
    """``January 5, 2021`` (day without zero padding)."""
    return f"{value:%B} {value.day}, {value.year}"


def format_option(option: ListOption[Any]) -> str:
    return str(option)


def format_options(options: Sequence[ListOption[Any]]) -> str:
    return ", ".join(str(option) for option in options)


def format_password(value: str) -> str:
    return "********"


def format_editor_answer(value: str) -> str:
    return "<received>"
