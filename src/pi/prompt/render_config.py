"""Render configuration: prefixes, indicators and styling for prompts.

A ``RenderConfig`` is a plain dataclass. Styles are ``str -> str``
callables that wrap text in ANSI SGR sequences, so any callable (including
one from a third-party color library) can be plugged in. The process-wide
default is read by every prompt when it is constructed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Callable

Style = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def sgr(*codes: int) -> Style:
    """Return a style that wraps text in the given SGR codes."""
    start = "\x1b[" + ";".join(str(c) for c in codes) + "m"

    def apply(text: str) -> str:
        if not text:
            return text
        return f"{start}{text}\x1b[0m"

    return apply


# SGR codes
FG_BLACK = 30
FG_CYAN = 36
FG_LIGHT_RED = 91
FG_LIGHT_GREEN = 92
FG_LIGHT_CYAN = 96
FG_DARK_GREY = 90
BG_GREY = 47


@dataclass
class CalendarRenderConfig:
    """Styling for the DateSelect calendar."""

    prefix: str = ">"
    prefix_style: Style = _identity
    header: Style = _identity
    week_header: Style = _identity
    selected_date: Style | None = None
    today_date: Style = _identity
    different_month_date: Style = _identity
    unavailable_date: Style = _identity


@dataclass
class RenderConfig:
    """Prefixes, indicators and styles used when drawing prompts."""

    prompt_prefix: str = "?"
    prompt_prefix_style: Style = _identity
    answered_prompt_prefix: str = ">"
    answered_prompt_prefix_style: Style = _identity
    prompt: Style = _identity
    default_value: Style = _identity
    placeholder: Style = _identity
    help_message: Style = _identity
    text_input: Style = _identity
    answer: Style = _identity
    canceled_indicator: str = "<canceled>"
    canceled_indicator_style: Style = _identity
    password_mask: str = "*"
    highlighted_option_prefix: str = ">"
    highlighted_option_prefix_style: Style = _identity
    scroll_up_prefix: str = "^"
    scroll_down_prefix: str = "v"
    selected_checkbox: str = "[x]"
    unselected_checkbox: str = "[ ]"
    option: Style = _identity
    selected_option: Style | None = None
    error_prefix: str = "#"
    error_prefix_style: Style = _identity
    error_message: Style = _identity
    default_error_message: str = "Invalid input."
    editor_prompt: Style = _identity
    calendar: CalendarRenderConfig = field(default_factory=CalendarRenderConfig)

    @classmethod
    def empty(cls) -> RenderConfig:
        """Configuration in which no colors or attributes are applied."""
        return cls()

    @classmethod
    def default_colored(cls) -> RenderConfig:
        """Configuration with the default colors and attributes."""
        return cls(
            prompt_prefix_style=sgr(FG_LIGHT_GREEN),
            answered_prompt_prefix_style=sgr(FG_LIGHT_GREEN),
            answer=sgr(FG_CYAN),
            default_value=sgr(FG_DARK_GREY),
            placeholder=sgr(FG_DARK_GREY),
            help_message=sgr(FG_CYAN),
            canceled_indicator_style=sgr(FG_DARK_GREY),
            highlighted_option_prefix_style=sgr(FG_LIGHT_CYAN),
            selected_option=sgr(FG_LIGHT_CYAN),
            error_prefix_style=sgr(FG_LIGHT_RED),
            error_message=sgr(FG_LIGHT_RED),
            editor_prompt=sgr(FG_CYAN),
            calendar=CalendarRenderConfig(
                prefix_style=sgr(FG_LIGHT_GREEN),
                header=sgr(FG_DARK_GREY),
                week_header=sgr(FG_DARK_GREY),
                selected_date=sgr(FG_BLACK, BG_GREY),
                today_date=sgr(FG_LIGHT_GREEN),
                different_month_date=sgr(FG_DARK_GREY),
                unavailable_date=sgr(FG_DARK_GREY),
            ),
        )

    def with_changes(self, **changes: object) -> RenderConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def _initial_render_config() -> RenderConfig:
    if os.environ.get("NO_COLOR"):
        return RenderConfig.empty()
    return RenderConfig.default_colored()


_global_render_config: RenderConfig | None = None


def get_render_config() -> RenderConfig:
    global _global_render_config
    if _global_render_config is None:
        _global_render_config = _initial_render_config()
    return _global_render_config


def set_render_config(config: RenderConfig | None) -> None:
    """Override the process-wide render config; ``None`` restores the default."""
    global _global_render_config
    _global_render_config = config
