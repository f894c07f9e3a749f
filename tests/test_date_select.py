"""Tests for the DateSelect prompt and its calendar helpers."""

from __future__ import annotations

import calendar
import datetime

import pytest

from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.prompts.date_select import (
    DateSelect,
    DateSelectPrompt,
    calendar_weeks,
    shift_months,
    week_header,
)
from pi.prompt.render_config import CalendarRenderConfig, RenderConfig
from pi.prompt.validator import Validation

from .virtual_terminal import VirtualTerminal

# Raw escape codes for key sequences
KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_RIGHT = "\x1b[C"
KEY_LEFT = "\x1b[D"
KEY_CTRL_UP = "\x1b[1;5A"
KEY_CTRL_DOWN = "\x1b[1;5B"
KEY_CTRL_RIGHT = "\x1b[1;5C"
KEY_CTRL_LEFT = "\x1b[1;5D"
KEY_TAB = "\t"
KEY_ENTER = "\r"

JAN_5 = datetime.date(2021, 1, 5)


def pick(config: DateSelect, *keys: str) -> datetime.date:
    return config.prompt(VirtualTerminal([*keys, KEY_ENTER]))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestCalendarHelpers:
    def test_shift_months(self) -> None:
        assert shift_months(JAN_5, 1) == datetime.date(2021, 2, 5)
        assert shift_months(JAN_5, -1) == datetime.date(2020, 12, 5)
        assert shift_months(JAN_5, 12) == datetime.date(2022, 1, 5)

    def test_shift_months_missing_day(self) -> None:
        assert shift_months(datetime.date(2021, 1, 31), 1) is None
        assert shift_months(datetime.date(2020, 2, 29), 12) is None
        assert shift_months(datetime.date(2020, 2, 29), 48) == datetime.date(2024, 2, 29)

    def test_shift_months_out_of_range(self) -> None:
        assert shift_months(datetime.date(9999, 12, 1), 1) is None

    def test_calendar_weeks_sunday_start(self) -> None:
        weeks = calendar_weeks(2021, 1)
        assert len(weeks) == 6
        assert all(len(week) == 7 for week in weeks)
        assert weeks[0][0] == datetime.date(2020, 12, 27)
        assert weeks[0][5] == datetime.date(2021, 1, 1)
        assert weeks[-1][-1] == datetime.date(2021, 2, 6)

    def test_calendar_weeks_monday_start(self) -> None:
        weeks = calendar_weeks(2021, 1, calendar.MONDAY)
        assert weeks[0][0] == datetime.date(2020, 12, 28)
        assert all(week[0].weekday() == calendar.MONDAY for week in weeks)

    def test_week_header(self) -> None:
        assert week_header() == "su mo tu we th fr sa"
        assert week_header(calendar.MONDAY) == "mo tu we th fr sa su"


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestDateSelectNavigation:
    def test_submit_starting_date(self) -> None:
        term = VirtualTerminal([KEY_ENTER])
        assert DateSelect("Date", starting_date=JAN_5).prompt(term) == JAN_5
        assert "> Date January 5, 2021\r\n" in term.output

    def test_day_moves(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5)
        assert pick(config, KEY_RIGHT, KEY_RIGHT) == datetime.date(2021, 1, 7)
        assert pick(config, KEY_LEFT) == datetime.date(2021, 1, 4)

    def test_week_moves(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5)
        assert pick(config, KEY_DOWN) == datetime.date(2021, 1, 12)
        assert pick(config, KEY_TAB) == datetime.date(2021, 1, 12)
        assert pick(config, KEY_UP) == datetime.date(2020, 12, 29)

    def test_month_and_year_moves(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5)
        assert pick(config, KEY_CTRL_RIGHT) == datetime.date(2021, 2, 5)
        assert pick(config, KEY_CTRL_LEFT) == datetime.date(2020, 12, 5)
        assert pick(config, KEY_CTRL_DOWN) == datetime.date(2022, 1, 5)
        assert pick(config, KEY_CTRL_UP) == datetime.date(2020, 1, 5)

    def test_month_move_onto_missing_day_is_ignored(self) -> None:
        config = DateSelect("Date", starting_date=datetime.date(2021, 1, 31))
        assert pick(config, KEY_CTRL_RIGHT) == datetime.date(2021, 1, 31)

    def test_moves_past_bounds_clamp(self) -> None:
        config = DateSelect(
            "Date",
            starting_date=JAN_5,
            min_date=datetime.date(2021, 1, 4),
            max_date=datetime.date(2021, 1, 10),
        )
        assert pick(config, KEY_LEFT, KEY_LEFT, KEY_LEFT) == datetime.date(2021, 1, 4)
        assert pick(config, KEY_DOWN) == datetime.date(2021, 1, 10)
        assert pick(config, KEY_CTRL_RIGHT) == datetime.date(2021, 1, 10)
        assert pick(config, KEY_UP) == datetime.date(2021, 1, 4)
        assert pick(config, KEY_DOWN, KEY_LEFT) == datetime.date(2021, 1, 9)

    def test_week_move_clamps_to_min_date(self) -> None:
        config = DateSelect(
            "Date",
            starting_date=datetime.date(2024, 5, 10),
            min_date=datetime.date(2024, 5, 7),
        )
        assert pick(config, KEY_UP) == datetime.date(2024, 5, 7)
        assert pick(config, KEY_CTRL_UP) == datetime.date(2024, 5, 7)

    def test_vim_keys(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5).with_vim_mode()
        assert pick(config, "l") == datetime.date(2021, 1, 6)
        assert pick(config, "h") == datetime.date(2021, 1, 4)
        assert pick(config, "j") == datetime.date(2021, 1, 12)
        assert pick(config, "k") == datetime.date(2020, 12, 29)

    def test_vim_keys_ignored_without_vim_mode(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5)
        assert pick(config, "l", "j") == JAN_5

    def test_move_to_reports_change(self) -> None:
        prompt = DateSelect("Date", starting_date=datetime.date(2021, 1, 31)).create_prompt()
        assert prompt.move_to(datetime.date(2021, 1, 30)) is True
        assert prompt.move_to(None) is False

    def test_move_at_bound_reports_no_change(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5, min_date=JAN_5)
        prompt = config.create_prompt()
        assert prompt.move_to(datetime.date(2021, 1, 1)) is False
        assert prompt.date == JAN_5

    def test_validator_rejects_weekend(self) -> None:
        def weekday_only(value: datetime.date) -> Validation:
            if value.weekday() >= 5:
                return Validation.invalid("Pick a weekday")
            return Validation.valid()

        # 2021-01-09 is a Saturday.
        config = DateSelect("Date", starting_date=datetime.date(2021, 1, 9)).with_validator(
            weekday_only
        )
        term = VirtualTerminal([KEY_ENTER, KEY_RIGHT, KEY_RIGHT, KEY_ENTER])
        assert config.prompt(term) == datetime.date(2021, 1, 11)
        assert "# Pick a weekday" in term.output

    def test_custom_formatter(self) -> None:
        term = VirtualTerminal([KEY_ENTER])
        DateSelect("Date", starting_date=JAN_5).with_formatter(
            lambda d: d.isoformat()
        ).prompt(term)
        assert "> Date 2021-01-05\r\n" in term.output


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class TestDateSelectConfig:
    def test_min_after_start(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5, min_date=datetime.date(2021, 2, 1))
        with pytest.raises(InvalidConfigurationError, match="Min date"):
            config.create_prompt()

    def test_max_before_start(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5).with_max_date(datetime.date(2020, 1, 1))
        with pytest.raises(InvalidConfigurationError, match="Max date"):
            config.create_prompt()

    def test_invalid_week_start(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5).with_week_start(7)
        with pytest.raises(InvalidConfigurationError, match="Invalid week start day: 7"):
            config.create_prompt()

    def test_config_error_before_raw_mode(self) -> None:
        term = VirtualTerminal([KEY_ENTER])
        config = DateSelect("Date", starting_date=JAN_5, min_date=datetime.date(2021, 2, 1))
        with pytest.raises(InvalidConfigurationError):
            config.prompt(term)
        assert term.start_count == 0


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestDateSelectRender:
    def test_calendar_frame(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5)
        frame = DateSelectPrompt(config, today=datetime.date(2021, 1, 1)).frame()
        assert frame.lines == (
            "? Date ",
            ">     january 2021",
            "  su mo tu we th fr sa",
            "  27 28 29 30 31  1  2",
            "   3  4  5  6  7  8  9",
            "  10 11 12 13 14 15 16",
            "  17 18 19 20 21 22 23",
            "  24 25 26 27 28 29 30",
            "  31  1  2  3  4  5  6",
            "[arrows to move, with ctrl to move months and years, enter to select]",
        )
        assert frame.cursor == (4, 8)

    def test_monday_start_header(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5, week_start=calendar.MONDAY)
        lines = DateSelectPrompt(config).frame().lines
        assert lines[2] == "  mo tu we th fr sa su"
        assert lines[3] == "  28 29 30 31  1  2  3"

    def test_without_help(self) -> None:
        config = DateSelect("Date", starting_date=JAN_5).without_help_message()
        lines = config.create_prompt().frame().lines
        assert len(lines) == 9

    def test_styles_applied_by_priority(self) -> None:
        cal = CalendarRenderConfig(
            selected_date=lambda s: f"[{s}]",
            today_date=lambda s: f"<{s}>",
            different_month_date=lambda s: f"~{s}",
            unavailable_date=lambda s: f"x{s}",
        )
        config = DateSelect(
            "Date",
            starting_date=JAN_5,
            min_date=datetime.date(2021, 1, 3),
            render_config=RenderConfig(calendar=cal),
        )
        prompt = DateSelectPrompt(config, today=datetime.date(2021, 1, 6))
        lines = prompt.frame().lines
        assert lines[3] == "  x27 x28 x29 x30 x31 x 1 x 2"
        assert lines[4] == "   3  4 [ 5] < 6>  7  8  9"
        assert lines[8] == "  31 ~ 1 ~ 2 ~ 3 ~ 4 ~ 5 ~ 6"
