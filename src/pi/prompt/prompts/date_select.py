"""DateSelect prompt: pick a date on a month calendar."""

from __future__ import annotations

import calendar
import datetime
from dataclasses import dataclass, field, replace
from typing import Callable

from pi.prompt.answer import Answer
from pi.prompt.errors import InvalidConfigurationError
from pi.prompt.formatter import format_date
from pi.prompt.frame import CURSOR_MARKER, FrameBuilder
from pi.prompt.keys import KeyEvent
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.render_config import RenderConfig
from pi.prompt.validator import Validator, run_validators

DEFAULT_DATE_SELECT_HELP = (
    "arrows to move, with ctrl to move months and years, enter to select"
)
DEFAULT_WEEK_START = calendar.SUNDAY

_WEEKDAY_ABBR = ("mo", "tu", "we", "th", "fr", "sa", "su")
_CALENDAR_WEEKS = 6


def shift_months(date: datetime.date, months: int) -> datetime.date | None:
    """*date* moved by whole months, or ``None`` when that day does not exist."""
    total = date.year * 12 + (date.month - 1) + months
    year, month = divmod(total, 12)
    if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
        return None
    if date.day > calendar.monthrange(year, month + 1)[1]:
        return None
    return date.replace(year=year, month=month + 1)


def shift_days(date: datetime.date, days: int) -> datetime.date | None:
    try:
        return date + datetime.timedelta(days=days)
    except OverflowError:
        return None


def calendar_weeks(
    year: int, month: int, week_start: int = DEFAULT_WEEK_START
) -> list[list[datetime.date]]:
    """Six full weeks covering *month*, starting on *week_start*."""
    first = datetime.date(year, month, 1)
    offset = (first.weekday() - week_start) % 7
    start = first - datetime.timedelta(days=offset)
    days = [start + datetime.timedelta(days=i) for i in range(7 * _CALENDAR_WEEKS)]
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def week_header(week_start: int = DEFAULT_WEEK_START) -> str:
    return " ".join(_WEEKDAY_ABBR[(week_start + i) % 7] for i in range(7))


@dataclass(frozen=True)
class DateSelect(PromptConfig[datetime.date]):
    """Configuration of a calendar date prompt.

    ``week_start`` uses the ``calendar`` module's weekday numbers
    (``calendar.MONDAY`` ... ``calendar.SUNDAY``).
    """

    message: str
    starting_date: datetime.date = field(default_factory=datetime.date.today)
    min_date: datetime.date | None = None
    max_date: datetime.date | None = None
    week_start: int = DEFAULT_WEEK_START
    vim_mode: bool = False
    help_message: str | None = DEFAULT_DATE_SELECT_HELP
    validators: tuple[Validator, ...] = ()
    formatter: Callable[[datetime.date], str] = format_date
    render_config: RenderConfig | None = None

    def with_starting_date(self, date: datetime.date) -> DateSelect:
        return replace(self, starting_date=date)

    def with_min_date(self, date: datetime.date) -> DateSelect:
        return replace(self, min_date=date)

    def with_max_date(self, date: datetime.date) -> DateSelect:
        return replace(self, max_date=date)

    def with_week_start(self, weekday: int) -> DateSelect:
        return replace(self, week_start=weekday)

    def with_vim_mode(self, vim_mode: bool = True) -> DateSelect:
        return replace(self, vim_mode=vim_mode)

    def with_validator(self, validator: Validator) -> DateSelect:
        return replace(self, validators=self.validators + (validator,))

    def with_formatter(self, formatter: Callable[[datetime.date], str]) -> DateSelect:
        return replace(self, formatter=formatter)

    def create_prompt(self) -> DateSelectPrompt:
        return DateSelectPrompt(self)


class DateSelectPrompt(Prompt[datetime.date]):
    """State machine for ``DateSelect``."""

    def __init__(self, config: DateSelect, *, today: datetime.date | None = None) -> None:
        if config.min_date is not None and config.min_date > config.starting_date:
            raise InvalidConfigurationError("Min date can not be greater than starting date")
        if config.max_date is not None and config.max_date < config.starting_date:
            raise InvalidConfigurationError("Max date can not be smaller than starting date")
        if not 0 <= config.week_start <= 6:
            raise InvalidConfigurationError(f"Invalid week start day: {config.week_start}")

        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._config = config
        self.today = today or datetime.date.today()
        self.date = config.starting_date

    def in_range(self, date: datetime.date) -> bool:
        cfg = self._config
        if cfg.min_date is not None and date < cfg.min_date:
            return False
        if cfg.max_date is not None and date > cfg.max_date:
            return False
        return True

    def move_to(self, date: datetime.date | None) -> bool:
        """Move the cursor to *date*, clamped into the allowed range.

        Returns whether the selected date changed.
        """
        if date is None:
            return False
        cfg = self._config
        if cfg.min_date is not None:
            date = max(date, cfg.min_date)
        if cfg.max_date is not None:
            date = min(date, cfg.max_date)
        if date == self.date:
            return False
        self.date = date
        return True

    def handle(self, event: KeyEvent) -> bool:
        kb = self.keybindings
        vim = self._config.vim_mode
        d = self.date

        if kb.matches(event, "prevMonth"):
            return self.move_to(shift_months(d, -1))
        if kb.matches(event, "nextMonth"):
            return self.move_to(shift_months(d, 1))
        if kb.matches(event, "prevYear"):
            return self.move_to(shift_months(d, -12))
        if kb.matches(event, "nextYear"):
            return self.move_to(shift_months(d, 12))
        if kb.matches(event, "prevDay", vim_mode=vim):
            return self.move_to(shift_days(d, -1))
        if kb.matches(event, "nextDay", vim_mode=vim):
            return self.move_to(shift_days(d, 1))
        if kb.matches(event, "prevWeek", vim_mode=vim):
            return self.move_to(shift_days(d, -7))
        if kb.matches(event, "nextWeek", vim_mode=vim):
            return self.move_to(shift_days(d, 7))
        return False

    def submit(self) -> Answer[datetime.date] | None:
        validation = run_validators(self.date, self._config.validators)
        if not validation.is_valid:
            self.reject(validation)
            return None
        return Answer.submitted(self.date)

    def format_answer(self, value: datetime.date) -> str:
        return self._config.formatter(value)

    # -- rendering ----------------------------------------------------------

    def _day_cell(self, day: datetime.date) -> str:
        cal = self.render_config.calendar
        text = f"{day.day:2}"
        if day == self.date:
            style = cal.selected_date or self.render_config.text_input
            return CURSOR_MARKER + style(text)
        if not self.in_range(day):
            return cal.unavailable_date(text)
        if day.month != self.date.month:
            return cal.different_month_date(text)
        if day == self.today:
            return cal.today_date(text)
        return text

    def render(self, frame: FrameBuilder) -> None:
        cal = self.render_config.calendar
        week_start = self._config.week_start
        header_width = len(week_header(week_start))
        indent = " " * (len(cal.prefix) + 1)

        frame.prompt_line(self.message)

        title = f"{calendar.month_name[self.date.month].lower()} {self.date.year}"
        frame.line(cal.prefix_style(cal.prefix), " ", cal.header(title.center(header_width).rstrip()))
        frame.line(indent, cal.week_header(week_header(week_start)))

        for week in calendar_weeks(self.date.year, self.date.month, week_start):
            frame.line(indent, " ".join(self._day_cell(day) for day in week))

        self.render_error(frame)
        self.render_help(frame)
