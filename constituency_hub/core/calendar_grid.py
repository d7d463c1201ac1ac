"""
Month grid builder for the events calendar.

Events are stored with naive UTC timestamps. They are bucketed by the calendar
day they fall on in the display timezone, then laid out on a Sunday-first
month grid. Months are numbered 1-12 throughout.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional, Sequence

DAY_NAMES_EN = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAY_NAMES_BN = ["রবি", "সোম", "মঙ্গল", "বুধ", "বৃহঃ", "শুক্র", "শনি"]
MONTH_NAMES_EN = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_NAMES_BN = [
    "জানুয়ারি",
    "ফেব্রুয়ারি",
    "মার্চ",
    "এপ্রিল",
    "মে",
    "জুন",
    "জুলাই",
    "আগস্ট",
    "সেপ্টেম্বর",
    "অক্টোবর",
    "নভেম্বর",
    "ডিসেম্বর",
]

YEARS_BACK = 50
YEARS_AHEAD = 20


@dataclass
class CalendarCell:
    day: int
    date_key: str
    events: List[Any] = field(default_factory=list)
    is_today: bool = False

    @property
    def has_events(self) -> bool:
        return bool(self.events)


@dataclass
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    cells: List[CalendarCell]

    def cell(self, key: str) -> Optional[CalendarCell]:
        for cell in self.cells:
            if cell.date_key == key:
                return cell
        return None


@dataclass(frozen=True)
class CalendarCursor:
    """The month currently shown."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be within 1-12, got {self.month}")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_day_of_month(year: int, month: int) -> int:
    """Weekday of the 1st with Sunday as 0."""
    # calendar.weekday() counts Monday as 0
    return (calendar.weekday(year, month, 1) + 1) % 7


def date_key(moment: datetime | date, tz: tzinfo = timezone.utc) -> str:
    """ISO date of ``moment`` in ``tz``. Naive datetimes are read as UTC."""
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(tz).date().isoformat()
    return moment.isoformat()


def _event_moment(event: Any) -> Any:
    if isinstance(event, dict):
        return event.get("event_date")
    return getattr(event, "event_date", None)


def bucket_events(
    events: Sequence[Any],
    tz: tzinfo = timezone.utc,
    moment_of: Callable[[Any], Any] = _event_moment,
) -> Dict[str, List[Any]]:
    """Group events by the day they start on, preserving input order."""
    buckets: Dict[str, List[Any]] = {}
    for event in events:
        moment = moment_of(event)
        if moment is None:
            continue
        if isinstance(moment, str):
            moment = datetime.fromisoformat(moment.replace("Z", "+00:00"))
        buckets.setdefault(date_key(moment, tz), []).append(event)
    return buckets


def build_month_grid(
    year: int,
    month: int,
    events: Sequence[Any] = (),
    today: Optional[date] = None,
    tz: tzinfo = timezone.utc,
) -> CalendarMonth:
    """
    Lay out one month.

    The grid opens with ``first_day_of_month`` blank cells followed by one
    cell per day carrying that day's events.
    """
    buckets = bucket_events(events, tz)
    today_key = today.isoformat() if today else None
    cells = []
    for day in range(1, days_in_month(year, month) + 1):
        key = date(year, month, day).isoformat()
        cells.append(CalendarCell(day=day, date_key=key, events=buckets.get(key, []), is_today=key == today_key))
    return CalendarMonth(year=year, month=month, leading_blanks=first_day_of_month(year, month), cells=cells)


def select_date(grid: CalendarMonth, key: str) -> Optional[List[Any]]:
    """Events for a clicked day, or None when the day is empty and nothing should open."""
    cell = grid.cell(key)
    if cell is None or not cell.has_events:
        return None
    return cell.events


def previous_month(cursor: CalendarCursor) -> CalendarCursor:
    if cursor.month == 1:
        return CalendarCursor(cursor.year - 1, 12)
    return CalendarCursor(cursor.year, cursor.month - 1)


def next_month(cursor: CalendarCursor) -> CalendarCursor:
    if cursor.month == 12:
        return CalendarCursor(cursor.year + 1, 1)
    return CalendarCursor(cursor.year, cursor.month + 1)


def go_to_today(today: date) -> CalendarCursor:
    return CalendarCursor(today.year, today.month)


def go_to_year(cursor: CalendarCursor, year: int) -> CalendarCursor:
    return CalendarCursor(year, cursor.month)


def go_to_month(cursor: CalendarCursor, month: int) -> CalendarCursor:
    return CalendarCursor(cursor.year, month)


def year_options(current_year: int) -> List[int]:
    return list(range(current_year - YEARS_BACK, current_year + YEARS_AHEAD + 1))


def day_names(language: str = "en") -> List[str]:
    return DAY_NAMES_BN if language == "bn" else DAY_NAMES_EN


def month_name(month: int, language: str = "en") -> str:
    names = MONTH_NAMES_BN if language == "bn" else MONTH_NAMES_EN
    return names[month - 1]
