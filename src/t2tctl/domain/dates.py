"""Date keywords, pseudo-dates, and archiving.

The remote service stores calendar dates as seconds since the epoch at
exactly 12:00:00 GMT.  Every timestamp produced here follows that
convention: the *local* calendar date is taken from the clock and then
expressed at noon GMT.

Pseudo-dates are far-future placeholders derived from (context, status).
The lowest of them, the one for (no context, next action), splits real
dates from pseudo-dates: anything strictly between blank and that point
is an actual date.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable
from datetime import MAXYEAR, UTC, date, datetime, timedelta

from t2tctl.domain.conventions import Conventions
from t2tctl.domain.types import BLANK, Status, Timestamp

NOON_HOUR = 12

NEXT_KEYWORD = "next"
DAYS_PER_WEEK = 7

TODAY_KEYWORDS = frozenset({"today", "tod"})
TOMORROW_KEYWORDS = frozenset({"tomorrow", "tom"})

WEEKDAY_KEYWORDS: dict[str, int] = {
    "monday": 0,
    "mon": 0,
    "tuesday": 1,
    "tues": 1,
    "tue": 1,
    "wednesday": 2,
    "wed": 2,
    "thursday": 3,
    "thurs": 3,
    "thur": 3,
    "friday": 4,
    "fri": 4,
    "saturday": 5,
    "sat": 5,
    "sunday": 6,
    "sun": 6,
}


# --- Pure calendar helpers ---


def noon_timestamp(day: date) -> Timestamp:
    """Seconds since the epoch for *day* at 12:00:00 GMT."""
    return calendar.timegm((day.year, day.month, day.day, NOON_HOUR, 0, 0))


def timestamp_date(value: Timestamp) -> date:
    """GMT calendar date of *value*."""
    return datetime.fromtimestamp(value, UTC).date()


# Latest timestamp that still archives without leaving the datetime range.
MAX_TIMESTAMP: Timestamp = noon_timestamp(date(MAXYEAR - 1, 12, 31))


def is_representable(value: Timestamp) -> bool:
    """Whether *value* is blank or a calendar date the resolver can handle."""
    return BLANK <= value <= MAX_TIMESTAMP


def add_months(day: date, months: int) -> date:
    """Shift *day* by whole months, clamping to the target month's length."""
    index = day.month - 1 + months
    year, month = day.year + index // 12, index % 12 + 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


def with_day_of_month(day: date, day_of_month: int) -> date:
    """Set the day of month, rolling into the next month when it overflows."""
    return day.replace(day=1) + timedelta(days=day_of_month - 1)


def shift_years(value: Timestamp, years: int) -> Timestamp:
    """Move *value* by whole calendar years (29 February clamps to the 28th)."""
    moment = datetime.fromtimestamp(value, UTC)
    year = moment.year + years
    last_day = calendar.monthrange(year, moment.month)[1]
    return int(moment.replace(year=year, day=min(moment.day, last_day)).timestamp())


def archive(value: Timestamp) -> Timestamp:
    """The archived form of *value*: exactly one calendar year later."""
    return shift_years(value, 1)


def unarchive(value: Timestamp) -> Timestamp:
    """Undo :func:`archive`: exactly one calendar year earlier."""
    return shift_years(value, -1)


# --- Clock-dependent resolution ---


class DateResolver:
    """Resolve date text and pseudo-dates against a clock.

    Args:
        conventions: Context names, month offsets and formats to use.
        clock: Zero-argument callable returning today's local date.
            Defaults to :meth:`datetime.date.today`; tests pass a fixed date.
    """

    def __init__(
        self,
        conventions: Conventions | None = None,
        *,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._conventions = conventions or Conventions()
        self._clock = clock or date.today

    def today_date(self) -> date:
        return self._clock()

    def today(self) -> Timestamp:
        """Today as a noon-GMT timestamp."""
        return noon_timestamp(self._clock())

    # -- Parsing --

    def parse(self, text: str | None) -> Timestamp | None:
        """Resolve a keyword, weekday, or short date to a timestamp.

        Returns None for blank or unrecognised input.  A leading
        ``next`` adds a week to weekday keywords.
        """
        if text is None or not text.strip():
            return None

        source = text
        add_week = source.startswith(NEXT_KEYWORD)
        if add_week:
            source = source[len(NEXT_KEYWORD) :].strip()

        today = self._clock()
        if source in TODAY_KEYWORDS:
            return noon_timestamp(today)
        if source in TOMORROW_KEYWORDS:
            return noon_timestamp(today + timedelta(days=1))

        weekday = WEEKDAY_KEYWORDS.get(source)
        if weekday is not None:
            days_ahead = (weekday - today.weekday()) % DAYS_PER_WEEK
            if add_week:
                days_ahead += DAYS_PER_WEEK
            return noon_timestamp(today + timedelta(days=days_ahead))

        return self._parse_short_date(source)

    def is_date(self, text: str) -> bool:
        return self.parse(text) is not None

    def _parse_short_date(self, source: str) -> Timestamp | None:
        for fmt in self._conventions.dates.formats:
            try:
                parsed = datetime.strptime(source.strip(), fmt)
            except ValueError:
                continue
            return noon_timestamp(parsed.date())
        return None

    # -- Pseudo-dates --

    def month_offset(self, context_name: str | None) -> int:
        dates = self._conventions.dates
        contexts = self._conventions.contexts
        if context_name is not None and context_name == contexts.work:
            return dates.work_month_offset
        if context_name is not None and context_name == contexts.notes:
            return dates.notes_month_offset
        return dates.default_month_offset

    def pseudo_date(self, context_name: str | None, status: Status) -> Timestamp:
        """Placeholder due date for a task in *context_name* with *status*."""
        shifted = add_months(self._clock(), self.month_offset(context_name))
        day = self._conventions.status.pseudo_day(status)
        return noon_timestamp(with_day_of_month(shifted, day))

    def lowest_pseudo_date(self) -> Timestamp:
        return self.pseudo_date(None, Status.NEXT_ACTION)

    def is_actual_date(self, value: Timestamp) -> bool:
        """Whether *value* is a real date: neither blank nor a pseudo-date."""
        return BLANK < value < self.lowest_pseudo_date()

    # -- Archiving --

    def archive_threshold(self) -> Timestamp:
        days = self._conventions.dates.archive_threshold_days
        return noon_timestamp(self._clock() + timedelta(days=days))

    def is_archived(self, value: Timestamp) -> bool:
        """Whether *value* lies beyond the archive threshold."""
        return value > self.archive_threshold()

    def is_today_or_recent_but_archived(self, value: Timestamp) -> bool:
        return self.is_archived(value) and unarchive(value) <= self.today()
