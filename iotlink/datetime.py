"""Time-of-day and calendar date-time values based on UTC seconds."""

from __future__ import annotations

import calendar
import datetime as _dt
from functools import total_ordering

SECS_PER_MIN = 60
SECS_PER_HOUR = 3600
SECS_PER_DAY = SECS_PER_HOUR * 24
SECS_PER_WEEK = SECS_PER_DAY * 7

DOW_STR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# 01 Jan 2021: anything at or before this is treated as an unset clock.
VALID_SINCE = 1609459200

_INVALID_TIME_OF_DAY = 0xFFFFFFFF
_EPOCH = _dt.datetime(1970, 1, 1)


def is_time_valid(timestamp: int) -> bool:
    """Return True if the UTC timestamp looks like a real, synchronised time."""
    return timestamp > VALID_SINCE


def _hour12(hour: int) -> int:
    if hour == 0:
        return 12
    if hour > 12:
        return hour - 12
    return hour


@total_ordering
class TimeOfDay:
    """Seconds since midnight; an out-of-range value marks it invalid."""

    __slots__ = ("_time",)

    def __init__(self, seconds: int) -> None:
        self._time = int(seconds) % SECS_PER_DAY

    @classmethod
    def from_hms(cls, hour: int, minute: int, second: int) -> TimeOfDay:
        return cls(hour * SECS_PER_HOUR + minute * SECS_PER_MIN + second)

    @classmethod
    def invalid(cls) -> TimeOfDay:
        result = cls(0)
        result._time = _INVALID_TIME_OF_DAY
        return result

    def hour(self) -> int:
        return self._time // SECS_PER_HOUR

    def minute(self) -> int:
        return (self._time // SECS_PER_MIN) % SECS_PER_MIN

    def second(self) -> int:
        return self._time % SECS_PER_MIN

    def hour12(self) -> int:
        return _hour12(self.hour())

    def is_am(self) -> bool:
        return not self.is_pm()

    def is_pm(self) -> bool:
        return self.hour() >= 12

    def adjust_seconds(self, sec: int) -> None:
        """Shift the time by ``sec`` seconds, wrapping around midnight."""
        if self.is_valid():
            self._time = (self._time + sec) % SECS_PER_DAY

    def unix_offset(self) -> int:
        return self._time

    def is_valid(self) -> bool:
        return self._time < SECS_PER_DAY

    def __bool__(self) -> bool:
        return self.is_valid()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self._time == other._time

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self._time < other._time

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.is_valid():
            return "TimeOfDay.invalid()"
        return f"TimeOfDay({self.hour():02d}:{self.minute():02d}:{self.second():02d})"


@total_ordering
class DateTime:
    """A UTC date and time held as Unix seconds; zero means invalid."""

    __slots__ = ("_time", "_tm")

    def __init__(self, timestamp: int) -> None:
        self._set(int(timestamp))

    def _set(self, timestamp: int) -> None:
        self._time = timestamp
        self._tm = _EPOCH + _dt.timedelta(seconds=timestamp)

    @classmethod
    def from_fields(
        cls, hour: int, minute: int, second: int, day: int, month: int, year: int
    ) -> DateTime:
        """Build from calendar fields; hours, minutes and seconds may overflow."""
        return cls(calendar.timegm((year, month, day, hour, minute, second, 0, 0, 0)))

    @classmethod
    def combine(cls, time: TimeOfDay, date: DateTime) -> DateTime:
        """Take the time of day from ``time`` and the date from ``date``."""
        return cls.from_fields(
            time.hour(), time.minute(), time.second(), date.day(), date.month(), date.year()
        )

    @classmethod
    def invalid(cls) -> DateTime:
        return cls(0)

    def second(self) -> int:
        return self._tm.second

    def minute(self) -> int:
        return self._tm.minute

    def hour(self) -> int:
        return self._tm.hour

    def day(self) -> int:
        return self._tm.day

    def month(self) -> int:
        return self._tm.month

    def year(self) -> int:
        return self._tm.year

    def yearday(self) -> int:
        """Day of the year, 1 for January 1st."""
        return self._tm.timetuple().tm_yday

    def weekday(self) -> int:
        """Day of the week, 0 for Sunday."""
        return (self._tm.weekday() + 1) % 7

    def day_of_week(self) -> int:
        """Day of the week, 1 for Monday through 7 for Sunday."""
        wday = self.weekday()
        return 7 if wday == 0 else wday

    def dow_str(self) -> str:
        return DOW_STR[self.weekday() % 7]

    def week_of_year(self) -> int:
        julian = self.yearday()
        dow = self.weekday()
        dow_jan1 = DateTime.from_fields(0, 0, 0, 1, 1, self.year()).weekday()
        week = (julian + 6) // 7
        if dow < dow_jan1:
            week += 1
        return week

    def secs_today(self) -> int:
        return self._time % SECS_PER_DAY

    def secs_this_week(self) -> int:
        return self.weekday() * SECS_PER_DAY + self.secs_today()

    def prev_midnight(self) -> DateTime:
        return DateTime((self._time // SECS_PER_DAY) * SECS_PER_DAY)

    def next_midnight(self) -> DateTime:
        return DateTime((self._time // SECS_PER_DAY) * SECS_PER_DAY + SECS_PER_DAY)

    def prev_sunday(self) -> DateTime:
        return DateTime(self._time - self.secs_this_week())

    def next_sunday(self) -> DateTime:
        return DateTime(self._time - self.secs_this_week() + SECS_PER_WEEK)

    def hour12(self) -> int:
        return _hour12(self.hour())

    def is_am(self) -> bool:
        return not self.is_pm()

    def is_pm(self) -> bool:
        return self.hour() >= 12

    def adjust_seconds(self, sec: int) -> None:
        if self.is_valid():
            self._set(self._time + sec)

    def unix(self) -> int:
        return self._time

    def is_valid(self) -> bool:
        return self._time != 0

    def __int__(self) -> int:
        return self._time

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._time == other._time

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._time < other._time

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DateTime({self._time})"