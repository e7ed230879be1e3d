"""Decoding of the values sent by a time-input widget."""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable

from iotlink.datetime import TimeOfDay

_TZ_MAX = 32
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _as_long(text: str) -> int:
    """Parse a leading integer the lenient way; anything else gives 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class TimeMode(enum.Enum):
    UNDEFINED = 0
    SUNSET = 1
    SUNRISE = 2
    SPECIFIED = 3


def _parse_point(value: str) -> tuple[TimeMode, TimeOfDay]:
    if value == "sr":
        return TimeMode.SUNRISE, TimeOfDay.invalid()
    if value == "ss":
        return TimeMode.SUNSET, TimeOfDay.invalid()
    if value:
        time = TimeOfDay(_as_long(value))
        if time.is_valid():
            return TimeMode.SPECIFIED, time
        return TimeMode.UNDEFINED, time
    return TimeMode.UNDEFINED, TimeOfDay.invalid()


class TimeInputParam:
    """Start/stop times, time zone and weekdays chosen in a time-input widget.

    ``values`` is the list of parameter strings, or one string whose parts
    are separated by NUL characters.
    """

    def __init__(self, values: Iterable[str] | str) -> None:
        if isinstance(values, str):
            parts = values.split("\0") if values else []
        else:
            parts = list(values)

        self.start_mode = TimeMode.UNDEFINED
        self.stop_mode = TimeMode.UNDEFINED
        self.start = TimeOfDay.invalid()
        self.stop = TimeOfDay.invalid()
        self.tz = ""
        self.tz_offset = 0
        self._weekdays = 0xFF

        it = iter(parts)
        value = next(it, None)
        if value is None:
            return
        self.start_mode, self.start = _parse_point(value)

        value = next(it, None)
        if value is None:
            return
        self.stop_mode, self.stop = _parse_point(value)

        value = next(it, None)
        if value is None:
            return
        self.tz = value[:_TZ_MAX]

        value = next(it, None)
        if value is None:
            return
        if value:
            self._weekdays = 0
            for char in value:
                if "1" <= char <= "7":
                    self._weekdays |= 1 << (ord(char) - ord("1"))

        value = next(it, None)
        if value is None:
            return
        self.tz_offset = _as_long(value)

    def has_start_time(self) -> bool:
        return self.start_mode is TimeMode.SPECIFIED

    def is_start_sunrise(self) -> bool:
        return self.start_mode is TimeMode.SUNRISE

    def is_start_sunset(self) -> bool:
        return self.start_mode is TimeMode.SUNSET

    def has_stop_time(self) -> bool:
        return self.stop_mode is TimeMode.SPECIFIED

    def is_stop_sunrise(self) -> bool:
        return self.stop_mode is TimeMode.SUNRISE

    def is_stop_sunset(self) -> bool:
        return self.stop_mode is TimeMode.SUNSET

    def is_weekday_selected(self, day: int) -> bool:
        """Day 1 is Monday through 7 for Sunday."""
        return bool(self._weekdays >> ((day - 1) % 7) & 1)