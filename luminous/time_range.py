"""Calendar-aware time ranges for dashboard queries.

This module provides pure helpers (no Django imports) to build and shift the
`{from, to}` windows that dashboards pass to their queries. Named windows end
on the last second of the period and start on its first instant, both
expressed in the requested time zone.

Sub-day and day arithmetic (`add(..., "day")`) is absolute: it moves the
instant by a fixed number of seconds. Month arithmetic is calendar-based and
clamps the day of month when the target month is shorter, so
`add(add(dt, n, "month"), -n, "month")` returns `dt` only when no clamping
happened along the way.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from functools import partial
from typing import Final, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ParseError


RoundUnit = Literal["day", "week", "month"]
AddUnit = Literal["second", "minute", "hour", "day", "month"]
TimeZoneLike = str | tzinfo

_SECONDS_PER_UNIT: Final[dict[str, int]] = {
    "second": 1,
    "minute": 60,
    "hour": 60 * 60,
    "day": 24 * 60 * 60,
}
_START_OF_DAY: Final = time(0, 0, 0)
_END_OF_DAY: Final = time(23, 59, 59)
_EPOCH: Final = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class TimeRange:
    """An inclusive, timezone-aware time window.

    Attributes:
        from_: First instant of the window.
        to: Last instant of the window.

    Raises:
        ValueError: When either endpoint is naive or `from_` is after `to`.
    """

    from_: datetime
    to: datetime

    def __post_init__(self) -> None:
        if not _is_aware(self.from_) or not _is_aware(self.to):
            raise ValueError("TimeRange endpoints must be timezone-aware datetimes.")
        if self.from_ > self.to:
            raise ValueError(
                f"TimeRange start {self.from_.isoformat()} is after its end {self.to.isoformat()}."
            )

    def to_dict(self) -> dict[str, str]:
        """Return the wire representation with ISO-8601 endpoints."""

        return {"from": self.from_.isoformat(), "to": self.to.isoformat()}

    def to_epoch_millis(self) -> tuple[int, int]:
        """Return both endpoints as milliseconds since the Unix epoch."""

        return to_epoch_millis(self.from_), to_epoch_millis(self.to)


def from_iso(from_iso: str, to_iso: str) -> TimeRange:
    """Build a TimeRange from two ISO-8601 strings carrying a UTC offset.

    Args:
        from_iso: Start instant, e.g. `2022-08-03T00:00:00Z`.
        to_iso: End instant.

    Returns:
        TimeRange whose endpoints keep the offsets given in the strings.

    Raises:
        ParseError: When a string is not ISO-8601 or lacks an offset.
    """

    return TimeRange(_parse_iso(from_iso), _parse_iso(to_iso))


def from_epoch(from_seconds: int, to_seconds: int) -> TimeRange:
    """Build a UTC TimeRange from two Unix timestamps (seconds).

    Raises:
        ParseError: When a value is not an integer or is out of range.
    """

    return TimeRange(_parse_epoch(from_seconds), _parse_epoch(to_seconds))


def shift_zone(time_range: TimeRange, tz: TimeZoneLike) -> TimeRange:
    """Express both endpoints in another time zone without moving the instants."""

    zone = _zone(tz)
    return TimeRange(time_range.from_.astimezone(zone), time_range.to.astimezone(zone))


def to_epoch_millis(dt: datetime) -> int:
    """Return an aware datetime as integer milliseconds since the Unix epoch."""

    return (dt - _EPOCH) // timedelta(milliseconds=1)


def today(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the current calendar day in `tz`."""

    current = _now(tz, now).date()
    return _calendar_range(current, current, tz)


def yesterday(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the calendar day before the current one in `tz`."""

    previous = _now(tz, now).date() - timedelta(days=1)
    return _calendar_range(previous, previous, tz)


def tomorrow(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the calendar day after the current one in `tz`."""

    following = _now(tz, now).date() + timedelta(days=1)
    return _calendar_range(following, following, tz)


def last_n_days(n: int, tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the last `n` calendar days in `tz`, including the current day.

    Args:
        n: Number of days in the window (>= 1).
        tz: Time zone name or tzinfo.
        now: Optional reference instant (defaults to the current time).

    Returns:
        TimeRange from the start of the first day to the end of today.
    """

    if n < 1:
        raise ValueError("n must be positive.")
    current = _now(tz, now).date()
    return _calendar_range(current - timedelta(days=n - 1), current, tz)


def this_week(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the current ISO week (Monday to Sunday) in `tz`."""

    start = _week_start(_now(tz, now).date())
    return _calendar_range(start, start + timedelta(days=6), tz)


def last_week(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the ISO week before the current one in `tz`."""

    start = _week_start(_now(tz, now).date() - timedelta(days=7))
    return _calendar_range(start, start + timedelta(days=6), tz)


def this_month(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the current calendar month in `tz`."""

    current = _now(tz, now).date()
    return _month_range(current.year, current.month, tz)


def last_month(tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the calendar month before the current one in `tz`."""

    current = _now(tz, now).date()
    year, month = _shift_month(current.year, current.month, -1)
    return _month_range(year, month, tz)


def truncate(dt: datetime, unit: RoundUnit) -> datetime:
    """Round a datetime down to the start of its day, ISO week or month.

    The result is midnight in the datetime's own time zone.

    Args:
        dt: Datetime to round.
        unit: One of `day`, `week` (Monday start) or `month`.

    Returns:
        Datetime at 00:00:00 on the first day of the unit.
    """

    day = dt.date()
    if unit == "day":
        start = day
    elif unit == "week":
        start = _week_start(day)
    elif unit == "month":
        start = day.replace(day=1)
    else:
        raise ValueError(f"Unsupported rounding unit: {unit!r}.")
    return datetime.combine(start, _START_OF_DAY, tzinfo=dt.tzinfo)


def add(dt: datetime, n: int, unit: AddUnit) -> datetime:
    """Shift a datetime by `n` units.

    Args:
        dt: Datetime to shift.
        n: Number of units; negative values shift backwards.
        unit: One of `second`, `minute`, `hour`, `day` or `month`.

    Returns:
        Shifted datetime in the same time zone as `dt`.

    Notes:
        Second through day units move the instant by a fixed number of
        seconds. Months keep the wall-clock time and day of month, clamping
        the day to the last day of the target month when needed
        (2022-01-31 + 1 month -> 2022-02-28).
    """

    if unit == "month":
        return _add_months(dt, n)

    seconds = _SECONDS_PER_UNIT.get(unit)
    if seconds is None:
        raise ValueError(f"Unsupported time unit: {unit!r}.")
    delta = timedelta(seconds=n * seconds)
    if not _is_aware(dt):
        return dt + delta
    return (dt.astimezone(UTC) + delta).astimezone(dt.tzinfo)


PRESETS: Final[dict[str, Callable[[TimeZoneLike, datetime | None], TimeRange]]] = {
    "today": today,
    "yesterday": yesterday,
    "tomorrow": tomorrow,
    "this_week": this_week,
    "last_week": last_week,
    "this_month": this_month,
    "last_month": last_month,
    "last_7_days": partial(last_n_days, 7),
    "last_30_days": partial(last_n_days, 30),
}


def preset(name: str, tz: TimeZoneLike, now: datetime | None = None) -> TimeRange:
    """Return the named window from `PRESETS`.

    Raises:
        ValueError: When `name` is not a known preset.
    """

    try:
        factory = PRESETS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown time range preset: {name!r}.") from exc
    return factory(tz, now)


def _add_months(dt: datetime, n: int) -> datetime:
    """Shift by calendar months, clamping the day of month on overflow."""

    year, month = _shift_month(dt.year, dt.month, n)
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def _shift_month(year: int, month: int, n: int) -> tuple[int, int]:
    """Return the (year, month) pair `n` months away, carrying into the year."""

    years, month_index = divmod(month - 1 + n, 12)
    return year + years, month_index + 1


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _month_range(year: int, month: int, tz: TimeZoneLike) -> TimeRange:
    last_day = calendar.monthrange(year, month)[1]
    return _calendar_range(date(year, month, 1), date(year, month, last_day), tz)


def _calendar_range(first: date, last: date, tz: TimeZoneLike) -> TimeRange:
    """Span whole calendar days, from 00:00:00 on `first` to 23:59:59 on `last`."""

    zone = _zone(tz)
    return TimeRange(
        datetime.combine(first, _START_OF_DAY, tzinfo=zone),
        datetime.combine(last, _END_OF_DAY, tzinfo=zone),
    )


def _now(tz: TimeZoneLike, now: datetime | None) -> datetime:
    """Return the reference instant expressed in `tz`."""

    zone = _zone(tz)
    if now is None:
        return datetime.now(zone)
    if not _is_aware(now):
        raise ValueError("now must be a timezone-aware datetime.")
    return now.astimezone(zone)


def _zone(tz: TimeZoneLike) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {tz!r}.") from exc


def _is_aware(dt: datetime) -> bool:
    return dt.tzinfo is not None and dt.utcoffset() is not None


def _parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 datetime that carries a UTC offset."""

    if not isinstance(value, str):
        raise ParseError(raw_value=value, reason="expected an ISO-8601 string")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ParseError(raw_value=value, reason=str(exc)) from exc
    if not _is_aware(parsed):
        raise ParseError(raw_value=value, reason="missing UTC offset")
    return parsed


def _parse_epoch(value: int) -> datetime:
    """Convert integer seconds since the epoch into a UTC datetime."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(raw_value=value, reason="expected integer seconds since the epoch")
    try:
        return _EPOCH + timedelta(seconds=value)
    except OverflowError as exc:
        raise ParseError(raw_value=value, reason="out of range") from exc
