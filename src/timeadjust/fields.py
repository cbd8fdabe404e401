"""Calendar field arithmetic on ``datetime`` values.

Relative amounts go through :class:`dateutil.relativedelta.relativedelta`, so
month and year steps clamp to the last valid day (Jan 31 + 1 month is
Feb 28/29). Absolute fields roll over instead of failing: setting the day to
32 in January lands on February 1st, minute 61 lands on minute 1 of the
following hour.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Mapping

from dateutil.relativedelta import relativedelta

_ABSOLUTE_ORDER = ("year", "month", "day", "hour", "minute", "second")


def add_fields(moment: datetime, fields: Mapping[str, int]) -> datetime:
    return moment + relativedelta(**dict(fields))


def subtract_fields(moment: datetime, fields: Mapping[str, int]) -> datetime:
    return moment - relativedelta(**dict(fields))


def _set_year(moment: datetime, value: int) -> datetime:
    return moment + relativedelta(years=value - moment.year)


def _set_month(moment: datetime, value: int) -> datetime:
    return moment + relativedelta(months=value - moment.month)


def _set_day(moment: datetime, value: int) -> datetime:
    return moment.replace(day=1) + timedelta(days=value - 1)


def _set_hour(moment: datetime, value: int) -> datetime:
    return moment.replace(hour=0) + timedelta(hours=value)


def _set_minute(moment: datetime, value: int) -> datetime:
    return moment.replace(minute=0) + timedelta(minutes=value)


def _set_second(moment: datetime, value: int) -> datetime:
    return moment.replace(second=0) + timedelta(seconds=value)


_SETTERS = {
    "year": _set_year,
    "month": _set_month,
    "day": _set_day,
    "hour": _set_hour,
    "minute": _set_minute,
    "second": _set_second,
}


def set_fields(moment: datetime, fields: Mapping[str, int]) -> datetime:
    unknown = sorted(set(fields) - set(_SETTERS))
    if unknown:
        raise KeyError(f"Unsupported calendar field(s): {', '.join(unknown)}")
    result = moment
    for name in _ABSOLUTE_ORDER:
        if name in fields:
            result = _SETTERS[name](result, int(fields[name]))
    return result
