from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List
from zoneinfo import ZoneInfo

from .exceptions import InvalidDateComponentError
from .models import DailyAggregate, Measurement

DEFAULT_TIMEZONE = "Europe/Oslo"


@dataclass
class _DayTotals:
    usage: float = 0.0
    cost: float = 0.0
    vat: float = 0.0


def aggregate_by_day(
    measurements: Iterable[Measurement],
    *,
    timezone: str = DEFAULT_TIMEZONE,
) -> List[DailyAggregate]:
    """Sum usage, cost and VAT per local calendar day.

    Every measurement is counted on the day its ``from_`` falls on. The order
    of the returned list is not meaningful.
    """

    tzinfo = ZoneInfo(timezone)
    totals: Dict[str, _DayTotals] = {}
    for measurement in measurements:
        key = _day_key(measurement.from_, tzinfo)
        day = totals.setdefault(key, _DayTotals())
        day.usage += measurement.consumption
        day.cost += measurement.cost
        day.vat += measurement.vat
    return [
        DailyAggregate(date=key, usage=day.usage, cost=day.cost, vat=day.vat)
        for key, day in totals.items()
    ]


def count_unique_days(
    measurements: Iterable[Measurement],
    *,
    timezone: str = DEFAULT_TIMEZONE,
) -> int:
    tzinfo = ZoneInfo(timezone)
    return len({_day_key(measurement.from_, tzinfo) for measurement in measurements})


def day_key(timestamp: datetime, timezone: str = DEFAULT_TIMEZONE) -> str:
    """Return the local calendar date of ``timestamp`` as ``YYYY-MM-DD``.

    Naive timestamps are taken to be local time already.
    """

    return _day_key(timestamp, ZoneInfo(timezone))


def pad_with_zero(num: int) -> str:
    if num > 99:
        raise InvalidDateComponentError(num)
    return f"{num:02d}"


def _day_key(timestamp: datetime, tzinfo: ZoneInfo) -> str:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tzinfo)
    return (
        f"{timestamp.year}-{pad_with_zero(timestamp.month)}-"
        f"{pad_with_zero(timestamp.day)}"
    )
