from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List

from contribsound.core.errors import DataFetchError
from contribsound.models.day import DayRecord


def flatten_calendar(weeks: Any) -> List[DayRecord]:
    """
    GitHub returns weeks of days; the renderer wants one ordered day list.
    """
    if weeks is None:
        return []
    if not isinstance(weeks, list):
        raise DataFetchError(f"Contribution weeks must be a list, got {type(weeks).__name__}")

    days: List[DayRecord] = []
    for week in weeks:
        if not isinstance(week, dict):
            raise DataFetchError(f"Malformed contribution week: {week!r}")
        raw_days = week.get("contributionDays") or []
        if not isinstance(raw_days, list):
            raise DataFetchError(f"Malformed contributionDays: {raw_days!r}")
        for raw in raw_days:
            days.append(_day(raw))
    return days


def _day(raw: Any) -> DayRecord:
    try:
        return DayRecord.model_validate(raw)
    except ValueError as e:
        raise DataFetchError(f"Malformed contribution day: {raw!r}") from e


def year_bounds(year: int, today: date) -> tuple[date, date]:
    """Jan 1 .. Dec 31, cut at today for the current (or a future) year."""
    start = date(year, 1, 1)
    end = date(year, 12, 31)
    if year >= today.year:
        end = today
    return start, end


def filter_year(days: Iterable[DayRecord], year: int, today: date) -> List[DayRecord]:
    start, end = year_bounds(year, today)
    return [d for d in days if start <= d.date <= end]


def available_years(created_at: datetime | date, today: date) -> List[int]:
    """Every calendar year from account creation through the current year."""
    return list(range(created_at.year, today.year + 1))
