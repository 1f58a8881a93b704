"""Period slices over a summary's daily series.

These reducers work on already computed ``DailyPnl`` records and never
re-derive equity or drawdown.
"""

from datetime import date
from typing import Callable, Iterable, Optional

from pnljournal.models import DailyPnl, PeriodSlice, Summary

DatePredicate = Callable[[date], bool]


def slice_by_period(daily_pnl_data: Iterable[DailyPnl], predicate: DatePredicate) -> PeriodSlice:
    """Aggregate the daily records whose date matches a predicate.

    Args:
        daily_pnl_data: Daily records from a Summary.
        predicate: Called with each record's date.

    Returns:
        Summed P&L, average capital and the resulting ROI percentage.
    """
    matched = [record for record in daily_pnl_data if predicate(record.date)]
    if not matched:
        return PeriodSlice()

    pnl = sum(record.pnl for record in matched)
    capital = sum(record.capital for record in matched) / len(matched)
    roi = pnl * 100 / capital if capital > 0 else 0.0

    return PeriodSlice(pnl=pnl, roi=roi, capital=capital, days=len(matched))


def is_on_day(day: date) -> DatePredicate:
    """Predicate matching a single calendar day."""
    return lambda value: value == day


def is_in_month(year: int, month: int) -> DatePredicate:
    """Predicate matching every day of a calendar month."""
    return lambda value: value.year == year and value.month == month


def today_slice(summary: Summary, today: Optional[date] = None) -> PeriodSlice:
    """Today's performance snapshot."""
    day = today or date.today()
    return slice_by_period(summary.daily_pnl_data, is_on_day(day))


def month_slice(
    summary: Summary, year: Optional[int] = None, month: Optional[int] = None
) -> PeriodSlice:
    """Performance snapshot for a month, the current one by default."""
    today = date.today()
    return slice_by_period(
        summary.daily_pnl_data,
        is_in_month(year or today.year, month or today.month),
    )


def calendar_pnl(daily_pnl_data: Iterable[DailyPnl]) -> dict[date, float]:
    """Index daily P&L by date for a calendar heatmap.

    When several records share a date the last one wins.
    """
    return {record.date: record.pnl for record in daily_pnl_data}
