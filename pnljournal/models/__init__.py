"""Data models for PnL Journal."""

from pnljournal.models.entry import Entry, coerce_number
from pnljournal.models.journal import Journal
from pnljournal.models.summary import (
    DailyPnl,
    DayOfWeekPnl,
    DistributionBucket,
    MonthlyPerformance,
    PeriodSlice,
    Summary,
)

__all__ = [
    "Entry",
    "coerce_number",
    "Journal",
    "DailyPnl",
    "DayOfWeekPnl",
    "DistributionBucket",
    "MonthlyPerformance",
    "PeriodSlice",
    "Summary",
]
