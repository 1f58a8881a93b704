"""Performance analytics for PnL Journal."""

from pnljournal.analytics.engine import (
    DAY_OF_WEEK_NAMES,
    DISTRIBUTION_BUCKETS,
    compute_summary,
    empty_summary,
)
from pnljournal.analytics.periods import (
    calendar_pnl,
    is_in_month,
    is_on_day,
    month_slice,
    slice_by_period,
    today_slice,
)

__all__ = [
    "DAY_OF_WEEK_NAMES",
    "DISTRIBUTION_BUCKETS",
    "compute_summary",
    "empty_summary",
    "calendar_pnl",
    "is_in_month",
    "is_on_day",
    "month_slice",
    "slice_by_period",
    "today_slice",
]
