"""Journal analytics engine.

Turns a journal's entries and its starting capital into a ``Summary``:
equity curve, drawdown, win/loss statistics, streaks, day-of-week and
monthly breakdowns and a P&L-percent histogram. The computation is pure
and is redone from scratch on every call.
"""

import math
from typing import Iterable, Optional

from pnljournal.models import (
    DailyPnl,
    DayOfWeekPnl,
    DistributionBucket,
    Entry,
    MonthlyPerformance,
    Summary,
    coerce_number,
)

# Sunday first
DAY_OF_WEEK_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# (label, inclusive min, exclusive max) in percent of capital deployed
DISTRIBUTION_BUCKETS: list[tuple[str, Optional[float], Optional[float]]] = [
    ("< -3.5%", None, -3.5),
    ("-3.5% to -3%", -3.5, -3.0),
    ("-3% to -2%", -3.0, -2.0),
    ("-2% to -1%", -2.0, -1.0),
    ("-1% to 0%", -1.0, 0.0),
    ("0% to 1%", 0.0, 1.0),
    ("1% to 2%", 1.0, 2.0),
    ("2% to 3%", 2.0, 3.0),
    ("3% to 3.5%", 3.0, 3.5),
    ("> 3.5%", 3.5, None),
]


def _safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def _finite(value: float) -> float:
    """Replace NaN/Infinity produced by overflowing arithmetic with 0.0."""
    return value if math.isfinite(value) else 0.0


def sunday_first_index(entry: Entry) -> int:
    """Index into DAY_OF_WEEK_NAMES for an entry's date."""
    return (entry.date.weekday() + 1) % 7


def month_label(year: int, month: int) -> str:
    """Label a calendar month, e.g. 'Jan 2024'."""
    return f"{MONTH_NAMES[month - 1]} {year}"


def bucket_index(pnl_percent: float) -> Optional[int]:
    """Find the distribution bucket whose [min, max) range holds a percentage."""
    for i, (_, low, high) in enumerate(DISTRIBUTION_BUCKETS):
        if (low is None or pnl_percent >= low) and (high is None or pnl_percent < high):
            return i
    return None


def empty_summary(initial_capital: float) -> Summary:
    """Summary for a journal with no entries."""
    capital = coerce_number(initial_capital)
    return Summary(
        starting_capital=capital,
        current_equity=capital,
        peak_equity=capital,
        pnl_by_day_of_week=[DayOfWeekPnl(day=day, pnl=0.0) for day in DAY_OF_WEEK_NAMES],
    )


def _walk_equity(
    entries: list[Entry], initial_capital: float
) -> tuple[list[DailyPnl], float, float, float]:
    """Walk the sorted entries, tracking equity, peak and drawdown.

    Capital deployed is a balance snapshot, so the change from the previous
    snapshot is a deposit or withdrawal added to equity before the day's P&L.

    Returns:
        Tuple of (daily records, final equity, final peak, max drawdown).
    """
    daily: list[DailyPnl] = []
    equity = initial_capital
    peak = initial_capital
    previous_capital = initial_capital
    max_drawdown = 0.0

    for entry in entries:
        net_pnl = entry.net_pnl
        capital_flow = entry.capital_deployed - previous_capital
        equity_start_of_day = equity + capital_flow
        equity = equity_start_of_day + net_pnl

        peak = max(peak, equity_start_of_day, equity)
        drawdown = peak - equity
        max_drawdown = max(max_drawdown, drawdown)

        daily.append(
            DailyPnl(
                date=entry.date,
                pnl=_finite(net_pnl),
                equity=_finite(equity),
                capital=entry.capital_deployed,
                drawdown=-_finite(drawdown),
                capital_flow=_finite(capital_flow),
            )
        )
        previous_capital = entry.capital_deployed

    return daily, equity, peak, max_drawdown


def _longest_streaks(net_pnls: list[float]) -> tuple[int, int]:
    """Longest runs of winning and losing days; a flat day breaks both."""
    win_streak = loss_streak = 0
    longest_win = longest_loss = 0

    for pnl in net_pnls:
        if pnl > 0:
            win_streak += 1
            loss_streak = 0
            longest_win = max(longest_win, win_streak)
        elif pnl < 0:
            loss_streak += 1
            win_streak = 0
            longest_loss = max(longest_loss, loss_streak)
        else:
            win_streak = 0
            loss_streak = 0

    return longest_win, longest_loss


def _pnl_by_day_of_week(entries: list[Entry]) -> list[DayOfWeekPnl]:
    totals = [0.0] * 7
    for entry in entries:
        totals[sunday_first_index(entry)] += entry.net_pnl
    return [
        DayOfWeekPnl(day=day, pnl=_finite(total))
        for day, total in zip(DAY_OF_WEEK_NAMES, totals)
    ]


def _monthly_performance(entries: list[Entry]) -> list[MonthlyPerformance]:
    """Roll entries up by calendar month, oldest month first."""
    groups: dict[tuple[int, int], dict] = {}

    for entry in entries:
        key = (entry.date.year, entry.date.month)
        if key not in groups:
            groups[key] = {"first_date": entry.date, "net_pnl": 0.0, "capitals": []}
        group = groups[key]
        group["net_pnl"] += entry.net_pnl
        group["capitals"].append(entry.capital_deployed)

    result = []
    for (year, month), group in sorted(groups.items(), key=lambda item: item[1]["first_date"]):
        capitals = group["capitals"]
        average_capital = _finite(sum(capitals) / len(capitals))
        net_pnl = _finite(group["net_pnl"])
        monthly_return = net_pnl * 100 / average_capital if average_capital > 0 else 0.0
        result.append(
            MonthlyPerformance(
                month=month_label(year, month),
                year=year,
                month_number=month,
                net_pnl=net_pnl,
                capital_deployed=average_capital,
                monthly_return=_finite(monthly_return),
                trading_days=len(capitals),
            )
        )
    return result


def _pnl_distribution(entries: list[Entry]) -> list[DistributionBucket]:
    """Histogram of daily net P&L as a percentage of capital deployed.

    Entries without positive capital deployed are left out.
    """
    counts = [0] * len(DISTRIBUTION_BUCKETS)
    for entry in entries:
        if entry.capital_deployed <= 0:
            continue
        pnl_percent = entry.net_pnl * 100 / entry.capital_deployed
        index = bucket_index(pnl_percent)
        if index is not None:
            counts[index] += 1

    return [
        DistributionBucket(name=name, min=low, max=high, count=count)
        for (name, low, high), count in zip(DISTRIBUTION_BUCKETS, counts)
    ]


def compute_summary(entries: Iterable[Entry], initial_capital: float) -> Summary:
    """Compute the performance summary for a journal.

    Entries are sorted by date before any sequential computation, so the
    caller's order does not matter. Neither the list nor the entries are
    modified, and every ratio falls back to 0 when its denominator is 0.

    Args:
        entries: Logged entries of one journal, in any order.
        initial_capital: Capital in effect before the first entry.

    Returns:
        A freshly built Summary.
    """
    capital = coerce_number(initial_capital)
    sorted_entries = sorted(entries, key=lambda entry: entry.date)
    if not sorted_entries:
        return empty_summary(capital)

    net_pnls = [entry.net_pnl for entry in sorted_entries]
    wins = [pnl for pnl in net_pnls if pnl > 0]
    losses = [pnl for pnl in net_pnls if pnl < 0]

    total_trades = len(sorted_entries)
    win_days = len(wins)
    loss_days = len(losses)
    total_net_pnl = _finite(sum(net_pnls))
    total_profit = _finite(sum(wins))
    total_loss = _finite(sum(losses))

    avg_profit = _safe_div(total_profit, win_days)
    avg_loss = _safe_div(total_loss, loss_days)

    daily, current_equity, peak_equity, max_drawdown = _walk_equity(sorted_entries, capital)
    max_drawdown = _finite(max_drawdown)
    peak_equity = _finite(peak_equity)

    average_capital = _finite(
        sum(entry.capital_deployed for entry in sorted_entries) / total_trades
    )
    longest_win, longest_loss = _longest_streaks(net_pnls)

    return Summary(
        starting_capital=capital,
        average_capital=average_capital,
        current_equity=_finite(current_equity),
        peak_equity=peak_equity,
        total_net_pnl=total_net_pnl,
        roi=_finite(total_net_pnl * 100 / average_capital) if average_capital > 0 else 0.0,
        total_trades=total_trades,
        win_days=win_days,
        loss_days=loss_days,
        win_rate=win_days * 100 / total_trades,
        loss_rate=loss_days * 100 / total_trades,
        total_profit_on_win_days=total_profit,
        total_loss_on_loss_days=total_loss,
        avg_profit_on_win_days=_finite(avg_profit),
        avg_loss_on_loss_days=_finite(avg_loss),
        profit_factor=_finite(abs(_safe_div(total_profit, total_loss))),
        expectancy=_finite(total_net_pnl / total_trades),
        win_loss_ratio=_finite(abs(_safe_div(avg_profit, avg_loss))),
        max_profit=_finite(max(0.0, max(wins, default=0.0))),
        max_loss=_finite(min(0.0, min(losses, default=0.0))),
        max_winning_streak=longest_win,
        max_losing_streak=longest_loss,
        max_drawdown=max_drawdown,
        max_dd_percentage=_finite(max_drawdown * 100 / peak_equity) if peak_equity > 0 else 0.0,
        pnl_by_day_of_week=_pnl_by_day_of_week(sorted_entries),
        monthly_performance=_monthly_performance(sorted_entries),
        daily_pnl_data=daily,
        pnl_distribution=_pnl_distribution(sorted_entries),
    )
