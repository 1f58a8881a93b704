"""Property-based tests for the analytics engine."""

import math
import random
from datetime import date, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from pnljournal.analytics import (
    DAY_OF_WEEK_NAMES,
    DISTRIBUTION_BUCKETS,
    compute_summary,
)
from pnljournal.models import Entry


amounts = st.floats(min_value=-1_000_000.0, max_value=1_000_000.0, allow_nan=False, allow_infinity=False)
capitals = st.floats(min_value=-1_000_000.0, max_value=10_000_000.0, allow_nan=False, allow_infinity=False)
extreme_amounts = st.floats(allow_nan=False, allow_infinity=False)


def entry_strategy():
    """Generate entries, including adversarial capital values."""
    return st.builds(
        Entry,
        date=st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31)),
        gross_pnl=amounts,
        taxes_and_charges=st.floats(min_value=0.0, max_value=50_000.0, allow_nan=False),
        capital_deployed=capitals,
        notes=st.none(),
    )


def unique_date_entries(min_size: int = 1, max_size: int = 40):
    """Generate entry lists with one entry per date."""
    return st.lists(
        entry_strategy(), min_size=min_size, max_size=max_size, unique_by=lambda e: e.date
    )


def make_entries(net_pnls: list[float], capital: float = 100000.0) -> list[Entry]:
    """Consecutive-day entries with the given net P&L and no charges."""
    start = date(2024, 1, 1)
    return [
        Entry(
            date=start + timedelta(days=i),
            gross_pnl=pnl,
            taxes_and_charges=0.0,
            capital_deployed=capital,
        )
        for i, pnl in enumerate(net_pnls)
    ]


def numeric_fields(summary) -> list[float]:
    """Every numeric value in a summary, series included."""
    values = [v for v in summary.model_dump().values() if isinstance(v, (int, float))]
    for record in summary.daily_pnl_data:
        values.extend([record.pnl, record.equity, record.capital, record.drawdown, record.capital_flow])
    for record in summary.monthly_performance:
        values.extend([record.net_pnl, record.capital_deployed, record.monthly_return])
    for record in summary.pnl_by_day_of_week:
        values.append(record.pnl)
    return values


class TestEmptyInput:
    """
    *For any* starting capital, an empty journal yields a zeroed summary
    seeded with that capital.
    """

    @given(capital=st.floats(min_value=0.0, max_value=10_000_000.0, allow_nan=False))
    @settings(max_examples=50)
    def test_empty_summary_is_seeded_with_capital(self, capital: float):
        summary = compute_summary([], capital)

        assert summary.starting_capital == capital
        assert summary.current_equity == capital
        assert summary.total_trades == 0
        assert summary.win_days == 0
        assert summary.loss_days == 0
        assert summary.win_rate == 0
        assert summary.profit_factor == 0
        assert summary.expectancy == 0
        assert summary.roi == 0
        assert summary.max_drawdown == 0
        assert summary.max_dd_percentage == 0
        assert summary.daily_pnl_data == []
        assert summary.monthly_performance == []
        assert summary.pnl_distribution == []

    def test_empty_day_of_week_buckets(self):
        summary = compute_summary([], 500000.0)

        assert [d.day for d in summary.pnl_by_day_of_week] == [
            "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat",
        ]
        assert all(d.pnl == 0 for d in summary.pnl_by_day_of_week)


class TestOrderIndependence:
    """
    *For any* set of entries with distinct dates, shuffling the input
    produces the same summary as the date-sorted input.
    """

    @given(entries=unique_date_entries(), seed=st.integers(min_value=0, max_value=1000))
    @settings(max_examples=100)
    def test_shuffled_input_gives_identical_summary(self, entries: list[Entry], seed: int):
        ordered = sorted(entries, key=lambda e: e.date)
        shuffled = list(entries)
        random.Random(seed).shuffle(shuffled)

        assert compute_summary(shuffled, 100000.0) == compute_summary(ordered, 100000.0)

    @given(entries=unique_date_entries(min_size=2))
    @settings(max_examples=50)
    def test_daily_series_is_date_sorted(self, entries: list[Entry]):
        summary = compute_summary(list(reversed(entries)), 100000.0)
        dates = [record.date for record in summary.daily_pnl_data]

        assert dates == sorted(dates)


class TestDrawdownNonNegativity:
    """
    *For any* entries, stored drawdowns are never positive and the
    maximum drawdown is never negative.
    """

    @given(
        entries=st.lists(entry_strategy(), min_size=0, max_size=40),
        capital=st.floats(min_value=0.0, max_value=10_000_000.0, allow_nan=False),
    )
    @settings(max_examples=100)
    def test_drawdown_signs(self, entries: list[Entry], capital: float):
        summary = compute_summary(entries, capital)

        assert all(record.drawdown <= 0 for record in summary.daily_pnl_data)
        assert summary.max_drawdown >= 0
        if summary.daily_pnl_data:
            assert summary.max_drawdown == max(-r.drawdown for r in summary.daily_pnl_data)


class TestEquityContinuity:
    """Capital flows inferred from snapshots are added on top of daily P&L."""

    def test_deposit_is_added_to_equity(self):
        entries = [
            Entry(date=date(2024, 1, 1), gross_pnl=5000, taxes_and_charges=0, capital_deployed=100000),
            Entry(date=date(2024, 1, 2), gross_pnl=-2000, taxes_and_charges=0, capital_deployed=120000),
        ]

        summary = compute_summary(entries, 100000.0)
        day1, day2 = summary.daily_pnl_data

        assert day1.capital_flow == 0
        assert day1.equity == 105000
        assert day2.capital_flow == 20000
        assert day2.equity == 123000
        assert day2.drawdown == 0
        assert summary.peak_equity == 123000
        assert summary.current_equity == 123000

    def test_start_of_day_equity_can_set_peak(self):
        entries = [
            Entry(date=date(2024, 1, 1), gross_pnl=-1000, taxes_and_charges=0, capital_deployed=150000),
        ]

        summary = compute_summary(entries, 100000.0)

        assert summary.peak_equity == 150000
        assert summary.current_equity == 149000
        assert summary.max_drawdown == 1000
        assert summary.daily_pnl_data[0].drawdown == -1000

    @given(entries=unique_date_entries())
    @settings(max_examples=100)
    def test_equity_equals_capital_plus_flows_plus_pnl(self, entries: list[Entry]):
        summary = compute_summary(entries, 100000.0)
        records = summary.daily_pnl_data

        expected = 100000.0 + sum(r.capital_flow + r.pnl for r in records)
        assert math.isclose(summary.current_equity, expected, rel_tol=1e-9, abs_tol=1e-3)


class TestWinRateAndProfitFactor:
    """Boundary behaviour of win rate and profit factor."""

    @given(pnls=st.lists(st.floats(min_value=0.01, max_value=10000.0), min_size=1, max_size=30))
    @settings(max_examples=50)
    def test_all_winning_days(self, pnls: list[float]):
        summary = compute_summary(make_entries(pnls), 100000.0)

        assert summary.win_rate == 100
        assert summary.profit_factor == 0
        assert summary.win_loss_ratio == 0
        assert summary.max_loss == 0
        assert summary.max_profit == max(pnls)

    @given(pnls=st.lists(st.floats(min_value=-10000.0, max_value=-0.01), min_size=1, max_size=30))
    @settings(max_examples=50)
    def test_all_losing_days(self, pnls: list[float]):
        summary = compute_summary(make_entries(pnls), 100000.0)

        assert summary.win_rate == 0
        assert summary.profit_factor == 0
        assert summary.max_profit == 0
        assert summary.max_loss == min(pnls)
        assert summary.total_loss_on_loss_days < 0

    def test_mixed_days(self):
        summary = compute_summary(make_entries([3000, -1000, 0, 1000, -1000]), 100000.0)

        assert summary.total_trades == 5
        assert summary.win_days == 2
        assert summary.loss_days == 2
        assert summary.win_rate == 40
        assert summary.loss_rate == 40
        assert summary.total_profit_on_win_days == 4000
        assert summary.total_loss_on_loss_days == -2000
        assert summary.avg_profit_on_win_days == 2000
        assert summary.avg_loss_on_loss_days == -1000
        assert summary.profit_factor == 2
        assert summary.win_loss_ratio == 2
        assert summary.expectancy == 400
        assert summary.total_net_pnl == 2000

    def test_charges_reduce_net_pnl(self):
        entries = [
            Entry(date=date(2024, 1, 1), gross_pnl=500, taxes_and_charges=500, capital_deployed=100000),
            Entry(date=date(2024, 1, 2), gross_pnl=-500, taxes_and_charges=100, capital_deployed=100000),
        ]

        summary = compute_summary(entries, 100000.0)

        assert summary.win_days == 0
        assert summary.loss_days == 1
        assert summary.total_net_pnl == -600


class TestStreaks:
    """
    *For any* sequence, flat days reset both streak counters.
    """

    def test_zero_day_resets_streaks(self):
        summary = compute_summary(make_entries([1, 1, 0, -1, -1, -1]), 100000.0)

        assert summary.max_winning_streak == 2
        assert summary.max_losing_streak == 3

    def test_zero_day_breaks_a_run(self):
        summary = compute_summary(make_entries([1, 1, 0, 1, 1, 1, -1, 0, -1]), 100000.0)

        assert summary.max_winning_streak == 3
        assert summary.max_losing_streak == 1

    @given(pnls=st.lists(st.sampled_from([-1.0, 0.0, 1.0]), min_size=0, max_size=60))
    @settings(max_examples=100)
    def test_streaks_bounded_by_counts(self, pnls: list[float]):
        summary = compute_summary(make_entries(pnls), 100000.0)

        assert summary.max_winning_streak <= summary.win_days
        assert summary.max_losing_streak <= summary.loss_days
        assert (summary.max_winning_streak > 0) == (summary.win_days > 0)


class TestDistribution:
    """P&L-percent histogram bucketing."""

    def _bucket_counts(self, summary) -> dict[str, int]:
        return {bucket.name: bucket.count for bucket in summary.pnl_distribution}

    def test_zero_pnl_is_non_negative(self):
        counts = self._bucket_counts(compute_summary(make_entries([0.0]), 100000.0))

        assert counts["0% to 1%"] == 1
        assert counts["-1% to 0%"] == 0

    def test_bucket_edges_are_half_open(self):
        # -1%, 1%, 3.5%, -3.5% of 100000
        counts = self._bucket_counts(
            compute_summary(make_entries([-1000.0, 1000.0, 3500.0, -3500.0]), 100000.0)
        )

        assert counts["-1% to 0%"] == 1
        assert counts["1% to 2%"] == 1
        assert counts["> 3.5%"] == 1
        assert counts["-3.5% to -3%"] == 1

    def test_ten_ordered_buckets(self):
        summary = compute_summary(make_entries([100.0]), 100000.0)

        assert [b.name for b in summary.pnl_distribution] == [b[0] for b in DISTRIBUTION_BUCKETS]
        assert len(summary.pnl_distribution) == 10

    def test_entries_without_capital_are_excluded(self):
        entries = make_entries([500.0, -500.0], capital=0.0)
        summary = compute_summary(entries, 0.0)

        assert sum(b.count for b in summary.pnl_distribution) == 0
        assert summary.total_trades == 2

    @given(entries=st.lists(entry_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_every_capitalised_entry_is_counted_once(self, entries: list[Entry]):
        summary = compute_summary(entries, 100000.0)
        expected = sum(1 for e in entries if e.capital_deployed > 0)

        assert sum(b.count for b in summary.pnl_distribution) == expected


class TestDayOfWeek:
    """Weekday aggregation always yields seven Sunday-first buckets."""

    def test_weekday_totals(self):
        entries = [
            Entry(date=date(2024, 1, 7), gross_pnl=100, taxes_and_charges=0, capital_deployed=1),  # Sun
            Entry(date=date(2024, 1, 8), gross_pnl=200, taxes_and_charges=0, capital_deployed=1),  # Mon
            Entry(date=date(2024, 1, 15), gross_pnl=-50, taxes_and_charges=0, capital_deployed=1),  # Mon
            Entry(date=date(2024, 1, 13), gross_pnl=30, taxes_and_charges=0, capital_deployed=1),  # Sat
        ]

        summary = compute_summary(entries, 1.0)
        totals = {d.day: d.pnl for d in summary.pnl_by_day_of_week}

        assert totals == {"Sun": 100, "Mon": 150, "Tue": 0, "Wed": 0, "Thu": 0, "Fri": 0, "Sat": 30}

    @given(entries=st.lists(entry_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_always_seven_buckets(self, entries: list[Entry]):
        summary = compute_summary(entries, 100000.0)

        assert [d.day for d in summary.pnl_by_day_of_week] == DAY_OF_WEEK_NAMES


class TestMonthlyRollup:
    """Monthly groups sum P&L and average capital."""

    def test_months_are_grouped_and_sorted(self):
        entries = [
            Entry(date=date(2024, 2, 5), gross_pnl=2000, taxes_and_charges=0, capital_deployed=100000),
            Entry(date=date(2023, 12, 29), gross_pnl=-500, taxes_and_charges=0, capital_deployed=50000),
            Entry(date=date(2024, 2, 6), gross_pnl=1000, taxes_and_charges=0, capital_deployed=200000),
        ]

        summary = compute_summary(entries, 50000.0)
        december, february = summary.monthly_performance

        assert december.month == "Dec 2023"
        assert december.net_pnl == -500
        assert december.monthly_return == -1
        assert february.month == "Feb 2024"
        assert february.net_pnl == 3000
        assert february.capital_deployed == 150000
        assert february.monthly_return == 2
        assert february.trading_days == 2

    def test_average_capital_and_roi(self):
        entries = make_entries([1000.0, 1000.0], capital=100000.0)

        summary = compute_summary(entries, 100000.0)

        assert summary.average_capital == 100000
        assert summary.roi == 2


class TestNumericTotality:
    """
    *For any* input, including zero or negative capital, the summary
    contains no NaN or Infinity and the input is left untouched.
    """

    @given(
        entries=st.lists(entry_strategy(), min_size=0, max_size=40),
        capital=capitals,
    )
    @settings(max_examples=100)
    def test_all_values_are_finite(self, entries: list[Entry], capital: float):
        summary = compute_summary(entries, capital)

        assert all(math.isfinite(value) for value in numeric_fields(summary))

    def test_zero_and_negative_capital(self):
        for capital in (0.0, -1000.0):
            entries = make_entries([100.0, -50.0], capital=capital)
            summary = compute_summary(entries, capital)

            assert summary.roi == 0
            assert all(m.monthly_return == 0 for m in summary.monthly_performance)
            assert all(math.isfinite(value) for value in numeric_fields(summary))

    @given(
        entries=st.lists(
            st.builds(
                Entry,
                date=st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31)),
                gross_pnl=extreme_amounts,
                taxes_and_charges=extreme_amounts,
                capital_deployed=extreme_amounts,
                notes=st.none(),
            ),
            min_size=1,
            max_size=20,
        ),
        capital=extreme_amounts,
    )
    @settings(max_examples=100)
    def test_overflowing_amounts_stay_finite(self, entries: list[Entry], capital: float):
        summary = compute_summary(entries, capital)

        assert all(math.isfinite(value) for value in numeric_fields(summary))

    def test_net_pnl_overflow_on_a_single_day(self):
        entries = [
            Entry(date=date(2024, 1, 1), gross_pnl=1.7e308, taxes_and_charges=-1.7e308, capital_deployed=100000),
            Entry(date=date(2024, 1, 2), gross_pnl=-1.7e308, taxes_and_charges=1.7e308, capital_deployed=100000),
        ]

        summary = compute_summary(entries, 100000.0)

        assert summary.max_profit == 0
        assert summary.max_loss == 0
        assert all(math.isfinite(value) for value in numeric_fields(summary))

    def test_non_numeric_fields_coerce_to_zero(self):
        entries = [
            Entry(date=date(2024, 1, 1), gross_pnl="abc", taxes_and_charges=None, capital_deployed="1,00,000"),
            Entry(date=date(2024, 1, 2), gross_pnl=float("nan"), taxes_and_charges="", capital_deployed=float("inf")),
        ]

        summary = compute_summary(entries, "not a number")

        assert summary.starting_capital == 0
        assert summary.total_net_pnl == 0
        assert summary.daily_pnl_data[0].capital == 100000
        assert summary.daily_pnl_data[1].capital == 0
        assert all(math.isfinite(value) for value in numeric_fields(summary))

    @given(entries=st.lists(entry_strategy(), min_size=0, max_size=30))
    @settings(max_examples=50)
    def test_input_list_is_not_mutated(self, entries: list[Entry]):
        snapshot = [entry.model_dump() for entry in entries]
        original_order = list(entries)

        compute_summary(entries, 100000.0)

        assert entries == original_order
        assert [entry.model_dump() for entry in entries] == snapshot

    def test_duplicate_dates_are_kept(self):
        entries = make_entries([100.0]) + make_entries([-40.0])

        summary = compute_summary(entries, 100000.0)

        assert summary.total_trades == 2
        assert len(summary.daily_pnl_data) == 2
        assert summary.total_net_pnl == 60


class TestSerialization:
    """Summaries serialize to JSON with camelCase names."""

    def test_json_aliases(self):
        summary = compute_summary(make_entries([1000.0, -500.0]), 100000.0)
        data = summary.model_dump(by_alias=True, mode="json")

        assert "maxDDPercentage" in data
        assert "pnlByDayOfWeek" in data
        assert data["dailyPnlData"][0]["capitalFlow"] == 0
        assert data["totalTrades"] == 2
