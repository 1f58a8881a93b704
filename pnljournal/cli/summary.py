"""Analytics commands for PnL Journal CLI.

Renders the performance summary of a journal and the "today" and
"this month" snapshots.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from pnljournal.analytics import compute_summary, month_slice, today_slice
from pnljournal.cli.common import console, get_config, get_data_store, resolve_journal
from pnljournal.cli.entries import journal_option
from pnljournal.formatting import (
    format_currency_compact,
    format_percentage,
    pnl_color,
)
from pnljournal.models import PeriodSlice, Summary


def metric_groups(summary: Summary) -> dict[str, list[tuple[str, str, str]]]:
    """Headline metrics grouped for display as (title, value, style) rows."""
    equity_style = "green" if summary.current_equity >= summary.starting_capital else "red"
    return {
        "Capital": [
            ("Starting Capital", format_currency_compact(summary.starting_capital), "white"),
            ("Average Capital", format_currency_compact(summary.average_capital), "white"),
            ("Current Equity", format_currency_compact(summary.current_equity), equity_style),
            ("Overall P&L", format_currency_compact(summary.total_net_pnl), pnl_color(summary.total_net_pnl)),
            ("Return on Investment", format_percentage(summary.roi), pnl_color(summary.roi)),
        ],
        "Performance": [
            ("Win Rate", format_percentage(summary.win_rate), "green"),
            ("Profit Factor", f"{summary.profit_factor:.2f}", "cyan"),
            ("Win/Loss Ratio", f"{summary.win_loss_ratio:.2f}", "cyan"),
            ("Expectancy", format_currency_compact(summary.expectancy), pnl_color(summary.expectancy)),
            ("Avg. Win", format_currency_compact(summary.avg_profit_on_win_days), "green"),
            ("Avg. Loss", format_currency_compact(summary.avg_loss_on_loss_days), "red"),
            ("Total Trades", str(summary.total_trades), "white"),
            ("Winning Trades", str(summary.win_days), "green"),
            ("Losing Trades", str(summary.loss_days), "red"),
        ],
        "Risk": [
            ("Max Drawdown", format_percentage(summary.max_dd_percentage), "red"),
            ("Max Drawdown (Abs)", format_currency_compact(summary.max_drawdown), "red"),
            ("Max Profit", format_currency_compact(summary.max_profit), "green"),
            ("Max Loss", format_currency_compact(summary.max_loss), "red"),
            ("Winning Streak", str(summary.max_winning_streak), "green"),
            ("Losing Streak", str(summary.max_losing_streak), "red"),
        ],
    }


def _metrics_panel(title: str, rows: list[tuple[str, str, str]]) -> Panel:
    lines = [f"{name + ':':<22}[{style}]{value}[/{style}]" for name, value, style in rows]
    return Panel("\n".join(lines), title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan")


def _day_of_week_table(summary: Summary) -> Table:
    table = Table(title="P&L by Day of Week", show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold")
    table.add_column("Total P&L", justify="right")
    for item in summary.pnl_by_day_of_week:
        color = pnl_color(item.pnl)
        table.add_row(item.day, f"[{color}]{format_currency_compact(item.pnl)}[/{color}]")
    return table


def _monthly_table(summary: Summary) -> Table:
    table = Table(title="Monthly Performance", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("Days", justify="right")
    table.add_column("Net P&L", justify="right")
    table.add_column("Avg Capital", justify="right")
    table.add_column("Return", justify="right")
    for item in summary.monthly_performance:
        color = pnl_color(item.net_pnl)
        table.add_row(
            item.month,
            str(item.trading_days),
            f"[{color}]{format_currency_compact(item.net_pnl)}[/{color}]",
            format_currency_compact(item.capital_deployed),
            f"[{color}]{format_percentage(item.monthly_return)}[/{color}]",
        )
    return table


def _distribution_table(summary: Summary) -> Table:
    table = Table(title="Daily Return Distribution", show_header=True, header_style="bold cyan")
    table.add_column("Range", style="bold")
    table.add_column("Days", justify="right")
    table.add_column("", no_wrap=True)
    largest = max((bucket.count for bucket in summary.pnl_distribution), default=0)
    for bucket in summary.pnl_distribution:
        negative = bucket.max is not None and bucket.max <= 0
        width = round(bucket.count / largest * 30) if largest else 0
        color = "red" if negative else "green"
        table.add_row(bucket.name, str(bucket.count), f"[{color}]{'█' * width}[/{color}]")
    return table


def slice_text(label: str, period: PeriodSlice) -> str:
    """One-panel text for a period snapshot."""
    color = pnl_color(period.pnl)
    return (
        f"[bold]{label}[/bold]\n\n"
        f"P&L:         [{color}]{format_currency_compact(period.pnl)}[/{color}]\n"
        f"ROI:         [{color}]{format_percentage(period.roi)}[/{color}]\n"
        f"Avg Capital: {format_currency_compact(period.capital)}\n"
        f"[dim]Trading days: {period.days}[/dim]"
    )


@click.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the summary as JSON.")
@journal_option
def summary(as_json: bool, journal_name: Optional[str]) -> None:
    """Show the performance dashboard for a journal.

    \b
    Examples:
      pnljournal summary
      pnljournal summary -j Options --json
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    result = compute_summary(store.get_entries(selected.name), selected.initial_capital)

    if as_json:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
        return

    if result.total_trades == 0:
        console.print(Panel(
            "[dim]No entries yet[/dim]\n\n"
            "[dim]Log a day with 'pnljournal add' or try 'pnljournal sample'[/dim]",
            title=f"[bold]{selected.name}[/bold]",
            border_style="dim",
        ))
        return

    console.print(f"[bold]{selected.name}[/bold] [dim]({result.total_trades} entries)[/dim]\n")
    console.print(Columns([
        _metrics_panel(title, rows) for title, rows in metric_groups(result).items()
    ]))
    console.print(_day_of_week_table(result))
    console.print(_monthly_table(result))
    console.print(_distribution_table(result))


@click.command()
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Day to show (YYYY-MM-DD). Defaults to today.")
@journal_option
def today(day: Optional[datetime], journal_name: Optional[str]) -> None:
    """Show a single day's performance.

    \b
    Examples:
      pnljournal today
      pnljournal today --date 2024-03-15
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    target = day.date() if day else date.today()
    result = compute_summary(store.get_entries(selected.name), selected.initial_capital)
    period = today_slice(result, target)

    console.print(Panel(
        slice_text(f"{target.strftime('%d %b %Y')} Performance", period),
        title=f"[bold cyan]{selected.name}[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option("--month", "month_value", type=click.DateTime(formats=["%Y-%m"]), default=None,
              help="Month to show (YYYY-MM). Defaults to the current month.")
@journal_option
def month(month_value: Optional[datetime], journal_name: Optional[str]) -> None:
    """Show a calendar month's performance.

    \b
    Examples:
      pnljournal month
      pnljournal month --month 2024-03
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    target = month_value.date() if month_value else date.today()
    result = compute_summary(store.get_entries(selected.name), selected.initial_capital)
    period = month_slice(result, target.year, target.month)

    console.print(Panel(
        slice_text(f"{target.strftime('%B %Y')} Performance", period),
        title=f"[bold cyan]{selected.name}[/bold cyan]",
        border_style="cyan",
    ))
