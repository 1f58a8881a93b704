"""Entry commands for PnL Journal CLI.

Handles logging, editing, deleting and listing daily entries.
"""

from datetime import date, datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from pnljournal.cli.common import (
    console,
    error_panel,
    get_config,
    get_data_store,
    resolve_journal,
)
from pnljournal.db.store import StoreError
from pnljournal.formatting import format_currency_precise, pnl_color
from pnljournal.models import Entry

journal_option = click.option(
    "--journal", "-j", "journal_name",
    default=None,
    help="Journal to use (default from config).",
)


def default_capital(entries: list[Entry], initial_capital: float) -> float:
    """Capital to prefill for a new entry: the latest snapshot, else the initial capital."""
    if not entries:
        return initial_capital
    latest = max(entries, key=lambda e: e.date)
    return latest.capital_deployed


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()


def _signed(value: float) -> str:
    color = pnl_color(value)
    sign = "+" if value >= 0 else ""
    return f"[{color}]{sign}{format_currency_precise(value)}[/{color}]"


@click.command()
@click.option("--date", "entry_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Trading date (YYYY-MM-DD). Defaults to today.")
@click.option("--gross", type=float, required=True, help="Gross P&L before charges.")
@click.option("--charges", type=float, required=True, help="Taxes and charges.")
@click.option("--capital", type=float, default=None,
              help="Capital deployed. Defaults to the latest entry's capital.")
@click.option("--notes", default=None, help="Free-text notes.")
@journal_option
def add(
    entry_date: Optional[datetime],
    gross: float,
    charges: float,
    capital: Optional[float],
    notes: Optional[str],
    journal_name: Optional[str],
) -> None:
    """Log a trading day.

    \b
    Examples:
      pnljournal add --gross 12500 --charges 430
      pnljournal add --date 2024-03-15 --gross -8000 --charges 310 --capital 600000
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    if charges < 0:
        error_panel("Taxes and charges cannot be negative.")
        raise SystemExit(1)

    if capital is None:
        capital = default_capital(store.get_entries(selected.name), selected.initial_capital)

    entry = Entry(
        date=entry_date.date() if entry_date else date.today(),
        gross_pnl=gross,
        taxes_and_charges=charges,
        capital_deployed=capital,
        notes=notes,
    )
    store.add_entry(selected.name, entry)

    console.print(Panel(
        f"Date:      {entry.date.isoformat()} ({entry.day})\n"
        f"Gross P&L: {format_currency_precise(entry.gross_pnl)}\n"
        f"Charges:   {format_currency_precise(entry.taxes_and_charges)}\n"
        f"Net P&L:   {_signed(entry.net_pnl)}\n"
        f"Capital:   {format_currency_precise(entry.capital_deployed)}\n\n"
        f"[dim]ID: {entry.id}[/dim]",
        title=f"[bold green]Entry Added[/bold green] [dim]({selected.name})[/dim]",
        border_style="green",
    ))


@click.command()
@click.argument("entry_id")
@click.option("--date", "entry_date", default=None, help="New trading date (YYYY-MM-DD).")
@click.option("--gross", type=float, default=None, help="New gross P&L.")
@click.option("--charges", type=float, default=None, help="New taxes and charges.")
@click.option("--capital", type=float, default=None, help="New capital deployed.")
@click.option("--notes", default=None, help="New notes.")
def edit(
    entry_id: str,
    entry_date: Optional[str],
    gross: Optional[float],
    charges: Optional[float],
    capital: Optional[float],
    notes: Optional[str],
) -> None:
    """Edit fields of entry ENTRY_ID.

    \b
    Examples:
      pnljournal edit 3f2a... --charges 450
    """
    config = get_config()
    store = get_data_store(config)

    entry = store.get_entry(entry_id)
    if entry is None:
        error_panel(f"Entry '{entry_id}' not found")
        raise SystemExit(1)

    if charges is not None and charges < 0:
        error_panel("Taxes and charges cannot be negative.")
        raise SystemExit(1)

    try:
        updates = {
            "date": _parse_date(entry_date),
            "gross_pnl": gross,
            "taxes_and_charges": charges,
            "capital_deployed": capital,
            "notes": notes,
        }
        changed = {k: v for k, v in updates.items() if v is not None}
        updated = Entry(**{**entry.model_dump(), **changed})
    except (ValueError, ValidationError) as e:
        error_panel(f"Invalid update:\n\n{e}")
        raise SystemExit(1)

    store.update_entry(updated)
    console.print(f"[green]✓ Updated entry {entry_id}[/green] (net {_signed(updated.net_pnl)})")


@click.command()
@click.argument("entry_id")
@click.option("--yes", is_flag=True, default=False, help="Skip confirmation prompt.")
def delete(entry_id: str, yes: bool) -> None:
    """Delete entry ENTRY_ID."""
    config = get_config()
    store = get_data_store(config)

    if not yes:
        if not click.confirm("Are you sure you want to delete this entry?"):
            console.print("[dim]Cancelled[/dim]")
            return

    try:
        store.delete_entry(entry_id)
    except StoreError as e:
        error_panel(str(e))
        raise SystemExit(1)

    console.print(f"[green]✓ Deleted entry {entry_id}[/green]")


@click.command()
@click.option("--yes", is_flag=True, default=False, help="Skip confirmation prompt.")
@journal_option
def clear(yes: bool, journal_name: Optional[str]) -> None:
    """Delete ALL entries of a journal."""
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    if not store.get_entries(selected.name):
        console.print("[yellow]There are no entries to delete.[/yellow]")
        return

    if not yes:
        if not click.confirm(
            f"Delete ALL entries of '{selected.name}'? This action cannot be undone."
        ):
            console.print("[dim]Cancelled[/dim]")
            return

    removed = store.clear_entries(selected.name)
    console.print(f"[green]✓ Deleted {removed} entries from '{selected.name}'[/green]")


@click.command()
@click.option("--limit", type=int, default=None, help="Number of entries to show.")
@journal_option
def entries(limit: Optional[int], journal_name: Optional[str]) -> None:
    """List entries, newest first.

    \b
    Examples:
      pnljournal entries
      pnljournal entries --limit 50 -j Options
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    rows = sorted(store.get_entries(selected.name), key=lambda e: e.date, reverse=True)
    if not rows:
        console.print(Panel(
            "[dim]No entries found[/dim]",
            title=f"[bold]{selected.name}[/bold]",
            border_style="dim",
        ))
        return

    page_size = limit or config["display"]["entries_per_page"]
    shown = rows[:page_size]

    table = Table(title=f"{selected.name} Entries", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Day", style="dim")
    table.add_column("Gross P&L", justify="right")
    table.add_column("Charges", justify="right")
    table.add_column("Net P&L", justify="right")
    table.add_column("Capital", justify="right")
    table.add_column("Notes", max_width=30)
    table.add_column("ID", style="dim")

    for entry in shown:
        table.add_row(
            entry.date.isoformat(),
            entry.day[:3],
            format_currency_precise(entry.gross_pnl),
            format_currency_precise(entry.taxes_and_charges),
            _signed(entry.net_pnl),
            format_currency_precise(entry.capital_deployed),
            entry.notes or "-",
            entry.id,
        )

    console.print(table)
    if len(rows) > len(shown):
        console.print(f"[dim]Showing {len(shown)} of {len(rows)} entries (use --limit)[/dim]")
