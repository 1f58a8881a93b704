"""Data commands for PnL Journal CLI.

Handles CSV export/import and generating sample entries.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from pnljournal.cli.common import console, error_panel, get_config, get_data_store, resolve_journal
from pnljournal.cli.entries import journal_option
from pnljournal.export import CsvImportError, export_entries, import_entries
from pnljournal.sample import generate_sample_entries


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path),
                default=Path("trade_journal_export.csv"))
@journal_option
def export_csv(path: Path, journal_name: Optional[str]) -> None:
    """Export a journal's entries to a CSV file at PATH.

    \b
    Examples:
      pnljournal export
      pnljournal export ~/journal.csv -j Options
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    rows = store.get_entries(selected.name)
    if not rows:
        console.print("[yellow]No entries to export.[/yellow]")
        return

    count = export_entries(rows, path)
    console.print(f"[green]✓ Exported {count} entries to {path}[/green]")


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@journal_option
def import_csv(path: Path, journal_name: Optional[str]) -> None:
    """Import entries from a CSV file at PATH.

    Entries whose ID already exists in the database are skipped.

    \b
    Examples:
      pnljournal import trade_journal_export.csv
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    try:
        parsed = import_entries(path)
    except CsvImportError as e:
        error_panel(f"Failed to import {path}:\n\n{e}")
        raise SystemExit(1)

    new_entries = []
    seen_ids = set()
    for entry in parsed:
        if entry.id in seen_ids or store.get_entry(entry.id) is not None:
            continue
        seen_ids.add(entry.id)
        new_entries.append(entry)

    imported = store.add_entries(selected.name, new_entries)
    skipped = len(parsed) - imported

    console.print(Panel(
        f"Imported: {imported} entries\n"
        f"Skipped:  {skipped} (already in journal)",
        title=f"[bold cyan]Import[/bold cyan] [dim]({selected.name})[/dim]",
        border_style="cyan",
    ))


@click.command()
@click.option("--count", type=click.IntRange(min=1), default=250, help="Number of entries (default: 250).")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible data.")
@journal_option
def sample(count: int, seed: Optional[int], journal_name: Optional[str]) -> None:
    """Fill a journal with generated sample entries.

    \b
    Examples:
      pnljournal sample
      pnljournal sample --count 60 --seed 7 -j Demo
    """
    config = get_config()
    store = get_data_store(config)
    selected = resolve_journal(store, config, journal_name)

    generated = generate_sample_entries(
        count,
        capital_deployed=selected.initial_capital,
        seed=seed,
    )
    added = store.add_entries(selected.name, generated)

    console.print(f"[green]✓ Added {added} sample entries to '{selected.name}'[/green]")
