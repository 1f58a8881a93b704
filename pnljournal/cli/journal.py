"""Journal management commands for PnL Journal CLI.

Handles config initialisation and creating, listing, deleting and
re-capitalising named journals.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from pnljournal.cli.common import console, error_panel, get_config, get_data_store
from pnljournal.config import create_template_config, get_config_path
from pnljournal.db.store import StoreError
from pnljournal.formatting import format_currency_precise


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Write a template configuration file.

    \b
    Examples:
      pnljournal init
      pnljournal init --force
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        return

    path = create_template_config(config_path)
    console.print(Panel(
        f"Configuration written to [cyan]{path}[/cyan]\n\n"
        "Edit [bold]journal.initial_capital[/bold] before logging entries.",
        title="[bold green]Initialized[/bold green]",
        border_style="green",
    ))


@click.group()
def journal() -> None:
    """Manage journals.

    Each journal has its own starting capital and entry list.

    \b
    Examples:
      pnljournal journal create Options --capital 200000
      pnljournal journal list
      pnljournal journal capital Options 250000
      pnljournal journal delete Options
    """
    pass


@journal.command("create")
@click.argument("name")
@click.option("--capital", type=float, default=None, help="Starting capital (default from config).")
def create_journal(name: str, capital: Optional[float]) -> None:
    """Create a journal called NAME."""
    config = get_config()
    store = get_data_store(config)
    initial_capital = capital if capital is not None else config["journal"]["initial_capital"]

    try:
        created = store.create_journal(name, initial_capital)
    except (StoreError, ValidationError) as e:
        error_panel(f"Failed to create journal:\n\n{e}")
        raise SystemExit(1)

    console.print(
        f"[green]✓ Created journal '{created.name}' with capital "
        f"{format_currency_precise(created.initial_capital)}[/green]"
    )


@journal.command("list")
def list_journals() -> None:
    """List all journals."""
    config = get_config()
    store = get_data_store(config)
    journals = store.get_journals()

    if not journals:
        console.print(Panel(
            "[dim]No journals yet[/dim]\n\n"
            "[dim]Add an entry or run 'pnljournal journal create NAME'[/dim]",
            title="[bold]Journals[/bold]",
            border_style="dim",
        ))
        return

    default_name = config["journal"]["default"]
    table = Table(title="Journals", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Initial Capital", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Created", style="dim")

    for item in journals:
        name = f"{item.name} [dim](default)[/dim]" if item.name == default_name else item.name
        table.add_row(
            name,
            format_currency_precise(item.initial_capital),
            str(len(store.get_entries(item.name))),
            item.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@journal.command("capital")
@click.argument("name")
@click.argument("amount", type=float)
def set_capital(name: str, amount: float) -> None:
    """Set the starting capital of journal NAME to AMOUNT."""
    config = get_config()
    store = get_data_store(config)

    try:
        updated = store.update_initial_capital(name, amount)
    except (StoreError, ValidationError) as e:
        error_panel(f"Failed to update capital:\n\n{e}")
        raise SystemExit(1)

    console.print(
        f"[green]✓ Journal '{updated.name}' now starts with "
        f"{format_currency_precise(updated.initial_capital)}[/green]"
    )


@journal.command("delete")
@click.argument("name")
@click.option("--yes", is_flag=True, default=False, help="Skip confirmation prompt.")
def delete_journal(name: str, yes: bool) -> None:
    """Delete journal NAME and all of its entries."""
    config = get_config()
    store = get_data_store(config)

    if not yes:
        if not click.confirm(f"Delete journal '{name}' and all of its entries?"):
            console.print("[dim]Cancelled[/dim]")
            return

    try:
        store.delete_journal(name)
    except StoreError as e:
        error_panel(str(e))
        raise SystemExit(1)

    console.print(f"[green]✓ Deleted journal '{name}'[/green]")
