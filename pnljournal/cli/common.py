"""Shared helpers for PnL Journal CLI commands."""

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from pnljournal.config import ConfigError, get_db_path, load_config
from pnljournal.db.store import DataStore, JournalNotFoundError
from pnljournal.models import Journal

logger = logging.getLogger(__name__)

console = Console()


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def get_config() -> dict:
    """Load configuration, exiting with an error panel if it is broken."""
    try:
        return load_config()
    except ConfigError as e:
        error_panel(f"{e}\n\nRun [cyan]pnljournal init[/cyan] to recreate it.", "Configuration Error")
        raise SystemExit(1)


def get_data_store(config: dict) -> DataStore:
    """Get the data store instance."""
    return DataStore(get_db_path(config))


def resolve_journal(store: DataStore, config: dict, name: Optional[str]) -> Journal:
    """Find the journal a command operates on.

    The configured default journal is created on first use; any other
    name must already exist.
    """
    default_name = config["journal"]["default"]
    journal_name = name or default_name

    try:
        return store.get_journal(journal_name)
    except JournalNotFoundError:
        if journal_name != default_name:
            error_panel(
                f"Journal '{journal_name}' not found.\n\n"
                f"Create it with [cyan]pnljournal journal create \"{journal_name}\"[/cyan]."
            )
            raise SystemExit(1)

    logger.info("Creating default journal %s", default_name)
    return store.create_journal(default_name, config["journal"]["initial_capital"])
