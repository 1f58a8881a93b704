"""CLI commands for PnL Journal.

This package provides the command-line interface for PnL Journal:
journal management, entry logging, analytics dashboards and CSV
export/import.
"""

from pnljournal.cli.main import cli, main

__all__ = ["cli", "main"]
