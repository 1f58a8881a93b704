"""Main CLI entry point for PnL Journal.

Defines the root click group; command modules load lazily.
"""

import importlib
import logging

import click


class LazyGroup(click.Group):
    """A click Group whose subcommands are imported on first use.

    Each lazy subcommand maps to a ``"module:attribute"`` target, so
    ``pnljournal --help`` never imports the analytics or storage code.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        target = self.lazy_subcommands.get(cmd_name)
        if target is None or cmd_name in self.commands:
            return super().get_command(ctx, cmd_name)

        module_path, _, attr_name = target.partition(":")
        command = getattr(importlib.import_module(module_path), attr_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(f"'{target}' is not a click command")

        self.add_command(command, cmd_name)
        return command


LAZY_SUBCOMMANDS = {
    "init": "pnljournal.cli.journal:init",
    "journal": "pnljournal.cli.journal:journal",
    "add": "pnljournal.cli.entries:add",
    "edit": "pnljournal.cli.entries:edit",
    "delete": "pnljournal.cli.entries:delete",
    "clear": "pnljournal.cli.entries:clear",
    "entries": "pnljournal.cli.entries:entries",
    "summary": "pnljournal.cli.summary:summary",
    "today": "pnljournal.cli.summary:today",
    "month": "pnljournal.cli.summary:month",
    "export": "pnljournal.cli.data:export_csv",
    "import": "pnljournal.cli.data:import_csv",
    "sample": "pnljournal.cli.data:sample",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="pnljournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """PnL Journal - track daily trading P&L and performance analytics.

    Log one entry per trading day and review equity curve, drawdown,
    win rate, streaks and monthly returns in the terminal.

    \b
    Quick Start:
      pnljournal init                                   # Write config
      pnljournal add --gross 12500 --charges 430        # Log today
      pnljournal summary                                # Dashboard
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
