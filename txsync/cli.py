#!/usr/bin/env python3
"""
txsync: pull translations from Transifex and write one sorted JSON file
per locale, ready to be committed.
"""
import os

import typer

from txsync import ui

app = typer.Typer(
    name="txsync",
    help="Sync Transifex translations into per-locale JSON files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Import subcommands
from txsync.commands import config_cmd, convert_cmd, pull_cmd

app.command("pull", rich_help_panel="Sync")(pull_cmd.pull)
app.command("convert", rich_help_panel="Sync")(convert_cmd.convert)
app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Settings")


@app.callback()
def main_callback(
    plain: bool = typer.Option(False, "--plain", help="Plain text output (no colors or panels)."),
    json_output: bool = typer.Option(False, "--json", help="Machine-readable JSON output."),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging and full tracebacks."),
):
    """Sync Transifex translations into per-locale JSON files."""
    if debug:
        os.environ["TXSYNC_DEBUG"] = "1"
    ui.set_plain_mode(plain or os.environ.get("TXSYNC_PLAIN", "").lower() in ("1", "true", "yes"))
    ui.set_json_mode(json_output)
    ui.configure_logging(debug=debug or os.environ.get("TXSYNC_DEBUG", "").lower() in ("1", "true", "yes"))


if __name__ == "__main__":
    app()
