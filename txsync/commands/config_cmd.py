"""CLI commands for configuration management."""
from __future__ import annotations

import typer

from txsync import ui
from txsync.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage txsync configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _settings_table(title: str, values: dict):
    from rich.table import Table

    table = Table(title=title, show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, val in values.items():
        if isinstance(val, list):
            val = ", ".join(val)
        table.add_row(key, str(val) if val not in ("", None, []) else "[dim]not set[/dim]")
    return table


@app.command()
@handle_errors
def show():
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from txsync.core.config_service import get_config_service

    svc = get_config_service()
    info = svc.show()

    if ui.is_json():
        ui.print_json_output(info)
        return

    console = ui.console
    sources = info["sources"]
    console.print(Panel(
        f"Global:  {sources['global_config'] or '[dim]not found[/dim]'}\n"
        f"Project: {sources['project_config'] or '[dim]not found[/dim]'}",
        title="Config Sources",
        border_style="cyan",
    ))

    resolved = info["resolved"]
    console.print(_settings_table("Transifex", resolved.get("transifex", {})))
    console.print(_settings_table("Output", resolved.get("output", {})))
    console.print(_settings_table("Locales", {"locales": resolved.get("locales", [])}))


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Config key in dotted notation (e.g. output.transform)"),
    value: str = typer.Argument(..., help="Value to set (comma-separated for locales)"),
):
    """Set a global configuration value."""
    from txsync.core.config_service import get_config_service

    svc = get_config_service()
    svc.set_global(key, value)
    shown = "********" if key == "transifex.token" else value
    ui.console.print(f"[green]Set[/green] {key} = {shown}")


@app.command()
@handle_errors
def init():
    """Create a .txsync.toml project config in the current directory."""
    from txsync.core.config_service import get_config_service

    svc = get_config_service()
    path = svc.init_project_config()
    ui.console.print(f"[green]Created project config:[/green] {path}")


@app.command()
@handle_errors
def path():
    """Show all configuration file locations."""
    from rich.table import Table
    from txsync.core.config_service import get_config_service

    svc = get_config_service()
    paths = svc.config_paths()

    table = Table(title="Config Paths", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Location")
    for name, location in paths.items():
        table.add_row(name, location)
    ui.console.print(table)
