"""Shared UI theme, console, and display helpers for txsync."""

import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

# ── Output Mode State ──
_plain_mode: bool = False
_json_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels, ASCII only)."""
    global _plain_mode, console
    _plain_mode = enabled
    if enabled:
        console = Console(theme=TXSYNC_THEME, no_color=True, highlight=False)
    else:
        console = Console(theme=TXSYNC_THEME)


def set_json_mode(enabled: bool = True) -> None:
    """Enable or disable JSON output mode."""
    global _json_mode
    _json_mode = enabled


def is_json() -> bool:
    """Check if JSON output mode is active."""
    return _json_mode


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def configure_logging(debug: bool = False) -> None:
    """Route txsync loggers to stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True, no_color=_plain_mode),
        show_path=False,
        markup=False,
    )
    root = logging.getLogger("txsync")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.WARNING)


# ── Theme ──
TXSYNC_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "locale": "bold cyan",
    "locale.changed": "green",
    "locale.unchanged": "dim",
    "muted": "dim",
})

console = Console(theme=TXSYNC_THEME)

# ── Status Icons ──
ICONS = {
    "changed": "[green]✔[/green]",        # checkmark
    "unchanged": "[dim]○[/dim]",          # empty circle
    "active": "[cyan]▶[/cyan]",           # play triangle
}

# ASCII equivalents for plain mode
PLAIN_ICONS = {
    "changed": "[OK]",
    "unchanged": "[ ]",
    "active": "[>>]",
}


def status_icon(status: str) -> str:
    """Get the appropriate icon for a locale status."""
    if _plain_mode:
        return PLAIN_ICONS.get(status, PLAIN_ICONS["unchanged"])
    return ICONS.get(status, ICONS["unchanged"])


def step(message: str) -> None:
    """Print a progress line."""
    if _json_mode:
        return
    if _plain_mode:
        print(f"  > {message}")
        return
    console.print(f"  {ICONS['active']} {message}")


def sync_summary(result) -> None:
    """Display the per-locale outcome of a pull."""
    if _json_mode:
        print_json_output(result.to_dict())
        return

    if _plain_mode:
        for r in result.locales:
            state = "changed" if r.changed else "unchanged"
            print(f"  {status_icon(state)} {r.locale}: {r.path} ({state})")
        print()
        return

    table = Table(title="Translations", show_header=True, expand=False)
    table.add_column("", justify="center")
    table.add_column("Locale", style="locale")
    table.add_column("File")
    table.add_column("Bytes", justify="right")
    table.add_column("Status")
    for r in result.locales:
        state = "changed" if r.changed else "unchanged"
        table.add_row(
            status_icon(state),
            r.locale,
            str(r.path),
            f"{r.size:,}",
            f"[locale.{state}]{state}[/locale.{state}]",
        )
    console.print(table)


def success_panel(title: str, content=None):
    """Display a success panel."""
    if _json_mode:
        return
    if _plain_mode:
        print(f"OK: {title}")
        if content:
            print(f"  {content}")
        return

    console.print(Panel(
        content or "",
        title=f"[bold green]{title}[/bold green]",
        border_style="green",
    ))


def section_divider(text: str = ""):
    """Print a subtle section divider."""
    if _json_mode:
        return
    if _plain_mode:
        if text:
            print(f"\n-- {text} --")
        else:
            print()
        return

    if text:
        console.print(f"\n[dim]── {text} ──[/dim]")
    else:
        console.print()
