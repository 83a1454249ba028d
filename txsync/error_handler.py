"""Unified CLI error handler for txsync commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback

import typer
from rich.markup import escape

from txsync import ui
from txsync.errors import (
    ConfigError,
    MalformedCatalogError,
    TransifexAuthError,
    TransifexError,
    TxSyncError,
)

logger = logging.getLogger("txsync.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via TXSYNC_DEBUG env var."""
    return os.environ.get("TXSYNC_DEBUG", "").lower() in ("1", "true", "yes")


def _render_txsync_error(e: TxSyncError) -> None:
    """Render a TxSyncError with Rich formatting and context."""
    if ui.is_json():
        ui.print_json_output({"error": str(e), "type": type(e).__name__, "context": e.context})
        return

    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)

    # Context details (only in debug mode)
    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {value}" for key, value in e.context.items() if value
        ]
        if context_parts:
            console.print("[dim]Context:[/dim]")
            for part in context_parts:
                console.print(part)

    # Actionable hints based on error type
    if isinstance(e, TransifexAuthError):
        console.print("[dim]Set TRANSIFEX_TOKEN (or TX_TOKEN) in the environment or a .env file.[/dim]")
    elif isinstance(e, TransifexError):
        console.print("[dim]No translation files were written. Run 'txsync config show' to check the Transifex settings.[/dim]")
    elif isinstance(e, MalformedCatalogError):
        console.print("[dim]No translation files were written. The downloaded catalog is not valid gettext.[/dim]")
    elif isinstance(e, ConfigError):
        console.print("[dim]Run 'txsync config path' to see which config files are read.[/dim]")


def handle_errors(func):
    """Decorator that catches TxSyncError and renders formatted CLI output.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TxSyncError as e:
            logger.debug("Command failed", exc_info=True)
            _render_txsync_error(e)
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]", highlight=False)
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            if _debug_mode():
                ui.console.print(f"\n[dim]{escape(traceback.format_exc())}[/dim]")
            else:
                ui.console.print("[dim]Set TXSYNC_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
