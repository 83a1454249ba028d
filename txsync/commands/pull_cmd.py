"""Pull translations from Transifex into the output directory."""
from __future__ import annotations

from typing import Optional

import typer

from txsync import ui
from txsync.core.config_service import TRANSFORMS
from txsync.error_handler import handle_errors


@handle_errors
def pull(
    locales: list[str] = typer.Option(
        None, "--locale", "-l",
        help="Locale to pull (repeatable, or comma-separated). Defaults to the configured list.",
    ),
    output_dir: str = typer.Option(None, "--output-dir", "-o", help="Directory for <locale>.json files"),
    transform: str = typer.Option(
        None, "--transform", "-t",
        help=f"Post-download transform: {', '.join(TRANSFORMS)}",
    ),
    nest_locale: Optional[bool] = typer.Option(
        None, "--nest-locale/--no-nest-locale",
        help="Wrap converted documents under their locale key",
    ),
):
    """[bold cyan]Pull[/bold cyan] every locale from Transifex and write it to disk."""
    from pathlib import Path

    from txsync.core.config_service import get_config_service, split_list
    from txsync.core.sync_service import SyncService
    from txsync.transifex import TransifexClient

    config = get_config_service()
    selected = split_list(",".join(locales)) if locales else config.get_locales()
    target_dir = Path(output_dir).expanduser() if output_dir else config.get_output_dir()
    transform = transform or config.get_transform()
    if nest_locale is None:
        nest_locale = bool(config.get("output.nest_locale", False))

    client = TransifexClient.from_config()
    service = SyncService(client)

    ui.section_divider("Retrieve translations from Transifex")
    result = service.pull(
        selected,
        target_dir,
        transform=transform,
        nest_locale=nest_locale,
        on_locale=ui.step,
    )

    ui.sync_summary(result)
    if ui.is_json():
        return
    if result.changed:
        ui.success_panel(
            "Translations updated",
            f"{len(result.changed_locales)} of {len(result.locales)} locale(s) changed: "
            f"{', '.join(result.changed_locales)}",
        )
    else:
        ui.console.print("[dim]No changes.[/dim]")
