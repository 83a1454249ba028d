"""Convert a local gettext catalog into canonical JSON."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from txsync import ui
from txsync.error_handler import handle_errors
from txsync.errors import ConfigError

logger = logging.getLogger("txsync.commands.convert")


@handle_errors
def convert(
    po_file: Path = typer.Argument(..., help="Path to a .po file ('-' reads stdin)"),
    locale: str = typer.Option(..., "--locale", "-l", help="Locale of the catalog (e.g. fr)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
    nest_locale: bool = typer.Option(False, "--nest-locale", help="Wrap the document under its locale key"),
):
    """[bold cyan]Convert[/bold cyan] a gettext catalog to sorted nested JSON."""
    from txsync.normalizer import normalize

    if str(po_file) == "-":
        text = sys.stdin.read()
    else:
        if not po_file.is_file():
            raise ConfigError(f"File not found: {po_file}", context={"file": str(po_file)})
        text = po_file.read_text(encoding="utf-8")

    content = normalize(text, locale.strip(), nest_locale=nest_locale)

    if output is None:
        sys.stdout.write(content)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", output)
    if ui.is_json():
        ui.print_json_output({"locale": locale, "path": str(output), "size": len(content.encode("utf-8"))})
    else:
        ui.success_panel("Converted", f"{po_file} -> {output}")
