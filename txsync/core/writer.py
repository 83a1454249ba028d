"""Per-locale output files."""
from __future__ import annotations

import logging
from pathlib import Path

from txsync.core import LocaleResult

logger = logging.getLogger("txsync.core.writer")


def locale_path(output_dir: Path, locale: str) -> Path:
    return Path(output_dir) / f"{locale}.json"


def write_locale_file(output_dir: Path, locale: str, content: str, transform: str = "none") -> LocaleResult:
    """Write ``content`` to ``<output_dir>/<locale>.json``.

    The file is rewritten even when unchanged; ``changed`` reports whether
    its bytes differ from what was there before.
    """
    path = locale_path(output_dir, locale)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = content.encode("utf-8")
    previous = path.read_bytes() if path.is_file() else None
    path.write_bytes(data)

    changed = previous != data
    logger.debug("Wrote %s (%d bytes, %s)", path, len(data), "changed" if changed else "unchanged")
    return LocaleResult(
        locale=locale,
        path=path,
        changed=changed,
        size=len(data),
        transform=transform,
    )
