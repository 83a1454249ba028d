"""Sync service - pulls every locale from Transifex into the output directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from txsync.core import SyncResult
from txsync.core.config_service import TRANSFORMS, split_list
from txsync.core.writer import write_locale_file
from txsync.errors import ConfigError
from txsync.normalizer import normalize

logger = logging.getLogger("txsync.core.sync")


def apply_transform(content: str, locale: str, transform: str, nest_locale: bool = False) -> str:
    """Turn a downloaded resource body into the text written to disk."""
    if transform == "po-to-json":
        return normalize(content, locale, nest_locale=nest_locale)
    if transform == "none":
        return content
    raise ConfigError(
        f"Unknown transform '{transform}'. Choose from: {', '.join(TRANSFORMS)}",
        context={"transform": transform},
    )


class SyncService:
    """Fetches, converts and writes translations for a set of locales."""

    def __init__(self, client):
        self.client = client

    def pull(
        self,
        locales: list[str],
        output_dir: Path,
        transform: str = "none",
        nest_locale: bool = False,
        on_locale: Optional[Callable[[str], None]] = None,
    ) -> SyncResult:
        """Fetch and write every locale.

        All locales are downloaded and converted before any file is
        written, so a failure on one locale leaves the output directory
        untouched.

        Args:
            locales: Locale codes; blanks and duplicates are dropped.
            output_dir: Directory receiving ``<locale>.json`` files.
            transform: ``none`` or ``po-to-json``.
            nest_locale: Wrap converted documents under their locale key.
            on_locale: Optional callback invoked with each locale before
                it is fetched.

        Raises:
            ConfigError: If no locales are given or the transform is unknown.
            TxSyncError: If any locale fails to download or convert.
        """
        if transform not in TRANSFORMS:
            raise ConfigError(
                f"Unknown transform '{transform}'. Choose from: {', '.join(TRANSFORMS)}",
                context={"transform": transform},
            )
        locales = list(dict.fromkeys(split_list(locales)))
        if not locales:
            raise ConfigError("No locales configured. Pass --locale or set TXSYNC_LOCALES.")

        contents: dict[str, str] = {}
        for locale in locales:
            if on_locale:
                on_locale(locale)
            logger.info("Retrieving %s from Transifex", locale)
            body = self.client.fetch_translation(locale)
            contents[locale] = apply_transform(body, locale, transform, nest_locale=nest_locale)

        result = SyncResult(output_dir=Path(output_dir), transform=transform)
        for locale, content in contents.items():
            result.locales.append(
                write_locale_file(output_dir, locale, content, transform=transform)
            )

        if result.changed:
            logger.info("Updated locales: %s", ", ".join(result.changed_locales))
        else:
            logger.info("No changes")
        return result
