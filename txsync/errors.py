"""Custom exception hierarchy for txsync.

All txsync-specific exceptions derive from TxSyncError. Each exception
carries an optional ``context`` dict with structured metadata
(locale, HTTP status, file path, etc.) that the CLI error handler can
render.

Exception hierarchy::

    TxSyncError
    ├── MalformedCatalogError
    ├── TransifexError
    │   ├── TransifexAuthError
    │   ├── DownloadRequestError
    │   └── DownloadTimeoutError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class TxSyncError(Exception):
    """Base class for all txsync exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Catalog Errors ─────────────────────────────────────────────────

class MalformedCatalogError(TxSyncError):
    """Raised when catalog text is not valid gettext."""

    def __init__(self, detail: str, locale: str = "", line: Optional[int] = None):
        msg = "Malformed gettext catalog"
        if locale:
            msg += f" for locale '{locale}'"
        if line is not None:
            msg += f" (line {line})"
        super().__init__(
            f"{msg}: {detail}",
            context={"locale": locale, "line": line},
        )


# ── Transifex Errors ───────────────────────────────────────────────

class TransifexError(TxSyncError):
    """Base class for Transifex API errors."""

    def __init__(
        self,
        message: str,
        locale: str = "",
        status: Optional[int] = None,
        context: Optional[dict] = None,
    ):
        ctx = {"locale": locale, "status": status}
        if context:
            ctx.update(context)
        super().__init__(message, context=ctx)


class TransifexAuthError(TransifexError):
    """Raised when the API token is missing."""
    pass


class DownloadRequestError(TransifexError):
    """Raised when the async download job could not be created."""
    pass


class DownloadTimeoutError(TransifexError):
    """Raised when the download job never reports a file location."""
    pass


# ── Configuration Errors ───────────────────────────────────────────

class ConfigError(TxSyncError):
    """Raised when configuration is invalid or missing."""
    pass
