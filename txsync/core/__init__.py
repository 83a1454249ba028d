"""Service layer for txsync.

All services return typed dataclasses. Services never import from txsync.ui,
txsync.cli, or typer. Consumer layers (CLI) handle presentation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LocaleResult:
    """Outcome of writing one locale file."""

    locale: str
    path: Path
    changed: bool
    size: int
    transform: str = "none"

    def to_dict(self) -> dict:
        return {
            "locale": self.locale,
            "path": str(self.path),
            "changed": self.changed,
            "size": self.size,
            "transform": self.transform,
        }


@dataclass
class SyncResult:
    """Outcome of a full pull across all locales."""

    output_dir: Path
    transform: str
    locales: list[LocaleResult] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(r.changed for r in self.locales)

    @property
    def changed_locales(self) -> list[str]:
        return [r.locale for r in self.locales if r.changed]

    def to_dict(self) -> dict:
        return {
            "output_dir": str(self.output_dir),
            "transform": self.transform,
            "changed": self.changed,
            "locales": [r.to_dict() for r in self.locales],
        }
