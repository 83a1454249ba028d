"""Gettext -> nested JSON conversion.

A message-id maps either to its translated string, or, once it is seen
under a non-empty context, to a ``{context: translation}`` dict where the
no-context translation sits under ``$$noContext``::

    {
      "Save": {
        "$$noContext": "Enregistrer",
        "menu": "Sauver"
      }
    }

Untranslated entries and entries translated to themselves are left out.
Keys are sorted at every level so the output is stable across runs.

A real context literally named ``$$noContext`` would share the slot of the
no-context translation. Upstream catalogs are not expected to use it.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Union

from txsync.catalog import NO_CONTEXT, TranslationCatalog, parse_catalog

logger = logging.getLogger("txsync.normalizer")

NO_CONTEXT_KEY = "$$noContext"
JSON_INDENT = 2

LocaleValue = Union[str, dict[str, str]]


class LocaleDocument:
    """Translations for one locale, keyed by message-id.

    Values are stored as plain strings until a second context is recorded
    for the same message-id, at which point they are promoted to a context
    dict.
    """

    def __init__(self):
        self._values: dict[str, LocaleValue] = {}

    def record(self, msgid: str, context: str, translation: str) -> None:
        """Store ``translation`` for ``msgid`` under ``context``."""
        current = self._values.get(msgid)
        if context == NO_CONTEXT:
            if isinstance(current, dict):
                current[NO_CONTEXT_KEY] = translation
            else:
                self._values[msgid] = translation
            return

        if current is None:
            current = {}
        elif isinstance(current, str):
            current = {NO_CONTEXT_KEY: current}
        current[context] = translation
        self._values[msgid] = current

    def get(self, msgid: str) -> Optional[LocaleValue]:
        return self._values.get(msgid)

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> dict[str, LocaleValue]:
        """Return a key-sorted copy of the document."""
        return canonicalize(self._values)


def canonicalize(mapping: dict[str, Any]) -> dict[str, Any]:
    """Recursively rebuild ``mapping`` with keys in code-point order."""
    return {
        key: canonicalize(value) if isinstance(value, dict) else value
        for key, value in sorted(mapping.items())
    }


def _pick_translation(msgid: str, msgstrs: list[str]) -> Optional[str]:
    """Return the singular form worth persisting, or None to skip it."""
    if not msgstrs:
        return None
    msgstr = msgstrs[0]
    if not msgstr:
        return None
    stripped = msgstr.strip()
    if not stripped or stripped == msgid:
        return None
    return msgstr


def _source_msgids(messages: Mapping[str, list[str]]) -> dict[str, str]:
    """Map each stripped message-id to the raw message-id that supplies it.

    An entry whose raw message-id is already stripped wins. Otherwise the
    smallest raw variant is used, so entry order never matters.
    """
    sources: dict[str, str] = {}
    for raw_msgid in messages:
        msgid = raw_msgid.strip()
        if not msgid:
            # gettext header entry
            continue
        if msgid in messages:
            sources[msgid] = msgid
        elif msgid not in sources or raw_msgid < sources[msgid]:
            sources[msgid] = raw_msgid
    return sources


def build_locale_document(catalog: TranslationCatalog) -> LocaleDocument:
    """Apply the skip and merge rules to every catalog entry."""
    document = LocaleDocument()
    skipped = 0
    for context, messages in catalog.translations.items():
        for msgid, raw_msgid in _source_msgids(messages).items():
            translation = _pick_translation(msgid, messages[raw_msgid])
            if translation is None:
                skipped += 1
                continue
            document.record(msgid, context, translation)

    logger.debug("Kept %d message-ids, skipped %d empty or identical entries", len(document), skipped)
    return document


def dumps(data: dict[str, Any]) -> str:
    """Serialize a document the way it is written to disk."""
    return json.dumps(canonicalize(data), ensure_ascii=False, indent=JSON_INDENT) + "\n"


def normalize(catalog_text: str, locale: str, nest_locale: bool = False) -> str:
    """Convert gettext catalog text into canonical JSON for ``locale``.

    Args:
        catalog_text: Full contents of a ``.po`` file.
        locale: Locale the catalog belongs to.
        nest_locale: Wrap the document as ``{locale: {...}}``. An empty
            document is still emitted as ``{}``.

    Raises:
        MalformedCatalogError: If ``catalog_text`` is not valid gettext.
    """
    catalog = parse_catalog(catalog_text, locale=locale)
    document = build_locale_document(catalog).to_dict()
    if nest_locale and document:
        document = {locale: document}
    return dumps(document)
