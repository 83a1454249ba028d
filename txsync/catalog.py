"""Gettext catalog parsing.

Turns the text of a ``.po`` file into a :class:`TranslationCatalog`: a
read-only mapping of context -> msgid -> plural forms. The empty string
stands for "no context".
"""
from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

import polib

from txsync.errors import MalformedCatalogError

logger = logging.getLogger("txsync.catalog")

NO_CONTEXT = ""

_KEYWORD_RE = re.compile(r'^(?P<keyword>msgctxt|msgid_plural|msgid|msgstr\[\d+\]|msgstr)\s*(?P<string>".*)$')
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"\s*')


class TranslationCatalog:
    """Parsed translations grouped by message context."""

    def __init__(self, translations: dict[str, dict[str, list[str]]], metadata: Optional[dict] = None):
        self._translations = MappingProxyType(
            {ctx: MappingProxyType(dict(msgs)) for ctx, msgs in translations.items()}
        )
        self.metadata: dict[str, str] = dict(metadata or {})

    @property
    def translations(self) -> Mapping[str, Mapping[str, list[str]]]:
        return self._translations

    def contexts(self) -> list[str]:
        return list(self._translations)

    def entries(self) -> Iterator[tuple[str, str, list[str]]]:
        """Yield ``(context, msgid, msgstrs)`` for every message."""
        for context, messages in self._translations.items():
            for msgid, msgstrs in messages.items():
                yield context, msgid, msgstrs

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._translations.values())

    def __repr__(self) -> str:
        return f"TranslationCatalog(contexts={len(self._translations)}, messages={len(self)})"


def _plural_forms(entry: polib.POEntry) -> list[str]:
    """Return an entry's translated strings in plural-index order."""
    if entry.msgid_plural:
        return [entry.msgstr_plural[i] for i in sorted(entry.msgstr_plural)]
    return [entry.msgstr]


def _check_syntax(text: str, locale: str) -> None:
    """Validate line structure that polib accepts without complaint.

    Unterminated strings and mismatched msgstr shapes raise here instead of
    being truncated or dropped by polib.
    """
    state = None  # None, "msgid" (awaiting msgstr) or "msgstr"
    plural = False
    msgid_line = 0
    for lineno, raw in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith('"'):
            if not _STRING_RE.fullmatch(line):
                raise MalformedCatalogError("unterminated string", locale=locale, line=lineno)
            continue

        match = _KEYWORD_RE.match(line)
        if match is None:
            raise MalformedCatalogError(f"unexpected line {line!r}", locale=locale, line=lineno)
        if not _STRING_RE.fullmatch(match.group("string")):
            raise MalformedCatalogError("unterminated string", locale=locale, line=lineno)

        keyword = match.group("keyword")
        if keyword in ("msgctxt", "msgid") and state == "msgid":
            raise MalformedCatalogError("msgid without msgstr", locale=locale, line=msgid_line)
        if keyword == "msgctxt":
            state = None
        elif keyword == "msgid":
            state, plural, msgid_line = "msgid", False, lineno
        elif keyword == "msgid_plural":
            if state != "msgid":
                raise MalformedCatalogError("msgid_plural without msgid", locale=locale, line=lineno)
            plural = True
        else:
            if state is None:
                raise MalformedCatalogError(f"{keyword} without msgid", locale=locale, line=lineno)
            if keyword == "msgstr" and plural:
                raise MalformedCatalogError("plural entry needs indexed msgstr[N]", locale=locale, line=lineno)
            if keyword != "msgstr" and not plural:
                raise MalformedCatalogError(f"{keyword} without msgid_plural", locale=locale, line=lineno)
            state = "msgstr"

    if state == "msgid":
        raise MalformedCatalogError("msgid without msgstr", locale=locale, line=msgid_line)


def parse_catalog(text: str, locale: str = "") -> TranslationCatalog:
    """Parse gettext catalog text.

    Obsolete (``#~``) entries are ignored. Fuzzy entries are kept. When the
    same (context, msgid) pair appears twice the later entry wins.

    Raises:
        MalformedCatalogError: If the text is not valid gettext.
    """
    if not text.strip():
        return TranslationCatalog({})
    _check_syntax(text, locale)
    try:
        po = polib.pofile(text)
    except (OSError, ValueError) as e:
        raise MalformedCatalogError(str(e), locale=locale) from e

    translations: dict[str, dict[str, list[str]]] = {}
    for entry in po:
        if entry.obsolete:
            continue
        context = entry.msgctxt or NO_CONTEXT
        translations.setdefault(context, {})[entry.msgid] = _plural_forms(entry)

    logger.debug(
        "Parsed catalog%s: %d entries in %d contexts",
        f" for {locale}" if locale else "",
        sum(len(m) for m in translations.values()),
        len(translations),
    )
    return TranslationCatalog(translations, metadata=po.metadata)
