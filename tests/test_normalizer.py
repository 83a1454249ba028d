"""Tests for the gettext -> nested JSON conversion rules."""

import json

import pytest

from txsync.catalog import TranslationCatalog
from txsync.errors import MalformedCatalogError
from txsync.normalizer import (
    NO_CONTEXT_KEY,
    LocaleDocument,
    build_locale_document,
    canonicalize,
    dumps,
    normalize,
)


def _po(*entries):
    """Build catalog text from (context, msgid, msgstr) triples."""
    blocks = []
    for context, msgid, msgstr in entries:
        lines = []
        if context:
            lines.append(f'msgctxt "{context}"')
        lines.append(f'msgid "{msgid}"')
        lines.append(f'msgstr "{msgstr}"')
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


class TestNormalizeExamples:
    def test_context_merge(self):
        text = _po(("", "Save", "Enregistrer"), ("menu", "Save", "Sauver"))
        assert json.loads(normalize(text, "fr")) == {
            "Save": {"$$noContext": "Enregistrer", "menu": "Sauver"},
        }

    def test_identity_translation_elided(self):
        assert normalize(_po(("", "OK", "OK")), "fr") == "{}\n"

    def test_sample_catalog(self, sample_po):
        assert json.loads(normalize(sample_po, "fr")) == {
            "Delete": "Supprimer",
            "Save": {"$$noContext": "Enregistrer", "menu": "Sauver"},
            "file": "fichier",
        }

    def test_exact_output_format(self):
        text = _po(("", "Save", "Enregistrer"), ("menu", "Save", "Sauver"))
        assert normalize(text, "fr") == (
            "{\n"
            '  "Save": {\n'
            '    "$$noContext": "Enregistrer",\n'
            '    "menu": "Sauver"\n'
            "  }\n"
            "}\n"
        )

    def test_non_ascii_written_verbatim(self):
        out = normalize(_po(("", "Welcome", "Добро пожаловать")), "ru")
        assert "Добро пожаловать" in out

    def test_idempotent(self, sample_po):
        assert normalize(sample_po, "fr") == normalize(sample_po, "fr")

    def test_malformed_propagates(self):
        with pytest.raises(MalformedCatalogError):
            normalize('msgid "a"\nmsgstr "b"\nnonsense line\n', "fr")


class TestElision:
    def test_empty_translation(self):
        assert normalize(_po(("", "Cancel", "")), "fr") == "{}\n"

    def test_whitespace_translation(self):
        assert normalize(_po(("", "Cancel", "   ")), "fr") == "{}\n"

    def test_identity_after_trim(self):
        assert normalize(_po(("", "OK", "  OK ")), "fr") == "{}\n"

    def test_whitespace_msgid_skipped(self):
        catalog = TranslationCatalog({"": {"   ": ["quelque chose"]}})
        assert len(build_locale_document(catalog)) == 0

    def test_no_candidates_skipped(self):
        catalog = TranslationCatalog({"": {"Hello": []}})
        assert len(build_locale_document(catalog)) == 0

    def test_keeps_untrimmed_value(self):
        catalog = TranslationCatalog({"": {" Hello ": ["  Bonjour "]}})
        assert build_locale_document(catalog).to_dict() == {"Hello": "  Bonjour "}

    def test_padded_msgid_variant_does_not_override_exact(self):
        exact = ("", "Hello", "Bonjour")
        padded = ("", "Hello ", "Salut")
        first = normalize(_po(exact, padded), "fr")
        second = normalize(_po(padded, exact), "fr")
        assert first == second
        assert json.loads(first) == {"Hello": "Bonjour"}

    def test_padded_variants_pick_smallest_raw_msgid(self):
        forward = TranslationCatalog({"": {" Hello": ["A"], "Hello ": ["B"]}})
        backward = TranslationCatalog({"": {"Hello ": ["B"], " Hello": ["A"]}})
        assert build_locale_document(forward).to_dict() == {"Hello": "A"}
        assert build_locale_document(backward).to_dict() == {"Hello": "A"}

    def test_skipped_exact_entry_hides_padded_variant(self):
        catalog = TranslationCatalog({"": {"Hello": [""], "Hello ": ["Salut"]}})
        assert build_locale_document(catalog).to_dict() == {}

    def test_identity_under_context_elided(self):
        catalog = TranslationCatalog({"menu": {"File": ["File"]}})
        assert build_locale_document(catalog).to_dict() == {}

    def test_only_first_plural_form_used(self):
        catalog = TranslationCatalog({"": {"file": ["file", "fichiers"]}})
        assert build_locale_document(catalog).to_dict() == {}


class TestPromotion:
    def test_plain_when_only_no_context(self):
        catalog = TranslationCatalog({"": {"Hello": ["Bonjour"]}})
        assert build_locale_document(catalog).get("Hello") == "Bonjour"

    def test_context_only_is_mapping(self):
        catalog = TranslationCatalog({"greeting": {"Hello": ["Salut"]}})
        assert build_locale_document(catalog).get("Hello") == {"greeting": "Salut"}

    @pytest.mark.parametrize("contexts", [["", "ctx1"], ["ctx1", ""]])
    def test_order_independent(self, contexts):
        values = {"": "Bonjour", "ctx1": "Salut"}
        catalog = TranslationCatalog({ctx: {"Hello": [values[ctx]]} for ctx in contexts})
        assert build_locale_document(catalog).to_dict() == {
            "Hello": {NO_CONTEXT_KEY: "Bonjour", "ctx1": "Salut"},
        }

    def test_record_demotes_plain_value(self):
        doc = LocaleDocument()
        doc.record("Hello", "", "Bonjour")
        doc.record("Hello", "formal", "Bonjour madame")
        doc.record("Hello", "casual", "Salut")
        assert doc.get("Hello") == {
            NO_CONTEXT_KEY: "Bonjour",
            "formal": "Bonjour madame",
            "casual": "Salut",
        }

    def test_record_no_context_after_mapping(self):
        doc = LocaleDocument()
        doc.record("Hello", "casual", "Salut")
        doc.record("Hello", "", "Bonjour")
        assert doc.get("Hello") == {"casual": "Salut", NO_CONTEXT_KEY: "Bonjour"}

    def test_literal_no_context_key_shares_slot(self):
        # Known limitation: a real "$$noContext" context is not told apart
        doc = LocaleDocument()
        doc.record("Hello", NO_CONTEXT_KEY, "A")
        doc.record("Hello", "", "B")
        assert doc.get("Hello") == {NO_CONTEXT_KEY: "B"}


class TestOrdering:
    def test_canonicalize_is_recursive(self):
        data = {"b": {"z": "1", "a": "2"}, "a": "3"}
        result = canonicalize(data)
        assert list(result) == ["a", "b"]
        assert list(result["b"]) == ["a", "z"]

    def test_code_point_order(self):
        data = {"é": "1", "z": "2", "Z": "3", "$$noContext": "4", "a": "5"}
        assert list(canonicalize(data)) == ["$$noContext", "Z", "a", "z", "é"]

    def test_serialized_keys_sorted(self):
        catalog = TranslationCatalog({
            "zeta": {"b": ["B1"], "a": ["A1"]},
            "": {"b": ["B0"], "c": ["C0"]},
            "alpha": {"b": ["B2"]},
        })
        text = dumps(build_locale_document(catalog).to_dict())
        assert text.index('"a"') < text.index('"b"') < text.index('"c"')
        assert text.index('"$$noContext"') < text.index('"alpha"') < text.rindex('"zeta"')

    def test_dumps_trailing_newline(self):
        assert dumps({}) == "{}\n"
        assert dumps({"a": "b"}).endswith("}\n")


class TestNestLocale:
    def test_wraps_under_locale(self):
        out = normalize(_po(("", "Save", "Enregistrer")), "fr", nest_locale=True)
        assert json.loads(out) == {"fr": {"Save": "Enregistrer"}}

    def test_empty_stays_empty(self):
        assert normalize(_po(("", "OK", "OK")), "fr", nest_locale=True) == "{}\n"
