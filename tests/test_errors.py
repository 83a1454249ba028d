"""Tests for custom exception hierarchy."""

from txsync.errors import (
    ConfigError,
    DownloadRequestError,
    DownloadTimeoutError,
    MalformedCatalogError,
    TransifexAuthError,
    TransifexError,
    TxSyncError,
)


class TestTxSyncErrorBase:
    def test_message(self):
        e = TxSyncError("test error")
        assert str(e) == "test error"

    def test_empty_context_by_default(self):
        assert TxSyncError("test error").context == {}

    def test_context_passed_through(self):
        e = TxSyncError("test error", context={"locale": "fr"})
        assert e.context == {"locale": "fr"}

    def test_exit_code_default(self):
        assert TxSyncError("test error").exit_code == 1

    def test_is_exception(self):
        assert issubclass(TxSyncError, Exception)


class TestMalformedCatalogError:
    def test_with_locale(self):
        e = MalformedCatalogError("Syntax error in po file (line 3)", locale="fr")
        assert "fr" in str(e)
        assert "line 3" in str(e)
        assert e.context["locale"] == "fr"
        assert isinstance(e, TxSyncError)

    def test_line_number(self):
        e = MalformedCatalogError("unterminated string", locale="fr", line=4)
        assert str(e) == "Malformed gettext catalog for locale 'fr' (line 4): unterminated string"
        assert e.context == {"locale": "fr", "line": 4}

    def test_without_locale(self):
        e = MalformedCatalogError("bad")
        assert str(e) == "Malformed gettext catalog: bad"


class TestTransifexErrors:
    def test_hierarchy(self):
        assert issubclass(TransifexAuthError, TransifexError)
        assert issubclass(DownloadRequestError, TransifexError)
        assert issubclass(DownloadTimeoutError, TransifexError)
        assert issubclass(TransifexError, TxSyncError)

    def test_context(self):
        e = DownloadRequestError("no job", locale="de", status=403)
        assert e.context["locale"] == "de"
        assert e.context["status"] == 403

    def test_extra_context(self):
        e = DownloadTimeoutError("gave up", locale="fr", context={"attempts": 10})
        assert e.context["locale"] == "fr"
        assert e.context["attempts"] == 10


class TestConfigError:
    def test_config_error(self):
        e = ConfigError("bad config")
        assert "bad config" in str(e)
        assert isinstance(e, TxSyncError)
