"""Shared fixtures for txsync tests."""
import pytest
from unittest.mock import MagicMock

SAMPLE_PO = '''\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"Language: fr\\n"

msgid "Save"
msgstr "Enregistrer"

msgctxt "menu"
msgid "Save"
msgstr "Sauver"

msgid "OK"
msgstr "OK"

msgid "Cancel"
msgstr ""

msgid "Delete"
msgstr "Supprimer"

msgid "file"
msgid_plural "files"
msgstr[0] "fichier"
msgstr[1] "fichiers"

#~ msgid "Old"
#~ msgstr "Vieux"
'''


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test from an empty working directory with a fake home.

    Config files, .env files and TXSYNC_* variables from the real machine
    never leak into tests.
    """
    from txsync.core.config_service import ENV_VAR_MAP, reset_config_service

    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for env_var in list(ENV_VAR_MAP) + ["TXSYNC_DEBUG", "TXSYNC_PLAIN"]:
        monkeypatch.delenv(env_var, raising=False)

    reset_config_service()
    yield work
    reset_config_service()

    from txsync import ui
    ui.set_plain_mode(False)
    ui.set_json_mode(False)


@pytest.fixture
def sample_po():
    return SAMPLE_PO


@pytest.fixture
def sample_po_path(isolated_env):
    path = isolated_env / "fr.po"
    path.write_text(SAMPLE_PO, encoding="utf-8")
    return path


@pytest.fixture
def mock_client():
    """A Transifex client returning SAMPLE_PO for every locale."""
    client = MagicMock()
    client.fetch_translation.return_value = SAMPLE_PO
    return client
