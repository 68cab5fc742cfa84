"""Common test configuration"""

from datetime import UTC, datetime

import pytest

from po_translation_generator.constants import PROVIDER_API_KEY_ENV_VARS
from po_translation_generator.exceptions import TranslationProviderError
from po_translation_generator.providers.base import TranslationProvider
from po_translation_generator.utils.command_utils import ENV_PREFIX

SAMPLE_CATALOG = r"""# Copyright (C) 2024 Acme
# This file is distributed under the same license as the Acme Forms plugin.
msgid ""
msgstr ""
"Project-Id-Version: Acme Forms 1.0\n"
"Content-Type: text/plain; charset=UTF-8\n"

#. Plugin Name of the plugin
#: acme-forms.php
msgid "Acme Forms"
msgstr ""

#: includes/class-form.php:10
msgid "Hello %1$s"
msgstr ""

#: includes/class-form.php:20
msgctxt "button label"
msgid "Save"
msgstr ""

#. translators: %d: number of entries
#: includes/class-form.php:30
#, php-format
msgid "%d entry"
msgid_plural "%d entries"
msgstr[0] ""
msgstr[1] ""

#: includes/class-form.php:40
msgid "https://example.com/docs"
msgstr ""
"""

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


class StubProvider(TranslationProvider):
    """Order-preserving provider returning canned or prefixed translations"""

    name = "stub"

    def __init__(self, translations=None, fail_on_call=None, fail_languages=()):
        super().__init__("test-key")
        self.translations = translations or {}
        self.fail_on_call = fail_on_call
        self.fail_languages = set(fail_languages)
        self.calls = []

    def translate_batch(self, texts, target_language, language_name):
        self.calls.append(list(texts))
        failing_call = self.fail_on_call == len(self.calls)
        if failing_call or target_language in self.fail_languages:
            msg = "HTTP error! status: 500"
            raise TranslationProviderError(msg)
        return [
            self.translations.get(text, f"[{target_language}] {text}")
            for text in texts
        ]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep provider keys and generator settings of the host out of the tests"""
    for env_key in PROVIDER_API_KEY_ENV_VARS.values():
        monkeypatch.delenv(env_key, raising=False)
    for setting in (
        "PROVIDER",
        "MODEL",
        "BATCH_SIZE",
        "EXCLUDED_TERMS",
        "LANGUAGES",
        "SETTINGS",
    ):
        monkeypatch.delenv(f"{ENV_PREFIX}{setting}", raising=False)


@pytest.fixture
def stub_provider():
    """Provider stub translating every text to "[<locale>] <text>" """
    return StubProvider()


@pytest.fixture
def sample_catalog():
    """A small WordPress-style POT catalog"""
    return SAMPLE_CATALOG


@pytest.fixture
def catalog_file(tmp_path):
    """The sample catalog written to acme-forms.pot"""
    path = tmp_path / "acme-forms.pot"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path
