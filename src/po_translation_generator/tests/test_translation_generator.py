"""
Tests for the catalog translation pipeline.
"""

import polib
import pytest
from po_translation_generator.exceptions import (
    TranslationProviderError,
    UnsupportedLocaleError,
)
from po_translation_generator.providers.base import TranslationProvider
from po_translation_generator.utils.plural_forms import PluralFormsTable
from po_translation_generator.utils.translation_generator import (
    PipelineConfig,
    translate_catalog,
)

from conftest import FIXED_NOW, StubProvider

EXPECTED_FRENCH_CATALOG = r"""# Translation of Plugins - Acme Forms in French (France)
# This file is distributed under the same license as the Plugins - Acme Forms package.
msgid ""
msgstr ""
"PO-Revision-Date: 2024-01-02 03:04:05+0000\n"
"MIME-Version: 1.0\n"
"Content-Type: text/plain; charset=UTF-8\n"
"Content-Transfer-Encoding: 8bit\n"
"Plural-Forms: nplurals=2; plural=(n > 1);\n"
"X-Generator: Translation Generator/1.0.0\n"
"Language: fr_FR\n"
"Project-Id-Version: Plugins - Acme Forms\n"

#. Plugin Name of the plugin
#: acme-forms.php
msgid "Acme Forms"
msgstr "Acme Forms"

#: includes/class-form.php:10
msgid "Hello %1$s"
msgstr "[fr_FR] Hello %1$s"

#: includes/class-form.php:20
msgctxt "button label"
msgid "Save"
msgstr "[fr_FR] Save"

#. translators: %d: number of entries
#: includes/class-form.php:30
msgid "%d entry"
msgid_plural "%d entries"
msgstr[0] "[fr_FR] %d entry"
msgstr[1] "[fr_FR] %d entries"

#: includes/class-form.php:40
msgid "https://example.com/docs"
msgstr "https://example.com/docs"
"""  # noqa: E501

PLURAL_CATALOG = """msgid "%d file"
msgid_plural "%d files"
msgstr[0] ""
msgstr[1] ""
"""


def make_config(**kwargs):
    return PipelineConfig(clock=lambda: FIXED_NOW, **kwargs)


def make_catalog(count):
    return "\n".join(f'msgid "Message {index}"\nmsgstr ""\n' for index in range(count))


def test_translate_sample_catalog(sample_catalog, stub_provider):
    """Test the whole document produced for the sample catalog."""
    result = translate_catalog(
        sample_catalog, "acme-forms.pot", "fr_FR", stub_provider, make_config()
    )

    assert result.content == EXPECTED_FRENCH_CATALOG
    assert result.locale == "fr_FR"
    assert result.file_name == "acme-forms-fr_FR.po"
    assert stub_provider.calls == [
        ["Hello %1$s", "Save", "%d entry"],
        ["%d entries"],
    ]
    assert result.stats.total_entries == 5
    assert result.stats.translated_entries == 3
    assert result.stats.excluded_entries == 2
    assert result.stats.batches == 1


def test_translate_restores_placeholder():
    """Test a placeholder dropped by the provider is put back."""
    provider = StubProvider({"Hello %1$s": "Bonjour"})

    result = translate_catalog(
        'msgid "Hello %1$s"\nmsgstr ""\n',
        "greeter.pot",
        "fr_FR",
        provider,
        make_config(),
    )

    assert 'msgstr "Bonjour %1$s"' in result.content.splitlines()
    assert '"Plural-Forms: nplurals=2; plural=(n > 1);\\n"' in result.content
    assert result.file_name == "greeter-fr_FR.po"


def test_output_parses_with_polib(sample_catalog, stub_provider):
    """Test the generated document is a valid gettext catalog."""
    result = translate_catalog(
        sample_catalog, "acme-forms.pot", "fr_FR", stub_provider, make_config()
    )

    po_file = polib.pofile(result.content)

    assert po_file.metadata["Language"] == "fr_FR"
    assert po_file.metadata["Plural-Forms"] == "nplurals=2; plural=(n > 1);"
    assert po_file.find("Hello %1$s").msgstr == "[fr_FR] Hello %1$s"
    assert po_file.find("Save", msgctxt="button label").msgstr == "[fr_FR] Save"
    plural = po_file.find("%d entry")
    assert plural.msgstr_plural == {0: "[fr_FR] %d entry", 1: "[fr_FR] %d entries"}


def test_product_name_is_excluded(stub_provider):
    """Test the product name is never sent to the provider."""
    result = translate_catalog(
        'msgid "Acme"\nmsgstr ""\n', "acme.pot", "fr_FR", stub_provider, make_config()
    )

    assert 'msgstr "Acme"' in result.content.splitlines()
    assert stub_provider.calls == []
    assert result.stats.batches == 0


def test_excluded_terms_keep_source_text(stub_provider):
    """Test excluded terms are written as their source text."""
    result = translate_catalog(
        'msgid "wordpress"\nmsgstr ""\n',
        "acme.pot",
        "fr_FR",
        stub_provider,
        make_config(excluded_terms=["WordPress"]),
    )

    assert 'msgstr "wordpress"' in result.content.splitlines()
    assert stub_provider.calls == []


def test_excluded_term_casing_in_translation():
    """Test an excluded term is given its original casing in a translation."""
    provider = StubProvider({"Install WooCommerce": "Installez woocommerce"})

    result = translate_catalog(
        'msgid "Install WooCommerce"\nmsgstr ""\n',
        "acme.pot",
        "fr_FR",
        provider,
        make_config(excluded_terms=["WooCommerce"]),
    )

    assert 'msgstr "Installez WooCommerce"' in result.content.splitlines()


def test_fully_excluded_catalog_round_trip(stub_provider):
    """Test a catalog with only excluded entries is passed through."""
    content = "\n".join(
        [
            'msgid "Acme Forms"',
            'msgstr ""',
            "",
            'msgid "https://acme.test"',
            'msgstr ""',
            "",
            'msgid "%s"',
            'msgstr ""',
            "",
            'msgid "X"',
            'msgstr ""',
            "",
            'msgid "WooCommerce"',
            'msgstr ""',
            "",
            'msgid "%s"',
            'msgid_plural "%s"',
            'msgstr[0] ""',
            'msgstr[1] ""',
        ]
    )

    result = translate_catalog(
        content,
        "acme-forms.pot",
        "de_DE",
        stub_provider,
        make_config(excluded_terms=["WooCommerce"]),
    )

    assert stub_provider.calls == []
    assert result.stats.excluded_entries == 6
    po_file = polib.pofile(result.content)
    for entry in po_file:
        if entry.msgid_plural:
            assert entry.msgstr_plural == {0: entry.msgid, 1: entry.msgid_plural}
        else:
            assert entry.msgstr == entry.msgid


@pytest.mark.parametrize("locale", ["ru_RU", "pl_PL"])
def test_plural_slots_follow_plural_forms(locale, stub_provider):
    """Test a three-form language gets three msgstr slots."""
    result = translate_catalog(
        PLURAL_CATALOG, "files.pot", locale, stub_provider, make_config()
    )

    msgstr_lines = [
        line for line in result.content.splitlines() if line.startswith("msgstr[")
    ]
    assert msgstr_lines == [
        f'msgstr[0] "[{locale}] %d file"',
        f'msgstr[1] "[{locale}] %d files"',
        f'msgstr[2] "[{locale}] %d files"',
    ]
    assert stub_provider.calls == [["%d file"], ["%d files"]]


def test_plural_forms_override(stub_provider):
    """Test the plural forms table of the config is used."""
    config = make_config(
        plural_forms=PluralFormsTable.with_overrides({"de": "nplurals=3; plural=0;"})
    )

    result = translate_catalog(
        PLURAL_CATALOG, "files.pot", "de_DE", stub_provider, config
    )

    assert '"Plural-Forms: nplurals=3; plural=0;\\n"' in result.content
    assert 'msgstr[2] "[de_DE] %d files"' in result.content


@pytest.mark.parametrize(
    ("batch_size", "expected_batches"), [(1, 8), (2, 4), (3, 3), (7, 2), (100, 1)]
)
def test_batch_size_does_not_change_output(batch_size, expected_batches):
    """Test every batch size produces the same document."""
    content = make_catalog(7) + "\n" + PLURAL_CATALOG
    reference = translate_catalog(
        content, "acme.pot", "fr_FR", StubProvider(), make_config(batch_size=100)
    )

    result = translate_catalog(
        content, "acme.pot", "fr_FR", StubProvider(), make_config(batch_size=batch_size)
    )

    assert result.content == reference.content
    assert result.stats.batches == expected_batches


def test_provider_failure_aborts_run():
    """Test a failed batch raises and stops further provider calls."""
    provider = StubProvider(fail_on_call=2)

    with pytest.raises(TranslationProviderError):
        translate_catalog(
            make_catalog(3), "acme.pot", "fr_FR", provider, make_config(batch_size=1)
        )

    assert provider.calls == [["Message 0"], ["Message 1"]]


def test_mixed_batch_plural_failure_is_atomic(mocker):
    """Test a failed plural request fails the batch its singular part was in."""
    provider = StubProvider(fail_on_call=2)
    callback = mocker.Mock()
    content = 'msgid "Save"\nmsgstr ""\n\n' + PLURAL_CATALOG

    with pytest.raises(TranslationProviderError, match="status: 500"):
        translate_catalog(
            content,
            "acme.pot",
            "fr_FR",
            provider,
            make_config(progress_callback=callback),
        )

    assert provider.calls == [["Save", "%d file"], ["%d files"]]
    callback.assert_not_called()


@pytest.mark.parametrize("batch_size", [0, -3])
def test_invalid_batch_size_uses_default(batch_size, stub_provider):
    """Test a batch size below one falls back to the default size."""
    result = translate_catalog(
        make_catalog(12),
        "acme.pot",
        "fr_FR",
        stub_provider,
        make_config(batch_size=batch_size),
    )

    assert result.stats.batches == 2
    assert [len(call) for call in stub_provider.calls] == [10, 2]


def test_html_attributes_produce_valid_catalog():
    """Test unescaped attribute quotes of a translation give a parsable catalog."""
    provider = StubProvider(
        {'Click <a href=\\"x\\">here</a>': 'Cliquez <a href="x">ici</a>'}
    )

    result = translate_catalog(
        'msgid "Click <a href=\\"x\\">here</a>"\nmsgstr ""\n',
        "links.pot",
        "fr_FR",
        provider,
        make_config(),
    )

    po_file = polib.pofile(result.content)
    entry = po_file.find('Click <a href="x">here</a>')
    assert entry.msgstr == 'Cliquez <a href="x">ici</a>'


def test_provider_count_mismatch(mocker):
    """Test a provider answering with the wrong number of texts fails the run."""
    provider = mocker.Mock(spec=TranslationProvider)
    provider.translate_batch.return_value = []

    with pytest.raises(TranslationProviderError, match="0 translation"):
        translate_catalog(make_catalog(1), "acme.pot", "fr_FR", provider, make_config())


def test_unsupported_locale(stub_provider):
    """Test a locale without display name fails before any provider call."""
    with pytest.raises(UnsupportedLocaleError) as exc_info:
        translate_catalog(make_catalog(2), "acme.pot", "xx_XX", stub_provider)

    assert exc_info.value.locale == "xx_XX"
    assert stub_provider.calls == []


def test_custom_language_names(stub_provider):
    """Test display names of the config decide which locales are supported."""
    result = translate_catalog(
        make_catalog(1),
        "acme.pot",
        "eo",
        stub_provider,
        make_config(language_names={"eo": "Esperanto"}),
    )

    assert result.content.startswith(
        "# Translation of Plugins - Acme in Esperanto\n"
    )


def test_progress_and_cost(sample_catalog, stub_provider, mocker):
    """Test progress is reported for every entry and tokens are counted."""
    callback = mocker.Mock()

    result = translate_catalog(
        sample_catalog,
        "acme-forms.pot",
        "fr_FR",
        stub_provider,
        make_config(progress_callback=callback),
    )

    final_update = callback.call_args_list[-1].args[0]
    assert final_update.translated == final_update.total == 5
    assert final_update.percentage == 100.0
    # "[fr_FR] " adds one word to each of the four texts
    assert result.stats.input_tokens == 7
    assert result.stats.output_tokens == 11
    assert result.stats.cost > 0
