"""
Tests for catalog file handling.
"""

import polib
import pytest
from po_translation_generator.utils.translation_files import (
    compile_mo_file,
    get_output_file_name,
    read_catalog,
    write_po_file,
)

PO_CONTENT = """msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"Language: fr_FR\\n"

msgid "Hello"
msgstr "Bonjour"
"""


@pytest.mark.parametrize(
    ("source", "locale", "expected"),
    [
        ("acme-forms.pot", "fr_FR", "acme-forms-fr_FR.po"),
        ("languages/acme.po", "de_DE", "acme-de_DE.po"),
        ("plugin", "ja", "plugin-ja.po"),
    ],
)
def test_get_output_file_name(source, locale, expected):
    """Test the output name is the source base name with the locale."""
    assert get_output_file_name(source, locale) == expected


def test_read_catalog_strips_bom(tmp_path):
    """Test a UTF-8 byte order mark is not part of the content."""
    path = tmp_path / "acme.pot"
    path.write_bytes(b'\xef\xbb\xbfmsgid "Hello"\nmsgstr ""\n')

    assert read_catalog(path).startswith('msgid "Hello"')


def test_write_po_file_creates_directory(tmp_path):
    """Test the output directory is created when missing."""
    output_dir = tmp_path / "languages" / "fr"

    po_path = write_po_file(output_dir, "acme-fr_FR.po", PO_CONTENT)

    assert po_path == output_dir / "acme-fr_FR.po"
    assert po_path.read_text(encoding="utf-8") == PO_CONTENT


def test_compile_mo_file(tmp_path):
    """Test a .mo file is compiled next to the .po file."""
    po_path = write_po_file(tmp_path, "acme-fr_FR.po", PO_CONTENT)

    mo_path = compile_mo_file(po_path)

    assert mo_path == tmp_path / "acme-fr_FR.mo"
    assert polib.mofile(str(mo_path)).find("Hello").msgstr == "Bonjour"
