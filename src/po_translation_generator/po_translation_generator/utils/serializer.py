"""Rebuild a PO document from scanned entries and their translations."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from po_translation_generator.utils.constants import (
    PO_HEADER_CONTENT_TRANSFER_ENCODING,
    PO_HEADER_CONTENT_TYPE,
    PO_HEADER_GENERATOR,
    PO_HEADER_MIME_VERSION,
    PO_HEADER_PROJECT_PREFIX,
    PO_REVISION_DATE_FORMAT,
    REFERENCE_COMMENT_PREFIX,
    TRANSLATORS_COMMENT_PREFIX,
)
from po_translation_generator.utils.plural_forms import PluralForm
from po_translation_generator.utils.scanner import CatalogEntry, PluralEntry


@dataclass(frozen=True)
class PoHeader:
    """Header block written at the top of every generated catalog."""

    product_name: str
    language_name: str
    locale: str
    plural_forms: str
    revision_date: str

    @property
    def project(self) -> str:
        return f"{PO_HEADER_PROJECT_PREFIX}{self.product_name}"

    def lines(self) -> list[str]:
        fields = [
            ("PO-Revision-Date", self.revision_date),
            ("MIME-Version", PO_HEADER_MIME_VERSION),
            ("Content-Type", PO_HEADER_CONTENT_TYPE),
            ("Content-Transfer-Encoding", PO_HEADER_CONTENT_TRANSFER_ENCODING),
            ("Plural-Forms", self.plural_forms),
            ("X-Generator", PO_HEADER_GENERATOR),
            ("Language", self.locale),
            ("Project-Id-Version", self.project),
        ]
        return [
            f"# Translation of {self.project} in {self.language_name}",
            "# This file is distributed under the same license as the "
            f"{self.project} package.",
            'msgid ""',
            'msgstr ""',
            *(f'"{name}: {value}\\n"' for name, value in fields),
            "",
        ]


def build_header(
    product_name: str,
    locale: str,
    language_name: str,
    plural_form: PluralForm,
    now: datetime,
) -> PoHeader:
    return PoHeader(
        product_name=product_name,
        language_name=language_name,
        locale=locale,
        plural_forms=plural_form.expression,
        revision_date=now.strftime(PO_REVISION_DATE_FORMAT),
    )


def filter_plural_metadata(metadata: list[str]) -> list[str]:
    """
    Keep the last ``#. translators`` comment and the reference right after it.

    Every other comment of a translated plural entry is dropped.
    """
    last_translators_index = None
    for index, line in enumerate(metadata):
        if line.lower().startswith(TRANSLATORS_COMMENT_PREFIX):
            last_translators_index = index
    if last_translators_index is None:
        return []

    kept = [metadata[last_translators_index]]
    next_index = last_translators_index + 1
    if next_index < len(metadata) and metadata[next_index].startswith(
        REFERENCE_COMMENT_PREFIX
    ):
        kept.append(metadata[next_index])
    return kept


def _po_text(text: str) -> str:
    # Raw line breaks would end the quoted string
    return text.replace("\r", "").replace("\n", "\\n")


def render_singular(entry: CatalogEntry, msgstr: str) -> list[str]:
    return [
        *entry.metadata,
        *entry.msgctxt_lines,
        *entry.msgid_lines,
        f'msgstr "{_po_text(msgstr)}"',
        "",
    ]


def render_plural(
    entry: PluralEntry,
    singular: str,
    plural: str,
    plural_form: PluralForm,
    *,
    filter_metadata: bool,
) -> list[str]:
    """
    Lines of a plural entry with one ``msgstr[n]`` per plural slot.

    Slot 0 holds the singular translation, every other slot the plural one.
    """
    metadata = entry.metadata
    if filter_metadata:
        metadata = filter_plural_metadata(metadata)
    slots = [singular] + [plural] * (plural_form.slot_count - 1)
    return [
        *metadata,
        *entry.msgctxt_lines,
        *entry.msgid_lines,
        *entry.msgid_plural_lines,
        *(f'msgstr[{index}] "{_po_text(text)}"' for index, text in enumerate(slots)),
        "",
    ]


def render_untranslated(entry: CatalogEntry, plural_form: PluralForm) -> list[str]:
    """Lines of an entry passed through with its source text as translation."""
    if isinstance(entry, PluralEntry):
        return render_plural(
            entry, entry.msgid, entry.msgid_plural, plural_form, filter_metadata=False
        )
    return render_singular(entry, entry.msgid)


def serialize_catalog(header: PoHeader, entry_blocks: Iterable[list[str]]) -> str:
    """Join the header and the rendered entries into the output document."""
    lines = header.lines()
    for block in entry_blocks:
        lines.extend(block)
    return "\n".join(lines)
