"""Decide which catalog texts pass through untranslated."""

import re
from collections.abc import Iterable, Mapping
from pathlib import PurePath

from po_translation_generator.utils.constants import (
    PO_FILE_EXTENSION,
    POT_FILE_EXTENSION,
)

URL_PATTERN = re.compile(
    r"^(?:https?://)?"  # scheme
    r"(?:(?:[a-z\d](?:[a-z\d-]*[a-z\d])?\.)+[a-z]{2,}"  # domain
    r"|(?:\d{1,3}\.){3}\d{1,3})"  # or IPv4
    r"(?::\d+)?"  # port
    r"(?:/[-a-z\d%_.~+]*)*"  # path
    r"(?:\?[;&a-z\d%_.~+=-]*)?"  # query
    r"(?:#[-a-z\d_]*)?$",  # fragment
    re.IGNORECASE,
)
PLACEHOLDERS_ONLY_PATTERN = re.compile(r"^\s*(?:%[0-9]*\$?[A-Za-z]\s*)+$")
LOCALE_SUFFIX_PATTERN = re.compile(r"(?:-[a-z]{2}_[A-Z]{2}|_[A-Z]{2}_[a-z]{2})$")


def format_product_name(name: str) -> str:
    """Turn a slug into a display name, ``my-plugin`` -> ``My Plugin``."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def product_name_from_file_name(file_name: str) -> str:
    """
    Derive the formatted product name from a catalog file name.

    ``acme-forms.pot``, ``acme-forms-fr_FR.po`` and ``acme-forms_FR_fr.po``
    all give ``Acme Forms``.
    """
    base_name = strip_catalog_extension(PurePath(file_name).name)
    return format_product_name(LOCALE_SUFFIX_PATTERN.sub("", base_name))


def strip_catalog_extension(file_name: str) -> str:
    for extension in (POT_FILE_EXTENSION, PO_FILE_EXTENSION):
        if file_name.lower().endswith(extension):
            return file_name[: -len(extension)]
    return file_name


def parse_excluded_terms(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated term list, dropping blanks and duplicates."""
    if not value:
        return []
    raw_terms = value.split(",") if isinstance(value, str) else value
    terms: list[str] = []
    for raw_term in raw_terms:
        term = raw_term.strip()
        if term and term not in terms:
            terms.append(term)
    return terms


def is_url(text: str) -> bool:
    return bool(URL_PATTERN.match(text))


def is_placeholder_only(text: str) -> bool:
    return bool(PLACEHOLDERS_ONLY_PATTERN.match(text))


class ExclusionSet(Mapping):
    """
    Terms that must never be translated, keyed by their lowercased form.

    The product name is always part of the set. Values keep the original
    casing so translated text can be corrected after the fact.
    """

    def __init__(self, product_name: str, terms: Iterable[str] = ()):
        self.product_name = product_name
        self._terms: dict[str, str] = {}
        for term in [*terms, product_name]:
            if term:
                self._terms[term.lower()] = term

    @classmethod
    def for_file(cls, file_name: str, terms: Iterable[str] = ()) -> "ExclusionSet":
        return cls(product_name_from_file_name(file_name), terms)

    def __getitem__(self, key: str) -> str:
        return self._terms[key]

    def __iter__(self):
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __repr__(self) -> str:
        return f"ExclusionSet({self.product_name!r}, {list(self._terms.values())!r})"


def is_excluded(text: str, exclusions: Mapping[str, str]) -> bool:
    """
    Check whether a source text must be passed through untranslated.

    Args:
        text: Source text in escaped PO form
        exclusions: Lowercased term -> original-cased term

    Returns:
        True for excluded terms, single letters, URLs and strings made only
        of printf placeholders
    """
    if text.lower() in exclusions:
        return True
    if len(text) == 1 and text.isalpha():
        return True
    return is_url(text) or is_placeholder_only(text)


def excluded_translation(text: str, exclusions: ExclusionSet) -> str:
    """
    Translation written for an excluded text.

    The source text itself, except for the bare product name which is
    written with its canonical casing.
    """
    product_name = exclusions.product_name
    if product_name and text.lower() == product_name.lower():
        return product_name
    return text
