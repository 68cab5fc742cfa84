"""Locale -> Plural-Forms lookup."""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from po_translation_generator.utils.constants import (
    DEFAULT_PLURAL_FORM,
    MIN_PLURAL_SLOTS,
    PLURAL_FORMS,
)

_NPLURALS_RE = re.compile(r"nplurals\s*=\s*(\d+)")


def get_base_lang(lang_code: str) -> str:
    """Extract base language code from locale code (e.g., 'es_ES' -> 'es')."""
    return re.split(r"[_-]", lang_code, maxsplit=1)[0].lower()


def parse_nplurals(expression: str) -> int:
    """Return nplurals declared by a Plural-Forms expression, 2 if absent."""
    nplurals_match = _NPLURALS_RE.search(expression)
    if not nplurals_match:
        return 2
    return int(nplurals_match.group(1))


@dataclass(frozen=True)
class PluralForm:
    expression: str
    nplurals: int

    @property
    def slot_count(self) -> int:
        """Number of msgstr[n] lines written for a plural entry."""
        return max(MIN_PLURAL_SLOTS, self.nplurals)


class PluralFormsTable:
    """
    Static plural forms lookup injected into the pipeline.

    Lookup order is the full locale (``pt_BR``), its hyphenated spelling,
    the base language (``pt``), then ``DEFAULT_PLURAL_FORM``.
    """

    def __init__(self, forms: Mapping[str, str] | None = None):
        self._forms = dict(PLURAL_FORMS if forms is None else forms)

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, str] | None) -> "PluralFormsTable":
        """Default table updated with locale-specific overrides."""
        forms = dict(PLURAL_FORMS)
        forms.update(overrides or {})
        return cls(forms)

    def __contains__(self, locale: str) -> bool:
        return self._lookup(locale) is not None

    def _lookup(self, locale: str) -> str | None:
        for key in (locale, locale.replace("-", "_"), get_base_lang(locale)):
            if key in self._forms:
                return self._forms[key]
        return None

    def get(self, locale: str) -> PluralForm:
        expression = self._lookup(locale) or DEFAULT_PLURAL_FORM
        return PluralForm(expression=expression, nplurals=parse_nplurals(expression))
