"""Repairs applied to every machine translation before it is written."""

import re
from collections.abc import Mapping

GUILLEMETS = str.maketrans({"«": '"', "»": '"'})
NUMBERED_PLACEHOLDER_PATTERN = re.compile(r"%[0-9]+\$[a-zA-Z]")
SPACE_BEFORE_PUNCTUATION_PATTERN = re.compile(r"\s+([.,?!])")
TRAILING_PUNCTUATION_PATTERN = re.compile(r"[\s.,:;!?…]*$")
BARE_QUOTE_PATTERN = re.compile(r'(?<!\\)"')
BRACE_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([\w\s]+?)\s*\}\}")
NON_BREAKING_SPACE = "\u00a0"
SENTENCE_END_CHARACTERS = " \t.,:;!?…"
ENDING_PUNCTUATION = frozenset(".,:;!)]'\">?…")
SPECIAL_ENDING_PUNCTUATION = ("&raquo;",)


def apply_fixes(
    original: str, translated: str, exclusion_map: Mapping[str, str]
) -> str:
    """
    Repair a machine translation against its source text.

    Args:
        original: Source text in escaped PO form
        translated: Text returned by the translation provider
        exclusion_map: Lowercased term -> original-cased term

    Returns:
        Text safe to embed between the quotes of a ``msgstr`` line
    """
    if not original or not translated:
        return translated or ""

    translated = translated.translate(GUILLEMETS)
    translated = restore_placeholders(original, translated)
    translated = SPACE_BEFORE_PUNCTUATION_PATTERN.sub(r"\1", translated)
    translated = mirror_edge_spaces(original, translated)
    translated = restore_excluded_terms(translated, exclusion_map)
    translated = restore_brace_placeholders(original, translated)
    translated = restore_ending_punctuation(original, translated)
    translated = match_initial_case(original, translated)
    translated = translated.replace(NON_BREAKING_SPACE, " ")
    return escape_quotes(translated)


def restore_placeholders(original: str, translated: str) -> str:
    """
    Make every ``%<n>$<letter>`` placeholder of the source survive.

    A dropped placeholder is re-inserted, and occurrences beyond the number
    found in the source are removed.
    """
    for placeholder in dict.fromkeys(NUMBERED_PLACEHOLDER_PATTERN.findall(original)):
        expected = original.count(placeholder)
        found = translated.count(placeholder)
        if not found:
            translated = _reinsert_placeholder(original, translated, placeholder)
        elif found > expected:
            translated = _strip_extra_placeholders(translated, placeholder, expected)
    return translated


def _reinsert_placeholder(original: str, translated: str, placeholder: str) -> str:
    position = original.rfind(placeholder)
    tail = original[position + len(placeholder) :]

    if not tail.strip(SENTENCE_END_CHARACTERS):
        # The placeholder ends the source sentence: put it back at the end
        trailing = TRAILING_PUNCTUATION_PATTERN.search(translated).group(0)
        body = translated[: len(translated) - len(trailing)].rstrip()
        if not body:
            return f"{placeholder}{trailing}"
        separator = " " if original[:position][-1:].isspace() else ""
        return f"{body}{separator}{placeholder}{trailing}"

    separator = " " if tail[:1].isspace() and not translated[:1].isspace() else ""
    return f"{placeholder}{separator}{translated}"


def _strip_extra_placeholders(translated: str, placeholder: str, keep: int) -> str:
    occurrences = 0

    def keep_first(match: re.Match) -> str:
        nonlocal occurrences
        occurrences += 1
        return match.group(0) if occurrences <= keep else ""

    return re.sub(rf"\s?{re.escape(placeholder)}", keep_first, translated)


def mirror_edge_spaces(original: str, translated: str) -> str:
    """Give the translation the leading/trailing space of the source."""
    if original[:1].isspace() and not translated[:1].isspace():
        translated = f" {translated}"
    if original[-1:].isspace() and not translated[-1:].isspace():
        translated = f"{translated} "
    return translated


def restore_excluded_terms(translated: str, exclusion_map: Mapping[str, str]) -> str:
    """Rewrite whole-word matches of excluded terms with their original casing."""
    for normalized_term, term in exclusion_map.items():
        pattern = re.compile(
            rf"(?<!\w){re.escape(normalized_term)}(?!\w)", re.IGNORECASE
        )
        translated = pattern.sub(lambda _match, term=term: term, translated)
    return translated


def _brace_name(placeholder: str) -> str:
    return " ".join(BRACE_PLACEHOLDER_PATTERN.fullmatch(placeholder).group(1).split())


def restore_brace_placeholders(original: str, translated: str) -> str:
    """
    Give every ``{{ name }}`` placeholder of the translation its source form.

    A placeholder whose name only differs in case or spacing is rewritten as
    in the source. A translated (renamed) placeholder takes the place of the
    next source placeholder missing from the translation, and source
    placeholders still missing afterwards are appended.

    Examples:
        >>> restore_brace_placeholders("Hi {{ name }}", "Salut {{ nom }}")
        'Salut {{ name }}'
    """
    source = dict.fromkeys(
        match.group(0) for match in BRACE_PLACEHOLDER_PATTERN.finditer(original)
    )
    if not source:
        return translated

    by_name = {_brace_name(placeholder).lower(): placeholder for placeholder in source}
    found_names = {
        _brace_name(match.group(0)).lower()
        for match in BRACE_PLACEHOLDER_PATTERN.finditer(translated)
    }
    missing = [
        placeholder
        for name, placeholder in by_name.items()
        if name not in found_names
    ]

    def replace(match: re.Match) -> str:
        name = _brace_name(match.group(0)).lower()
        if name in by_name:
            return by_name[name]
        return missing.pop(0) if missing else match.group(0)

    translated = BRACE_PLACEHOLDER_PATTERN.sub(replace, translated)
    for placeholder in missing:
        translated = _reinsert_placeholder(original, translated, placeholder)
    return translated


def get_ending_punctuation(text: str) -> str:
    """Return the punctuation mark ending ``text``, or an empty string."""
    text = text.strip()
    for mark in SPECIAL_ENDING_PUNCTUATION:
        if text.endswith(mark):
            return mark
    if text[-1:] in ENDING_PUNCTUATION:
        return text[-1]
    return ""


def restore_ending_punctuation(original: str, translated: str) -> str:
    """Append the ending punctuation of the source when the translation lost it."""
    ending = get_ending_punctuation(original)
    body = translated.rstrip()
    if not ending or not body or body.endswith(ending):
        return translated
    if ending == "." and body.endswith("…"):
        return translated
    return f"{body}{ending}{translated[len(body) :]}"


def match_initial_case(original: str, translated: str) -> str:
    """Lowercase the first letter of the translation if the source starts lowercase."""
    source = original.lstrip()
    stripped = translated.lstrip()
    if not source[:1].islower() or not stripped[:1].isupper():
        return translated
    position = len(translated) - len(stripped)
    return (
        f"{translated[:position]}{stripped[0].lower()}{translated[position + 1 :]}"
    )


def escape_quotes(text: str) -> str:
    """
    Escape bare double quotes as ``\\"``.

    Quotes that are already escaped are left alone. HTML tags are otherwise
    kept as they are, but quoted attributes must be escaped as well or the
    ``msgstr`` line would end at the first attribute quote.
    """
    return BARE_QUOTE_PATTERN.sub(r'\\"', text)
