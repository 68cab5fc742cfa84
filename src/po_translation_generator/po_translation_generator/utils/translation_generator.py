"""
Translation pipeline for gettext catalogs.

``translate_catalog`` is a pure function of the catalog text and a
``PipelineConfig``: it scans the catalog, passes excluded entries through,
sends the rest to the provider in fixed-size batches, repairs every
translation and returns the rebuilt document with run statistics.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from po_translation_generator.exceptions import (
    TranslationProviderError,
    UnsupportedLocaleError,
)
from po_translation_generator.providers.base import TranslationProvider
from po_translation_generator.utils.accounting import (
    CostTracker,
    ProgressTracker,
    ProgressUpdate,
    TokenCounter,
)
from po_translation_generator.utils.command_utils import normalize_batch_size
from po_translation_generator.utils.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_INPUT_COST_PER_MILLION_TOKENS,
    DEFAULT_OUTPUT_COST_PER_MILLION_TOKENS,
    LANGUAGE_DISPLAY_NAMES,
)
from po_translation_generator.utils.exclusions import (
    ExclusionSet,
    excluded_translation,
    is_excluded,
)
from po_translation_generator.utils.fixer import apply_fixes
from po_translation_generator.utils.plural_forms import PluralForm, PluralFormsTable
from po_translation_generator.utils.scanner import CatalogEntry, scan_catalog
from po_translation_generator.utils.serializer import (
    build_header,
    render_plural,
    render_singular,
    render_untranslated,
    serialize_catalog,
)
from po_translation_generator.utils.translation_files import get_output_file_name

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class PipelineConfig:
    """Everything a run needs besides the catalog text and the provider."""

    language_names: Mapping[str, str] = field(
        default_factory=lambda: dict(LANGUAGE_DISPLAY_NAMES)
    )
    batch_size: int = DEFAULT_BATCH_SIZE
    excluded_terms: Sequence[str] = ()
    plural_forms: PluralFormsTable = field(default_factory=PluralFormsTable)
    token_counter: TokenCounter | None = None
    input_cost_per_million: float = DEFAULT_INPUT_COST_PER_MILLION_TOKENS
    output_cost_per_million: float = DEFAULT_OUTPUT_COST_PER_MILLION_TOKENS
    progress_callback: Callable[[ProgressUpdate], None] | None = None
    clock: Callable[[], datetime] = _utc_now


@dataclass(frozen=True)
class TranslationStats:
    total_entries: int
    translated_entries: int
    excluded_entries: int
    batches: int
    input_tokens: int
    output_tokens: int
    cost: float


@dataclass(frozen=True)
class TranslationResult:
    locale: str
    file_name: str
    content: str
    stats: TranslationStats


class TranslationBatcher:
    """
    Collects entries and translates them one batch at a time.

    Each entry owns a reserved slot of ``blocks``; a slot is filled only when
    its whole batch came back from the provider, so a failed batch leaves
    all of its slots empty.
    """

    def __init__(  # noqa: PLR0913
        self,
        provider: TranslationProvider,
        locale: str,
        language_name: str,
        exclusions: ExclusionSet,
        plural_form: PluralForm,
        blocks: list[list[str] | None],
        batch_size: int = DEFAULT_BATCH_SIZE,
        cost_tracker: CostTracker | None = None,
        progress: ProgressTracker | None = None,
    ):
        self.provider = provider
        self.locale = locale
        self.language_name = language_name
        self.exclusions = exclusions
        self.plural_form = plural_form
        self.blocks = blocks
        self.batch_size = batch_size
        self.cost_tracker = cost_tracker or CostTracker()
        self.progress = progress
        self.batches_sent = 0
        self._pending: list[tuple[int, CatalogEntry]] = []

    def add(self, slot: int, entry: CatalogEntry) -> None:
        self._pending.append((slot, entry))
        if len(self._pending) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._pending:
            return
        batch = self._pending
        self._pending = []

        entries = [entry for _, entry in batch]
        translations = self._request([entry.msgid for entry in entries])
        plural_entries = [entry for entry in entries if entry.is_plural]
        plural_translations = iter(
            self._request([entry.msgid_plural for entry in plural_entries])
            if plural_entries
            else []
        )

        rendered = []
        for entry, translation in zip(entries, translations, strict=True):
            singular = apply_fixes(entry.msgid, translation, self.exclusions)
            if entry.is_plural:
                plural = apply_fixes(
                    entry.msgid_plural, next(plural_translations), self.exclusions
                )
                rendered.append(
                    render_plural(
                        entry, singular, plural, self.plural_form, filter_metadata=True
                    )
                )
            else:
                rendered.append(render_singular(entry, singular))

        for (slot, _), lines in zip(batch, rendered, strict=True):
            self.blocks[slot] = lines
        self.batches_sent += 1
        if self.progress:
            self.progress.advance(len(batch))

    def _request(self, texts: list[str]) -> list[str]:
        logger.debug(
            "Sending batch %d (%d text(s)) for %s",
            self.batches_sent + 1,
            len(texts),
            self.locale,
        )
        translations = self.provider.translate_batch(
            texts, self.locale, self.language_name
        )
        if len(translations) != len(texts):
            msg = (
                f"Provider returned {len(translations)} translation(s) "
                f"for {len(texts)} text(s)"
            )
            raise TranslationProviderError(msg)
        usage = self.cost_tracker.record_batch(texts, translations)
        logger.debug(
            "Batch used %d input and %d output token(s)",
            usage.input_tokens,
            usage.output_tokens,
        )
        return translations


def translate_catalog(
    content: str,
    file_name: str,
    locale: str,
    provider: TranslationProvider,
    config: PipelineConfig | None = None,
) -> TranslationResult:
    """
    Translate a PO/POT catalog into one target locale.

    Args:
        content: Catalog text
        file_name: Name of the source file, used for the product name and
            the output file name
        locale: Target locale code (e.g. "fr_FR")
        provider: Translation provider
        config: Run configuration, defaults when omitted

    Returns:
        TranslationResult with the output document and run statistics

    Raises:
        UnsupportedLocaleError: If the locale has no display name; raised
            before any provider call
        TranslationProviderError: If a batch fails; no document is produced
    """
    config = config or PipelineConfig()
    language_name = config.language_names.get(locale)
    if not language_name:
        raise UnsupportedLocaleError(locale)

    exclusions = ExclusionSet.for_file(file_name, config.excluded_terms)
    plural_form = config.plural_forms.get(locale)
    header = build_header(
        exclusions.product_name, locale, language_name, plural_form, config.clock()
    )
    entries = list(scan_catalog(content.splitlines()))
    logger.info(
        "Translating %d entries of %s to %s (%s)",
        len(entries),
        file_name,
        locale,
        language_name,
    )

    progress = ProgressTracker(len(entries), config.progress_callback)
    cost_tracker = CostTracker(
        config.token_counter,
        config.input_cost_per_million,
        config.output_cost_per_million,
    )
    blocks: list[list[str] | None] = []
    batcher = TranslationBatcher(
        provider,
        locale,
        language_name,
        exclusions,
        plural_form,
        blocks,
        batch_size=normalize_batch_size(config.batch_size),
        cost_tracker=cost_tracker,
        progress=progress,
    )

    excluded_count = 0
    for entry in entries:
        slot = len(blocks)
        blocks.append(None)
        if entry.skip or is_excluded(entry.msgid, exclusions):
            if entry.is_plural or entry.skip:
                blocks[slot] = render_untranslated(entry, plural_form)
            else:
                blocks[slot] = render_singular(
                    entry, excluded_translation(entry.msgid, exclusions)
                )
            excluded_count += 1
            progress.advance()
        else:
            batcher.add(slot, entry)
    batcher.flush()

    stats = TranslationStats(
        total_entries=len(entries),
        translated_entries=len(entries) - excluded_count,
        excluded_entries=excluded_count,
        batches=batcher.batches_sent,
        input_tokens=cost_tracker.input_tokens,
        output_tokens=cost_tracker.output_tokens,
        cost=cost_tracker.cost,
    )
    logger.info(
        "Finished %s: %d translated, %d excluded, %d token(s), $%.4f",
        locale,
        stats.translated_entries,
        stats.excluded_entries,
        cost_tracker.usage.total_tokens,
        stats.cost,
    )
    return TranslationResult(
        locale=locale,
        file_name=get_output_file_name(file_name, locale),
        content=serialize_catalog(header, blocks),
        stats=stats,
    )
