"""
Command to translate a gettext catalog into one or more languages.

Usage:
    po-translation-generator acme-forms.pot -l fr_FR -l de_DE
    po-translation-generator acme-forms.pot -l pt_BR \\
        --provider gemini --model gemini-1.5-pro --exclude "Acme, WooCommerce" --mo
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Any, TextIO

from po_translation_generator import __version__
from po_translation_generator.constants import SUPPORTED_PROVIDERS
from po_translation_generator.exceptions import (
    CommandError,
    TranslationProviderError,
    UnsupportedLocaleError,
)
from po_translation_generator.providers import get_provider
from po_translation_generator.settings import (
    TranslationSettings,
    load_settings,
    settings_path_from_env,
)
from po_translation_generator.utils.accounting import CostTracker, ProgressUpdate
from po_translation_generator.utils.command_utils import (
    validate_language_code,
    validate_provider,
)
from po_translation_generator.utils.exclusions import (
    ExclusionSet,
    is_excluded,
    parse_excluded_terms,
)
from po_translation_generator.utils.scanner import scan_catalog
from po_translation_generator.utils.translation_files import (
    compile_mo_file,
    get_output_file_name,
    read_catalog,
    write_po_file,
)
from po_translation_generator.utils.translation_generator import translate_catalog

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class OutputWrapper:
    """Line-oriented writer for user-facing command output."""

    def __init__(self, out: TextIO):
        self._out = out

    def write(self, msg: str = "") -> None:
        if not msg.endswith("\n"):
            msg += "\n"
        self._out.write(msg)


class Command:
    """Translate a POT/PO catalog into the requested languages."""

    help = "Translate a gettext POT/PO catalog into one or more languages."

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None):
        self.stdout = OutputWrapper(stdout or sys.stdout)
        self.stderr = OutputWrapper(stderr or sys.stderr)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add the command arguments to ``parser``."""
        parser.add_argument(
            "input",
            help="POT/PO catalog to translate.",
        )
        parser.add_argument(
            "-l",
            "--language",
            dest="languages",
            action="append",
            help=(
                "Target locale code, e.g. `fr_FR`. Repeat for several "
                "languages. Defaults to the selected languages of the settings."
            ),
        )
        parser.add_argument(
            "--exclude",
            dest="exclude",
            help="Comma-separated terms that must never be translated.",
        )
        parser.add_argument(
            "--provider",
            dest="provider",
            choices=SUPPORTED_PROVIDERS,
            help="Translation provider (default: openai).",
        )
        parser.add_argument(
            "--model",
            dest="model",
            help="Model of an LLM provider, e.g. `gpt-4o`.",
        )
        parser.add_argument(
            "--api-key",
            dest="api_key",
            help="Provider API key. Defaults to the provider's env variable.",
        )
        parser.add_argument(
            "--batch-size",
            dest="batch_size",
            type=int,
            help="Entries per translation request (default: 10).",
        )
        parser.add_argument(
            "--settings",
            dest="settings",
            help="JSON settings file.",
        )
        parser.add_argument(
            "--output-dir",
            dest="output_dir",
            help="Directory for the generated files. Defaults to the input's.",
        )
        parser.add_argument(
            "--mo",
            dest="mo",
            action="store_true",
            help="Also compile a .mo file for each generated catalog.",
        )
        parser.add_argument(
            "--dry-run",
            dest="dry_run",
            action="store_true",
            help="Report what would be translated without calling the provider.",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            dest="verbose",
            action="store_true",
            help="Enable debug logging.",
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )

    def handle(self, **options: Any) -> int:
        """
        Handle the command.

        Returns:
            Exit code, non-zero when a language failed
        """
        input_path = Path(options["input"])
        if not input_path.is_file():
            msg = f"Catalog not found: {input_path}"
            raise CommandError(msg)

        settings = self._load_settings(options)
        languages = settings.selected_languages
        if not languages:
            msg = "No target language given. Use --language or selectedLanguages."
            raise CommandError(msg)
        for language in languages:
            validate_language_code(language)

        content = read_catalog(input_path)
        if options.get("dry_run"):
            self._report_dry_run(content, input_path.name, settings)
            return 0

        provider = self._get_provider(settings)
        output_dir = Path(options.get("output_dir") or input_path.parent)
        failed_languages = []
        for language in languages:
            if not self._translate_language(
                content, input_path.name, language, provider, settings, output_dir
            ):
                failed_languages.append(language)

        if failed_languages:
            self.stderr.write(
                f"Translation failed for: {', '.join(failed_languages)}"
            )
            return 1
        self.stdout.write(f"Translation completed for {len(languages)} language(s).")
        return 0

    def _load_settings(self, options: dict[str, Any]) -> TranslationSettings:
        provider_name = options.get("provider")
        if provider_name:
            provider_name = validate_provider(provider_name)
        settings = load_settings(
            options.get("settings") or settings_path_from_env(),
            provider=provider_name,
            api_key=options.get("api_key"),
            model=options.get("model"),
            batch_size=options.get("batch_size"),
            selected_languages=options.get("languages") or None,
            auto_generate_mo_files=True if options.get("mo") else None,
        )
        settings.excluded_terms = parse_excluded_terms(
            [*settings.excluded_terms, *parse_excluded_terms(options.get("exclude"))]
        )
        return settings

    def _get_provider(self, settings: TranslationSettings):
        """Get translation provider configured by ``settings``."""
        provider_name = validate_provider(settings.provider)
        if not settings.api_key:
            msg = (
                f"An API key is required for {provider_name}. "
                "Use --api-key or the provider's API key env variable."
            )
            raise CommandError(msg)
        try:
            return get_provider(provider_name, settings.api_key, settings.model)
        except ValueError as e:
            raise CommandError(str(e)) from e

    def _translate_language(  # noqa: PLR0913
        self,
        content: str,
        file_name: str,
        language: str,
        provider,
        settings: TranslationSettings,
        output_dir: Path,
    ) -> bool:
        """Translate the catalog into one language. Returns False on failure."""
        self.stdout.write(f"Translating {file_name} to {language}...")
        config = settings.to_pipeline_config(progress_callback=_log_progress)
        try:
            result = translate_catalog(content, file_name, language, provider, config)
        except (TranslationProviderError, UnsupportedLocaleError) as e:
            logger.exception("Translation to %s failed", language)
            self.stderr.write(f"   ERROR: {language}: {e!s}")
            return False

        try:
            po_path = write_po_file(output_dir, result.file_name, result.content)
            self.stdout.write(
                f"   {result.stats.translated_entries} translated, "
                f"{result.stats.excluded_entries} excluded, "
                f"{result.stats.input_tokens + result.stats.output_tokens} tokens "
                f"(${result.stats.cost:.2f}) -> {po_path}"
            )
            if settings.auto_generate_mo_files:
                mo_path = compile_mo_file(po_path)
                self.stdout.write(f"   Compiled {mo_path}")
        except OSError as e:
            logger.exception("Writing the %s catalog failed", language)
            self.stderr.write(f"   ERROR: {language}: {e!s}")
            return False
        return True

    def _report_dry_run(
        self, content: str, file_name: str, settings: TranslationSettings
    ) -> None:
        exclusions = ExclusionSet.for_file(file_name, settings.excluded_terms)
        entries = list(scan_catalog(content.splitlines()))
        pending = [
            entry
            for entry in entries
            if not entry.skip and not is_excluded(entry.msgid, exclusions)
        ]
        cost_tracker = CostTracker()
        usage = cost_tracker.record_batch(
            [text for entry in pending for text in entry.source_texts], []
        )
        batches = math.ceil(len(pending) / settings.batch_size)
        self.stdout.write(
            f"{file_name}: {len(entries)} entries, {len(pending)} to translate "
            f"in {batches} batch(es) of up to {settings.batch_size}, "
            f"~{usage.input_tokens} input tokens per language"
        )
        for language in settings.selected_languages:
            self.stdout.write(
                f"   {language} -> {get_output_file_name(file_name, language)}"
            )


def _log_progress(update: ProgressUpdate) -> None:
    logger.debug(
        "Progress: %d/%d (%.0f%%), ~%s s remaining",
        update.translated,
        update.total,
        update.percentage,
        "?" if update.seconds_remaining is None else round(update.seconds_remaining),
    )


def main(argv: list[str] | None = None) -> int:
    command = Command()
    parser = argparse.ArgumentParser(
        prog="po-translation-generator", description=command.help
    )
    command.add_arguments(parser)
    options = vars(parser.parse_args(argv))

    logging.basicConfig(
        level=logging.DEBUG if options["verbose"] else logging.INFO,
        format=LOG_FORMAT,
    )
    try:
        return command.handle(**options)
    except CommandError as e:
        command.stderr.write(f"Error: {e!s}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
