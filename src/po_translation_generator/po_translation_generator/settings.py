"""
Run settings for the translation generator.

Settings are read from a JSON file using the keys persisted by the settings
screen of the generator (``apiKey``, ``selectedLanguages``,
``selectedModel``, ``batchSize``, ``autoGenerateMoFiles``), plus the optional
``provider``, ``languageMapping``, ``pluralForms`` and ``excludedTerms``.
Environment variables override the file, explicit overrides win over both.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from po_translation_generator.constants import DEFAULT_PROVIDER
from po_translation_generator.exceptions import CommandError
from po_translation_generator.utils.command_utils import (
    get_api_key,
    get_config_value,
    normalize_batch_size,
)
from po_translation_generator.utils.constants import (
    DEFAULT_BATCH_SIZE,
    LANGUAGE_DISPLAY_NAMES,
)
from po_translation_generator.utils.exclusions import parse_excluded_terms
from po_translation_generator.utils.plural_forms import PluralFormsTable
from po_translation_generator.utils.translation_generator import PipelineConfig

logger = logging.getLogger(__name__)

# JSON settings key -> TranslationSettings field
SETTINGS_FILE_KEYS = {
    "provider": "provider",
    "apiKey": "api_key",
    "selectedModel": "model",
    "selectedLanguages": "selected_languages",
    "batchSize": "batch_size",
    "autoGenerateMoFiles": "auto_generate_mo_files",
    "languageMapping": "language_mapping",
    "pluralForms": "plural_forms",
    "excludedTerms": "excluded_terms",
}


@dataclass
class TranslationSettings:
    provider: str = DEFAULT_PROVIDER
    api_key: str | None = None
    model: str | None = None
    selected_languages: list[str] = field(default_factory=list)
    batch_size: int = DEFAULT_BATCH_SIZE
    auto_generate_mo_files: bool = False
    language_mapping: dict[str, str] = field(
        default_factory=lambda: dict(LANGUAGE_DISPLAY_NAMES)
    )
    plural_forms: dict[str, str] = field(default_factory=dict)
    excluded_terms: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.batch_size = normalize_batch_size(self.batch_size)
        self.excluded_terms = parse_excluded_terms(self.excluded_terms)
        if isinstance(self.selected_languages, str):
            codes = self.selected_languages.split(",")
            self.selected_languages = [code.strip() for code in codes if code.strip()]

    def to_pipeline_config(self, **kwargs: Any) -> PipelineConfig:
        """Build the pipeline configuration, ``kwargs`` set the remaining fields."""
        return PipelineConfig(
            language_names=self.language_mapping,
            batch_size=self.batch_size,
            excluded_terms=self.excluded_terms,
            plural_forms=PluralFormsTable.with_overrides(self.plural_forms),
            **kwargs,
        )


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        raw_settings = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        msg = f"Could not read settings file {path}: {e!s}"
        raise CommandError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in settings file {path}: {e!s}"
        raise CommandError(msg) from e
    if not isinstance(raw_settings, dict):
        msg = f"Settings file {path} must contain a JSON object"
        raise CommandError(msg)

    values: dict[str, Any] = {}
    for key, value in raw_settings.items():
        field_name = SETTINGS_FILE_KEYS.get(key)
        if field_name is None:
            logger.debug("Ignoring unknown settings key %s", key)
            continue
        values[field_name] = value
    return values


def _read_environment() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field_name in ("provider", "model", "batch_size", "excluded_terms"):
        value = get_config_value(field_name, {})
        if value:
            values[field_name] = value
    languages = get_config_value("languages", {})
    if languages:
        values["selected_languages"] = languages
    return values


def load_settings(
    path: str | Path | None = None, **overrides: Any
) -> TranslationSettings:
    """
    Load settings from a JSON file, the environment and explicit overrides.

    Args:
        path: JSON settings file, skipped when ``None``
        **overrides: ``TranslationSettings`` field values; ``None`` values are
            ignored

    Returns:
        TranslationSettings

    Raises:
        CommandError: If the settings file cannot be read or parsed
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_settings_file(Path(path)))
    values.update(_read_environment())

    known_fields = {field_def.name for field_def in fields(TranslationSettings)}
    for key, value in overrides.items():
        if key not in known_fields:
            msg = f"Unknown setting: {key}"
            raise CommandError(msg)
        if value is not None:
            values[key] = value

    language_mapping = dict(LANGUAGE_DISPLAY_NAMES)
    language_mapping.update(values.pop("language_mapping", None) or {})
    values["language_mapping"] = language_mapping

    provider = (values.get("provider") or DEFAULT_PROVIDER).lower()
    values["provider"] = provider
    # An explicit key wins, then the provider env variable, then the file
    values["api_key"] = (
        overrides.get("api_key") or get_api_key(provider, {}) or values.get("api_key")
    )

    return TranslationSettings(**values)


def settings_path_from_env() -> str | None:
    """Settings file named by ``PO_TRANSLATION_SETTINGS``, if any."""
    return get_config_value("settings", {})
