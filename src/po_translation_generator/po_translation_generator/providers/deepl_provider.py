"""DeepL translation provider."""

import logging

import deepl

from po_translation_generator.constants import DEEPL_LANGUAGE_CODES, PROVIDER_DEEPL
from po_translation_generator.exceptions import TranslationProviderError
from po_translation_generator.utils.plural_forms import get_base_lang

from .base import TranslationProvider

logger = logging.getLogger(__name__)

DEEPL_SOURCE_LANGUAGE = "EN"


def get_deepl_language_code(target_language: str) -> str | None:
    """Map a locale (``pt_BR``, ``fr_FR``) to a DeepL target language code."""
    normalized_language = target_language.replace("-", "_").lower()
    return DEEPL_LANGUAGE_CODES.get(normalized_language) or DEEPL_LANGUAGE_CODES.get(
        get_base_lang(normalized_language)
    )


class DeepLProvider(TranslationProvider):
    """DeepL translation provider."""

    name = PROVIDER_DEEPL

    def __init__(self, primary_api_key: str):
        """
        Initialize DeepL provider.

        Args:
            primary_api_key: DeepL API key
        """
        super().__init__(primary_api_key)
        self.deepl_translator = deepl.Translator(auth_key=primary_api_key)

    def translate_batch(
        self,
        texts: list[str],
        target_language: str,
        language_name: str,  # noqa: ARG002
    ) -> list[str]:
        """
        Translate texts with one DeepL request.

        Raises:
            TranslationProviderError: If the language is not supported by
                DeepL or the request fails
        """
        if not texts:
            return []

        deepl_target_code = get_deepl_language_code(target_language)
        if not deepl_target_code:
            error_msg = f"DeepL does not support language '{target_language}'."
            raise TranslationProviderError(error_msg)

        logger.debug(
            "Translating %d text(s) to %s with DeepL", len(texts), deepl_target_code
        )
        try:
            results = self.deepl_translator.translate_text(
                texts,
                source_lang=DEEPL_SOURCE_LANGUAGE,
                target_lang=deepl_target_code,
                preserve_formatting=True,
            )
        except deepl.DeepLException as e:
            msg = f"DeepL translation request failed: {e!s}"
            raise TranslationProviderError(msg) from e

        return [result.text for result in results]
