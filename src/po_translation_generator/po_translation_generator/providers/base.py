"""Base classes for translation providers."""

from abc import ABC, abstractmethod


class TranslationProvider(ABC):
    """
    Abstract base class for translation providers.

    A provider is a black box turning a list of source texts into the same
    number of translated texts, in the same order.
    """

    name = ""

    def __init__(self, primary_api_key: str):
        self.primary_api_key = primary_api_key

    @abstractmethod
    def translate_batch(
        self,
        texts: list[str],
        target_language: str,
        language_name: str,
    ) -> list[str]:
        """
        Translate English texts to the target language.

        Args:
            texts: Source texts in escaped PO form
            target_language: Target locale code (e.g. "fr_FR")
            language_name: Human-readable target language used in prompts

        Returns:
            One translation per input text, in input order

        Raises:
            TranslationProviderError: If the external call fails
        """
