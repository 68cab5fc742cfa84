"""Exceptions raised by the translation pipeline."""


class TranslationGeneratorError(Exception):
    """Base class for every error raised by po_translation_generator."""


class TranslationProviderError(TranslationGeneratorError):
    """
    The external translation call failed.

    Raised for non-success responses and transport errors. The pipeline never
    recovers from it: the run for the current language is aborted and no
    output document is produced.
    """


class UnsupportedLocaleError(TranslationGeneratorError):
    """The target locale has no display name, so no prompt can be built."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Unsupported target locale: {locale}")


class CommandError(TranslationGeneratorError):
    """Invalid command line arguments or configuration."""
