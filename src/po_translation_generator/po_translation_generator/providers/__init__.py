"""Translation providers and their factory."""

from po_translation_generator.constants import (
    DEFAULT_MODELS,
    PROVIDER_DEEPL,
    PROVIDER_GEMINI,
    PROVIDER_MISTRAL,
    PROVIDER_OPENAI,
)

from .base import TranslationProvider
from .deepl_provider import DeepLProvider
from .llm_provider import GeminiProvider, LLMProvider, MistralProvider, OpenAIProvider

__all__ = [
    "DeepLProvider",
    "GeminiProvider",
    "LLMProvider",
    "MistralProvider",
    "OpenAIProvider",
    "TranslationProvider",
    "get_provider",
]


def get_provider(
    provider_name: str,
    api_key: str,
    model_name: str | None = None,
) -> TranslationProvider:
    """
    Get translation provider instance based on provider name.

    Args:
        provider_name: Name of the provider (deepl, openai, gemini, mistral)
        api_key: Credential of the provider
        model_name: Model name to use, the provider default when omitted

    Returns:
        Translation provider instance

    Raises:
        ValueError: If provider configuration is invalid
    """
    if not api_key:
        msg = f"An API key is required for provider: {provider_name}"
        raise ValueError(msg)

    if provider_name == PROVIDER_DEEPL:
        return DeepLProvider(api_key)

    model_name = model_name or DEFAULT_MODELS.get(provider_name)
    if provider_name == PROVIDER_OPENAI:
        return OpenAIProvider(api_key, model_name)
    elif provider_name == PROVIDER_GEMINI:
        return GeminiProvider(api_key, model_name)
    elif provider_name == PROVIDER_MISTRAL:
        return MistralProvider(api_key, model_name)

    msg = f"Unknown provider: {provider_name}"
    raise ValueError(msg)
