"""LLM-based translation providers."""

import logging
import re
import time
from typing import Any

from litellm import completion

from po_translation_generator.constants import (
    LLM_ERROR_KEYWORDS,
    LLM_REQUEST_TIMEOUT,
    MAX_RETRIES,
    PROVIDER_GEMINI,
    PROVIDER_MISTRAL,
    PROVIDER_OPENAI,
    TRANSLATION_ID_MARKER,
)
from po_translation_generator.exceptions import TranslationProviderError
from po_translation_generator.utils.command_utils import is_retryable_error

from .base import TranslationProvider

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r":::(\d+):::\s*(.*?)(?=(?::::\d+:::|$))", re.DOTALL)


def _is_context_length_error(error: Exception) -> bool:
    error_message = str(error).lower()
    return any(error_term in error_message for error_term in LLM_ERROR_KEYWORDS)


class LLMProvider(TranslationProvider):
    """
    Base class for LLM-based providers (OpenAI, Gemini, Mistral).

    A batch is sent as a single request where every text is labeled with a
    ``:::ID:::`` marker, and the response is parsed back by ID.
    """

    def __init__(
        self,
        primary_api_key: str,
        model_name: str | None = None,
        timeout: int = LLM_REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
    ):
        """
        Initialize LLM provider with API key and model name.

        Args:
            primary_api_key: API key for the LLM service
            model_name: litellm model name ("<provider>/<model>")
            timeout: Seconds to wait for a response
            max_retries: Retries of a failed request before giving up
        """
        super().__init__(primary_api_key)
        self.model_name = model_name
        self.timeout = timeout
        self.max_retries = max_retries

    def _get_system_prompt(self, language_name: str) -> str:
        return (
            "You are a professional software localization translator. "
            f"Translate English user interface strings to {language_name}.\n\n"
            "INPUT FORMAT:\n"
            ":::ID:::\n"
            "Text\n\n"
            "OUTPUT FORMAT (exactly):\n"
            ":::ID:::\n"
            "Translated text\n\n"
            "RULES:\n"
            "1. Preserve ALL :::ID::: markers exactly.\n"
            "2. Do not add extra IDs.\n"
            "3. Output only the translations (no explanations).\n"
            "4. Keep printf placeholders such as %s, %d and %1$s unchanged.\n"
            "5. Keep escape sequences such as \\n and \\\" unchanged.\n"
            "6. Never translate HTML tags or attribute names.\n"
            "7. Keep product names, brand names and acronyms unchanged.\n"
        )

    def _call_llm(
        self, system_prompt: str, user_content: str, **additional_kwargs: Any
    ) -> str:
        """
        Call the LLM API with system and user prompts.

        Args:
            system_prompt: System prompt defining LLM behavior
            user_content: User content to translate
            **additional_kwargs: Additional arguments for the API call

        Returns:
            LLM response content as string
        """
        llm_messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        llm_response = completion(
            model=self.model_name,
            messages=llm_messages,
            api_key=self.primary_api_key,
            timeout=self.timeout,
            **additional_kwargs,
            temperature=0.0,
        )
        return llm_response.choices[0].message.content.strip()

    @staticmethod
    def _make_payload(texts: list[str]) -> str:
        parts: list[str] = []
        for idx, text in enumerate(texts):
            parts.append(TRANSLATION_ID_MARKER.format(idx))
            parts.append(text)
            parts.append("")
        return "\n".join(parts)

    @staticmethod
    def _parse_batch_response(llm_response_text: str, texts: list[str]) -> list[str]:
        """
        Map a marked response back to the request order.

        An ID missing from the response leaves its text untranslated.
        """
        got: dict[int, str] = {
            int(idx): translated.strip()
            for idx, translated in ID_PATTERN.findall(llm_response_text)
        }
        translations = []
        for idx, text in enumerate(texts):
            translated = got.get(idx)
            if translated is None:
                logger.warning(
                    "ID %s missing in translation response. Keeping source text.",
                    idx,
                )
                translated = text
            translations.append(translated)
        return translations

    def translate_batch(
        self,
        texts: list[str],
        target_language: str,
        language_name: str,
    ) -> list[str]:
        if not texts:
            return []
        logger.debug(
            "Translating %d text(s) to %s with %s",
            len(texts),
            target_language,
            self.model_name,
        )
        system_prompt = self._get_system_prompt(language_name)
        return self._translate_chunk(list(texts), system_prompt)

    def _translate_chunk(self, texts: list[str], system_prompt: str) -> list[str]:
        """
        Translate one chunk, retrying transient failures with backoff.

        A request rejected for being too large is split in half; the halves
        are translated one after the other and concatenated in order.
        """
        attempt = 0
        while True:
            try:
                llm_response = self._call_llm(system_prompt, self._make_payload(texts))
                return self._parse_batch_response(llm_response, texts)
            except Exception as llm_error:
                if _is_context_length_error(llm_error) and len(texts) > 1:
                    logger.warning("Error: %s. Reducing batch size...", llm_error)
                    middle = len(texts) // 2
                    return self._translate_chunk(
                        texts[:middle], system_prompt
                    ) + self._translate_chunk(texts[middle:], system_prompt)

                if attempt < self.max_retries and is_retryable_error(llm_error):
                    # Exponential backoff: 2^attempt seconds (1s, 2s, 4s...)
                    wait_time = 2**attempt
                    logger.warning(
                        "LLM request failed (attempt %d/%d): %s. "
                        "Retrying in %d second(s)...",
                        attempt + 1,
                        self.max_retries + 1,
                        llm_error,
                        wait_time,
                    )
                    time.sleep(wait_time)
                    attempt += 1
                    continue

                msg = f"{self.model_name} translation request failed: {llm_error!s}"
                raise TranslationProviderError(msg) from llm_error


class OpenAIProvider(LLMProvider):
    """OpenAI translation provider."""

    name = PROVIDER_OPENAI

    def __init__(self, primary_api_key: str, model_name: str | None = None):
        """
        Initialize OpenAI provider.

        Args:
            primary_api_key: OpenAI API key
            model_name: OpenAI model name (e.g., "gpt-4o")

        Raises:
            ValueError: If model_name is not provided
        """
        if not model_name:
            msg = "model_name is required for OpenAIProvider"
            raise ValueError(msg)
        super().__init__(primary_api_key, f"openai/{model_name}")


class GeminiProvider(LLMProvider):
    """Gemini translation provider."""

    name = PROVIDER_GEMINI

    def __init__(self, primary_api_key: str, model_name: str | None = None):
        """
        Initialize Gemini provider.

        Args:
            primary_api_key: Gemini API key
            model_name: Gemini model name (e.g., "gemini-1.5-pro")

        Raises:
            ValueError: If model_name is not provided
        """
        if not model_name:
            msg = "model_name is required for GeminiProvider"
            raise ValueError(msg)
        super().__init__(primary_api_key, f"gemini/{model_name}")


class MistralProvider(LLMProvider):
    """Mistral translation provider."""

    name = PROVIDER_MISTRAL

    def __init__(self, primary_api_key: str, model_name: str | None = None):
        """
        Initialize Mistral provider.

        Args:
            primary_api_key: Mistral API key
            model_name: Mistral model name (e.g., "mistral-large-latest")

        Raises:
            ValueError: If model_name is not provided
        """
        if not model_name:
            msg = "model_name is required for MistralProvider"
            raise ValueError(msg)
        super().__init__(primary_api_key, f"mistral/{model_name}")
