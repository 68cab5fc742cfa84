"""Constants for translation providers."""

# Provider names
PROVIDER_DEEPL = "deepl"
PROVIDER_OPENAI = "openai"
PROVIDER_GEMINI = "gemini"
PROVIDER_MISTRAL = "mistral"

LLM_PROVIDERS = [PROVIDER_OPENAI, PROVIDER_GEMINI, PROVIDER_MISTRAL]
SUPPORTED_PROVIDERS = [*LLM_PROVIDERS, PROVIDER_DEEPL]

DEFAULT_PROVIDER = PROVIDER_OPENAI

# Default model per LLM provider (without the litellm "provider/" prefix)
DEFAULT_MODELS = {
    PROVIDER_OPENAI: "gpt-4o",
    PROVIDER_GEMINI: "gemini-1.5-pro",
    PROVIDER_MISTRAL: "mistral-large-latest",
}

# Environment variables holding provider credentials
PROVIDER_API_KEY_ENV_VARS = {
    PROVIDER_OPENAI: "OPENAI_API_KEY",
    PROVIDER_GEMINI: "GEMINI_API_KEY",
    PROVIDER_MISTRAL: "MISTRAL_API_KEY",
    PROVIDER_DEEPL: "DEEPL_API_KEY",
}

# DeepL target language codes, keyed by lowercased locale or base language
DEEPL_LANGUAGE_CODES = {
    "ar": "AR",
    "bg": "BG",
    "cs": "CS",
    "da": "DA",
    "de": "DE",
    "el": "EL",
    "es": "ES",
    "et": "ET",
    "fi": "FI",
    "fr": "FR",
    "hu": "HU",
    "id": "ID",
    "it": "IT",
    "ja": "JA",
    "ko": "KO",
    "lt": "LT",
    "lv": "LV",
    "nb": "NB",
    "nl": "NL",
    "pl": "PL",
    "pt": "PT-PT",
    "pt_br": "PT-BR",
    "ro": "RO",
    "ru": "RU",
    "sk": "SK",
    "sl": "SL",
    "sv": "SV",
    "tr": "TR",
    "uk": "UK",
    "zh": "ZH",
}

# LLM errors answered by splitting the batch in half instead of failing
LLM_ERROR_KEYWORDS = [
    "too large",
    "context_length_exceeded",
    "maximum context length",
    "max_tokens",
]

# Batch request markers, ":::<index>:::" precedes each text
TRANSLATION_ID_MARKER = ":::{}:::"

# Retries performed by providers for a single batch request
MAX_RETRIES = 3

# Seconds to wait for a provider response
LLM_REQUEST_TIMEOUT = 120
