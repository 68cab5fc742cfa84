"""
Utility functions for the command line interface.

Validation, configuration lookup and error classification helpers shared by
the command and the translation providers.
"""

import logging
import os
import re
from typing import Any

from po_translation_generator.constants import (
    PROVIDER_API_KEY_ENV_VARS,
    SUPPORTED_PROVIDERS,
)
from po_translation_generator.exceptions import CommandError
from po_translation_generator.utils.constants import DEFAULT_BATCH_SIZE

logger = logging.getLogger(__name__)

# Prefix of the environment variables read by get_config_value
ENV_PREFIX = "PO_TRANSLATION_"

# ============================================================================
# Validation Utilities
# ============================================================================


def validate_language_code(code: str, field_name: str = "language code") -> None:
    """Validate language code format (xx, xxx or xx_XX)."""
    if not re.match(r"^[a-z]{2,3}(_[A-Z]{2})?$", code):
        msg = (
            f"Invalid {field_name} format: {code}. "
            f"Expected format: 'xx' or 'xx_XX' (e.g., 'el', 'fr_FR')"
        )
        raise CommandError(msg)


def validate_provider(provider_name: str) -> str:
    """Return the normalized provider name or raise for unknown providers."""
    normalized_name = (provider_name or "").strip().lower()
    if normalized_name not in SUPPORTED_PROVIDERS:
        msg = (
            f"Unknown provider: {provider_name}. "
            f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
        )
        raise CommandError(msg)
    return normalized_name


def normalize_batch_size(value: Any, default: int = DEFAULT_BATCH_SIZE) -> int:
    """
    Coerce a batch size to a positive integer.

    Missing or invalid values fall back to ``default``.

    Examples:
        >>> normalize_batch_size("25")
        25
        >>> normalize_batch_size(0)
        10
    """
    if value is None or value == "":
        return default
    try:
        batch_size = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid batch size %r, using %s", value, default)
        return default
    if batch_size < 1:
        logger.warning("Invalid batch size %r, using %s", value, default)
        return default
    return batch_size


# ============================================================================
# Configuration Helpers
# ============================================================================


def get_config_value(key: str, options: dict, default: Any = None) -> Any:
    """Get configuration value from options or environment."""
    if options.get(key):
        return options[key]
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key, default)


def get_api_key(provider_name: str, options: dict) -> str | None:
    """
    Get the provider credential from options or the provider's env variable.

    ``OPENAI_API_KEY``, ``GEMINI_API_KEY``, ``MISTRAL_API_KEY`` and
    ``DEEPL_API_KEY`` are read for the matching provider.
    """
    if options.get("api_key"):
        return options["api_key"]
    env_key = PROVIDER_API_KEY_ENV_VARS.get(provider_name)
    return os.environ.get(env_key) if env_key else None


# ============================================================================
# Error Handling Utilities
# ============================================================================


def is_retryable_error(error: Exception) -> bool:
    """
    Check if an error is retryable (network issues, rate limits, timeouts).

    Args:
        error: The exception to check

    Returns:
        True if the error is retryable, False otherwise

    Examples:
        >>> is_retryable_error(ConnectionError("Connection timeout"))
        True
        >>> is_retryable_error(ValueError("Invalid API key"))
        False
    """
    error_str = str(error).lower()

    # Retryable errors
    retryable_patterns = [
        "timeout",
        "connection",
        "rate limit",
        "429",
        "503",
        "502",
        "500",
        "temporarily unavailable",
        "service unavailable",
        "too many requests",
    ]

    # Non-retryable errors (don't retry these)
    non_retryable_patterns = [
        "invalid api key",
        "authentication",
        "401",
        "403",
        "not found",
        "404",
        "bad request",
        "400",
        "quota",
    ]

    for pattern in non_retryable_patterns:
        if pattern in error_str:
            return False

    for pattern in retryable_patterns:
        if pattern in error_str:
            return True

    # Default: retry unknown errors (could be transient)
    return True
