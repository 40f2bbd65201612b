"""
Configuration module.

Handles environment variables, API keys, and cache settings.
"""

from cinediscover.config.config import (
    APP_ENV,
    DEBUG,
    GROQ_API_KEY,
    GROQ_MODEL,
    REQUEST_TIMEOUT,
    CACHE_ENABLED,
    CACHE_DEFAULT_TTL,
    CACHE_MAX_SIZE,
    MOOD_TTL_MULTIPLIER,
    SIMILAR_TTL_MULTIPLIER,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "GROQ_API_KEY",
    "GROQ_MODEL",
    "REQUEST_TIMEOUT",
    "CACHE_ENABLED",
    "CACHE_DEFAULT_TTL",
    "CACHE_MAX_SIZE",
    "MOOD_TTL_MULTIPLIER",
    "SIMILAR_TTL_MULTIPLIER",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
