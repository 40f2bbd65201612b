"""
Configuration module for CineDiscover.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of cinediscover/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose output (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Language Model (Groq) Configuration
# =============================================================================

# Groq API key used for theme analysis and movie recommendations
# Required for production; empty string as default for development
GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")

# Chat completion model served by Groq
GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Result Cache Configuration
# =============================================================================

# Set to "false" to bypass the in-process result cache entirely
CACHE_ENABLED: bool = os.getenv("CACHE_ENABLED", "true").lower() == "true"

# Baseline time-to-live for cached results, in seconds (5 minutes)
CACHE_DEFAULT_TTL: float = float(os.getenv("CACHE_DEFAULT_TTL", "300"))

# Maximum number of entries held before eviction kicks in
CACHE_MAX_SIZE: int = int(os.getenv("CACHE_MAX_SIZE", "200"))

# Mood and similar-movie results go stale slower than free-text queries
MOOD_TTL_MULTIPLIER: float = float(os.getenv("MOOD_TTL_MULTIPLIER", "2"))
SIMILAR_TTL_MULTIPLIER: float = float(os.getenv("SIMILAR_TTL_MULTIPLIER", "3"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present and sane.
    
    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []
    
    if is_production() and not GROQ_API_KEY:
        errors.append("GROQ_API_KEY is required in production")
    
    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")
    
    if CACHE_DEFAULT_TTL <= 0:
        errors.append("CACHE_DEFAULT_TTL must be positive")
    
    if CACHE_MAX_SIZE < 1:
        errors.append("CACHE_MAX_SIZE must be at least 1")
    
    if MOOD_TTL_MULTIPLIER < 1:
        errors.append("MOOD_TTL_MULTIPLIER cannot be less than 1")
    
    if SIMILAR_TTL_MULTIPLIER < 1:
        errors.append("SIMILAR_TTL_MULTIPLIER cannot be less than 1")
    
    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  GROQ_API_KEY: {'***' if GROQ_API_KEY else '(not set)'}")
    print(f"  GROQ_MODEL: {GROQ_MODEL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  CACHE_ENABLED: {CACHE_ENABLED}")
    print(f"  CACHE_DEFAULT_TTL: {CACHE_DEFAULT_TTL:g}s")
    print(f"  CACHE_MAX_SIZE: {CACHE_MAX_SIZE}")
    print(f"  MOOD_TTL_MULTIPLIER: x{MOOD_TTL_MULTIPLIER:g}")
    print(f"  SIMILAR_TTL_MULTIPLIER: x{SIMILAR_TTL_MULTIPLIER:g}")
